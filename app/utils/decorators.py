from functools import wraps
from flask import g, redirect, url_for, current_app

from app.services.dashboard_service import SessionUser
from app.utils.notifications import FlashNotifier


def dashboard_required(dashboard_cls):
    """
    Builds the dashboard for the session user and hands it to the view.
    Absent user and wrong role both get redirected home.
    """
    def decorator(view):
        @wraps(view)
        def wrapped(*args, **kwargs):
            notifier = FlashNotifier()
            dashboard = dashboard_cls(
                SessionUser.from_user(g.get("user")),
                notify=notifier
            )
            if not dashboard.authorize():
                current_app.logger.info(
                    "Redirecting away from %s", dashboard_cls.__name__
                )
                return redirect(url_for("index"))

            return view(dashboard, notifier, *args, **kwargs)
        return wrapped
    return decorator
