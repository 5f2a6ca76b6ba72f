from flask import flash

from app.services.dashboard_service import DESTRUCTIVE


class FlashNotifier:
    """Keeps notifications for the JSON response and mirrors them to flash()."""

    def __init__(self):
        self.notifications = []

    def __call__(self, notification):
        self.notifications.append(notification)
        category = "danger" if notification.variant == DESTRUCTIVE else "success"
        flash(notification.description or notification.title, category)

    def as_list(self):
        return [
            {
                "title": n.title,
                "description": n.description,
                "variant": n.variant,
            }
            for n in self.notifications
        ]
