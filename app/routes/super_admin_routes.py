from flask import Blueprint, Response, jsonify, request

from app.services.dashboard_service import SuperAdminDashboard
from app.services.department_service import get_departments_as_csv
from app.services.errors import ConfirmationRequired, MutationFailure, ActionUnavailable
from app.utils.decorators import dashboard_required
from app.routes.serializers import dashboard_payload, department_to_dict, user_row

super_admin_bp = Blueprint("super_admin", __name__)


def _view_payload(dashboard, notifier):
    view = dashboard.view
    if view is None:
        return dashboard_payload(dashboard, notifier, totals=None,
                                 departments=[], admins=[], courses=[])

    return dashboard_payload(
        dashboard,
        notifier,
        totals=view.totals,
        departments=[
            department_to_dict(d, view.stats_for(d.id)) for d in view.departments
        ],
        admins=[user_row(u) for u in view.admins],
        courses=[
            dict(c.to_dict(), department=view.department_name(c.department_id))
            for c in view.courses
        ],
    )


def _form_value(name):
    data = request.get_json(silent=True) or request.form
    return data.get(name)


@super_admin_bp.route("/")
@dashboard_required(SuperAdminDashboard)
def dashboard(dashboard, notifier):
    dashboard.reload()
    return jsonify(_view_payload(dashboard, notifier))


@super_admin_bp.route("/departments", methods=["POST"])
@dashboard_required(SuperAdminDashboard)
def create_department(dashboard, notifier):
    result = dashboard.create_department(
        _form_value("name"),
        _form_value("code"),
        _form_value("description"),
    )
    payload = _view_payload(dashboard, notifier)
    payload["success"] = result.ok
    if result.ok:
        payload["department"] = result.value.to_dict()
        return jsonify(payload), 201

    payload["message"] = result.error.message
    return jsonify(payload), 400


@super_admin_bp.route("/departments/<int:dept_id>/delete", methods=["POST"])
@dashboard_required(SuperAdminDashboard)
def delete_department(dashboard, notifier, dept_id):
    confirmed = str(_form_value("confirm") or "").lower() in ("1", "true", "yes", "on")
    result = dashboard.delete_department(dept_id, confirmed=confirmed)
    if result.ok:
        payload = _view_payload(dashboard, notifier)
        payload["success"] = True
        return jsonify(payload)

    payload = dashboard_payload(dashboard, notifier)
    payload.update(success=False, message=result.error.message)
    if isinstance(result.error, ConfirmationRequired):
        return jsonify(payload), 400
    if isinstance(result.error, MutationFailure):
        return jsonify(payload), 409
    return jsonify(payload), 400


@super_admin_bp.route("/departments/export")
@dashboard_required(SuperAdminDashboard)
def export_departments(dashboard, notifier):
    view = dashboard.reload()
    if view is None:
        return jsonify(dashboard_payload(dashboard, notifier)), 500

    stats = {dept_id: s.as_dict() for dept_id, s in view.stats_by_department.items()}

    csv_data = get_departments_as_csv(stats)
    return Response(
        csv_data.getvalue(),
        mimetype="text/csv",
        headers={"Content-Disposition": "attachment; filename=departments.csv"}
    )


@super_admin_bp.route("/admins", methods=["POST"])
@dashboard_required(SuperAdminDashboard)
def create_admin(dashboard, notifier):
    result = dashboard.create_admin(**(request.get_json(silent=True) or {}))
    status = 501 if isinstance(result.error, ActionUnavailable) else 400
    return jsonify({"success": False, "message": result.error.message}), status
