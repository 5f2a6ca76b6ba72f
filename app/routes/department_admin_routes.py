from flask import Blueprint, Response, jsonify, request

from app.services.dashboard_service import DepartmentAdminDashboard
from app.services.course_service import get_courses_as_csv
from app.utils.decorators import dashboard_required
from app.routes.serializers import dashboard_payload, user_row

department_admin_bp = Blueprint("department_admin", __name__)


@department_admin_bp.route("/")
@dashboard_required(DepartmentAdminDashboard)
def dashboard(dashboard, notifier):
    view = dashboard.reload()
    if view is None:
        return jsonify(dashboard_payload(
            dashboard, notifier, department=None, totals=None,
            students=[], instructors=[], courses=[]
        ))

    department = view.department.to_dict() if view.department is not None else None
    return jsonify(dashboard_payload(
        dashboard,
        notifier,
        department=department,
        totals=view.totals,
        students=[user_row(u) for u in view.students],
        instructors=[user_row(u) for u in view.instructors],
        courses=[c.to_dict() for c in view.courses],
    ))


@department_admin_bp.route("/courses/export")
@dashboard_required(DepartmentAdminDashboard)
def export_courses(dashboard, notifier):
    view = dashboard.reload()
    if view is None:
        return jsonify(dashboard_payload(dashboard, notifier)), 404

    csv_data = get_courses_as_csv(view.courses)
    filename = f"{view.department.code}_courses.csv" if view.department else "courses.csv"
    return Response(
        csv_data.getvalue(),
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"}
    )


@department_admin_bp.route("/students", methods=["POST"])
@dashboard_required(DepartmentAdminDashboard)
def add_student(dashboard, notifier):
    result = dashboard.add_student(**(request.get_json(silent=True) or {}))
    return jsonify({"success": False, "message": result.error.message}), 501


@department_admin_bp.route("/instructors", methods=["POST"])
@dashboard_required(DepartmentAdminDashboard)
def add_instructor(dashboard, notifier):
    result = dashboard.add_instructor(**(request.get_json(silent=True) or {}))
    return jsonify({"success": False, "message": result.error.message}), 501
