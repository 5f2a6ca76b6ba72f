import logging
import pandas as pd
from io import StringIO
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql import exists

from app.extensions import db
from app.models.department import Department
from app.models.user import User
from app.models.course import Course

logger = logging.getLogger(__name__)


# ----------------------------
# READ
# ----------------------------

def get_departments():
    return Department.query.order_by(Department.name).all()


def get_department_by_id(dept_id):
    return db.session.get(Department, dept_id)


def get_department_stats(dept_id) -> dict:
    """
    Per-department counts. Computed on every call, never stored.
    """
    return {
        "students": User.query.filter_by(department_id=dept_id, role="student").count(),
        "instructors": User.query.filter_by(department_id=dept_id, role="instructor").count(),
        "courses": Course.query.filter_by(department_id=dept_id).count(),
    }


# ----------------------------
# CREATE
# ----------------------------

def create_department(name: str, code: str, description: str = None):
    """
    Returns the new Department, or None when it could not be stored
    (duplicate code or database error).
    """
    name = (name or "").strip()
    code = (code or "").strip()
    if not name or not code:
        raise ValueError("Name and code are required")

    if Department.query.filter_by(code=code).first():
        logger.warning("Department code %s already in use", code)
        return None

    dept = Department(
        name=name,
        code=code,
        description=(description or "").strip() or None
    )
    try:
        db.session.add(dept)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Could not create department %s", code)
        return None

    logger.info("Created department %s (%s)", dept.code, dept.id)
    return dept


# ----------------------------
# DELETE (SAFE)
# ----------------------------

def can_delete_department(dept_id) -> bool:
    """
    A department can be deleted ONLY if no user or course references it.
    """
    has_users = db.session.query(
        exists().where(User.department_id == dept_id)
    ).scalar()
    has_courses = db.session.query(
        exists().where(Course.department_id == dept_id)
    ).scalar()
    return not (has_users or has_courses)


def delete_department(dept_id) -> bool:
    dept = db.session.get(Department, dept_id)
    if dept is None:
        logger.warning("Department %s does not exist", dept_id)
        return False

    if not can_delete_department(dept_id):
        logger.warning("Department %s still has users or courses", dept_id)
        return False

    try:
        db.session.delete(dept)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Could not delete department %s", dept_id)
        return False

    logger.info("Deleted department %s", dept_id)
    return True


# ----------------------------
# CSV EXPORT
# ----------------------------

def get_departments_as_csv(stats_by_department=None):
    depts = get_departments()
    if stats_by_department is None:
        stats_by_department = {d.id: get_department_stats(d.id) for d in depts}

    data = []
    for d in depts:
        stats = stats_by_department.get(d.id) or {}
        data.append({
            "ID": d.id,
            "Code": d.code,
            "Department": d.name,
            "Description": d.description or "",
            "Students": stats.get("students", 0),
            "Instructors": stats.get("instructors", 0),
            "Courses": stats.get("courses", 0),
        })

    df = pd.DataFrame(data, columns=[
        "ID", "Code", "Department", "Description",
        "Students", "Instructors", "Courses"
    ])
    buffer = StringIO()
    df.to_csv(buffer, index=False)
    buffer.seek(0)
    return buffer
