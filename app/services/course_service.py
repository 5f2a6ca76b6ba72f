import pandas as pd
from io import StringIO

from app.extensions import db
from app.models.course import Course, LEVELS
from app.models.department import Department


def get_courses():
    return Course.query.order_by(Course.id).all()


def get_courses_by_department(dept_id):
    return (
        Course.query
        .filter_by(department_id=dept_id)
        .order_by(Course.id)
        .all()
    )


def add_course(title: str, instructor_name: str, department_id: int,
               level: str = "beginner", category: str = None):
    if not title or not instructor_name or not department_id:
        raise ValueError("All fields are required")

    if level not in LEVELS:
        raise ValueError(f"Unknown level: {level}")

    if db.session.get(Department, department_id) is None:
        raise ValueError("Department does not exist")

    course = Course(
        title=title.strip(),
        instructor_name=instructor_name.strip(),
        department_id=department_id,
        level=level,
        category=category
    )
    db.session.add(course)
    db.session.commit()
    return course


# ----------------------------
# CSV EXPORT
# ----------------------------

def get_courses_as_csv(courses):
    data = [
        {
            "ID": c.id,
            "Course": c.title,
            "Instructor": c.instructor_name,
            "Level": c.level,
            "Category": c.category or ""
        }
        for c in courses
    ]

    df = pd.DataFrame(data, columns=["ID", "Course", "Instructor", "Level", "Category"])
    buffer = StringIO()
    df.to_csv(buffer, index=False)
    buffer.seek(0)
    return buffer
