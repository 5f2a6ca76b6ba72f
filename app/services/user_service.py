from app.extensions import db
from app.models.user import User, ROLES


def create_user(name, email, role, password=None, department_id=None,
                student_id=None, employee_id=None, is_active=True):
    if not name or not email:
        raise ValueError("Name and email are required")

    if role not in ROLES:
        raise ValueError(f"Unknown role: {role}")

    # Check if user already exists
    if User.query.filter_by(email=email).first():
        raise ValueError("Email already exists")

    new_user = User(
        name=name.strip(),
        email=email.strip(),
        role=role,
        department_id=department_id,
        student_id=student_id,
        employee_id=employee_id,
        is_active=is_active
    )
    if password:
        new_user.set_password(password)

    db.session.add(new_user)
    db.session.commit()
    return new_user


def get_all_users():
    return User.query.order_by(User.id).all()


def get_user_by_id(user_id):
    return db.session.get(User, user_id)


def get_users_by_department(dept_id):
    return (
        User.query
        .filter_by(department_id=dept_id)
        .order_by(User.id)
        .all()
    )


def get_department_admin_department(user_id):
    """
    Department administered by a department admin, or None.
    """
    user = db.session.get(User, user_id)
    if user is None or user.role != "department_admin":
        return None
    return user.department_id
