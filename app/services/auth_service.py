from app.models.user import User


def authenticate_user(email: str, password: str):
    """
    Authenticate user using email & password.
    Returns User object if valid, else None.
    """
    if not email or not password:
        return None

    user = User.query.filter_by(email=email).first()
    if not user or not user.is_active:
        return None

    if not user.check_password(password):
        return None

    return user
