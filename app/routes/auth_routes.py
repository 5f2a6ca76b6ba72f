from flask import Blueprint, jsonify, request, redirect, url_for, session, flash, g
from app.extensions import db
from app.services.auth_service import authenticate_user
from app.models.user import User

auth_bp = Blueprint("auth", __name__)

DASHBOARD_ENDPOINTS = {
    "super_admin": "super_admin.dashboard",
    "department_admin": "department_admin.dashboard",
}


@auth_bp.before_app_request
def load_logged_in_user():
    user_id = session.get("user_id")

    if user_id is None:
        g.user = None
        return

    # Fetch the user from the DB to ensure they still exist
    user = db.session.get(User, user_id)
    if user is None or not user.is_active:
        session.clear()
        g.user = None
    else:
        g.user = user


def dashboard_url_for(user):
    endpoint = DASHBOARD_ENDPOINTS.get(user.role) if user else None
    if endpoint is None:
        return None
    return url_for(endpoint)


@auth_bp.route("/login", methods=["GET", "POST"])
def login():
    if request.method == "GET":
        return jsonify({"authenticated": g.user is not None})

    data = request.get_json(silent=True) or request.form
    user = authenticate_user(data.get("email"), data.get("password"))

    if not user:
        flash("Invalid email or password", "danger")
        return jsonify({"success": False, "message": "Invalid email or password"}), 401

    # --- SESSION SETUP ---
    session.clear()
    session["user_id"] = user.id
    session["role"] = user.role

    return jsonify({
        "success": True,
        "role": user.role,
        "redirect": dashboard_url_for(user) or url_for("index"),
    })


@auth_bp.route("/logout")
def logout():
    session.clear()
    flash("Logged out successfully", "success")
    return redirect(url_for("auth.login"))
