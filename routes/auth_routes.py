from flask import Blueprint, request, jsonify, session
from flask_login import login_required, login_user, logout_user
from services.auth_service import authenticate_user, role_home, user_summary

auth_bp = Blueprint("auth", __name__)


# =========================================================
# LOGIN ROUTE
# =========================================================
@auth_bp.route("/login", methods=["POST"])
def login():
    data = request.get_json(silent=True) or request.form
    username = data.get("username")
    password = data.get("password")

    if not username or not password:
        return jsonify({"error": "Username and password are required"}), 400

    user = authenticate_user(username, password)

    if not user:
        return jsonify({"error": "Invalid username or password"}), 401

    login_user(user)

    session["user_id"] = user.user_id
    session["role_id"] = user.role_id

    return jsonify({
        "user": user_summary(user),
        "home": role_home(user)
    })


# =========================================================
# LOGOUT ROUTE
# =========================================================
@auth_bp.route("/logout")
@login_required
def logout():
    logout_user()
    session.clear()
    return jsonify({"status": "success"})
