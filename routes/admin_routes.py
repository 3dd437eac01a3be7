import logging

from flask import Blueprint, request, jsonify
from flask_login import login_required
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from models import Department, Role, Student, User
from utils.decorators import role_required, ROLE_MAP
from utils.password_utils import hash_password
from utils.seed_data import create_department as create_department_with_defaults

logger = logging.getLogger(__name__)

admin_bp = Blueprint("admin", __name__, url_prefix="/admin")


@admin_bp.route("/departments", methods=["POST"])
@login_required
@role_required("admin")
def create_department():
    data = request.get_json(silent=True) or {}
    code = (data.get("code") or "").strip().upper()
    name = (data.get("name") or "").strip()

    if not code or not name:
        return jsonify({"error": "code and name are required"}), 400

    if Department.query.filter_by(department_code=code).first():
        return jsonify({"error": f"Department '{code}' already exists"}), 400

    try:
        department = create_department_with_defaults(code, name)
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error("Creating department failed: %s", exc)
        return jsonify({"error": str(exc)}), 500

    return jsonify({
        "status": "success",
        "department": {
            "departmentId": department.department_id,
            "code": department.department_code,
            "name": department.department_name
        }
    }), 201


@admin_bp.route("/users", methods=["POST"])
@login_required
@role_required("admin")
def create_user():
    data = request.get_json(silent=True) or {}
    username = (data.get("username") or "").strip()
    password = data.get("password") or ""
    role = (data.get("role") or "").strip().lower()
    department_id = data.get("departmentId")
    student_id = data.get("studentId")

    if not username or not password or role not in ROLE_MAP:
        return jsonify({"error": "username, password and a valid role are required"}), 400

    if User.query.filter_by(username=username).first():
        return jsonify({"error": "Username already exists"}), 400

    role_id = ROLE_MAP[role]
    if db.session.get(Role, role_id) is None:
        return jsonify({"error": "Roles are not seeded"}), 400

    if role != "admin" and (department_id is None or db.session.get(Department, department_id) is None):
        return jsonify({"error": "A valid departmentId is required"}), 400

    if role == "student" and (student_id is None or db.session.get(Student, student_id) is None):
        return jsonify({"error": "A valid studentId is required for student accounts"}), 400

    try:
        user = User(
            username=username,
            password_hash=hash_password(password),
            role_id=role_id,
            department_id=department_id,
            student_id=student_id if role == "student" else None
        )
        db.session.add(user)
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error("Creating user failed: %s", exc)
        return jsonify({"error": str(exc)}), 500

    return jsonify({"status": "success", "userId": user.user_id}), 201
