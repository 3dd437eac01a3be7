from functools import wraps
from flask import jsonify
from flask_login import current_user

from models.role import ADMIN, HOD, FACULTY, STUDENT

ROLE_MAP = {
    "admin": ADMIN,
    "hod": HOD,
    "faculty": FACULTY,
    "student": STUDENT,
}


def role_required(*required_roles):
    """Allow the view only for logged-in users holding one of the given roles."""
    required_ids = {ROLE_MAP[r] for r in required_roles}

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            if not current_user.is_authenticated:
                return jsonify({"error": "Authentication required"}), 401

            if current_user.role_id not in required_ids:
                return jsonify({"error": "Unauthorized"}), 403

            return func(*args, **kwargs)
        return wrapper
    return decorator
