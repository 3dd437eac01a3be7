import logging

from models.role import ADMIN, HOD, FACULTY, STUDENT
from models.user import User
from utils.password_utils import verify_password

logger = logging.getLogger(__name__)

ROLE_HOME = {
    ADMIN: "/admin",
    HOD: "/hod",
    FACULTY: "/faculty",
    STUDENT: "/student",
}


def authenticate_user(username: str, password: str):
    """Return the active user matching the credentials, or None."""
    username = (username or "").strip()
    user = User.query.filter_by(username=username).first()

    if not user or not verify_password(password, user.password_hash):
        logger.info("Failed login for %r", username)
        return None

    if user.is_active is False:
        logger.info("Login refused for deactivated account %r", username)
        return None

    # Student accounts are useless without their roster entry
    if user.role_id == STUDENT and user.student_id is None:
        logger.warning("Student account %r has no linked student record", username)
        return None

    return user


def role_home(user):
    return ROLE_HOME.get(user.role_id)


def user_summary(user):
    return {
        "userId": user.user_id,
        "username": user.username,
        "roleId": user.role_id,
        "departmentId": user.department_id,
        "studentId": user.student_id,
    }
