import logging
import secrets

from extensions import db
from models.department import Department
from models.role import Role, ADMIN
from models.user import User
from services.cie_service import (
    create_default_cie_configuration,
    create_default_components,
    fetch_active_cie_configuration,
)
from utils.password_utils import hash_password

logger = logging.getLogger(__name__)


def seed_roles():
    roles = [
        {"role_id": 1, "role_name": "ADMIN"},
        {"role_id": 2, "role_name": "HOD"},
        {"role_id": 3, "role_name": "FACULTY"},
        {"role_id": 4, "role_name": "STUDENT"},
    ]

    for r in roles:
        existing = Role.query.filter(
            (Role.role_id == r["role_id"]) |
            (Role.role_name == r["role_name"])
        ).first()

        if not existing:
            db.session.add(
                Role(
                    role_id=r["role_id"],
                    role_name=r["role_name"]
                )
            )

    db.session.flush()
    logger.info("Roles verified (ADMIN=1, HOD=2, FACULTY=3, STUDENT=4)")


def create_department(department_code, department_name):
    """Create a department together with its default CIE rules and components."""
    department = Department(
        department_code=department_code,
        department_name=department_name
    )
    db.session.add(department)
    db.session.flush()

    create_default_cie_configuration(department.department_id)
    create_default_components(department.department_id)
    return department


def seed_departments():
    departments = [
        {"department_code": "CSE", "department_name": "Computer Science and Engineering"},
        {"department_code": "ECE", "department_name": "Electronics and Communication Engineering"},
    ]

    for d in departments:
        existing = Department.query.filter_by(department_code=d["department_code"]).first()
        if not existing:
            create_department(d["department_code"], d["department_name"])
        elif fetch_active_cie_configuration(existing.department_id) is None:
            create_default_cie_configuration(existing.department_id)

    db.session.flush()
    logger.info("Departments seeded")


def seed_admin(username="admin"):
    """
    Create the admin account if missing.

    Returns (username, password) for a newly created account, None otherwise.
    """
    if User.query.filter_by(username=username).first():
        return None

    password = secrets.token_urlsafe(12)
    db.session.add(User(
        username=username,
        password_hash=hash_password(password),
        role_id=ADMIN
    ))
    db.session.flush()
    logger.info("Admin account %s created", username)
    return username, password


def run_seed():
    seed_roles()
    seed_departments()
    credentials = seed_admin()
    db.session.commit()
    return credentials
