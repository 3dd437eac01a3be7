from types import SimpleNamespace

import pytest

from app import create_app
from config.config import TestConfig
from extensions import db
from models import (
    AssessmentComponent, Batch, Section, Student, Subject, TeachingAssignment, User
)
from models.role import ADMIN, HOD, FACULTY, STUDENT
from utils.password_utils import hash_password
from utils.seed_data import create_department, seed_roles

PASSWORD = "secret-pass"


def _user(username, role_id, department_id=None, student_id=None):
    user = User(
        username=username,
        password_hash=hash_password(PASSWORD),
        role_id=role_id,
        department_id=department_id,
        student_id=student_id
    )
    db.session.add(user)
    return user


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def data(app):
    """A department with one batch, one section, two students and one teaching assignment."""
    seed_roles()
    department = create_department("CSE", "Computer Science and Engineering")

    batch = Batch(department_id=department.department_id, batch_name="2021-25", start_year=2021, end_year=2025)
    db.session.add(batch)
    db.session.flush()

    section = Section(department_id=department.department_id, batch_id=batch.batch_id, section_name="A")
    db.session.add(section)
    db.session.flush()

    students = [
        Student(register_no="1CS21001", name="Asha", department_id=department.department_id, section_id=section.section_id),
        Student(register_no="1CS21002", name="Ravi", department_id=department.department_id, section_id=section.section_id),
    ]
    db.session.add_all(students)

    subject = Subject(subject_code="CS301", subject_name="Data Structures", semester=3, department_id=department.department_id)
    db.session.add(subject)
    db.session.flush()

    _user("admin", ADMIN)
    hod = _user("hod1", HOD, department.department_id)
    faculty = _user("faculty1", FACULTY, department.department_id)
    other_faculty = _user("faculty2", FACULTY, department.department_id)
    _user("student1", STUDENT, department.department_id, students[0].student_id)
    db.session.flush()

    assignment = TeachingAssignment(
        faculty_id=faculty.user_id,
        subject_id=subject.subject_id,
        section_id=section.section_id,
        department_id=department.department_id
    )
    db.session.add(assignment)
    db.session.commit()

    components = {
        c.name: c.component_id
        for c in AssessmentComponent.query.filter_by(department_id=department.department_id).all()
    }

    return SimpleNamespace(
        department_id=department.department_id,
        batch_id=batch.batch_id,
        section_id=section.section_id,
        student_ids=[s.student_id for s in students],
        subject_id=subject.subject_id,
        hod_id=hod.user_id,
        faculty_id=faculty.user_id,
        other_faculty_id=other_faculty.user_id,
        assignment_id=assignment.teaching_assignment_id,
        components=components,
    )


@pytest.fixture
def login(client):
    def _login(username):
        resp = client.post("/login", json={"username": username, "password": PASSWORD})
        assert resp.status_code == 200
        return resp
    return _login
