import pytest

from extensions import db
from models import AssessmentComponent, StudentAssessment, StudentCIE, Subject, TeachingAssignment, User
from services.cie_service import save_cie_configuration, upsert_student_marks
from utils.seed_data import create_department


def marks_payload(data, component, marks, student_index=0):
    return {
        "studentId": data.student_ids[student_index],
        "teachingAssignmentId": data.assignment_id,
        "componentId": data.components[component],
        "marks": marks,
    }


# =========================================================
# AUTH
# =========================================================

def test_login_returns_role_home(client, data):
    resp = client.post("/login", json={"username": "faculty1", "password": "secret-pass"})
    assert resp.status_code == 200
    assert resp.get_json()["home"] == "/faculty"


def test_login_rejects_bad_password(client, data):
    resp = client.post("/login", json={"username": "faculty1", "password": "nope"})
    assert resp.status_code == 401


def test_login_requires_fields(client, data):
    assert client.post("/login", json={"username": "faculty1"}).status_code == 400


def test_protected_route_requires_login(client, data):
    assert client.get("/faculty/dashboard-data").status_code == 401


def test_role_gate(client, data, login):
    login("student1")
    assert client.get("/faculty/dashboard-data").status_code == 403
    assert client.get("/hod/cie-config").status_code == 403


# =========================================================
# FACULTY
# =========================================================

def test_faculty_dashboard_lists_assignments(client, data, login):
    login("faculty1")
    body = client.get("/faculty/dashboard-data").get_json()
    assert [a["teachingAssignmentId"] for a in body["assignments"]] == [data.assignment_id]
    assert body["assignments"][0]["subjectCode"] == "CS301"


def test_faculty_saves_marks_and_gets_cie(client, data, login):
    login("faculty1")
    client.post("/faculty/marks", json=marks_payload(data, "Slip Test 1", 4))
    client.post("/faculty/marks", json=marks_payload(data, "Slip Test 2", 9))
    resp = client.post("/faculty/marks", json=marks_payload(data, "Slip Test 3", 7))

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["assessment"]["marks"] == 7.0
    assert body["cie"]["slipScore"] == 8.0
    assert body["cie"]["totalCIE"] == 8.0


def test_faculty_resubmitting_marks_overwrites(client, data, login):
    login("faculty1")
    client.post("/faculty/marks", json=marks_payload(data, "Midsem 1", 10))
    client.post("/faculty/marks", json=marks_payload(data, "Midsem 1", 22))

    db.session.expire_all()
    rows = StudentAssessment.query.filter_by(student_id=data.student_ids[0]).all()
    assert [r.marks for r in rows] == [22.0]


def test_faculty_cannot_mark_someone_elses_assignment(client, data, login):
    login("faculty2")
    resp = client.post("/faculty/marks", json=marks_payload(data, "Slip Test 1", 5))
    assert resp.status_code == 403


def test_marks_out_of_range_rejected(client, data, login):
    login("faculty1")
    resp = client.post("/faculty/marks", json=marks_payload(data, "Slip Test 1", 11))
    assert resp.status_code == 400


@pytest.mark.parametrize("marks", [float("nan"), float("inf"), "ten"])
def test_marks_that_are_not_finite_numbers_rejected(client, data, login, marks):
    login("faculty1")
    resp = client.post("/faculty/marks", json=marks_payload(data, "Slip Test 1", marks))
    assert resp.status_code == 400

    db.session.expire_all()
    assert StudentAssessment.query.count() == 0


def test_marks_missing_fields_rejected(client, data, login):
    login("faculty1")
    resp = client.post("/faculty/marks", json={"studentId": data.student_ids[0]})
    assert resp.status_code == 400


def test_marks_for_student_outside_section_rejected(client, data, login):
    login("faculty1")
    payload = marks_payload(data, "Slip Test 1", 5)
    payload["studentId"] = 9999
    assert client.post("/faculty/marks", json=payload).status_code == 400


def test_faculty_lists_assignment_marks(client, data, login):
    login("faculty1")
    client.post("/faculty/marks", json=marks_payload(data, "Assignment 1", 8))
    body = client.get(f"/faculty/assignments/{data.assignment_id}/marks").get_json()
    assert len(body["components"]) == 8
    assert [m["marks"] for m in body["marks"]] == [8.0]


def test_attendance_endpoint_stores_banded_marks(client, data, login):
    login("faculty1")
    first, second = data.student_ids
    resp = client.post("/faculty/attendance", json={
        "teachingAssignmentId": data.assignment_id,
        "studentIds": [first],
        "date": "2024-08-01",
    })

    assert resp.status_code == 200
    body = resp.get_json()
    assert body["count"] == 2
    assert body["attendanceMarks"] == {str(first): 5, str(second): 0}


@pytest.mark.parametrize("student_ids", [["abc"], 5, "12", [None], [True]])
def test_attendance_endpoint_rejects_malformed_student_ids(client, data, login, student_ids):
    login("faculty1")
    resp = client.post("/faculty/attendance", json={
        "teachingAssignmentId": data.assignment_id,
        "studentIds": student_ids,
        "date": "2024-08-01",
    })
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "studentIds must be a list of ids"


def test_attendance_endpoint_accepts_numeric_strings(client, data, login):
    login("faculty1")
    first, second = data.student_ids
    resp = client.post("/faculty/attendance", json={
        "teachingAssignmentId": data.assignment_id,
        "studentIds": [str(first)],
        "date": "2024-08-01",
    })
    assert resp.status_code == 200
    assert resp.get_json()["attendanceMarks"] == {str(first): 5, str(second): 0}


def test_attendance_endpoint_rejects_bad_date(client, data, login):
    login("faculty1")
    resp = client.post("/faculty/attendance", json={
        "teachingAssignmentId": data.assignment_id,
        "studentIds": [],
        "date": "01/08/2024",
    })
    assert resp.status_code == 400


def test_cie_report_is_a_pdf(client, data, login):
    login("faculty1")
    client.post("/faculty/marks", json=marks_payload(data, "Slip Test 1", 6))
    resp = client.get(f"/faculty/assignments/{data.assignment_id}/cie-report")

    assert resp.status_code == 200
    assert resp.mimetype == "application/pdf"
    assert resp.data.startswith(b"%PDF")


# =========================================================
# STUDENT
# =========================================================

def test_student_sees_no_cie_until_graded(client, data, login):
    login("student1")
    body = client.get("/student/dashboard-data").get_json()
    assert body["student"]["registerNo"] == "1CS21001"
    assert body["assignments"][0]["cie"] is None
    empty = client.get(f"/student/assignments/{data.assignment_id}/cie").get_json()
    assert empty == {"teachingAssignmentId": data.assignment_id, "marks": [], "cie": None}

    login("faculty1")
    client.post("/faculty/marks", json=marks_payload(data, "Assignment 1", 9))

    login("student1")
    body = client.get(f"/student/assignments/{data.assignment_id}/cie").get_json()
    assert body["cie"]["assignmentScore"] == 9.0
    assert body["cie"]["totalCIE"] == 9.0

    [mark] = body["marks"]
    assert mark["marks"] == 9.0
    assert mark["component"]["name"] == "Assignment 1"
    assert mark["component"]["category"] == "ASSIGNMENT"
    assert mark["component"]["maxMarks"] == 10


# =========================================================
# HOD
# =========================================================

def test_hod_reads_configuration(client, data, login):
    login("hod1")
    config = client.get("/hod/cie-config").get_json()["config"]
    assert config["maxCIEMarks"] == 50
    assert config["attendanceThresholds"] == {"marks5": 85, "marks4": 75, "marks3": 65}


def test_hod_updates_configuration(client, data, login):
    login("hod1")
    resp = client.put("/hod/cie-config", json={"slipTestsConsider": 3})
    assert resp.status_code == 200
    assert resp.get_json()["config"]["slipTestsConsider"] == 3


def test_hod_invalid_configuration_rejected(client, data, login):
    login("hod1")
    resp = client.put("/hod/cie-config", json={
        "slipTestsConsider": 5,
        "attendanceThresholds": {"marks5": 60, "marks4": 75, "marks3": 65},
    })

    assert resp.status_code == 400
    errors = resp.get_json()["errors"]
    assert any("slipTestsConsider" in e for e in errors)
    assert any("descending" in e for e in errors)

    config = client.get("/hod/cie-config").get_json()["config"]
    assert config["slipTestsConsider"] == 2


def test_hod_lists_sections_with_period(client, data, login):
    login("hod1")
    sections = client.get("/hod/sections").get_json()["sections"]
    assert len(sections) == 1
    assert sections[0]["section"] == "A"
    assert sections[0]["batchName"] == "2021-25"
    assert 1 <= sections[0]["year"] <= 4


def test_hod_recalculates_assignment(client, data, login):
    login("faculty1")
    client.post("/faculty/marks", json=marks_payload(data, "Midsem 1", 20))

    login("hod1")
    resp = client.post(f"/hod/assignments/{data.assignment_id}/recalculate")
    assert resp.status_code == 200
    assert resp.get_json()["students"] == 1

    db.session.expire_all()
    cached = StudentCIE.query.filter_by(teaching_assignment_id=data.assignment_id).one()
    assert cached.cie_score == 20.0


def test_hod_recalculate_unknown_assignment(client, data, login):
    login("hod1")
    assert client.post("/hod/assignments/999/recalculate").status_code == 404


# =========================================================
# ADMIN
# =========================================================

def test_admin_creates_department_with_defaults(client, data, login):
    login("admin")
    resp = client.post("/admin/departments", json={"code": "me", "name": "Mechanical Engineering"})
    assert resp.status_code == 201
    department = resp.get_json()["department"]
    assert department["code"] == "ME"

    duplicate = client.post("/admin/departments", json={"code": "ME", "name": "Again"})
    assert duplicate.status_code == 400


def test_admin_creates_user(client, data, login):
    login("admin")
    resp = client.post("/admin/users", json={
        "username": "faculty3",
        "password": "pw",
        "role": "faculty",
        "departmentId": data.department_id,
    })
    assert resp.status_code == 201

    assert client.post("/login", json={"username": "faculty3", "password": "pw"}).status_code == 200


def test_admin_user_validation(client, data, login):
    login("admin")
    assert client.post("/admin/users", json={
        "username": "x", "password": "pw", "role": "janitor"
    }).status_code == 400
    assert client.post("/admin/users", json={
        "username": "s2", "password": "pw", "role": "student", "departmentId": data.department_id
    }).status_code == 400


def test_deactivated_account_cannot_log_in(client, data):
    user = User.query.filter_by(username="faculty2").one()
    user.is_active = False
    db.session.commit()

    resp = client.post("/login", json={"username": "faculty2", "password": "secret-pass"})
    assert resp.status_code == 401


def test_logout(client, data, login):
    login("faculty1")
    assert client.get("/logout").status_code == 200
    assert client.get("/faculty/dashboard-data").status_code == 401


def test_student_views_use_the_assignment_departments_rules(client, data, login):
    ece = create_department("ECE", "Electronics and Communication Engineering")
    save_cie_configuration(ece.department_id, {"slipTestsConsider": 1})
    subject = Subject(subject_code="EC201", subject_name="Signals", semester=3, department_id=ece.department_id)
    db.session.add(subject)
    db.session.flush()
    assignment = TeachingAssignment(
        faculty_id=data.faculty_id,
        subject_id=subject.subject_id,
        section_id=data.section_id,
        department_id=ece.department_id
    )
    db.session.add(assignment)
    db.session.flush()

    slips = AssessmentComponent.query.filter_by(
        department_id=ece.department_id, category="SLIP"
    ).order_by(AssessmentComponent.sequence.asc()).all()
    for component, marks in zip(slips, [4, 9, 7]):
        upsert_student_marks(data.student_ids[0], assignment.teaching_assignment_id, component, marks)
    db.session.commit()

    login("student1")
    dashboard = client.get("/student/dashboard-data").get_json()
    [row] = [a for a in dashboard["assignments"] if a["teachingAssignmentId"] == assignment.teaching_assignment_id]
    detail = client.get(f"/student/assignments/{assignment.teaching_assignment_id}/cie").get_json()

    assert row["cie"]["slipScore"] == 9.0
    assert detail["cie"]["slipScore"] == 9.0
