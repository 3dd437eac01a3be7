import logging
import re
from datetime import date

from flask import Blueprint, jsonify, request, send_file
from flask_login import login_required, current_user
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from models import AssessmentComponent, Batch, StudentAssessment, TeachingAssignment
from services.academic_calculator import current_academic_year_label
from services.attendance_service import record_attendance, section_students, sync_attendance_marks
from services.cie_report import build_cie_report_pdf
from services.cie_service import (
    calculate_student_cie, get_cie_configuration, upsert_student_marks
)
from services.section_service import resolve_section_period
from utils.decorators import role_required

logger = logging.getLogger(__name__)

faculty_bp = Blueprint("faculty", __name__, url_prefix="/faculty")


def get_own_assignment(teaching_assignment_id):
    """The assignment if it belongs to the logged-in faculty member."""
    if teaching_assignment_id is None:
        return None
    return TeachingAssignment.query.filter_by(
        teaching_assignment_id=teaching_assignment_id,
        faculty_id=current_user.user_id
    ).first()


def assignment_to_dict(assignment):
    section = assignment.section
    batch = db.session.get(Batch, section.batch_id)
    period = resolve_section_period(section, batch)
    return {
        "teachingAssignmentId": assignment.teaching_assignment_id,
        "subjectCode": assignment.subject.subject_code,
        "subjectName": assignment.subject.subject_name,
        "section": section.section_name,
        "year": period.year,
        "semester": period.semester,
    }


@faculty_bp.route("/dashboard-data")
@login_required
@role_required("faculty")
def dashboard_data():
    assignments = (
        TeachingAssignment.query
        .filter_by(faculty_id=current_user.user_id)
        .order_by(TeachingAssignment.teaching_assignment_id.asc())
        .all()
    )

    result = [assignment_to_dict(a) for a in assignments]
    # Section period snapshots may have been refreshed
    db.session.commit()

    return jsonify({
        "faculty_name": current_user.username,
        "academicYear": current_academic_year_label(),
        "assignments": result
    })


@faculty_bp.route("/marks", methods=["POST"])
@login_required
@role_required("faculty")
def add_student_marks():
    data = request.get_json(silent=True) or {}
    student_id = data.get("studentId")
    teaching_assignment_id = data.get("teachingAssignmentId")
    component_id = data.get("componentId")
    marks = data.get("marks")

    if student_id is None or teaching_assignment_id is None or component_id is None or marks is None:
        return jsonify({"error": "Missing required fields"}), 400

    try:
        student_id = int(student_id)
    except (TypeError, ValueError):
        return jsonify({"error": "Invalid studentId"}), 400

    assignment = get_own_assignment(teaching_assignment_id)
    if not assignment:
        return jsonify({"error": "Unauthorized"}), 403

    component = AssessmentComponent.query.filter_by(
        component_id=component_id,
        department_id=assignment.department_id
    ).first()
    if not component:
        return jsonify({"error": "Assessment component not found"}), 404

    enrolled = {s.student_id for s in section_students(assignment.section_id)}
    if student_id not in enrolled:
        return jsonify({"error": "Student is not part of this assignment"}), 400

    try:
        assessment = upsert_student_marks(
            student_id=student_id,
            teaching_assignment_id=assignment.teaching_assignment_id,
            component=component,
            marks=marks,
            entered_by=current_user.user_id
        )
        db.session.commit()
    except ValueError as exc:
        db.session.rollback()
        return jsonify({"error": str(exc)}), 400
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error("Saving marks failed: %s", exc)
        return jsonify({"error": str(exc)}), 500

    cie = calculate_student_cie(student_id, assignment.teaching_assignment_id)

    return jsonify({
        "message": "Marks saved",
        "assessment": assessment.to_dict(),
        "cie": cie.to_dict() if cie else None
    })


@faculty_bp.route("/assignments/<int:teaching_assignment_id>/marks")
@login_required
@role_required("faculty")
def get_student_marks(teaching_assignment_id):
    assignment = get_own_assignment(teaching_assignment_id)
    if not assignment:
        return jsonify({"error": "Unauthorized"}), 403

    marks = (
        StudentAssessment.query
        .filter_by(teaching_assignment_id=teaching_assignment_id)
        .order_by(StudentAssessment.student_id.asc(), StudentAssessment.component_id.asc())
        .all()
    )
    components = AssessmentComponent.query.filter_by(
        department_id=assignment.department_id
    ).order_by(AssessmentComponent.sequence.asc()).all()

    return jsonify({
        "components": [c.to_dict() for c in components],
        "marks": [m.to_dict() for m in marks]
    })


@faculty_bp.route("/attendance", methods=["POST"])
@login_required
@role_required("faculty")
def mark_attendance():
    data = request.get_json(silent=True) or {}
    teaching_assignment_id = data.get("teachingAssignmentId")
    student_ids = data.get("studentIds")
    session_date = data.get("date")

    if teaching_assignment_id is None or student_ids is None or not session_date:
        return jsonify({"error": "Missing required fields"}), 400

    try:
        session_date = date.fromisoformat(str(session_date))
    except ValueError:
        return jsonify({"error": "date must be YYYY-MM-DD"}), 400

    try:
        if not isinstance(student_ids, list) or any(isinstance(s, bool) for s in student_ids):
            raise TypeError(student_ids)
        student_ids = [int(s) for s in student_ids]
    except (TypeError, ValueError):
        return jsonify({"error": "studentIds must be a list of ids"}), 400

    assignment = get_own_assignment(teaching_assignment_id)
    if not assignment:
        return jsonify({"error": "Unauthorized"}), 403

    config = get_cie_configuration(assignment.department_id)

    try:
        students = record_attendance(
            assignment,
            session_date,
            student_ids,
            marked_by=current_user.user_id
        )
        attendance_marks = {
            s.student_id: sync_attendance_marks(assignment, s.student_id, config=config)
            for s in students
        }
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.error("Saving attendance failed: %s", exc)
        return jsonify({"error": str(exc)}), 500

    return jsonify({
        "message": "Attendance marked",
        "date": session_date.isoformat(),
        "count": len(students),
        "attendanceMarks": {str(k): v for k, v in attendance_marks.items()}
    })


@faculty_bp.route("/assignments/<int:teaching_assignment_id>/cie-report")
@login_required
@role_required("faculty")
def cie_report(teaching_assignment_id):
    assignment = get_own_assignment(teaching_assignment_id)
    if not assignment:
        return jsonify({"error": "Unauthorized"}), 403

    config = get_cie_configuration(assignment.department_id)
    rows = [
        {
            "register_no": s.register_no,
            "name": s.name,
            "cie": calculate_student_cie(s.student_id, teaching_assignment_id, config=config)
        }
        for s in section_students(assignment.section_id)
    ]

    subject = assignment.subject
    buffer = build_cie_report_pdf(
        subject_name=subject.subject_name,
        section_label=assignment.section.section_name,
        academic_year=current_academic_year_label(),
        config=config,
        rows=rows
    )

    safe_subject = re.sub(r"[^a-zA-Z0-9]+", "_", subject.subject_name).strip("_")
    filename = f"cie_{safe_subject}_{assignment.section.section_name}.pdf"

    return send_file(buffer, as_attachment=True, download_name=filename, mimetype="application/pdf")
