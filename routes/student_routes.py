from flask import Blueprint, jsonify
from flask_login import login_required, current_user

from extensions import db
from models import Student, TeachingAssignment
from services.academic_calculator import current_academic_year_label
from services.attendance_bands import attendance_percentage
from services.attendance_service import attendance_summary
from services.cie_service import (
    calculate_student_cie, fetch_assessment_records, get_cie_configuration
)
from utils.decorators import role_required

student_bp = Blueprint("student", __name__, url_prefix="/student")


def current_student():
    if current_user.student_id is None:
        return None
    return db.session.get(Student, current_user.student_id)


def assessment_to_dict(assessment):
    row = assessment.to_dict()
    row["component"] = assessment.component.to_dict() if assessment.component else None
    return row


@student_bp.route("/dashboard-data")
@login_required
@role_required("student")
def dashboard_data():
    student = current_student()
    if not student:
        return jsonify({"error": "Student record not found"}), 404

    assignments = (
        TeachingAssignment.query
        .filter_by(section_id=student.section_id)
        .order_by(TeachingAssignment.teaching_assignment_id.asc())
        .all()
    )

    # CIE rules belong to the department that owns the assignment
    configs = {}

    def config_for(department_id):
        if department_id not in configs:
            configs[department_id] = get_cie_configuration(department_id)
        return configs[department_id]

    result = []
    for a in assignments:
        config = config_for(a.department_id)
        cie = calculate_student_cie(student.student_id, a.teaching_assignment_id, config=config)
        attended, total = attendance_summary(student.student_id, a.teaching_assignment_id)
        result.append({
            "teachingAssignmentId": a.teaching_assignment_id,
            "subjectCode": a.subject.subject_code,
            "subjectName": a.subject.subject_name,
            "attendancePercent": attendance_percentage(attended, total),
            "maxCIEMarks": config.max_cie_marks,
            "cie": cie.to_dict() if cie else None
        })

    return jsonify({
        "student": student.to_dict(),
        "academicYear": current_academic_year_label(),
        "maxCIEMarks": config_for(student.department_id).max_cie_marks,
        "assignments": result
    })


@student_bp.route("/assignments/<int:teaching_assignment_id>/cie")
@login_required
@role_required("student")
def assignment_cie(teaching_assignment_id):
    student = current_student()
    if not student:
        return jsonify({"error": "Student record not found"}), 404

    assignment = TeachingAssignment.query.filter_by(
        teaching_assignment_id=teaching_assignment_id,
        section_id=student.section_id
    ).first()
    if not assignment:
        return jsonify({"error": "Assignment not found"}), 404

    marks = fetch_assessment_records(student.student_id, teaching_assignment_id)
    cie = calculate_student_cie(
        student.student_id,
        teaching_assignment_id,
        config=get_cie_configuration(assignment.department_id)
    )

    return jsonify({
        "teachingAssignmentId": teaching_assignment_id,
        "marks": [assessment_to_dict(m) for m in marks],
        "cie": cie.to_dict() if cie else None
    })
