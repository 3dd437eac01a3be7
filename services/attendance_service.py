import logging

from extensions import db
from models import AssessmentComponent, Attendance, Student
from services.attendance_bands import attendance_percentage, percentage_to_marks
from services.cie_service import get_cie_configuration, upsert_student_marks

logger = logging.getLogger(__name__)


def section_students(section_id):
    return Student.query.filter_by(
        section_id=section_id,
        is_active=True
    ).order_by(Student.register_no.asc()).all()


def record_attendance(assignment, session_date, present_student_ids, marked_by=None):
    """
    Record one class session for every active student of the assignment's section.

    Students not listed as present are marked ABSENT. Re-recording the same
    date overwrites the earlier entry. Returns the students touched.
    """
    present = {int(sid) for sid in present_student_ids}
    students = section_students(assignment.section_id)

    for student in students:
        status = "PRESENT" if student.student_id in present else "ABSENT"
        row = Attendance.query.filter_by(
            student_id=student.student_id,
            teaching_assignment_id=assignment.teaching_assignment_id,
            date=session_date
        ).first()
        if row:
            row.status = status
            row.marked_by = marked_by
        else:
            db.session.add(Attendance(
                student_id=student.student_id,
                teaching_assignment_id=assignment.teaching_assignment_id,
                date=session_date,
                status=status,
                marked_by=marked_by
            ))

    unknown = present - {s.student_id for s in students}
    if unknown:
        logger.warning(
            "Ignored attendance for students %s not in section %s",
            sorted(unknown), assignment.section_id
        )

    db.session.flush()
    return students


def attendance_summary(student_id, teaching_assignment_id):
    """Return (classes attended, total classes) for a student."""
    rows = Attendance.query.filter_by(
        student_id=student_id,
        teaching_assignment_id=teaching_assignment_id
    ).all()
    attended = sum(1 for r in rows if r.status == "PRESENT")
    return attended, len(rows)


def attendance_component(department_id):
    return AssessmentComponent.query.filter_by(
        department_id=department_id,
        category="ATTENDANCE"
    ).order_by(AssessmentComponent.sequence.asc(), AssessmentComponent.component_id.asc()).first()


def sync_attendance_marks(assignment, student_id, config=None):
    """
    Convert the student's attendance percentage to banded marks and store
    them as the ATTENDANCE record consumed by the CIE calculation.

    Returns the marks written, or None when the department has no
    ATTENDANCE component.
    """
    component = attendance_component(assignment.department_id)
    if component is None:
        logger.warning(
            "Department %s has no ATTENDANCE component, attendance marks not stored",
            assignment.department_id
        )
        return None

    if config is None:
        config = get_cie_configuration(assignment.department_id)

    attended, total = attendance_summary(student_id, assignment.teaching_assignment_id)
    percent = attendance_percentage(attended, total)
    marks = percentage_to_marks(percent, config.attendance_thresholds)

    upsert_student_marks(
        student_id=student_id,
        teaching_assignment_id=assignment.teaching_assignment_id,
        component=component,
        marks=min(marks, component.max_marks)
    )
    return marks
