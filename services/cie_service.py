import logging
import math
from datetime import datetime

from flask import current_app

from extensions import db
from models import (
    AssessmentComponent, Batch, CIEConfiguration, StudentAssessment,
    StudentCIE, TeachingAssignment
)
from services.cie_calculator import compute_cie
from services.cie_rules import InvalidConfiguration

logger = logging.getLogger(__name__)

# (name, category, max_marks, sequence)
DEFAULT_COMPONENTS = [
    ("Slip Test 1", "SLIP", 10, 1),
    ("Slip Test 2", "SLIP", 10, 2),
    ("Slip Test 3", "SLIP", 10, 3),
    ("Assignment 1", "ASSIGNMENT", 10, 4),
    ("Assignment 2", "ASSIGNMENT", 10, 5),
    ("Midsem 1", "MIDSEM", 25, 6),
    ("Midsem 2", "MIDSEM", 25, 7),
    ("Attendance", "ATTENDANCE", 5, 8),
]


def _whole_number(value):
    if isinstance(value, bool):
        raise ValueError("booleans are not numbers")
    number = float(value)
    if not number.is_integer():
        raise ValueError(f"{value!r} is not a whole number")
    return int(number)


# JSON key -> (model attribute, converter)
CONFIG_FIELDS = {
    "label": ("label", str),
    "maxCIEMarks": ("max_cie_marks", _whole_number),
    "slipTestsCount": ("slip_tests_count", _whole_number),
    "slipTestsConsider": ("slip_tests_consider", _whole_number),
    "attendanceMaxMarks": ("attendance_max_marks", _whole_number),
}

THRESHOLD_FIELDS = {
    "marks5": "threshold_marks5",
    "marks4": "threshold_marks4",
    "marks3": "threshold_marks3",
}


# =========================================================
# FETCHING
# =========================================================

def fetch_assessment_records(student_id, teaching_assignment_id):
    return StudentAssessment.query.filter_by(
        student_id=student_id,
        teaching_assignment_id=teaching_assignment_id
    ).order_by(StudentAssessment.assessment_id.asc()).all()


def fetch_components_by_id(records):
    component_ids = {r.component_id for r in records}
    if not component_ids:
        return {}
    components = AssessmentComponent.query.filter(
        AssessmentComponent.component_id.in_(component_ids)
    ).all()
    return {c.component_id: c for c in components}


def fetch_active_cie_configuration(department_id):
    return CIEConfiguration.query.filter_by(
        department_id=department_id,
        is_active=True
    ).order_by(CIEConfiguration.cie_config_id.desc()).first()


def fetch_batch(batch_id):
    return db.session.get(Batch, batch_id)


# =========================================================
# CONFIGURATION
# =========================================================

def build_default_cie_configuration(department_id):
    """Unsaved configuration carrying the application defaults."""
    cfg = current_app.config
    thresholds = cfg["DEFAULT_ATTENDANCE_THRESHOLDS"]
    return CIEConfiguration(
        department_id=department_id,
        label="Default CIE Configuration",
        max_cie_marks=cfg["DEFAULT_MAX_CIE_MARKS"],
        slip_tests_count=cfg["DEFAULT_SLIP_TESTS_COUNT"],
        slip_tests_consider=cfg["DEFAULT_SLIP_TESTS_CONSIDER"],
        attendance_max_marks=cfg["DEFAULT_ATTENDANCE_MAX_MARKS"],
        threshold_marks5=thresholds["marks5"],
        threshold_marks4=thresholds["marks4"],
        threshold_marks3=thresholds["marks3"],
        is_active=True
    )


def create_default_cie_configuration(department_id):
    config = build_default_cie_configuration(department_id)
    db.session.add(config)
    db.session.flush()
    logger.info("Created default CIE configuration for department=%s", department_id)
    return config


def get_cie_configuration(department_id):
    """Active configuration, or the defaults when the department has none."""
    config = fetch_active_cie_configuration(department_id)
    if config is None:
        logger.warning("No active CIE configuration for department=%s, using defaults", department_id)
        config = build_default_cie_configuration(department_id)
    return config


def _to_number(key, value, converter):
    kind = "whole number" if converter is _whole_number else "number"
    try:
        return converter(value)
    except (TypeError, ValueError):
        raise InvalidConfiguration([f"{key} must be a {kind}"])


def save_cie_configuration(department_id, data):
    """
    Replace the department's active CIE configuration.

    Unspecified fields keep the value of the current configuration.
    The new one is validated before anything is written and the
    previous active configuration is deactivated.
    """
    current = get_cie_configuration(department_id)

    values = {
        "label": current.label,
        "max_cie_marks": current.max_cie_marks,
        "slip_tests_count": current.slip_tests_count,
        "slip_tests_consider": current.slip_tests_consider,
        "attendance_max_marks": current.attendance_max_marks,
        "threshold_marks5": current.threshold_marks5,
        "threshold_marks4": current.threshold_marks4,
        "threshold_marks3": current.threshold_marks3,
    }

    for key, (attr, converter) in CONFIG_FIELDS.items():
        if key in data and data[key] is not None:
            values[attr] = _to_number(key, data[key], converter)

    thresholds = data.get("attendanceThresholds") or {}
    for key, attr in THRESHOLD_FIELDS.items():
        if key in thresholds and thresholds[key] is not None:
            values[attr] = _to_number(key, thresholds[key], float)

    config = CIEConfiguration(department_id=department_id, is_active=True, **values)
    config.validate()

    CIEConfiguration.query.filter_by(
        department_id=department_id,
        is_active=True
    ).update({CIEConfiguration.is_active: False})

    db.session.add(config)
    db.session.flush()
    logger.info("Saved CIE configuration %s for department=%s", config.cie_config_id, department_id)
    return config


def create_default_components(department_id):
    components = []
    for name, category, max_marks, sequence in DEFAULT_COMPONENTS:
        component = AssessmentComponent(
            department_id=department_id,
            name=name,
            category=category,
            max_marks=max_marks,
            sequence=sequence
        )
        db.session.add(component)
        components.append(component)
    db.session.flush()
    return components


# =========================================================
# MARKS & CIE
# =========================================================

def upsert_student_marks(student_id, teaching_assignment_id, component, marks, entered_by=None):
    """Write a mark, overwriting any earlier mark for the same component."""
    try:
        marks = float(marks)
    except (TypeError, ValueError):
        raise ValueError(f"marks must be a number, got {marks!r}")
    # NaN slips through both comparisons
    if not math.isfinite(marks) or marks < 0 or marks > component.max_marks:
        raise ValueError(f"marks must be between 0 and {component.max_marks} for {component.name}")

    assessment = StudentAssessment.query.filter_by(
        student_id=student_id,
        teaching_assignment_id=teaching_assignment_id,
        component_id=component.component_id
    ).first()

    if assessment:
        assessment.marks = marks
        assessment.entered_by = entered_by
    else:
        assessment = StudentAssessment(
            student_id=student_id,
            teaching_assignment_id=teaching_assignment_id,
            component_id=component.component_id,
            marks=marks,
            entered_by=entered_by
        )
        db.session.add(assessment)

    db.session.flush()
    return assessment


def calculate_student_cie(student_id, teaching_assignment_id, config=None):
    records = fetch_assessment_records(student_id, teaching_assignment_id)
    if not records:
        return None

    if config is None:
        assignment = db.session.get(TeachingAssignment, teaching_assignment_id)
        config = get_cie_configuration(assignment.department_id)

    return compute_cie(records, fetch_components_by_id(records), config)


def recalculate_teaching_assignment_cie(teaching_assignment_id):
    """Recompute CIE for every graded student and refresh the StudentCIE cache."""
    assignment = db.session.get(TeachingAssignment, teaching_assignment_id)
    if assignment is None:
        raise LookupError(f"Teaching assignment {teaching_assignment_id} not found")

    config = get_cie_configuration(assignment.department_id)

    rows = (
        db.session.query(StudentAssessment.student_id)
        .filter(StudentAssessment.teaching_assignment_id == teaching_assignment_id)
        .distinct()
        .all()
    )
    student_ids = sorted(r[0] for r in rows)

    for student_id in student_ids:
        breakdown = calculate_student_cie(student_id, teaching_assignment_id, config=config)
        if breakdown is None:
            continue

        cached = StudentCIE.query.filter_by(
            student_id=student_id,
            teaching_assignment_id=teaching_assignment_id
        ).first()
        if cached is None:
            cached = StudentCIE(
                student_id=student_id,
                teaching_assignment_id=teaching_assignment_id
            )
            db.session.add(cached)
        cached.cie_score = breakdown.total_cie
        cached.last_calculated_at = datetime.utcnow()

    db.session.flush()
    logger.info(
        "Recalculated CIE for %d students in assignment %s",
        len(student_ids), teaching_assignment_id
    )
    return len(student_ids)
