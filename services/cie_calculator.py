"""
CIE calculation engine.

CIE = avg(best N slip tests) + avg(assignments) + avg(midsems) + attendance marks

N is the configuration's ``slip_tests_consider``. Attendance marks are stored
as a single ATTENDANCE-category record (already banded, see
``services.attendance_bands``). The total is not clamped to ``max_cie_marks``.

Records and components are duck-typed: the SQLAlchemy models and the
dataclasses below share attribute names, so either can be passed in.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

logger = logging.getLogger(__name__)

SLIP = "SLIP"
ASSIGNMENT = "ASSIGNMENT"
MIDSEM = "MIDSEM"
ATTENDANCE = "ATTENDANCE"

CATEGORIES = (SLIP, ASSIGNMENT, MIDSEM, ATTENDANCE)


@dataclass
class AssessmentRecord:
    student_id: int
    teaching_assignment_id: int
    component_id: int
    marks: float
    updated_at: Optional[datetime] = None


@dataclass
class CIEBreakdown:
    slip_score: float
    assignment_score: float
    midsem_score: float
    attendance_marks: float
    total_cie: float

    def to_dict(self):
        return {
            "slipScore": self.slip_score,
            "assignmentScore": self.assignment_score,
            "midsemScore": self.midsem_score,
            "attendanceMarks": self.attendance_marks,
            "totalCIE": self.total_cie,
        }


@dataclass
class ResolvedRecords:
    by_category: dict = field(default_factory=lambda: {c: [] for c in CATEGORIES})
    excluded: list = field(default_factory=list)


def _check_single_owner(records):
    owners = {(r.student_id, r.teaching_assignment_id) for r in records}
    if len(owners) > 1:
        raise ValueError(
            "CIE records must belong to one student and one teaching assignment, "
            f"got {sorted(owners)}"
        )


def resolve_records(records, components_by_id):
    """
    First pass: join each record to its component and group by category.

    Records whose component cannot be found (or whose category is unknown)
    are collected in ``excluded`` instead of failing the computation.
    """
    resolved = ResolvedRecords()
    for record in records:
        component = components_by_id.get(record.component_id)
        category = getattr(component, "category", None)
        if category not in resolved.by_category:
            resolved.excluded.append(record)
            continue
        resolved.by_category[category].append(record)
    return resolved


def _mean(values):
    if not values:
        return 0.0
    return sum(values) / len(values)


def best_of(records, consider):
    """The `consider` highest-marked records, highest first."""
    # sorted() is stable, so equal marks keep their input order at the cutoff
    ranked = sorted(records, key=lambda r: -float(r.marks))
    return ranked[:min(consider, len(ranked))]


def _record_timestamp(record):
    return getattr(record, "updated_at", None) or getattr(record, "created_at", None)


def pick_attendance_record(records):
    """Pick the most recent attendance record, first one wins on ties."""
    if not records:
        return None
    if len(records) > 1:
        logger.warning(
            "Found %d ATTENDANCE records for student=%s assignment=%s, using the most recent",
            len(records), records[0].student_id, records[0].teaching_assignment_id
        )

    chosen = records[0]
    for record in records[1:]:
        current = _record_timestamp(chosen)
        candidate = _record_timestamp(record)
        if candidate is not None and (current is None or candidate > current):
            chosen = record
    return chosen


def aggregate(resolved, config):
    """Second pass: turn grouped records into a CIEBreakdown."""
    best_slips = best_of(resolved.by_category[SLIP], config.slip_tests_consider)
    assignment_marks = [float(r.marks) for r in resolved.by_category[ASSIGNMENT]]
    midsem_marks = [float(r.marks) for r in resolved.by_category[MIDSEM]]

    slip_score = _mean([float(r.marks) for r in best_slips])
    assignment_score = _mean(assignment_marks)
    midsem_score = _mean(midsem_marks)

    attendance_record = pick_attendance_record(resolved.by_category[ATTENDANCE])
    attendance_marks = float(attendance_record.marks) if attendance_record else 0.0

    return CIEBreakdown(
        slip_score=slip_score,
        assignment_score=assignment_score,
        midsem_score=midsem_score,
        attendance_marks=attendance_marks,
        total_cie=slip_score + assignment_score + midsem_score + attendance_marks,
    )


def compute_cie(records, components_by_id, config):
    """
    Compute the CIE breakdown for one student in one teaching assignment.

    Returns None when there are no records at all ("nothing graded yet"),
    which is different from a breakdown whose total is 0.
    """
    records = list(records)
    if not records:
        return None

    _check_single_owner(records)

    resolved = resolve_records(records, components_by_id)
    if resolved.excluded:
        logger.info(
            "Excluded %d record(s) with unresolved components from CIE of student=%s assignment=%s",
            len(resolved.excluded), records[0].student_id, records[0].teaching_assignment_id
        )

    return aggregate(resolved, config)
