from dataclasses import dataclass
from datetime import date, datetime

# Academic year starts on July 15, odd semesters on July 16
ACADEMIC_YEAR_START = (7, 15)
ODD_SEMESTER_START = (7, 16)

PROGRAM_YEARS = 4
PROGRAM_SEMESTERS = 8


@dataclass(frozen=True)
class AcademicInfo:
    year: int
    semester: int

    def to_dict(self):
        return {"year": self.year, "semester": self.semester}


def _as_date(reference_date):
    if reference_date is None:
        return date.today()
    if isinstance(reference_date, datetime):
        return reference_date.date()
    return reference_date


def academic_year_start(reference_date=None):
    """Calendar year in which the academic year containing reference_date began."""
    ref = _as_date(reference_date)
    if (ref.month, ref.day) >= ACADEMIC_YEAR_START:
        return ref.year
    return ref.year - 1


def _in_odd_semester(ref):
    return (ref.month, ref.day) >= ODD_SEMESTER_START


def period_key(reference_date=None):
    """Identifies the semester window a date falls in, (academic year, odd half)."""
    ref = _as_date(reference_date)
    return academic_year_start(ref), _in_odd_semester(ref)


def compute_academic_info(batch_start_year, batch_end_year, reference_date=None):
    """
    Derive a batch's current year of study and semester.

    The academic year starts on July 15, but the odd semester only begins
    on July 16, so July 15 still reports an even semester.
    batch_end_year is accepted for graduation-window checks and is not used yet.
    """
    ref = _as_date(reference_date)

    year_of_study = academic_year_start(ref) - batch_start_year + 1

    # Graduated or not started yet
    if year_of_study < 1 or year_of_study > PROGRAM_YEARS:
        return AcademicInfo(year=max(1, min(PROGRAM_YEARS, year_of_study)), semester=1)

    if _in_odd_semester(ref):
        semester = (year_of_study - 1) * 2 + 1
    else:
        semester = (year_of_study - 1) * 2 + 2

    semester = max(1, min(PROGRAM_SEMESTERS, semester))

    return AcademicInfo(year=year_of_study, semester=semester)


def current_academic_year_label(reference_date=None):
    """Format the academic year as "2024-25"."""
    start = academic_year_start(reference_date)
    return f"{start}-{str(start + 1)[-2:]}"
