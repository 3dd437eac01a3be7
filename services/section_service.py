from datetime import date, datetime

from services.academic_calculator import (
    AcademicInfo, compute_academic_info, current_academic_year_label, period_key
)


def _snapshot_is_fresh(section, reference_date):
    if not section.year or not section.semester or section.period_computed_on is None:
        return False
    return period_key(section.period_computed_on) == period_key(reference_date)


def resolve_section_period(section, batch, reference_date=None):
    """
    Year/semester for a section, reusing its stored snapshot while it is
    still in the current semester window and refreshing it otherwise.
    """
    if reference_date is None:
        reference_date = date.today()
    elif isinstance(reference_date, datetime):
        reference_date = reference_date.date()

    if _snapshot_is_fresh(section, reference_date):
        return AcademicInfo(year=section.year, semester=section.semester)

    info = compute_academic_info(batch.start_year, batch.end_year, reference_date)
    section.year = info.year
    section.semester = info.semester
    section.period_computed_on = reference_date
    return info


def section_to_dict(section, batch, reference_date=None):
    info = resolve_section_period(section, batch, reference_date)
    return {
        "sectionId": section.section_id,
        "section": section.section_name,
        "batchId": batch.batch_id,
        "batchName": batch.batch_name,
        "year": info.year,
        "semester": info.semester,
        "academicYear": current_academic_year_label(reference_date),
    }
