from collections import namedtuple


AttendanceThresholds = namedtuple("AttendanceThresholds", ["marks5", "marks4", "marks3"])


class InvalidConfiguration(ValueError):
    """Raised when a CIE rule configuration breaks one of its invariants."""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


def validate_cie_rules(
    max_cie_marks,
    slip_tests_count,
    slip_tests_consider,
    attendance_max_marks,
    thresholds,
):
    """
    Check a CIE rule configuration before it is written.

    Every broken rule is collected so the caller can show them all at once.
    Raises InvalidConfiguration, returns None when the configuration is sane.
    """
    errors = []

    if max_cie_marks is None or max_cie_marks <= 0:
        errors.append("maxCIEMarks must be positive")
    if attendance_max_marks is None or attendance_max_marks <= 0:
        errors.append("attendanceMaxMarks must be positive")

    if slip_tests_count is None or slip_tests_count <= 0:
        errors.append("slipTestsCount must be positive")
    if slip_tests_consider is None or slip_tests_consider < 1:
        errors.append("slipTestsConsider must be at least 1")
    elif slip_tests_count is not None and slip_tests_consider > slip_tests_count:
        errors.append(
            f"slipTestsConsider ({slip_tests_consider}) cannot exceed "
            f"slipTestsCount ({slip_tests_count})"
        )

    marks5, marks4, marks3 = thresholds
    for name, value in (("marks5", marks5), ("marks4", marks4), ("marks3", marks3)):
        if value is None or not 0 <= value <= 100:
            errors.append(f"attendance threshold {name} must be between 0 and 100")

    if None not in (marks5, marks4, marks3) and not marks5 >= marks4 >= marks3:
        errors.append(
            "attendance thresholds must be descending "
            f"(marks5={marks5}, marks4={marks4}, marks3={marks3})"
        )

    if errors:
        raise InvalidConfiguration(errors)
