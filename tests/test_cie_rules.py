import pytest

from services.cie_rules import AttendanceThresholds, InvalidConfiguration, validate_cie_rules


def valid(**overrides):
    values = {
        "max_cie_marks": 50,
        "slip_tests_count": 3,
        "slip_tests_consider": 2,
        "attendance_max_marks": 5,
        "thresholds": AttendanceThresholds(85, 75, 65),
    }
    values.update(overrides)
    return values


def test_defaults_are_valid():
    assert validate_cie_rules(**valid()) is None


def test_equal_thresholds_are_allowed():
    validate_cie_rules(**valid(thresholds=AttendanceThresholds(75, 75, 75)))


def test_thresholds_must_descend():
    with pytest.raises(InvalidConfiguration) as exc:
        validate_cie_rules(**valid(thresholds=AttendanceThresholds(75, 85, 65)))
    assert "descending" in str(exc.value)


def test_consider_cannot_exceed_count():
    with pytest.raises(InvalidConfiguration) as exc:
        validate_cie_rules(**valid(slip_tests_count=2, slip_tests_consider=3))
    assert "slipTestsConsider (3) cannot exceed slipTestsCount (2)" in exc.value.errors


def test_all_errors_are_reported_together():
    with pytest.raises(InvalidConfiguration) as exc:
        validate_cie_rules(**valid(
            max_cie_marks=0,
            slip_tests_consider=0,
            thresholds=AttendanceThresholds(120, 75, 65)
        ))
    assert len(exc.value.errors) == 3


def test_invalid_configuration_is_a_value_error():
    assert issubclass(InvalidConfiguration, ValueError)
