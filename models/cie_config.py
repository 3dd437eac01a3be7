from extensions import db
from sqlalchemy import event
from services.cie_rules import AttendanceThresholds, validate_cie_rules


class CIEConfiguration(db.Model):
    __tablename__ = "cie_configurations"

    cie_config_id = db.Column(db.Integer, primary_key=True)

    department_id = db.Column(
        db.Integer,
        db.ForeignKey("departments.department_id"),
        nullable=False
    )

    label = db.Column(db.String(100), nullable=True)
    max_cie_marks = db.Column(db.Integer, nullable=False, default=50)
    slip_tests_count = db.Column(db.Integer, nullable=False, default=3)
    slip_tests_consider = db.Column(db.Integer, nullable=False, default=2)
    attendance_max_marks = db.Column(db.Integer, nullable=False, default=5)
    threshold_marks5 = db.Column(db.Float, nullable=False, default=85)
    threshold_marks4 = db.Column(db.Float, nullable=False, default=75)
    threshold_marks3 = db.Column(db.Float, nullable=False, default=65)
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, server_default=db.func.now())

    __table_args__ = (
        db.Index("ix_cie_config_department_active", "department_id", "is_active"),
    )

    @property
    def attendance_thresholds(self):
        return AttendanceThresholds(
            marks5=self.threshold_marks5,
            marks4=self.threshold_marks4,
            marks3=self.threshold_marks3
        )

    def validate(self):
        validate_cie_rules(
            max_cie_marks=self.max_cie_marks,
            slip_tests_count=self.slip_tests_count,
            slip_tests_consider=self.slip_tests_consider,
            attendance_max_marks=self.attendance_max_marks,
            thresholds=self.attendance_thresholds
        )

    def to_dict(self):
        return {
            "cieConfigId": self.cie_config_id,
            "departmentId": self.department_id,
            "label": self.label,
            "maxCIEMarks": self.max_cie_marks,
            "slipTestsCount": self.slip_tests_count,
            "slipTestsConsider": self.slip_tests_consider,
            "attendanceMaxMarks": self.attendance_max_marks,
            "attendanceThresholds": self.attendance_thresholds._asdict(),
            "isActive": self.is_active,
        }

    def __repr__(self):
        return f"<CIEConfiguration department={self.department_id} active={self.is_active}>"


@event.listens_for(CIEConfiguration, "before_insert")
@event.listens_for(CIEConfiguration, "before_update")
def _validate_before_write(mapper, connection, target):
    target.validate()
