from datetime import datetime

from extensions import db

class StudentCIE(db.Model):
    __tablename__ = "student_cie"

    student_cie_id = db.Column(db.Integer, primary_key=True)

    student_id = db.Column(
        db.Integer,
        db.ForeignKey("students.student_id"),
        nullable=False
    )

    teaching_assignment_id = db.Column(
        db.Integer,
        db.ForeignKey("teaching_assignments.teaching_assignment_id"),
        nullable=False
    )

    cie_score = db.Column(db.Float, nullable=False)
    last_calculated_at = db.Column(db.DateTime, default=datetime.utcnow)

    __table_args__ = (
        db.UniqueConstraint("student_id", "teaching_assignment_id", name="unique_student_cie"),
    )

    def __repr__(self):
        return f"<StudentCIE student={self.student_id} score={self.cie_score}>"
