from extensions import db

class Student(db.Model):
    __tablename__ = "students"

    student_id = db.Column(db.Integer, primary_key=True)
    register_no = db.Column(db.String(20), unique=True, nullable=False)
    name = db.Column(db.String(100), nullable=False)

    department_id = db.Column(
        db.Integer,
        db.ForeignKey("departments.department_id"),
        nullable=False
    )

    section_id = db.Column(
        db.Integer,
        db.ForeignKey("sections.section_id"),
        nullable=False
    )

    # Inactive students drop out of attendance rolls and reports
    is_active = db.Column(db.Boolean, default=True)

    attendance_records = db.relationship("Attendance", backref="student", lazy=True)
    assessments = db.relationship("StudentAssessment", backref="student", lazy=True)

    def to_dict(self):
        return {
            "studentId": self.student_id,
            "registerNo": self.register_no,
            "name": self.name,
            "sectionId": self.section_id,
        }

    def __repr__(self):
        return f"<Student {self.register_no}>"
