from extensions import db

class TeachingAssignment(db.Model):
    __tablename__ = "teaching_assignments"

    teaching_assignment_id = db.Column(db.Integer, primary_key=True)

    faculty_id = db.Column(
        db.Integer,
        db.ForeignKey("users.user_id"),
        nullable=False
    )

    subject_id = db.Column(
        db.Integer,
        db.ForeignKey("subjects.subject_id"),
        nullable=False
    )

    section_id = db.Column(
        db.Integer,
        db.ForeignKey("sections.section_id"),
        nullable=False
    )

    department_id = db.Column(
        db.Integer,
        db.ForeignKey("departments.department_id"),
        nullable=False
    )

    assigned_at = db.Column(db.DateTime, server_default=db.func.now())

    faculty = db.relationship("User", backref="teaching_assignments")
    subject = db.relationship("Subject")
    section = db.relationship("Section")

    def __repr__(self):
        return f"<TeachingAssignment faculty={self.faculty_id} subject={self.subject_id}>"
