from extensions import db

class StudentAssessment(db.Model):
    __tablename__ = "student_assessments"

    assessment_id = db.Column(db.Integer, primary_key=True)

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

    component_id = db.Column(
        db.Integer,
        db.ForeignKey("assessment_components.component_id"),
        nullable=False
    )

    marks = db.Column(db.Float, nullable=False)

    entered_by = db.Column(
        db.Integer,
        db.ForeignKey("users.user_id"),
        nullable=True
    )

    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime,
        server_default=db.func.now(),
        onupdate=db.func.now()
    )

    component = db.relationship("AssessmentComponent")

    __table_args__ = (
        db.UniqueConstraint(
            "student_id", "teaching_assignment_id", "component_id",
            name="unique_student_assignment_component"
        ),
    )

    def to_dict(self):
        return {
            "assessmentId": self.assessment_id,
            "studentId": self.student_id,
            "teachingAssignmentId": self.teaching_assignment_id,
            "componentId": self.component_id,
            "marks": self.marks,
        }

    def __repr__(self):
        return f"<StudentAssessment student={self.student_id} component={self.component_id}>"
