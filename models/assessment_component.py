from extensions import db

CATEGORIES = ("SLIP", "ASSIGNMENT", "MIDSEM", "ATTENDANCE")


class AssessmentComponent(db.Model):
    __tablename__ = "assessment_components"

    component_id = db.Column(db.Integer, primary_key=True)

    department_id = db.Column(
        db.Integer,
        db.ForeignKey("departments.department_id"),
        nullable=False
    )

    name = db.Column(db.String(100), nullable=False)
    category = db.Column(db.Enum(*CATEGORIES, name="assessment_category"), nullable=False)
    max_marks = db.Column(db.Float, nullable=False)
    sequence = db.Column(db.Integer, nullable=True)
    created_at = db.Column(db.DateTime, server_default=db.func.now())

    def to_dict(self):
        return {
            "componentId": self.component_id,
            "name": self.name,
            "category": self.category,
            "maxMarks": self.max_marks,
            "sequence": self.sequence,
        }

    def __repr__(self):
        return f"<AssessmentComponent {self.category} {self.name}>"
