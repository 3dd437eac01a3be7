from extensions import db

class Section(db.Model):
    __tablename__ = "sections"

    section_id = db.Column(db.Integer, primary_key=True)
    department_id = db.Column(
        db.Integer,
        db.ForeignKey("departments.department_id"),
        nullable=False
    )
    batch_id = db.Column(
        db.Integer,
        db.ForeignKey("batches.batch_id"),
        nullable=False
    )
    section_name = db.Column(db.String(20), nullable=False)

    # Cached academic period, refreshed by services.section_service
    year = db.Column(db.Integer, nullable=True)
    semester = db.Column(db.Integer, nullable=True)
    period_computed_on = db.Column(db.Date, nullable=True)

    students = db.relationship("Student", backref="section", lazy=True)

    __table_args__ = (
        db.UniqueConstraint("section_name", "department_id", "batch_id", name="unique_section_batch"),
    )

    def __repr__(self):
        return f"<Section {self.section_name}>"
