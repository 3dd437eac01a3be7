from extensions import db

class Batch(db.Model):
    __tablename__ = "batches"

    batch_id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    department_id = db.Column(db.Integer, db.ForeignKey("departments.department_id"), nullable=False)
    batch_name = db.Column(db.String(20), nullable=False)
    start_year = db.Column(db.Integer, nullable=False)
    end_year = db.Column(db.Integer, nullable=False)

    sections = db.relationship("Section", backref="batch", lazy=True)

    __table_args__ = (
        db.UniqueConstraint("batch_name", "department_id", name="unique_batch_department"),
    )

    def __repr__(self):
        return f"<Batch {self.batch_name} {self.start_year}-{self.end_year}>"
