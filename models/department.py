from extensions import db

class Department(db.Model):
    __tablename__ = "departments"

    department_id = db.Column(db.Integer, primary_key=True)
    department_code = db.Column(db.String(10), unique=True, nullable=False)
    department_name = db.Column(db.String(100), nullable=False)
    created_at = db.Column(db.DateTime, server_default=db.func.now())

    users = db.relationship("User", backref="department", lazy=True)
    students = db.relationship("Student", backref="department", lazy=True)
    batches = db.relationship("Batch", backref="department", lazy=True)
    sections = db.relationship("Section", backref="department", lazy=True)

    def __repr__(self):
        return f"<Department {self.department_code}>"
