from extensions import db
from flask_login import UserMixin


class User(UserMixin, db.Model):
    __tablename__ = "users"

    user_id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(50), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)

    role_id = db.Column(
        db.Integer,
        db.ForeignKey("roles.role_id"),
        nullable=False
    )

    department_id = db.Column(
        db.Integer,
        db.ForeignKey("departments.department_id"),
        nullable=True
    )

    # Set only for STUDENT accounts
    student_id = db.Column(
        db.Integer,
        db.ForeignKey("students.student_id"),
        nullable=True
    )

    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, server_default=db.func.now())

    # Flask-Login looks for "id", our column is "user_id".
    def get_id(self):
        return str(self.user_id)

    def __repr__(self):
        return f"<User {self.username}>"
