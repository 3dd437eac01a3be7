"""create cie tables

Revision ID: 3f9a1c2d7b10
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3f9a1c2d7b10"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "departments",
        sa.Column("department_id", sa.Integer(), primary_key=True),
        sa.Column("department_code", sa.String(length=10), nullable=False, unique=True),
        sa.Column("department_name", sa.String(length=100), nullable=False),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
    )
    op.create_table(
        "roles",
        sa.Column("role_id", sa.Integer(), primary_key=True),
        sa.Column("role_name", sa.String(length=20), nullable=False, unique=True),
    )
    op.create_table(
        "batches",
        sa.Column("batch_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("department_id", sa.Integer(), nullable=False),
        sa.Column("batch_name", sa.String(length=20), nullable=False),
        sa.Column("start_year", sa.Integer(), nullable=False),
        sa.Column("end_year", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["department_id"], ["departments.department_id"]),
        sa.UniqueConstraint("batch_name", "department_id", name="unique_batch_department"),
    )
    op.create_table(
        "sections",
        sa.Column("section_id", sa.Integer(), primary_key=True),
        sa.Column("department_id", sa.Integer(), nullable=False),
        sa.Column("batch_id", sa.Integer(), nullable=False),
        sa.Column("section_name", sa.String(length=20), nullable=False),
        sa.Column("year", sa.Integer(), nullable=True),
        sa.Column("semester", sa.Integer(), nullable=True),
        sa.Column("period_computed_on", sa.Date(), nullable=True),
        sa.ForeignKeyConstraint(["department_id"], ["departments.department_id"]),
        sa.ForeignKeyConstraint(["batch_id"], ["batches.batch_id"]),
        sa.UniqueConstraint("section_name", "department_id", "batch_id", name="unique_section_batch"),
    )
    op.create_table(
        "students",
        sa.Column("student_id", sa.Integer(), primary_key=True),
        sa.Column("register_no", sa.String(length=20), nullable=False, unique=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("department_id", sa.Integer(), nullable=False),
        sa.Column("section_id", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=True, server_default=sa.text("1")),
        sa.ForeignKeyConstraint(["department_id"], ["departments.department_id"]),
        sa.ForeignKeyConstraint(["section_id"], ["sections.section_id"]),
    )
    op.create_table(
        "users",
        sa.Column("user_id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(length=50), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role_id", sa.Integer(), nullable=False),
        sa.Column("department_id", sa.Integer(), nullable=True),
        sa.Column("student_id", sa.Integer(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=True, server_default=sa.text("1")),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
        sa.ForeignKeyConstraint(["role_id"], ["roles.role_id"]),
        sa.ForeignKeyConstraint(["department_id"], ["departments.department_id"]),
        sa.ForeignKeyConstraint(["student_id"], ["students.student_id"]),
    )
    op.create_table(
        "subjects",
        sa.Column("subject_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("subject_code", sa.String(length=20), nullable=False, unique=True),
        sa.Column("subject_name", sa.String(length=100), nullable=False),
        sa.Column("semester", sa.Integer(), nullable=False),
        sa.Column("credits", sa.Integer(), nullable=True),
        sa.Column("department_id", sa.Integer(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["department_id"], ["departments.department_id"]),
    )
    op.create_table(
        "teaching_assignments",
        sa.Column("teaching_assignment_id", sa.Integer(), primary_key=True),
        sa.Column("faculty_id", sa.Integer(), nullable=False),
        sa.Column("subject_id", sa.Integer(), nullable=False),
        sa.Column("section_id", sa.Integer(), nullable=False),
        sa.Column("department_id", sa.Integer(), nullable=False),
        sa.Column("assigned_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
        sa.ForeignKeyConstraint(["faculty_id"], ["users.user_id"]),
        sa.ForeignKeyConstraint(["subject_id"], ["subjects.subject_id"]),
        sa.ForeignKeyConstraint(["section_id"], ["sections.section_id"]),
        sa.ForeignKeyConstraint(["department_id"], ["departments.department_id"]),
    )
    op.create_table(
        "assessment_components",
        sa.Column("component_id", sa.Integer(), primary_key=True),
        sa.Column("department_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column(
            "category",
            sa.Enum("SLIP", "ASSIGNMENT", "MIDSEM", "ATTENDANCE", name="assessment_category"),
            nullable=False
        ),
        sa.Column("max_marks", sa.Float(), nullable=False),
        sa.Column("sequence", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
        sa.ForeignKeyConstraint(["department_id"], ["departments.department_id"]),
    )
    op.create_table(
        "student_assessments",
        sa.Column("assessment_id", sa.Integer(), primary_key=True),
        sa.Column("student_id", sa.Integer(), nullable=False),
        sa.Column("teaching_assignment_id", sa.Integer(), nullable=False),
        sa.Column("component_id", sa.Integer(), nullable=False),
        sa.Column("marks", sa.Float(), nullable=False),
        sa.Column("entered_by", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
        sa.ForeignKeyConstraint(["student_id"], ["students.student_id"]),
        sa.ForeignKeyConstraint(["teaching_assignment_id"], ["teaching_assignments.teaching_assignment_id"]),
        sa.ForeignKeyConstraint(["component_id"], ["assessment_components.component_id"]),
        sa.ForeignKeyConstraint(["entered_by"], ["users.user_id"]),
        sa.UniqueConstraint(
            "student_id", "teaching_assignment_id", "component_id",
            name="unique_student_assignment_component"
        ),
    )
    op.create_table(
        "cie_configurations",
        sa.Column("cie_config_id", sa.Integer(), primary_key=True),
        sa.Column("department_id", sa.Integer(), nullable=False),
        sa.Column("label", sa.String(length=100), nullable=True),
        sa.Column("max_cie_marks", sa.Integer(), nullable=False),
        sa.Column("slip_tests_count", sa.Integer(), nullable=False),
        sa.Column("slip_tests_consider", sa.Integer(), nullable=False),
        sa.Column("attendance_max_marks", sa.Integer(), nullable=False),
        sa.Column("threshold_marks5", sa.Float(), nullable=False),
        sa.Column("threshold_marks4", sa.Float(), nullable=False),
        sa.Column("threshold_marks3", sa.Float(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=True, server_default=sa.text("1")),
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True),
        sa.ForeignKeyConstraint(["department_id"], ["departments.department_id"]),
    )
    op.create_index(
        "ix_cie_config_department_active", "cie_configurations", ["department_id", "is_active"]
    )
    op.create_table(
        "student_cie",
        sa.Column("student_cie_id", sa.Integer(), primary_key=True),
        sa.Column("student_id", sa.Integer(), nullable=False),
        sa.Column("teaching_assignment_id", sa.Integer(), nullable=False),
        sa.Column("cie_score", sa.Float(), nullable=False),
        sa.Column("last_calculated_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["student_id"], ["students.student_id"]),
        sa.ForeignKeyConstraint(["teaching_assignment_id"], ["teaching_assignments.teaching_assignment_id"]),
        sa.UniqueConstraint("student_id", "teaching_assignment_id", name="unique_student_cie"),
    )
    op.create_table(
        "attendance",
        sa.Column("attendance_id", sa.Integer(), primary_key=True),
        sa.Column("student_id", sa.Integer(), nullable=False),
        sa.Column("teaching_assignment_id", sa.Integer(), nullable=False),
        sa.Column("marked_by", sa.Integer(), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("status", sa.Enum("PRESENT", "ABSENT", name="attendance_status"), nullable=False),
        sa.ForeignKeyConstraint(["student_id"], ["students.student_id"]),
        sa.ForeignKeyConstraint(["teaching_assignment_id"], ["teaching_assignments.teaching_assignment_id"]),
        sa.ForeignKeyConstraint(["marked_by"], ["users.user_id"]),
        sa.UniqueConstraint("student_id", "teaching_assignment_id", "date", name="unique_student_assignment_date"),
    )


def downgrade():
    op.drop_table("attendance")
    op.drop_table("student_cie")
    op.drop_index("ix_cie_config_department_active", table_name="cie_configurations")
    op.drop_table("cie_configurations")
    op.drop_table("student_assessments")
    op.drop_table("assessment_components")
    op.drop_table("teaching_assignments")
    op.drop_table("subjects")
    op.drop_table("users")
    op.drop_table("students")
    op.drop_table("sections")
    op.drop_table("batches")
    op.drop_table("roles")
    op.drop_table("departments")
