from .department import Department
from .role import Role
from .user import User
from .batch import Batch
from .section import Section
from .student import Student
from .subjects import Subject
from .teaching_assignment import TeachingAssignment
from .assessment_component import AssessmentComponent
from .student_assessment import StudentAssessment
from .cie_config import CIEConfiguration
from .student_cie import StudentCIE
from .attendance import Attendance
__all__ = [
    "Department", "Role", "User", "Batch", "Section", "Student", "Subject",
    "TeachingAssignment", "AssessmentComponent", "StudentAssessment",
    "CIEConfiguration", "StudentCIE", "Attendance"
]
