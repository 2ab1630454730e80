# Database models
from .base import Base
from .course import Course, EducationGrade, EducationLevel
from .evaluation_rule import EvaluationRule, CalculationType, AcademicPeriodType

__all__ = [
    "Base",
    "Course",
    "EducationGrade",
    "EducationLevel",
    "EvaluationRule",
    "CalculationType",
    "AcademicPeriodType",
]
