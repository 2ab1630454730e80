import enum
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, Float, JSON
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from .base import Base


class CalculationType(str, enum.Enum):
    """How period grades are aggregated into a subject value"""
    MEDIA_SIMPLES = "Media_Simples"
    MEDIA_PONDERADA = "Media_Ponderada"
    SOMA_NOTAS = "Soma_Notas"
    DESCRITIVA = "Descritiva"


class AcademicPeriodType(str, enum.Enum):
    BIMESTRE = "Bimestre"
    TRIMESTRE = "Trimestre"
    SEMESTRE = "Semestre"


class EvaluationRule(Base):
    """Thresholds and aggregation mode for a course and/or grade scope"""
    __tablename__ = "evaluation_rules"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)

    # Scope: null means broader
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=True, index=True)
    education_grade_id = Column(Integer, ForeignKey("education_grades.id"), nullable=True, index=True)

    # Thresholds
    min_approval_grade = Column(Float, nullable=False, default=7.0)
    min_attendance_percent = Column(Float, nullable=False, default=75.0)
    min_evaluations_per_period = Column(Integer, nullable=False, default=2)
    max_single_evaluation_weight = Column(Float, nullable=True, default=40.0)

    # Cadence and aggregation
    academic_period_type = Column(String(20), nullable=False, default=AcademicPeriodType.BIMESTRE.value)
    periods_per_year = Column(Integer, nullable=False, default=4)
    calculation_type = Column(String(30), nullable=False, default=CalculationType.MEDIA_SIMPLES.value)
    period_weights = Column(JSON, nullable=True)  # {"weights": [...], "divisor": n, "formula": "..."}
    formula_description = Column(Text, nullable=True)

    # Recovery
    allow_recovery = Column(Boolean, nullable=False, default=True)
    recovery_replaces_lowest = Column(Boolean, nullable=False, default=True)
    recovery_min_grade = Column(Float, nullable=True)  # null = no Recuperação band

    # Audit
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)
    deleted_at = Column(DateTime(timezone=True), nullable=True)  # soft delete

    # Relationships
    course = relationship("Course", back_populates="evaluation_rules")
    education_grade = relationship("EducationGrade", back_populates="evaluation_rules")
