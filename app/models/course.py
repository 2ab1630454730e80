import enum
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from .base import Base


class EducationLevel(str, enum.Enum):
    EDUCACAO_INFANTIL = "Educação Infantil"
    FUNDAMENTAL_I = "Ensino Fundamental I"
    FUNDAMENTAL_II = "Ensino Fundamental II"
    ENSINO_MEDIO = "Ensino Médio"
    EJA = "EJA"


class Course(Base):
    """Course (curso) a class belongs to; only education_level matters here"""
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    education_level = Column(String(100), nullable=True)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    grades = relationship("EducationGrade", back_populates="course")
    evaluation_rules = relationship("EvaluationRule", back_populates="course")


class EducationGrade(Base):
    """Grade/series (série) within a course"""
    __tablename__ = "education_grades"

    id = Column(Integer, primary_key=True, index=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=True, index=True)
    grade_name = Column(String(100), nullable=False)
    grade_order = Column(Integer, nullable=False, default=0)

    # Relationships
    course = relationship("Course", back_populates="grades")
    evaluation_rules = relationship("EvaluationRule", back_populates="education_grade")
