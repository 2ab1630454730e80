"""Value objects consumed and produced by the standing engine."""
import enum
from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional

from app.models.evaluation_rule import CalculationType, AcademicPeriodType


class PeriodWeights(BaseModel):
    """Weights per period, in period order, for Media_Ponderada"""
    weights: list[float] = Field(default_factory=list)
    divisor: float = 0.0
    formula: Optional[str] = None


class EvaluationRuleSchema(BaseModel):
    """Evaluation rule as handed to the engine (detached from the ORM row)"""
    id: Optional[int] = None
    name: str = ""
    description: Optional[str] = None
    course_id: Optional[int] = None
    education_grade_id: Optional[int] = None
    min_approval_grade: float = 7.0
    min_attendance_percent: float = 75.0
    min_evaluations_per_period: int = 2
    max_single_evaluation_weight: Optional[float] = 40.0
    academic_period_type: AcademicPeriodType = AcademicPeriodType.BIMESTRE
    periods_per_year: int = Field(4, ge=1)
    calculation_type: CalculationType = CalculationType.MEDIA_SIMPLES
    period_weights: Optional[PeriodWeights] = None
    formula_description: Optional[str] = None
    allow_recovery: bool = True
    recovery_replaces_lowest: bool = True
    recovery_min_grade: Optional[float] = None
    deleted_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @property
    def has_recovery_band(self) -> bool:
        return self.allow_recovery and self.recovery_min_grade is not None


class GradeEntry(BaseModel):
    """One graded (or not yet graded) evaluation of a subject in a period"""
    subject_id: int
    period_index: int
    value: Optional[float] = None


class AttendanceStatus(str, enum.Enum):
    PRESENTE = "Presente"
    FALTA_JUSTIFICADA = "Falta Justificada"
    FALTA_INJUSTIFICADA = "Falta Injustificada"
    ATESTADO = "Atestado"


class AttendanceEntry(BaseModel):
    status: AttendanceStatus


class AttendanceSummary(BaseModel):
    total_classes: int = 0
    valid_presences: int = 0
    rate: float = 0.0
    present: int = 0
    justified: int = 0
    with_certificate: int = 0
    absent: int = 0

    class Config:
        frozen = True


class StandingStatus(str, enum.Enum):
    APROVADO = "Aprovado"
    REPROVADO = "Reprovado"
    RECUPERACAO = "Recuperação"
    PENDENTE = "Pendente"
    DESCRITIVA = "Descritiva"
    REGRA_NAO_ENCONTRADA = "Regra não encontrada"


class Standing(BaseModel):
    """Classification of one student in one evaluation window"""
    approved: bool
    grade_approved: bool
    attendance_approved: bool
    average: Optional[float] = None
    attendance_rate: float
    status: StandingStatus
    message: str

    class Config:
        frozen = True


class GradeDistribution(BaseModel):
    """Summary of a set of final grades banded by a rule"""
    total: int = 0
    average: Optional[float] = None
    highest: Optional[float] = None
    lowest: Optional[float] = None
    approved: int = 0
    recovery: int = 0
    failed: int = 0


class StudentRecords(BaseModel):
    """Already-fetched raw records for one student"""
    student_id: Optional[int] = None
    grades: list[GradeEntry] = Field(default_factory=list)
    attendance: list[AttendanceEntry] = Field(default_factory=list)


class StudentReport(BaseModel):
    student_id: Optional[int] = None
    subject_averages: dict[int, Optional[float]]
    overall_average: Optional[float] = None
    attendance: AttendanceSummary
    standing: Standing
    formula: str
