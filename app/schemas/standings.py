from pydantic import BaseModel, Field
from typing import Optional

from app.schemas.evaluation import (
    EvaluationRuleSchema,
    GradeEntry,
    AttendanceEntry,
    StudentRecords,
)


class EvaluateRequest(BaseModel):
    """Schema for evaluating one student's standing"""
    rule: Optional[EvaluationRuleSchema] = None
    grades: list[GradeEntry] = Field(default_factory=list)
    attendance: list[AttendanceEntry] = Field(default_factory=list)
    period_names: Optional[list[str]] = None


class ClassEvaluateRequest(BaseModel):
    """Schema for evaluating every student of a class"""
    rule: Optional[EvaluationRuleSchema] = None
    students: list[StudentRecords] = Field(..., min_length=1)
    period_names: Optional[list[str]] = None


class ClassifyRequest(BaseModel):
    """Schema for classifying precomputed aggregates"""
    average: Optional[float] = None
    attendance_rate: float = Field(..., ge=0, le=100)
    rule: Optional[EvaluationRuleSchema] = None


class AttendanceSummaryRequest(BaseModel):
    attendance: list[AttendanceEntry] = Field(default_factory=list)


class LowAttendanceRequest(BaseModel):
    students: list[StudentRecords] = Field(..., min_length=1)
    minimum_rate: Optional[float] = Field(None, ge=0, le=100)


class FormulaRequest(BaseModel):
    rule: EvaluationRuleSchema
    period_names: Optional[list[str]] = None


class FormulaResponse(BaseModel):
    formula: str


class DistributionRequest(BaseModel):
    """Schema for banding a set of final grades"""
    rule: EvaluationRuleSchema
    values: list[Optional[float]] = Field(default_factory=list)
