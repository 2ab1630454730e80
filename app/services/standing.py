"""Evaluate one student (or a whole class) end to end against a rule."""
import logging
from typing import List, Optional

from app.schemas.evaluation import (
    EvaluationRuleSchema,
    GradeEntry,
    AttendanceEntry,
    Standing,
    StudentRecords,
    StudentReport,
)
from app.services.grade_aggregator import subject_averages, overall_average
from app.services.attendance_aggregator import attendance_rate
from app.services.approval_classifier import classify
from app.services.formula import explain_formula

logger = logging.getLogger(__name__)


def evaluate_standing(
    rule: Optional[EvaluationRuleSchema],
    grades: List[GradeEntry],
    attendance: List[AttendanceEntry],
) -> Standing:
    """Aggregate grades and attendance, then classify."""
    average = overall_average(grades, rule) if rule else None
    return classify(average, attendance_rate(attendance).rate, rule)


def build_student_report(
    rule: Optional[EvaluationRuleSchema],
    records: StudentRecords,
    period_names: Optional[List[str]] = None,
) -> StudentReport:
    """Standing plus the intermediate values a report card needs."""
    attendance = attendance_rate(records.attendance)

    if rule is None or rule.deleted_at is not None:
        return StudentReport(
            student_id=records.student_id,
            subject_averages={},
            overall_average=None,
            attendance=attendance,
            standing=classify(None, attendance.rate, rule),
            formula="",
        )

    average = overall_average(records.grades, rule)
    return StudentReport(
        student_id=records.student_id,
        subject_averages=subject_averages(records.grades, rule),
        overall_average=average,
        attendance=attendance,
        standing=classify(average, attendance.rate, rule),
        formula=explain_formula(rule, period_names),
    )


def evaluate_class(
    rule: Optional[EvaluationRuleSchema],
    students: List[StudentRecords],
    period_names: Optional[List[str]] = None,
) -> List[StudentReport]:
    """Independent per-student evaluation; order of the input is preserved."""
    reports = [build_student_report(rule, s, period_names) for s in students]
    logger.info(
        "Evaluated %d students with rule '%s'",
        len(reports), rule.name if rule else None,
    )
    return reports
