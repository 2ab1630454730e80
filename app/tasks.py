"""
Celery tasks for batch standing evaluation

Tasks:
- evaluate_student_standing: Evaluate one student's records against a rule

Class-wide runs fan out one task per student (dispatch_class_evaluation);
students are independent so no ordering or locking is needed.
"""
import logging
from typing import Optional, List, Dict, Any

from celery import group

from app.celery_app import celery_app
from app.schemas.evaluation import EvaluationRuleSchema, StudentRecords
from app.services.standing import build_student_report

logger = logging.getLogger(__name__)


@celery_app.task(name="app.tasks.health_check")
def health_check():
    """Simple health check task for testing Celery setup"""
    return {"status": "ok", "message": "Celery is working"}


@celery_app.task(name="app.tasks.evaluate_student_standing")
def evaluate_student_standing(
    rule_data: Optional[Dict[str, Any]],
    student_data: Dict[str, Any],
    period_names: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """Evaluate one student. Payloads are JSON dicts (task_serializer=json)."""
    rule = EvaluationRuleSchema.model_validate(rule_data) if rule_data else None
    records = StudentRecords.model_validate(student_data)
    report = build_student_report(rule, records, period_names)
    return report.model_dump(mode="json")


def dispatch_class_evaluation(
    rule: Optional[EvaluationRuleSchema],
    students: List[StudentRecords],
    period_names: Optional[List[str]] = None,
):
    """Fan out one evaluate_student_standing task per student; returns the GroupResult."""
    rule_data = rule.model_dump(mode="json") if rule else None
    job = group(
        evaluate_student_standing.s(rule_data, s.model_dump(mode="json"), period_names)
        for s in students
    )
    logger.info("Dispatching standing evaluation for %d students", len(students))
    return job.apply_async()
