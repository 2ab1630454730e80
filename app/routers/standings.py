from fastapi import APIRouter

from app.schemas.evaluation import Standing, StudentReport, StudentRecords, GradeDistribution
from app.schemas.standings import EvaluateRequest, ClassEvaluateRequest, ClassifyRequest, DistributionRequest
from app.services.approval_classifier import classify
from app.services.grade_aggregator import grade_distribution
from app.services.standing import build_student_report, evaluate_class

router = APIRouter(prefix="/standings", tags=["standings"])


@router.post("/evaluate", response_model=StudentReport)
def evaluate_student(payload: EvaluateRequest):
    """
    Evaluate one student's standing.

    Averages, attendance rate and the final classification are computed from
    the records in the payload; nothing is read from or written to the database.
    """
    records = StudentRecords(grades=payload.grades, attendance=payload.attendance)
    return build_student_report(payload.rule, records, payload.period_names)


@router.post("/class", response_model=list[StudentReport])
def evaluate_class_standings(payload: ClassEvaluateRequest):
    """Evaluate every student of a class against the same rule."""
    return evaluate_class(payload.rule, payload.students, payload.period_names)


@router.post("/classify", response_model=Standing)
def classify_standing(payload: ClassifyRequest):
    """Classify precomputed average and attendance rate against a rule."""
    return classify(payload.average, payload.attendance_rate, payload.rule)


@router.post("/distribution", response_model=GradeDistribution)
def grade_bands(payload: DistributionRequest):
    """Count final grades per band (approved / recovery / failed) for a rule."""
    return grade_distribution(payload.values, payload.rule)
