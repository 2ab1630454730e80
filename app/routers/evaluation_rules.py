from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import Optional

from app.database import get_db
from app.models.evaluation_rule import CalculationType
from app.schemas.evaluation import EvaluationRuleSchema, PeriodWeights
from app.schemas.standings import FormulaRequest, FormulaResponse
from app.services.formula import explain_formula
from app.services.rule_resolver import resolve_rule, default_period_weights

router = APIRouter(prefix="/evaluation-rules", tags=["evaluation-rules"])


@router.get("/resolve", response_model=EvaluationRuleSchema)
def get_rule_for_class(
    course_id: int,
    grade_id: Optional[int] = None,
    db: Session = Depends(get_db),
):
    """
    Resolve the evaluation rule for a class.

    Args:
        course_id: Course of the class
        grade_id: Grade/series of the class, if any
    """
    rule = resolve_rule(db, course_id, grade_id)

    if not rule:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Regra de avaliação não encontrada"
        )

    return EvaluationRuleSchema.model_validate(rule)


@router.post("/formula", response_model=FormulaResponse)
def get_formula(payload: FormulaRequest):
    """Render the rule's aggregation formula as text."""
    return FormulaResponse(formula=explain_formula(payload.rule, payload.period_names))


@router.get("/default-weights", response_model=PeriodWeights)
def get_default_weights(
    periods_per_year: int = 4,
    calculation_type: CalculationType = CalculationType.MEDIA_PONDERADA,
):
    """Suggested period weights for a new rule."""
    if periods_per_year < 1:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="periods_per_year must be at least 1"
        )
    return default_period_weights(periods_per_year, calculation_type)
