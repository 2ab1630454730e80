"""
Final standing from a computed average and attendance rate.

Policy: Aprovado when both the grade and attendance thresholds are met.
Below the approval grade, a rule may define a Recuperação band through
`recovery_min_grade` (requires `allow_recovery` and passing attendance);
rules without it classify binary Aprovado / Reprovado.
"""
import logging
from typing import Optional

from app.models.evaluation_rule import CalculationType
from app.schemas.evaluation import EvaluationRuleSchema, Standing, StandingStatus

logger = logging.getLogger(__name__)

MSG_RULE_NOT_FOUND = "Regra de avaliação não encontrada"
MSG_DESCRIPTIVE = "Avaliação descritiva (sem nota numérica)"
MSG_PENDING = "Pendente: nenhuma nota lançada"
MSG_APPROVED = "Aprovado"


def _grade_gap(average: float, rule: EvaluationRuleSchema) -> str:
    return f"nota ({average:.2f} < {rule.min_approval_grade:.2f})"


def _attendance_gap(rate: float, rule: EvaluationRuleSchema) -> str:
    return f"frequência ({rate:.2f}% < {rule.min_attendance_percent:.2f}%)"


def classify(
    average: Optional[float],
    attendance_rate: float,
    rule: Optional[EvaluationRuleSchema],
) -> Standing:
    """Classify one student. Never raises for missing rule or missing grades."""
    if rule is None or rule.deleted_at is not None:
        return Standing(
            approved=False,
            grade_approved=False,
            attendance_approved=False,
            average=average,
            attendance_rate=attendance_rate,
            status=StandingStatus.REGRA_NAO_ENCONTRADA,
            message=MSG_RULE_NOT_FOUND,
        )

    attendance_approved = attendance_rate >= rule.min_attendance_percent

    if rule.calculation_type == CalculationType.DESCRITIVA:
        return Standing(
            approved=False,
            grade_approved=False,
            attendance_approved=attendance_approved,
            average=None,
            attendance_rate=attendance_rate,
            status=StandingStatus.DESCRITIVA,
            message=MSG_DESCRIPTIVE,
        )

    if average is None:
        return Standing(
            approved=False,
            grade_approved=False,
            attendance_approved=attendance_approved,
            average=None,
            attendance_rate=attendance_rate,
            status=StandingStatus.PENDENTE,
            message=MSG_PENDING,
        )

    grade_approved = average >= rule.min_approval_grade
    approved = grade_approved and attendance_approved

    if approved:
        status = StandingStatus.APROVADO
        message = MSG_APPROVED
    elif not grade_approved and not attendance_approved:
        status = StandingStatus.REPROVADO
        message = f"Reprovado por {_grade_gap(average, rule)} e {_attendance_gap(attendance_rate, rule)}"
    elif not attendance_approved:
        status = StandingStatus.REPROVADO
        message = f"Reprovado por {_attendance_gap(attendance_rate, rule)}"
    elif rule.has_recovery_band and average >= rule.recovery_min_grade:
        status = StandingStatus.RECUPERACAO
        message = f"Em recuperação por {_grade_gap(average, rule)}"
    else:
        status = StandingStatus.REPROVADO
        message = f"Reprovado por {_grade_gap(average, rule)}"

    logger.debug("Classified average=%s rate=%s as %s", average, attendance_rate, status.value)

    return Standing(
        approved=approved,
        grade_approved=grade_approved,
        attendance_approved=attendance_approved,
        average=average,
        attendance_rate=attendance_rate,
        status=status,
        message=message,
    )
