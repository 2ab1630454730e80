"""
Grade aggregation: per-subject values and the overall average.

Subject value depends on the rule's calculation type:
- Media_Simples: mean of the graded entries
- Media_Ponderada: period grades weighted by period_weights
- Soma_Notas: sum of the graded entries
- Descritiva: no numeric value

The overall average is always the mean of the subject values (mean of means),
so a subject with more evaluations does not weigh more than the others.
Ungraded data yields None, never 0.
"""
import logging
from collections import defaultdict
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, List, Dict, Iterable

from app.models.evaluation_rule import CalculationType
from app.schemas.evaluation import EvaluationRuleSchema, GradeEntry, PeriodWeights, GradeDistribution

logger = logging.getLogger(__name__)


def round_half_up(value: float, places: int = 2) -> float:
    """Round on the decimal representation (8.145 -> 8.15), not on the binary float."""
    exponent = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP))


def _mean(values: List[float]) -> Optional[float]:
    if not values:
        return None
    return sum(values) / len(values)


def _valid_entries(entries: Iterable[GradeEntry], rule: EvaluationRuleSchema) -> List[GradeEntry]:
    """Drop entries whose period index falls outside the rule's academic year."""
    valid = []
    for entry in entries:
        if 0 <= entry.period_index < rule.periods_per_year:
            valid.append(entry)
        else:
            logger.warning(
                "Ignoring grade for subject %s: period index %s outside [0, %s)",
                entry.subject_id, entry.period_index, rule.periods_per_year,
            )
    return valid


def weighted_average(grades: List[Optional[float]], period_weights: Optional[PeriodWeights]) -> Optional[float]:
    """
    Weighted mean of period-ordered grades.

    Ungraded periods contribute neither value nor weight. A period with no
    configured weight weighs 0. The configured divisor is used when positive,
    otherwise the sum of the weights actually used.
    """
    if not any(g is not None for g in grades):
        return None

    weights = period_weights.weights if period_weights else []
    divisor = period_weights.divisor if period_weights else 0

    weighted_sum = 0.0
    used_weights = 0.0
    for index, grade in enumerate(grades):
        if grade is None:
            continue
        if index >= len(weights):
            logger.warning("No weight configured for period %s; grade %s excluded", index, grade)
            continue
        weighted_sum += grade * weights[index]
        used_weights += weights[index]

    if used_weights == 0:
        return None

    actual_divisor = divisor if divisor > 0 else used_weights
    if actual_divisor == 0:
        return None

    return round_half_up(weighted_sum / actual_divisor)


def _period_grades(entries: List[GradeEntry], periods_per_year: int) -> List[Optional[float]]:
    """Collapse a subject's entries into one grade per period (mean when several)."""
    by_period: Dict[int, List[float]] = defaultdict(list)
    for entry in entries:
        if entry.value is not None:
            by_period[entry.period_index].append(entry.value)
    return [_mean(by_period[i]) if by_period.get(i) else None for i in range(periods_per_year)]


def subject_average(entries: List[GradeEntry], rule: EvaluationRuleSchema) -> Optional[float]:
    """Aggregate one subject's entries according to the rule's calculation type."""
    if rule.calculation_type == CalculationType.DESCRITIVA:
        return None

    entries = _valid_entries(entries, rule)

    if rule.calculation_type == CalculationType.MEDIA_PONDERADA:
        if rule.period_weights is None:
            logger.warning("Rule '%s' uses Media_Ponderada without period weights", rule.name)
        grades = _period_grades(entries, rule.periods_per_year)
        return weighted_average(grades, rule.period_weights)

    values = [e.value for e in entries if e.value is not None]
    if not values:
        return None

    if rule.calculation_type == CalculationType.SOMA_NOTAS:
        return round_half_up(sum(values))

    return round_half_up(_mean(values))


def subject_averages(entries: List[GradeEntry], rule: EvaluationRuleSchema) -> Dict[int, Optional[float]]:
    """Subject value for every subject that appears in the entries."""
    by_subject: Dict[int, List[GradeEntry]] = defaultdict(list)
    for entry in entries:
        by_subject[entry.subject_id].append(entry)
    return {
        subject_id: subject_average(subject_entries, rule)
        for subject_id, subject_entries in by_subject.items()
    }


def overall_average(entries: List[GradeEntry], rule: EvaluationRuleSchema) -> Optional[float]:
    """Mean of the per-subject values; subjects without a value are left out."""
    if rule.calculation_type == CalculationType.DESCRITIVA:
        return None

    values = [v for v in subject_averages(entries, rule).values() if v is not None]
    mean = _mean(values)
    return round_half_up(mean) if mean is not None else None


def grade_distribution(values: List[Optional[float]], rule: EvaluationRuleSchema) -> GradeDistribution:
    """Count final grades per band: approved, recovery (when the rule has a band) and failed."""
    graded = [v for v in values if v is not None]
    if not graded:
        return GradeDistribution()

    approved = sum(1 for v in graded if v >= rule.min_approval_grade)
    if rule.has_recovery_band:
        recovery = sum(1 for v in graded if rule.recovery_min_grade <= v < rule.min_approval_grade)
    else:
        recovery = 0

    return GradeDistribution(
        total=len(graded),
        average=round_half_up(_mean(graded)),
        highest=max(graded),
        lowest=min(graded),
        approved=approved,
        recovery=recovery,
        failed=len(graded) - approved - recovery,
    )
