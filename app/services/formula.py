"""Textual rendering of a rule's aggregation formula (display/audit only)."""
from typing import Optional, List

from app.models.evaluation_rule import CalculationType, AcademicPeriodType
from app.schemas.evaluation import EvaluationRuleSchema

DEFAULT_PERIOD_NAMES = {
    AcademicPeriodType.BIMESTRE: ["1ª Av.", "2ª Av.", "3ª Av.", "4ª Av."],
    AcademicPeriodType.TRIMESTRE: ["1º Tri.", "2º Tri.", "3º Tri."],
    AcademicPeriodType.SEMESTRE: ["1º Sem.", "2º Sem."],
}


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def explain_formula(rule: EvaluationRuleSchema, period_names: Optional[List[str]] = None) -> str:
    defaults = DEFAULT_PERIOD_NAMES.get(rule.academic_period_type, DEFAULT_PERIOD_NAMES[AcademicPeriodType.SEMESTRE])
    names = period_names or defaults[:rule.periods_per_year]

    if rule.calculation_type == CalculationType.MEDIA_SIMPLES:
        return f"Média Simples: ({' + '.join(names)}) / {rule.periods_per_year}"

    if rule.calculation_type == CalculationType.MEDIA_PONDERADA:
        if not rule.period_weights:
            return "Média Ponderada: pesos não configurados"
        weights = rule.period_weights.weights
        parts = []
        for i, name in enumerate(names):
            weight = weights[i] if i < len(weights) and weights[i] else 1
            parts.append(name if weight == 1 else f"({name} × {_format_number(weight)})")
        return f"Média Ponderada: ({' + '.join(parts)}) / {_format_number(rule.period_weights.divisor)}"

    if rule.calculation_type == CalculationType.DESCRITIVA:
        return "Avaliação Descritiva (sem nota numérica)"

    if rule.calculation_type == CalculationType.SOMA_NOTAS:
        return f"Soma de Notas: {' + '.join(names)}"

    return "Cálculo não definido"
