"""Resolve the evaluation rule that applies to a class: grade → course → level default."""
import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.course import Course, EducationLevel
from app.models.evaluation_rule import EvaluationRule, CalculationType
from app.schemas.evaluation import PeriodWeights

logger = logging.getLogger(__name__)

# Education level -> name of the canonical default rule seeded for it
LEVEL_DEFAULT_RULES = {
    EducationLevel.EDUCACAO_INFANTIL.value: "Regra Padrão - Educação Infantil",
    EducationLevel.FUNDAMENTAL_I.value: "Regra Padrão - Fundamental I",
    EducationLevel.FUNDAMENTAL_II.value: "Regra Padrão - Fundamental II",
    EducationLevel.ENSINO_MEDIO.value: "Regra Padrão - Ensino Médio",
    EducationLevel.EJA.value: "Regra Padrão - EJA",
}


def _active_rules(db: Session):
    return db.query(EvaluationRule).filter(EvaluationRule.deleted_at.is_(None))


def resolve_rule(db: Session, course_id: int, grade_id: Optional[int] = None) -> Optional[EvaluationRule]:
    """
    Return the single rule that governs a class, or None.

    Narrowest scope wins and rules are never merged: a grade-specific rule,
    then the course-wide rule (no grade), then the default rule named after
    the course's education level.
    """
    try:
        if grade_id:
            grade_rule = _active_rules(db).filter(
                EvaluationRule.education_grade_id == grade_id,
            ).order_by(EvaluationRule.id).first()
            if grade_rule:
                logger.debug("Rule %s resolved for grade %s", grade_rule.id, grade_id)
                return grade_rule

        course_rule = _active_rules(db).filter(
            EvaluationRule.course_id == course_id,
            EvaluationRule.education_grade_id.is_(None),
        ).order_by(EvaluationRule.id).first()
        if course_rule:
            logger.debug("Rule %s resolved for course %s", course_rule.id, course_id)
            return course_rule

        course = db.query(Course).filter(Course.id == course_id).first()
        if course and course.education_level:
            rule_name = LEVEL_DEFAULT_RULES.get(course.education_level)
            if rule_name:
                default_rule = _active_rules(db).filter(EvaluationRule.name == rule_name).order_by(EvaluationRule.id).first()
                if default_rule:
                    logger.debug("Default rule '%s' resolved for course %s", rule_name, course_id)
                    return default_rule
    except SQLAlchemyError as e:
        logger.error("Failed to resolve evaluation rule for course %s / grade %s: %s", course_id, grade_id, e)
        return None

    logger.info("No evaluation rule applies to course %s / grade %s", course_id, grade_id)
    return None


def default_period_weights(periods_per_year: int, calculation_type: str) -> PeriodWeights:
    """Suggested weights for a new rule: alternating 2/3 for weighted means, equal otherwise."""
    if calculation_type == CalculationType.MEDIA_PONDERADA:
        if periods_per_year == 4:
            weights = [2.0, 3.0, 2.0, 3.0]
        elif periods_per_year == 3:
            weights = [2.0, 3.0, 3.0]
        else:
            weights = [1.0] * periods_per_year
        return PeriodWeights(weights=weights, divisor=sum(weights))

    return PeriodWeights(weights=[1.0] * periods_per_year, divisor=float(periods_per_year))
