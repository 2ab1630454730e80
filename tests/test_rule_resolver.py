"""Tests for evaluation rule resolution (app/services/rule_resolver.py)"""
import pytest
from unittest.mock import Mock

from sqlalchemy.exc import OperationalError

from app.models.course import Course
from app.models.evaluation_rule import EvaluationRule, CalculationType
from app.services.rule_resolver import resolve_rule, default_period_weights, LEVEL_DEFAULT_RULES


def make_rule(id, name="Regra", course_id=None, education_grade_id=None):
    rule = Mock(spec=EvaluationRule)
    rule.id = id
    rule.name = name
    rule.course_id = course_id
    rule.education_grade_id = education_grade_id
    rule.deleted_at = None
    return rule


def make_course(id=10, education_level="Ensino Médio"):
    course = Mock(spec=Course)
    course.id = id
    course.education_level = education_level
    return course


class TestResolutionOrder:
    def test_grade_rule_wins(self, mock_db):
        grade_rule = make_rule(1, education_grade_id=5)
        mock_db.first.side_effect = [grade_rule]

        assert resolve_rule(mock_db, course_id=10, grade_id=5) is grade_rule
        assert mock_db.first.call_count == 1

    def test_falls_back_to_course_rule_when_grade_has_none(self, mock_db):
        course_rule = make_rule(2, course_id=10)
        mock_db.first.side_effect = [None, course_rule]

        assert resolve_rule(mock_db, course_id=10, grade_id=5) is course_rule

    def test_without_grade_starts_at_course_rule(self, mock_db):
        course_rule = make_rule(2, course_id=10)
        mock_db.first.side_effect = [course_rule]

        assert resolve_rule(mock_db, course_id=10) is course_rule
        assert mock_db.first.call_count == 1

    def test_falls_back_to_level_default(self, mock_db):
        default_rule = make_rule(3, name="Regra Padrão - Ensino Médio")
        mock_db.first.side_effect = [None, None, make_course(), default_rule]

        assert resolve_rule(mock_db, course_id=10, grade_id=5) is default_rule

    def test_unknown_level_returns_none(self, mock_db):
        mock_db.first.side_effect = [None, None, make_course(education_level="Técnico")]

        assert resolve_rule(mock_db, course_id=10, grade_id=5) is None

    def test_missing_course_returns_none(self, mock_db):
        mock_db.first.side_effect = [None, None]

        assert resolve_rule(mock_db, course_id=99) is None

    def test_default_rule_not_seeded_returns_none(self, mock_db):
        mock_db.first.side_effect = [None, None, make_course(education_level="EJA"), None]

        assert resolve_rule(mock_db, course_id=10, grade_id=5) is None

    def test_rule_queries_are_ordered_by_id(self, mock_db):
        first_rule = make_rule(1, course_id=10)
        mock_db.first.side_effect = [None, first_rule]

        assert resolve_rule(mock_db, course_id=10, grade_id=5) is first_rule
        assert mock_db.order_by.call_count == 2
        mock_db.order_by.assert_called_with(EvaluationRule.id)

    def test_database_error_resolves_to_none(self, mock_db):
        mock_db.first.side_effect = OperationalError("SELECT", {}, Exception("connection lost"))

        assert resolve_rule(mock_db, course_id=10, grade_id=5) is None


def test_every_level_maps_to_a_default_rule_name():
    assert LEVEL_DEFAULT_RULES["Educação Infantil"] == "Regra Padrão - Educação Infantil"
    assert LEVEL_DEFAULT_RULES["Ensino Fundamental I"] == "Regra Padrão - Fundamental I"
    assert LEVEL_DEFAULT_RULES["Ensino Fundamental II"] == "Regra Padrão - Fundamental II"
    assert LEVEL_DEFAULT_RULES["EJA"] == "Regra Padrão - EJA"


class TestDefaultPeriodWeights:
    @pytest.mark.parametrize("periods,weights,divisor", [
        (4, [2, 3, 2, 3], 10),
        (3, [2, 3, 3], 8),
        (2, [1, 1], 2),
    ])
    def test_weighted(self, periods, weights, divisor):
        result = default_period_weights(periods, CalculationType.MEDIA_PONDERADA)
        assert result.weights == weights
        assert result.divisor == divisor

    def test_simple_mean_uses_equal_weights(self):
        result = default_period_weights(4, CalculationType.MEDIA_SIMPLES)
        assert result.weights == [1, 1, 1, 1]
        assert result.divisor == 4
