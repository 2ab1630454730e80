import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

from main import app
from app.database import get_db
from app.models.evaluation_rule import CalculationType, AcademicPeriodType
from app.schemas.evaluation import EvaluationRuleSchema, PeriodWeights


@pytest.fixture
def mock_db():
    """Mock database session"""
    db = MagicMock()
    db.query.return_value = db
    db.filter.return_value = db
    db.order_by.return_value = db
    db.first.return_value = None
    db.all.return_value = []
    return db


@pytest.fixture
def client(mock_db):
    """TestClient with mocked DB"""
    app.dependency_overrides[get_db] = lambda: mock_db
    client = TestClient(app)
    yield client, mock_db
    app.dependency_overrides.clear()


@pytest.fixture
def simple_rule():
    return EvaluationRuleSchema(
        id=1,
        name="Regra Padrão - Fundamental II",
        min_approval_grade=7.0,
        min_attendance_percent=75.0,
        academic_period_type=AcademicPeriodType.BIMESTRE,
        periods_per_year=4,
        calculation_type=CalculationType.MEDIA_SIMPLES,
    )


@pytest.fixture
def weighted_rule():
    return EvaluationRuleSchema(
        id=2,
        name="Ensino Médio Ponderada",
        min_approval_grade=6.0,
        min_attendance_percent=75.0,
        academic_period_type=AcademicPeriodType.BIMESTRE,
        periods_per_year=4,
        calculation_type=CalculationType.MEDIA_PONDERADA,
        period_weights=PeriodWeights(weights=[2, 3, 2, 3], divisor=10),
    )


@pytest.fixture
def recovery_rule():
    return EvaluationRuleSchema(
        id=3,
        name="Regra com Recuperação",
        min_approval_grade=6.0,
        min_attendance_percent=75.0,
        allow_recovery=True,
        recovery_min_grade=4.0,
    )
