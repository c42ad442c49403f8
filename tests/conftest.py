import os

# Keep test runs from writing a rotating log file
os.environ.setdefault("DOC_ENGINE_LOG_FILE", "")

import pytest
from fastapi.testclient import TestClient

from doc_request_engine import ApplicationData, DocumentAutoRequestEngine, InstrumentType, default_catalog


@pytest.fixture(scope="session")
def catalog():
    return default_catalog()


@pytest.fixture
def engine(catalog):
    return DocumentAutoRequestEngine(catalog, strict=True)


@pytest.fixture
def make_application():
    """Low-risk prime applicant; override fields per test."""
    def _make(**overrides):
        fields = {
            "loan_amount": 100_000,
            "loan_type": InstrumentType.EQUIPMENT,
            "business_age_months": 60,
            "current_year_gross_revenue": 1_000_000,
            "requested_term_months": 60,
            "debt_service_coverage_ratio": 2.0,
            "has_bankruptcy": False,
            "equifax": 750,
            "experian": 750,
            "transunion": 750,
            "industry_code": "336",
        }
        fields.update(overrides)
        return ApplicationData(**fields)
    return _make


@pytest.fixture
def scenario_a(make_application):
    return make_application(
        loan_amount=1_500_000,
        equifax=700,
        experian=700,
        transunion=700,
        business_age_months=40,
        current_year_gross_revenue=2_000_000,
        debt_service_coverage_ratio=1.1,
    )


@pytest.fixture
def subprime_application(make_application):
    return make_application(
        loan_type=InstrumentType.GENERAL,
        equifax=580,
        experian=580,
        transunion=580,
        business_age_months=36,
    )


@pytest.fixture
def client():
    from doc_request_engine.api import app

    yield TestClient(app)

    app.dependency_overrides.clear()
