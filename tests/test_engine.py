import pytest

from doc_request_engine import (
    ApplicationData,
    CreditProfile,
    DocumentAutoRequestEngine,
    DocumentCatalog,
    InstrumentType,
)
from doc_request_engine.document_matrix import DOCUMENT_DEFINITIONS, PACKAGE_MATRIX
from doc_request_engine.engine import COMPOSER_DOCUMENT_IDS, SUBPRIME_ADVISORY


def _ids(result):
    return [doc.id for doc in result.required]


def _expected_review_time(result):
    return result.package_level * 24 + sum(doc.estimated_processing_time or 1 for doc in result.required)


def test_prime_level_one(engine, make_application):
    result = engine.generate_requirements(make_application())

    assert result.package_level == 1
    assert result.credit_profile == CreditProfile.PRIME
    assert _ids(result) == [
        "unzipp_lease_loan_credit_application",
        "business_bank_statements",
        "collateral_details",
    ]
    assert result.total == 3
    assert result.estimated_review_time == 28
    assert result.conditional == []
    assert result.special_requirements == []


def test_scenario_a_large_equipment_loan(engine, scenario_a):
    result = engine.generate_requirements(scenario_a)

    assert result.package_level == 4
    assert result.credit_profile == CreditProfile.NEAR_PRIME
    assert "equipment_appraisals" in engine.compose_document_ids(scenario_a)
    # appraisals are restricted to subprime and new business profiles
    assert "equipment_appraisals" not in _ids(result)
    assert _ids(result) == [
        "unzipp_lease_loan_credit_application",
        "profit_loss_statement",
        "business_bank_statements",
        "federal_tax_returns",
        "ucc_filings_report",
        "collateral_details",
    ]
    assert result.estimated_review_time == 105.5
    assert result.special_requirements == ["third_party_audit", "enhanced_due_diligence"]


def test_scenario_b_bankruptcy(engine, make_application):
    app = make_application(
        has_bankruptcy=True,
        loan_amount=50_000,
        equifax=800, experian=800, transunion=800,
        business_age_months=60,
    )
    result = engine.generate_requirements(app)
    assert result.package_level == 4
    assert result.credit_profile == CreditProfile.PRIME


def test_scenario_c_repeat_borrower(engine, make_application):
    app = make_application(
        equifax=670, experian=670, transunion=670,
        is_repeat_borrower=True,
        previous_loan_performance="excellent",
    )
    assert engine.generate_requirements(app).package_level == 1


def test_scenario_d_subprime(engine, subprime_application):
    result = engine.generate_requirements(subprime_application)

    assert result.credit_profile == CreditProfile.SUBPRIME
    assert result.package_level == 3
    assert SUBPRIME_ADVISORY in result.special_requirements
    assert "state_tax_returns" in _ids(result)
    assert _ids(result) == [
        "unzipp_lease_loan_credit_application",
        "profit_loss_statement",
        "business_bank_statements",
        "federal_tax_returns",
        "state_tax_returns",
        "business_credit_report",
        "ucc_filings_report",
        "collateral_details",
        "proof_business_ownership_2_years",
        "personal_guarantor_info",
    ]
    assert result.estimated_review_time == 87


def test_young_business_gets_ownership_proof(engine, make_application):
    app = make_application(business_age_months=18)
    result = engine.generate_requirements(app)

    assert result.credit_profile == CreditProfile.NEW_BUSINESS
    assert "proof_business_ownership_2_years" in _ids(result)
    # collateral details do not apply to new businesses
    assert "collateral_details" not in _ids(result)


def test_equipment_appraisal_threshold(engine, make_application):
    assert "equipment_appraisals" not in engine.compose_document_ids(make_application(loan_amount=100_000))
    assert "equipment_appraisals" in engine.compose_document_ids(make_application(loan_amount=100_001))

    general = make_application(loan_type=InstrumentType.GENERAL, loan_amount=200_000)
    assert "equipment_appraisals" not in engine.compose_document_ids(general)


def test_equipment_appraisal_at_level_three(engine, make_application):
    app = make_application(debt_service_coverage_ratio=1.0, business_age_months=12)
    ids = engine.compose_document_ids(app)
    assert "equipment_appraisals" in ids
    assert "equipment_appraisals" in _ids(engine.generate_requirements(app))


def test_candidates_keep_first_insertion_order(engine, make_application):
    app = make_application(loan_type=InstrumentType.EQUIPMENT, loan_amount=150_000)
    assert engine.compose_document_ids(app) == (
        "unzipp_lease_loan_credit_application",
        "business_bank_statements",
        "collateral_details",
        "equipment_appraisals",
    )


def test_loan_amount_advisories(engine, make_application):
    big = make_application(loan_amount=1_000_000, current_year_gross_revenue=10_000_000)
    assert engine.generate_requirements(big).special_requirements == ["third_party_audit", "enhanced_due_diligence"]

    mid = make_application(loan_amount=500_000, current_year_gross_revenue=10_000_000)
    assert engine.generate_requirements(mid).special_requirements == ["gaap_reviewed_financials"]

    small = make_application(loan_amount=499_999, current_year_gross_revenue=10_000_000)
    assert engine.generate_requirements(small).special_requirements == []


def test_guarantor_condition_is_re_evaluated(engine, subprime_application):
    result = engine.generate_requirements(subprime_application)

    assert len(result.conditional) == 1
    conditional = result.conditional[0]
    assert conditional.document == "personal_guarantor_info"
    assert conditional.condition == "overall_risk_high"
    assert result.risk_assessment.overall_risk == "medium"
    assert conditional.applies(subprime_application) is False

    riskier = subprime_application.model_copy(update={"business_age_months": 6, "industry_code": "722"})
    assert conditional.applies(riskier) is True


def test_high_overall_risk_adds_guarantor(engine, make_application):
    app = make_application(
        equifax=600, experian=600, transunion=600,
        business_age_months=6,
        current_year_gross_revenue=0,
        industry_code="722",
        loan_type=InstrumentType.GENERAL,
    )
    result = engine.generate_requirements(app)
    assert result.risk_assessment.overall_risk == "high"
    assert "personal_guarantor_info" in _ids(result)


@pytest.mark.parametrize("fixture_name", ["scenario_a", "subprime_application"])
def test_result_invariants(engine, catalog, request, fixture_name):
    result = engine.generate_requirements(request.getfixturevalue(fixture_name))

    assert set(_ids(result)) <= set(catalog.ids())
    assert result.total == len(result.required)
    assert result.package_level in (1, 2, 3, 4)
    assert result.estimated_review_time == _expected_review_time(result)


def test_results_are_deterministic(engine, subprime_application):
    first = engine.generate_requirements(subprime_application)
    second = engine.generate_requirements(subprime_application)
    assert first.model_dump_json(by_alias=True) == second.model_dump_json(by_alias=True)


def test_calls_do_not_share_state(engine, make_application, subprime_application):
    before = engine.generate_requirements(make_application())
    engine.generate_requirements(subprime_application)
    after = engine.generate_requirements(make_application())
    assert before.model_dump_json() == after.model_dump_json()


def test_output_uses_camel_case_aliases(engine, subprime_application):
    data = engine.generate_requirements(subprime_application).model_dump(mode="json", by_alias=True)
    assert {"estimatedReviewTime", "specialRequirements", "packageLevel", "creditProfile", "riskAssessment"} <= set(data)
    assert data["creditProfile"] == "Subprime"
    assert data["conditional"] == [{
        "document": "personal_guarantor_info",
        "reason": "Required for high-risk applications or when credit score is below 650",
        "condition": "overall_risk_high",
    }]
    assert "creditProfileRequirement" in data["required"][0]


def test_missing_processing_time_counts_one_hour(make_application):
    definitions = [
        doc.model_copy(update={"estimated_processing_time": None})
        if doc.id == "business_bank_statements" else doc
        for doc in DOCUMENT_DEFINITIONS
    ]
    engine = DocumentAutoRequestEngine(DocumentCatalog(definitions, PACKAGE_MATRIX), strict=True)
    result = engine.generate_requirements(make_application())
    assert result.estimated_review_time == 24 + 1 + 1 + 1


def test_unrestricted_document_applies_to_every_profile(scenario_a):
    definitions = [
        doc.model_copy(update={"credit_profile_requirement": None}) if doc.id == "state_tax_returns" else doc
        for doc in DOCUMENT_DEFINITIONS
    ]
    engine = DocumentAutoRequestEngine(DocumentCatalog(definitions, PACKAGE_MATRIX), strict=True)
    assert "state_tax_returns" in _ids(engine.generate_requirements(scenario_a))


def test_instrument_entry_point_fills_defaults(engine):
    result = engine.generate_requirements_for_instrument("instrument-42", {"loanAmount": 50_000})
    expected = engine.generate_requirements(
        ApplicationData(loan_amount=50_000, requested_term_months=60, debt_service_coverage_ratio=1.0)
    )
    assert result.model_dump_json() == expected.model_dump_json()
    assert result.credit_profile == CreditProfile.NEW_BUSINESS


def test_instrument_entry_point_keeps_supplied_values(engine, subprime_application):
    result = engine.generate_requirements_for_instrument("instrument-7", subprime_application)
    assert result.model_dump_json() == engine.generate_requirements(subprime_application).model_dump_json()


def test_instrument_entry_point_without_data(engine):
    result = engine.generate_requirements_for_instrument("instrument-empty")
    assert result.package_level == 3
    assert result.risk_assessment.collateral_strength == "weak"


@pytest.mark.parametrize("fixture_name", ["make_application", "scenario_a", "subprime_application"])
def test_composed_ids_come_from_matrix_or_composer_rules(engine, request, fixture_name):
    value = request.getfixturevalue(fixture_name)
    app = value(business_age_months=6, debt_service_coverage_ratio=1.0) if callable(value) else value
    level = engine.calculate_package_level(app)
    extra = set(engine.compose_document_ids(app)) - set(PACKAGE_MATRIX[level])
    assert extra <= set(COMPOSER_DOCUMENT_IDS)
