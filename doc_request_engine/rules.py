"""
Risk assessment, credit profile and package level rules.

Each ladder is an ordered table evaluated top to bottom. The order is part of
the behaviour: several rules overwrite or discount what earlier rules set, so
do not reorder entries.
"""
from typing import Callable, NamedTuple, Optional, Sequence, Tuple

from .models import ApplicationData, CreditProfile, InstrumentType, RiskAssessment

HIGH_RISK_INDUSTRIES = frozenset({"722", "713", "512"})  # Food service, entertainment, motion pictures
MEDIUM_RISK_INDUSTRIES = frozenset({"531", "236"})  # Real estate, construction

MIN_PACKAGE_LEVEL = 1
MAX_PACKAGE_LEVEL = 4


def _first_below(value: float, tiers: Sequence[Tuple[float, str]], default: str) -> str:
    for ceiling, label in tiers:
        if value < ceiling:
            return label
    return default


# ---- Risk assessment ----

CREDIT_RISK_TIERS = ((650, "high"), (680, "medium"))
AGE_RISK_TIERS = ((12, "high"), (24, "medium"))

# Ordinal contributions to the overall score
RISK_POINTS = {"high": 3, "medium": 2, "low": 1}
STABILITY_POINTS = {"low": 3, "medium": 2, "high": 1}
COLLATERAL_POINTS = {"weak": 3, "moderate": 2, "strong": 1}

HIGH_RISK_SCORE = 12
MEDIUM_RISK_SCORE = 8


def revenue_stability(app: ApplicationData) -> str:
    stability = "high"
    if app.seasonal_business:
        stability = "medium"
    # Runs after the seasonal check, so "low" wins when both hold
    if app.current_year_gross_revenue < app.loan_amount * 2:
        stability = "low"
    return stability


def industry_risk(app: ApplicationData) -> str:
    if app.industry_code in HIGH_RISK_INDUSTRIES:
        return "high"
    if app.industry_code in MEDIUM_RISK_INDUSTRIES:
        return "medium"
    return "low"


def collateral_strength(app: ApplicationData) -> str:
    strength = "strong"
    if app.loan_type == InstrumentType.GENERAL:
        strength = "weak"
    # Independent of the loan type check: a GENERAL loan with old equipment ends at "moderate"
    if app.equipment_age and app.equipment_age > 10:
        strength = "moderate"
    return strength


def assess_risk(app: ApplicationData) -> RiskAssessment:
    credit_score = app.average_credit_score
    credit_risk = _first_below(credit_score, CREDIT_RISK_TIERS, "low")
    age_risk = _first_below(app.business_age_months, AGE_RISK_TIERS, "low")
    stability = revenue_stability(app)
    industry = industry_risk(app)
    collateral = collateral_strength(app)

    score = (
        RISK_POINTS[credit_risk]
        + RISK_POINTS[age_risk]
        + STABILITY_POINTS[stability]
        + RISK_POINTS[industry]
        + COLLATERAL_POINTS[collateral]
    )
    if score >= HIGH_RISK_SCORE:
        overall = "high"
    elif score >= MEDIUM_RISK_SCORE:
        overall = "medium"
    else:
        overall = "low"

    if overall == "high":
        recommended = 4
    elif overall == "medium":
        recommended = 3
    else:
        recommended = 2 if app.loan_amount > 500_000 else 1

    return RiskAssessment(
        credit_score=credit_score,
        business_age=app.business_age_months,
        revenue_stability=stability,
        industry_risk=industry,
        collateral_strength=collateral,
        overall_risk=overall,
        recommended_package=recommended,
    )


def is_high_risk(app: ApplicationData) -> bool:
    return assess_risk(app).overall_risk == "high"


# ---- Credit profile ----

PROFILE_RULES: Tuple[Tuple[Callable[[ApplicationData], bool], CreditProfile], ...] = (
    # Business age is checked before any score, so a young business is never PRIME
    (lambda app: app.business_age_months < 24, CreditProfile.NEW_BUSINESS),
    (
        lambda app: app.average_credit_score >= 720
        and app.current_year_gross_revenue >= app.loan_amount * 3,
        CreditProfile.PRIME,
    ),
    (lambda app: app.average_credit_score >= 650, CreditProfile.NEAR_PRIME),
    (
        lambda app: app.average_credit_score >= 600 and app.business_age_months >= 24,
        CreditProfile.ESTABLISHED,
    ),
)


def determine_credit_profile(app: ApplicationData) -> CreditProfile:
    for matches, profile in PROFILE_RULES:
        if matches(app):
            return profile
    return CreditProfile.SUBPRIME


# ---- Package level ----

class LevelRule(NamedTuple):
    """``candidate`` proposes a value (or None); ``combine`` folds it into the running level."""
    name: str
    candidate: Callable[[ApplicationData], Optional[int]]
    combine: Callable[[int, int], int]


def _raise(level: int, candidate: int) -> int:
    return max(level, candidate)


def _override(level: int, candidate: int) -> int:
    return candidate


def _discount(level: int, steps: int) -> int:
    return max(MIN_PACKAGE_LEVEL, level - steps)


def _ladder(*tiers: Tuple[Callable[[ApplicationData], bool], int]) -> Callable[[ApplicationData], Optional[int]]:
    """First matching tier wins (an if / elif chain)."""
    def candidate(app: ApplicationData) -> Optional[int]:
        for matches, level in tiers:
            if matches(app):
                return level
        return None
    return candidate


PACKAGE_RULES: Tuple[LevelRule, ...] = (
    LevelRule(
        "credit_score",
        _ladder(
            (lambda app: app.average_credit_score < 650, 3),
            (lambda app: app.average_credit_score < 680, 2),
        ),
        _raise,
    ),
    LevelRule("business_age", _ladder((lambda app: app.business_age_months < 24, 3)), _raise),
    LevelRule(
        "loan_amount",
        _ladder(
            (lambda app: app.loan_amount > 1_000_000, 4),
            (lambda app: app.loan_amount > 500_000, 3),
            (lambda app: app.loan_amount > 250_000, 2),
        ),
        _raise,
    ),
    LevelRule(
        "revenue_coverage",
        _ladder((lambda app: app.current_year_gross_revenue < app.loan_amount * 1.5, 3)),
        _raise,
    ),
    LevelRule("dscr", _ladder((lambda app: app.debt_service_coverage_ratio < 1.25, 3)), _raise),
    LevelRule("bankruptcy", _ladder((lambda app: app.has_bankruptcy, 4)), _override),
    LevelRule("industry", _ladder((lambda app: app.industry_code in HIGH_RISK_INDUSTRIES, 3)), _raise),
    LevelRule(
        "repeat_borrower",
        _ladder(
            (lambda app: app.is_repeat_borrower and app.previous_loan_performance == "excellent", 1),
        ),
        _discount,
    ),
)


def calculate_package_level(app: ApplicationData, rules: Sequence[LevelRule] = PACKAGE_RULES) -> int:
    level = MIN_PACKAGE_LEVEL
    for rule in rules:
        candidate = rule.candidate(app)
        if candidate is not None:
            level = rule.combine(level, candidate)
    return min(MAX_PACKAGE_LEVEL, level)
