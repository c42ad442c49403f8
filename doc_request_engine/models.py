import enum
import logging
import math
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator
from pydantic.alias_generators import to_camel

logger = logging.getLogger("doc_request_engine.models")


class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---- Enumerations ----

class DocumentCategory(str, enum.Enum):
    FINANCIAL_STATEMENTS = "Financial Statements"
    TAX_DOCUMENTS = "Tax Documents"
    BUSINESS_DOCUMENTS = "Business Documents"
    COLLATERAL_DOCUMENTS = "Collateral Documents"
    PERSONAL_DOCUMENTS = "Personal Documents"
    COMPLIANCE_DOCUMENTS = "Compliance Documents"
    PLAID_INTEGRATION = "Plaid Integration"
    API_REPORTS = "API Reports"
    OTHER = "Other"


class DocumentSource(str, enum.Enum):
    APPLICANT_BUSINESS = "Applicant Business Must be UNZIPP Applications"
    APPLICANT_UPLOAD = "Applicant Business / Uploaded to the Partner"
    BOOKKEEPING_SOFTWARE = "API to bookkeeping Software of Applicant"
    PLAID_CONNECT = "Plaid Connect / Uploaded to the Partner"
    CES_REPORT = "CES Deal Kant, Paynet, Secretary of State, Public Funder"
    API_REPORT = "API Report"
    COLLATERAL_SELLER = "From Collateral Seller / Applicant Business"
    FUNDING_SOURCE = "Funding Source"
    SIGNED_NOTARIZED = "The Signed & Notarized by Applicant Business"
    THIRD_PARTY = "Third Party External"


class DealStage(str, enum.Enum):
    SUBMIT = "Submit"
    FUND = "Fund"
    CLOSE = "Close"


class CreditProfile(str, enum.Enum):
    PRIME = "Prime"                # 720+ scores, strong financials
    NEAR_PRIME = "Near Prime"      # 650-719 scores
    SUBPRIME = "Subprime"          # <600 scores once the business is 24+ months old
    NEW_BUSINESS = "New Business"  # <24 months in business
    ESTABLISHED = "Established"    # 24+ months, 600-649 scores


class InstrumentType(str, enum.Enum):
    EQUIPMENT = "equipment"
    REAL_ESTATE = "realestate"
    WORKING_CAPITAL = "working_capital"
    GENERAL = "general"


# ---- Catalog entries ----

class ValidationRule(CamelModel):
    """Check applied to an uploaded document."""
    model_config = ConfigDict(frozen=True)

    type: Literal["size", "format", "content", "date", "signature"]
    value: Any
    message: str
    severity: Literal["error", "warning"]


class DocumentRequirement(CamelModel):
    """Catalog entry for one supporting document."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    category: DocumentCategory
    required: bool
    accepted_formats: Tuple[str, ...]
    validation_rules: Tuple[ValidationRule, ...] = ()
    help_text: Tuple[str, ...] = ()
    estimated_processing_time: Optional[float] = Field(None, description="Hours")
    source: DocumentSource
    package_level: int = Field(..., ge=1, le=4)
    business_age_requirement: Literal["under_2_years", "3_plus_years", "any"] = "any"
    deal_stage: Tuple[DealStage, ...]
    credit_profile_requirement: Optional[Tuple[CreditProfile, ...]] = None

    def applies_to(self, profile: CreditProfile) -> bool:
        """No restriction list means the document applies to every profile."""
        return self.credit_profile_requirement is None or profile in self.credit_profile_requirement


# ---- Application input ----

class PlaidAnalysis(CamelModel):
    """Bank account summary from a Plaid connection."""
    average_balance: float = 0
    monthly_inflow: float = 0
    monthly_outflow: float = 0
    overdraft_frequency: float = 0
    deposit_consistency: Literal["high", "medium", "low"] = "medium"
    account_age: float = 0


class TaxReturnAnalysis(CamelModel):
    gross_income: float = 0
    net_income: float = 0
    depreciation: float = 0
    add_backs: float = 0
    year_over_year_growth: float = 0


class MonthlyCashFlow(CamelModel):
    month: str
    revenue: float = 0
    expenses: float = 0
    net_cash_flow: float = 0


_NUMERIC_FIELDS = (
    "loan_amount",
    "business_age_months",
    "current_year_gross_revenue",
    "requested_term_months",
    "debt_service_coverage_ratio",
    "equifax",
    "experian",
    "transunion",
)
_FLAG_FIELDS = ("has_bankruptcy", "seasonal_business", "plaid_connected", "is_repeat_borrower")
_TRUE_STRINGS = {"true", "1", "yes", "y", "on"}


def finite_number(value: Any) -> Optional[float]:
    """float(value), or None when it does not parse or is NaN/infinite."""
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def whole_number(value: float) -> Union[int, float]:
    return int(value) if float(value).is_integer() else value


class ApplicationData(CamelModel):
    """
    Credit application attributes consumed by the engine.

    Input is never rejected: missing or unparseable numbers become 0, flags
    become False, and an unknown loan type falls back to GENERAL.
    """
    loan_amount: float = 0
    loan_type: InstrumentType = InstrumentType.GENERAL
    collateral_type: Optional[str] = None
    business_age_months: float = 0
    current_year_gross_revenue: float = 0
    requested_term_months: float = 0
    debt_service_coverage_ratio: float = 0
    has_bankruptcy: bool = False
    equifax: float = 0
    experian: float = 0
    transunion: float = 0
    industry_code: str = ""
    property_type: Optional[str] = None
    equipment_age: Optional[float] = None
    seasonal_business: bool = False
    request_date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    smart_matching_instrument: Optional[Dict[str, Any]] = None

    # Enrichment
    plaid_connected: bool = False
    bank_statement_analysis: Optional[PlaidAnalysis] = None
    tax_return_data: Optional[TaxReturnAnalysis] = None
    existing_debt: Optional[float] = None
    cash_flow: Optional[List[MonthlyCashFlow]] = None
    is_repeat_borrower: bool = False
    previous_loan_performance: Optional[Literal["excellent", "good", "fair", "poor"]] = None

    @field_validator(*_NUMERIC_FIELDS, mode="before")
    @classmethod
    def _default_number(cls, value, info):
        if value is None or value == "":
            return 0
        if isinstance(value, bool):
            return int(value)
        number = finite_number(value)
        if number is None:
            logger.warning(f"Unparseable {info.field_name}={value!r}, defaulting to 0")
            return 0
        return number

    @field_validator("equipment_age", "existing_debt", mode="before")
    @classmethod
    def _optional_number(cls, value, info):
        if value is None or value == "":
            return None
        number = finite_number(value)
        if number is None:
            logger.warning(f"Unparseable {info.field_name}={value!r}, ignoring")
        return number

    @field_validator(*_FLAG_FIELDS, mode="before")
    @classmethod
    def _default_flag(cls, value):
        if value is None:
            return False
        if isinstance(value, str):
            return value.strip().lower() in _TRUE_STRINGS
        return bool(value)

    @field_validator("loan_type", mode="before")
    @classmethod
    def _default_loan_type(cls, value):
        if isinstance(value, InstrumentType):
            return value
        if value is None or value == "":
            return InstrumentType.GENERAL
        text = str(value).strip()
        for member in InstrumentType:
            if text.lower() == member.value or text.upper() == member.name:
                return member
        logger.warning(f"Unknown loan type {value!r}, treating as {InstrumentType.GENERAL.value}")
        return InstrumentType.GENERAL

    @field_validator("industry_code", mode="before")
    @classmethod
    def _industry_as_text(cls, value):
        return "" if value is None else str(value).strip()

    @field_validator("previous_loan_performance", mode="before")
    @classmethod
    def _known_performance(cls, value):
        if value is None:
            return None
        text = str(value).strip().lower()
        return text if text in ("excellent", "good", "fair", "poor") else None

    @field_validator("request_date", mode="before")
    @classmethod
    def _default_request_date(cls, value):
        return datetime.now(timezone.utc) if value in (None, "") else value

    @property
    def average_credit_score(self) -> int:
        return round_half_up((self.equifax + self.experian + self.transunion) / 3)


def round_half_up(value: float) -> int:
    """Round .5 upwards (Python's round() goes to even)."""
    return int((value + 0.5) // 1)


# ---- Engine output ----

RiskLevel = Literal["low", "medium", "high"]


class RiskAssessment(CamelModel):
    credit_score: int
    business_age: Union[int, float]
    revenue_stability: Literal["high", "medium", "low"]
    industry_risk: RiskLevel
    collateral_strength: Literal["strong", "moderate", "weak"]
    overall_risk: RiskLevel
    recommended_package: int = Field(..., ge=1, le=4)

    @field_validator("business_age")
    @classmethod
    def _whole_age(cls, value):
        return whole_number(value)


class ConditionalRequirement(CamelModel):
    """
    A document whose need depends on a predicate over ApplicationData.

    ``condition`` names the rule; the predicate itself stays on the instance
    so callers can re-check it against updated application data.
    """
    document: str
    reason: str
    condition: str
    _predicate: Optional[Callable[[ApplicationData], bool]] = PrivateAttr(default=None)

    @classmethod
    def with_predicate(
        cls,
        document: str,
        reason: str,
        condition: str,
        predicate: Callable[[ApplicationData], bool],
    ) -> "ConditionalRequirement":
        requirement = cls(document=document, reason=reason, condition=condition)
        requirement._predicate = predicate
        return requirement

    def applies(self, application: ApplicationData) -> bool:
        if self._predicate is None:
            return False
        return bool(self._predicate(application))


class DocumentRequirements(CamelModel):
    """Complete engine result for one application."""
    required: List[DocumentRequirement]
    conditional: List[ConditionalRequirement] = []
    total: int
    estimated_review_time: Union[int, float] = Field(..., description="Hours")
    special_requirements: List[str] = []
    package_level: int = Field(..., ge=1, le=4)
    credit_profile: CreditProfile
    risk_assessment: RiskAssessment

    @field_validator("estimated_review_time")
    @classmethod
    def _whole_hours(cls, value):
        return whole_number(value)


class RequirementChange(CamelModel):
    """Document names added or removed between two results."""
    added: List[str] = []
    removed: List[str] = []

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.removed)
