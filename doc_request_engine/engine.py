import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .catalog import DocumentCatalog, default_catalog
from .config import settings
from .models import (
    ApplicationData,
    ConditionalRequirement,
    CreditProfile,
    DocumentRequirement,
    DocumentRequirements,
    InstrumentType,
    RiskAssessment,
)
from .rules import assess_risk, calculate_package_level, determine_credit_profile, is_high_risk

logger = logging.getLogger("doc_request_engine.engine")

HOURS_PER_PACKAGE_LEVEL = 24
DEFAULT_PROCESSING_HOURS = 1

SUBPRIME_ADVISORY = "Enhanced documentation required for credit profile"
GUARANTOR_REASON = "Required for high-risk applications or when credit score is below 650"

# Documents the composer adds on top of the package matrix
OWNERSHIP_PROOF = "proof_business_ownership_2_years"
COLLATERAL_DETAILS = "collateral_details"
EQUIPMENT_APPRAISALS = "equipment_appraisals"
PERSONAL_GUARANTOR = "personal_guarantor_info"
STATE_TAX_RETURNS = "state_tax_returns"
COMPOSER_DOCUMENT_IDS = (
    OWNERSHIP_PROOF,
    COLLATERAL_DETAILS,
    EQUIPMENT_APPRAISALS,
    PERSONAL_GUARANTOR,
    STATE_TAX_RETURNS,
)

# Applied when a caller hands over a partially completed form
INSTRUMENT_DEFAULTS: Dict[str, Any] = {
    "loan_amount": 0,
    "loan_type": InstrumentType.GENERAL,
    "business_age_months": 0,
    "current_year_gross_revenue": 0,
    "requested_term_months": 60,
    "debt_service_coverage_ratio": 1.0,
    "has_bankruptcy": False,
    "equifax": 0,
    "experian": 0,
    "transunion": 0,
    "industry_code": "",
}


class Composition:
    """Intermediate result of the requirement composer."""

    def __init__(self):
        self.document_ids: Dict[str, None] = {}  # insertion-ordered set
        self.conditional: List[ConditionalRequirement] = []
        self.special_requirements: List[str] = []

    def add(self, document_id: str) -> None:
        self.document_ids.setdefault(document_id, None)


class DocumentAutoRequestEngine:
    """
    Maps an application to the supporting documents a lender will request.

    Stateless apart from the injected catalog; safe to share across threads
    and requests.
    """

    def __init__(self, catalog: Optional[DocumentCatalog] = None, strict: Optional[bool] = None):
        self._catalog = catalog if catalog is not None else default_catalog()
        self._catalog.check_consistency(
            settings.STRICT_CATALOG if strict is None else strict,
            rule_document_ids=COMPOSER_DOCUMENT_IDS,
        )

    @property
    def catalog(self) -> DocumentCatalog:
        return self._catalog

    # The three evaluations read the same input and are independent of each other
    def assess_risk(self, application: ApplicationData) -> RiskAssessment:
        return assess_risk(application)

    def determine_credit_profile(self, application: ApplicationData) -> CreditProfile:
        return determine_credit_profile(application)

    def calculate_package_level(self, application: ApplicationData) -> int:
        return calculate_package_level(application)

    def _compose(
        self,
        application: ApplicationData,
        package_level: int,
        credit_profile: CreditProfile,
        risk: RiskAssessment,
    ) -> Composition:
        composition = Composition()
        for document_id in self._catalog.package_document_ids(package_level):
            composition.add(document_id)

        if application.business_age_months < 24:
            composition.add(OWNERSHIP_PROOF)

        if application.loan_type == InstrumentType.EQUIPMENT:
            composition.add(COLLATERAL_DETAILS)
            if application.loan_amount > 100_000 or package_level >= 3:
                composition.add(EQUIPMENT_APPRAISALS)

        if risk.overall_risk == "high" or package_level >= 3:
            composition.add(PERSONAL_GUARANTOR)
            composition.conditional.append(
                ConditionalRequirement.with_predicate(
                    document=PERSONAL_GUARANTOR,
                    reason=GUARANTOR_REASON,
                    condition="overall_risk_high",
                    predicate=is_high_risk,
                )
            )

        if credit_profile == CreditProfile.SUBPRIME:
            composition.add(STATE_TAX_RETURNS)
            composition.special_requirements.append(SUBPRIME_ADVISORY)

        if application.loan_amount >= 1_000_000:
            composition.special_requirements.extend(["third_party_audit", "enhanced_due_diligence"])
        elif application.loan_amount >= 500_000:
            composition.special_requirements.append("gaap_reviewed_financials")

        return composition

    def compose_document_ids(self, application: ApplicationData) -> Tuple[str, ...]:
        """Candidate ids before catalog resolution and the credit profile filter."""
        package_level = calculate_package_level(application)
        composition = self._compose(
            application,
            package_level,
            determine_credit_profile(application),
            assess_risk(application),
        )
        return tuple(composition.document_ids)

    def _filter_for_profile(
        self, document_ids, credit_profile: CreditProfile
    ) -> List[DocumentRequirement]:
        return [
            document
            for document in self._catalog.resolve(document_ids)
            if document.applies_to(credit_profile)
        ]

    def generate_requirements(self, application: ApplicationData) -> DocumentRequirements:
        package_level = calculate_package_level(application)
        credit_profile = determine_credit_profile(application)
        risk = assess_risk(application)

        composition = self._compose(application, package_level, credit_profile, risk)
        required = self._filter_for_profile(composition.document_ids, credit_profile)

        processing_hours = sum(
            document.estimated_processing_time or DEFAULT_PROCESSING_HOURS for document in required
        )
        review_time = package_level * HOURS_PER_PACKAGE_LEVEL + processing_hours

        logger.info(
            f"Generated requirements: package={package_level} profile={credit_profile.value} "
            f"risk={risk.overall_risk} documents={len(required)}"
        )
        return DocumentRequirements(
            required=required,
            conditional=composition.conditional,
            total=len(required),
            estimated_review_time=review_time,
            special_requirements=composition.special_requirements,
            package_level=package_level,
            credit_profile=credit_profile,
            risk_assessment=risk,
        )

    def generate_requirements_for_instrument(
        self,
        instrument_id: str,
        application: Union[ApplicationData, Mapping[str, Any], None] = None,
    ) -> DocumentRequirements:
        """
        Same contract as generate_requirements, for partially completed forms.

        Missing fields take INSTRUMENT_DEFAULTS; anything supplied wins.
        """
        if not isinstance(application, ApplicationData):
            # Normalises camelCase keys before merging with the defaults
            application = ApplicationData.model_validate(dict(application or {}))
        supplied = application.model_dump(exclude_unset=True)

        data = ApplicationData.model_validate({**INSTRUMENT_DEFAULTS, **supplied})
        logger.debug(f"Generating requirements for instrument {instrument_id}")
        return self.generate_requirements(data)
