import logging
from typing import Any, Dict, Optional

from .models import ApplicationData, PlaidAnalysis, finite_number

logger = logging.getLogger("doc_request_engine.enrichment")

BUREAUS = ("equifax", "experian", "transunion")

# ---- MOCK EXTERNAL DATA (replace with real Plaid / bureau clients later) ----

MOCK_PLAID_ANALYSIS = PlaidAnalysis(
    average_balance=45000,
    monthly_inflow=85000,
    monthly_outflow=78000,
    overdraft_frequency=0,
    deposit_consistency="high",
    account_age=36,
)


async def enhance_with_plaid_data(application: ApplicationData, plaid_token: str) -> ApplicationData:
    """Attach a bank statement analysis. Returns a new application; the input is untouched."""
    if not plaid_token or not plaid_token.strip():
        raise ValueError("plaid_token is required")

    logger.info("Attaching mock Plaid analysis")
    return application.model_copy(
        update={
            "plaid_connected": True,
            "bank_statement_analysis": MOCK_PLAID_ANALYSIS.model_copy(),
        }
    )


async def enhance_with_credit_data(
    application: ApplicationData, credit_report: Optional[Dict[str, Any]]
) -> ApplicationData:
    """Apply whichever bureau scores the report carries; everything else is kept."""
    update = {}
    for bureau in BUREAUS:
        score = (credit_report or {}).get(bureau)
        if score is None:
            continue
        number = finite_number(score)
        if number is None:
            logger.warning(f"Ignoring unparseable {bureau} score {score!r}")
            continue
        update[bureau] = number

    if not update:
        return application.model_copy()
    logger.info(f"Applying bureau scores from credit report: {sorted(update)}")
    return application.model_copy(update=update)
