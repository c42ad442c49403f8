"""
Seed data for the document catalog and the package matrix.

Ids, names, categories, package levels and credit-profile restrictions are
referenced by stored uploads and by UI code; change them only together with
those consumers.
"""
from .models import (
    CreditProfile,
    DealStage,
    DocumentCategory,
    DocumentRequirement,
    DocumentSource,
    ValidationRule,
)

ALL_PROFILES = (
    CreditProfile.PRIME,
    CreditProfile.NEAR_PRIME,
    CreditProfile.SUBPRIME,
    CreditProfile.NEW_BUSINESS,
    CreditProfile.ESTABLISHED,
)

DOCUMENT_DEFINITIONS = (
    # ---- Package 1: basic documents ----
    DocumentRequirement(
        id="unzipp_lease_loan_credit_application",
        name="Unzipp Lease-Loan Credit Application",
        description="Key details on lessee, amount, terms. Also called in income statement",
        category=DocumentCategory.BUSINESS_DOCUMENTS,
        required=True,
        accepted_formats=("PDF",),
        validation_rules=(
            ValidationRule(type="signature", value=True, message="Must be signed", severity="error"),
        ),
        help_text=("Complete all required fields", "Must be signed and dated"),
        estimated_processing_time=1,
        source=DocumentSource.APPLICANT_BUSINESS,
        package_level=1,
        business_age_requirement="any",
        deal_stage=(DealStage.SUBMIT,),
        credit_profile_requirement=ALL_PROFILES,
    ),
    DocumentRequirement(
        id="profit_loss_statement",
        name="Profit & Loss Statement",
        description="Shows revenues, expenses, and the resulting profit or loss over a period of time",
        category=DocumentCategory.FINANCIAL_STATEMENTS,
        required=True,
        accepted_formats=("PDF", "Excel"),
        validation_rules=(
            ValidationRule(
                type="content",
                value="profit_loss",
                message="Must show revenue and expenses",
                severity="error",
            ),
        ),
        help_text=(
            "Used to assess owner's personal and operating results of a business",
            "Must cover required time period",
            "Can be from accounting software",
        ),
        estimated_processing_time=2,
        source=DocumentSource.BOOKKEEPING_SOFTWARE,
        package_level=1,
        business_age_requirement="any",
        deal_stage=(DealStage.SUBMIT,),
        credit_profile_requirement=(
            CreditProfile.NEAR_PRIME,
            CreditProfile.SUBPRIME,
            CreditProfile.NEW_BUSINESS,
        ),
    ),
    DocumentRequirement(
        id="business_bank_statements",
        name="Business Bank Statements",
        description="Validates cash balances",
        category=DocumentCategory.FINANCIAL_STATEMENTS,
        required=True,
        accepted_formats=("PDF", "CSV"),
        validation_rules=(
            ValidationRule(type="size", value=10485760, message="File must be under 10MB", severity="error"),
            ValidationRule(
                type="content",
                value="bank_statement",
                message="Must be valid bank statement",
                severity="error",
            ),
        ),
        help_text=(
            "Include all pages of each statement",
            "Must be consecutive months",
            "All business accounts required",
        ),
        estimated_processing_time=2,
        source=DocumentSource.PLAID_CONNECT,
        package_level=1,
        business_age_requirement="any",
        deal_stage=(DealStage.SUBMIT,),
        credit_profile_requirement=ALL_PROFILES,
    ),
    # ---- Package 2: enhanced documentation ----
    DocumentRequirement(
        id="federal_tax_returns",
        name="Federal Tax Returns",
        description="Shows revenue, expenses, net income, and tax details at a federal level",
        category=DocumentCategory.TAX_DOCUMENTS,
        required=True,
        accepted_formats=("PDF",),
        validation_rules=(
            ValidationRule(type="signature", value=True, message="Must be signed", severity="error"),
            ValidationRule(
                type="content",
                value="tax_return",
                message="Must be complete tax return",
                severity="error",
            ),
        ),
        help_text=(
            "Filed annually with the government to report sales and taxes owed",
            "Include all schedules",
            "Must be for required tax years",
        ),
        estimated_processing_time=3,
        source=DocumentSource.APPLICANT_UPLOAD,
        package_level=2,
        business_age_requirement="any",
        deal_stage=(DealStage.SUBMIT,),
        credit_profile_requirement=(
            CreditProfile.NEAR_PRIME,
            CreditProfile.SUBPRIME,
            CreditProfile.ESTABLISHED,
        ),
    ),
    DocumentRequirement(
        id="state_tax_returns",
        name="State Tax Returns",
        description=(
            "Filed annually with the government to report individual state income, deductions, and taxes"
        ),
        category=DocumentCategory.TAX_DOCUMENTS,
        required=True,
        accepted_formats=("PDF",),
        validation_rules=(
            ValidationRule(
                type="content",
                value="state_tax",
                message="Must be state tax return",
                severity="error",
            ),
        ),
        help_text=(
            "Filed annually with state for income and tax liability",
            "Must match federal returns",
            "Include all state jurisdictions",
        ),
        estimated_processing_time=2,
        source=DocumentSource.APPLICANT_UPLOAD,
        package_level=2,
        business_age_requirement="any",
        deal_stage=(DealStage.SUBMIT,),
        credit_profile_requirement=(CreditProfile.SUBPRIME,),
    ),
    # ---- Package 3: comprehensive analysis ----
    DocumentRequirement(
        id="business_credit_report",
        name="Business Credit Report",
        description="Inputs for credit models like bureau scores",
        category=DocumentCategory.API_REPORTS,
        required=True,
        accepted_formats=("PDF", "JSON"),
        validation_rules=(
            ValidationRule(
                type="content",
                value="credit_report",
                message="Must be valid credit report",
                severity="error",
            ),
        ),
        help_text=(
            "Generated automatically via API",
            "Shows business credit history",
            "Used for underwriting decisions",
        ),
        estimated_processing_time=1,
        source=DocumentSource.API_REPORT,
        package_level=3,
        business_age_requirement="any",
        deal_stage=(DealStage.SUBMIT,),
        credit_profile_requirement=(CreditProfile.SUBPRIME, CreditProfile.NEW_BUSINESS),
    ),
    DocumentRequirement(
        id="ucc_filings_report",
        name="UCC Filings Report on Applicant Business",
        description="Demonstrates applicant business as clear of existing liens",
        category=DocumentCategory.API_REPORTS,
        required=True,
        accepted_formats=("PDF",),
        validation_rules=(
            ValidationRule(
                type="content",
                value="ucc_filing",
                message="Must show UCC filing status",
                severity="error",
            ),
        ),
        help_text=(
            "Shows existing liens and encumbrances",
            "Generated via API integration",
            "Critical for collateral assessment",
        ),
        estimated_processing_time=0.5,
        source=DocumentSource.CES_REPORT,
        package_level=3,
        business_age_requirement="any",
        deal_stage=(DealStage.SUBMIT, DealStage.FUND),
        credit_profile_requirement=(CreditProfile.NEAR_PRIME, CreditProfile.SUBPRIME),
    ),
    # ---- Package 4: maximum documentation ----
    DocumentRequirement(
        id="personal_financial_statement",
        name="Personal Financial Statement",
        description="Form detailing an individual's assets, liabilities, and net worth",
        category=DocumentCategory.PERSONAL_DOCUMENTS,
        required=True,
        accepted_formats=("PDF",),
        validation_rules=(
            ValidationRule(type="signature", value=True, message="Must be signed", severity="error"),
        ),
        help_text=(
            "Assets include cash, real estate, investments, etc.",
            "Liabilities include loans, mortgages, credit card debt",
            "Calculate net worth",
        ),
        estimated_processing_time=2,
        source=DocumentSource.APPLICANT_UPLOAD,
        package_level=4,
        business_age_requirement="any",
        deal_stage=(DealStage.SUBMIT,),
        credit_profile_requirement=(CreditProfile.SUBPRIME, CreditProfile.NEW_BUSINESS),
    ),
    DocumentRequirement(
        id="equipment_appraisals",
        name="Equipment Appraisals / Comparable Equipment Data",
        description="Third party validation inputs for residential market values",
        category=DocumentCategory.COLLATERAL_DOCUMENTS,
        required=False,
        accepted_formats=("PDF",),
        validation_rules=(
            ValidationRule(
                type="content",
                value="appraisal",
                message="Must be certified appraisal",
                severity="error",
            ),
        ),
        help_text=(
            "Must be from certified appraiser",
            "Include fair market and liquidation values",
            "Photos of equipment required",
        ),
        estimated_processing_time=2,
        source=DocumentSource.THIRD_PARTY,
        package_level=4,
        business_age_requirement="any",
        deal_stage=(DealStage.SUBMIT, DealStage.FUND),
        credit_profile_requirement=(CreditProfile.SUBPRIME, CreditProfile.NEW_BUSINESS),
    ),
    # ---- Collateral ----
    DocumentRequirement(
        id="collateral_details",
        name="Collateral Details",
        description="Equipment Descriptions, serial numbers, VIN Numbers, Make, Model, Year, Miles / Hours",
        category=DocumentCategory.COLLATERAL_DOCUMENTS,
        required=True,
        accepted_formats=("PDF", "Excel"),
        validation_rules=(
            ValidationRule(
                type="content",
                value="equipment_details",
                message="Must include all equipment details",
                severity="error",
            ),
        ),
        help_text=(
            "Complete equipment specifications",
            "Serial numbers and VIN required",
            "Current condition assessment",
        ),
        estimated_processing_time=1,
        source=DocumentSource.COLLATERAL_SELLER,
        package_level=2,
        business_age_requirement="any",
        deal_stage=(DealStage.SUBMIT, DealStage.FUND),
        credit_profile_requirement=(
            CreditProfile.PRIME,
            CreditProfile.NEAR_PRIME,
            CreditProfile.SUBPRIME,
        ),
    ),
    # ---- Business age ----
    DocumentRequirement(
        id="proof_business_ownership_2_years",
        name="Proof of Business Ownership Document 1",
        description=(
            "This proves when the business was started, principals of the business are who they say they are etc."
        ),
        category=DocumentCategory.BUSINESS_DOCUMENTS,
        required=True,
        accepted_formats=("PDF",),
        validation_rules=(
            ValidationRule(
                type="date",
                value="business_age_verification",
                message="Must verify business age",
                severity="error",
            ),
        ),
        help_text=(
            "Articles of Incorporation or Formation Certificate",
            "Business License with start date",
            "Operating Agreement with dates",
        ),
        estimated_processing_time=0.5,
        source=DocumentSource.APPLICANT_BUSINESS,
        package_level=2,
        business_age_requirement="under_2_years",
        deal_stage=(DealStage.SUBMIT,),
        credit_profile_requirement=(CreditProfile.NEW_BUSINESS, CreditProfile.SUBPRIME),
    ),
    # ---- Personal guarantor ----
    DocumentRequirement(
        id="personal_guarantor_info",
        name="Personal Guarantor Information",
        description="IF WE HAVE A PERSONAL GUARANTOR",
        category=DocumentCategory.PERSONAL_DOCUMENTS,
        required=False,
        accepted_formats=("PDF",),
        validation_rules=(
            ValidationRule(
                type="signature",
                value=True,
                message="Must be signed by guarantor",
                severity="error",
            ),
        ),
        help_text=(
            "Required only if personal guarantee needed",
            "Complete financial information",
            "Credit authorization",
        ),
        estimated_processing_time=2,
        source=DocumentSource.APPLICANT_BUSINESS,
        package_level=3,
        business_age_requirement="any",
        deal_stage=(DealStage.SUBMIT,),
        credit_profile_requirement=(CreditProfile.SUBPRIME, CreditProfile.NEW_BUSINESS),
    ),
)

# Each level lists its documents explicitly; do not derive one level from another.
PACKAGE_MATRIX = {
    # Basic: prime credit, established business
    1: (
        "unzipp_lease_loan_credit_application",
        "business_bank_statements",
        "collateral_details",
    ),
    # Standard: near prime, some documentation
    2: (
        "unzipp_lease_loan_credit_application",
        "profit_loss_statement",
        "business_bank_statements",
        "federal_tax_returns",
        "collateral_details",
    ),
    # Enhanced: subprime, new business
    3: (
        "unzipp_lease_loan_credit_application",
        "profit_loss_statement",
        "business_bank_statements",
        "federal_tax_returns",
        "state_tax_returns",
        "business_credit_report",
        "ucc_filings_report",
        "collateral_details",
        "proof_business_ownership_2_years",
    ),
    # Maximum: high risk, complex transactions
    4: (
        "unzipp_lease_loan_credit_application",
        "profit_loss_statement",
        "business_bank_statements",
        "federal_tax_returns",
        "state_tax_returns",
        "business_credit_report",
        "ucc_filings_report",
        "personal_financial_statement",
        "equipment_appraisals",
        "collateral_details",
        "proof_business_ownership_2_years",
        "personal_guarantor_info",
    ),
}
