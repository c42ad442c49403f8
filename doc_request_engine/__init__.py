from .catalog import CatalogConfigurationError, DocumentCatalog, default_catalog
from .engine import DocumentAutoRequestEngine
from .models import (
    ApplicationData,
    ConditionalRequirement,
    CreditProfile,
    DealStage,
    DocumentCategory,
    DocumentRequirement,
    DocumentRequirements,
    DocumentSource,
    InstrumentType,
    RequirementChange,
    RiskAssessment,
    ValidationRule,
)
from .summary import categorize_documents, diff_requirements, format_document_name

__version__ = "1.0.0"
