import re
from typing import Dict, List

from .models import DocumentCategory, DocumentRequirement, DocumentRequirements, RequirementChange


def format_document_name(document_id: str) -> str:
    """proof_business_ownership_2_years -> Proof Business Ownership 2 Years"""
    return re.sub(r"\b\w", lambda match: match.group(0).upper(), document_id.replace("_", " "))


def categorize_documents(documents: List[DocumentRequirement]) -> Dict[DocumentCategory, List[DocumentRequirement]]:
    """Group documents by category in declaration order, leaving out empty categories."""
    grouped: Dict[DocumentCategory, List[DocumentRequirement]] = {category: [] for category in DocumentCategory}
    for document in documents:
        grouped[document.category].append(document)
    return {category: docs for category, docs in grouped.items() if docs}


def diff_requirements(previous: DocumentRequirements, current: DocumentRequirements) -> RequirementChange:
    previous_ids = {document.id for document in previous.required}
    current_ids = {document.id for document in current.required}
    return RequirementChange(
        added=[document.name for document in current.required if document.id not in previous_ids],
        removed=[document.name for document in previous.required if document.id not in current_ids],
    )
