import logging
from types import MappingProxyType
from typing import Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from .document_matrix import DOCUMENT_DEFINITIONS, PACKAGE_MATRIX
from .models import DocumentRequirement

logger = logging.getLogger("doc_request_engine.catalog")

PACKAGE_LEVELS = (1, 2, 3, 4)


class CatalogConfigurationError(RuntimeError):
    """Raised when the package matrix or composer rules reference unknown documents."""


class DocumentCatalog:
    """
    Read-only document definitions plus the package matrix.

    Built once and shared; there is no mutation API. Pass an alternative
    instance to the engine to test against different seed data.
    """

    def __init__(
        self,
        documents: Iterable[DocumentRequirement],
        package_matrix: Mapping[int, Sequence[str]],
    ):
        definitions = {}
        for document in documents:
            if document.id in definitions:
                raise CatalogConfigurationError(f"Duplicate document id: {document.id}")
            definitions[document.id] = document
        self._documents = MappingProxyType(definitions)
        self._packages = MappingProxyType(
            {int(level): tuple(ids) for level, ids in package_matrix.items()}
        )

    def __contains__(self, document_id: object) -> bool:
        return document_id in self._documents

    def __iter__(self) -> Iterator[DocumentRequirement]:
        return iter(self._documents.values())

    def __len__(self) -> int:
        return len(self._documents)

    @property
    def documents(self) -> Mapping[str, DocumentRequirement]:
        return self._documents

    @property
    def package_matrix(self) -> Mapping[int, Tuple[str, ...]]:
        return self._packages

    def ids(self) -> Tuple[str, ...]:
        return tuple(self._documents)

    def get(self, document_id: str) -> Optional[DocumentRequirement]:
        return self._documents.get(document_id)

    def package_document_ids(self, level: int) -> Tuple[str, ...]:
        return self._packages.get(level, ())

    def resolve(self, document_ids: Iterable[str]) -> List[DocumentRequirement]:
        """Look ids up in order; ids without a definition are skipped."""
        resolved = []
        for document_id in document_ids:
            document = self._documents.get(document_id)
            if document is None:
                logger.debug(f"Skipping unknown document id {document_id}")
                continue
            resolved.append(document)
        return resolved

    def find_problems(self, rule_document_ids: Iterable[str] = ()) -> List[str]:
        problems = []
        for level in PACKAGE_LEVELS:
            if level not in self._packages:
                problems.append(f"package level {level} has no document list")
        for level, ids in sorted(self._packages.items()):
            if level not in PACKAGE_LEVELS:
                problems.append(f"package level {level} is outside 1-4")
            for document_id in ids:
                if document_id not in self._documents:
                    problems.append(f"package level {level} references unknown document {document_id}")
        for document_id in rule_document_ids:
            if document_id not in self._documents:
                problems.append(f"requirement rules reference unknown document {document_id}")
        return problems

    def check_consistency(self, strict: bool = True, rule_document_ids: Iterable[str] = ()) -> List[str]:
        """
        Verify every id the matrix and the composer rules use has a definition.

        In strict mode any problem raises CatalogConfigurationError; otherwise
        problems are logged and returned, and lookups keep skipping the ids.
        """
        problems = self.find_problems(rule_document_ids)
        if problems and strict:
            raise CatalogConfigurationError("; ".join(problems))
        for problem in problems:
            logger.warning(f"Document catalog: {problem}")
        return problems


def default_catalog() -> DocumentCatalog:
    return DocumentCatalog(DOCUMENT_DEFINITIONS, PACKAGE_MATRIX)
