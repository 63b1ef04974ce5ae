"""Queries that reconcile document citations with bibliography entries."""
from __future__ import annotations

import re
from typing import Callable, Dict, List, Sequence

from .citations import Citations, HollowCitations, gather_citations
from .errors import ReportContractError
from .models import BibCitation, Finding
from .sources import BIB, LATEX, CitationSource

EN_DASH = "–"
PAGES_PATTERN = re.compile(rf"[0-9]+(?:--|{EN_DASH})[0-9]+")
REQUIRED_ARTICLE_FIELDS = ("volume", "number", "pages", "doi")


def unused_citations(src: CitationSource) -> List[Finding]:
    """Keys defined in the bibliography but never cited in the document."""
    citations = gather_citations(HollowCitations, LATEX, src)
    bib_entries = gather_citations(HollowCitations, BIB, src)
    unused = bib_entries.difference(citations)
    return [Finding(code="unused-entry", key=key, message=key) for key in unused.list_sorted()]


def undefined_citations(src: CitationSource) -> List[Finding]:
    """Keys cited in the document but missing from the bibliography."""
    citations = gather_citations(HollowCitations, LATEX, src)
    bib_entries = gather_citations(HollowCitations, BIB, src)
    undefined = citations.difference(bib_entries)
    return [
        Finding(code="undefined-citation", key=key, message=key)
        for key in undefined.list_sorted()
    ]


def has_malformed_pages(citation: BibCitation) -> bool:
    pages = citation.get("pages")
    return pages is not None and not PAGES_PATTERN.fullmatch(pages)


def report_pages(citation: BibCitation) -> str:
    return f"{citation.key} ({citation.get('pages') or ''})"


def malformed_pages(src: CitationSource) -> List[Finding]:
    """Entries whose ``pages`` are not two numbers joined by ``--`` or an en dash."""
    bib_entries: Citations = gather_citations(Citations, BIB, src)
    flagged = bib_entries.filter(has_malformed_pages)
    return [
        Finding(code="malformed-pages", key=citation.key, message=report_pages(citation))
        for citation in flagged.list_sorted()
    ]


def report_missing_fields(citation: BibCitation, required: Sequence[str]) -> str:
    missing = citation.missing_fields(required)
    if not missing:
        raise ReportContractError(
            f"Cannot report missing fields for {citation.key}: none are missing"
        )
    return f"{citation.key} (missing: {', '.join(missing)})"


def missing_fields(
    src: CitationSource,
    entry_type: str = "article",
    required: Sequence[str] = REQUIRED_ARTICLE_FIELDS,
) -> List[Finding]:
    """Entries of ``entry_type`` that lack at least one of the ``required`` fields."""

    entry_type = entry_type.lower()
    bib_entries: Citations = gather_citations(Citations, BIB, src)
    flagged = bib_entries.filter(
        lambda c: c.entry_type == entry_type and not c.has_fields(required)
    )
    return [
        Finding(
            code=f"{entry_type}-missing-fields",
            key=citation.key,
            message=report_missing_fields(citation, required),
        )
        for citation in flagged.list_sorted()
    ]


QUERIES: Dict[str, Callable[..., List[Finding]]] = {
    "unused": unused_citations,
    "undefined": undefined_citations,
    "pages": malformed_pages,
    "article": missing_fields,
}

BIB_ONLY_QUERIES = frozenset({"pages", "article"})
