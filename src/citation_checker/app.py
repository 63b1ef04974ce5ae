"""High-level orchestrator for citation checking queries."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence

from .config import Settings
from .models import Finding
from .queries import BIB_ONLY_QUERIES, QUERIES, missing_fields
from .sources import CitationSource

LOG = logging.getLogger(__name__)


class CitationCheckerApp:
    """Runs a named query against a LaTeX document and its bibliography."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or Settings()

    def build_source(self, query: str, document: str | Path | None, bibliography: str | Path) -> CitationSource:
        latex_file = None
        if query not in BIB_ONLY_QUERIES:
            latex_file = Path(document or self.settings.document)
        return CitationSource(
            latex_file=latex_file,
            bib_file=Path(bibliography),
            default_suffix=self.settings.default_suffix,
        )

    def run(
        self,
        query: str,
        document: str | Path | None = None,
        bibliography: str | Path | None = None,
        entry_type: str | None = None,
        required_fields: Sequence[str] | None = None,
    ) -> List[Finding]:
        if query not in QUERIES:
            raise ValueError(f"Unknown query {query!r}; expected one of {', '.join(QUERIES)}")

        src = self.build_source(query, document, bibliography or self.settings.bibliography)
        LOG.debug("Running %s query on %s", query, src)
        if query == "article":
            return missing_fields(
                src,
                entry_type=entry_type or self.settings.entry_type,
                required=tuple(required_fields or self.settings.required_fields),
            )
        return QUERIES[query](src)
