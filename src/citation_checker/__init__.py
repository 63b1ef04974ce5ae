"""Cross-check LaTeX citations against a BibTeX bibliography."""

from .app import CitationCheckerApp
from .citations import Citations, HollowCitations, gather_citations
from .errors import (
    BibliographyParseError,
    BibliographyReadError,
    CitationCheckerError,
    GatherError,
    LatexInputError,
    ReportContractError,
)
from .latex import Lexer
from .models import BibCitation, CitationToken, Finding, LaTeXCitation, OtherToken
from .sources import ABSTRACT, BIB, LATEX, CitationSource

__all__ = [
    "CitationCheckerApp",
    "Citations",
    "HollowCitations",
    "gather_citations",
    "CitationCheckerError",
    "LatexInputError",
    "BibliographyReadError",
    "BibliographyParseError",
    "GatherError",
    "ReportContractError",
    "Lexer",
    "BibCitation",
    "CitationToken",
    "Finding",
    "LaTeXCitation",
    "OtherToken",
    "ABSTRACT",
    "BIB",
    "LATEX",
    "CitationSource",
]
