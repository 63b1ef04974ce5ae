"""Exceptions raised by the citation checker."""
from __future__ import annotations


class CitationCheckerError(RuntimeError):
    """Base class for fatal citation checker failures."""


class LatexInputError(CitationCheckerError):
    """A LaTeX document or one of its ``\\input`` files could not be read."""


class BibliographyReadError(CitationCheckerError):
    """The bibliography file could not be read."""


class BibliographyParseError(CitationCheckerError):
    """The bibliography did not parse, even after comment stripping."""


class GatherError(CitationCheckerError):
    """Citations were requested from a source that cannot provide them."""


class ReportContractError(CitationCheckerError):
    """A query selected a record that its reporter cannot describe."""
