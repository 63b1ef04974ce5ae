"""Source tags and the descriptor of where citations are read from.

Collections are tagged with one of the singleton sources below. Gathering is
dispatched through the tag, so each source kind implements its own reading
once and a collection produced by a set operation (tagged ``ABSTRACT``)
cannot be re-gathered by accident.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Set

from .bibliography import load_bibliography
from .errors import GatherError
from .latex import DEFAULT_SUFFIX, iter_citations
from .models import BibCitation, LaTeXCitation


@dataclass(frozen=True)
class CitationSource:
    """Files that citations are used in (LaTeX) or defined in (bibliography)."""

    latex_file: Optional[Path] = None
    bib_file: Optional[Path] = None
    default_suffix: str = DEFAULT_SUFFIX

    @classmethod
    def new(cls, latex_file: str | Path, bib_file: str | Path) -> "CitationSource":
        return cls(latex_file=Path(latex_file), bib_file=Path(bib_file))

    @classmethod
    def from_latex(cls, latex_file: str | Path) -> "CitationSource":
        return cls(latex_file=Path(latex_file))

    @classmethod
    def from_bib(cls, bib_file: str | Path) -> "CitationSource":
        return cls(bib_file=Path(bib_file))

    def require_latex(self) -> Path:
        if self.latex_file is None:
            raise GatherError("No LaTeX file was given to gather citations from")
        return self.latex_file

    def require_bib(self) -> Path:
        if self.bib_file is None:
            raise GatherError("No bibliography file was given to gather citations from")
        return self.bib_file


class Source:
    """Base interface for a citation source tag."""

    name: str = "base"

    def gather_keys(self, src: CitationSource) -> Set[str]:  # pragma: no cover - interface
        raise NotImplementedError

    def gather_records(self, src: CitationSource) -> Dict[str, object]:  # pragma: no cover - interface
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<source {self.name}>"


class LaTeX(Source):
    """Citations used in LaTeX source."""

    name = "latex"

    def gather_keys(self, src: CitationSource) -> Set[str]:
        return {
            token.key
            for token in iter_citations(src.require_latex(), default_suffix=src.default_suffix)
        }

    def gather_records(self, src: CitationSource) -> Dict[str, LaTeXCitation]:
        commands: Dict[str, list] = {}
        for token in iter_citations(src.require_latex(), default_suffix=src.default_suffix):
            commands.setdefault(token.key, []).append(token.command)
        return {key: LaTeXCitation(key=key, commands=tuple(cmds)) for key, cmds in commands.items()}


class Bib(Source):
    """Citations defined in a bibliography file."""

    name = "bib"

    def gather_keys(self, src: CitationSource) -> Set[str]:
        return set(load_bibliography(src.require_bib()))

    def gather_records(self, src: CitationSource) -> Dict[str, BibCitation]:
        return load_bibliography(src.require_bib())


class Abstract(Source):
    """Result of a set operation; no longer tied to a single origin."""

    name = "abstract"

    def gather_keys(self, src: CitationSource) -> Set[str]:
        raise GatherError("Cannot gather citations from an abstract source")

    def gather_records(self, src: CitationSource) -> Dict[str, object]:
        raise GatherError("Cannot gather citations from an abstract source")


LATEX = LaTeX()
BIB = Bib()
ABSTRACT = Abstract()
