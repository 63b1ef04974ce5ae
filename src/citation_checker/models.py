"""Data models for citation checking workflows."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union


@dataclass(frozen=True)
class CitationToken:
    """A citation key found in LaTeX source under a citing command."""

    key: str
    command: str
    path: Optional[Path] = None
    line: int = 0


@dataclass(frozen=True)
class OtherToken:
    """A LaTeX source line that carried no citation or inclusion."""

    path: Optional[Path] = None
    line: int = 0


Token = Union[CitationToken, OtherToken]


@dataclass(frozen=True)
class LaTeXCitation:
    """A key cited in LaTeX source along with every command that cited it."""

    key: str
    commands: Tuple[str, ...] = ()

    def cited(self) -> bool:
        return bool(self.commands)


@dataclass(frozen=True)
class BibCitation:
    """A parsed bibliography entry."""

    key: str
    entry_type: str
    fields: Dict[str, str] = field(default_factory=dict)
    persons: Dict[str, List[str]] = field(default_factory=dict)

    def get(self, field_name: str) -> Optional[str]:
        """Return a field value, joining person lists BibTeX-style."""
        name = field_name.lower()
        if name in self.fields:
            return self.fields[name]
        if name in self.persons:
            return " and ".join(self.persons[name])
        return None

    def has_field(self, field_name: str) -> bool:
        name = field_name.lower()
        return name in self.fields or bool(self.persons.get(name))

    def has_fields(self, field_names: Iterable[str]) -> bool:
        return all(self.has_field(name) for name in field_names)

    def missing_fields(self, field_names: Iterable[str]) -> List[str]:
        return [name for name in field_names if not self.has_field(name)]


@dataclass(frozen=True)
class Finding:
    """A single reported result of a query."""

    code: str
    key: str
    message: str

    def __str__(self) -> str:
        return self.message
