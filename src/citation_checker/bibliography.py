"""Read, sanitize, and parse BibTeX/BibLaTeX bibliographies.

pybtex does not accept ``%`` comments inside an entry, so before parsing we
look for unescaped comment markers within entry blocks and, when any are
found, strip comments from the whole source.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict, Iterator, List, Tuple

from pybtex.database import BibliographyData, parse_string
from pybtex.exceptions import PybtexError

from .errors import BibliographyParseError, BibliographyReadError
from .escapes import find_unescaped
from .models import BibCitation

LOG = logging.getLogger(__name__)

ENTRY_START = re.compile(
    r"^[ \t]*@(?P<type>\w+)[ \t]*\{[ \t]*(?P<key>[^,\s{}]+)[ \t]*,",
    re.MULTILINE,
)


def _lines(source: str) -> List[str]:
    lines = source.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _entry_end(source: str, open_brace: int) -> int:
    """Return the index of the brace closing the entry opened at ``open_brace``."""
    depth = 0
    for index in range(open_brace, len(source)):
        char = source[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
    return len(source) - 1


def iter_entry_blocks(source: str) -> Iterator[Tuple[int, str]]:
    """Yield ``(first_line_number, block_text)`` for each entry block."""
    position = 0
    while True:
        match = ENTRY_START.search(source, position)
        if not match:
            return
        open_brace = source.index("{", match.start())
        end = _entry_end(source, open_brace)
        line_number = source.count("\n", 0, match.start()) + 1
        yield line_number, source[match.start() : end + 1]
        position = end + 1


def find_unescaped_markers_in_entries(source: str) -> List[int]:
    """Return the 1-based line numbers of entry lines holding an unescaped ``%``."""
    violating = set()
    for first_line, block in iter_entry_blocks(source):
        for offset, line in enumerate(block.split("\n")):
            if find_unescaped(line) != -1:
                violating.add(first_line + offset)
    return sorted(violating)


def strip_comments(source: str) -> str:
    """Remove ``%`` comments line by line.

    A line is cut at its first unescaped marker and trimmed on the right;
    lines left empty by the cut are dropped. Other lines are kept verbatim.
    """

    out: List[str] = []
    for line in _lines(source):
        marker = find_unescaped(line)
        if marker == -1:
            out.append(line + "\n")
            continue
        kept = line[:marker].rstrip()
        if kept:
            out.append(kept + "\n")
    return "".join(out)


def _to_citation(key: str, entry) -> BibCitation:
    fields = {name.lower(): str(value) for name, value in entry.fields.items()}
    persons = {
        role.lower(): [str(person) for person in people]
        for role, people in entry.persons.items()
    }
    return BibCitation(key=key, entry_type=entry.type.lower(), fields=fields, persons=persons)


def parse_bibliography(text: str) -> Dict[str, BibCitation]:
    """Parse BibTeX text into citations keyed by citation key."""
    try:
        data: BibliographyData = parse_string(text, "bibtex")
    except PybtexError as exc:
        raise BibliographyParseError(f"Unable to parse bibliography: {exc}") from exc
    return {key: _to_citation(key, entry) for key, entry in data.entries.items()}


def load_bibliography(bib_file: str | Path) -> Dict[str, BibCitation]:
    """Read and parse a bibliography file, stripping comments inside entries."""

    path = Path(bib_file)
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise BibliographyReadError(f"Unable to read bibliography {path}: {exc}") from exc

    violating_lines = find_unescaped_markers_in_entries(source)
    if violating_lines:
        LOG.warning(
            "%s has comments inside entries, which the bibliography parser does not "
            "support; stripping them before parsing. Violating lines: %s",
            path,
            ", ".join(str(line) for line in violating_lines),
        )
        source = strip_comments(source)

    try:
        return parse_bibliography(source)
    except BibliographyParseError as exc:
        raise BibliographyParseError(f"{path}: {exc}") from exc
