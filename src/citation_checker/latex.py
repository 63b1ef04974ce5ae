"""Lexer that finds citations in LaTeX source, following ``\\input`` files."""
from __future__ import annotations

import logging
import re
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Deque, Iterator, List, Optional, TextIO

from .errors import LatexInputError
from .escapes import find_unescaped
from .models import CitationToken, OtherToken, Token

LOG = logging.getLogger(__name__)

CITATION_PATTERN = re.compile(r"\\(?P<command>[A-Za-z]*cite)\{(?P<keys>[^{}]*)\}")
INPUT_PATTERN = re.compile(r"\\input\{(?P<path>[^{}]*)\}")
DEFAULT_SUFFIX = ".tex"


@dataclass
class _Frame:
    """One open file on the lexer's inclusion stack."""

    path: Path
    handle: TextIO
    line: int = 0

    @property
    def base_dir(self) -> Path:
        return self.path.parent

    def readline(self) -> str:
        try:
            text = self.handle.readline()
        except UnicodeDecodeError as exc:
            raise LatexInputError(f"{self.path}:{self.line + 1}: {exc}") from exc
        if text:
            self.line += 1
        return text

    def close(self) -> None:
        self.handle.close()


class Lexer:
    """Pull-based tokenizer over a LaTeX document tree.

    Each call to :meth:`next_token` reads from the innermost open file until a
    line yields a token; a line with several citation keys is read once and its
    remaining tokens are buffered. ``\\input`` directives push a new frame onto an explicit stack
    rather than recursing, and exhausted frames are closed and popped.
    """

    def __init__(self, path: Path, default_suffix: str = DEFAULT_SUFFIX):
        self.path = Path(path)
        self.default_suffix = default_suffix
        self._stack: List[_Frame] = []
        self._pending: Deque[Token] = deque()
        self._push(self.path)

    @classmethod
    def from_path(cls, latex_file: str | Path, default_suffix: str = DEFAULT_SUFFIX) -> "Lexer":
        return cls(Path(latex_file), default_suffix=default_suffix)

    def __enter__(self) -> "Lexer":
        return self

    def __exit__(self, *_exc) -> None:
        self.close()

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            if token is None:
                return
            yield token

    @property
    def depth(self) -> int:
        return len(self._stack)

    def close(self) -> None:
        while self._stack:
            self._stack.pop().close()
        self._pending.clear()

    def next_token(self) -> Optional[Token]:
        if self._pending:
            return self._pending.popleft()

        while self._stack:
            frame = self._stack[-1]
            text = frame.readline()
            if not text:
                self._pop()
                continue

            tokens = self._scan_line(frame, text)
            if tokens:
                self._pending.extend(tokens[1:])
                return tokens[0]
        return None

    def _scan_line(self, frame: _Frame, text: str) -> List[Token]:
        """Tokenize one line; an empty result means an input file was pushed."""
        line = text.rstrip("\r\n")
        comment = find_unescaped(line)
        if comment != -1:
            line = line[:comment]
        line = line.strip()

        citations: List[Token] = []
        for match in CITATION_PATTERN.finditer(line):
            command = match.group("command")
            for key in match.group("keys").split(","):
                key = key.strip()
                if key:
                    citations.append(
                        CitationToken(key=key, command=command, path=frame.path, line=frame.line)
                    )
        if citations:
            return citations

        match = INPUT_PATTERN.search(line)
        if match and match.group("path").strip():
            self._push(self._resolve(frame, match.group("path").strip()), parent=frame)
            return []

        return [OtherToken(path=frame.path, line=frame.line)]

    def _resolve(self, frame: _Frame, name: str) -> Path:
        target = frame.base_dir / name
        if not target.suffix:
            target = target.with_name(target.name + self.default_suffix)
        return target

    def _push(self, path: Path, parent: Optional[_Frame] = None) -> None:
        where = f"{parent.path}:{parent.line}: " if parent else ""
        resolved = path.resolve()
        if any(open_frame.path == resolved for open_frame in self._stack):
            raise LatexInputError(f"{where}circular \\input of {resolved}")
        try:
            handle = resolved.open(encoding="utf-8")
        except OSError as exc:
            raise LatexInputError(f"{where}unable to open LaTeX file {path}: {exc}") from exc
        LOG.debug("Entering %s (depth %d)", resolved, len(self._stack) + 1)
        self._stack.append(_Frame(path=resolved, handle=handle))

    def _pop(self) -> None:
        frame = self._stack.pop()
        frame.close()
        LOG.debug("Leaving %s", frame.path)


def iter_citations(latex_file: str | Path, default_suffix: str = DEFAULT_SUFFIX) -> Iterator[CitationToken]:
    """Yield every citation token in a document tree."""
    with Lexer.from_path(latex_file, default_suffix=default_suffix) as lexer:
        for token in lexer:
            if isinstance(token, CitationToken):
                yield token
