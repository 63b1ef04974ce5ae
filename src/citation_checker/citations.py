"""Collections of citations gathered from a tagged source.

``HollowCitations`` only keeps keys, which is all that presence checks
(unused or undefined citations) need. ``Citations`` keeps a record per key
for checks that look at fields or citing commands.
"""
from __future__ import annotations

from typing import Callable, Dict, Generic, Iterable, Iterator, List, Optional, Set, Type, TypeVar

from .sources import ABSTRACT, Abstract, CitationSource, Source

S = TypeVar("S", bound=Source)
R = TypeVar("R")
C = TypeVar("C")


class HollowCitations(Generic[S]):
    """Set of citation keys from a single source."""

    def __init__(self, source: S, keys: Iterable[str] = ()):
        self.source = source
        self._data: Set[str] = set(keys)

    @classmethod
    def gather(cls, source: S, src: CitationSource) -> "HollowCitations[S]":
        return cls(source, source.gather_keys(src))

    def insert(self, key: str) -> bool:
        """Add ``key``; return False when it was already present."""
        if key in self._data:
            return False
        self._data.add(key)
        return True

    def difference(self, other: "HollowCitations") -> "HollowCitations[Abstract]":
        return HollowCitations(ABSTRACT, self._data - other._data)

    def list_sorted(self) -> List[str]:
        return sorted(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"HollowCitations({self.source!r}, {len(self)} keys)"


class Citations(Generic[S, R]):
    """Mapping of citation key to the record its source provides."""

    def __init__(self, source: S, records: Optional[Dict[str, R]] = None):
        self.source = source
        self._data: Dict[str, R] = dict(records or {})

    @classmethod
    def gather(cls, source: S, src: CitationSource) -> "Citations[S, R]":
        return cls(source, source.gather_records(src))

    def get(self, key: str) -> Optional[R]:
        return self._data.get(key)

    def keys(self) -> List[str]:
        return list(self._data)

    def filter(self, predicate: Callable[[R], bool]) -> "Citations[S, R]":
        return Citations(
            self.source,
            {key: record for key, record in self._data.items() if predicate(record)},
        )

    def list_sorted(self) -> List[R]:
        return [self._data[key] for key in sorted(self._data)]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Citations({self.source!r}, {len(self)} records)"


def gather_citations(kind: Type[C], source: Source, src: CitationSource) -> C:
    """Gather a collection of type ``kind`` from ``source``."""
    return kind.gather(source, src)  # type: ignore[attr-defined]
