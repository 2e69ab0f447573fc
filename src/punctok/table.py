"""Punctuation table and the match probe used by the scanner.

Table order is match priority: the probe returns the first pattern that
matches, so longer patterns must be appended before their prefixes
(``<<`` before ``<``). The table never reorders or deduplicates entries.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from punctok.errors import AllocationError, InvalidArgumentError
from punctok.tokens import as_bytes


@dataclass(frozen=True, slots=True)
class Punctuation:
    """A configured punctuation pattern with its caller-chosen id."""

    pattern: bytes
    id: int
    length: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "length", len(self.pattern))


class PunctuationTable:
    """Ordered, append-only collection of punctuation patterns."""

    def __init__(self, pairs: Iterable[tuple[bytes | str, int]] = ()) -> None:
        self._items: list[Punctuation] = []
        self.extend(pairs)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[bytes | str, int]]) -> PunctuationTable:
        return cls(pairs)

    def append(self, pattern: bytes | str, id: int) -> Punctuation:
        """Append *pattern* with *id* and return the stored record."""
        data = as_bytes(pattern, "pattern")
        if not data:
            raise InvalidArgumentError("pattern must not be empty")
        if isinstance(id, bool) or not isinstance(id, int):
            raise InvalidArgumentError(f"punctuation id must be an int, not {type(id).__name__}")
        try:
            item = Punctuation(data, id)
            self._items.append(item)
        except MemoryError as exc:
            raise AllocationError("out of memory while growing the punctuation table") from exc
        return item

    def extend(self, pairs: Iterable[tuple[bytes | str, int]]) -> None:
        for pattern, id in pairs:
            self.append(pattern, id)

    def probe(self, buffer: bytes, offset: int) -> int | None:
        """Return the index of the first pattern matching at *offset*, or None."""
        if offset < 0 or offset >= len(buffer):
            return None
        for index, item in enumerate(self._items):
            if buffer.startswith(item.pattern, offset):
                return index
        return None

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Punctuation]:
        return iter(self._items)

    def __getitem__(self, index: int) -> Punctuation:
        return self._items[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PunctuationTable):
            return NotImplemented
        return self._items == other._items

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        inner = ", ".join(f"{p.pattern!r}:{p.id}" for p in self._items)
        return f"PunctuationTable([{inner}])"


def probe(table: PunctuationTable, buffer: bytes, offset: int) -> int | None:
    """Function form of PunctuationTable.probe."""
    return table.probe(buffer, offset)
