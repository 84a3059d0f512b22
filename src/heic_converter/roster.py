"""Ordered collection of accepted source images."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

from .constants import SOURCE_SUFFIX
from .detection import has_suffix
from .logging import get_logger
from .models import SourceItem

logger = get_logger("roster")


def to_source_item(candidate: Any) -> SourceItem:
    """Coerce a raw file reference into a :class:`SourceItem`.

    Accepts an existing item, a filesystem path, or any object exposing
    ``name`` plus either ``read()`` or a ``data`` attribute.
    """
    if isinstance(candidate, SourceItem):
        return candidate
    if isinstance(candidate, Path):
        return SourceItem.from_path(candidate)
    name = getattr(candidate, "name", None)
    if not isinstance(name, str):
        raise TypeError(f"Unsupported file reference: {candidate!r}")
    data = getattr(candidate, "data", None)
    if data is None and callable(getattr(candidate, "read", None)):
        data = candidate.read()
    if not isinstance(data, (bytes, bytearray)):
        raise TypeError(f"File reference {name!r} exposes no byte payload")
    return SourceItem.from_bytes(Path(name).name, bytes(data))


class InputRoster:
    def __init__(self, suffix: str = SOURCE_SUFFIX) -> None:
        self._suffix = suffix
        self._items: list[SourceItem] = []

    @property
    def suffix(self) -> str:
        return self._suffix

    def add(self, candidates: Iterable[Any]) -> list[SourceItem]:
        """Append candidates whose name carries the recognized suffix.

        Order is preserved and duplicates are kept. Candidates with any other
        suffix are skipped without touching anything else.
        """
        accepted: list[SourceItem] = []
        for candidate in candidates:
            name = getattr(candidate, "name", None)
            if not isinstance(name, str):
                raise TypeError(f"Unsupported file reference: {candidate!r}")
            if not has_suffix(name, self._suffix):
                logger.debug("Skipping %s: not a %s file", name, self._suffix)
                continue
            accepted.append(to_source_item(candidate))
        self._items.extend(accepted)
        return accepted

    def remove_at(self, index: int) -> SourceItem | None:
        if index < 0 or index >= len(self._items):
            return None
        return self._items.pop(index)

    def clear(self) -> None:
        self._items.clear()

    def items(self) -> tuple[SourceItem, ...]:
        return tuple(self._items)

    @property
    def total_bytes(self) -> int:
        return sum(item.byte_size for item in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[SourceItem]:
        return iter(tuple(self._items))

    def __getitem__(self, index: int) -> SourceItem:
        return self._items[index]

    def __bool__(self) -> bool:
        return bool(self._items)


__all__ = ["InputRoster", "to_source_item"]
