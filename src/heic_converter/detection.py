from __future__ import annotations

from .constants import SOURCE_SUFFIX


def has_suffix(name: str, suffix: str = SOURCE_SUFFIX) -> bool:
    """Recognize a source file by its name alone; the payload is never sniffed."""
    return name.lower().endswith(suffix.lower())


__all__ = ["has_suffix"]
