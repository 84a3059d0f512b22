"""Domain models for HEIC conversion batches."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from .constants import (
    BATCH_ERROR_MESSAGE,
    DEFAULT_QUALITY,
    SOURCE_SUFFIX,
    TARGET_FORMAT,
    TARGET_SUFFIX,
)
from .handles import RetrievableHandle
from .logging import BatchSummary

PayloadSource = Union[bytes, Path]


@dataclass(frozen=True, slots=True)
class SourceItem:
    """One user-selected input file."""

    name: str
    byte_size: int
    payload: PayloadSource = field(repr=False)

    @classmethod
    def from_path(cls, path: Path) -> SourceItem:
        return cls(name=path.name, byte_size=path.stat().st_size, payload=path)

    @classmethod
    def from_bytes(cls, name: str, data: bytes) -> SourceItem:
        return cls(name=name, byte_size=len(data), payload=bytes(data))

    def read_payload(self) -> bytes:
        if isinstance(self.payload, Path):
            return self.payload.read_bytes()
        return self.payload


@dataclass(frozen=True, slots=True)
class OutputArtifact:
    """A converted image held in memory until exported or released."""

    name: str
    handle: RetrievableHandle
    byte_size: int
    source_name: str = ""

    def read(self) -> bytes:
        return self.handle.read()


@dataclass(slots=True)
class ConversionOptions:
    """Configuration for a single batch run."""

    target_format: str = TARGET_FORMAT
    quality: float = DEFAULT_QUALITY
    source_suffix: str = SOURCE_SUFFIX
    target_suffix: str = TARGET_SUFFIX
    error_message: str = BATCH_ERROR_MESSAGE


@dataclass(slots=True)
class BatchResult:
    """Aggregate results for one orchestration run."""

    outputs: list[OutputArtifact]
    error: str | None
    summary: BatchSummary


__all__ = [
    "BatchResult",
    "ConversionOptions",
    "OutputArtifact",
    "PayloadSource",
    "SourceItem",
]
