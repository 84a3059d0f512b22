from __future__ import annotations

import hashlib
import os
import re
import tempfile
import time
from collections.abc import Iterable
from pathlib import Path
from typing import Iterator

from .constants import SOURCE_SUFFIX, TARGET_SUFFIX


SAFE_FILENAME_RE = re.compile(r"[^A-Za-z0-9._-]+")
SIZE_UNITS = ("Bytes", "KB", "MB", "GB")
SIZE_STEP = 1024


def derive_output_name(
    source_name: str,
    source_suffix: str = SOURCE_SUFFIX,
    target_suffix: str = TARGET_SUFFIX,
) -> str:
    """Swap a trailing *source_suffix* (any case) for *target_suffix*.

    Only the end of the name is considered, so ``a.heic.heic`` becomes
    ``a.heic.jpg``. Names without the suffix come back unchanged.
    """

    if not source_name.lower().endswith(source_suffix.lower()):
        return source_name
    return source_name[: len(source_name) - len(source_suffix)] + target_suffix


def format_byte_size(size_bytes: int) -> str:
    if size_bytes < 0:
        raise ValueError("size_bytes must be non-negative")
    if size_bytes == 0:
        return "0 Bytes"
    index = 0
    while index < len(SIZE_UNITS) - 1 and size_bytes >= SIZE_STEP ** (index + 1):
        index += 1
    scaled = f"{size_bytes / SIZE_STEP ** index:.2f}".rstrip("0").rstrip(".")
    return f"{scaled} {SIZE_UNITS[index]}"


def slugify(value: str, max_length: int = 120) -> str:
    normalized = SAFE_FILENAME_RE.sub("-", value.strip())
    normalized = re.sub("-+", "-", normalized)
    normalized = normalized.replace("-.", ".")
    normalized = normalized.strip("-._")
    if not normalized:
        normalized = "file"
    if len(normalized) > max_length:
        normalized = normalized[:max_length]
    return normalized


def generate_run_id(prefix: str = "run") -> str:
    epoch_ms = int(time.time() * 1000)
    random_bits = hashlib.sha256(os.urandom(16)).hexdigest()[:8]
    return f"{prefix}-{epoch_ms}-{random_bits}"


def atomic_write_bytes(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile("wb", delete=False, dir=path.parent) as tmp:
        tmp.write(data)
        tmp.flush()
        os.fsync(tmp.fileno())
    os.replace(tmp.name, path)


def iter_files(paths: Iterable[Path]) -> Iterator[Path]:
    for path in paths:
        if path.is_file():
            yield path
        elif path.is_dir():
            for file_path in sorted(path.rglob("*")):
                if file_path.is_file():
                    yield file_path


__all__ = [
    "atomic_write_bytes",
    "derive_output_name",
    "format_byte_size",
    "generate_run_id",
    "iter_files",
    "slugify",
]
