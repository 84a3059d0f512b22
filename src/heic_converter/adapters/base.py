from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any, Protocol, TypeVar

T = TypeVar("T")


class CodecError(RuntimeError):
    """Raised when a codec cannot decode or encode a payload."""


class Codec(Protocol):
    async def convert(self, payload: bytes, *, target_format: str, quality: float) -> bytes:  # pragma: no cover - interface
        ...


async def run_sync(func: Callable[..., T], /, *args: Any, **kwargs: Any) -> T:
    """Execute *func* in a worker thread and return the result."""

    return await asyncio.to_thread(func, *args, **kwargs)


__all__ = ["Codec", "CodecError", "run_sync"]
