"""Owned in-memory byte buffers handed out for converted images."""

from __future__ import annotations

import uuid


class HandleReleasedError(RuntimeError):
    """Raised when reading a handle whose buffer was already released."""


class RetrievableHandle:
    """A byte buffer that lives until its owner calls :meth:`release`.

    Every conversion allocates a fresh handle, so two runs over the same input
    produce distinct ``handle_id`` values even when the bytes are identical.
    """

    __slots__ = ("_data", "_size", "handle_id")

    def __init__(self, data: bytes) -> None:
        self._data: bytes | None = bytes(data)
        self._size = len(self._data)
        self.handle_id = f"handle-{uuid.uuid4().hex}"

    @property
    def size(self) -> int:
        return self._size

    @property
    def released(self) -> bool:
        return self._data is None

    def read(self) -> bytes:
        if self._data is None:
            raise HandleReleasedError(f"{self.handle_id} has been released")
        return self._data

    def release(self) -> None:
        self._data = None

    def __repr__(self) -> str:
        state = "released" if self.released else f"{self._size} bytes"
        return f"RetrievableHandle({self.handle_id!r}, {state})"


__all__ = ["HandleReleasedError", "RetrievableHandle"]
