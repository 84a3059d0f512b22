from __future__ import annotations

from pathlib import Path

import pytest

from heic_converter.adapters import CodecError
from heic_converter.models import SourceItem


class FakeCodec:
    """Deterministic codec: prefixes the payload, fails for listed payloads."""

    def __init__(self, fail_on: set[bytes] | None = None) -> None:
        self.fail_on = fail_on or set()
        self.calls: list[tuple[bytes, str, float]] = []

    async def convert(self, payload: bytes, *, target_format: str, quality: float) -> bytes:
        self.calls.append((payload, target_format, quality))
        if payload in self.fail_on:
            raise CodecError(f"cannot decode {payload!r}")
        return b"JPEG:" + payload


def make_item(name: str, data: bytes | None = None) -> SourceItem:
    return SourceItem.from_bytes(name, data if data is not None else name.encode("utf-8"))


@pytest.fixture
def fake_codec() -> FakeCodec:
    return FakeCodec()


@pytest.fixture
def heic_dir(tmp_path: Path) -> Path:
    folder = tmp_path / "photos"
    folder.mkdir()
    (folder / "a.heic").write_bytes(b"aaaa")
    (folder / "B.HEIC").write_bytes(b"bb")
    (folder / "notes.txt").write_text("skip me", encoding="utf-8")
    return folder
