from pathlib import Path
from zipfile import ZipFile

import pytest

from conftest import FakeCodec, make_item
from heic_converter.config import AppConfig, RuntimeConfig
from heic_converter.constants import BATCH_ERROR_MESSAGE
from heic_converter.export import export_all, export_zip
from heic_converter.session import ConverterSession


def build_session(tmp_path: Path, codec: FakeCodec) -> ConverterSession:
    config = AppConfig(runtime=RuntimeConfig(output_dir=tmp_path / "out"))
    return ConverterSession(config, codec=codec)


def test_select_clears_error_but_drop_does_not(tmp_path: Path, fake_codec: FakeCodec) -> None:
    session = build_session(tmp_path, fake_codec)
    session.state.last_error = BATCH_ERROR_MESSAGE
    session.drop_files([make_item("a.heic")])
    assert session.error == BATCH_ERROR_MESSAGE
    session.select_files([make_item("b.heic"), make_item("c.png")])
    assert session.error is None
    assert [f.name for f in session.files] == ["a.heic", "b.heic"]


def test_remove_and_clear(tmp_path: Path, fake_codec: FakeCodec) -> None:
    session = build_session(tmp_path, fake_codec)
    session.select_files([make_item("a.heic"), make_item("b.heic")])
    session.remove_file(0)
    assert [f.name for f in session.files] == ["b.heic"]
    session.clear_files()
    assert session.files == ()


@pytest.mark.asyncio
async def test_convert_releases_superseded_handles(tmp_path: Path, fake_codec: FakeCodec) -> None:
    session = build_session(tmp_path, fake_codec)
    session.select_files([make_item("a.heic")])
    await session.convert()
    first = session.outputs[0]
    await session.convert()

    assert first.handle.released
    assert not session.outputs[0].handle.released
    assert session.converting is False


@pytest.mark.asyncio
async def test_convert_on_empty_roster_keeps_outputs(tmp_path: Path, fake_codec: FakeCodec) -> None:
    session = build_session(tmp_path, fake_codec)
    session.select_files([make_item("a.heic")])
    await session.convert()
    kept = session.outputs[0]
    session.clear_files()
    assert await session.convert() is None
    assert session.outputs == (kept,)
    assert not kept.handle.released


@pytest.mark.asyncio
async def test_download_writes_bytes_under_artifact_name(tmp_path: Path, fake_codec: FakeCodec) -> None:
    session = build_session(tmp_path, fake_codec)
    session.select_files([make_item("IMG_1.HEIC", b"raw")])
    await session.convert()

    path = session.download(0)
    assert path == tmp_path / "out" / "IMG_1.jpg"
    assert path.read_bytes() == b"JPEG:raw"

    other = session.download(session.outputs[0], tmp_path / "elsewhere")
    assert other.read_bytes() == b"JPEG:raw"


@pytest.mark.asyncio
async def test_close_releases_everything(tmp_path: Path, fake_codec: FakeCodec) -> None:
    session = build_session(tmp_path, fake_codec)
    session.select_files([make_item("a.heic"), make_item("b.heic")])
    await session.convert()
    outputs = session.outputs
    session.close()
    assert all(a.handle.released for a in outputs)
    assert session.outputs == ()


@pytest.mark.asyncio
async def test_export_all_and_zip(tmp_path: Path, fake_codec: FakeCodec) -> None:
    session = build_session(tmp_path, fake_codec)
    session.select_files([make_item("a.heic"), make_item("b.heic"), make_item("a.heic")])
    await session.convert()

    written = export_all(session.outputs, tmp_path / "all")
    assert sorted(p.name for p in written) == ["a.jpg", "a.jpg", "b.jpg"]

    archive = export_zip(session.outputs, tmp_path / "out.zip")
    with ZipFile(archive) as handle:
        assert handle.namelist() == ["a.jpg", "b.jpg", "a (1).jpg"]
        assert handle.read("a (1).jpg") == b"JPEG:a.heic"
        assert handle.read("b.jpg") == b"JPEG:b.heic"


@pytest.mark.asyncio
async def test_download_keeps_non_ascii_and_spaced_names(tmp_path: Path, fake_codec: FakeCodec) -> None:
    session = build_session(tmp_path, fake_codec)
    session.select_files([make_item("写真.HEIC"), make_item("画像.HEIC"), make_item("My Photo.heic"), make_item("été.heic")])
    await session.convert()

    written = [session.download(index) for index in range(len(session.outputs))]
    assert [path.name for path in written] == ["写真.jpg", "画像.jpg", "My Photo.jpg", "été.jpg"]
    assert [path.name for path in written] == [artifact.name for artifact in session.outputs]
    assert written[0].read_bytes() == "JPEG:写真.HEIC".encode("utf-8")

    archive = export_zip(session.outputs, tmp_path / "photos.zip")
    with ZipFile(archive) as handle:
        assert handle.namelist() == ["写真.jpg", "画像.jpg", "My Photo.jpg", "été.jpg"]
        assert handle.read("画像.jpg") == "JPEG:画像.HEIC".encode("utf-8")


@pytest.mark.asyncio
async def test_export_strips_directory_components(tmp_path: Path, fake_codec: FakeCodec) -> None:
    session = build_session(tmp_path, fake_codec)
    session.select_files([make_item("../escape.heic")])
    await session.convert()

    path = session.download(0, tmp_path / "safe")
    assert path == tmp_path / "safe" / "escape.jpg"
