"""Write converted artifacts out of memory, one file each or as a zip."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from zipfile import ZIP_DEFLATED, ZipFile

from .logging import get_logger
from .models import OutputArtifact
from .utils import atomic_write_bytes, slugify

logger = get_logger("export")


def export_name(artifact: OutputArtifact) -> str:
    """The artifact's own name with any directory components stripped."""
    name = Path(artifact.name).name
    if name in {"", ".", ".."}:
        return slugify(artifact.name)
    return name


def _unique_name(name: str, taken: set[str]) -> str:
    candidate = name
    stem, suffix = Path(name).stem, Path(name).suffix
    counter = 1
    while candidate in taken:
        candidate = f"{stem} ({counter}){suffix}"
        counter += 1
    return candidate


def export_artifact(artifact: OutputArtifact, directory: Path) -> Path:
    destination = directory / export_name(artifact)
    atomic_write_bytes(destination, artifact.read())
    logger.debug("Exported %s -> %s", artifact.name, destination)
    return destination


def export_all(artifacts: Iterable[OutputArtifact], directory: Path) -> list[Path]:
    return [export_artifact(artifact, directory) for artifact in artifacts]


def export_zip(artifacts: Iterable[OutputArtifact], zip_path: Path) -> Path:
    zip_path.parent.mkdir(parents=True, exist_ok=True)
    taken: set[str] = set()
    with ZipFile(zip_path, "w", compression=ZIP_DEFLATED) as archive:
        for artifact in artifacts:
            # Same-named inputs are legal; later ones get a " (n)" suffix.
            arcname = _unique_name(export_name(artifact), taken)
            taken.add(arcname)
            archive.writestr(arcname, artifact.read())
    return zip_path


__all__ = ["export_all", "export_artifact", "export_name", "export_zip"]
