from __future__ import annotations

from collections.abc import Iterable, Iterator

from .models import OutputArtifact


class OutputRegistry:
    """Holds the artifacts of the most recent run.

    Batches are swapped wholesale through :meth:`replace_all`; there is no
    per-item removal.
    """

    def __init__(self) -> None:
        self._artifacts: tuple[OutputArtifact, ...] = ()

    def replace_all(self, artifacts: Iterable[OutputArtifact]) -> tuple[OutputArtifact, ...]:
        previous = self._artifacts
        self._artifacts = tuple(artifacts)
        return previous

    def list(self) -> tuple[OutputArtifact, ...]:
        return self._artifacts

    def get(self, name: str) -> OutputArtifact | None:
        for artifact in self._artifacts:
            if artifact.name == name:
                return artifact
        return None

    @property
    def total_bytes(self) -> int:
        return sum(artifact.byte_size for artifact in self._artifacts)

    def __len__(self) -> int:
        return len(self._artifacts)

    def __iter__(self) -> Iterator[OutputArtifact]:
        return iter(self._artifacts)

    def __getitem__(self, index: int) -> OutputArtifact:
        return self._artifacts[index]


__all__ = ["OutputRegistry"]
