from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from .adapters import Codec
from .config import AppConfig
from .core import ConversionOrchestrator, ProgressCallback
from .export import export_artifact
from .models import BatchResult, OutputArtifact, SourceItem
from .state import BatchState


class ConverterSession:
    """Front door for a presentation layer driving one conversion session.

    Explicit file selection clears the batch error, dropping files does not.
    The session owns the output handles and releases the ones superseded by
    each new run, plus everything outstanding on :meth:`close`.
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        codec: Codec | None = None,
        orchestrator: ConversionOrchestrator | None = None,
    ) -> None:
        self._config = config or AppConfig()
        self._orchestrator = orchestrator or ConversionOrchestrator.from_config(self._config, codec=codec)
        self.state = BatchState.for_suffix(self._config.conversion.source_suffix)

    @property
    def config(self) -> AppConfig:
        return self._config

    @property
    def files(self) -> tuple[SourceItem, ...]:
        return self.state.roster.items()

    @property
    def outputs(self) -> tuple[OutputArtifact, ...]:
        return self.state.outputs.list()

    @property
    def error(self) -> str | None:
        return self.state.last_error

    @property
    def converting(self) -> bool:
        return self.state.is_converting

    def select_files(self, candidates: Iterable[Any]) -> list[SourceItem]:
        accepted = self.state.roster.add(candidates)
        self.state.last_error = None
        return accepted

    def drop_files(self, candidates: Iterable[Any]) -> list[SourceItem]:
        return self.state.roster.add(candidates)

    def remove_file(self, index: int) -> SourceItem | None:
        return self.state.roster.remove_at(index)

    def clear_files(self) -> None:
        self.state.roster.clear()

    async def convert(self, *, progress: ProgressCallback | None = None) -> BatchResult | None:
        previous = self.state.outputs.list()
        result = await self._orchestrator.run(self.state, progress=progress)
        if result is not None:
            _release(previous)
        return result

    def download(self, artifact: OutputArtifact | int, destination: Path | None = None) -> Path:
        if isinstance(artifact, int):
            artifact = self.state.outputs[artifact]
        return export_artifact(artifact, destination or self._config.runtime.output_dir)

    def close(self) -> None:
        _release(self.state.outputs.replace_all(()))


def _release(artifacts: Iterable[OutputArtifact]) -> None:
    for artifact in artifacts:
        artifact.handle.release()


__all__ = ["ConverterSession"]
