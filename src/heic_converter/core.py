from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from .adapters import Codec, get_codec, run_sync
from .config import AppConfig
from .handles import RetrievableHandle
from .logging import BatchSummary, RunLogEntry, RunLogger, get_logger
from .models import BatchResult, ConversionOptions, OutputArtifact, SourceItem
from .state import BatchState
from .utils import derive_output_name, generate_run_id

ProgressCallback = Callable[[int, int], None]

logger = get_logger("core")


class ConversionError(RuntimeError):
    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code


@dataclass(slots=True)
class _RunContext:
    batch_id: str
    codec: Codec
    options: ConversionOptions
    run_logger: RunLogger
    callback: ProgressCallback


class ConversionOrchestrator:
    """Drives one batch at a time over the roster held in a :class:`BatchState`.

    Items are converted one after another in roster order. A failing item is
    logged and skipped; the batch carries on and the state's ``last_error``
    is set to a single generic message. The output registry is replaced at
    the end of every run, including runs where nothing succeeded.
    """

    def __init__(
        self,
        options: ConversionOptions | None = None,
        *,
        codec: Codec | None = None,
        run_logger: RunLogger | None = None,
    ) -> None:
        self._options = options or ConversionOptions()
        self._codec = codec
        self._run_logger = run_logger or RunLogger(None)

    @classmethod
    def from_config(cls, config: AppConfig, *, codec: Codec | None = None) -> ConversionOrchestrator:
        conversion = config.conversion
        options = ConversionOptions(
            target_format=conversion.target_format,
            quality=conversion.quality,
            source_suffix=conversion.source_suffix,
            target_suffix=conversion.target_suffix,
        )
        return cls(
            options,
            codec=codec or get_codec(conversion.codec),
            run_logger=RunLogger(config.runtime.log_path),
        )

    @property
    def options(self) -> ConversionOptions:
        return self._options

    async def run(
        self,
        state: BatchState,
        codec: Codec | None = None,
        *,
        progress: ProgressCallback | None = None,
    ) -> BatchResult | None:
        items = state.roster.items()
        if not items:
            return None

        context = _RunContext(
            batch_id=generate_run_id("batch"),
            codec=codec or self._codec or get_codec(),
            options=self._options,
            run_logger=self._run_logger,
            callback=progress or (lambda _done, _total: None),
        )
        summary = BatchSummary(total=len(items))
        accumulator: list[OutputArtifact] = []

        state.is_converting = True
        state.last_error = None
        logger.info("Starting %s: %d file(s)", context.batch_id, len(items))
        try:
            for position, item in enumerate(items, start=1):
                try:
                    artifact = await self._convert_item(item, context)
                except ConversionError as exc:
                    summary.failures += 1
                    state.last_error = context.options.error_message
                    logger.error("Error converting %s [%s]: %s", item.name, exc.code, exc, exc_info=exc.__cause__)
                else:
                    summary.successes += 1
                    summary.output_bytes += artifact.byte_size
                    accumulator.append(artifact)
                context.callback(position, len(items))
            state.outputs.replace_all(accumulator)
        finally:
            state.is_converting = False

        logger.info(
            "Finished %s: %d succeeded, %d failed",
            context.batch_id,
            summary.successes,
            summary.failures,
        )
        return BatchResult(outputs=list(accumulator), error=state.last_error, summary=summary)

    async def _convert_item(self, item: SourceItem, context: _RunContext) -> OutputArtifact:
        start = time.perf_counter()
        try:
            payload = await run_sync(item.read_payload)
        except OSError as exc:
            self._log_item(context, item, "failure", "READ_FAILED", start)
            raise ConversionError("READ_FAILED", f"Cannot read {item.name}: {exc}") from exc

        try:
            encoded = await context.codec.convert(
                payload,
                target_format=context.options.target_format,
                quality=context.options.quality,
            )
        except Exception as exc:
            self._log_item(context, item, "failure", "CODEC_FAILED", start)
            raise ConversionError("CODEC_FAILED", f"Codec failed for {item.name}: {exc}") from exc

        name = derive_output_name(item.name, context.options.source_suffix, context.options.target_suffix)
        artifact = OutputArtifact(
            name=name,
            handle=RetrievableHandle(encoded),
            byte_size=len(encoded),
            source_name=item.name,
        )
        self._log_item(context, item, "success", None, start, artifact)
        return artifact

    def _log_item(
        self,
        context: _RunContext,
        item: SourceItem,
        status: str,
        error_code: str | None,
        start: float,
        artifact: OutputArtifact | None = None,
    ) -> None:
        context.run_logger.append(
            RunLogEntry(
                batch_id=context.batch_id,
                source=item.name,
                status=status,
                error_code=error_code,
                convert_ms=(time.perf_counter() - start) * 1000,
                output_name=artifact.name if artifact else None,
                size_bytes=artifact.byte_size if artifact else 0,
            )
        )


__all__ = [
    "ConversionError",
    "ConversionOrchestrator",
    "ProgressCallback",
]
