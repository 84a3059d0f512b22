from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from .constants import (
    DEFAULT_CODEC,
    DEFAULT_QUALITY,
    SOURCE_SUFFIX,
    TARGET_FORMAT,
    TARGET_SUFFIX,
)
from .settings import get_settings


@dataclass(slots=True)
class ConversionConfig:
    quality: float = DEFAULT_QUALITY
    target_format: str = TARGET_FORMAT
    source_suffix: str = SOURCE_SUFFIX
    target_suffix: str = TARGET_SUFFIX
    codec: str = DEFAULT_CODEC


@dataclass(slots=True)
class RuntimeConfig:
    output_dir: Path = Path("converted")
    log_file: str = ""
    log_level: str = "INFO"

    @property
    def log_path(self) -> Path | None:
        if not self.log_file:
            return None
        return self.output_dir / self.log_file


@dataclass(slots=True)
class AppConfig:
    conversion: ConversionConfig = field(default_factory=ConversionConfig)
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)


def _read_toml(path: Path) -> Mapping[str, object]:
    if not path.exists():
        return {}
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _validate_quality(value: float) -> float:
    if not 0.0 < value <= 1.0:
        raise ValueError(f"quality must be in (0, 1], got {value!r}")
    return value


def _normalize_suffix(value: str) -> str:
    value = value.strip()
    if not value.startswith("."):
        value = f".{value}"
    return value


def _build_conversion(data: Mapping[str, object] | None) -> ConversionConfig:
    if not data:
        return ConversionConfig()
    return ConversionConfig(
        quality=_validate_quality(float(data.get("quality", DEFAULT_QUALITY))),
        target_format=str(data.get("target_format", TARGET_FORMAT)).lower(),
        source_suffix=_normalize_suffix(str(data.get("source_suffix", SOURCE_SUFFIX))),
        target_suffix=_normalize_suffix(str(data.get("target_suffix", TARGET_SUFFIX))),
        codec=str(data.get("codec", DEFAULT_CODEC)),
    )


def _build_runtime(data: Mapping[str, object] | None) -> RuntimeConfig:
    if not data:
        return RuntimeConfig()
    return RuntimeConfig(
        output_dir=Path(str(data.get("output_dir", "converted"))),
        log_file=str(data.get("log_file", "")),
        log_level=str(data.get("log_level", "INFO")).upper(),
    )


def load_config(path: Path | None = None) -> AppConfig:
    path = path or get_settings().config_path
    raw = _read_toml(path)
    conversion_data = raw.get("conversion") if isinstance(raw, Mapping) else None
    runtime_data = raw.get("runtime") if isinstance(raw, Mapping) else None
    conversion = _build_conversion(conversion_data if isinstance(conversion_data, Mapping) else None)
    runtime = _build_runtime(runtime_data if isinstance(runtime_data, Mapping) else None)
    settings = get_settings()
    if settings.log_level is not None:
        runtime.log_level = settings.log_level
    return AppConfig(conversion=conversion, runtime=runtime)


def dump_config(config: AppConfig) -> str:
    payload = {
        "conversion": {
            "quality": config.conversion.quality,
            "target_format": config.conversion.target_format,
            "source_suffix": config.conversion.source_suffix,
            "target_suffix": config.conversion.target_suffix,
            "codec": config.conversion.codec,
        },
        "runtime": {
            "output_dir": str(config.runtime.output_dir),
            "log_file": config.runtime.log_file,
            "log_level": config.runtime.log_level,
        },
    }
    return json.dumps(payload, indent=2)


__all__ = [
    "AppConfig",
    "ConversionConfig",
    "RuntimeConfig",
    "dump_config",
    "load_config",
]
