from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_PATH = Path("config.toml")
ENV_PREFIX = "HEIC_CONVERTER_"

SOURCE_SUFFIX = ".heic"
TARGET_SUFFIX = ".jpg"
TARGET_FORMAT = "jpeg"
DEFAULT_QUALITY = 0.9
DEFAULT_CODEC = "pillow"

BATCH_ERROR_MESSAGE = "Failed to convert one or more files. Please try again."

__all__ = [
    "BATCH_ERROR_MESSAGE",
    "DEFAULT_CODEC",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_QUALITY",
    "ENV_PREFIX",
    "SOURCE_SUFFIX",
    "TARGET_FORMAT",
    "TARGET_SUFFIX",
]
