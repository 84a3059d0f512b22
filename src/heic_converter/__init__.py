"""In-memory HEIC to JPEG batch conversion."""

from .config import AppConfig, load_config
from .core import ConversionError, ConversionOrchestrator
from .handles import HandleReleasedError, RetrievableHandle
from .models import BatchResult, ConversionOptions, OutputArtifact, SourceItem
from .registry import OutputRegistry
from .roster import InputRoster
from .session import ConverterSession
from .state import BatchState
from .utils import derive_output_name, format_byte_size

__all__ = [
    "AppConfig",
    "BatchResult",
    "BatchState",
    "ConversionError",
    "ConversionOptions",
    "ConversionOrchestrator",
    "ConverterSession",
    "HandleReleasedError",
    "InputRoster",
    "OutputArtifact",
    "OutputRegistry",
    "RetrievableHandle",
    "SourceItem",
    "derive_output_name",
    "format_byte_size",
    "load_config",
]
