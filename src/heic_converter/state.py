from __future__ import annotations

from dataclasses import dataclass, field

from .constants import SOURCE_SUFFIX
from .registry import OutputRegistry
from .roster import InputRoster


@dataclass(slots=True)
class BatchState:
    """Session-scoped pipeline state shared by the roster, orchestrator and registry.

    ``is_converting`` is advisory: it is raised for the duration of one run
    and is not a lock.
    """

    roster: InputRoster = field(default_factory=InputRoster)
    outputs: OutputRegistry = field(default_factory=OutputRegistry)
    is_converting: bool = False
    last_error: str | None = None

    @classmethod
    def for_suffix(cls, suffix: str = SOURCE_SUFFIX) -> BatchState:
        return cls(roster=InputRoster(suffix))


__all__ = ["BatchState"]
