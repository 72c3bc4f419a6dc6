"""Per-call record of the recovery stages tried."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class StageEvent:
    """One stage the fallback chain attempted."""

    stage: str
    succeeded: bool
    message: str
    data: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)


class RecoveryTracer:
    """Collects a StageEvent for every stage a recovery walks through.

    Pass one to ``recover()`` to see why a value came from the stage it did.
    The tracer only records; logging stays with ``JsonRecovery``.
    """

    def __init__(self):
        self.events: list[StageEvent] = []

    def log(
        self,
        stage: str,
        succeeded: bool,
        message: str,
        data: dict[str, Any] | None = None,
    ) -> None:
        """Record one recovery stage."""
        self.events.append(StageEvent(stage, succeeded, message, data or {}))

    def get_events(self, stage: str | None = None) -> list[StageEvent]:
        """Get recorded events, optionally filtered by stage."""
        if stage:
            return [e for e in self.events if e.stage == stage]
        return self.events.copy()

    @property
    def final_stage(self) -> str | None:
        """Stage of the last successful event, if any."""
        for event in reversed(self.events):
            if event.succeeded:
                return event.stage
        return None

    def clear(self) -> None:
        self.events.clear()
