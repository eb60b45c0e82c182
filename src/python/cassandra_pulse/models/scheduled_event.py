import enum
from dataclasses import dataclass

class EventKind(enum.IntEnum):
    """Periodic activities of the runner, in tie-break order."""

    TOPOLOGY_REFRESH = 0
    HEALTH_POKE = 1


@dataclass
class ScheduledEvent:
    kind: EventKind
    period: float
    next_due: float

    def sort_key(self) -> tuple[float, int]:
        return (self.next_due, int(self.kind))
