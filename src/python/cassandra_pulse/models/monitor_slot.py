"""Per-service monitor entry.

A tracked service is either ``Connected`` to a live monitor or
``Disconnected`` when no session could be opened against its nodes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from cassandra_pulse.services.monitors import ClusterMonitor


@dataclass(frozen=True)
class Connected:
    monitor: ClusterMonitor


@dataclass(frozen=True)
class Disconnected:
    pass


MonitorSlot = Union[Connected, Disconnected]
