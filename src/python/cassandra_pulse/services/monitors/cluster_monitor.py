"""Monitor interfaces consumed by the runner.

A :class:`ClusterMonitor` owns a live probing session against the nodes
of one cluster. A :class:`MonitorFactory` opens one, or returns ``None``
when the cluster cannot be reached.
"""

from __future__ import annotations

import abc
from typing import Callable, Optional

from cassandra_pulse.models import Credentials, NodeAddress, Service

HostRemovedCallback = Callable[[NodeAddress], None]


class ClusterMonitor(abc.ABC):

    @abc.abstractmethod
    def collect_get_latencies(self) -> dict[NodeAddress, float]:
        """Read latency per node, in seconds."""
        ...

    @abc.abstractmethod
    def collect_set_latencies(self) -> dict[NodeAddress, float]:
        """Write latency per node, in seconds."""
        ...

    @abc.abstractmethod
    def collect_availability(self) -> dict[NodeAddress, bool]:
        ...

    @abc.abstractmethod
    def close(self) -> None:
        """Release every connection held by the monitor."""
        ...


class MonitorFactory(abc.ABC):

    @abc.abstractmethod
    def create(
        self,
        service: Service,
        addresses: frozenset[NodeAddress],
        timeout: float,
        credentials: Optional[Credentials],
        on_host_removed: HostRemovedCallback,
    ) -> Optional[ClusterMonitor]:
        """Open a monitor against ``addresses``.

        Returns ``None`` instead of raising when no node can be reached.
        ``on_host_removed`` is invoked when a node leaves the cluster
        while the monitor is alive.
        """
        ...
