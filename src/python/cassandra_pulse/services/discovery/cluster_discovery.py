"""Abstract base class for cluster discovery.

Implementations resolve the logical Cassandra clusters to monitor and
the network endpoints of their members. The result may change at any
time as clusters are provisioned, resized or decommissioned.
"""

from __future__ import annotations

import abc

from cassandra_pulse.models import NodeAddress, Service


class ClusterDiscovery(abc.ABC):
    """Interface that supplies the current fleet topology."""

    @abc.abstractmethod
    def get_services_nodes(self) -> dict[Service, frozenset[NodeAddress]]:
        """Return every known cluster with its current node set.

        Called on every topology refresh. It **must not** raise for
        transient lookup failures: an empty mapping means "no data
        right now" and the runner keeps its previous topology.
        """
        ...
