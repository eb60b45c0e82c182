from .cluster_discovery import ClusterDiscovery
from .consul_cluster_discovery import ConsulClusterDiscovery
from .static_cluster_discovery import StaticClusterDiscovery

__all__ = [
    "ClusterDiscovery",
    "ConsulClusterDiscovery",
    "StaticClusterDiscovery",
]
