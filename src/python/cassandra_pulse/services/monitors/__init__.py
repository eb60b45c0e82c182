from .cluster_monitor import ClusterMonitor, HostRemovedCallback, MonitorFactory
from .cassandra_cluster_monitor import CassandraClusterMonitor
from .cassandra_monitor_factory import CassandraMonitorFactory

__all__ = [
    "CassandraClusterMonitor",
    "CassandraMonitorFactory",
    "ClusterMonitor",
    "HostRemovedCallback",
    "MonitorFactory",
]
