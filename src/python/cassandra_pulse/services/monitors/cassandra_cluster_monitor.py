import logging
from time import perf_counter, time
from typing import Optional
from cassandra import DriverException
from cassandra.cluster import Cluster, NoHostAvailable, Session
from cassandra.policies import HostStateListener
from cassandra.query import PreparedStatement
from cassandra_pulse.models import NodeAddress, Service
from cassandra_pulse.services.monitors.cluster_monitor import ClusterMonitor, HostRemovedCallback


class HostRemovedListener(HostStateListener):
    """Forwards driver host removals to the runner callback."""

    def __init__(self, on_host_removed: HostRemovedCallback):
        self.__on_host_removed = on_host_removed

    def on_add(self, host):
        pass

    def on_up(self, host):
        pass

    def on_down(self, host):
        pass

    def on_remove(self, host):
        self.__on_host_removed(to_node_address(host))


def to_node_address(host) -> NodeAddress:
    return NodeAddress(host=str(host.endpoint.address), port=int(host.endpoint.port))


class CassandraClusterMonitor(ClusterMonitor):
    """Probes every node of a Cassandra cluster through one driver session.

    Latencies are measured with host-targeted statements on the probe
    table, so each node is timed on its own. A failing probe leaves the
    node out of the result instead of raising.
    """

    def __init__(self,
                 service: Service,
                 cluster: Cluster,
                 session: Session,
                 select_statement: Optional[PreparedStatement],
                 insert_statement: Optional[PreparedStatement]):
        self.__logger = logging.getLogger(self.__class__.__name__)
        self.__service = service
        self.__cluster = cluster
        self.__session = session
        self.__select_statement = select_statement
        self.__insert_statement = insert_statement

    def collect_get_latencies(self) -> dict[NodeAddress, float]:
        if self.__select_statement is None:
            return {}
        return self.__time_probe(self.__select_statement, "get")

    def collect_set_latencies(self) -> dict[NodeAddress, float]:
        if self.__insert_statement is None:
            return {}
        return self.__time_probe(self.__insert_statement, "set")

    def collect_availability(self) -> dict[NodeAddress, bool]:
        return {
            to_node_address(host): bool(host.is_up)
            for host in self.__cluster.metadata.all_hosts()
        }

    def close(self) -> None:
        self.__logger.info(f"Shutting down driver session of {self.__service}")
        self.__cluster.shutdown()

    def __time_probe(self, statement: PreparedStatement, operation: str) -> dict[NodeAddress, float]:
        latencies: dict[NodeAddress, float] = {}
        for host in self.__cluster.metadata.all_hosts():
            if not host.is_up:
                continue
            address = to_node_address(host)
            parameters = self.__parameters(operation, address)
            start_time: float = perf_counter()
            try:
                self.__session.execute(statement, parameters, host=host)
            except (DriverException, NoHostAvailable) as exc:
                self.__logger.debug(f"{operation} probe failed on {address} of {self.__service}: {exc}")
                continue
            latencies[address] = perf_counter() - start_time
        return latencies

    @staticmethod
    def __parameters(operation: str, address: NodeAddress) -> tuple:
        if operation == "set":
            return (str(address), str(time()))
        return (str(address),)
