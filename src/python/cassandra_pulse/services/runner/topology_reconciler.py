import logging
from typing import Optional
from injector import inject, singleton
from cassandra_pulse.configs import PulseConfig
from cassandra_pulse.models import Connected, Credentials, Disconnected, NodeAddress, Service, TopologySnapshot
from cassandra_pulse.services.discovery import ClusterDiscovery
from cassandra_pulse.services.metrics import ClusterMetrics, ClusterMetricsFactory
from cassandra_pulse.services.monitors import MonitorFactory
from cassandra_pulse.services.runner.tracked_clusters import TrackedClusters

@singleton
class TopologyReconciler:
    """Aligns the tracked clusters with a freshly discovered topology.

    A cluster whose node set changed is fully replaced: its monitor and
    sink are released and new ones are created, so connections are never
    reused across a membership change. Clusters with an identical node
    set are left untouched.
    """

    @inject
    def __init__(self,
                 pulse_config: PulseConfig,
                 discovery: ClusterDiscovery,
                 monitor_factory: MonitorFactory,
                 metrics_factory: ClusterMetricsFactory,
                 tracked_clusters: TrackedClusters):
        self.__logger = logging.getLogger(self.__class__.__name__)
        self.__app_config = pulse_config.app
        self.__discovery = discovery
        self.__monitor_factory = monitor_factory
        self.__metrics_factory = metrics_factory
        self.__tracked_clusters = tracked_clusters

    def reconcile(self, previous: TopologySnapshot) -> TopologySnapshot:
        discovered: TopologySnapshot = self.__discovery.get_services_nodes()

        # Discovery down?
        if not discovered and not self.__app_config.allow_empty_topology:
            self.__logger.warning("Discovery sent back no service to monitor. Is it down? Keeping the previous topology.")
            return previous

        # Dispose changed and removed clusters
        for service, addresses in previous.items():
            if discovered.get(service) != addresses:
                self.__logger.info(f"{service} has changed, its monitor will be disposed")
                self.__tracked_clusters.release(service)

        # Create new and changed clusters
        for service, addresses in discovered.items():
            if previous.get(service) != addresses:
                self.__logger.info(f"A new monitor for {service} will be created ({len(addresses)} nodes)")
                self.__track(service, addresses)

        return dict(discovered)

    def __track(self, service: Service, addresses: frozenset[NodeAddress]) -> None:
        metrics: ClusterMetrics = self.__metrics_factory.create(service)

        def on_host_removed(address: NodeAddress) -> None:
            self.__logger.info(f"{address} left {service}, clearing its metrics")
            metrics.clear()

        try:
            monitor = self.__monitor_factory.create(
                service,
                addresses,
                self.__app_config.timeout_sec,
                self.__credentials(service),
                on_host_removed,
            )
        except BaseException:
            # The sink is not tracked yet, nothing else would release it
            metrics.close()
            raise
        if monitor is None:
            self.__logger.warning(f"{service} is unreachable, tracking it without a monitor")
            self.__tracked_clusters.track(service, Disconnected(), metrics)
        else:
            self.__tracked_clusters.track(service, Connected(monitor), metrics)

    def __credentials(self, service: Service) -> Optional[Credentials]:
        if service.username is not None and service.password is not None:
            return Credentials(username=service.username, password=service.password)
        if self.__app_config.username is not None and self.__app_config.password is not None:
            return Credentials(username=self.__app_config.username, password=self.__app_config.password)
        return None
