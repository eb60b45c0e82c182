from injector import inject, singleton
from prometheus_client import CollectorRegistry, Gauge
from cassandra_pulse.models import Service
from cassandra_pulse.services.metrics.cluster_metrics import ClusterGauges, ClusterMetrics

@singleton
class ClusterMetricsFactory:
    """Registers the cluster gauge families once on the injected registry
    and hands out one :class:`ClusterMetrics` per monitored cluster."""

    @inject
    def __init__(self, registry: CollectorRegistry):
        self.__gauges = ClusterGauges(
            up=Gauge("cassandra_up", "Are the servers up?", ["cluster", "instance"], registry=registry),
            get_latency=Gauge("cassandra_get_latency_seconds", "Latency of a read probe on each server", ["cluster", "instance"], registry=registry),
            set_latency=Gauge("cassandra_set_latency_seconds", "Latency of a write probe on each server", ["cluster", "instance"], registry=registry),
            reachable=Gauge("cassandra_cluster_reachable", "Could a monitor session be opened and report availability?", ["cluster"], registry=registry),
        )

    def create(self, service: Service) -> ClusterMetrics:
        return ClusterMetrics(service, self.__gauges)
