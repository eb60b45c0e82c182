"""Per-cluster Prometheus series.

The gauge families are shared by every cluster and owned by
:class:`ClusterMetricsFactory`. A :class:`ClusterMetrics` only owns the
label sets of its own cluster, which lets it drop them all on close
without touching other clusters.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from prometheus_client import Gauge

from cassandra_pulse.models import NodeAddress, Service


@dataclass(frozen=True)
class ClusterGauges:
    up: Gauge
    get_latency: Gauge
    set_latency: Gauge
    reachable: Gauge


class ClusterMetrics:
    """Metrics sink of one monitored cluster.

    Nodes missing from an update lose their series, so a node that left
    the cluster stops reporting its last known value. Host removal
    callbacks arrive on driver threads, hence the lock.
    """

    def __init__(self, service: Service, gauges: ClusterGauges) -> None:
        self.__logger = logging.getLogger(self.__class__.__name__)
        self.__cluster_name = service.cluster_name
        self.__gauges = gauges
        self.__lock = threading.Lock()
        self.__up_instances: set[str] = set()
        self.__get_instances: set[str] = set()
        self.__set_instances: set[str] = set()
        self.__closed = False
        self.__gauges.reachable.labels(cluster=self.__cluster_name).set(0)

    @property
    def cluster_name(self) -> str:
        return self.__cluster_name

    def update_availability(self, stats: dict[NodeAddress, bool]) -> None:
        with self.__lock:
            if self.__closed:
                return
            self.__up_instances = self.__update(self.__gauges.up, self.__up_instances,
                                                {address: 1.0 if up else 0.0 for address, up in stats.items()})
            self.__gauges.reachable.labels(cluster=self.__cluster_name).set(1 if stats else 0)

    def update_get_latency(self, stats: dict[NodeAddress, float]) -> None:
        with self.__lock:
            if self.__closed:
                return
            self.__get_instances = self.__update(self.__gauges.get_latency, self.__get_instances, stats)

    def update_set_latency(self, stats: dict[NodeAddress, float]) -> None:
        with self.__lock:
            if self.__closed:
                return
            self.__set_instances = self.__update(self.__gauges.set_latency, self.__set_instances, stats)

    def clear(self) -> None:
        """Drop the per-node series; the next poke repopulates them."""
        with self.__lock:
            self.__clear_instances()
            if not self.__closed:
                self.__gauges.reachable.labels(cluster=self.__cluster_name).set(0)

    def close(self) -> None:
        """Release every series exported for this cluster."""
        with self.__lock:
            if self.__closed:
                return
            self.__closed = True
            self.__clear_instances()
            self.__remove(self.__gauges.reachable, self.__cluster_name)
        self.__logger.debug(f"Released metrics of cluster {self.__cluster_name}")

    def __clear_instances(self) -> None:
        for gauge, instances in ((self.__gauges.up, self.__up_instances),
                                 (self.__gauges.get_latency, self.__get_instances),
                                 (self.__gauges.set_latency, self.__set_instances)):
            for instance in instances:
                self.__remove(gauge, self.__cluster_name, instance)
        self.__up_instances = set()
        self.__get_instances = set()
        self.__set_instances = set()

    def __update(self, gauge: Gauge, previous: set[str], values: dict[NodeAddress, float]) -> set[str]:
        current: set[str] = set()
        for address, value in values.items():
            instance = str(address)
            gauge.labels(cluster=self.__cluster_name, instance=instance).set(value)
            current.add(instance)
        for instance in previous - current:
            self.__remove(gauge, self.__cluster_name, instance)
        return current

    @staticmethod
    def __remove(gauge: Gauge, *label_values: str) -> None:
        try:
            gauge.remove(*label_values)
        except KeyError:
            pass
