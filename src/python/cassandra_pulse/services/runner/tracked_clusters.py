import logging
from typing import Iterator
from injector import singleton
from cassandra_pulse.models import Connected, Disconnected, MonitorSlot, Service
from cassandra_pulse.services.metrics import ClusterMetrics

@singleton
class TrackedClusters:
    """Monitor slots and metrics sinks of every tracked cluster.

    Both maps always hold the same keys: a slot and its sink are added
    together by :meth:`track` and released together by :meth:`release`.
    Only the runner thread mutates them.
    """

    def __init__(self):
        self.__logger = logging.getLogger(self.__class__.__name__)
        self.__monitors: dict[Service, MonitorSlot] = {}
        self.__metrics: dict[Service, ClusterMetrics] = {}

    def __len__(self) -> int:
        return len(self.__monitors)

    def __contains__(self, service: Service) -> bool:
        return service in self.__monitors

    def services(self) -> list[Service]:
        return list(self.__monitors)

    def entries(self) -> Iterator[tuple[Service, MonitorSlot, ClusterMetrics]]:
        for service, slot in list(self.__monitors.items()):
            yield service, slot, self.__metrics[service]

    def connected_count(self) -> int:
        return sum(1 for slot in self.__monitors.values() if isinstance(slot, Connected))

    def track(self, service: Service, slot: MonitorSlot, metrics: ClusterMetrics) -> None:
        if service in self.__monitors:
            raise ValueError(f"{service} is already tracked")
        self.__monitors[service] = slot
        self.__metrics[service] = metrics

    def release(self, service: Service) -> None:
        """Close the monitor (if connected) and the sink of ``service``.

        A failing close is logged and does not prevent the other one.
        """
        slot = self.__monitors.pop(service, Disconnected())
        metrics = self.__metrics.pop(service, None)
        if isinstance(slot, Connected):
            try:
                slot.monitor.close()
            except Exception:
                self.__logger.exception(f"Failed to close the monitor of {service}")
        if metrics is not None:
            try:
                metrics.close()
            except Exception:
                self.__logger.exception(f"Failed to release the metrics of {service}")

    def release_all(self) -> None:
        for service in self.services():
            self.release(service)
