import logging
import threading
import time
from typing import Callable, Optional
from injector import NoInject, inject, singleton
from prometheus_client import Counter, Histogram
from cassandra_pulse.configs import PulseConfig
from cassandra_pulse.models import EMPTY_TOPOLOGY, EventKind, PulseStatus, TopologySnapshot
from cassandra_pulse.services.runner.event_scheduler import EventScheduler
from cassandra_pulse.services.runner.poke_executor import PokeExecutor
from cassandra_pulse.services.runner.topology_reconciler import TopologyReconciler
from cassandra_pulse.services.runner.tracked_clusters import TrackedClusters

EVENT_EXE_COUNTER = Counter("pulse_event_exe_total", "Total number of runner events executed", ["event"])
EVENT_EXE_DURATION_HISTOGRAM = Histogram("pulse_event_exe_duration_seconds", "Duration of runner events in seconds", ["event"])

@singleton
class PulseRunner:
    """Runs topology refreshes and health pokes until stopped.

    Only one activity runs at a time and this runner is the only writer
    of the topology and of the tracked clusters. :meth:`stop` may be
    called from any thread (e.g. a signal handler): it interrupts the
    wait between two activities, never an activity in progress.
    """

    @inject
    def __init__(self,
                 pulse_config: PulseConfig,
                 topology_reconciler: TopologyReconciler,
                 poke_executor: PokeExecutor,
                 tracked_clusters: TrackedClusters,
                 clock: NoInject[Callable[[], float]] = time.monotonic,
                 stop_event: NoInject[Optional[threading.Event]] = None):
        self.__logger = logging.getLogger(self.__class__.__name__)
        self.__topology_reconciler = topology_reconciler
        self.__poke_executor = poke_executor
        self.__tracked_clusters = tracked_clusters
        self.__clock = clock
        self.__stop_event = stop_event or threading.Event()
        self.__scheduler = EventScheduler(
            refresh_period=pulse_config.app.refresh_discovery_period_sec,
            poke_period=pulse_config.app.measurement_period_sec,
            clock=clock,
        )
        self.__topology: TopologySnapshot = EMPTY_TOPOLOGY
        self.__status = PulseStatus()

    @property
    def topology(self) -> TopologySnapshot:
        return self.__topology

    @property
    def status(self) -> PulseStatus:
        return self.__status

    def run(self) -> None:
        """Block until :meth:`stop` is called, then release everything.

        An exception raised by an activity is not handled here: resources
        are released and the exception propagates to the caller.
        """
        self.__logger.info("Pulse runner started")
        try:
            while not self.__stop_event.is_set():
                event = self.__scheduler.next_event()
                start = self.__clock()
                self.__dispatch(event.kind)
                stop = self.__clock()
                self.__logger.info(f"{event.kind.name} took {(stop - start) * 1000:.0f} ms")

                self.__scheduler.reschedule(event, start, stop - start)
                self.__publish_status(event.kind)

                sleep_duration = self.__scheduler.sleep_duration(self.__clock())
                if sleep_duration > 0 and self.__stop_event.wait(sleep_duration):
                    break
            self.__logger.info("Pulse runner was stopped")
        finally:
            self.close()

    def stop(self) -> None:
        self.__stop_event.set()

    def close(self) -> None:
        """Release every monitor and metrics sink. Safe to call twice."""
        if len(self.__tracked_clusters) > 0:
            self.__logger.info(f"Releasing {len(self.__tracked_clusters)} tracked clusters")
        self.__tracked_clusters.release_all()
        self.__topology = EMPTY_TOPOLOGY

    def update_topology(self) -> None:
        self.__topology = self.__topology_reconciler.reconcile(self.__topology)

    def poke(self) -> None:
        self.__poke_executor.poke()

    def __dispatch(self, kind: EventKind) -> None:
        start_time: float = time.time()
        EVENT_EXE_COUNTER.labels(event=kind.name.lower()).inc()
        try:
            if kind is EventKind.TOPOLOGY_REFRESH:
                self.update_topology()
            else:
                self.poke()
        finally:
            duration: float = time.time() - start_time
            EVENT_EXE_DURATION_HISTOGRAM.labels(event=kind.name.lower()).observe(duration)

    def __publish_status(self, kind: EventKind) -> None:
        now = time.time()
        previous = self.__status
        self.__status = PulseStatus(
            tracked_clusters=len(self.__tracked_clusters),
            connected_clusters=self.__tracked_clusters.connected_count(),
            last_refresh_at=now if kind is EventKind.TOPOLOGY_REFRESH else previous.last_refresh_at,
            last_poke_at=now if kind is EventKind.HEALTH_POKE else previous.last_poke_at,
        )
