from injector import inject, singleton
from cassandra_pulse.models import Connected
from cassandra_pulse.services.runner.tracked_clusters import TrackedClusters

@singleton
class PokeExecutor:

    @inject
    def __init__(self, tracked_clusters: TrackedClusters):
        self.__tracked_clusters = tracked_clusters

    def poke(self) -> None:
        """Forward the samples of every monitor to its cluster's sink.

        A disconnected cluster gets empty collections; its sink decides
        how missing data is rendered.
        """
        for service, slot, metrics in self.__tracked_clusters.entries():
            if isinstance(slot, Connected):
                get_latencies = slot.monitor.collect_get_latencies()
                set_latencies = slot.monitor.collect_set_latencies()
                availability = slot.monitor.collect_availability()
            else:
                get_latencies, set_latencies, availability = {}, {}, {}
            metrics.update_get_latency(get_latencies)
            metrics.update_set_latency(set_latencies)
            metrics.update_availability(availability)
