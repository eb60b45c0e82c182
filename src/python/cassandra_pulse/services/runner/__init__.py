from .event_scheduler import SAFETY_MARGIN_SEC, EventScheduler
from .poke_executor import PokeExecutor
from .pulse_runner import PulseRunner
from .topology_reconciler import TopologyReconciler
from .tracked_clusters import TrackedClusters

__all__ = [
    "EventScheduler",
    "PokeExecutor",
    "PulseRunner",
    "SAFETY_MARGIN_SEC",
    "TopologyReconciler",
    "TrackedClusters",
]
