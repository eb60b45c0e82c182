from .credentials import Credentials
from .monitor_slot import Connected, Disconnected, MonitorSlot
from .node_address import NodeAddress
from .pulse_status import PulseStatus
from .scheduled_event import EventKind, ScheduledEvent
from .service import Service
from .topology import EMPTY_TOPOLOGY, TopologySnapshot

__all__ = [
    "Connected",
    "Credentials",
    "Disconnected",
    "EMPTY_TOPOLOGY",
    "EventKind",
    "MonitorSlot",
    "NodeAddress",
    "PulseStatus",
    "ScheduledEvent",
    "Service",
    "TopologySnapshot"
]
