from typing import Mapping
from .node_address import NodeAddress
from .service import Service

# Last reconciled view of the fleet. Replaced wholesale, never mutated.
TopologySnapshot = Mapping[Service, frozenset[NodeAddress]]

EMPTY_TOPOLOGY: TopologySnapshot = {}
