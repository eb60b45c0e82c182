"""File-based cluster discovery.

Reads a YAML file listing clusters and their nodes. The file is re-read
on every call, so external processes (sidecars, config management,
scripts) can update it at any time to reflect fleet changes::

    clusters:
      - name: orders
        port: 9042
        nodes: [10.0.0.11, "10.0.0.12:9042"]
"""

import logging
from pathlib import Path
from typing import Any
import yaml
from injector import inject, singleton
from pydantic import ValidationError
from cassandra_pulse.configs import PulseConfig
from cassandra_pulse.exceptions import DiscoveryError
from cassandra_pulse.models import NodeAddress, Service
from cassandra_pulse.services.discovery.cluster_discovery import ClusterDiscovery

@singleton
class StaticClusterDiscovery(ClusterDiscovery):
    """Reads the fleet topology from a plain YAML file.

    Args:
        pulse_config: Provides ``discovery.static.file``.
    """

    @inject
    def __init__(self, pulse_config: PulseConfig):
        self.__logger = logging.getLogger(self.__class__.__name__)
        self.__clusters_file: Path = pulse_config.discovery.static.file

    def get_services_nodes(self) -> dict[Service, frozenset[NodeAddress]]:
        """Read the clusters file.

        A missing, unreadable or malformed file logs a warning and
        yields an empty topology.
        """
        try:
            return self.__read()
        except DiscoveryError as exc:
            self.__logger.warning(f"{exc} Returning an empty topology.")
            return {}

    def __read(self) -> dict[Service, frozenset[NodeAddress]]:
        try:
            raw = yaml.safe_load(self.__clusters_file.read_text(encoding="utf-8")) or {}
        except FileNotFoundError as exc:
            raise DiscoveryError(source=str(self.__clusters_file), reason="file not found") from exc
        except (OSError, yaml.YAMLError) as exc:
            raise DiscoveryError(source=str(self.__clusters_file), reason=str(exc)) from exc

        clusters: list[dict[str, Any]] = (raw.get("clusters") or []) if isinstance(raw, dict) else []
        topology: dict[Service, frozenset[NodeAddress]] = {}
        for cluster in clusters:
            try:
                service = Service(
                    cluster_name=cluster["name"],
                    port=cluster.get("port", 9042),
                    username=cluster.get("username"),
                    password=cluster.get("password"),
                )
                addresses = frozenset(
                    NodeAddress.parse(str(node), default_port=service.port) for node in cluster.get("nodes") or []
                )
            except (KeyError, TypeError, ValueError, ValidationError) as exc:
                raise DiscoveryError(source=str(self.__clusters_file), reason=f"invalid cluster entry {cluster!r}: {exc}") from exc
            if addresses:
                topology[service] = addresses
        return topology
