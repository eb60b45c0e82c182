"""Consul catalog discovery.

Every Consul service carrying the configured tag is a Cassandra cluster;
its catalog entries are the cluster members.
"""

import logging
from typing import Any, Optional
import requests
from injector import inject, singleton
from cassandra_pulse.configs import PulseConfig
from cassandra_pulse.exceptions import DiscoveryError
from cassandra_pulse.models import NodeAddress, Service
from cassandra_pulse.services.discovery.cluster_discovery import ClusterDiscovery

@singleton
class ConsulClusterDiscovery(ClusterDiscovery):

    @inject
    def __init__(self, pulse_config: PulseConfig):
        self.__logger = logging.getLogger(self.__class__.__name__)
        self.__config = pulse_config.discovery.consul
        self.__session = requests.Session()
        if self.__config.token:
            self.__session.headers["X-Consul-Token"] = self.__config.token

    def get_services_nodes(self) -> dict[Service, frozenset[NodeAddress]]:
        try:
            return self.__discover()
        except DiscoveryError as exc:
            self.__logger.warning(f"{exc} Returning an empty topology.")
            return {}

    def __discover(self) -> dict[Service, frozenset[NodeAddress]]:
        catalog: dict[str, list[str]] = self.__get("/v1/catalog/services")
        service_names = sorted(name for name, tags in catalog.items() if self.__config.tag in (tags or []))

        topology: dict[Service, frozenset[NodeAddress]] = {}
        for service_name in service_names:
            entries: list[dict[str, Any]] = self.__get(f"/v1/catalog/service/{service_name}")
            addresses = frozenset(
                address for address in (self.__to_address(entry) for entry in entries) if address is not None
            )
            if not addresses:
                self.__logger.debug(f"Consul service {service_name} has no usable node, skipping it")
                continue
            port = min(address.port for address in addresses)
            topology[Service(cluster_name=service_name, port=port)] = addresses

        self.__logger.info(f"Consul returned {len(topology)} clusters tagged '{self.__config.tag}'")
        return topology

    def __get(self, path: str) -> Any:
        params = {"dc": self.__config.datacenter} if self.__config.datacenter else None
        try:
            response = self.__session.get(
                f"{self.__config.url}{path}",
                params=params,
                timeout=self.__config.timeout_sec,
            )
            response.raise_for_status()
            return response.json()
        except requests.RequestException as exc:
            raise DiscoveryError(source=f"consul {path}", reason=str(exc)) from exc
        except ValueError as exc:
            raise DiscoveryError(source=f"consul {path}", reason=f"invalid JSON: {exc}") from exc

    def __to_address(self, entry: dict[str, Any]) -> Optional[NodeAddress]:
        host = entry.get("ServiceAddress") or entry.get("Address")
        port = entry.get("ServicePort")
        if not host or not port:
            return None
        try:
            return NodeAddress(host=str(host), port=int(port))
        except (TypeError, ValueError) as exc:
            self.__logger.debug(f"Skipping catalog entry {entry!r}: {exc}")
            return None
