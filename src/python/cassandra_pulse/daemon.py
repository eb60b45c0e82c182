"""Daemon bootstrap: logging, dependency injection, HTTP surface and
signal handling around the :class:`PulseRunner`."""

import logging
import signal
import threading
import time
import uvicorn
from fastapi import FastAPI
from fastapi_injector import attach_injector
from injector import Binder, Injector
from prometheus_client import REGISTRY, CollectorRegistry, make_asgi_app
from cassandra_pulse import __version__
from cassandra_pulse.configs import PulseConfig
from cassandra_pulse.controllers.health.v1 import router as health_controller_router
from cassandra_pulse.services.discovery import ClusterDiscovery, ConsulClusterDiscovery, StaticClusterDiscovery
from cassandra_pulse.services.monitors import CassandraMonitorFactory, MonitorFactory
from cassandra_pulse.services.runner import PulseRunner

DISCOVERY_BY_KIND: dict[str, type[ClusterDiscovery]] = {
    "consul": ConsulClusterDiscovery,
    "static": StaticClusterDiscovery,
}

logger = logging.getLogger(__name__)


def init_logging(level: str = "INFO") -> None:
    logging.Formatter.converter = time.gmtime
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s %(levelname)s: [%(name)s] %(message)s',
        datefmt='%Y-%m-%dT%H:%M:%SZ',
        handlers=[logging.StreamHandler()],
        force=True,
    )
    # The driver is chatty about every reconnection attempt
    logging.getLogger("cassandra").setLevel(logging.WARNING)


def build_injector(config: PulseConfig, registry: CollectorRegistry) -> Injector:
    def configure_bindings(binder: Binder):
        binder.bind(PulseConfig, to=config)
        binder.bind(CollectorRegistry, to=registry)
        binder.bind(ClusterDiscovery, to=DISCOVERY_BY_KIND[config.discovery.kind])
        binder.bind(MonitorFactory, to=CassandraMonitorFactory)

    return Injector([configure_bindings])


def build_api(injector: Injector, registry: CollectorRegistry) -> FastAPI:
    fast_api: FastAPI = FastAPI(
        title="Cassandra Pulse",
        description="Health and latency of the monitored Cassandra fleet",
        version=__version__,
    )
    fast_api.include_router(health_controller_router)
    fast_api.mount("/metrics", make_asgi_app(registry=registry))
    attach_injector(fast_api, injector)
    return fast_api


def run_daemon(config: PulseConfig) -> None:
    #####################
    # Configure Logging #
    #####################

    init_logging(config.logging.level)
    logger.info(f"Starting cassandra-pulse {__version__} with {config.discovery.kind} discovery")

    ##################################
    # Initialize Dependency Injector #
    ##################################

    injector = build_injector(config, REGISTRY)
    runner: PulseRunner = injector.get(PulseRunner)

    ###############################
    # Initialize Metrics & Health #
    ###############################

    server = uvicorn.Server(uvicorn.Config(
        build_api(injector, REGISTRY),
        host=config.server.host,
        port=config.server.port,
        access_log=False,
        log_level=config.logging.level.lower(),
    ))
    server_thread = threading.Thread(target=server.run, name="http-server", daemon=True)
    server_thread.start()
    logger.info(f"Serving /metrics and /v1/health on {config.server.host}:{config.server.port}")

    #############################
    # Graceful Shutdown Handler #
    #############################

    def handle_signal(signum, frame):
        logger.info(f"Received {signal.Signals(signum).name}, stopping the pulse runner")
        runner.stop()

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    ################
    # Start Runner #
    ################

    try:
        runner.run()
    finally:
        server.should_exit = True
        server_thread.join(timeout=5.0)
        logger.info("cassandra-pulse stopped")
