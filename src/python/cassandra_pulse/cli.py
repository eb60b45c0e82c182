"""Typer-based CLI entrypoint for the pulse daemon."""

from __future__ import annotations

from pathlib import Path

import typer
from prometheus_client import CollectorRegistry
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cassandra_pulse import __version__
from cassandra_pulse.configs import PulseConfig, load_config
from cassandra_pulse.daemon import build_injector, init_logging, run_daemon
from cassandra_pulse.exceptions import ConfigurationError
from cassandra_pulse.services.discovery import ClusterDiscovery

console = Console()
app = typer.Typer(help="Cassandra fleet health and latency prober", no_args_is_help=True, pretty_exceptions_enable=False)
PACKAGE_ROOT = Path(__file__).resolve().parent
DEFAULT_CONFIG_PATH = PACKAGE_ROOT.parents[1] / "resources" / "configs" / "default.yaml"

ConfigOption = typer.Option(
    DEFAULT_CONFIG_PATH,
    "--config",
    "-c",
    envvar="PULSE_CONFIG",
    help="Path to the YAML configuration file.",
)


def _load(config_path: Path) -> PulseConfig:
    try:
        return load_config(config_path)
    except ConfigurationError as exc:
        console.print(f"[red]{escape(exc.message)}[/red]")
        raise typer.Exit(code=2)


@app.command()
def run(config: Path = ConfigOption) -> None:
    """Probe the discovered clusters until interrupted."""
    run_daemon(_load(config))


@app.command()
def discover(config: Path = ConfigOption) -> None:
    """Run the configured discovery once and print the clusters found."""
    cfg = _load(config)
    init_logging(cfg.logging.level)
    injector = build_injector(cfg, CollectorRegistry())
    topology = injector.get(ClusterDiscovery).get_services_nodes()
    if not topology:
        console.print(f"[yellow]{cfg.discovery.kind} discovery returned no cluster[/yellow]")
        raise typer.Exit(code=1)

    table = Table(title=f"Clusters discovered through {cfg.discovery.kind}")
    table.add_column("Cluster")
    table.add_column("Port", justify="right")
    table.add_column("Nodes")
    for service, addresses in sorted(topology.items(), key=lambda item: item[0].cluster_name):
        table.add_row(service.cluster_name, str(service.port), ", ".join(sorted(str(address) for address in addresses)))
    console.print(table)


@app.command()
def version() -> None:
    """Print the package version."""
    console.print(f"cassandra-pulse {__version__}")
