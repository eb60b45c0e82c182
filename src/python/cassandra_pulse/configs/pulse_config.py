"""Configuration models and loader for the pulse daemon."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from cassandra_pulse.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class AppConfig(BaseModel):
    """Cadence, probe timeout and default credentials."""

    measurement_period_sec: float = Field(default=30, gt=0, description="Period of the health poke.")
    refresh_discovery_period_sec: float = Field(default=300, gt=0, description="Period of the topology refresh.")
    timeout_sec: float = Field(default=60, gt=0, description="Connect and request timeout of the monitors.")
    username: Optional[str] = Field(default=None, description="Default username, used only together with a password.")
    password: Optional[str] = Field(default=None, repr=False)
    allow_empty_topology: bool = Field(
        default=False,
        description="Treat an empty discovery result as an intentionally empty fleet instead of an outage.",
    )


class ConsulDiscoveryConfig(BaseModel):
    url: str = Field(default="http://localhost:8500")
    tag: str = Field(default="cassandra", description="Only services carrying this tag are monitored.")
    datacenter: Optional[str] = None
    token: Optional[str] = Field(default=None, repr=False)
    timeout_sec: float = Field(default=10, gt=0)

    @field_validator("url")
    @classmethod
    def _strip_url(cls, value: str) -> str:
        return value.rstrip("/")


class StaticDiscoveryConfig(BaseModel):
    file: Path = Field(default=Path("clusters.yaml"), description="YAML file listing the clusters to monitor.")

    @field_validator("file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        if isinstance(value, Path):
            return value
        return Path(str(value)).expanduser()


class DiscoveryConfig(BaseModel):
    kind: Literal["consul", "static"] = "consul"
    consul: ConsulDiscoveryConfig = Field(default_factory=ConsulDiscoveryConfig)
    static: StaticDiscoveryConfig = Field(default_factory=StaticDiscoveryConfig)


class ProbeConfig(BaseModel):
    """Schema used by the get/set latency probes."""

    keyspace: str = Field(default="pulse", pattern=r"^[A-Za-z][A-Za-z0-9_]*$")
    table: str = Field(default="probe", pattern=r"^[A-Za-z][A-Za-z0-9_]*$")
    replication_factor: int = Field(default=3, ge=1)


class ServerConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=1, le=65535)


class LoggingConfig(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @field_validator("level", mode="before")
    @classmethod
    def _upper(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value


class PulseConfig(BaseModel):
    app: AppConfig = Field(default_factory=AppConfig)
    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)
    probe: ProbeConfig = Field(default_factory=ProbeConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(path: Optional[Path]) -> PulseConfig:
    """Load the ``pulse`` section of a YAML file.

    ``None`` returns the defaults. Relative paths of the static discovery
    file are resolved against the directory of the config file.
    """
    if path is None:
        return PulseConfig()

    path = Path(path).expanduser()
    if not path.exists():
        raise ConfigurationError("Config file not found", path=str(path))

    try:
        raw_config = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Config file is not valid YAML: {exc}", path=str(path)) from exc

    if not isinstance(raw_config, dict):
        raise ConfigurationError("Config file must contain a mapping", path=str(path))

    try:
        config = PulseConfig.model_validate(raw_config.get("pulse") or {})
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid configuration: {exc}", path=str(path)) from exc

    static_file = config.discovery.static.file
    if not static_file.is_absolute():
        config.discovery.static.file = (path.parent / static_file).resolve()

    logger.info(f"PulseConfig loaded from {path}")
    return config
