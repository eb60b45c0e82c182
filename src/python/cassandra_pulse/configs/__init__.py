from .pulse_config import (
    AppConfig,
    ConsulDiscoveryConfig,
    DiscoveryConfig,
    LoggingConfig,
    ProbeConfig,
    PulseConfig,
    ServerConfig,
    StaticDiscoveryConfig,
    load_config,
)

__all__ = [
    "AppConfig",
    "ConsulDiscoveryConfig",
    "DiscoveryConfig",
    "LoggingConfig",
    "ProbeConfig",
    "PulseConfig",
    "ServerConfig",
    "StaticDiscoveryConfig",
    "load_config"
]
