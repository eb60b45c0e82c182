"""Exception hierarchy for cassandra-pulse."""

from __future__ import annotations


class PulseError(Exception):
    """Base exception for all cassandra-pulse errors."""

    def __init__(self, message: str = "") -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(PulseError):
    """Raised when the configuration file is missing or invalid."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        if path:
            message = f"{message} (config: {path})"
        super().__init__(message)


class DiscoveryError(PulseError):
    """Raised by discovery clients when a lookup fails.

    Never escapes ``get_services_nodes()``: clients catch it and degrade
    to an empty topology.
    """

    def __init__(self, source: str, reason: str = "") -> None:
        self.source = source
        msg = f"Discovery through {source} failed."
        if reason:
            msg += f" Reason: {reason}"
        super().__init__(msg)
