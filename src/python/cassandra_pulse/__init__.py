"""Cassandra Pulse: probes a discovered fleet of Cassandra clusters and
exports their availability and latency as Prometheus metrics."""

__version__ = "1.0.0"
