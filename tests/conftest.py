"""Shared fixtures for the runner tests."""

import pytest
from prometheus_client import CollectorRegistry

from cassandra_pulse.configs import PulseConfig
from cassandra_pulse.services.runner import PokeExecutor, TopologyReconciler, TrackedClusters
from fakes import FakeDiscovery, FakeMetricsFactory, FakeMonitorFactory


@pytest.fixture
def pulse_config():
    return PulseConfig()


@pytest.fixture
def discovery():
    return FakeDiscovery()


@pytest.fixture
def monitor_factory():
    return FakeMonitorFactory()


@pytest.fixture
def metrics_factory():
    return FakeMetricsFactory()


@pytest.fixture
def tracked_clusters():
    return TrackedClusters()


@pytest.fixture
def reconciler(pulse_config, discovery, monitor_factory, metrics_factory, tracked_clusters):
    return TopologyReconciler(pulse_config, discovery, monitor_factory, metrics_factory, tracked_clusters)


@pytest.fixture
def poke_executor(tracked_clusters):
    return PokeExecutor(tracked_clusters)


@pytest.fixture
def registry():
    return CollectorRegistry()
