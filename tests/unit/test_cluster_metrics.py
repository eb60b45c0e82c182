"""Unit tests for the per-cluster Prometheus series."""

import pytest

from cassandra_pulse.models import NodeAddress
from cassandra_pulse.services.metrics import ClusterMetricsFactory
from fakes import make_service

NODE_1 = NodeAddress(host="10.0.0.1", port=9042)
NODE_2 = NodeAddress(host="10.0.0.2", port=9042)


@pytest.fixture
def factory(registry):
    return ClusterMetricsFactory(registry)


def _up(registry, instance, cluster="alpha"):
    return registry.get_sample_value("cassandra_up", {"cluster": cluster, "instance": instance})


def _reachable(registry, cluster="alpha"):
    return registry.get_sample_value("cassandra_cluster_reachable", {"cluster": cluster})


def test_new_cluster_is_reported_unreachable(factory, registry):
    factory.create(make_service("alpha"))

    assert _reachable(registry) == 0


def test_update_availability_exports_every_node(factory, registry):
    metrics = factory.create(make_service("alpha"))

    metrics.update_availability({NODE_1: True, NODE_2: False})

    assert _up(registry, "10.0.0.1:9042") == 1
    assert _up(registry, "10.0.0.2:9042") == 0
    assert _reachable(registry) == 1


def test_update_drops_nodes_missing_from_the_sample(factory, registry):
    metrics = factory.create(make_service("alpha"))
    metrics.update_get_latency({NODE_1: 0.002, NODE_2: 0.003})

    metrics.update_get_latency({NODE_1: 0.004})

    labels = {"cluster": "alpha", "instance": "10.0.0.2:9042"}
    assert registry.get_sample_value("cassandra_get_latency_seconds", labels) is None
    assert registry.get_sample_value("cassandra_get_latency_seconds", {"cluster": "alpha", "instance": "10.0.0.1:9042"}) == 0.004


def test_empty_availability_marks_cluster_unreachable(factory, registry):
    metrics = factory.create(make_service("alpha"))
    metrics.update_availability({NODE_1: True})

    metrics.update_availability({})

    assert _reachable(registry) == 0
    assert _up(registry, "10.0.0.1:9042") is None


def test_clear_drops_node_series_until_next_update(factory, registry):
    metrics = factory.create(make_service("alpha"))
    metrics.update_availability({NODE_1: True})
    metrics.update_set_latency({NODE_1: 0.01})

    metrics.clear()

    assert _up(registry, "10.0.0.1:9042") is None
    assert registry.get_sample_value("cassandra_set_latency_seconds", {"cluster": "alpha", "instance": "10.0.0.1:9042"}) is None
    assert _reachable(registry) == 0

    metrics.update_availability({NODE_1: True})
    assert _up(registry, "10.0.0.1:9042") == 1


def test_close_removes_every_series_of_the_cluster_only(factory, registry):
    alpha = factory.create(make_service("alpha"))
    beta = factory.create(make_service("beta"))
    alpha.update_availability({NODE_1: True})
    beta.update_availability({NODE_2: True})

    alpha.close()
    alpha.close()

    assert _up(registry, "10.0.0.1:9042") is None
    assert _reachable(registry) is None
    assert _up(registry, "10.0.0.2:9042", cluster="beta") == 1
    assert _reachable(registry, cluster="beta") == 1


def test_updates_after_close_are_ignored(factory, registry):
    metrics = factory.create(make_service("alpha"))
    metrics.close()

    metrics.update_availability({NODE_1: True})
    metrics.clear()

    assert _up(registry, "10.0.0.1:9042") is None
    assert _reachable(registry) is None
