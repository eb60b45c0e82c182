"""Unit tests for the file-based discovery."""

import logging

from cassandra_pulse.configs import DiscoveryConfig, PulseConfig, StaticDiscoveryConfig
from cassandra_pulse.models import NodeAddress, Service
from cassandra_pulse.services.discovery import StaticClusterDiscovery


def _discovery(path):
    config = PulseConfig(discovery=DiscoveryConfig(kind="static", static=StaticDiscoveryConfig(file=path)))
    return StaticClusterDiscovery(config)


def test_reads_clusters_and_nodes(tmp_path):
    path = tmp_path / "clusters.yaml"
    path.write_text(
        "clusters:\n"
        "  - name: orders\n"
        "    nodes: [10.0.0.11, '10.0.0.12:9142']\n"
        "  - name: sessions\n"
        "    port: 9142\n"
        "    username: pulse\n"
        "    password: secret\n"
        "    nodes: ['[fd00::1]', '[fd00::2]:9043']\n"
    )

    topology = _discovery(path).get_services_nodes()

    assert topology == {
        Service(cluster_name="orders"): frozenset({
            NodeAddress(host="10.0.0.11", port=9042),
            NodeAddress(host="10.0.0.12", port=9142),
        }),
        Service(cluster_name="sessions", port=9142, username="pulse", password="secret"): frozenset({
            NodeAddress(host="fd00::1", port=9142),
            NodeAddress(host="fd00::2", port=9043),
        }),
    }


def test_file_is_read_again_on_every_call(tmp_path):
    path = tmp_path / "clusters.yaml"
    path.write_text("clusters:\n  - name: orders\n    nodes: [10.0.0.11]\n")
    discovery = _discovery(path)
    first = discovery.get_services_nodes()

    path.write_text("clusters:\n  - name: orders\n    nodes: [10.0.0.11, 10.0.0.12]\n")
    second = discovery.get_services_nodes()

    assert len(first[Service(cluster_name="orders")]) == 1
    assert len(second[Service(cluster_name="orders")]) == 2


def test_cluster_without_nodes_is_skipped(tmp_path):
    path = tmp_path / "clusters.yaml"
    path.write_text("clusters:\n  - name: orders\n    nodes: []\n  - name: sessions\n    nodes: [10.0.1.1]\n")

    topology = _discovery(path).get_services_nodes()

    assert [service.cluster_name for service in topology] == ["sessions"]


def test_missing_file_yields_empty_topology(tmp_path, caplog):
    with caplog.at_level(logging.WARNING):
        topology = _discovery(tmp_path / "missing.yaml").get_services_nodes()

    assert topology == {}
    assert "file not found" in caplog.text


def test_invalid_entry_yields_empty_topology(tmp_path, caplog):
    path = tmp_path / "clusters.yaml"
    path.write_text("clusters:\n  - port: 9042\n    nodes: [10.0.0.11]\n")

    with caplog.at_level(logging.WARNING):
        topology = _discovery(path).get_services_nodes()

    assert topology == {}
    assert "invalid cluster entry" in caplog.text


def test_malformed_yaml_yields_empty_topology(tmp_path):
    path = tmp_path / "clusters.yaml"
    path.write_text("clusters: [unclosed\n")

    assert _discovery(path).get_services_nodes() == {}


def test_empty_file_yields_empty_topology(tmp_path):
    path = tmp_path / "clusters.yaml"
    path.write_text("")

    assert _discovery(path).get_services_nodes() == {}
