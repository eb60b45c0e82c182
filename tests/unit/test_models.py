"""Unit tests for the value types."""

import pytest

from cassandra_pulse.models import NodeAddress, Service


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("10.0.0.1", NodeAddress(host="10.0.0.1", port=9042)),
        (" 10.0.0.1:9142 ", NodeAddress(host="10.0.0.1", port=9142)),
        ("cass-1.internal", NodeAddress(host="cass-1.internal", port=9042)),
        ("[fd00::1]:9043", NodeAddress(host="fd00::1", port=9043)),
        ("[fd00::1]", NodeAddress(host="fd00::1", port=9042)),
        ("fd00::1", NodeAddress(host="fd00::1", port=9042)),
    ],
)
def test_node_address_parse(raw, expected):
    assert NodeAddress.parse(raw, default_port=9042) == expected


def test_services_are_compared_by_value():
    first = Service(cluster_name="orders", port=9042)
    second = Service(cluster_name="orders", port=9042)

    assert first == second
    assert {first: 1}[second] == 1
    assert Service(cluster_name="orders", port=9142) != first


def test_service_repr_hides_password():
    service = Service(cluster_name="orders", username="pulse", password="s3cret")

    assert "s3cret" not in repr(service)
    assert str(service) == "Service(orders:9042)"
