"""Unit tests for the two-event scheduler."""

import logging

import pytest

from cassandra_pulse.models import EventKind
from cassandra_pulse.services.runner import SAFETY_MARGIN_SEC, EventScheduler


def _scheduler(refresh=300, poke=30, now=1000.0):
    return EventScheduler(refresh_period=refresh, poke_period=poke, clock=lambda: now)


def test_both_events_are_due_at_construction_and_refresh_wins_the_tie():
    scheduler = _scheduler()

    assert [event.next_due for event in scheduler.events] == [1000.0, 1000.0]
    assert scheduler.next_event().kind is EventKind.TOPOLOGY_REFRESH


def test_reschedule_uses_the_execution_start():
    scheduler = _scheduler()
    refresh = scheduler.next_event()

    scheduler.reschedule(refresh, start=1000.0, duration=2.5)

    assert refresh.next_due == 1300.0
    assert scheduler.next_event().kind is EventKind.HEALTH_POKE


def test_poke_does_not_starve_the_refresh():
    scheduler = _scheduler()
    executed = []

    for _ in range(23):
        event = scheduler.next_event()
        executed.append((event.kind, event.next_due))
        scheduler.reschedule(event, start=event.next_due, duration=0)

    refreshes = [due for kind, due in executed if kind is EventKind.TOPOLOGY_REFRESH]
    pokes = [due for kind, due in executed if kind is EventKind.HEALTH_POKE]
    assert refreshes == [1000.0, 1300.0, 1600.0]
    assert pokes == [1000.0 + 30 * index for index in range(20)]
    # At 1300 both are due; the refresh goes first
    assert executed.index((EventKind.TOPOLOGY_REFRESH, 1300.0)) < executed.index((EventKind.HEALTH_POKE, 1300.0))


def test_overrun_is_logged_and_pushes_the_event_after_its_start(caplog):
    scheduler = _scheduler()
    scheduler.reschedule(scheduler.next_event(), start=1000.0, duration=0.1)
    poke = scheduler.next_event()

    with caplog.at_level(logging.WARNING):
        scheduler.reschedule(poke, start=1000.1, duration=45.0)

    assert "HEALTH_POKE took 45.000s, longer than its 30.000s period" in caplog.text
    assert poke.next_due == pytest.approx(1030.1)
    assert poke.next_due > 1000.1


def test_overrun_check_uses_the_event_period(caplog):
    scheduler = _scheduler(refresh=300, poke=30)
    refresh = scheduler.next_event()

    with caplog.at_level(logging.WARNING):
        scheduler.reschedule(refresh, start=1000.0, duration=45.0)

    assert caplog.text == ""


def test_sleep_duration_subtracts_the_safety_margin():
    scheduler = _scheduler()
    scheduler.reschedule(scheduler.next_event(), start=1000.0, duration=0)
    scheduler.reschedule(scheduler.next_event(), start=1000.0, duration=0)

    assert scheduler.sleep_duration(1010.0) == pytest.approx(20.0 - SAFETY_MARGIN_SEC)


def test_sleep_duration_is_not_positive_when_an_event_is_overdue():
    scheduler = _scheduler()
    scheduler.reschedule(scheduler.next_event(), start=1000.0, duration=0)
    scheduler.reschedule(scheduler.next_event(), start=1000.0, duration=0)

    assert scheduler.sleep_duration(1030.0) <= 0
    assert scheduler.sleep_duration(1100.0) < 0
