"""Tests for observable signals."""

from curricula.core.signals import Signal, SignalChange


def test_set_notifies_observers():
    """Observers receive the old and new value."""
    signal = Signal(1, name="count")
    changes = []
    signal.observe(changes.append)

    signal.set(2)

    assert changes == [SignalChange("count", 1, 2)], f"Unexpected changes: {changes}"
    assert signal.value == 2


def test_equal_value_does_not_notify():
    signal = Signal("a")
    changes = []
    signal.observe(changes.append)

    signal.set("a")
    signal.value = "a"

    assert changes == []


def test_value_of_other_type_notifies():
    """1 and True compare equal but are different values."""
    signal = Signal(1)
    changes = []
    signal.observe(changes.append)

    signal.set(True)

    assert len(changes) == 1


def test_unobserve_stops_notifications():
    signal = Signal(0)
    changes = []
    unobserve = signal.observe(changes.append)

    unobserve()
    signal.set(1)

    assert changes == []
    assert signal.observer_count == 0


def test_failing_observer_does_not_block_others(caplog):
    signal = Signal(0, name="flaky")
    seen = []

    def broken(change):
        raise RuntimeError("boom")

    signal.observe(broken)
    signal.observe(seen.append)
    signal.set(1)

    assert len(seen) == 1, "Second observer should still run"
    assert "flaky" in caplog.text
