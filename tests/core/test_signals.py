import pytest
from unittest.mock import MagicMock
from scriptevents.core.events import Signal, OneShotSignal, Observable

def test_signal_event():
    """Verify Signal connect/emit/disconnect behavior."""
    sig = Signal("test_signal")
    mock_handler = MagicMock()

    sig.connect(mock_handler)
    sig.emit("data", 123)

    mock_handler.assert_called_once_with("data", 123)

    sig.disconnect(mock_handler)
    sig.emit("data2")
    assert mock_handler.call_count == 1

def test_connect_twice_keeps_one_subscription():
    sig = Signal("dup")
    handler = MagicMock()

    sig.connect(handler)
    sig.connect(handler)
    sig.emit()

    assert len(sig) == 1
    handler.assert_called_once()

def test_connection_token_disconnects():
    sig = Signal("token")
    handler = MagicMock()

    conn = sig.connect(handler)
    assert conn.connected

    conn.disconnect()
    conn.disconnect()  # idempotent
    sig.emit()

    assert not conn.connected
    handler.assert_not_called()

def test_connect_twice_shares_one_token():
    sig = Signal("shared")
    handler = MagicMock()

    first = sig.connect(handler)
    second = sig.connect(handler)
    assert first is second

    first.disconnect()
    assert not second.connected
    sig.emit()
    handler.assert_not_called()

def test_disconnect_by_callback_detaches_token():
    sig = Signal("by value")
    handler = MagicMock()

    old = sig.connect(handler)
    sig.disconnect(handler)
    assert not old.connected

    new = sig.connect(handler)
    assert new is not old
    assert new.connected

    # A stale token can't cut off the new subscription
    old.disconnect()
    sig.emit()
    handler.assert_called_once()

def test_signal_error_safety(caplog):
    """Error in one subscriber doesn't block the others."""
    sig = Signal("err_evt")
    results = []

    def buggy_callback():
        raise ValueError("Bug")

    sig.connect(buggy_callback)
    sig.connect(lambda: results.append("ok"))
    sig.emit()

    assert results == ["ok"]
    assert "Bug" in caplog.text

def test_subscriber_can_disconnect_during_emit():
    sig = Signal("self_remove")
    calls = []

    def once():
        calls.append("once")
        sig.disconnect(once)

    sig.connect(once)
    sig.connect(lambda: calls.append("other"))

    sig.emit()
    sig.emit()

    assert calls == ["once", "other", "other"]

def test_one_shot_signal_fires_once():
    sig = OneShotSignal("exit")
    handler = MagicMock()
    sig.connect(handler)

    sig.emit()
    sig.emit()

    assert sig.fired
    handler.assert_called_once()

def test_one_shot_signal_ignores_late_subscribers():
    sig = OneShotSignal("exit")
    sig.emit()

    late = MagicMock()
    sig.connect(late)
    sig.emit()

    late.assert_not_called()


class _Watcher:
    def __init__(self):
        self.calls = []

    def on_ping(self, value):
        self.calls.append(value)


def test_observable_calls_named_method():
    subject = Observable()
    watcher = _Watcher()
    subject.add_observer(watcher)

    subject.notify_observers("on_ping", 7)
    subject.notify_observers("on_missing", 8)  # observers without the method are skipped

    assert watcher.calls == [7]

def test_observable_add_is_idempotent():
    subject = Observable()
    watcher = _Watcher()
    subject.add_observer(watcher)
    subject.add_observer(watcher)

    subject.notify_observers("on_ping", 1)

    assert watcher.calls == [1]
    assert subject.has_observer(watcher)

def test_observable_skips_observer_removed_mid_notification():
    subject = Observable()
    second = _Watcher()

    class Remover:
        def on_ping(self, value):
            subject.remove_observer(second)

    subject.add_observer(Remover())
    subject.add_observer(second)

    subject.notify_observers("on_ping", 1)

    assert second.calls == []
    assert not subject.has_observer(second)

def test_observable_isolates_failures(caplog):
    subject = Observable()
    watcher = _Watcher()

    class Broken:
        def on_ping(self, value):
            raise RuntimeError("observer exploded")

    subject.add_observer(Broken())
    subject.add_observer(watcher)

    subject.notify_observers("on_ping", 3)

    assert watcher.calls == [3]
    assert "observer exploded" in caplog.text
