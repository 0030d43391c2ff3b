import pytest
from unittest.mock import MagicMock
from scriptevents.core.lifecycle import AppState, LifecycleError, LifecycleManager


def test_initial_state():
    lifecycle = LifecycleManager()
    assert lifecycle.state == AppState.CREATED
    assert not lifecycle.is_closing

def test_valid_transitions_run_hooks_and_listeners():
    lifecycle = LifecycleManager()
    hook = MagicMock()
    listener = MagicMock()
    lifecycle.register_hook(AppState.CLOSING, hook)
    lifecycle.add_listener(listener)

    lifecycle.transition_to(AppState.RUNNING)
    lifecycle.transition_to(AppState.CLOSING)

    assert lifecycle.is_closing
    hook.assert_called_once()
    listener.assert_any_call(AppState.RUNNING, AppState.CLOSING)

def test_invalid_transition_raises():
    lifecycle = LifecycleManager()
    with pytest.raises(LifecycleError):
        lifecycle.transition_to(AppState.CLOSED)

def test_closing_with_exception_counts_as_closing():
    lifecycle = LifecycleManager()
    lifecycle.transition_to(AppState.CLOSING_WITH_EXCEPTION)
    assert lifecycle.is_closing

    lifecycle.transition_to(AppState.CLOSED)
    assert lifecycle.is_closed
    assert not lifecycle.can_transition(AppState.RUNNING)

def test_failing_hook_does_not_block_transition(caplog):
    lifecycle = LifecycleManager()

    def bad_hook():
        raise RuntimeError("hook failed")

    lifecycle.register_hook(AppState.RUNNING, bad_hook)
    assert lifecycle.transition_to(AppState.RUNNING)
    assert lifecycle.is_running
    assert "hook failed" in caplog.text
