"""
Application Lifecycle State Machine.

Tracks where the host application is between start-up and shutdown.
Event sources query it to tell a normal shutdown from a stale reference.
"""
from enum import Enum
from typing import Callable, List, Dict
from loguru import logger


class AppState(Enum):
    """Application lifecycle states."""
    CREATED = "created"
    RUNNING = "running"
    CLOSING = "closing"
    CLOSING_WITH_EXCEPTION = "closing_with_exception"
    CLOSED = "closed"


class LifecycleError(Exception):
    """Exception raised for invalid lifecycle transitions."""
    pass


class LifecycleManager:
    """
    Manages application lifecycle state transitions and hooks.

    Usage:
        lifecycle = LifecycleManager()
        lifecycle.register_hook(AppState.CLOSING, on_closing)
        lifecycle.transition_to(AppState.RUNNING)
    """

    VALID_TRANSITIONS = {
        AppState.CREATED: [AppState.RUNNING, AppState.CLOSING, AppState.CLOSING_WITH_EXCEPTION],
        AppState.RUNNING: [AppState.CLOSING, AppState.CLOSING_WITH_EXCEPTION],
        AppState.CLOSING: [AppState.CLOSED],
        AppState.CLOSING_WITH_EXCEPTION: [AppState.CLOSED],
        AppState.CLOSED: [],
    }

    def __init__(self):
        self._state = AppState.CREATED
        self._hooks: Dict[AppState, List[Callable]] = {s: [] for s in AppState}
        self._listeners: List[Callable[[AppState, AppState], None]] = []

    @property
    def state(self) -> AppState:
        """Get current application state."""
        return self._state

    def can_transition(self, target: AppState) -> bool:
        return target in self.VALID_TRANSITIONS.get(self._state, [])

    def transition_to(self, target: AppState) -> bool:
        """
        Transition to target state.

        Args:
            target: Target state

        Returns:
            True if transition succeeded

        Raises:
            LifecycleError: If transition is invalid
        """
        if not self.can_transition(target):
            raise LifecycleError(
                f"Invalid transition: {self._state.value} -> {target.value}"
            )

        old_state = self._state
        self._state = target

        logger.info(f"Lifecycle: {old_state.value} -> {target.value}")

        self._execute_hooks(target)
        self._notify_listeners(old_state, target)

        return True

    def register_hook(self, state: AppState, hook: Callable) -> None:
        """Register a hook to be called when entering a state."""
        if hook not in self._hooks[state]:
            self._hooks[state].append(hook)

    def unregister_hook(self, state: AppState, hook: Callable) -> None:
        if hook in self._hooks[state]:
            self._hooks[state].remove(hook)

    def add_listener(self, listener: Callable[[AppState, AppState], None]) -> None:
        """
        Add a listener for all state changes.

        Args:
            listener: Callable(old_state, new_state)
        """
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: Callable) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _execute_hooks(self, state: AppState) -> None:
        for hook in list(self._hooks[state]):
            try:
                hook()
            except Exception as e:
                logger.error(f"Hook error for {state.value}: {e}")

    def _notify_listeners(self, old: AppState, new: AppState) -> None:
        for listener in list(self._listeners):
            try:
                listener(old, new)
            except Exception as e:
                logger.error(f"Listener error: {e}")

    @property
    def is_running(self) -> bool:
        return self._state == AppState.RUNNING

    @property
    def is_closing(self) -> bool:
        return self._state in (AppState.CLOSING, AppState.CLOSING_WITH_EXCEPTION)

    @property
    def is_closed(self) -> bool:
        return self._state == AppState.CLOSED
