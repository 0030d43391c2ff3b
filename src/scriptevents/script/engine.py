"""
Scripting host contract.

CallbackRegistry is the process-wide table that owns script values
(callbacks) and hands out integer handles for them. Anything that wants
to keep a callback around stores the handle, never the value.

ScriptEngine owns the registry and the script console, and invokes
registered callbacks in protected mode: a failing callback is reported
on the console instead of propagating.
"""
import itertools
from typing import Any, Dict, Iterator, List, Optional, Tuple
from loguru import logger

from scriptevents.core.events import Signal


class ScriptError(Exception):
    """Error raised back to the calling script (bad arguments, unknown names)."""
    pass


class CallbackRegistry:
    """
    Handle -> value table.

    Handles are positive ints that are never reused, so a released
    handle can't start pointing at an unrelated value.
    """

    def __init__(self):
        self._values: Dict[int, Any] = {}
        self._next_handle = itertools.count(1)

    def ref(self, value: Any) -> int:
        handle = next(self._next_handle)
        self._values[handle] = value
        return handle

    def unref(self, handle: int) -> None:
        self._values.pop(handle, None)

    def get(self, handle: int) -> Optional[Any]:
        return self._values.get(handle)

    def items(self) -> List[Tuple[int, Any]]:
        return list(self._values.items())

    def __contains__(self, handle: int) -> bool:
        return handle in self._values

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._values))

    def __len__(self) -> int:
        return len(self._values)


class ScriptEngine:
    """
    Minimal script runtime: callback table plus console.

    Usage:
        engine = ScriptEngine()
        handle = engine.registry.ref(lambda: print("hi"))
        engine.call(handle)
        engine.on_console_print.connect(console_widget.append)
    """

    def __init__(self):
        self.registry = CallbackRegistry()
        self.console: List[str] = []
        self.on_console_print = Signal("ConsolePrint")

    def console_print(self, text: str) -> None:
        """Write a line to the script console."""
        logger.info(f"[script] {text}")
        self.console.append(text)
        self.on_console_print.emit(text)

    def call(self, handle: int) -> bool:
        """
        Invoke a registered callback with no arguments.

        Returns:
            True if the callback ran without error
        """
        callback = self.registry.get(handle)
        if not callable(callback):
            self.console_print(f"attempt to call a non-function value (handle {handle})")
            return False
        try:
            callback()
        except Exception as e:
            logger.error(f"Script callback {handle} failed: {e}")
            self.console_print(str(e) or e.__class__.__name__)
            return False
        return True
