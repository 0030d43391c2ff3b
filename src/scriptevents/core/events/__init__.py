"""
Observer primitives.

Provides:
- Signal: synchronous observer list with connection tokens (e.g. preference changes)
- OneShotSignal: signal that fires at most once (e.g. application exit)
- Observable: method-dispatching observer list for host objects

Usage:
    from scriptevents.core.events import Signal

    conn = fg_color.after_change.connect(on_fg_color)
    ...
    conn.disconnect()
"""
from .observer import Connection, Signal, OneShotSignal, Observable


__all__ = ["Connection", "Signal", "OneShotSignal", "Observable"]
