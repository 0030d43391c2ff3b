"""
Scripting layer.

- ScriptEngine / CallbackRegistry: where script callbacks live
- Events / AppEvents / SpriteEvents: per-event listener tables bridged to host notifications
- EventsRegistry: lazy creation and explicit teardown of event sources
"""
from .engine import ScriptEngine, CallbackRegistry, ScriptError
from .events import Events, AppEvents, SpriteEvents, EventListener
from .events_registry import EventsRegistry, registry, push_app_events, push_sprite_events

__all__ = [
    "ScriptEngine",
    "CallbackRegistry",
    "ScriptError",
    "Events",
    "AppEvents",
    "SpriteEvents",
    "EventListener",
    "EventsRegistry",
    "registry",
    "push_app_events",
    "push_sprite_events",
]
