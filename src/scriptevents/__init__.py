"""
scriptevents - Script event subscription for a document editor host.

Lets scripts listen to application events (active site, color
preferences) and per-sprite document events (changes, filename) while
the host only observes what someone is actually listening to.
"""
from scriptevents.core.config import ConfigManager, AppConfig
from scriptevents.core.logging import setup_logging
from scriptevents.app.app import App
from scriptevents.app.doc import Doc, Sprite
from scriptevents.script.engine import ScriptEngine, ScriptError
from scriptevents.script.events import Events, AppEvents, SpriteEvents
from scriptevents.script.events_registry import registry, push_app_events, push_sprite_events

__version__ = "0.1.0"

__all__ = [
    "ConfigManager",
    "AppConfig",
    "setup_logging",
    "App",
    "Doc",
    "Sprite",
    "ScriptEngine",
    "ScriptError",
    "Events",
    "AppEvents",
    "SpriteEvents",
    "registry",
    "push_app_events",
    "push_sprite_events",
]
