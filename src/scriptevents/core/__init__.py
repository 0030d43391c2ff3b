"""
Core infrastructure.

Provides the ambient pieces the host model and the scripting layer share:
- ConfigManager: Configuration with persistence
- LifecycleManager: Application state machine
- Signal / OneShotSignal / Observable: Synchronous observer primitives
- setup_logging: Loguru configuration
"""
from .config import ConfigManager, AppConfig, GeneralSettings, ColorBarSettings
from .lifecycle import LifecycleManager, AppState, LifecycleError
from .events import Connection, Signal, OneShotSignal, Observable
from .logging import setup_logging

__all__ = [
    # Configuration
    "ConfigManager",
    "AppConfig",
    "GeneralSettings",
    "ColorBarSettings",

    # Lifecycle
    "LifecycleManager",
    "AppState",
    "LifecycleError",

    # Events
    "Connection",
    "Signal",
    "OneShotSignal",
    "Observable",

    "setup_logging",
]
