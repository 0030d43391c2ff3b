"""
Application singleton.

Owns the host-side collaborators the scripting layer talks to: config and
preferences, the document context, the script engine, the lifecycle
state machine and the one-shot exit signal.
"""
from typing import Optional
from loguru import logger

from scriptevents.core.config import ConfigManager
from scriptevents.core.events import OneShotSignal
from scriptevents.core.lifecycle import AppState, LifecycleManager
from scriptevents.core.logging import setup_logging
from scriptevents.script.engine import ScriptEngine
from .context import Context
from .preferences import Preferences


class App:
    """
    The running application.

    The most recently constructed App is the one returned by App.instance().

    Usage:
        app = App("config.json", configure_logging=True)
        app.start()
        ...
        app.exit()   # fires on_exit once, then closes documents
    """
    _instance: Optional["App"] = None

    def __init__(self, config_path: Optional[str] = None, configure_logging: bool = False):
        self.config = ConfigManager(config_path)
        if configure_logging:
            general = self.config.data.general
            setup_logging(debug_mode=general.debug_mode, log_dir=general.log_dir)

        self.lifecycle = LifecycleManager()
        self.preferences = Preferences(self.config)
        self.context = Context()
        self.script_engine = ScriptEngine()
        self.on_exit = OneShotSignal("AppExit")

        App._instance = self

    @classmethod
    def instance(cls) -> "App":
        if cls._instance is None:
            raise RuntimeError("App has not been created")
        return cls._instance

    @classmethod
    def has_instance(cls) -> bool:
        return cls._instance is not None

    @property
    def state(self) -> AppState:
        return self.lifecycle.state

    def start(self) -> None:
        self.lifecycle.transition_to(AppState.RUNNING)

    def exit(self, with_exception: bool = False) -> None:
        """
        Shut the application down.

        The exit signal fires before documents are closed. Calling
        exit() again is a no-op.
        """
        if self.on_exit.fired:
            logger.debug("App.exit() called twice, ignoring")
            return

        closing = AppState.CLOSING_WITH_EXCEPTION if with_exception else AppState.CLOSING
        self.lifecycle.transition_to(closing)

        self.on_exit.emit()
        self.context.close_all()
        self.preferences.detach()

        self.lifecycle.transition_to(AppState.CLOSED)
        if App._instance is self:
            App._instance = None
