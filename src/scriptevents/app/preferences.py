"""
Typed preference options on top of ConfigManager.

Each option is one (section, key) pair of the config with its own
before/after change signals, so listeners can watch a single value
instead of filtering ConfigManager.on_changed.

Usage:
    prefs = Preferences(config)
    conn = prefs.color_bar.fg_color.after_change.connect(on_fg_change)
    prefs.color_bar.fg_color.set("#ff0000")
    conn.disconnect()
"""
from typing import Any, Dict, Tuple
from loguru import logger

from scriptevents.core.config import ConfigManager
from scriptevents.core.events import Signal


class Option:
    """One preference value; fires only when the value actually changes."""

    def __init__(self, config: ConfigManager, section: str, key: str):
        self._config = config
        self.section = section
        self.key = key
        self.before_change = Signal(f"{section}.{key}.BeforeChange")
        self.after_change = Signal(f"{section}.{key}.AfterChange")

    def __call__(self) -> Any:
        return self.get()

    def get(self) -> Any:
        return self._config.get(self.section, self.key)

    def set(self, value: Any) -> None:
        if value == self.get():
            return
        self.before_change.emit(value)
        # after_change is emitted from ConfigManager.on_changed
        self._config.update(self.section, self.key, value)


class ColorBarPreferences:
    def __init__(self, config: ConfigManager):
        self.fg_color = Option(config, "color_bar", "fg_color")
        self.bg_color = Option(config, "color_bar", "bg_color")


class Preferences:
    """Preference sections exposed as attributes of Option objects."""

    def __init__(self, config: ConfigManager):
        self._config = config
        self.color_bar = ColorBarPreferences(config)

        self._options: Dict[Tuple[str, str], Option] = {}
        for option in (self.color_bar.fg_color, self.color_bar.bg_color):
            self._options[(option.section, option.key)] = option

        self._conn = config.on_changed.connect(self._on_config_changed)

    @property
    def config(self) -> ConfigManager:
        return self._config

    def _on_config_changed(self, section: str, key: str, value: Any):
        option = self._options.get((section, key))
        if option is None:
            return
        logger.debug(f"Preference changed: {section}.{key} = {value}")
        option.after_change.emit()

    def detach(self) -> None:
        """Stop following the ConfigManager."""
        self._conn.disconnect()
