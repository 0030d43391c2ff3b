from unittest.mock import MagicMock

from scriptevents.app.preferences import Preferences
from scriptevents.core.config import ConfigManager


def test_option_get_and_set():
    prefs = Preferences(ConfigManager(None))
    fg = prefs.color_bar.fg_color

    assert fg() == "#000000"
    fg.set("#ff0000")
    assert fg.get() == "#ff0000"
    assert prefs.config.data.color_bar.fg_color == "#ff0000"

def test_after_change_fires_only_on_real_change():
    prefs = Preferences(ConfigManager(None))
    before = MagicMock()
    after = MagicMock()
    prefs.color_bar.bg_color.before_change.connect(before)
    prefs.color_bar.bg_color.after_change.connect(after)

    prefs.color_bar.bg_color.set("#ffffff")  # same as default
    prefs.color_bar.bg_color.set("#00ff00")

    before.assert_called_once_with("#00ff00")
    after.assert_called_once_with()

def test_config_updates_reach_option_signals():
    config = ConfigManager(None)
    prefs = Preferences(config)
    fg_after = MagicMock()
    bg_after = MagicMock()
    prefs.color_bar.fg_color.after_change.connect(fg_after)
    prefs.color_bar.bg_color.after_change.connect(bg_after)

    config.update("color_bar", "fg_color", "#111111")
    config.update("general", "debug_mode", False)

    fg_after.assert_called_once()
    bg_after.assert_not_called()

def test_detach_stops_following_config():
    config = ConfigManager(None)
    prefs = Preferences(config)
    after = MagicMock()
    prefs.color_bar.fg_color.after_change.connect(after)

    prefs.detach()
    config.update("color_bar", "fg_color", "#222222")

    after.assert_not_called()
