from unittest.mock import MagicMock

from scriptevents.app.context import Site
from scriptevents.script.events import AppEvents
from scriptevents.script.events_registry import push_app_events, registry


def test_app_events_is_lazy_singleton(app):
    assert registry.get_app_events() is None

    events = push_app_events()

    assert isinstance(events, AppEvents)
    assert push_app_events() is events

def test_sitechange_listener_follows_context(app, doc):
    events = push_app_events()
    callback = MagicMock()

    assert not app.context.has_observer(events)
    handle = events.on("sitechange", callback)
    assert app.context.has_observer(events)

    app.context.set_active_document(doc)
    callback.assert_called_once()

    events.off(handle)
    assert not app.context.has_observer(events)

    app.context.set_active_document(None)
    callback.assert_called_once()

def test_fg_color_subscription_is_lazy(app):
    events = push_app_events()
    fg_signal = app.preferences.color_bar.fg_color.after_change
    callback = MagicMock()

    assert len(fg_signal) == 0
    first = events.on("fgcolorchange", callback)
    second = events.on("fgcolorchange", callback)
    assert len(fg_signal) == 1

    app.preferences.color_bar.fg_color.set("#ff0000")
    assert callback.call_count == 2

    events.off(first)
    assert len(fg_signal) == 1
    events.off(second)
    assert len(fg_signal) == 0

    app.preferences.color_bar.fg_color.set("#00ff00")
    assert callback.call_count == 2

def test_bg_color_change_dispatches_only_bg(app):
    events = push_app_events()
    fg = MagicMock()
    bg = MagicMock()
    events.on("fgcolorchange", fg)
    events.on("bgcolorchange", bg)

    app.config.update("color_bar", "bg_color", "#333333")

    bg.assert_called_once()
    fg.assert_not_called()

def test_color_resubscribe_after_last_listener(app):
    events = push_app_events()
    callback = MagicMock()

    events.off(events.on("bgcolorchange", callback))
    events.on("bgcolorchange", callback)
    app.preferences.color_bar.bg_color.set("#010101")

    callback.assert_called_once()

def test_sitechange_scenario_on_then_off(app, make_doc):
    """Register, trigger, unregister, trigger again."""
    a = make_doc("a.png")
    b = make_doc("b.png")
    events = push_app_events()
    f = MagicMock()

    handle = events.on("sitechange", f)
    app.context.set_active_site(Site(a, layer=1))
    assert f.call_count == 1

    events.off(handle)
    app.context.set_active_site(Site(b))
    assert f.call_count == 1

def test_failing_listener_is_reported(app, doc):
    events = push_app_events()
    after = MagicMock()

    def broken():
        raise RuntimeError("bad site handler")

    events.on("sitechange", broken)
    events.on("sitechange", after)

    app.context.set_active_document(doc)

    after.assert_called_once()
    assert "bad site handler" in app.script_engine.console

def test_exit_destroys_app_events(app):
    events = push_app_events()
    handle = events.on("sitechange", MagicMock())
    events.on("fgcolorchange", MagicMock())

    app.exit()

    assert registry.get_app_events() is None
    assert events.is_disposed
    assert not app.context.has_observer(events)
    assert len(app.preferences.color_bar.fg_color.after_change) == 0
    assert handle not in app.script_engine.registry

def test_on_after_exit_is_ignored(app):
    events = push_app_events()
    app.exit()
    callbacks = len(app.script_engine.registry)

    assert events.on("sitechange", MagicMock()) is None
    assert len(app.script_engine.registry) == callbacks
    assert not app.context.has_observer(events)
