"""
Tests for callback dispatch.
"""

from dockscreen.callbacks import CallbackManager
from dockscreen.interaction import ChangeReason, InteractionState, StateChange


def change(widget: str = "play", reason: ChangeReason = ChangeReason.CLICK) -> StateChange:
    return StateChange(
        widget=widget,
        previous=InteractionState.HOVER,
        current=InteractionState.ACTIVE,
        reason=reason,
    )


def test_dispatch_order():
    manager = CallbackManager()
    calls = []
    manager.register_global(lambda c: calls.append("global"))
    manager.register_click("play", lambda name: calls.append(f"click:{name}"))
    manager.register_widget("play", lambda c: calls.append("widget"))

    manager.on_state_change(change())

    assert calls == ["widget", "click:play", "global"]


def test_click_callbacks_only_for_clicks():
    manager = CallbackManager()
    clicks = []
    manager.register_click("play", clicks.append)

    manager.on_state_change(change(reason=ChangeReason.HOVER))
    manager.on_state_change(change(reason=ChangeReason.CLICK))

    assert clicks == ["play"]


def test_widget_callbacks_filtered_by_name():
    manager = CallbackManager()
    seen = []
    manager.register_widget("play", seen.append)

    manager.on_state_change(change(widget="quit"))

    assert seen == []


def test_failing_callback_is_isolated(caplog):
    manager = CallbackManager()
    seen = []

    def broken(_change):
        raise RuntimeError("boom")

    manager.register_widget("play", broken)
    manager.register_widget("play", seen.append)

    manager.on_state_change(change())

    assert len(seen) == 1
    assert "boom" in caplog.text


def test_unregister_and_counts():
    manager = CallbackManager()

    def callback(_change):
        pass

    manager.register_widget("play", callback)
    manager.register_global(callback)
    assert manager.get_callback_counts() == {"widget": 1, "click": 0, "global": 1}

    assert manager.unregister_widget("play", callback) is True
    assert manager.unregister_widget("play", callback) is False
    assert manager.unregister_click("play", callback) is False
    assert manager.unregister_global(callback) is True

    manager.register_click("play", callback)
    manager.clear_all()
    assert manager.get_callback_counts() == {"widget": 0, "click": 0, "global": 0}
