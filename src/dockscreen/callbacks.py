"""
Error-isolated callback dispatch for widget state changes.

A failing user callback is logged and skipped; it never interrupts a tick or
prevents the remaining callbacks from running.
"""

import threading
from collections import defaultdict
from typing import Callable

from dockscreen.interaction import ChangeReason, StateChange
from dockscreen.logging_config import get_logger

logger = get_logger(__name__)

# Callback type signatures
StateCallback = Callable[[StateChange], None]
ClickCallback = Callable[[str], None]  # (widget name)


class CallbackManager:
    """
    Manages callback registration and dispatch with error isolation.

    Supports three kinds of callbacks:
    1. Per-widget callbacks - any state change of one widget
    2. Click callbacks - accepted clicks of one widget
    3. Global callbacks - any state change of any widget
    """

    def __init__(self):
        self._widget_callbacks: defaultdict[str, list[StateCallback]] = defaultdict(list)
        self._click_callbacks: defaultdict[str, list[ClickCallback]] = defaultdict(list)
        self._global_callbacks: list[StateCallback] = []

        self._lock = threading.RLock()

    # Registration methods

    def register_widget(self, widget: str, callback: StateCallback) -> None:
        """
        Register callback for state changes of one widget.

        Args:
            widget: Widget (control) name
            callback: Function(change: StateChange) -> None
        """
        with self._lock:
            self._widget_callbacks[widget].append(callback)
            logger.debug(f"Registered state callback for widget '{widget}': {_name(callback)}")

    def register_click(self, widget: str, callback: ClickCallback) -> None:
        """
        Register callback for accepted clicks of one widget.

        Args:
            widget: Widget (control) name
            callback: Function(widget_name: str) -> None
        """
        with self._lock:
            self._click_callbacks[widget].append(callback)
            logger.debug(f"Registered click callback for widget '{widget}': {_name(callback)}")

    def register_global(self, callback: StateCallback) -> None:
        """
        Register callback for every state change.

        Args:
            callback: Function(change: StateChange) -> None
        """
        with self._lock:
            self._global_callbacks.append(callback)
            logger.debug(f"Registered global callback: {_name(callback)}")

    # Unregistration methods

    def unregister_widget(self, widget: str, callback: StateCallback) -> bool:
        """
        Unregister a per-widget callback.

        Returns:
            True if callback was registered and removed
        """
        with self._lock:
            callbacks = self._widget_callbacks.get(widget)
            if callbacks and callback in callbacks:
                callbacks.remove(callback)
                logger.debug(f"Unregistered state callback for widget '{widget}': {_name(callback)}")
                return True
        return False

    def unregister_click(self, widget: str, callback: ClickCallback) -> bool:
        with self._lock:
            callbacks = self._click_callbacks.get(widget)
            if callbacks and callback in callbacks:
                callbacks.remove(callback)
                logger.debug(f"Unregistered click callback for widget '{widget}': {_name(callback)}")
                return True
        return False

    def unregister_global(self, callback: StateCallback) -> bool:
        with self._lock:
            if callback in self._global_callbacks:
                self._global_callbacks.remove(callback)
                logger.debug(f"Unregistered global callback: {_name(callback)}")
                return True
        return False

    # Dispatch

    def on_state_change(self, change: StateChange) -> None:
        """
        Dispatch callbacks for one state change.

        Order: per-widget callbacks, click callbacks (accepted clicks only),
        then global callbacks.
        """
        # Copy callback lists under lock, run them without it
        with self._lock:
            widget_cbs = list(self._widget_callbacks.get(change.widget, ()))
            click_cbs = list(self._click_callbacks.get(change.widget, ()))
            global_cbs = list(self._global_callbacks)

        for callback in widget_cbs:
            self._safe_call(callback, change)

        if change.reason == ChangeReason.CLICK:
            for callback in click_cbs:
                self._safe_call(callback, change.widget)

        for callback in global_cbs:
            self._safe_call(callback, change)

    def _safe_call(self, callback: Callable, *args) -> None:
        """Execute callback, logging (not raising) any exception."""
        try:
            callback(*args)
        except Exception as e:
            logger.exception(f"Error in callback '{_name(callback)}': {e}")

    # Utility methods

    def clear_all(self) -> None:
        with self._lock:
            self._widget_callbacks.clear()
            self._click_callbacks.clear()
            self._global_callbacks.clear()
            logger.debug("Cleared all callbacks")

    def get_callback_counts(self) -> dict[str, int]:
        with self._lock:
            return {
                "widget": sum(len(cbs) for cbs in self._widget_callbacks.values()),
                "click": sum(len(cbs) for cbs in self._click_callbacks.values()),
                "global": len(self._global_callbacks),
            }


def _name(callback: Callable) -> str:
    return getattr(callback, "__name__", repr(callback))
