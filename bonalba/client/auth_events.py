"""
Global logout channel: the API client announces an expired session here and
whoever owns the session state (a CLI, a UI shell) reacts to it, without the
client having to import them.
"""

import logging
from typing import Callable, List

logger = logging.getLogger(__name__)

_listeners: List[Callable[[], None]] = []


def on_logout(listener: Callable[[], None]) -> Callable[[], None]:
    """Register a listener; returns a function that unregisters it."""
    _listeners.append(listener)

    def _unsubscribe():
        if listener in _listeners:
            _listeners.remove(listener)

    return _unsubscribe


def emit_logout():
    for listener in list(_listeners):
        try:
            listener()
        except Exception as e:
            logger.error(f"Logout listener failed: {e}")
