# symbol_map/status.py

"""
================================================================================
STATUS LINE
================================================================================
A one-line text readout shown beneath the map. It has exactly two kinds of
content: the default prompt, or a message (hover detail, loading notice).
There is no queue and no history; each update replaces the previous text.

The status line holds text only. Whoever displays it (a pygame_gui label in
the viewer, an assertion in the tests) subscribes to changes.
================================================================================
"""
import logging
from typing import Callable, List, Optional

from . import config as DEFAULTS


class StatusLine:
    """Holds the current status text and notifies subscribers when it changes."""

    def __init__(self, default_message: str = DEFAULTS.DEFAULT_STATUS_MESSAGE):
        self.default_message = default_message
        self.text = default_message
        self._listeners: List[Callable[[str], None]] = []
        self.logger = logging.getLogger(__name__)

    def subscribe(self, listener: Callable[[str], None]):
        """Registers a callback receiving the new text on every update."""
        self._listeners.append(listener)
        listener(self.text)

    def update(self, message: Optional[str] = None):
        """Sets the message, or resets to the default prompt when called without one."""
        self.text = self.default_message if message is None else message
        self.logger.debug(f"Status: {self.text}")
        for listener in self._listeners:
            listener(self.text)

    def is_default(self) -> bool:
        return self.text == self.default_message
