"""Collapsible chat panel state.

The assistant's chat panel is either closed (a compact input bar) or
open (the full thread).  Transitions are listed in ``TRANSITIONS``;
events without an entry for the current state are ignored.  Opening
the panel from the closed state moves keyboard focus to the message
input through the ``focus_input`` callback.
"""

import enum
import logging
from typing import Callable, Dict, Optional, Tuple


logger = logging.getLogger(__name__)


class PanelState(enum.Enum):
    CLOSED = "closed"
    OPEN = "open"


class PanelEvent(enum.Enum):
    TOGGLE = "toggle"  # Ctrl+I / Cmd+I
    ESCAPE = "escape"
    CLOSE_BUTTON = "close_button"
    OPEN_REQUEST = "open_request"  # message submitted from the compact input


TRANSITIONS: Dict[Tuple[PanelState, PanelEvent], PanelState] = {
    (PanelState.CLOSED, PanelEvent.TOGGLE): PanelState.OPEN,
    (PanelState.OPEN, PanelEvent.TOGGLE): PanelState.CLOSED,
    (PanelState.OPEN, PanelEvent.ESCAPE): PanelState.CLOSED,
    (PanelState.OPEN, PanelEvent.CLOSE_BUTTON): PanelState.CLOSED,
    (PanelState.CLOSED, PanelEvent.OPEN_REQUEST): PanelState.OPEN,
    (PanelState.OPEN, PanelEvent.OPEN_REQUEST): PanelState.OPEN,
}


def shortcut_text(platform: str) -> str:
    """Label of the toggle shortcut for ``platform`` (e.g. ``"MacIntel"``)."""
    return "⌘I" if platform.startswith("Mac") else "Ctrl+I"


def event_for_key(key: str, ctrl: bool = False, meta: bool = False) -> Optional[PanelEvent]:
    """Map a key press to a panel event, or ``None`` if the panel does not care."""
    if (ctrl or meta) and key == "i":
        return PanelEvent.TOGGLE
    if key == "Escape":
        return PanelEvent.ESCAPE
    return None


class ChatPanel:
    def __init__(
        self,
        default_open: bool = False,
        focus_input: Optional[Callable[[], None]] = None,
    ) -> None:
        self.state = PanelState.OPEN if default_open else PanelState.CLOSED
        self.focus_input = focus_input

    @property
    def is_open(self) -> bool:
        return self.state is PanelState.OPEN

    def dispatch(self, event: PanelEvent) -> bool:
        """Apply ``event``.  Returns True if the event was handled.

        A handled key event should have its default browser action
        suppressed by the caller.
        """
        new_state = TRANSITIONS.get((self.state, event))
        if new_state is None:
            return False
        old_state, self.state = self.state, new_state
        logger.debug("Chat panel %s -> %s on %s", old_state.value, new_state.value, event.value)
        if old_state is PanelState.CLOSED and new_state is PanelState.OPEN and self.focus_input:
            self.focus_input()
        return True

    def handle_key(self, key: str, ctrl: bool = False, meta: bool = False) -> bool:
        event = event_for_key(key, ctrl=ctrl, meta=meta)
        if event is None:
            return False
        return self.dispatch(event)

    def close(self) -> bool:
        return self.dispatch(PanelEvent.CLOSE_BUTTON)

    def request_open(self) -> bool:
        return self.dispatch(PanelEvent.OPEN_REQUEST)
