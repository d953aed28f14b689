"""Presentation player: a two-state machine over the navigator.

The player never touches deck content. It only moves the navigator's
position while presenting.
"""

import logging
from enum import Enum

from .navigation import Navigator

logger = logging.getLogger("Presento.core.player")


class PlayerMode(str, Enum):
    EDITING = "editing"
    PRESENTING = "presenting"


# Key names as reported by browser keyboard events
KEY_BINDINGS: dict[str, str] = {
    "ArrowRight": "advance",
    " ": "advance",
    "Space": "advance",
    "ArrowLeft": "retreat",
    "Escape": "exit",
}


class Player:
    def __init__(self, navigator: Navigator):
        self.navigator = navigator
        self.mode = PlayerMode.EDITING

    @property
    def is_presenting(self) -> bool:
        return self.mode is PlayerMode.PRESENTING

    @property
    def deck_length(self) -> int:
        return len(self.navigator.store.deck)

    @property
    def progress(self) -> float:
        """Fraction of the deck viewed, in (0, 1]."""
        return (self.navigator.index + 1) / self.deck_length

    @property
    def counter(self) -> str:
        return f"SLIDE {self.navigator.index + 1} / {self.deck_length}"

    def present(self) -> int:
        """Enter presenting mode at the current slide."""
        index = self.navigator.go_to_index(self.navigator.index)
        if not self.is_presenting:
            self.mode = PlayerMode.PRESENTING
            logger.info(f"Presenting from slide {index + 1} of {self.deck_length}")
        return index

    def exit(self) -> int:
        if self.is_presenting:
            self.mode = PlayerMode.EDITING
            logger.info("Left presenting mode")
        return self.navigator.index

    def advance(self) -> bool:
        """Move forward one slide. Returns False at the last slide or when editing."""
        if not self.is_presenting:
            return False
        index = self.navigator.index
        if index >= self.deck_length - 1:
            return False
        self.navigator.go_to_index(index + 1)
        return True

    def retreat(self) -> bool:
        if not self.is_presenting:
            return False
        index = self.navigator.index
        if index <= 0:
            return False
        self.navigator.go_to_index(index - 1)
        return True

    def handle_key(self, key: str) -> bool:
        """Dispatch a key press. Returns True if the key is bound."""
        command = KEY_BINDINGS.get(key)
        if command is None:
            return False
        getattr(self, command)()
        return True
