"""Navigation binder: keeps an external, 1-based position in step with the deck.

The binder holds no slides of its own. It reads the current segment from an
``Address`` (a path segment, a query parameter, a plain field), resolves it
against the deck, and writes the recomputed ordinal back after every action.
"""

import logging
import re
from typing import Optional, Protocol

from .actions import (
    Action,
    AddSlide,
    CommitName,
    DeleteSlide,
    RenamePresentation,
    ReorderSlides,
    ReplaceDeck,
    SelectSlide,
    UpdateSlide,
)
from .slides import SlideBase
from .store import DeckStore

logger = logging.getLogger("Presento.core.navigation")

_LEADING_INT = re.compile(r"^\s*([+-]?\d{1,18})")


def resolve(raw_position, deck_length: int) -> int:
    """Turn an external position into a 0-based index.

    Leading digits are read the way a URL segment is (``"3abc"`` is 3).
    Unparsable or absent input means ordinal 1; anything else is clamped into
    ``[1, deck_length]``.
    """
    match = _LEADING_INT.match(str(raw_position)) if raw_position is not None else None
    ordinal = int(match.group(1)) if match else 1
    ordinal = max(1, min(ordinal, deck_length))
    return ordinal - 1


class Address(Protocol):
    def read(self) -> Optional[str]: ...

    def write(self, segment: str) -> None: ...


class MemoryAddress:
    def __init__(self, segment: Optional[str] = None):
        self.segment = segment

    def read(self) -> Optional[str]:
        return self.segment

    def write(self, segment: str) -> None:
        self.segment = segment


class Navigator:
    """Threads the current position through every deck action."""

    def __init__(self, store: DeckStore, address: Optional[Address] = None):
        self.store = store
        self.address = address if address is not None else MemoryAddress()

    @property
    def index(self) -> int:
        return resolve(self.address.read(), len(self.store.deck))

    @property
    def ordinal(self) -> int:
        return self.index + 1

    @property
    def current_slide(self) -> SlideBase:
        return self.store.deck.slides[self.index]

    @property
    def current_slide_id(self) -> str:
        return self.current_slide.id

    def go_to(self, raw_position) -> int:
        """Point at ``raw_position`` (clamped) and return the 0-based index."""
        index = resolve(raw_position, len(self.store.deck))
        self.address.write(str(index + 1))
        return index

    def go_to_index(self, index: int) -> int:
        return self.go_to(index + 1)

    def dispatch(self, action: Action) -> int:
        """Apply ``action`` to the store and move the address with it."""
        position = self.store.dispatch(action, self.index)
        self.address.write(str(position + 1))
        return position

    # ── Editor verbs ────────────────────────────────────────────────────

    def select(self, slide_id: str) -> bool:
        if self.store.deck.get(slide_id) is None:
            return False
        self.dispatch(SelectSlide(slide_id))
        return True

    def add_slide(self) -> SlideBase:
        action = AddSlide()
        self.dispatch(action)
        return action.slide

    def update_slide(self, slide_id: str, patch: dict) -> Optional[SlideBase]:
        self.dispatch(UpdateSlide(slide_id, patch))
        return self.store.deck.get(slide_id)

    def delete_slide(self, slide_id: str) -> bool:
        before = len(self.store.deck)
        self.dispatch(DeleteSlide(slide_id))
        return len(self.store.deck) < before

    def reorder(self, from_index: int, to_index: int) -> bool:
        before = self.store.deck
        self.dispatch(ReorderSlides(from_index, to_index))
        return self.store.deck is not before

    def rename(self, name: str):
        self.dispatch(RenamePresentation(name))

    def commit_name(self) -> str:
        self.dispatch(CommitName())
        return self.store.name

    def replace_deck(self, slides: list, name: Optional[str] = None):
        self.dispatch(ReplaceDeck(slides, name))
        logger.info(f"Deck replaced with {len(self.store.deck)} slide(s)")
