"""Deck store: owns the deck and keeps durable storage in step with it."""

import json
import logging
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from ..config import settings
from .actions import (
    Action,
    AddSlide,
    CommitName,
    DeleteSlide,
    RenamePresentation,
    ReorderSlides,
    ReplaceDeck,
    UpdateSlide,
    reduce,
)
from .slides import (
    Deck,
    Slide,
    SlideBase,
    assign_slide_ids,
    commit_name,
    dump_slide,
    normalize_slide_data,
)
from .storage import KeyValueStorage

logger = logging.getLogger("Presento.core.store")

_slide_list_adapter: TypeAdapter = TypeAdapter(list[Slide])


class DeckStore:
    """Single owner of the deck.

    Every mutation rewrites both persisted values (slide list and name).
    Storage is written before the in-memory deck is swapped, so a failed
    write leaves the store on its previous state.
    """

    def __init__(self, storage: KeyValueStorage,
                 slides_key: Optional[str] = None, name_key: Optional[str] = None):
        self.storage = storage
        self.slides_key = slides_key or settings.slides_key
        self.name_key = name_key or settings.name_key
        self._deck = self._load()

    @property
    def deck(self) -> Deck:
        return self._deck

    @property
    def name(self) -> str:
        return self._deck.name

    @property
    def slides(self) -> list[SlideBase]:
        return list(self._deck.slides)

    # ── Persistence ─────────────────────────────────────────────────────

    def _load(self) -> Deck:
        try:
            name = commit_name(self.storage.get(self.name_key) or "")
        except ValueError as e:
            logger.warning(f"Stored name unreadable, using the default: {e}")
            name = commit_name("")
        try:
            raw = self.storage.get(self.slides_key)
            if raw is None:
                return Deck(name=name)
            data = json.loads(raw)
            if not isinstance(data, list) or not data:
                raise ValueError("stored slide list is empty or not a list")
            slides = _slide_list_adapter.validate_python(
                [normalize_slide_data(s) for s in assign_slide_ids(data)]
            )
            return Deck(name=name, slides=slides)
        except (ValueError, TypeError, RecursionError, ValidationError) as e:
            logger.warning(f"Stored slides unreadable, starting from the starter deck: {e}")
            return Deck(name=name)

    def _persist(self, deck: Deck):
        slides_json = json.dumps([dump_slide(s) for s in deck.slides], ensure_ascii=False)
        self.storage.set(self.slides_key, slides_json)
        self.storage.set(self.name_key, deck.name)

    def save(self):
        self._persist(self._deck)

    # ── Mutations ───────────────────────────────────────────────────────

    def dispatch(self, action: Action, position: int = 0) -> int:
        """Apply ``action`` with the caller's current position.

        Returns the recomputed position. Nothing is written when the action
        is a no-op.
        """
        new_deck, new_position = reduce(self._deck, position, action)
        if new_deck is not self._deck:
            self._persist(new_deck)
            self._deck = new_deck
            logger.debug(f"Applied {type(action).__name__}; {len(new_deck)} slide(s)")
        return new_position

    def add_slide(self) -> str:
        action = AddSlide()
        self.dispatch(action)
        return action.slide.id

    def update_slide(self, slide_id: str, patch: dict) -> Optional[SlideBase]:
        self.dispatch(UpdateSlide(slide_id, patch))
        return self._deck.get(slide_id)

    def delete_slide(self, slide_id: str) -> bool:
        before = len(self._deck)
        self.dispatch(DeleteSlide(slide_id))
        return len(self._deck) < before

    def reorder(self, from_index: int, to_index: int) -> bool:
        before = self._deck
        self.dispatch(ReorderSlides(from_index, to_index))
        return self._deck is not before

    def rename(self, name: str):
        self.dispatch(RenamePresentation(name))

    def commit_name(self) -> str:
        self.dispatch(CommitName())
        return self._deck.name

    def replace(self, slides: list, name: Optional[str] = None):
        self.dispatch(ReplaceDeck(slides, name))
