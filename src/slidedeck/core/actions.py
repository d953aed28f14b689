"""Deck actions and the reducer that applies them.

``reduce(deck, index, action)`` returns the next deck together with the next
0-based position. Both are computed from the pre-mutation deck, so callers
can commit them as a single step. The input deck is never modified; when an
action changes nothing the very same deck object is returned.
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from .slides import Deck, SlideBase, blank_slide, commit_name, merge_slide


@dataclass(frozen=True)
class AddSlide:
    slide: SlideBase = field(default_factory=blank_slide)


@dataclass(frozen=True)
class UpdateSlide:
    slide_id: str
    patch: dict


@dataclass(frozen=True)
class DeleteSlide:
    slide_id: str


@dataclass(frozen=True)
class ReorderSlides:
    from_index: int
    to_index: int


@dataclass(frozen=True)
class RenamePresentation:
    """Set the name verbatim, as typed."""
    name: str


@dataclass(frozen=True)
class CommitName:
    """Finalize the name being edited (trim, default when blank)."""


@dataclass(frozen=True)
class SelectSlide:
    slide_id: str


@dataclass(frozen=True)
class ReplaceDeck:
    slides: list
    name: Optional[str] = None


Action = Union[
    AddSlide,
    UpdateSlide,
    DeleteSlide,
    ReorderSlides,
    RenamePresentation,
    CommitName,
    SelectSlide,
    ReplaceDeck,
]


def shift_for_delete(current: int, removed: int, new_length: int) -> int:
    """Position after removing the slide at ``removed``.

    Deleting the current slide keeps the same ordinal (the next slide slides
    into place) unless it was the last one. Deleting an earlier slide steps
    back by one so the same slide stays addressed.
    """
    if removed < current:
        return current - 1
    if removed == current:
        return min(current, new_length - 1)
    return current


def shift_for_move(current: int, from_index: int, to_index: int) -> int:
    """Position after moving a slide from ``from_index`` to ``to_index``."""
    if from_index == current:
        return to_index
    if from_index < current <= to_index:
        return current - 1
    if to_index <= current < from_index:
        return current + 1
    return current


def reduce(deck: Deck, index: int, action: Action) -> tuple[Deck, int]:
    if isinstance(action, AddSlide):
        new_deck = deck.model_copy(deep=True)
        new_deck.add(action.slide)
        return new_deck, len(new_deck) - 1

    if isinstance(action, UpdateSlide):
        current = deck.get(action.slide_id)
        if current is None:
            return deck, index
        new_deck = deck.model_copy(deep=True)
        new_deck.replace(merge_slide(current, action.patch))
        return new_deck, index

    if isinstance(action, DeleteSlide):
        removed = deck.index_of(action.slide_id)
        if removed == -1 or len(deck) <= 1:
            return deck, index
        new_deck = deck.model_copy(deep=True)
        new_deck.remove(action.slide_id)
        return new_deck, shift_for_delete(index, removed, len(new_deck))

    if isinstance(action, ReorderSlides):
        new_deck = deck.model_copy(deep=True)
        if not new_deck.move(action.from_index, action.to_index):
            return deck, index
        return new_deck, shift_for_move(index, action.from_index, action.to_index)

    if isinstance(action, RenamePresentation):
        if action.name == deck.name:
            return deck, index
        return deck.model_copy(update={"name": action.name}, deep=True), index

    if isinstance(action, CommitName):
        committed = commit_name(deck.name)
        if committed == deck.name:
            return deck, index
        return deck.model_copy(update={"name": committed}, deep=True), index

    if isinstance(action, SelectSlide):
        target = deck.index_of(action.slide_id)
        return deck, index if target == -1 else target

    if isinstance(action, ReplaceDeck):
        name = action.name.strip() if action.name else ""
        new_deck = Deck(name=name or deck.name, slides=list(action.slides))
        return new_deck, 0

    raise TypeError(f"Unknown action: {action!r}")
