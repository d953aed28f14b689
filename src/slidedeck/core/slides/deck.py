"""Deck model: the ordered slide collection plus the presentation name."""

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from .slide import Slide, SlideBase
from .templates import starter_slides

DEFAULT_NAME = "Slides"


def commit_name(name: str) -> str:
    """Finalize a presentation name: trimmed, or the default when blank."""
    return name.strip() or DEFAULT_NAME


class Deck(BaseModel):
    """Ordered slides with CRUD operations.

    Order is both edit order and presentation order. A deck never has fewer
    than one slide and slide ids are unique within it.
    """
    name: str = DEFAULT_NAME
    slides: list[Slide] = Field(default_factory=starter_slides, min_length=1)

    @model_validator(mode="after")
    def check_unique_ids(self) -> "Deck":
        ids = [s.id for s in self.slides]
        if len(ids) != len(set(ids)):
            raise ValueError("Slide ids must be unique within a deck")
        return self

    def __len__(self) -> int:
        return len(self.slides)

    def get(self, slide_id: str) -> Optional[SlideBase]:
        for s in self.slides:
            if s.id == slide_id:
                return s
        return None

    def index_of(self, slide_id: str) -> int:
        """Index of ``slide_id``, or -1 when it is not in the deck."""
        for i, s in enumerate(self.slides):
            if s.id == slide_id:
                return i
        return -1

    def add(self, slide: SlideBase) -> SlideBase:
        if self.get(slide.id) is not None:
            raise ValueError(f"Slide id '{slide.id}' already exists")
        self.slides.append(slide)
        return slide

    def replace(self, slide: SlideBase) -> bool:
        idx = self.index_of(slide.id)
        if idx == -1:
            return False
        self.slides[idx] = slide
        return True

    def remove(self, slide_id: str) -> bool:
        if len(self.slides) <= 1:
            return False
        original_len = len(self.slides)
        self.slides = [s for s in self.slides if s.id != slide_id]
        return len(self.slides) < original_len

    def move(self, from_index: int, to_index: int) -> bool:
        size = len(self.slides)
        if not (0 <= from_index < size and 0 <= to_index < size):
            raise IndexError(
                f"Cannot move slide {from_index} -> {to_index} in a deck of {size}"
            )
        if from_index == to_index:
            return False
        slide = self.slides.pop(from_index)
        self.slides.insert(to_index, slide)
        return True

    def to_summary(self) -> list[dict]:
        summary = []
        for i, s in enumerate(self.slides):
            if isinstance(s.content, list):
                snippet = f"{len(s.content)} bullet(s)"
            else:
                text = s.content or ""
                snippet = (text[:80] + "...") if len(text) > 80 else text
            summary.append({
                "id": s.id,
                "ordinal": i + 1,
                "layout": s.layout,
                "title": s.title or "(untitled)",
                "content_snippet": snippet,
                "has_notes": bool(s.notes),
            })
        return summary
