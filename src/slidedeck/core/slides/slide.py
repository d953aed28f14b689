"""Slide data models.

A slide is a tagged union keyed by ``layout``. Each layout only carries the
fields it can render, so an image slide never holds code and a bullets slide
always holds a list of strings.
"""

import uuid
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel

LAYOUTS = ("title", "bullets", "image-center", "code", "blank")
IMAGE_FITS = ("contain", "cover", "fill")
DEFAULT_IMAGE_SCALE = 100


def new_slide_id() -> str:
    return uuid.uuid4().hex


class SlideBase(BaseModel):
    """Fields shared by every layout. ``notes`` are presenter-only."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(default_factory=new_slide_id)
    title: Optional[str] = None
    notes: Optional[str] = None


class TextSlide(SlideBase):
    """Layouts whose content is a single block of free text."""
    content: Optional[str] = None

    @field_validator("content", mode="before")
    @classmethod
    def join_bullet_lines(cls, v: Any) -> Any:
        # Bullets become one line each when a slide leaves the bullets layout
        if isinstance(v, (list, tuple)):
            return "\n".join(str(item) for item in v)
        return v


class TitleSlide(TextSlide):
    layout: Literal["title"] = "title"


class BulletsSlide(SlideBase):
    layout: Literal["bullets"] = "bullets"
    content: list[str] = Field(default_factory=list)

    @field_validator("content", mode="before")
    @classmethod
    def split_text_lines(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            return v.split("\n")
        return v


class ImageSlide(TextSlide):
    layout: Literal["image-center"] = "image-center"
    image: Optional[str] = None
    image_fit: Optional[Literal["contain", "cover", "fill"]] = None
    image_scale: Optional[int] = None  # percent

    @property
    def effective_fit(self) -> str:
        return self.image_fit or "contain"

    @property
    def effective_scale(self) -> int:
        return self.image_scale or DEFAULT_IMAGE_SCALE


class CodeSlide(TextSlide):
    layout: Literal["code"] = "code"
    code: Optional[str] = None


class BlankSlide(TextSlide):
    layout: Literal["blank"] = "blank"


Slide = Annotated[
    Union[TitleSlide, BulletsSlide, ImageSlide, CodeSlide, BlankSlide],
    Field(discriminator="layout"),
]

_slide_adapter: TypeAdapter = TypeAdapter(Slide)

# camelCase spellings accepted in patches and hand-written JSON
_ALIASES = {
    "imageFit": "image_fit",
    "imageScale": "image_scale",
}


def normalize_slide_data(data: dict) -> dict:
    """Return a copy of ``data`` with snake_case keys and a layout tag."""
    out = {_ALIASES.get(k, k): v for k, v in data.items()}
    if not out.get("layout"):
        out["layout"] = "title"
    return out


def parse_slide(data: dict) -> SlideBase:
    """Validate a raw slide dict into the model for its layout."""
    return _slide_adapter.validate_python(normalize_slide_data(data))


def merge_slide(slide: SlideBase, patch: dict) -> SlideBase:
    """Build the replacement for ``slide`` with ``patch`` applied.

    The id never changes. Switching ``layout`` converts content and drops
    fields the new layout does not have.
    """
    data = slide.model_dump()
    data.update({_ALIASES.get(k, k): v for k, v in patch.items()})
    if not data.get("layout"):
        data["layout"] = slide.layout
    data["id"] = slide.id
    return parse_slide(data)


def dump_slide(slide: SlideBase) -> dict:
    """Wire representation: camelCase keys, unset optionals omitted."""
    return slide.model_dump(by_alias=True, exclude_none=True)


def assign_slide_ids(raw_slides: list) -> list[dict]:
    """Give every raw slide a usable, unique id.

    Absent, empty and repeated ids are replaced with fresh ones; integer ids
    from hand-written JSON are kept as strings. Raises TypeError for entries
    that are not objects.
    """
    seen: set[str] = set()
    repaired = []
    for raw in raw_slides:
        if not isinstance(raw, dict):
            raise TypeError(f"Slide entries must be objects, got {type(raw).__name__}")
        item = dict(raw)
        slide_id = item.get("id")
        if isinstance(slide_id, int) and not isinstance(slide_id, bool):
            slide_id = str(slide_id)
        if not isinstance(slide_id, str) or not slide_id or slide_id in seen:
            slide_id = new_slide_id()
        item["id"] = slide_id
        seen.add(slide_id)
        repaired.append(item)
    return repaired
