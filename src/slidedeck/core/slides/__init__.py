"""Slides package — public API re-exports."""

from .slide import (
    LAYOUTS,
    IMAGE_FITS,
    Slide,
    SlideBase,
    TextSlide,
    TitleSlide,
    BulletsSlide,
    ImageSlide,
    CodeSlide,
    BlankSlide,
    new_slide_id,
    normalize_slide_data,
    parse_slide,
    merge_slide,
    dump_slide,
    assign_slide_ids,
)
from .deck import DEFAULT_NAME, Deck, commit_name
from .templates import blank_slide, starter_slides

__all__ = [
    "LAYOUTS",
    "IMAGE_FITS",
    "Slide",
    "SlideBase",
    "TextSlide",
    "TitleSlide",
    "BulletsSlide",
    "ImageSlide",
    "CodeSlide",
    "BlankSlide",
    "new_slide_id",
    "normalize_slide_data",
    "parse_slide",
    "merge_slide",
    "dump_slide",
    "assign_slide_ids",
    "DEFAULT_NAME",
    "Deck",
    "commit_name",
    "blank_slide",
    "starter_slides",
]
