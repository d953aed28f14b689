"""Starter content — the deck a first session opens with, and new-slide defaults."""

from .slide import BulletsSlide, CodeSlide, SlideBase, TitleSlide


def blank_slide() -> TitleSlide:
    """A fresh slide as created by the add button: title layout, no text."""
    return TitleSlide(title="", content="")


def starter_slides() -> list[SlideBase]:
    return [
        TitleSlide(
            id="1",
            title="Welcome to Presento",
            content="A lightweight slide creator with local persistence",
        ),
        BulletsSlide(
            id="2",
            title="Features",
            content=[
                "Simple Markdown-like editing",
                "Real-time preview",
                "Dark mode support",
                "Local storage persistence",
                "Manual JSON import/export",
            ],
        ),
        CodeSlide(
            id="3",
            title="Code Snippets",
            code='// Example code block\nfunction hello() {\n  console.log("Hello World!");\n}',
        ),
    ]
