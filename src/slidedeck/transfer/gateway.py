"""Export and import of whole decks as UTF-8 JSON.

Import accepts the envelope written by ``export_deck`` or, for older and
hand-made files, a bare array of slides.
"""

import json
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Union

from pydantic import TypeAdapter, ValidationError

from ..core.slides import Deck, Slide, SlideBase, assign_slide_ids, normalize_slide_data
from .envelope import ENVELOPE_VERSION, ExportEnvelope

logger = logging.getLogger("Presento.transfer")

DEFAULT_SLUG = "slides"
MAX_SLUG_LENGTH = 50

_slide_list_adapter: TypeAdapter = TypeAdapter(list[Slide])


class DeckImportError(ValueError):
    """The payload could not be read as a deck."""


@dataclass
class ExportResult:
    payload: bytes
    filename: str
    envelope: ExportEnvelope


@dataclass
class ImportResult:
    slides: list[SlideBase]
    name: Optional[str] = None
    version: Optional[int] = None


def slugify(name: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", (name or "").lower()).strip("-")
    return slug[:MAX_SLUG_LENGTH].strip("-")


def suggested_filename(name: str, when: datetime) -> str:
    return f"{slugify(name) or DEFAULT_SLUG}-{when.date().isoformat()}.json"


def export_deck(deck: Deck, now: Optional[datetime] = None) -> ExportResult:
    exported_at = now or datetime.now(timezone.utc)
    envelope = ExportEnvelope(
        version=ENVELOPE_VERSION,
        exported_at=exported_at,
        name=deck.name,
        slides=deck.model_copy(deep=True).slides,
    )
    payload = envelope.model_dump_json(by_alias=True, exclude_none=True, indent=2)
    return ExportResult(
        payload=payload.encode("utf-8"),
        filename=suggested_filename(deck.name, exported_at),
        envelope=envelope,
    )


def import_deck(payload: Union[bytes, str]) -> ImportResult:
    """Parse and validate an exported deck.

    Raises DeckImportError when the payload is not JSON, holds neither an
    array nor an object with a ``slides`` array, has no slides, or contains
    an invalid slide. Slides without a usable id get a fresh one.
    """
    try:
        text = payload.decode("utf-8-sig") if isinstance(payload, bytes) else payload
        parsed = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as e:
        raise DeckImportError(f"File is not valid JSON: {e}") from e

    name = None
    version = None
    if isinstance(parsed, list):
        raw_slides = parsed
    elif isinstance(parsed, dict) and isinstance(parsed.get("slides"), list):
        raw_slides = parsed["slides"]
        if isinstance(parsed.get("name"), str) and parsed["name"].strip():
            name = parsed["name"].strip()
        if isinstance(parsed.get("version"), int):
            version = parsed["version"]
    else:
        raise DeckImportError("No slides found in file")

    if not raw_slides:
        raise DeckImportError("No slides found in file")
    if version is not None and version > ENVELOPE_VERSION:
        logger.info(f"Importing envelope version {version}; newer than {ENVELOPE_VERSION}")

    try:
        repaired = [normalize_slide_data(s) for s in assign_slide_ids(raw_slides)]
        slides = _slide_list_adapter.validate_python(repaired)
    except TypeError as e:
        raise DeckImportError(str(e)) from e
    except ValidationError as e:
        raise DeckImportError(f"Invalid slide data: {e.error_count()} error(s)\n{e}") from e

    return ImportResult(slides=slides, name=name, version=version)
