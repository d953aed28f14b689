"""Versioned JSON envelope for exported decks."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..core.slides import Slide

ENVELOPE_VERSION = 1


class ExportEnvelope(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    version: int = ENVELOPE_VERSION
    exported_at: datetime
    name: Optional[str] = None
    slides: list[Slide]
