"""Navigable addresses: ``/``, ``/edit/<n>`` and ``/view/<n>``."""

from typing import Optional

HOME = "home"
EDIT = "edit"
VIEW = "view"


def parse_route(path: str) -> tuple[str, Optional[str]]:
    """Split a path into its view and raw position segment.

    Unknown paths are treated as home. The segment is returned unparsed;
    clamping is left to ``resolve``.
    """
    parts = [p for p in (path or "").split("/") if p]
    if not parts or parts[0] not in (EDIT, VIEW):
        return HOME, None
    segment = parts[1] if len(parts) > 1 else None
    return parts[0], segment


def build_route(view: str, ordinal: int) -> str:
    if view == HOME:
        return "/"
    return f"/{view}/{ordinal}"
