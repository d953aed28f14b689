"""Presento MCP Server - slide deck editing and presenting through MCP tools."""

from mcp.server.fastmcp import FastMCP, Context
import json
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Any, Optional, Union
from pathlib import Path

from pydantic import ValidationError

from slidedeck.config import settings
from slidedeck.core.slides import dump_slide
from slidedeck.core.state import SessionState
from slidedeck.transfer.gateway import DeckImportError

# Configure logging
logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO),
                    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger("Presento")


# ── Global State ────────────────────────────────────────────────────────

_session_state: Optional[SessionState] = None


def get_session() -> SessionState:
    global _session_state
    if _session_state is None:
        _session_state = SessionState.open(Path(settings.data_dir))
    return _session_state


def _position_payload(state: SessionState) -> dict:
    return {
        "route": state.route,
        "current_slide_id": state.navigator.current_slide_id,
        "current_ordinal": state.navigator.ordinal,
        "slide_count": len(state.store.deck),
    }


# ── Server Setup ────────────────────────────────────────────────────────

@asynccontextmanager
async def server_lifespan(server: FastMCP) -> AsyncIterator[Dict[str, Any]]:
    try:
        logger.info("Presento server starting up")
        try:
            state = get_session()
            logger.info(f"Loaded presentation '{state.store.name}' with {len(state.store.deck)} slides")
        except Exception as e:
            logger.warning(f"Could not open the session on startup: {str(e)}")
        yield {}
    finally:
        logger.info("Presento server shut down")


mcp = FastMCP("Presento", lifespan=server_lifespan)


# ═══════════════════════════════════════════════════════════════════════
# DECK TOOLS
# ═══════════════════════════════════════════════════════════════════════

@mcp.tool()
def get_presentation(ctx: Context) -> str:
    """Get the presentation name, mode, current position and a summary of every slide."""
    state = get_session()
    return json.dumps({
        **state.status(),
        "slides": state.store.deck.to_summary(),
    }, indent=2)


@mcp.tool()
def get_slide(ctx: Context, slide_id: str) -> str:
    """Get full details of a specific slide, including presenter notes.

    Parameters:
    - slide_id: The ID of the slide to retrieve
    """
    slide = get_session().store.deck.get(slide_id)
    if not slide:
        return f"Error: Slide '{slide_id}' not found."
    return json.dumps(dump_slide(slide), indent=2)


@mcp.tool()
def add_slide(ctx: Context) -> str:
    """Append a new empty title slide and select it."""
    state = get_session()
    slide = state.navigator.add_slide()
    return json.dumps({
        "status": "added",
        "slide": dump_slide(slide),
        **_position_payload(state),
    }, indent=2)


@mcp.tool()
def update_slide(ctx: Context, slide_id: str, layout: str = None, title: str = None,
                 content: Union[str, list[str]] = None, image: str = None,
                 image_fit: str = None, image_scale: int = None,
                 code: str = None, notes: str = None) -> str:
    """Edit a slide. Only the fields given are changed.

    Parameters:
    - slide_id: The ID of the slide to edit
    - layout: title, bullets, image-center, code or blank
    - title: Slide title
    - content: Text, or bullet points (a list, or one per line) for bullets slides
    - image: Image URL (image-center slides)
    - image_fit: contain, cover or fill (image-center slides)
    - image_scale: Image scale in percent (image-center slides)
    - code: Code snippet (code slides)
    - notes: Presenter notes, never shown to the audience
    """
    state = get_session()
    if state.store.deck.get(slide_id) is None:
        return f"Error: Slide '{slide_id}' not found."

    fields = {
        "layout": layout, "title": title, "content": content, "image": image,
        "image_fit": image_fit, "image_scale": image_scale, "code": code, "notes": notes,
    }
    patch = {k: v for k, v in fields.items() if v is not None}
    try:
        slide = state.navigator.update_slide(slide_id, patch)
    except ValidationError as e:
        return f"Error: Invalid slide fields: {str(e)}"
    return json.dumps({
        "status": "updated",
        "slide": dump_slide(slide),
    }, indent=2)


@mcp.tool()
def delete_slide(ctx: Context, slide_id: str) -> str:
    """Delete a slide. The last remaining slide cannot be deleted.

    Parameters:
    - slide_id: The ID of the slide to delete
    """
    state = get_session()
    if state.store.deck.get(slide_id) is None:
        return f"Error: Slide '{slide_id}' not found."
    if not state.navigator.delete_slide(slide_id):
        return "The last remaining slide cannot be deleted."
    return json.dumps({
        "status": "deleted",
        "slide_id": slide_id,
        **_position_payload(state),
    }, indent=2)


@mcp.tool()
def reorder_slides(ctx: Context, from_index: int, to_index: int) -> str:
    """Move one slide to a new position (0-based indices, as reported by a drag).

    Parameters:
    - from_index: Current index of the slide to move
    - to_index: Index the slide should end up at
    """
    state = get_session()
    try:
        moved = state.navigator.reorder(from_index, to_index)
    except IndexError as e:
        return f"Error: {str(e)}"
    return json.dumps({
        "status": "reordered" if moved else "unchanged",
        "order": [s.id for s in state.store.deck.slides],
        **_position_payload(state),
    }, indent=2)


@mcp.tool()
def select_slide(ctx: Context, slide_id: str = None, ordinal: str = None) -> str:
    """Select a slide by ID, or by 1-based position (out-of-range positions are clamped).

    Parameters:
    - slide_id: The ID of the slide to select
    - ordinal: 1-based position, used when slide_id is not given
    """
    state = get_session()
    if slide_id is not None:
        if not state.navigator.select(slide_id):
            return f"Error: Slide '{slide_id}' not found."
    else:
        state.navigator.go_to(ordinal)
    return json.dumps(_position_payload(state), indent=2)


@mcp.tool()
def rename_presentation(ctx: Context, name: str) -> str:
    """Rename the presentation. Whitespace is trimmed; a blank name falls back to the default.

    Parameters:
    - name: New presentation name
    """
    state = get_session()
    state.navigator.rename(name)
    committed = state.navigator.commit_name()
    return json.dumps({"status": "renamed", "name": committed}, indent=2)


# ═══════════════════════════════════════════════════════════════════════
# PRESENTING TOOLS
# ═══════════════════════════════════════════════════════════════════════

def _player_payload(state: SessionState) -> dict:
    slide = state.navigator.current_slide
    return {
        "mode": state.player.mode.value,
        "counter": state.player.counter,
        "progress": round(state.player.progress, 4),
        "slide": dump_slide(slide),
        **_position_payload(state),
    }


@mcp.tool()
def open_route(ctx: Context, path: str) -> str:
    """Navigate to an address such as /edit/3 or /view/2.

    Parameters:
    - path: The route to open
    """
    state = get_session()
    state.open_route(path)
    return json.dumps(_player_payload(state), indent=2)


@mcp.tool()
def start_presentation(ctx: Context) -> str:
    """Start presenting from the currently selected slide."""
    state = get_session()
    state.player.present()
    return json.dumps(_player_payload(state), indent=2)


@mcp.tool()
def next_slide(ctx: Context) -> str:
    """Advance to the next slide while presenting. Does nothing at the last slide."""
    state = get_session()
    if not state.player.is_presenting:
        return "Error: Not presenting. Use start_presentation first."
    state.player.advance()
    return json.dumps(_player_payload(state), indent=2)


@mcp.tool()
def previous_slide(ctx: Context) -> str:
    """Go back one slide while presenting. Does nothing at the first slide."""
    state = get_session()
    if not state.player.is_presenting:
        return "Error: Not presenting. Use start_presentation first."
    state.player.retreat()
    return json.dumps(_player_payload(state), indent=2)


@mcp.tool()
def exit_presentation(ctx: Context) -> str:
    """Stop presenting and return to editing at the current slide."""
    state = get_session()
    state.player.exit()
    return json.dumps(_position_payload(state), indent=2)


@mcp.tool()
def press_key(ctx: Context, key: str) -> str:
    """Send a key press: ArrowRight or Space (next), ArrowLeft (previous), Escape (exit).

    Parameters:
    - key: Key name as reported by a keyboard event
    """
    state = get_session()
    handled = state.player.handle_key(key)
    return json.dumps({"handled": handled, **_player_payload(state)}, indent=2)


# ═══════════════════════════════════════════════════════════════════════
# IMPORT / EXPORT TOOLS
# ═══════════════════════════════════════════════════════════════════════

@mcp.tool()
def export_presentation(ctx: Context, output_dir: str = None) -> str:
    """Export the presentation as a versioned JSON file.

    Parameters:
    - output_dir: Optional directory (defaults to the exports folder of the data directory)
    """
    state = get_session()
    try:
        path = state.export_to(Path(output_dir) if output_dir else None)
    except (OSError, ValueError) as e:
        logger.error(f"Export error: {str(e)}")
        return f"Error exporting presentation: {str(e)}"
    return json.dumps({
        "status": "exported",
        "path": str(path),
        "slide_count": len(state.store.deck),
    }, indent=2)


@mcp.tool()
def import_presentation(ctx: Context, file_path: str) -> str:
    """Replace the presentation with slides from a JSON file.

    Accepts an exported file or a bare array of slides. The current deck is
    kept if the file cannot be read.

    Parameters:
    - file_path: Path to the JSON file
    """
    state = get_session()
    try:
        count = state.import_from(Path(file_path))
    except FileNotFoundError:
        return f"Error: File not found: {file_path}"
    except DeckImportError as e:
        return f"Error: Failed to import slides. Please verify the JSON file and try again. ({str(e)})"
    except OSError as e:
        logger.error(f"Import error: {str(e)}")
        return f"Error reading {file_path}: {str(e)}"
    return json.dumps({
        "status": "imported",
        "name": state.store.name,
        "slide_count": count,
        **_position_payload(state),
    }, indent=2)


# ═══════════════════════════════════════════════════════════════════════
# MCP PROMPT
# ═══════════════════════════════════════════════════════════════════════

@mcp.prompt()
def presentation_workflow() -> str:
    """Recommended workflow for building and presenting a deck"""
    return """You are helping the user build a slide deck. Follow this workflow:

1. **Review**: Use get_presentation() to see the name, slides and current position.

2. **Edit**: 
   - Use add_slide() to append a slide, then update_slide() to fill it in
   - Pick a layout per slide: title, bullets, image-center, code or blank
   - Use reorder_slides() to move slides and delete_slide() to remove them
   - Use rename_presentation() to set the deck name

3. **Present**: Use start_presentation(), then next_slide() / previous_slide()
   or press_key(). Use exit_presentation() to go back to editing.

4. **Share**: Use export_presentation() to write a JSON file and
   import_presentation() to load one.

Tips:
- Presenter notes (notes field) are never shown to the audience
- A deck always keeps at least one slide
- Every change is saved automatically
"""


# ── Main ────────────────────────────────────────────────────────────────

def main():
    """Run the MCP server"""
    mcp.run()


if __name__ == "__main__":
    main()
