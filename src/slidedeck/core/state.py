"""Session state: one deck, its position and the player, wired together."""

import logging
from pathlib import Path
from typing import Optional

from ..config import settings
from ..transfer.gateway import ExportResult, export_deck, import_deck
from .navigation import Address, MemoryAddress, Navigator
from .player import Player
from .routes import EDIT, HOME, VIEW, build_route, parse_route
from .storage import FileStorage, KeyValueStorage, MemoryStorage
from .store import DeckStore

logger = logging.getLogger("Presento.core.state")


class SessionState:
    """Everything a running editor needs for a single presentation."""

    def __init__(self, storage: Optional[KeyValueStorage] = None,
                 address: Optional[Address] = None,
                 data_dir: Optional[Path] = None):
        self.storage = storage if storage is not None else MemoryStorage()
        self.data_dir = Path(data_dir) if data_dir is not None else None
        self.store = DeckStore(self.storage)
        self.navigator = Navigator(self.store, address if address is not None else MemoryAddress())
        self.player = Player(self.navigator)
        self.at_home = False

    @classmethod
    def open(cls, data_dir: Optional[Path] = None) -> "SessionState":
        """Open the session persisted under ``data_dir``."""
        root = Path(data_dir or settings.data_dir)
        state = cls(storage=FileStorage(root / "storage"), data_dir=root)
        logger.info(f"Opened session in {root} ({len(state.store.deck)} slides)")
        return state

    @property
    def exports_dir(self) -> Optional[Path]:
        return self.data_dir / "exports" if self.data_dir else None

    # ── Routing ─────────────────────────────────────────────────────────

    @property
    def route(self) -> str:
        if self.at_home and not self.player.is_presenting:
            return build_route(HOME, self.navigator.ordinal)
        view = VIEW if self.player.is_presenting else EDIT
        return build_route(view, self.navigator.ordinal)

    def open_route(self, path: str) -> str:
        """Follow a navigable address and return the canonical route."""
        view, segment = parse_route(path)
        self.navigator.go_to(segment)
        if view == VIEW:
            self.player.present()
        else:
            self.player.exit()
        self.at_home = view == HOME
        return self.route

    # ── Import / export ─────────────────────────────────────────────────

    def export_deck(self) -> ExportResult:
        return export_deck(self.store.deck)

    def export_to(self, directory: Optional[Path] = None) -> Path:
        """Write the export payload and return the file path."""
        target_dir = Path(directory) if directory else self.exports_dir
        if target_dir is None:
            raise ValueError("No export directory given and the session has no data directory")
        result = self.export_deck()
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / result.filename
        path.write_bytes(result.payload)
        logger.info(f"Exported {len(self.store.deck)} slides to {path}")
        return path

    def import_payload(self, payload) -> int:
        """Replace the deck with an imported one. Returns the slide count.

        On DeckImportError the deck and position are left as they were.
        """
        try:
            result = import_deck(payload)
        except ValueError as e:
            logger.error(f"Import failed: {e}")
            raise
        self.navigator.replace_deck(result.slides, result.name)
        return len(result.slides)

    def import_from(self, path: Path) -> int:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"No such file: {path}")
        return self.import_payload(path.read_bytes())

    # ── Summary ─────────────────────────────────────────────────────────

    def status(self) -> dict:
        deck = self.store.deck
        return {
            "name": deck.name,
            "slide_count": len(deck),
            "mode": self.player.mode.value,
            "route": self.route,
            "current_slide_id": self.navigator.current_slide_id,
            "current_ordinal": self.navigator.ordinal,
            "progress": round(self.player.progress, 4),
            "data_dir": str(self.data_dir) if self.data_dir else None,
        }

