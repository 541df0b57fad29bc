"""Local pantry slot: one JSON file holding one key with the {item: bool} map.

Read once at startup, written synchronously on every change. There is no
locking; two processes writing the same file means last writer wins.
"""

import json
from pathlib import Path
from typing import Optional
from urllib.parse import urlencode, urlsplit, urlunsplit, parse_qsl

from src.kitchen.share import build_share_url, decode_share_map, selected_ids
from src.utils.config import config
from src.utils.logger import logger
from src.utils.safe import safe_execute_sync


class PantryStore:
    """File-backed key/value slot for the pantry selection."""

    def __init__(self, path: Optional[Path] = None, key: Optional[str] = None) -> None:
        self.path = Path(path) if path else config.PANTRY_STORE_PATH
        self.key = key or config.PANTRY_STORE_KEY
        self.pantry: dict[str, bool] = self.load()

    def _read(self) -> dict[str, bool]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        stored = data.get(self.key) if isinstance(data, dict) else None
        if not isinstance(stored, dict):
            return {}
        return {str(item): bool(available) for item, available in stored.items()}

    def load(self) -> dict[str, bool]:
        """Stored map, or {} when the slot is missing or unreadable."""
        return safe_execute_sync(
            self._read,
            f"Read pantry slot {self.path}",
            log_level="warning",
            default_return={},
        )

    def save(self, pantry: Optional[dict[str, bool]] = None) -> None:
        """Persist `pantry` (or the current map) into the slot, keeping other keys."""
        if pantry is not None:
            self.pantry = dict(pantry)

        existing = safe_execute_sync(
            lambda: json.loads(self.path.read_text(encoding="utf-8")) if self.path.exists() else {},
            f"Read pantry slot {self.path}",
            log_level="debug",
            default_return={},
        )
        if not isinstance(existing, dict):
            existing = {}
        existing[self.key] = self.pantry

        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(existing, ensure_ascii=False, indent=2), encoding="utf-8")
        logger.debug(f"Pantry saved: {len(self.selected())} selected items -> {self.path}")

    def set(self, item: str, available: bool = True) -> None:
        self.pantry[item] = available
        self.save()

    def toggle(self, item: str) -> bool:
        """Flip one item and persist. Returns the new state."""
        state = not self.pantry.get(item, False)
        self.set(item, state)
        return state

    def clear(self) -> None:
        self.save({})

    def selected(self) -> list[str]:
        return selected_ids(self.pantry)

    def share_url(self, origin: Optional[str] = None) -> str:
        return build_share_url(self.pantry, origin)

    def import_share(self, value: str) -> list[str]:
        """Replace the stored map with the one carried by a share token or URL.

        Unreadable input leaves the store untouched.

        Returns:
            The imported selection (sorted ids), [] when nothing was imported.
        """
        imported = decode_share_map(value)
        if not imported:
            logger.info("Share import: nothing to import")
            return []
        self.save(imported)
        logger.info(f"Share import: {len(self.selected())} items imported")
        return self.selected()


def strip_share_params(url: str) -> str:
    """Remove both share parameters from a URL, keeping everything else."""
    parts = urlsplit(url)
    share_params = (config.SHARE_PARAM, config.LEGACY_SHARE_PARAM)
    query = [(key, value) for key, value in parse_qsl(parts.query, keep_blank_values=True) if key not in share_params]
    return urlunsplit(parts._replace(query=urlencode(query)))
