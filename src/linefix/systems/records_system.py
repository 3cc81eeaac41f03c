from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Tuple

from esper import World

from linefix.constants import STORAGE_KEY
from linefix.events.bus import EVENT_RECORDS_LOADED, EVENT_RECORDS_UPDATED, EventBus
from linefix.systems.session_utils import get_or_create_session

logger = logging.getLogger(__name__)


def _coerce_record_value(value: Any) -> int:
    if isinstance(value, bool) or value is None:
        return 0
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(0, number)


def parse_record(raw: str | None) -> Tuple[int, int]:
    """Decode a stored ``{"bestScore", "bestTile"}`` record; anything unreadable yields zeros."""
    if not raw:
        return 0, 0
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning("Ignoring unreadable best-record payload")
        return 0, 0
    if not isinstance(payload, dict):
        return 0, 0
    return (
        _coerce_record_value(payload.get("bestScore")),
        _coerce_record_value(payload.get("bestTile")),
    )


class RecordsSystem:
    """Loads and persists the best score and best tile across sessions."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        save_path: Path | None = None,
        load_existing: bool = True,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self._save_path = Path(save_path) if save_path is not None else self._default_save_path()
        self.event_bus.subscribe(EVENT_RECORDS_UPDATED, self._on_records_updated)
        if load_existing:
            self.load_records()

    @staticmethod
    def _default_save_path() -> Path:
        return Path(__file__).resolve().parents[3] / "data" / f"{STORAGE_KEY}.json"

    @property
    def save_path(self) -> Path:
        return self._save_path

    def load_records(self) -> Tuple[int, int]:
        try:
            raw = self._save_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raw = None
        except (OSError, UnicodeDecodeError):
            logger.warning("Could not read best records from %s", self._save_path)
            raw = None
        best_score, best_tile = parse_record(raw)
        session = get_or_create_session(self.world)
        session.best_score = best_score
        session.best_tile = best_tile
        self.event_bus.emit(EVENT_RECORDS_LOADED, best_score=best_score, best_tile=best_tile)
        return best_score, best_tile

    def save_records(self) -> None:
        session = get_or_create_session(self.world)
        self._save_path.parent.mkdir(parents=True, exist_ok=True)
        with self._save_path.open("w", encoding="utf-8") as handle:
            json.dump({
                "bestScore": session.best_score,
                "bestTile": session.best_tile,
            }, handle)
        logger.debug("Saved best records to %s", self._save_path)

    # Event handlers -----------------------------------------------------

    def _on_records_updated(self, sender, **payload) -> None:
        self.save_records()
