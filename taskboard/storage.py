"""Persistence layer for the task board."""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional

from .models import Board, seed_board

logger = logging.getLogger(__name__)

STORAGE_KEY = "taskAppState"


class PersistError(Exception):
    """A snapshot could not be written to the store."""


class JsonFileStore:
    """String key-value store kept as a single JSON object on disk."""

    def __init__(self, path: Path):
        self.path = path

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return data

    def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        os.replace(tmp_path, self.path)

    def get_item(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        try:
            data = self._read()
        except (ValueError, RecursionError):
            logger.warning("Discarding unreadable store file %s", self.path)
            data = {}
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)


class BoardSnapshotStore:
    """Reads and writes board snapshots under a single store key.

    ``load`` and ``save`` never raise: a corrupt snapshot reads as absent and
    a failed write is logged and reported through the return value.
    """

    def __init__(self, store: JsonFileStore, key: str = STORAGE_KEY):
        self.store = store
        self.key = key
        self.last_error: Optional[PersistError] = None

    def load(self) -> Optional[Board]:
        try:
            payload = self.store.get_item(self.key)
        except (OSError, ValueError, RecursionError) as exc:
            logger.warning("Could not read board store: %s", exc)
            return None
        if payload is None:
            return None
        try:
            return Board.from_dict(json.loads(payload))
        except (ValueError, KeyError, TypeError, RecursionError) as exc:
            logger.warning("Ignoring corrupt board snapshot: %s", exc)
            return None

    def load_or_seed(self) -> Board:
        board = self.load()
        if board is None:
            logger.info("No saved board found, starting from seed board")
            return seed_board()
        return board

    def save(self, board: Board) -> bool:
        try:
            self.store.set_item(self.key, json.dumps(board.to_dict()))
        except OSError as exc:
            self.last_error = PersistError(str(exc))
            logger.error("Failed to save board: %s", exc)
            return False
        self.last_error = None
        return True

    def export_to(self, board: Board, output_path: Path) -> None:
        output_path.write_text(json.dumps(board.to_dict(), indent=2), encoding="utf-8")

    def import_from(self, input_path: Path) -> Board:
        try:
            data = json.loads(input_path.read_text(encoding="utf-8"))
            return Board.from_dict(data)
        except (KeyError, TypeError, RecursionError) as exc:
            raise ValueError(f"Invalid board export: {exc}") from exc
