# -*- coding: utf-8 -*-
"""
Project: Maze Escape

Brief Description:
    - Best-times leaderboard, one board per difficulty tier
    - Persisted as a single JSON object: {difficulty: [{"name", "time"}, ...]}
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from settings import LEADERBOARD_SIZE


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoreEntry:
    """A finished run: player name and elapsed seconds"""
    name: str
    time: float


class Leaderboard:
    """
    Leaderboard keeps the fastest runs per difficulty
    - path=None keeps everything in memory (tests, throwaway sessions)
    - otherwise the JSON file at path is read lazily and rewritten on submit
    - a failed write raises OSError and leaves the board unchanged
    """

    def __init__(self, path=None, size=LEADERBOARD_SIZE):
        self.path = Path(os.path.expanduser(path)) if path is not None else None
        self.size = size
        self._data = None

    # ---------- Storage ----------

    def _read(self):
        """Load the raw {difficulty: [...]} mapping, empty when missing or unreadable"""
        if self._data is not None:
            return self._data

        self._data = {}
        if self.path is None or not self.path.exists():
            return self._data

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Could not read leaderboard %s: %s", self.path, e)
            return self._data

        if not isinstance(raw, dict):
            logger.warning("Ignoring malformed leaderboard %s", self.path)
            return self._data

        for key, rows in raw.items():
            entries = []
            for row in rows if isinstance(rows, list) else []:
                try:
                    entries.append(ScoreEntry(str(row["name"]), float(row["time"])))
                except (KeyError, TypeError, ValueError):
                    logger.warning("Skipping bad leaderboard row in %s: %r", key, row)
            entries.sort(key=lambda entry: entry.time)
            self._data[key] = entries[: self.size]
        return self._data

    def _write(self, data):
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            key: [{"name": entry.name, "time": entry.time} for entry in entries]
            for key, entries in data.items()
        }
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)

    # ---------- Public API ----------

    def load(self, difficulty):
        """
        Scores for one difficulty, fastest first, at most `size` entries
        """
        return list(self._read().get(_key(difficulty), []))

    def submit(self, difficulty, name, time):
        """
        Record a run.
        - blank names are ignored (returns False)
        - entries are re-sorted ascending and truncated to `size`
        - returns True if the new entry made the board
        """
        name = (name or "").strip()
        if not name:
            return False

        key = _key(difficulty)
        entry = ScoreEntry(name, float(time))
        entries = list(self._read().get(key, []))
        entries.append(entry)
        entries.sort(key=lambda e: e.time)
        del entries[self.size:]

        # Only keep the new board in memory once it is on disk; OSError propagates
        self._write({**self._data, key: entries})
        self._data[key] = entries

        kept = any(e is entry for e in entries)
        logger.info("Score %s %.2fs on %s (%s)", name, entry.time, key,
                    "kept" if kept else "dropped")
        return kept


def _key(difficulty):
    # Difficulty enum or plain string
    return getattr(difficulty, "value", difficulty)
