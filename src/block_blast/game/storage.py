from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Protocol, Union


logger = logging.getLogger(__name__)


class HighScoreStore(Protocol):
    def load(self, name: str, default: int = 0) -> int: ...

    def save(self, name: str, value: int) -> None: ...


class MemoryHighScoreStore:
    """In-process store, useful for tests and headless runs."""

    def __init__(self, initial: Dict[str, int] | None = None) -> None:
        self.values: Dict[str, int] = dict(initial or {})

    def load(self, name: str, default: int = 0) -> int:
        return int(self.values.get(name, default))

    def save(self, name: str, value: int) -> None:
        self.values[name] = int(value)


class JsonHighScoreStore:
    """Named integer values kept in a flat JSON object on disk.

    A missing or unreadable file reads as empty. Write errors propagate.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def _read(self) -> Dict[str, int]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable high score file %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring high score file %s: expected an object", self.path)
            return {}
        return data

    def load(self, name: str, default: int = 0) -> int:
        value = self._read().get(name, default)
        try:
            return max(0, int(value))
        except (TypeError, ValueError):
            logger.warning("Ignoring non-numeric %r in %s", name, self.path)
            return default

    def save(self, name: str, value: int) -> None:
        data = self._read()
        data[name] = int(value)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        logger.debug("Saved %s=%d to %s", name, value, self.path)
