"""Persistence adapters for :class:`~communitree.core.models.AppState` snapshots."""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import ValidationError

from ..core.models import AppState

logger = logging.getLogger(__name__)


class StateStorage(ABC):
    """Abstract key-value style load/save of a full state snapshot."""

    @abstractmethod
    def load(self) -> AppState | None:
        """Return the stored snapshot, or ``None`` if there is none."""

    @abstractmethod
    def save(self, state: AppState) -> None:
        """Persist ``state``, replacing any previous snapshot."""


class JSONStateStorage(StateStorage):
    """Persist the state to a single JSON file.

    The storage is intentionally lightweight. Each save rewrites the whole
    file through a temporary file and ``os.replace`` so a crash mid-write
    never leaves a truncated snapshot behind.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def load(self) -> AppState | None:
        if not self.path.exists():
            return None
        try:
            return AppState.model_validate_json(self.path.read_text(encoding="utf-8"))
        except ValidationError:
            logger.warning("Ignoring unreadable state snapshot at %s", self.path, exc_info=True)
            return None

    def save(self, state: AppState) -> None:
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(state.model_dump_json(indent=2), encoding="utf-8")
        os.replace(tmp, self.path)


class MemoryStateStorage(StateStorage):
    """Keeps the last saved snapshot in memory. Useful for tests and demos."""

    def __init__(self, state: AppState | None = None) -> None:
        self.state = state
        self.save_count = 0

    def load(self) -> AppState | None:
        return self.state

    def save(self, state: AppState) -> None:
        self.state = state
        self.save_count += 1
