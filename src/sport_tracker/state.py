"""Keyed state for the multi-step add-workout wizard."""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional

from .database.models import WorkoutType


@dataclass
class WizardState:
    selected_type: Optional[WorkoutType] = None
    awaiting_custom_duration: bool = False


class StateStore(ABC):
    """Interface for wizard state keyed by Telegram user ID."""

    @abstractmethod
    def get(self, user_id: int) -> WizardState:
        """Return the user's state, or a blank one when none is stored."""

    @abstractmethod
    def set(self, user_id: int, state: WizardState) -> None: ...

    @abstractmethod
    def clear(self, user_id: int) -> None: ...


class InMemoryStateStore(StateStore):
    """Per-process store; entries expire `ttl_seconds` after their last write.

    Expired entries are dropped when read and swept on every write, so
    abandoned wizards do not accumulate.
    """

    def __init__(
        self, ttl_seconds: float, *, clock: Callable[[], float] = time.monotonic
    ) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[int, tuple[float, WizardState]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def _expired(self, written_at: float, now: float) -> bool:
        return now - written_at > self._ttl

    def get(self, user_id: int) -> WizardState:
        entry = self._entries.get(user_id)
        if entry is None:
            return WizardState()
        written_at, state = entry
        if self._expired(written_at, self._clock()):
            del self._entries[user_id]
            return WizardState()
        return state

    def set(self, user_id: int, state: WizardState) -> None:
        now = self._clock()
        stale = [uid for uid, (written_at, _) in self._entries.items() if self._expired(written_at, now)]
        for uid in stale:
            del self._entries[uid]
        self._entries[user_id] = (now, state)

    def clear(self, user_id: int) -> None:
        self._entries.pop(user_id, None)
