"""Storage interface for saved schedules."""

import json
import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path

from .store import Schedule
from .views import total_credits

log = logging.getLogger(__name__)


def schedule_payload(term: str, schedule: Schedule) -> dict:
    """Serialized form handed to a storage backend."""
    return {
        "term": term,
        "scheduleData": schedule.to_list(),
        "totalCredits": total_credits(schedule),
    }


class ScheduleRepository(ABC):
    """Saves and loads a user's schedule for a term.

    Extend this class to back schedules with a database or remote API.
    """

    @abstractmethod
    def save(self, user: str, term: str, schedule: Schedule) -> None:
        """Persist a schedule.

        Args:
            user: Opaque user identity.
            term: Term key, e.g. "2025/spring".
            schedule: Schedule to store.
        """
        pass

    @abstractmethod
    def load(self, user: str, term: str) -> Schedule:
        """Load a schedule, returning an empty one when none is stored."""
        pass


class JsonScheduleRepository(ScheduleRepository):
    """Keeps one JSON file per user and term in a directory."""

    def __init__(self, directory: str) -> None:
        self._directory = Path(directory)

    def _path(self, user: str, term: str) -> Path:
        key = re.sub(r"[^A-Za-z0-9_-]+", "_", f"{user}-{term}")
        return self._directory / f"{key}.json"

    def save(self, user: str, term: str, schedule: Schedule) -> None:
        self._directory.mkdir(parents=True, exist_ok=True)
        path = self._path(user, term)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(schedule_payload(term, schedule), f, indent=2)
        log.info("Saved %d entries to %s", len(schedule), path)

    def load(self, user: str, term: str) -> Schedule:
        path = self._path(user, term)
        if not path.exists():
            return Schedule()

        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)

        if data.get("term") != term:
            raise ValueError(f"{path} holds a schedule for {data.get('term')!r}, not {term!r}")
        if not isinstance(data.get("scheduleData"), list):
            raise ValueError(f"{path}: scheduleData must be a list")

        return Schedule.from_list(data["scheduleData"])
