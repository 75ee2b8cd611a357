"""Add/remove orchestration for a single user action."""

import logging
import time
from typing import Callable, Iterable, Optional

from .association import AssociationResult, resolve_associated_sections
from .conflicts import find_conflict
from .models import SectionRecord
from .results import AddResult, Added, ConflictError, DuplicateError, Rejection
from .store import Schedule, ScheduleEntry
from .views import total_credits

log = logging.getLogger(__name__)


class TimetableController:
    """Applies add, remove and clear actions to a schedule.

    Every action either mutates the schedule consistently or leaves it
    untouched; rejections are returned as values and remembered as a
    short-lived notice for display.
    """

    NOTICE_SECONDS = 5.0

    def __init__(
        self,
        schedule: Optional[Schedule] = None,
        notice_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the controller.

        Args:
            schedule: Store to operate on (a new empty one by default).
            notice_seconds: How long a rejection stays visible.
            clock: Monotonic time source, injectable for tests.
        """
        self.schedule = schedule if schedule is not None else Schedule()
        self._notice_seconds = self.NOTICE_SECONDS if notice_seconds is None else notice_seconds
        self._clock = clock
        self._notice: Optional[Rejection] = None
        self._notice_at = 0.0

    @property
    def notice(self) -> Optional[Rejection]:
        """The latest rejection, until its display window expires."""
        if self._notice is None:
            return None
        if self._clock() - self._notice_at >= self._notice_seconds:
            self._notice = None
        return self._notice

    @property
    def total_credits(self) -> int:
        return total_credits(self.schedule)

    def _reject(self, result: Rejection) -> Rejection:
        log.info(result.message)
        self._notice = result
        self._notice_at = self._clock()
        return result

    def add(self, section: SectionRecord) -> AddResult:
        """Try to add a section to the schedule.

        Args:
            section: Fully resolved catalog section.

        Returns:
            Added on success, DuplicateError when the same section is
            already present, ConflictError when it overlaps another slot.
        """
        if self.schedule.find(section.course_code, section.section_label) is not None:
            return self._reject(DuplicateError(section))

        conflict = find_conflict(section, self.schedule)
        if conflict is not None:
            return self._reject(ConflictError(section, conflict))

        replaced = self.schedule.put(ScheduleEntry.from_section(section))
        self._notice = None
        result = Added(section, replaced.section if replaced is not None else None)
        log.info(result.message)
        return result

    def remove(self, course_code: str, section_label: str) -> bool:
        """Remove a section; removing something absent is a no-op."""
        removed = self.schedule.remove(course_code, section_label)
        if removed is not None:
            log.info("Removed %s %s", course_code, removed.section_label)
        return removed is not None

    def clear(self) -> None:
        self.schedule.clear()
        self._notice = None

    def associated_sections(
        self,
        course_code: str,
        sections: Iterable[SectionRecord],
    ) -> AssociationResult:
        """Labs, tutorials and seminars that go with the chosen lecture."""
        lecture = self.schedule.lecture_for(course_code)
        return resolve_associated_sections(
            lecture.section if lecture is not None else None, sections
        )
