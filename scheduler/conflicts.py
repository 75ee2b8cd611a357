"""Time-conflict detection between schedule entries."""

from typing import Iterable, Optional

from .models import SectionRecord
from .results import Conflict
from .store import ScheduleEntry
from .times import intervals_overlap


def find_conflict(
    candidate: SectionRecord,
    entries: Iterable[ScheduleEntry],
) -> Optional[Conflict]:
    """Find the first existing entry that overlaps a candidate section.

    Entries in the candidate's own slot are skipped, since adding the
    candidate replaces them. Unscheduled blocks (TBA, online) are never
    compared.

    Args:
        candidate: Section about to be added.
        entries: Current schedule entries.

    Returns:
        The first conflict found, or None.
    """
    candidate_blocks = list(candidate.scheduled_blocks)
    if not candidate_blocks:
        return None

    for entry in entries:
        if entry.slot == candidate.slot:
            continue
        for existing in entry.section.scheduled_blocks:
            for block in candidate_blocks:
                if intervals_overlap(block, existing):
                    return Conflict(
                        course_code=entry.course_code,
                        section_label=entry.section_label,
                        existing_block=existing,
                        candidate_block=block,
                    )
    return None


def find_all_conflicts(entries: Iterable[ScheduleEntry]) -> list[tuple[ScheduleEntry, Conflict]]:
    """List every overlapping pair in a schedule.

    Used to audit schedules that did not go through the add path, such as
    ones restored from storage. Each pair is reported once, keyed by the
    later entry.
    """
    entries = list(entries)
    found: list[tuple[ScheduleEntry, Conflict]] = []

    for i, entry in enumerate(entries):
        for other in entries[:i]:
            conflict = find_conflict(entry.section, [other])
            if conflict is not None:
                found.append((entry, conflict))
    return found
