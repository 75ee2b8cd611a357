"""In-memory schedule store keyed by (course, component type) slot."""

import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from .models import ComponentType, MeetingBlock, SectionRecord

log = logging.getLogger(__name__)

COURSE_COLORS = (
    "#3b82f6", "#10b981", "#8b5cf6", "#f59e0b",
    "#ef4444", "#06b6d4", "#ec4899", "#84cc16",
)

Slot = tuple[str, ComponentType]


def course_color(course_code: str) -> str:
    """Pick a palette colour from a stable 32-bit hash of the course code."""
    value = 0
    for char in course_code:
        value = (ord(char) + (value << 5) - value) & 0xFFFFFFFF
    if value & 0x80000000:
        value -= 1 << 32
    return COURSE_COLORS[abs(value) % len(COURSE_COLORS)]


@dataclass(frozen=True)
class ScheduleEntry:
    """A section committed to the timetable."""

    section: SectionRecord
    color: str

    @classmethod
    def from_section(cls, section: SectionRecord) -> "ScheduleEntry":
        return cls(section=section, color=course_color(section.course_code))

    @property
    def course_code(self) -> str:
        return self.section.course_code

    @property
    def section_label(self) -> str:
        return self.section.section_label

    @property
    def component_type(self) -> ComponentType:
        return self.section.component_type

    @property
    def slot(self) -> Slot:
        return self.section.slot

    @property
    def blocks(self) -> tuple[MeetingBlock, ...]:
        return self.section.blocks

    def to_dict(self) -> dict:
        data = self.section.to_dict()
        data["color"] = self.color
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ScheduleEntry":
        section = SectionRecord.from_dict(data)
        return cls(section=section, color=data.get("color") or course_color(section.course_code))


class Schedule:
    """The set of sections a student has added.

    At most one entry is held per slot; putting a section into an occupied
    slot replaces the previous one. Conflict checking is the controller's
    job, the store only guards the slot invariant.
    """

    def __init__(self, entries: Optional[list[ScheduleEntry]] = None) -> None:
        self._entries: dict[Slot, ScheduleEntry] = {}
        for entry in entries or []:
            self.put(entry)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ScheduleEntry]:
        return iter(list(self._entries.values()))

    def __contains__(self, key: tuple[str, str]) -> bool:
        return self.find(*key) is not None

    def get(self, course_code: str, component_type: ComponentType) -> Optional[ScheduleEntry]:
        return self._entries.get((course_code, component_type))

    def find(self, course_code: str, section_label: str) -> Optional[ScheduleEntry]:
        """Look up an entry by course and section label."""
        label = section_label.upper()
        for entry in self._entries.values():
            if entry.course_code == course_code and entry.section_label == label:
                return entry
        return None

    def lecture_for(self, course_code: str) -> Optional[ScheduleEntry]:
        return self.get(course_code, ComponentType.LECTURE)

    def put(self, entry: ScheduleEntry) -> Optional[ScheduleEntry]:
        """Insert an entry, returning the one it replaced, if any."""
        replaced = self._entries.get(entry.slot)
        if replaced is not None:
            log.debug(
                "Replacing %s %s with %s", replaced.course_code,
                replaced.section_label, entry.section_label,
            )
            # Drop first so the new entry moves to the end of the iteration order.
            del self._entries[entry.slot]
        self._entries[entry.slot] = entry
        return replaced

    def remove(self, course_code: str, section_label: str) -> Optional[ScheduleEntry]:
        entry = self.find(course_code, section_label)
        if entry is None:
            return None
        del self._entries[entry.slot]
        return entry

    def clear(self) -> None:
        self._entries.clear()

    def entries(self) -> list[ScheduleEntry]:
        return list(self._entries.values())

    def courses(self) -> list[str]:
        """Distinct course codes in insertion order."""
        return list(dict.fromkeys(entry.course_code for entry in self._entries.values()))

    def to_list(self) -> list[dict]:
        return [entry.to_dict() for entry in self._entries.values()]

    @classmethod
    def from_list(cls, data: list[dict]) -> "Schedule":
        return cls([ScheduleEntry.from_dict(item) for item in data])
