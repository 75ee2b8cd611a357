"""Data models for catalog sections and their weekly meeting blocks."""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Iterable

from .times import time_to_minutes


class Weekday(IntEnum):
    """Day of the week, Monday first."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def ical_code(self) -> str:
        return self.name[:2]

    @property
    def short_name(self) -> str:
        return self.name[:3].capitalize()

    @classmethod
    def parse(cls, text: str) -> "Weekday":
        """Parse "Mo", "Mon" or "Monday" (any case) into a Weekday."""
        key = text.strip().upper()
        if len(key) >= 2:
            for day in cls:
                if day.name.startswith(key):
                    return day
        raise ValueError(f"Unknown weekday: {text!r}")

    @classmethod
    def parse_many(cls, text: str) -> frozenset["Weekday"]:
        """Parse a catalog day list such as "Mo, We" or "Tu/Th".

        Unknown tokens are ignored.
        """
        days = set()
        for token in text.replace("/", ",").replace(" ", ",").split(","):
            if not token.strip():
                continue
            try:
                days.add(cls.parse(token))
            except ValueError:
                continue
        return frozenset(days)


class ComponentType(str, Enum):
    """Pedagogical role of a section."""

    LECTURE = "LECTURE"
    LAB = "LAB"
    TUTORIAL = "TUTORIAL"
    SEMINAR = "SEMINAR"


DEFAULT_CREDIT_UNITS = 3


@dataclass(frozen=True)
class MeetingBlock:
    """One recurring weekly occurrence of a section."""

    days: frozenset[Weekday]
    start_time: str
    end_time: str
    room: str = ""
    building: str = ""
    campus: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.days, frozenset):
            object.__setattr__(self, "days", frozenset(self.days))
        start, end = self.start_minutes, self.end_minutes
        if start and end and start >= end:
            raise ValueError(
                f"Start time must be before end time ({self.start_time} - {self.end_time})"
            )

    @property
    def start_minutes(self) -> int:
        return time_to_minutes(self.start_time)

    @property
    def end_minutes(self) -> int:
        return time_to_minutes(self.end_time)

    @property
    def is_scheduled(self) -> bool:
        """True when the block has days and both times are known."""
        return bool(self.days) and bool(self.start_minutes) and bool(self.end_minutes)

    @property
    def location(self) -> str:
        return " ".join(part for part in (self.building, self.room) if part)

    def to_dict(self) -> dict:
        return {
            "days": [day.short_name for day in sorted(self.days)],
            "startTime": self.start_time,
            "endTime": self.end_time,
            "room": self.room,
            "building": self.building,
            "campus": self.campus,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MeetingBlock":
        days = data.get("days") or []
        if isinstance(days, str):
            parsed = Weekday.parse_many(days)
        else:
            parsed = frozenset(Weekday.parse(day) for day in days)
        return cls(
            days=parsed,
            start_time=data.get("startTime") or "",
            end_time=data.get("endTime") or "",
            room=data.get("room") or "",
            building=data.get("building") or "",
            campus=data.get("campus") or "",
        )


@dataclass(frozen=True)
class SectionRecord:
    """A catalog section, normalized and immutable once fetched."""

    course_code: str
    section_label: str
    component_type: ComponentType
    title: str = ""
    instructor: str = ""
    credit_units: int = DEFAULT_CREDIT_UNITS
    campus: str = ""
    blocks: tuple[MeetingBlock, ...] = field(default_factory=tuple)
    detailed: bool = True

    def __post_init__(self) -> None:
        if not self.course_code:
            raise ValueError("Course code cannot be empty")
        if not self.section_label:
            raise ValueError("Section label cannot be empty")
        object.__setattr__(self, "section_label", self.section_label.upper())
        object.__setattr__(self, "blocks", tuple(self.blocks))
        if not isinstance(self.credit_units, int) or self.credit_units < 1:
            object.__setattr__(self, "credit_units", DEFAULT_CREDIT_UNITS)

    @property
    def slot(self) -> tuple[str, ComponentType]:
        """The (course, component type) key this section occupies."""
        return (self.course_code, self.component_type)

    @property
    def scheduled_blocks(self) -> Iterable[MeetingBlock]:
        return (block for block in self.blocks if block.is_scheduled)

    def to_dict(self) -> dict:
        return {
            "courseCode": self.course_code,
            "section": self.section_label,
            "componentType": self.component_type.value,
            "title": self.title,
            "instructor": self.instructor,
            "units": self.credit_units,
            "campus": self.campus,
            "schedule": [block.to_dict() for block in self.blocks],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SectionRecord":
        return cls(
            course_code=data["courseCode"],
            section_label=data["section"],
            component_type=ComponentType(data.get("componentType", ComponentType.LECTURE.value)),
            title=data.get("title") or "",
            instructor=data.get("instructor") or "",
            credit_units=data.get("units") or DEFAULT_CREDIT_UNITS,
            campus=data.get("campus") or "",
            blocks=tuple(MeetingBlock.from_dict(block) for block in data.get("schedule", [])),
        )
