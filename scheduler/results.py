"""Typed results returned by the timetable engine.

Rejections are values, not exceptions, so callers can render them
without a catch-all handler.
"""

from dataclasses import dataclass
from typing import Optional, Union

from .models import MeetingBlock, SectionRecord


@dataclass(frozen=True)
class Conflict:
    """An overlap between a candidate and an entry already in the schedule."""

    course_code: str
    section_label: str
    existing_block: MeetingBlock
    candidate_block: MeetingBlock

    def __str__(self) -> str:
        return f"{self.course_code} {self.section_label}"


@dataclass(frozen=True)
class Added:
    section: SectionRecord
    replaced: Optional[SectionRecord] = None

    @property
    def message(self) -> str:
        text = f"Added {self.section.course_code} {self.section.section_label}"
        if self.replaced is not None:
            text += f" (replaced {self.replaced.section_label})"
        return text


@dataclass(frozen=True)
class ConflictError:
    """Candidate overlaps an entry in a different slot."""

    section: SectionRecord
    conflict: Conflict

    @property
    def message(self) -> str:
        return (
            f"{self.section.course_code} {self.section.section_label} "
            f"conflicts with {self.conflict}"
        )


@dataclass(frozen=True)
class DuplicateError:
    section: SectionRecord

    @property
    def message(self) -> str:
        return (
            f"{self.section.course_code} {self.section.section_label} "
            "is already in your schedule"
        )


@dataclass(frozen=True)
class AssociationUnresolved:
    """Labs were requested before a lecture was chosen."""

    course_code: str

    @property
    def message(self) -> str:
        return f"Select a lecture for {self.course_code} first"


AddResult = Union[Added, ConflictError, DuplicateError]
Rejection = Union[ConflictError, DuplicateError]
