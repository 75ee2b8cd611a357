"""Pairs labs and tutorials with the lecture a student picked."""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from .models import ComponentType, SectionRecord
from .results import AssociationUnresolved

_LABEL_PREFIX = re.compile(r"^([A-Za-z]*)")


class AssociationStatus(Enum):
    MATCHED = "matched"
    NO_LECTURE_SELECTED = "no_lecture_selected"
    FALLBACK_ALL = "fallback_all"


@dataclass(frozen=True)
class AssociationResult:
    """Outcome of lecture/lab pairing.

    FALLBACK_ALL means the prefix heuristic matched nothing and every
    non-lecture section is offered instead.
    """

    status: AssociationStatus
    sections: tuple[SectionRecord, ...] = field(default_factory=tuple)
    advisory: Optional[AssociationUnresolved] = None

    @property
    def resolved(self) -> bool:
        return self.status is AssociationStatus.MATCHED


def label_prefix(section_label: str) -> str:
    """Leading letters of a section label ("D" for "D100")."""
    match = _LABEL_PREFIX.match(section_label.strip())
    return match.group(1).upper() if match else ""


def resolve_associated_sections(
    lecture: Optional[SectionRecord],
    sections: Iterable[SectionRecord],
) -> AssociationResult:
    """Narrow a course's non-lecture sections to those paired with a lecture.

    Args:
        lecture: The chosen lecture section for the course, if any.
        sections: Every section of the course, lectures included.

    Returns:
        Tagged result with the candidate labs/tutorials/seminars.
    """
    sections = list(sections)
    lectures = [s for s in sections if s.component_type is ComponentType.LECTURE]
    others = tuple(s for s in sections if s.component_type is not ComponentType.LECTURE)

    if not lectures:
        return AssociationResult(AssociationStatus.MATCHED, others)

    if lecture is None:
        course_code = lectures[0].course_code
        return AssociationResult(
            AssociationStatus.NO_LECTURE_SELECTED,
            advisory=AssociationUnresolved(course_code),
        )

    prefix = label_prefix(lecture.section_label)
    matched = tuple(s for s in others if s.section_label.upper().startswith(prefix))

    if not matched and others:
        return AssociationResult(AssociationStatus.FALLBACK_ALL, others)
    return AssociationResult(AssociationStatus.MATCHED, matched)
