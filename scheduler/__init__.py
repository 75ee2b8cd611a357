"""Timetable construction engine: classification, pairing and conflicts."""

from .association import AssociationResult, AssociationStatus, resolve_associated_sections
from .classifier import ClassifierRules, classify_section
from .conflicts import find_all_conflicts, find_conflict
from .controller import TimetableController
from .models import ComponentType, MeetingBlock, SectionRecord, Weekday
from .results import Added, AssociationUnresolved, Conflict, ConflictError, DuplicateError
from .store import Schedule, ScheduleEntry, course_color
from .times import intervals_overlap, time_to_minutes

__all__ = [
    "Added",
    "AssociationResult",
    "AssociationStatus",
    "AssociationUnresolved",
    "ClassifierRules",
    "ComponentType",
    "Conflict",
    "ConflictError",
    "DuplicateError",
    "MeetingBlock",
    "Schedule",
    "ScheduleEntry",
    "SectionRecord",
    "TimetableController",
    "Weekday",
    "classify_section",
    "course_color",
    "find_all_conflicts",
    "find_conflict",
    "intervals_overlap",
    "resolve_associated_sections",
    "time_to_minutes",
]
