"""Assigns a normalized component type to raw catalog sections."""

import logging
from dataclasses import dataclass, field

from .models import ComponentType

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassifierRules:
    """Per-catalog classification markers.

    The defaults match the SFU course-outlines feed, where "e" marks an
    enrollment section and "n" a non-enrollment one, and lecture sections
    are numbered D100, D200, ...
    """

    enrollment_markers: frozenset[str] = frozenset({"e"})
    non_enrollment_markers: frozenset[str] = frozenset({"n"})
    keywords: tuple[tuple[str, ComponentType], ...] = field(default=(
        ("lab", ComponentType.LAB),
        ("tut", ComponentType.TUTORIAL),
        ("sem", ComponentType.SEMINAR),
        ("lec", ComponentType.LECTURE),
    ))
    lecture_suffix: str = "00"


DEFAULT_RULES = ClassifierRules()


def classify_section(
    raw_type: str,
    section_label: str,
    rules: ClassifierRules = DEFAULT_RULES,
) -> ComponentType:
    """Classify a section as lecture, lab, tutorial or seminar.

    Rules are applied in order and the first match wins: enrollment
    marker, non-enrollment marker, keyword in the declared type, then the
    lecture suffix on the section label. Anything left over defaults to
    LECTURE.

    Args:
        raw_type: Catalog-declared type ("e", "n", "LAB", "Tutorial", ...).
        section_label: Section code such as "D100".
        rules: Catalog-specific markers.

    Returns:
        The component type.
    """
    declared = (raw_type or "").strip().lower()
    label = (section_label or "").strip().upper()

    if declared in rules.enrollment_markers:
        return ComponentType.LECTURE
    if declared in rules.non_enrollment_markers:
        return ComponentType.LAB

    for keyword, component in rules.keywords:
        if keyword in declared:
            return component

    if rules.lecture_suffix and label.endswith(rules.lecture_suffix):
        log.debug("Classified %s as LECTURE from its label (type %r)", label, raw_type)
        return ComponentType.LECTURE

    log.warning(
        "Could not classify section %s (type %r), defaulting to LECTURE", label, raw_type
    )
    return ComponentType.LECTURE
