from scheduler.models import ComponentType
from scheduler.store import COURSE_COLORS, Schedule, ScheduleEntry, course_color

from .factories import block, section


def _entry(course, label, component=ComponentType.LECTURE):
    return ScheduleEntry.from_section(section(course, label, component, block("Mo", "10:00", "11:00")))


def test_course_color_is_stable_and_from_palette():
    assert course_color("CMPT 120") == course_color("CMPT 120")
    assert course_color("CMPT 120") in COURSE_COLORS
    assert _entry("CMPT 120", "D100").color == _entry("CMPT 120", "D101", ComponentType.LAB).color


def test_put_replaces_entry_in_same_slot():
    schedule = Schedule()
    schedule.put(_entry("CMPT 120", "D100"))

    replaced = schedule.put(_entry("CMPT 120", "E100"))

    assert replaced.section_label == "D100"
    assert len(schedule) == 1
    assert schedule.lecture_for("CMPT 120").section_label == "E100"


def test_different_component_types_share_a_course():
    schedule = Schedule([
        _entry("CMPT 120", "D100"),
        _entry("CMPT 120", "D101", ComponentType.LAB),
    ])

    assert len(schedule) == 2
    assert schedule.courses() == ["CMPT 120"]
    assert ("CMPT 120", "d101") in schedule


def test_remove_missing_entry_leaves_schedule_unchanged():
    schedule = Schedule([_entry("CMPT 120", "D100")])
    before = schedule.entries()

    assert schedule.remove("CMPT 120", "D200") is None
    assert schedule.remove("MATH 151", "D100") is None
    assert schedule.entries() == before


def test_remove_and_clear():
    schedule = Schedule([_entry("CMPT 120", "D100"), _entry("MATH 151", "D100")])

    assert schedule.remove("CMPT 120", "D100").course_code == "CMPT 120"
    assert [e.course_code for e in schedule] == ["MATH 151"]

    schedule.clear()
    assert len(schedule) == 0


def test_schedule_list_round_trip():
    schedule = Schedule([_entry("CMPT 120", "D100"), _entry("CMPT 120", "D101", ComponentType.LAB)])

    restored = Schedule.from_list(schedule.to_list())

    assert restored.entries() == schedule.entries()
