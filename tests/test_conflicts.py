from scheduler.conflicts import find_all_conflicts, find_conflict
from scheduler.models import ComponentType, MeetingBlock
from scheduler.store import Schedule, ScheduleEntry

from .factories import block, section


def _schedule(*sections):
    return Schedule([ScheduleEntry.from_section(s) for s in sections])


def test_reports_conflict_with_existing_course():
    schedule = _schedule(section("CMPT 120", "D100", ComponentType.LECTURE, block("Mo, We", "10:00", "11:20")))

    tue_thu = section("MATH 151", "D100", ComponentType.LECTURE, block("Tu, Th", "10:00", "11:20"))
    monday = section("MATH 151", "D200", ComponentType.LECTURE, block("Mo", "10:30", "11:30"))

    assert find_conflict(tue_thu, schedule) is None

    conflict = find_conflict(monday, schedule)
    assert conflict is not None
    assert (conflict.course_code, conflict.section_label) == ("CMPT 120", "D100")
    assert str(conflict) == "CMPT 120 D100"


def test_same_slot_entry_is_not_compared():
    schedule = _schedule(section("CMPT 120", "D100", ComponentType.LECTURE, block("Mo", "10:00", "11:00")))
    other_lecture = section("CMPT 120", "E100", ComponentType.LECTURE, block("Mo", "10:00", "11:00"))

    assert find_conflict(other_lecture, schedule) is None


def test_lab_of_same_course_is_compared_against_its_lecture():
    schedule = _schedule(section("CMPT 120", "D100", ComponentType.LECTURE, block("Mo", "10:00", "11:00")))
    lab = section("CMPT 120", "D101", ComponentType.LAB, block("Mo", "10:30", "11:30"))

    assert find_conflict(lab, schedule).section_label == "D100"


def test_unscheduled_blocks_are_ignored():
    tba = MeetingBlock(days=frozenset(), start_time="", end_time="")
    schedule = _schedule(section("CMPT 120", "D100", ComponentType.LECTURE, block("Mo", "10:00", "11:00")))

    online = section("MATH 151", "OL01", ComponentType.LECTURE, tba)

    assert find_conflict(online, schedule) is None


def test_find_all_conflicts_reports_each_pair_once():
    entries = [
        ScheduleEntry.from_section(section("CMPT 120", "D100", ComponentType.LECTURE, block("Mo", "10:00", "11:00"))),
        ScheduleEntry.from_section(section("MATH 151", "D100", ComponentType.LECTURE, block("Mo", "10:30", "11:30"))),
        ScheduleEntry.from_section(section("PHYS 120", "D100", ComponentType.LECTURE, block("Tu", "10:30", "11:30"))),
    ]

    found = find_all_conflicts(entries)

    assert len(found) == 1
    entry, conflict = found[0]
    assert entry.course_code == "MATH 151"
    assert conflict.course_code == "CMPT 120"
