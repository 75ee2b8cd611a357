from scheduler.models import ComponentType, Weekday
from scheduler.store import ScheduleEntry
from scheduler.views import block_geometry, hour_labels, layout_grid, total_credits

from .factories import block, section


def _entry(*args, **kwargs):
    return ScheduleEntry.from_section(section(*args, **kwargs))


def test_total_credits_sums_units():
    entries = [
        _entry("CMPT 120", "D100", credit_units=3),
        _entry("MATH 151", "D100", credit_units=4),
        _entry("MATH 151", "D101", ComponentType.TUTORIAL),
    ]

    assert total_credits(entries) == 10
    assert total_credits([]) == 0


def test_block_geometry_is_offset_from_day_start():
    geometry = block_geometry(600, 680)

    assert geometry.top == 120
    assert geometry.height == 80
    assert block_geometry(600, 680, day_start=540, pixels_per_minute=0.5).top == 30


def test_layout_grid_places_blocks_per_day():
    entries = [
        _entry("CMPT 120", "D100", ComponentType.LECTURE, block("Mo, We", "10:30", "11:20")),
        _entry("MATH 151", "D100", ComponentType.LECTURE, block("Mo", "8:30am", "9:20am")),
        _entry("PHYS 120", "D100", ComponentType.LECTURE, block("Sa", "9:00", "10:00")),
    ]

    grid = layout_grid(entries)

    assert [cell.label for cell in grid[Weekday.MONDAY]] == ["MATH 151 D100", "CMPT 120 D100"]
    assert grid[Weekday.MONDAY][1].top == 150
    assert grid[Weekday.MONDAY][1].height == 50
    assert [cell.label for cell in grid[Weekday.WEDNESDAY]] == ["CMPT 120 D100"]
    assert grid[Weekday.FRIDAY] == []
    assert Weekday.SATURDAY not in grid


def test_hour_labels():
    labels = hour_labels()

    assert labels[0] == "8am"
    assert labels[4] == "12pm"
    assert labels[-1] == "9pm"
    assert len(labels) == 14
