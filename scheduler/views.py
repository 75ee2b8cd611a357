"""Pure views derived from the schedule: credits and grid layout."""

from dataclasses import dataclass
from typing import Iterable

from .models import DEFAULT_CREDIT_UNITS, MeetingBlock, Weekday
from .store import ScheduleEntry
from .times import format_minutes

DAY_START_MINUTES = 8 * 60
GRID_DAYS = (
    Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY,
    Weekday.THURSDAY, Weekday.FRIDAY,
)


@dataclass(frozen=True)
class GridGeometry:
    top: float
    height: float


@dataclass(frozen=True)
class GridCell:
    """A positioned block on the weekly grid."""

    entry: ScheduleEntry
    block: MeetingBlock
    day: Weekday
    top: float
    height: float

    @property
    def label(self) -> str:
        return f"{self.entry.course_code} {self.entry.section_label}"


def total_credits(entries: Iterable[ScheduleEntry]) -> int:
    total = 0
    for entry in entries:
        units = entry.section.credit_units
        total += units if isinstance(units, int) and units > 0 else DEFAULT_CREDIT_UNITS
    return total


def block_geometry(
    start_minutes: int,
    end_minutes: int,
    day_start: int = DAY_START_MINUTES,
    pixels_per_minute: float = 1.0,
) -> GridGeometry:
    """Vertical offset and height of a block on the grid.

    Args:
        start_minutes: Block start, minutes since midnight.
        end_minutes: Block end, minutes since midnight.
        day_start: Minute at the top edge of the grid.
        pixels_per_minute: Vertical scale.

    Returns:
        Geometry in pixels.
    """
    return GridGeometry(
        top=(start_minutes - day_start) * pixels_per_minute,
        height=(end_minutes - start_minutes) * pixels_per_minute,
    )


def layout_grid(
    entries: Iterable[ScheduleEntry],
    days: tuple[Weekday, ...] = GRID_DAYS,
    day_start: int = DAY_START_MINUTES,
    pixels_per_minute: float = 1.0,
) -> dict[Weekday, list[GridCell]]:
    """Place every scheduled block into its day columns, sorted by start."""
    grid: dict[Weekday, list[GridCell]] = {day: [] for day in days}

    for entry in entries:
        for block in entry.section.scheduled_blocks:
            geometry = block_geometry(
                block.start_minutes, block.end_minutes, day_start, pixels_per_minute
            )
            for day in block.days:
                if day not in grid:
                    continue
                grid[day].append(GridCell(entry, block, day, geometry.top, geometry.height))

    for cells in grid.values():
        cells.sort(key=lambda cell: cell.top)
    return grid


def hour_labels(first_hour: int = 8, count: int = 14) -> list[str]:
    """Row labels for the grid, e.g. "8am" ... "9pm"."""
    return [format_minutes(hour * 60).replace(":00", "") for hour in range(first_hour, first_hour + count)]
