"""Abstract base class for schedule exporters."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Any, Iterable

from scheduler.store import ScheduleEntry


class BaseTransformer(ABC):
    """Turns schedule entries into an output format for a term.

    Subclasses build the document in ``transform`` and write it in
    ``save``; ``export`` runs both for callers that only want a file.
    """

    @abstractmethod
    def transform(
        self,
        entries: Iterable[ScheduleEntry],
        start_date: date,
        end_date: date
    ) -> Any:
        """Build the output document.

        Args:
            entries: Committed schedule entries.
            start_date: First day of classes.
            end_date: Last day of classes.

        Returns:
            The format-specific document.
        """
        pass

    @abstractmethod
    def save(self, output_path: str) -> None:
        """Write the last transformed document to output_path."""
        pass

    def export(
        self,
        entries: Iterable[ScheduleEntry],
        start_date: date,
        end_date: date,
        output_path: str
    ) -> None:
        if start_date >= end_date:
            raise ValueError("Start date must be before end date.")
        self.transform(entries, start_date, end_date)
        self.save(output_path)
