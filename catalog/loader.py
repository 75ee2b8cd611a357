"""Concurrent course loading with stale-selection protection."""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from scheduler.classifier import classify_section
from scheduler.models import SectionRecord

from .client import CatalogClient, CatalogFetchError, course_code
from .models import Course, Department, SectionListing, Term

log = logging.getLogger(__name__)


class CourseLoader:
    """Loads catalog data for the student's current selection.

    Each course selection gets a new generation number. Section details
    are fetched in parallel, and results from a selection that has since
    been superseded are thrown away instead of replacing the current ones.
    Catalog failures are logged and degrade to partial or empty data.
    """

    MAX_WORKERS = 8

    def __init__(self, client: CatalogClient, max_workers: Optional[int] = None) -> None:
        self._client = client
        self._max_workers = max_workers or self.MAX_WORKERS
        self._generation = 0
        self._lock = threading.Lock()
        self.current_sections: list[SectionRecord] = []

    @property
    def generation(self) -> int:
        return self._generation

    def _next_generation(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._generation

    def departments(self, term: Term) -> list[Department]:
        try:
            return self._client.list_departments(term)
        except CatalogFetchError as e:
            log.warning("Could not load departments for %s: %s", term, e)
            return []

    def courses(self, term: Term, dept: str) -> list[Course]:
        try:
            return self._client.list_courses(term, dept)
        except CatalogFetchError as e:
            log.warning("Could not load courses for %s %s: %s", dept, term, e)
            return []

    def _basic_record(self, dept: str, number: str, listing: SectionListing) -> SectionRecord:
        return SectionRecord(
            course_code=course_code(dept, number),
            section_label=listing.label,
            component_type=classify_section(listing.raw_type, listing.label, self._client.rules),
            title=listing.title,
            detailed=False,
        )

    def _load_details(
        self, term: Term, dept: str, number: str, listing: SectionListing
    ) -> SectionRecord:
        try:
            return self._client.get_section_details(
                term, dept, number, listing.label, raw_type=listing.raw_type
            )
        except CatalogFetchError as e:
            log.warning(
                "Details for %s %s %s unavailable, using basic fields: %s",
                dept.upper(), number, listing.label, e,
            )
            return self._basic_record(dept, number, listing)

    def load_course(self, term: Term, dept: str, number: str) -> Optional[list[SectionRecord]]:
        """Fetch every section of a course with its details.

        Args:
            term: Academic term.
            dept: Department code.
            number: Course number.

        Returns:
            Section records in catalog order, or None if another selection
            was made while this one was loading.
        """
        generation = self._next_generation()

        try:
            listings = self._client.list_sections(term, dept, number)
        except CatalogFetchError as e:
            log.warning("Could not load sections for %s %s: %s", dept.upper(), number, e)
            listings = []

        if listings:
            with ThreadPoolExecutor(max_workers=min(self._max_workers, len(listings))) as pool:
                sections = list(pool.map(
                    lambda listing: self._load_details(term, dept, number, listing),
                    listings,
                ))
        else:
            sections = []

        with self._lock:
            if generation != self._generation:
                log.debug("Discarding stale sections for %s %s", dept.upper(), number)
                return None
            self.current_sections = sections
        return sections
