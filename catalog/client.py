"""HTTP client for the SFU course-outlines catalog."""

import logging
import os
from typing import Any, Optional

import requests
from bs4 import BeautifulSoup

from scheduler.classifier import DEFAULT_RULES, ClassifierRules, classify_section
from scheduler.models import DEFAULT_CREDIT_UNITS, MeetingBlock, SectionRecord, Weekday

from .models import Course, Department, SectionListing, Term

log = logging.getLogger(__name__)


class CatalogFetchError(Exception):
    """A catalog request failed or returned something unusable."""


def clean_text(value: Any) -> str:
    """Strip markup and collapse whitespace in a catalog text field."""
    if value is None:
        return ""
    text = str(value)
    if "<" in text:
        text = BeautifulSoup(text, "lxml").get_text(separator=" ")
    return " ".join(text.split())


def parse_units(value: Any) -> int:
    try:
        units = int(float(str(value).strip()))
    except (TypeError, ValueError):
        return DEFAULT_CREDIT_UNITS
    return units if units > 0 else DEFAULT_CREDIT_UNITS


def course_code(dept: str, number: str) -> str:
    return f"{dept.upper()} {number.upper()}"


class CatalogClient:
    """Client for the course-outlines REST feed.

    The feed is addressed with query paths such as
    ``?2025/spring/cmpt/120/d100``; each level returns JSON describing
    the next one down. Responses are normalized into strict records here
    so nothing downstream has to deal with missing fields.
    """

    BASE_URL = "https://www.sfu.ca/bin/wcm/course-outlines"
    TIMEOUT = 10

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        rules: ClassifierRules = DEFAULT_RULES,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Catalog endpoint (defaults to $SFU_OUTLINES_URL or BASE_URL).
            timeout: Per-request timeout in seconds.
            session: Shared requests session.
            rules: Section classification rules for this catalog.
        """
        self._base_url = base_url or os.environ.get("SFU_OUTLINES_URL") or self.BASE_URL
        self._timeout = timeout if timeout is not None else self.TIMEOUT
        self._session = session or requests.Session()
        self._session.headers.setdefault("Accept", "application/json")
        self._rules = rules

    @property
    def rules(self) -> ClassifierRules:
        return self._rules

    def _get(self, *parts: str) -> Any:
        path = "/".join(part.strip().lower() for part in parts)
        url = f"{self._base_url}?{path}"
        log.debug("GET %s", url)

        try:
            response = self._session.get(url, timeout=self._timeout)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            raise CatalogFetchError(f"Request to {url} failed: {e}") from e
        except ValueError as e:
            raise CatalogFetchError(f"Invalid JSON from {url}: {e}") from e

    def _get_list(self, *parts: str) -> list[dict]:
        data = self._get(*parts)
        if not isinstance(data, list):
            raise CatalogFetchError(f"Expected a list for {'/'.join(parts)}, got {type(data).__name__}")
        return [item for item in data if isinstance(item, dict)]

    def list_departments(self, term: Term) -> list[Department]:
        return [
            Department(code=str(item.get("value") or item.get("text", "")).upper(),
                       name=clean_text(item.get("name")))
            for item in self._get_list(str(term))
            if item.get("value") or item.get("text")
        ]

    def list_courses(self, term: Term, dept: str) -> list[Course]:
        return [
            Course(number=str(item.get("value") or item.get("text", "")).upper(),
                   title=clean_text(item.get("title")))
            for item in self._get_list(str(term), dept)
            if item.get("value") or item.get("text")
        ]

    def list_sections(self, term: Term, dept: str, number: str) -> list[SectionListing]:
        """List a course's sections with their declared type.

        The raw type is the section's component code ("LEC", "LAB", ...)
        when the catalog gives one, otherwise its class type ("e"/"n").
        """
        listings = []
        for item in self._get_list(str(term), dept, number):
            label = str(item.get("text") or item.get("value") or "").strip().upper()
            if not label:
                continue
            raw_type = item.get("sectionCode") or item.get("classType") or ""
            listings.append(SectionListing(label, str(raw_type), clean_text(item.get("title"))))
        return listings

    def get_section_details(
        self,
        term: Term,
        dept: str,
        number: str,
        label: str,
        raw_type: Optional[str] = None,
    ) -> SectionRecord:
        """Fetch a section's details and normalize them.

        Args:
            term: Academic term.
            dept: Department code, e.g. "CMPT".
            number: Course number, e.g. "120".
            label: Section label, e.g. "D100".
            raw_type: Declared type from the section list, preferred over
                the details payload when given.

        Returns:
            Normalized section record.

        Raises:
            CatalogFetchError: If the request fails or the payload cannot
                be normalized.
        """
        data = self._get(str(term), dept, number, label)
        if not isinstance(data, dict):
            raise CatalogFetchError(f"Expected an object for section {label}")
        try:
            return self.parse_section(data, dept, number, label, raw_type)
        except (ValueError, AttributeError, TypeError) as e:
            raise CatalogFetchError(f"Malformed details for section {label}: {e}") from e

    def parse_section(
        self,
        data: dict,
        dept: str,
        number: str,
        label: str,
        raw_type: Optional[str] = None,
    ) -> SectionRecord:
        info = data.get("info")
        if not isinstance(info, dict):
            info = {}
        if raw_type is None:
            raw_type = info.get("sectionCode") or info.get("type") or ""

        instructors = [
            clean_text(person.get("name"))
            for person in data.get("instructor") or []
            if isinstance(person, dict) and person.get("name")
        ]

        blocks = []
        rows = data.get("courseSchedule") or info.get("courseSchedule") or []
        if not isinstance(rows, list):
            rows = []
        for row in rows:
            if not isinstance(row, dict) or row.get("isExam"):
                continue
            block = self._parse_block(row, label)
            if block is not None:
                blocks.append(block)

        return SectionRecord(
            course_code=course_code(dept, number),
            section_label=label,
            component_type=classify_section(raw_type, label, self._rules),
            title=clean_text(info.get("title")),
            instructor=", ".join(instructors),
            credit_units=parse_units(info.get("units")),
            campus=clean_text(info.get("campus")),
            blocks=tuple(blocks),
        )

    def _parse_block(self, row: dict, label: str) -> Optional[MeetingBlock]:
        try:
            return MeetingBlock(
                days=Weekday.parse_many(str(row.get("days") or "")),
                start_time=str(row.get("startTime") or ""),
                end_time=str(row.get("endTime") or ""),
                room=clean_text(row.get("roomNumber")),
                building=clean_text(row.get("buildingCode")),
                campus=clean_text(row.get("campus")),
            )
        except ValueError as e:
            log.warning("Skipping invalid meeting block in %s: %s", label, e)
            return None
