import logging
import threading
from unittest.mock import Mock

from catalog import CatalogClient, CatalogFetchError, CourseLoader, SectionListing, Term
from catalog.client import course_code
from scheduler.classifier import DEFAULT_RULES
from scheduler.models import ComponentType, SectionRecord

from .factories import block

TERM = Term("2025", "spring")


class FakeClient:
    rules = DEFAULT_RULES

    def __init__(self, listings, failing=(), on_list=None):
        self._listings = listings
        self._failing = set(failing)
        self._on_list = on_list
        self.detail_calls = []

    def list_departments(self, term):
        raise CatalogFetchError("catalog down")

    def list_courses(self, term, dept):
        raise CatalogFetchError("catalog down")

    def list_sections(self, term, dept, number):
        if self._on_list is not None:
            self._on_list(dept, number)
        if number not in self._listings:
            raise CatalogFetchError(f"no course {number}")
        return self._listings[number]

    def get_section_details(self, term, dept, number, label, raw_type=None):
        self.detail_calls.append(label)
        if label in self._failing:
            raise CatalogFetchError(f"timeout for {label}")
        component = ComponentType.LAB if raw_type == "LAB" else ComponentType.LECTURE
        return SectionRecord(
            course_code(dept, number), label, component,
            blocks=(block("Mo", "10:00", "11:00"),),
        )


LISTINGS = {
    "120": [
        SectionListing("D100", "LEC", "Intro"),
        SectionListing("D101", "LAB", "Intro"),
        SectionListing("D102", "LAB", "Intro"),
    ],
    "151": [SectionListing("D100", "LEC", "Calculus")],
}


def test_loads_details_for_every_section_in_order():
    client = FakeClient(LISTINGS)
    loader = CourseLoader(client, max_workers=3)

    sections = loader.load_course(TERM, "cmpt", "120")

    assert [s.section_label for s in sections] == ["D100", "D101", "D102"]
    assert sorted(client.detail_calls) == ["D100", "D101", "D102"]
    assert all(s.detailed for s in sections)
    assert loader.current_sections == sections


def test_failed_detail_falls_back_to_basic_fields(caplog):
    loader = CourseLoader(FakeClient(LISTINGS, failing={"D101"}))

    with caplog.at_level(logging.WARNING, logger="catalog.loader"):
        sections = loader.load_course(TERM, "cmpt", "120")

    fallback = sections[1]
    assert fallback.section_label == "D101"
    assert not fallback.detailed
    assert fallback.component_type is ComponentType.LAB
    assert fallback.title == "Intro"
    assert fallback.blocks == ()
    assert sections[0].detailed and sections[2].detailed
    assert "using basic fields" in caplog.text


def test_missing_course_yields_empty_list():
    loader = CourseLoader(FakeClient(LISTINGS))

    assert loader.load_course(TERM, "cmpt", "999") == []


def test_listing_failures_degrade_to_empty():
    loader = CourseLoader(FakeClient(LISTINGS))

    assert loader.departments(TERM) == []
    assert loader.courses(TERM, "cmpt") == []


def test_superseded_selection_is_discarded():
    holder = {}

    def switch_course(dept, number):
        # The student picks MATH 151 while CMPT 120 is still loading.
        if number == "120":
            holder["newer"] = holder["loader"].load_course(TERM, "math", "151")

    loader = CourseLoader(FakeClient(LISTINGS, on_list=switch_course))
    holder["loader"] = loader

    stale = loader.load_course(TERM, "cmpt", "120")

    assert stale is None
    assert [s.course_code for s in loader.current_sections] == ["MATH 151"]
    assert holder["newer"] == loader.current_sections
    assert loader.generation == 2


def test_malformed_detail_payload_falls_back_to_basic_fields():
    payloads = {
        "2025/spring/cmpt/120": [
            {"text": "D100", "sectionCode": "LEC"},
            {"text": "D101", "sectionCode": "LAB"},
        ],
        "2025/spring/cmpt/120/d100": {
            "info": {"title": "Intro"},
            "courseSchedule": [{"days": "Mo", "startTime": "10:00", "endTime": "11:00"}],
        },
        "2025/spring/cmpt/120/d101": {"info": ["bad"], "instructor": 7},
    }

    def get(url, timeout):
        response = Mock()
        response.json.return_value = payloads[url.split("?", 1)[1]]
        return response

    session = Mock()
    session.headers = {}
    session.get.side_effect = get
    loader = CourseLoader(CatalogClient(base_url="https://example.test", session=session))

    sections = loader.load_course(TERM, "cmpt", "120")

    assert [s.section_label for s in sections] == ["D100", "D101"]
    assert sections[0].detailed and len(sections[0].blocks) == 1
    assert not sections[1].detailed
    assert sections[1].component_type is ComponentType.LAB


def test_slow_load_from_another_thread_does_not_overwrite_newer_selection():
    started = threading.Event()
    release = threading.Event()

    class SlowClient(FakeClient):
        def get_section_details(self, term, dept, number, label, raw_type=None):
            if number == "120":
                started.set()
                release.wait(timeout=5)
            return super().get_section_details(term, dept, number, label, raw_type)

    loader = CourseLoader(SlowClient(LISTINGS))
    results = {}

    worker = threading.Thread(
        target=lambda: results.setdefault("old", loader.load_course(TERM, "cmpt", "120"))
    )
    worker.start()
    assert started.wait(timeout=5)

    newer = loader.load_course(TERM, "math", "151")
    release.set()
    worker.join(timeout=5)

    assert results["old"] is None
    assert loader.current_sections == newer
    assert [s.course_code for s in loader.current_sections] == ["MATH 151"]
