import argparse
from datetime import date

import pytest

import timetable_builder
from catalog import Term
from scheduler import ComponentType, TimetableController

from .factories import block, section

TERM = Term("2025", "spring")


class FakeLoader:
    def __init__(self, sections):
        self._sections = sections
        self.calls = 0

    def load_course(self, term, dept, number):
        self.calls += 1
        return [s for s in self._sections if s.course_code == f"{dept} {number}"]


SECTIONS = [
    section("CMPT 120", "D100", ComponentType.LECTURE, block("Mo, We", "10:30", "11:20")),
    section("CMPT 120", "D101", ComponentType.LAB, block("Tu", "10:30", "11:20")),
    section("CMPT 120", "E101", ComponentType.LAB, block("Th", "10:30", "11:20")),
]


def test_default_term_dates():
    assert timetable_builder.get_default_term_dates(TERM) == (date(2025, 1, 1), date(2025, 4, 30))
    assert timetable_builder.get_default_term_dates(Term("2025", "fall")) == (date(2025, 9, 1), date(2025, 12, 31))


def test_parse_course_ref():
    assert timetable_builder.parse_course_ref("cmpt 120 d100", with_section=True) == ("CMPT", "120", "D100")
    assert timetable_builder.parse_course_ref("MATH-151", with_section=False) == ("MATH", "151")
    with pytest.raises(argparse.ArgumentTypeError):
        timetable_builder.parse_course_ref("CMPT", with_section=False)


def test_parse_term_rejects_unknown_season():
    with pytest.raises(argparse.ArgumentTypeError):
        timetable_builder.parse_term("2025/winter")


def test_session_requires_lecture_before_lab(capsys):
    controller = TimetableController()
    session = timetable_builder.TimetableSession(TERM, FakeLoader(SECTIONS), controller)

    assert not session.add("CMPT", "120", "D101")
    assert "Select a lecture for CMPT 120 first" in capsys.readouterr().err

    assert session.add("CMPT", "120", "D100")
    assert session.add("CMPT", "120", "D101")
    assert [e.section_label for e in controller.schedule] == ["D100", "D101"]


def test_session_warns_about_unpaired_lab_and_caches_course(capsys):
    loader = FakeLoader(SECTIONS)
    controller = TimetableController()
    session = timetable_builder.TimetableSession(TERM, loader, controller)

    session.add("CMPT", "120", "D100")
    assert session.add("CMPT", "120", "E101")
    assert "E101 is not paired" in capsys.readouterr().err
    assert loader.calls == 1


def test_session_reports_unknown_section(capsys):
    session = timetable_builder.TimetableSession(TERM, FakeLoader(SECTIONS), TimetableController())

    assert not session.add("CMPT", "120", "Z999")
    assert "has no section Z999" in capsys.readouterr().err


def test_main_reports_corrupt_saved_schedule(tmp_path, monkeypatch, capsys):
    (tmp_path / "student-2025_spring.json").write_text(
        '{"term": "2025/spring", "scheduleData": [{"section": "D100"}]}'
    )
    monkeypatch.setattr(
        "sys.argv",
        ["timetable_builder.py", "--term", "2025/spring",
         "--schedule-dir", str(tmp_path), "--user", "student"],
    )

    with pytest.raises(SystemExit) as exc:
        timetable_builder.main()

    assert exc.value.code == 1
    assert "An unexpected error occurred" in capsys.readouterr().err
