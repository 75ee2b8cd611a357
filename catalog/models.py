"""Data models for course catalog listings."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Term:
    """Academic term, addressed by the catalog as "2025/spring"."""

    year: str
    season: str

    def __post_init__(self) -> None:
        if not self.year.isdigit():
            raise ValueError(f"Year must be numeric, got {self.year!r}")
        object.__setattr__(self, "season", self.season.lower())

    def __str__(self) -> str:
        return f"{self.year}/{self.season}"

    @classmethod
    def parse(cls, text: str) -> "Term":
        year, sep, season = text.strip().partition("/")
        if not sep or not season:
            raise ValueError(f"Expected term as YEAR/SEASON, got {text!r}")
        return cls(year, season)


@dataclass(frozen=True)
class Department:
    code: str
    name: str = ""


@dataclass(frozen=True)
class Course:
    number: str
    title: str = ""


@dataclass(frozen=True)
class SectionListing:
    """Basic section fields from a course's section list."""

    label: str
    raw_type: str
    title: str = field(default="")
