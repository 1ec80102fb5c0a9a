"""Models for in-page test results and run outcomes."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Literal

from pydantic import Field, field_validator

from webdriver_test_action.models.base import Model

type RunStatus = Literal["success", "failure", "skipped", "aborted", "error"]


class FailureReport(Model):
    """A single failing test as reported by the page under test."""

    message: str = Field(default="", description="Assertion or error message")
    name: str = Field(default="", description="Title of the failing test")
    titles: Sequence[str] = Field(
        default_factory=list, description="Titles of the enclosing suites"
    )
    stack: str = Field(default="", description="Stack trace captured in the page")

    @field_validator("message", "name", "stack", mode="before")
    @classmethod
    def null_text_as_empty(cls, value: object) -> object:
        """Pages may serialise unset strings as null."""
        return "" if value is None else value

    @field_validator("titles", mode="before")
    @classmethod
    def null_titles_as_empty(cls, value: object) -> object:
        return [] if value is None else value


class PageResult(Model):
    """Results object published by the page once its suite has finished."""

    passes: int = Field(..., ge=0, description="Number of passing tests")
    failures: int = Field(..., ge=0, description="Number of failing tests")
    duration: float = Field(default=0.0, description="Suite duration in milliseconds")
    reports: Sequence[FailureReport] = Field(
        default_factory=list, description="Details for each failing test"
    )

    @field_validator("reports", mode="before")
    @classmethod
    def null_reports_as_empty(cls, value: object) -> object:
        return [] if value is None else value

    @property
    def duration_seconds(self) -> float:
        return self.duration / 1000


@dataclass(frozen=True, kw_only=True)
class TestFailure:
    """A failure report annotated with the URL and browser it came from."""

    __test__ = False

    url: str
    browser: str
    report: FailureReport


@dataclass(frozen=True, kw_only=True)
class UrlResult:
    """Summary of the suite run on one URL."""

    url: str
    browser: str
    passes: int
    failures: int
    duration: float


@dataclass(frozen=True, kw_only=True)
class RunResult:
    """Outcome of running one target in one browser.

    ``failures`` keeps the order in which URLs were visited.
    """

    target: str
    browser: str
    status: RunStatus
    pages: Sequence[UrlResult] = field(default_factory=list)
    failures: Sequence[TestFailure] = field(default_factory=list)
    message: str | None = None

    @property
    def passes(self) -> int:
        return sum(page.passes for page in self.pages)

    @property
    def failure_count(self) -> int:
        return sum(page.failures for page in self.pages)

    @property
    def duration(self) -> float:
        return sum(page.duration for page in self.pages)
