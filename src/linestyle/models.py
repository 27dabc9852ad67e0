from dataclasses import dataclass, field
from enum import Enum

from .errors import LocationError


class Severity(str, Enum):
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True, order=True)
class Location:
    """A position in source text (1-based line, 0-based column)"""

    line: int
    column: int = 0

    def __post_init__(self):
        if self.line < 1:
            raise LocationError(f"line must be >= 1, got {self.line}")
        if self.column < 0:
            raise LocationError(f"column must be >= 0, got {self.column}")

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class Span:
    """Half-open range of locations, end exclusive"""

    start: Location
    end: Location

    def __post_init__(self):
        if self.end < self.start:
            raise LocationError(f"span end {self.end} is before start {self.start}")


@dataclass(frozen=True)
class Fix:
    """Replace text[range_start:range_end] with `text`"""

    range_start: int
    range_end: int
    text: str = ""

    def __post_init__(self):
        if self.range_start < 0:
            raise LocationError(f"fix range starts at negative offset {self.range_start}")
        if self.range_start > self.range_end:
            raise LocationError(f"fix range is inverted: [{self.range_start}, {self.range_end})")

    @classmethod
    def remove_range(cls, start: int, end: int) -> "Fix":
        return cls(start, end, "")

    @classmethod
    def replace_range(cls, start: int, end: int, text: str) -> "Fix":
        return cls(start, end, text)

    @classmethod
    def insert_at(cls, offset: int, text: str) -> "Fix":
        return cls(offset, offset, text)


@dataclass(frozen=True)
class Diagnostic:
    """A located report of a single rule violation"""

    rule_id: str
    message_id: str
    message: str
    span: Span
    severity: Severity = Severity.WARNING
    fix: Fix | None = None

    @property
    def line(self) -> int:
        return self.span.start.line

    @property
    def column(self) -> int:
        return self.span.start.column

    @property
    def fixable(self) -> bool:
        return self.fix is not None

    def sort_key(self) -> tuple:
        return (self.span.start, self.span.end, self.rule_id)


@dataclass
class FixResult:
    """Outcome of applying one pass worth of fixes"""

    output: str
    fixed: bool
    applied: list[Diagnostic] = field(default_factory=list)
    remaining: list[Diagnostic] = field(default_factory=list)


@dataclass
class FixReport:
    """Outcome of a full scan/fix convergence run"""

    source: str
    output: str
    passes: int
    diagnostics: list[Diagnostic] = field(default_factory=list)
    fixed_count: int = 0

    @property
    def fixed(self) -> bool:
        return self.output != self.source

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == Severity.ERROR)
