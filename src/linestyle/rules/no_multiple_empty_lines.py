from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator

from pydantic import Field

from ..models import Fix, Location, Span
from ..reporting import DiagnosticBuilder
from ..source import SourceModel
from .base import BaseRule, RuleOptions


class NoMultipleEmptyLinesOptions(RuleOptions):
    max: int = Field(ge=0)
    max_eof: int | None = Field(default=None, ge=0, alias="maxEOF")
    max_bof: int | None = Field(default=None, ge=0, alias="maxBOF")

    @property
    def eof_limit(self) -> int:
        return self.max if self.max_eof is None else self.max_eof

    @property
    def bof_limit(self) -> int:
        return self.max if self.max_bof is None else self.max_bof


class RunPosition(str, Enum):
    BEGINNING_OF_FILE = "blankBeginningOfFile"
    END_OF_FILE = "blankEndOfFile"
    INTERIOR = "consecutiveBlank"


@dataclass(frozen=True)
class BlankRun:
    """Blank lines strictly between two non-blank markers"""

    position: RunPosition
    previous: int
    current: int

    @property
    def length(self) -> int:
        return self.current - self.previous - 1


def blank_runs(markers: Iterable[int], end_marker: int) -> Iterator[BlankRun]:
    """Walk the sorted non-blank markers, yielding the run before each one.

    `end_marker` is the synthetic line after the last real line. A run that
    starts the file is classified as beginning-of-file even when it also
    reaches the end marker.
    """
    previous = 0
    for current in markers:
        if previous == 0:
            position = RunPosition.BEGINNING_OF_FILE
        elif current == end_marker:
            position = RunPosition.END_OF_FILE
        else:
            position = RunPosition.INTERIOR
        yield BlankRun(position, previous, current)
        previous = current


class NoMultipleEmptyLinesRule(BaseRule):
    """Limit consecutive blank lines, with separate limits at both file ends.

    Lines inside a multi-line template literal never count as blank.
    """

    options_model = NoMultipleEmptyLinesOptions
    message_fields = frozenset({"max", "pluralizedLines"})

    @property
    def rule_id(self) -> str:
        return "no-multiple-empty-lines"

    @property
    def description(self) -> str:
        return "Disallow multiple empty lines"

    @property
    def fixable(self) -> bool:
        return True

    @property
    def messages(self) -> dict[str, str]:
        return {
            RunPosition.BEGINNING_OF_FILE.value: "Too many blank lines at the beginning of file. Max of {max} allowed.",
            RunPosition.END_OF_FILE.value: "Too many blank lines at the end of file. Max of {max} allowed.",
            RunPosition.INTERIOR.value: "More than {max} blank {pluralizedLines} not allowed.",
        }

    def scan(
        self,
        source: SourceModel,
        options: NoMultipleEmptyLinesOptions,
        builder: DiagnosticBuilder,
    ) -> None:
        lines = source.checkable_lines
        end_marker = len(lines) + 1
        excluded = source.excluded_lines

        markers = [
            number
            for number, line in enumerate(lines, start=1)
            if line.strip() or number in excluded
        ]
        markers.append(end_marker)

        for run in blank_runs(markers, end_marker):
            limit = self._limit_for(run.position, options)
            if run.length <= limit:
                continue
            builder.report(
                run.position.value,
                Span(Location(run.previous + limit + 1, 0), Location(run.current, 0)),
                {"max": limit, "pluralizedLines": "line" if limit == 1 else "lines"},
                self._removal_fix(source, run, limit, len(lines)),
            )

    @staticmethod
    def _limit_for(position: RunPosition, options: NoMultipleEmptyLinesOptions) -> int:
        if position is RunPosition.BEGINNING_OF_FILE:
            return options.bof_limit
        if position is RunPosition.END_OF_FILE:
            return options.eof_limit
        return options.max

    @staticmethod
    def _removal_fix(source: SourceModel, run: BlankRun, limit: int, line_count: int) -> Fix:
        """Remove the excess lines, keeping `limit` blank lines before the next marker."""
        range_start = source.offset_of(run.previous + 1, 0)
        first_kept_line = run.current - limit
        if first_kept_line <= line_count:
            range_end = source.offset_of(first_kept_line, 0)
        else:
            # No line follows the removed ones
            range_end = len(source.text)
        return Fix.remove_range(range_start, range_end)
