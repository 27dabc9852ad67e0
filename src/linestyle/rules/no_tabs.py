from typing import Iterator

from pydantic import Field

from ..models import Location, Span
from ..reporting import DiagnosticBuilder
from ..source import SourceModel
from .base import BaseRule, RuleOptions

TAB = "\t"


class NoTabsOptions(RuleOptions):
    allow_indentation_tabs: bool = Field(default=False, alias="allowIndentationTabs")


def tab_runs(line: str) -> Iterator[tuple[int, int]]:
    """Yield (start, end) columns of each maximal run of tabs in a line."""
    run_start = None
    for column, char in enumerate(line):
        if char == TAB:
            if run_start is None:
                run_start = column
        elif run_start is not None:
            yield run_start, column
            run_start = None
    if run_start is not None:
        yield run_start, len(line)


class NoTabsRule(BaseRule):
    """Disallow all tab characters, optionally allowing them in indentation."""

    options_model = NoTabsOptions

    @property
    def rule_id(self) -> str:
        return "no-tabs"

    @property
    def description(self) -> str:
        return "Disallow all tabs"

    @property
    def messages(self) -> dict[str, str]:
        return {"unexpectedTab": "Unexpected tab character."}

    def scan(self, source: SourceModel, options: NoTabsOptions, builder: DiagnosticBuilder) -> None:
        for index, line in enumerate(source.lines):
            line_number = index + 1
            for start, end in tab_runs(line):
                if options.allow_indentation_tabs and not line[:start].strip():
                    continue
                builder.report(
                    "unexpectedTab",
                    Span(Location(line_number, start), Location(line_number, end)),
                )
