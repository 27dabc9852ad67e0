"""
Source text model.

Owns the raw text of one lint pass, its decomposition into lines and the
mapping between flat character offsets and (line, column) locations.
A SourceModel is never mutated: applying fixes produces new text, and the
next pass builds a new model from it.
"""

import re
from bisect import bisect_right
from functools import cached_property

from .errors import LocationError
from .models import Location
from .regions import ExcludedRegion, find_template_literal_regions

LINE_BREAK = re.compile(r"\r\n|[\r\n\u2028\u2029]")


class SourceModel:
    """Read-only view of a source text for rules to scan"""

    def __init__(self, text: str):
        self._text = text
        self._line_starts = [0]
        lines = []
        last = 0
        for match in LINE_BREAK.finditer(text):
            lines.append(text[last : match.start()])
            last = match.end()
            self._line_starts.append(last)
        lines.append(text[last:])
        self._lines = tuple(lines)

    @property
    def text(self) -> str:
        return self._text

    @property
    def lines(self) -> tuple[str, ...]:
        return self._lines

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def checkable_lines(self) -> tuple[str, ...]:
        """Lines without the empty one produced by a final line terminator."""
        if self._lines[-1] == "":
            return self._lines[:-1]
        return self._lines

    @cached_property
    def excluded_regions(self) -> tuple[ExcludedRegion, ...]:
        return tuple(find_template_literal_regions(self._text, self._line_of_offset))

    @cached_property
    def excluded_lines(self) -> frozenset[int]:
        excluded = set()
        for region in self.excluded_regions:
            excluded.update(region.lines())
        return frozenset(excluded)

    def offset_of(self, line: int, column: int = 0) -> int:
        """Return the character offset of a 1-based line and 0-based column.

        The position just past the last line (line_count + 1, column 0) is the
        end-of-text sentinel and maps to len(text).
        """
        if line == self.line_count + 1 and column == 0:
            return len(self._text)
        if not 1 <= line <= self.line_count:
            raise LocationError(f"Line {line} is out of range (1-{self.line_count})")
        if column < 0:
            raise LocationError(f"Column {column} is negative")

        start = self._line_starts[line - 1]
        if line < self.line_count:
            # Columns may address the line terminator itself but not the next line
            line_end = self._line_starts[line] - 1
        else:
            line_end = len(self._text)
        if start + column > line_end:
            raise LocationError(
                f"Column {column} is out of range for line {line} (max {line_end - start})"
            )
        return start + column

    def offset_of_location(self, location: Location) -> int:
        return self.offset_of(location.line, location.column)

    def location_of(self, offset: int) -> Location:
        if not 0 <= offset <= len(self._text):
            raise LocationError(f"Offset {offset} is out of range (0-{len(self._text)})")
        line = bisect_right(self._line_starts, offset)
        return Location(line, offset - self._line_starts[line - 1])

    def _line_of_offset(self, offset: int) -> int:
        return self.location_of(offset).line

    def __repr__(self) -> str:
        return f"SourceModel(lines={self.line_count}, length={len(self._text)})"
