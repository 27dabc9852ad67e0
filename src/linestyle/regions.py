"""
Excluded regions: line ranges whose whitespace is part of the program's
value rather than formatting. Currently these are the bodies of multi-line
template literals, located with the tree-sitter JavaScript grammar.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Iterator, List

import tree_sitter_javascript as tsjs
from tree_sitter import Language, Node, Parser

TEMPLATE_STRING = "template_string"
TEMPLATE_SUBSTITUTION = "template_substitution"


@dataclass(frozen=True)
class ExcludedRegion:
    """Half-open range of 1-based lines [start_line, end_line)"""

    start_line: int
    end_line: int

    def __post_init__(self):
        if self.start_line < 1 or self.end_line < self.start_line:
            raise ValueError(f"invalid region [{self.start_line}, {self.end_line})")

    def lines(self) -> range:
        return range(self.start_line, self.end_line)

    def __contains__(self, line: int) -> bool:
        return self.start_line <= line < self.end_line


class TemplateLiteralScanner:
    """Find the line ranges covered by template literal text"""

    def __init__(self):
        self.language = Language(tsjs.language())
        self.parser = Parser(self.language)

    def find_regions(self, text: str, line_of: Callable[[int], int]) -> List[ExcludedRegion]:
        """Return the regions of every template literal in `text`.

        `line_of` maps a character offset to its 1-based line, so regions
        follow the caller's notion of line terminators rather than the
        parser's rows.
        """
        encoded = text.encode("utf-8")
        tree = self.parser.parse(encoded)

        if len(encoded) == len(text):
            def char_line(byte_offset: int) -> int:
                return line_of(byte_offset)
        else:
            def char_line(byte_offset: int) -> int:
                return line_of(len(encoded[:byte_offset].decode("utf-8")))

        regions = []
        for node in self._iter_nodes_of_type(tree.root_node, TEMPLATE_STRING):
            regions.extend(self._quasi_regions(node, char_line))
        return regions

    def _quasi_regions(self, node: Node, line_at: Callable[[int], int]) -> Iterator[ExcludedRegion]:
        """Yield one region per literal part (quasi) of a template.

        A quasi runs from the opening backtick or the closing brace of the
        previous substitution up to the next `${` or the closing backtick.
        Its last line is not excluded: it holds the delimiter, not literal
        content that could be a bare blank line.
        """
        start_line = line_at(node.start_byte)
        for child in node.children:
            if child.type != TEMPLATE_SUBSTITUTION:
                continue
            end_line = line_at(child.start_byte)
            if end_line > start_line:
                yield ExcludedRegion(start_line, end_line)
            # end_byte - 1 is the closing brace itself
            start_line = line_at(child.end_byte - 1)

        # start of the closing backtick
        end_line = line_at(node.end_byte - 1)
        if end_line > start_line:
            yield ExcludedRegion(start_line, end_line)

    @staticmethod
    def _iter_nodes_of_type(root: Node, type_name: str) -> Iterator[Node]:
        stack = [root]
        while stack:
            node = stack.pop()
            if node.type == type_name:
                yield node
            stack.extend(reversed(node.children))


@lru_cache(maxsize=1)
def _default_scanner() -> TemplateLiteralScanner:
    return TemplateLiteralScanner()


def find_template_literal_regions(text: str, line_of: Callable[[int], int]) -> List[ExcludedRegion]:
    if "`" not in text:
        return []
    return _default_scanner().find_regions(text, line_of)
