from .base import BaseRule, EmptyOptions, RuleOptions
from .no_multiple_empty_lines import NoMultipleEmptyLinesOptions, NoMultipleEmptyLinesRule
from .no_tabs import NoTabsOptions, NoTabsRule

__all__ = [
    "BaseRule",
    "RuleOptions",
    "EmptyOptions",
    "NoTabsRule",
    "NoTabsOptions",
    "NoMultipleEmptyLinesRule",
    "NoMultipleEmptyLinesOptions",
]
