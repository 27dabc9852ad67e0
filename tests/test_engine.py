import pytest

import linestyle
from linestyle.engine import LinterEngine
from linestyle.errors import RuleExecutionError
from linestyle.models import Fix, Location, Span
from linestyle.registry import ConfiguredRule, registry
from linestyle.rules.base import BaseRule, EmptyOptions


class OutOfRangeRule(BaseRule):
    @property
    def rule_id(self):
        return "out-of-range"

    @property
    def messages(self):
        return {"bad": "Bad span"}

    def scan(self, source, options, builder):
        builder.report("bad", Span(Location(source.line_count + 5, 0), Location(source.line_count + 5, 0)))


class ZeroLineRule(BaseRule):
    @property
    def rule_id(self):
        return "zero-line"

    @property
    def messages(self):
        return {"bad": "Bad location"}

    def scan(self, source, options, builder):
        builder.report("bad", Span(Location(0, 0), Location(1, 0)))


class InvertedFixRule(BaseRule):
    @property
    def rule_id(self):
        return "inverted-fix"

    @property
    def messages(self):
        return {"bad": "Bad fix"}

    def scan(self, source, options, builder):
        builder.report("bad", Span(Location(1, 0), Location(1, 1)), fix=Fix(1, 0))


class AppendXRule(BaseRule):
    """Always asks for one more character, so it never converges"""

    @property
    def rule_id(self):
        return "append-x"

    @property
    def fixable(self):
        return True

    @property
    def messages(self):
        return {"more": "Needs more x"}

    def scan(self, source, options, builder):
        end = source.location_of(len(source.text))
        builder.report("more", Span(end, end), fix=Fix.insert_at(len(source.text), "x"))


def test_diagnostics_sorted_by_position():
    rules = registry.configure_all({"no-tabs": {}, "no-multiple-empty-lines": {"max": 0}})
    diagnostics = LinterEngine(rules).lint_text("a\n\n\tb\n")
    assert [(d.rule_id, d.line) for d in diagnostics] == [
        ("no-multiple-empty-lines", 2),
        ("no-tabs", 3),
    ]


def test_clean_text_round_trip():
    text = "const a = 1;\n\nconst b = 2;\n"
    report = linestyle.fix(text, {"no-tabs": {}, "no-multiple-empty-lines": {"max": 1}})
    assert report.diagnostics == []
    assert report.output == text
    assert report.fixed is False
    assert report.passes == 1


def test_fix_converges():
    text = "a\n\n\n\n\nb\n"
    report = linestyle.fix(text, {"no-multiple-empty-lines": {"max": 1}})
    assert report.output == "a\n\nb\n"
    assert report.fixed is True
    assert report.fixed_count == 1
    assert report.diagnostics == []
    assert report.passes == 2


def test_unfixable_diagnostics_survive_fixing():
    text = "a\t\n\n\n\nb\n"
    report = linestyle.fix(text, {"no-tabs": {"severity": "error"}, "no-multiple-empty-lines": {"max": 1}})
    assert report.output == "a\t\n\nb\n"
    assert [d.rule_id for d in report.diagnostics] == ["no-tabs"]
    assert report.error_count == 1


def test_fix_stops_at_pass_cap():
    engine = LinterEngine([ConfiguredRule(AppendXRule(), EmptyOptions())], max_passes=3)
    report = engine.fix_text("")
    assert report.output == "xxx"
    assert report.passes == 3
    assert len(report.diagnostics) == 1


@pytest.mark.parametrize("rule", [OutOfRangeRule(), ZeroLineRule(), InvertedFixRule()])
def test_rule_defect_is_surfaced(rule):
    engine = LinterEngine([ConfiguredRule(rule, EmptyOptions())])
    with pytest.raises(RuleExecutionError) as excinfo:
        engine.lint_text("a\n")
    assert excinfo.value.rule_id == rule.rule_id


def test_max_passes_must_be_positive():
    with pytest.raises(ValueError):
        LinterEngine([], max_passes=0)


def test_lint_helper():
    diagnostics = linestyle.lint("x\tfoo\n", {"no-tabs": {"allowIndentationTabs": True}})
    assert len(diagnostics) == 1
