import pytest

from linestyle.autofix import FixEngine
from linestyle.errors import ConfigurationError
from linestyle.models import Location
from linestyle.registry import registry
from linestyle.rules.no_multiple_empty_lines import RunPosition, blank_runs
from linestyle.source import SourceModel

RULE_ID = "no-multiple-empty-lines"


def check(text, **options):
    return registry.configure(RULE_ID, options).check(SourceModel(text))


def fix_once(text, **options):
    return FixEngine().apply_fixes(text, check(text, **options)).output


def test_blank_runs_classification():
    runs = list(blank_runs([3, 5, 9], 9))
    assert [run.position for run in runs] == [
        RunPosition.BEGINNING_OF_FILE,
        RunPosition.INTERIOR,
        RunPosition.END_OF_FILE,
    ]
    assert [run.length for run in runs] == [2, 1, 3]


def test_whole_file_blank_is_beginning_of_file():
    runs = list(blank_runs([4], 4))
    assert len(runs) == 1
    assert runs[0].position is RunPosition.BEGINNING_OF_FILE


def test_interior_run_collapsed():
    text = "a\n\n\n\n\nb\n"
    diagnostics = check(text, max=1)
    assert len(diagnostics) == 1
    diagnostic = diagnostics[0]
    assert diagnostic.message_id == "consecutiveBlank"
    assert diagnostic.message == "More than 1 blank line not allowed."
    assert diagnostic.span.start == Location(3, 0)
    assert diagnostic.span.end == Location(6, 0)
    assert fix_once(text, max=1) == "a\n\nb\n"


def test_plural_message():
    diagnostics = check("a\n\n\n\nb\n", max=2)
    assert diagnostics[0].message == "More than 2 blank lines not allowed."


def test_independent_thresholds():
    text = "\n\n\na\n" + "\n" * 6 + "b\n\n\n"
    diagnostics = check(text, max=5, maxBOF=0, maxEOF=1)
    assert [d.message_id for d in diagnostics] == [
        "blankBeginningOfFile",
        "consecutiveBlank",
        "blankEndOfFile",
    ]
    bof, interior, eof = diagnostics
    assert bof.message == "Too many blank lines at the beginning of file. Max of 0 allowed."
    assert bof.span.start == Location(1, 0)
    assert bof.span.end == Location(4, 0)
    # one excess line each
    assert interior.span.end.line - interior.span.start.line == 1
    assert eof.span.end.line - eof.span.start.line == 1
    assert eof.message == "Too many blank lines at the end of file. Max of 1 allowed."

    assert fix_once(text, max=5, maxBOF=0, maxEOF=1) == "a\n" + "\n" * 5 + "b\n\n"


def test_bof_and_eof_default_to_max():
    text = "\n\na\n\n\n"
    assert [d.message_id for d in check(text, max=1)] == ["blankBeginningOfFile", "blankEndOfFile"]
    assert check(text, max=2) == []


def test_final_newline_is_not_a_blank_line():
    assert check("a\n", max=0) == []
    assert check("", max=0) == []


def test_eof_run_without_trailing_newline():
    text = "a\n\n  "
    diagnostics = check(text, max=0)
    assert len(diagnostics) == 1
    assert diagnostics[0].message_id == "blankEndOfFile"
    assert diagnostics[0].span.end == Location(4, 0)
    assert fix_once(text, max=0) == "a\n"


def test_whitespace_only_lines_count_as_blank():
    text = "a\n  \n\t\nb\n"
    assert fix_once(text, max=0) == "a\nb\n"


def test_blank_lines_in_template_literal_are_not_counted():
    text = "const a = `\n\nb`;\n"
    assert check(text, max=0) == []


def test_blank_lines_around_template_literal_are_counted():
    text = "const a = `x\ny`;\n\n\nfoo();\n"
    diagnostics = check(text, max=1)
    assert len(diagnostics) == 1
    assert diagnostics[0].span.start == Location(4, 0)


def test_entirely_blank_file_uses_bof_limit():
    text = "\n\n\n"
    diagnostics = check(text, max=5, maxBOF=0, maxEOF=5)
    assert [d.message_id for d in diagnostics] == ["blankBeginningOfFile"]
    assert fix_once(text, max=5, maxBOF=0, maxEOF=5) == ""


def test_fix_then_rescan_is_clean():
    text = "a\n\n\n\nb\n\n\n\n\nc\n\n\n"
    once = fix_once(text, max=1, maxEOF=0)
    assert check(once, max=1, maxEOF=0) == []


def test_crlf_text_fix():
    text = "a\r\n\r\n\r\n\r\nb\r\n"
    assert fix_once(text, max=1) == "a\r\n\r\nb\r\n"


def test_max_is_required():
    with pytest.raises(ConfigurationError):
        registry.configure(RULE_ID, {})


@pytest.mark.parametrize(
    "options",
    [
        {"max": -1},
        {"max": "2"},
        {"max": True},
        {"max": 1, "maxEOF": -2},
        {"max": 1, "maximum": 3},
        {"max": 1, "max_eof": 0},
        {"max": 1, "max_bof": 0},
    ],
)
def test_invalid_options_rejected(options):
    with pytest.raises(ConfigurationError):
        registry.configure(RULE_ID, options)
