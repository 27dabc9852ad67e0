from pathlib import Path

from linestyle.models import Diagnostic

from .models import LintIssue


def diagnostic_to_lint_issue(diagnostic: Diagnostic, file_path: Path | str) -> LintIssue:
    """Convert an internal diagnostic to an external Pydantic issue"""
    fix = diagnostic.fix
    return LintIssue(
        severity=diagnostic.severity,
        file_path=str(file_path),
        line_number=diagnostic.span.start.line,
        column=diagnostic.span.start.column,
        end_line_number=diagnostic.span.end.line,
        end_column=diagnostic.span.end.column,
        rule_id=diagnostic.rule_id,
        message=diagnostic.message,
        fix_range=(fix.range_start, fix.range_end) if fix else None,
        fix_text=fix.text if fix else None,
        auto_fixable=fix is not None,
    )
