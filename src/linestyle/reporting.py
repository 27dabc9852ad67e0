import string
from typing import TYPE_CHECKING, Any, Mapping

from .errors import LocationError, RuleDefinitionError
from .models import Diagnostic, Fix, Severity, Span
from .source import SourceModel

if TYPE_CHECKING:
    from .rules.base import BaseRule

_formatter = string.Formatter()


def template_fields(template: str) -> set[str]:
    """Return the placeholder names used by a message template."""
    return {name for _, name, _, _ in _formatter.parse(template) if name is not None}


class DiagnosticBuilder:
    """Collects the diagnostics one rule reports during one pass"""

    def __init__(self, rule: "BaseRule", source: SourceModel, severity: Severity = Severity.WARNING):
        self.rule = rule
        self.source = source
        self.severity = severity
        self.diagnostics: list[Diagnostic] = []

    def report(
        self,
        message_id: str,
        span: Span,
        data: Mapping[str, Any] | None = None,
        fix: Fix | None = None,
    ) -> Diagnostic:
        template = self.rule.messages.get(message_id)
        if template is None:
            raise RuleDefinitionError(f"Rule '{self.rule.rule_id}' has no message '{message_id}'")
        try:
            message = template.format_map(dict(data or {}))
        except KeyError as e:
            raise RuleDefinitionError(
                f"Rule '{self.rule.rule_id}' reported '{message_id}' without data for {e}"
            ) from e

        # Resolving both ends raises LocationError for spans outside the text
        self.source.offset_of_location(span.start)
        self.source.offset_of_location(span.end)
        if fix is not None and fix.range_end > len(self.source.text):
            raise LocationError(
                f"Fix range [{fix.range_start}, {fix.range_end}) exceeds text length {len(self.source.text)}"
            )

        diagnostic = Diagnostic(
            rule_id=self.rule.rule_id,
            message_id=message_id,
            message=message,
            span=span,
            severity=self.severity,
            fix=fix,
        )
        self.diagnostics.append(diagnostic)
        return diagnostic
