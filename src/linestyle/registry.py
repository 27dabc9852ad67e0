from dataclasses import dataclass
from typing import Any, Mapping

from pydantic import ValidationError

from .errors import ConfigurationError, RuleDefinitionError
from .models import Diagnostic, Severity
from .reporting import template_fields
from .rules.base import BaseRule, RuleOptions
from .source import SourceModel

SEVERITY_LEVELS: dict[str, Severity | None] = {
    "off": None,
    "warn": Severity.WARNING,
    "warning": Severity.WARNING,
    "error": Severity.ERROR,
}


@dataclass(frozen=True)
class ConfiguredRule:
    """A rule paired with its validated options and reporting severity"""

    rule: BaseRule
    options: RuleOptions
    severity: Severity = Severity.WARNING

    @property
    def rule_id(self) -> str:
        return self.rule.rule_id

    def check(self, source: SourceModel) -> list[Diagnostic]:
        return self.rule.check(source, self.options, self.severity)


def parse_severity(value: Any) -> Severity | None:
    """Map a configured level ('off', 'warn', 'error') to a Severity; 'off' is None."""
    if isinstance(value, Severity):
        return value
    if not isinstance(value, str) or value.lower() not in SEVERITY_LEVELS:
        raise ConfigurationError(f"Invalid severity {value!r}; expected one of 'off', 'warn', 'error'")
    return SEVERITY_LEVELS[value.lower()]


class RuleRegistry:
    """Registry for managing, validating and configuring style rules"""

    def __init__(self, load_builtins: bool = True):
        self._rules: dict[str, BaseRule] = {}
        if load_builtins:
            self._load_builtin_rules()

    def register(self, rule: BaseRule) -> None:
        if rule.rule_id in self._rules:
            raise RuleDefinitionError(f"Rule '{rule.rule_id}' is already registered")
        for message_id, template in rule.messages.items():
            try:
                unknown = template_fields(template) - rule.message_fields
            except ValueError as e:
                raise RuleDefinitionError(
                    f"Rule '{rule.rule_id}' message '{message_id}' is malformed: {e}"
                ) from e
            if unknown:
                raise RuleDefinitionError(
                    f"Rule '{rule.rule_id}' message '{message_id}' uses undeclared "
                    f"placeholders: {', '.join(sorted(unknown))}"
                )
        self._rules[rule.rule_id] = rule

    def get_rule(self, rule_id: str) -> BaseRule:
        try:
            return self._rules[rule_id]
        except KeyError:
            raise ConfigurationError(f"Unknown rule '{rule_id}'") from None

    def get_all_rules(self) -> list[BaseRule]:
        return list(self._rules.values())

    def rule_ids(self) -> list[str]:
        return sorted(self._rules)

    def configure(
        self,
        rule_id: str,
        options: Mapping[str, Any] | None = None,
        severity: Severity = Severity.WARNING,
    ) -> ConfiguredRule:
        """Validate options for one rule. Raises ConfigurationError on bad input."""
        rule = self.get_rule(rule_id)
        try:
            validated = rule.options_model.model_validate(dict(options or {}))
        except ValidationError as e:
            raise ConfigurationError(f"Invalid options for rule '{rule_id}':\n{e}") from e
        return ConfiguredRule(rule=rule, options=validated, severity=severity)

    def configure_all(self, settings: Mapping[str, Mapping[str, Any]]) -> list[ConfiguredRule]:
        """Configure every rule named in `settings`.

        Each entry may carry a `severity` key ('off', 'warn', 'error');
        rules set to 'off' are left out of the result.
        """
        configured = []
        for rule_id, entry in settings.items():
            if not isinstance(entry, Mapping):
                raise ConfigurationError(f"Settings for rule '{rule_id}' must be a table")
            entry = dict(entry)
            severity = parse_severity(entry.pop("severity", "warn"))
            if severity is None:
                continue
            configured.append(self.configure(rule_id, entry, severity))
        return configured

    def _load_builtin_rules(self) -> None:
        from .rules.no_multiple_empty_lines import NoMultipleEmptyLinesRule
        from .rules.no_tabs import NoTabsRule

        self.register(NoTabsRule())
        self.register(NoMultipleEmptyLinesRule())


registry = RuleRegistry()
