from abc import ABC, abstractmethod
from typing import ClassVar

from pydantic import BaseModel, ConfigDict

from ..models import Diagnostic, Severity
from ..reporting import DiagnosticBuilder
from ..source import SourceModel


class RuleOptions(BaseModel):
    """Base for per-rule option schemas.

    Unknown keys and loosely-typed values are rejected. Options with an alias
    are accepted only under that camelCase alias.
    """

    model_config = ConfigDict(extra="forbid", strict=True, frozen=True)


class EmptyOptions(RuleOptions):
    pass


class BaseRule(ABC):
    """Abstract base class for all style rules."""

    options_model: ClassVar[type[RuleOptions]] = EmptyOptions

    #: Placeholder names the message templates are allowed to use
    message_fields: ClassVar[frozenset[str]] = frozenset()

    @property
    @abstractmethod
    def rule_id(self) -> str:
        """Unique rule identifier (e.g., 'no-tabs')."""
        pass

    @property
    @abstractmethod
    def messages(self) -> dict[str, str]:
        """Message templates keyed by message id."""
        pass

    @property
    def description(self) -> str:
        return ""

    @property
    def fixable(self) -> bool:
        """Can this rule propose fixes?"""
        return False

    @abstractmethod
    def scan(self, source: SourceModel, options: RuleOptions, builder: DiagnosticBuilder) -> None:
        """Report every violation in `source` through `builder`."""
        pass

    def check(
        self,
        source: SourceModel,
        options: RuleOptions | None = None,
        severity: Severity = Severity.WARNING,
    ) -> list[Diagnostic]:
        """Run the rule over one source text and return its diagnostics."""
        if options is None:
            options = self.options_model()
        builder = DiagnosticBuilder(self, source, severity)
        self.scan(source, options, builder)
        return builder.diagnostics

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.rule_id!r})"
