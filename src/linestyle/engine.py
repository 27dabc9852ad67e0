import logging
from typing import Any, Callable, Mapping, Optional, Sequence

from .autofix import FixEngine
from .errors import LocationError, RuleDefinitionError, RuleExecutionError
from .models import Diagnostic, FixReport
from .registry import ConfiguredRule, RuleRegistry, registry
from .source import SourceModel

logger = logging.getLogger(__name__)

MAX_FIX_PASSES = 10


class LinterEngine:
    """Core engine: runs configured rules over text and converges fixes"""

    def __init__(self, rules: Sequence[ConfiguredRule], max_passes: int = MAX_FIX_PASSES):
        if max_passes < 1:
            raise ValueError(f"max_passes must be >= 1, got {max_passes}")
        self.rules = list(rules)
        self.max_passes = max_passes
        self.fixer = FixEngine()

    def lint_text(self, text: str) -> list[Diagnostic]:
        """Run every rule once over `text` and return diagnostics sorted by position."""
        source = SourceModel(text)
        diagnostics: list[Diagnostic] = []
        for configured in self.rules:
            try:
                diagnostics.extend(configured.check(source))
            except (LocationError, RuleDefinitionError) as e:
                raise RuleExecutionError(configured.rule_id, e) from e
        return sorted(diagnostics, key=Diagnostic.sort_key)

    def fix_text(
        self,
        text: str,
        should_fix: Optional[Callable[[Diagnostic], bool]] = None,
    ) -> FixReport:
        """Scan and fix repeatedly until nothing changes or the pass limit is hit.

        The returned diagnostics always describe the returned output.
        """
        current = text
        passes = 0
        fixed_count = 0
        diagnostics: list[Diagnostic] = []

        while True:
            passes += 1
            diagnostics = self.lint_text(current)
            result = self.fixer.apply_fixes(current, diagnostics, should_fix)
            if not result.fixed:
                break
            logger.debug("Pass %d applied %d fixes", passes, len(result.applied))
            fixed_count += len(result.applied)
            current = result.output
            if passes >= self.max_passes:
                logger.warning("Reached max fix passes (%d); remaining issues are left unfixed", self.max_passes)
                diagnostics = self.lint_text(current)
                break

        return FixReport(
            source=text,
            output=current,
            passes=passes,
            diagnostics=diagnostics,
            fixed_count=fixed_count,
        )


def lint(text: str, settings: Mapping[str, Mapping[str, Any]], rules: RuleRegistry = registry) -> list[Diagnostic]:
    """Lint `text` with rule settings keyed by rule id."""
    return LinterEngine(rules.configure_all(settings)).lint_text(text)


def fix(
    text: str,
    settings: Mapping[str, Mapping[str, Any]],
    rules: RuleRegistry = registry,
    max_passes: int = MAX_FIX_PASSES,
) -> FixReport:
    """Lint and fix `text` with rule settings keyed by rule id."""
    return LinterEngine(rules.configure_all(settings), max_passes=max_passes).fix_text(text)
