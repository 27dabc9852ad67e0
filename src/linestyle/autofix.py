import logging
from typing import Callable, Iterable, Optional

from .models import Diagnostic, FixResult

logger = logging.getLogger(__name__)


class FixEngine:
    """Apply the non-overlapping subset of a pass's fixes in one rewrite"""

    def apply_fixes(
        self,
        text: str,
        diagnostics: Iterable[Diagnostic],
        should_fix: Optional[Callable[[Diagnostic], bool]] = None,
    ) -> FixResult:
        """Rewrite `text` with every fix that does not collide with an earlier one.

        Fixes are taken in order of their range start. A fix that starts at or
        before the end of the last accepted fix is deferred to the next pass;
        its diagnostic is returned in `remaining`. All offsets refer to the
        original `text`.
        """
        fixes: list[Diagnostic] = []
        remaining: list[Diagnostic] = []
        for diagnostic in diagnostics:
            if diagnostic.fix is not None and (should_fix is None or should_fix(diagnostic)):
                fixes.append(diagnostic)
            else:
                remaining.append(diagnostic)

        if not fixes:
            return FixResult(output=text, fixed=False, remaining=self._sorted(remaining))

        fixes.sort(key=lambda d: (d.fix.range_start, d.fix.range_end))
        applied: list[Diagnostic] = []
        parts: list[str] = []
        last_end = -1
        for diagnostic in fixes:
            fix = diagnostic.fix
            if fix.range_start <= last_end:
                logger.debug(
                    "Deferring %s fix at [%d, %d): overlaps a previous fix",
                    diagnostic.rule_id,
                    fix.range_start,
                    fix.range_end,
                )
                remaining.append(diagnostic)
                continue
            parts.append(text[max(last_end, 0) : fix.range_start])
            parts.append(fix.text)
            last_end = fix.range_end
            applied.append(diagnostic)
        parts.append(text[max(last_end, 0) :])

        output = "".join(parts)
        logger.debug("Applied %d fixes, deferred %d", len(applied), len(remaining))
        return FixResult(
            output=output,
            fixed=output != text,
            applied=applied,
            remaining=self._sorted(remaining),
        )

    @staticmethod
    def _sorted(diagnostics: list[Diagnostic]) -> list[Diagnostic]:
        return sorted(diagnostics, key=Diagnostic.sort_key)
