import logging
from typing import Iterable, List
from diagnostics.types import Diagnostic, Severity

logger = logging.getLogger(__name__)


class SeverityFilter:
    """Drops diagnostics less severe than a configured threshold."""

    def __init__(self, min_severity=Severity.HINT):
        """
        Initialize the filter.

        Args:
            min_severity: Least severe level still kept. Accepts anything
                Severity.parse accepts.

        Raises:
            ValueError: If min_severity names no severity
        """
        self.min_severity = Severity.parse(min_severity)

    def allows(self, diagnostic: Diagnostic) -> bool:
        return diagnostic.severity.at_least(self.min_severity)

    def apply(self, diagnostics: Iterable[Diagnostic]) -> List[Diagnostic]:
        """
        Keep diagnostics at or above the threshold, preserving order.

        Args:
            diagnostics: Diagnostic snapshot

        Returns:
            New list of kept diagnostics
        """
        kept = []
        dropped = 0
        for diagnostic in diagnostics:
            if self.allows(diagnostic):
                kept.append(diagnostic)
            else:
                dropped += 1

        if dropped:
            logger.debug(f"Severity filter ({self.min_severity.value}) dropped {dropped} diagnostics")
        return kept
