from typing import Optional, Sequence, Tuple
import logging
from diagnostics.types import Rule
from diagnostics.message_catalog import build_fallback_explanation
from diagnostics.rule_explainers.factory import default_rules

logger = logging.getLogger(__name__)


class ExplanationResolver:
    """Maps a diagnostic message to an explanation using an ordered rule table."""

    def __init__(self, rules: Sequence[Rule]):
        """
        Initialize the resolver.

        Args:
            rules: Rule table, scanned in order. Copied into a tuple so later
                changes to the caller's sequence have no effect.
        """
        self._rules: Tuple[Rule, ...] = tuple(rules)

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return self._rules

    def match(self, message: str, language_id: str) -> Optional[Rule]:
        """
        Find the first rule for the language whose pattern occurs in the message.

        Args:
            message: Raw diagnostic message
            language_id: Language identifier, compared exactly

        Returns:
            Matching rule or None
        """
        for rule in self._rules:
            if rule.applies_to(language_id) and rule.matches(message):
                return rule
        return None

    def explain(self, message: str, language_id: str) -> str:
        """
        Explain a diagnostic message.

        Args:
            message: Raw diagnostic message
            language_id: Language identifier of the document

        Returns:
            The first matching rule's explanation, or the generic fallback
        """
        rule = self.match(message, language_id)
        if rule is None:
            logger.debug(f"No rule for {language_id!r}, using fallback explanation")
            return build_fallback_explanation(message)

        logger.debug(f"Matched {language_id!r} rule /{rule.pattern.pattern}/")
        return rule.explanation


_default_resolver = ExplanationResolver(default_rules())


def explain_error(message: str, language_id: str) -> str:
    """Explain a message with the built-in rule table."""
    return _default_resolver.explain(message, language_id)
