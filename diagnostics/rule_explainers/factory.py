from typing import List, Optional, Sequence, Tuple
from diagnostics.types import Rule
from diagnostics.rule_explainers import python_rules, typescript_rules, javascript_rules
import logging

logger = logging.getLogger(__name__)

# Rule modules in table order. Add more modules here as languages are covered.
RULE_MODULES = (python_rules, typescript_rules, javascript_rules)


def default_rules() -> Tuple[Rule, ...]:
    """Built-in rule table, in declaration order."""
    rules: List[Rule] = []
    for module in RULE_MODULES:
        rules.extend(module.RULES)
    return tuple(rules)


class RuleFactory:
    """Builds the immutable rule table handed to the resolver."""

    def build(self, extra_rules: Optional[Sequence[Rule]] = None, replace: bool = False) -> Tuple[Rule, ...]:
        """
        Assemble a rule table.

        Args:
            extra_rules: Rules loaded from configuration, if any
            replace: Use only extra_rules instead of appending them to the built-ins

        Returns:
            Tuple of rules, first match wins
        """
        if extra_rules is None:
            return default_rules()

        if replace:
            table = tuple(extra_rules)
        else:
            table = default_rules() + tuple(extra_rules)

        logger.debug(f"Rule table built with {len(table)} rules (replace={replace})")
        return table
