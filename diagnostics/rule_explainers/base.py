import re
from typing import Union
from diagnostics.types import Rule


def make_rule(language: str, pattern: Union[str, re.Pattern], explanation: str, flags: int = 0) -> Rule:
    """
    Build a Rule, compiling the pattern if needed.

    Args:
        language: Language identifier the rule applies to (exact match)
        pattern: Regular expression source or compiled pattern
        explanation: Canned multi-line explanation text
        flags: re flags used when compiling a string pattern

    Returns:
        Immutable Rule
    """
    if isinstance(pattern, str):
        pattern = re.compile(pattern, flags)
    return Rule(language=language, pattern=pattern, explanation=explanation)
