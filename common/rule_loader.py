import json
import re
from pathlib import Path
from typing import Any, Dict, List, Union
import logging

from diagnostics.types import Rule
from diagnostics.rule_explainers.base import make_rule

logger = logging.getLogger(__name__)

# Flag letters accepted in rule files
FLAG_MAP = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
}

REQUIRED_FIELDS = ("language", "pattern", "explanation")


class RuleLoadError(Exception):
    """Exception raised when a rule file cannot be loaded."""
    pass


class RuleLoader:
    """Loads rule tables from JSON files."""

    def load(self, path: Union[str, Path]) -> List[Rule]:
        """
        Load rules from a JSON file.

        Args:
            path: File containing a JSON list of rule objects

        Returns:
            Rules in file order

        Raises:
            RuleLoadError: If the file is unreadable or any entry is invalid
        """
        rule_path = Path(path)
        try:
            with open(rule_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            raise RuleLoadError(f"Rule file not found: {rule_path}")
        except json.JSONDecodeError as e:
            raise RuleLoadError(f"Rule file {rule_path} is not valid JSON: {e}")
        except OSError as e:
            raise RuleLoadError(f"Rule file {rule_path} could not be read: {e}")

        rules = self.parse(data)
        logger.info(f"Loaded {len(rules)} rules from {rule_path}")
        return rules

    def parse(self, data: Any) -> List[Rule]:
        """
        Build rules from decoded JSON data.

        Raises:
            RuleLoadError: If the data is not a list of valid rule objects
        """
        if not isinstance(data, list):
            raise RuleLoadError(f"Rule file must contain a list, got {type(data).__name__}")

        return [self._parse_entry(index, entry) for index, entry in enumerate(data)]

    def _parse_entry(self, index: int, entry: Any) -> Rule:
        if not isinstance(entry, dict):
            raise RuleLoadError(f"Rule #{index} must be an object, got {type(entry).__name__}")

        for key in REQUIRED_FIELDS:
            if key not in entry:
                raise RuleLoadError(f"Rule #{index} is missing '{key}'")
            if not isinstance(entry[key], str):
                raise RuleLoadError(
                    f"Rule #{index} field '{key}' must be a string, got {type(entry[key]).__name__}"
                )

        unknown = set(entry) - set(REQUIRED_FIELDS) - {"flags"}
        if unknown:
            logger.warning(f"Rule #{index} has unknown keys {sorted(unknown)}, ignoring them")

        flags = self._parse_flags(index, entry.get("flags", ""))

        try:
            return make_rule(entry["language"], entry["pattern"], entry["explanation"], flags=flags)
        except re.error as e:
            raise RuleLoadError(f"Rule #{index} has an invalid pattern {entry['pattern']!r}: {e}")

    def _parse_flags(self, index: int, raw_flags: Any) -> int:
        if not isinstance(raw_flags, str):
            raise RuleLoadError(f"Rule #{index} flags must be a string, got {type(raw_flags).__name__}")

        flags = 0
        for letter in raw_flags:
            if letter not in FLAG_MAP:
                raise RuleLoadError(
                    f"Rule #{index} has unknown flag '{letter}'. Must be one of: {sorted(FLAG_MAP)}"
                )
            flags |= FLAG_MAP[letter]
        return flags


def describe_flags(pattern: re.Pattern) -> str:
    """Flag letters for a compiled pattern, inverse of the rule file format."""
    return "".join(letter for letter, flag in FLAG_MAP.items() if pattern.flags & flag)


def rule_to_dict(rule: Rule) -> Dict[str, str]:
    return {
        "language": rule.language,
        "pattern": rule.pattern.pattern,
        "flags": describe_flags(rule.pattern),
        "explanation": rule.explanation,
    }
