from typing import Dict, List, Optional, Tuple
from dataclasses import dataclass, field
from enum import Enum
import re


class Severity(str, Enum):
    """Diagnostic severity, most severe first."""
    ERROR = "error"
    WARNING = "warning"
    INFORMATION = "information"
    HINT = "hint"

    @property
    def rank(self) -> int:
        """0 for errors, 3 for hints (same numbering as the editor host)."""
        return _SEVERITY_ORDER.index(self)

    @classmethod
    def parse(cls, value) -> "Severity":
        """
        Accept a Severity, a name ("Error", "warning", ...) or a host code (0-3).

        Raises:
            ValueError: If the value names no severity
        """
        if isinstance(value, Severity):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            if 0 <= value < len(_SEVERITY_ORDER):
                return _SEVERITY_ORDER[value]
            raise ValueError(f"Invalid severity code {value}. Must be 0-{len(_SEVERITY_ORDER) - 1}")
        name = str(value).strip().lower()
        if name == "info":
            name = "information"
        try:
            return cls(name)
        except ValueError:
            valid = [s.value for s in _SEVERITY_ORDER]
            raise ValueError(f"Invalid severity '{value}'. Must be one of: {valid}")

    def at_least(self, threshold: "Severity") -> bool:
        """True when this severity is as severe as the threshold or more."""
        return self.rank <= threshold.rank


_SEVERITY_ORDER = (Severity.ERROR, Severity.WARNING, Severity.INFORMATION, Severity.HINT)


@dataclass(frozen=True, order=True)
class Position:
    """Zero-based line/character position in a document."""
    line: int
    character: int


@dataclass(frozen=True)
class Range:
    """Span between two positions, both ends inclusive."""
    start: Position
    end: Position

    def contains(self, position: Position) -> bool:
        return self.start <= position <= self.end


@dataclass(frozen=True)
class Diagnostic:
    """Read-only snapshot of a host-reported diagnostic."""
    message: str
    severity: Severity
    range: Range
    source: Optional[str] = None
    code: Optional[str] = None


@dataclass(frozen=True)
class Rule:
    """
    One entry of the rule table.

    The pattern is searched anywhere in the message. Capture groups are
    allowed and exposed through captures(), nothing reads them today.
    """
    language: str
    pattern: re.Pattern
    explanation: str

    def applies_to(self, language_id: str) -> bool:
        return self.language == language_id

    def matches(self, message: str) -> bool:
        return self.pattern.search(message) is not None

    def captures(self, message: str) -> Optional[Tuple[Optional[str], ...]]:
        match = self.pattern.search(message)
        if match is None:
            return None
        return match.groups()


@dataclass(frozen=True)
class DocumentContext:
    """Identity of the document a request is about."""
    uri: str
    language_id: str


class CommandStatus(str, Enum):
    """Outcome of the explain-error command."""
    EXPLAINED = "EXPLAINED"
    NO_ACTIVE_EDITOR = "NO_ACTIVE_EDITOR"
    NO_ERROR_AT_CURSOR = "NO_ERROR_AT_CURSOR"


@dataclass
class CommandResult:
    """Outcome of the explain-error command."""
    status: CommandStatus
    notice: Optional[str] = None
    explanation: Optional[str] = None
    diagnostic: Optional[Diagnostic] = None
    modal: bool = False
    actions: List[Dict[str, str]] = field(default_factory=list)


@dataclass
class HoverResult:
    """Hover tooltip for a diagnostic."""
    contents: str
    range: Range
    is_trusted: bool = True
