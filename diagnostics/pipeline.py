from typing import Iterable, Optional, Sequence, Union
import logging
from diagnostics.types import (
    CommandResult, CommandStatus, Diagnostic, DocumentContext, HoverResult, Position, Rule, Severity
)
from diagnostics.locator import find_diagnostic_at
from diagnostics.message_catalog import get_notice
from diagnostics.presentation import (
    DEFAULT_SEARCH_URL, build_search_action, to_hover_markdown
)
from diagnostics.resolver import ExplanationResolver
from diagnostics.rule_explainers.factory import RuleFactory
from diagnostics.severity_filter import SeverityFilter

logger = logging.getLogger(__name__)

DEFAULT_HOVER_LANGUAGES = ("python", "typescript", "javascript")


class DiagnosticsPipeline:
    """Composes locator, severity policy and resolver behind the two editor surfaces."""

    def __init__(
        self,
        rules: Optional[Sequence[Rule]] = None,
        hover_languages: Iterable[str] = DEFAULT_HOVER_LANGUAGES,
        hover_min_severity: Union[Severity, str, int] = Severity.ERROR,
        command_min_severity: Union[Severity, str, int] = Severity.HINT,
        search_url: str = DEFAULT_SEARCH_URL,
    ):
        """
        Initialize the diagnostics pipeline.

        Args:
            rules: Rule table; the built-in table when None
            hover_languages: Language IDs the hover surface answers for
            hover_min_severity: Least severe diagnostic the hover explains
            command_min_severity: Least severe diagnostic the command explains
            search_url: Search endpoint prefix for the follow-up action
        """
        if rules is None:
            rules = RuleFactory().build()
        self.resolver = ExplanationResolver(rules)
        self.hover_languages = frozenset(hover_languages)
        self.hover_filter = SeverityFilter(hover_min_severity)
        self.command_filter = SeverityFilter(command_min_severity)
        self.search_url = search_url

    def explain(self, message: str, language_id: str) -> str:
        return self.resolver.explain(message, language_id)

    def explain_error_command(
        self,
        document: Optional[DocumentContext],
        position: Optional[Position],
        diagnostics: Sequence[Diagnostic],
    ) -> CommandResult:
        """
        Explain the diagnostic under the cursor.

        The first diagnostic at the cursor is the one considered; when it is
        below the command threshold the cursor counts as having no error.

        Args:
            document: Active document, None when no editor is open
            position: Cursor position, None when no editor is open
            diagnostics: Snapshot of the document's diagnostics

        Returns:
            CommandResult with either a notice or an explanation plus search action
        """
        if document is None or position is None:
            return CommandResult(
                status=CommandStatus.NO_ACTIVE_EDITOR,
                notice=get_notice(CommandStatus.NO_ACTIVE_EDITOR.value),
            )

        diagnostic = find_diagnostic_at(diagnostics, position)
        if diagnostic is None or not self.command_filter.allows(diagnostic):
            logger.debug(f"No diagnostic to explain at {position.line}:{position.character} in {document.uri}")
            return CommandResult(
                status=CommandStatus.NO_ERROR_AT_CURSOR,
                notice=get_notice(CommandStatus.NO_ERROR_AT_CURSOR.value),
            )

        explanation = self.resolver.explain(diagnostic.message, document.language_id)
        action = build_search_action(document.language_id, diagnostic.message, self.search_url)

        return CommandResult(
            status=CommandStatus.EXPLAINED,
            explanation=explanation,
            diagnostic=diagnostic,
            modal=True,
            actions=[action],
        )

    def provide_hover(
        self,
        document: DocumentContext,
        position: Position,
        diagnostics: Sequence[Diagnostic],
    ) -> Optional[HoverResult]:
        """
        Build a hover for the diagnostic at a position.

        Returns None when the language is not handled, nothing is at the
        position, or the first diagnostic there is below the hover threshold.
        """
        if document.language_id not in self.hover_languages:
            return None

        diagnostic = find_diagnostic_at(diagnostics, position)
        if diagnostic is None:
            return None

        if not self.hover_filter.allows(diagnostic):
            return None

        explanation = self.resolver.explain(diagnostic.message, document.language_id)
        return HoverResult(contents=to_hover_markdown(explanation), range=diagnostic.range)
