#!/usr/bin/env python3
"""
Test the two editor surfaces built by DiagnosticsPipeline:
1. explain-error command (notices, modal explanation, search action)
2. hover (language set, severity threshold, markdown body)
"""
import pytest

from diagnostics.message_catalog import get_notice
from diagnostics.pipeline import DiagnosticsPipeline
from diagnostics.rule_explainers.base import make_rule
from diagnostics.rule_explainers import python_rules
from diagnostics.types import CommandStatus, Diagnostic, DocumentContext, Position, Range, Severity

PY_DOC = DocumentContext(uri="file:///tmp/app.py", language_id="python")
RUBY_DOC = DocumentContext(uri="file:///tmp/app.rb", language_id="ruby")

NAME_ERROR = Diagnostic(
    message="NameError: name 'x' is not defined",
    severity=Severity.ERROR,
    range=Range(Position(4, 3), Position(4, 10)),
    source="pyflakes",
)

UNUSED_IMPORT = Diagnostic(
    message="'os' imported but unused",
    severity=Severity.WARNING,
    range=Range(Position(0, 0), Position(0, 9)),
)


@pytest.fixture
def pipeline():
    return DiagnosticsPipeline()


def test_command_without_editor(pipeline):
    result = pipeline.explain_error_command(None, None, [NAME_ERROR])
    assert result.status is CommandStatus.NO_ACTIVE_EDITOR
    assert result.notice == "Error Oracle: No active editor."
    assert result.explanation is None
    assert result.actions == []


def test_command_without_position(pipeline):
    result = pipeline.explain_error_command(PY_DOC, None, [NAME_ERROR])
    assert result.status is CommandStatus.NO_ACTIVE_EDITOR


def test_command_nothing_at_cursor(pipeline):
    result = pipeline.explain_error_command(PY_DOC, Position(4, 11), [NAME_ERROR])
    assert result.status is CommandStatus.NO_ERROR_AT_CURSOR
    assert result.notice == get_notice("NO_ERROR_AT_CURSOR")
    assert "Move the cursor onto a red squiggly line." in result.notice


def test_command_explains_diagnostic(pipeline):
    result = pipeline.explain_error_command(PY_DOC, Position(4, 5), [UNUSED_IMPORT, NAME_ERROR])

    assert result.status is CommandStatus.EXPLAINED
    assert result.modal is True
    assert result.diagnostic is NAME_ERROR
    assert result.explanation == python_rules.RULES[0].explanation
    assert result.actions == [{
        "title": "Search web for this error",
        "url": "https://www.google.com/search?q=python%20NameError%3A%20name%20'x'%20is%20not%20defined",
    }]


def test_command_explains_warnings_by_default(pipeline):
    result = pipeline.explain_error_command(PY_DOC, Position(0, 2), [UNUSED_IMPORT])
    assert result.status is CommandStatus.EXPLAINED
    assert "> 'os' imported but unused" in result.explanation


def test_command_threshold_is_configurable():
    pipeline = DiagnosticsPipeline(command_min_severity="error")
    result = pipeline.explain_error_command(PY_DOC, Position(0, 2), [UNUSED_IMPORT])
    assert result.status is CommandStatus.NO_ERROR_AT_CURSOR


def test_command_uses_custom_search_url():
    pipeline = DiagnosticsPipeline(search_url="https://example.test/s?q=")
    result = pipeline.explain_error_command(PY_DOC, Position(4, 5), [NAME_ERROR])
    assert result.actions[0]["url"].startswith("https://example.test/s?q=python%20")


def test_command_works_for_any_language(pipeline):
    diagnostic = Diagnostic(
        message="undefined method `foo'",
        severity=Severity.ERROR,
        range=Range(Position(0, 0), Position(0, 3)),
    )
    result = pipeline.explain_error_command(RUBY_DOC, Position(0, 1), [diagnostic])
    assert result.status is CommandStatus.EXPLAINED
    assert "> undefined method `foo'" in result.explanation
    assert result.actions[0]["url"].endswith("ruby%20undefined%20method%20%60foo'")


def test_hover_for_error(pipeline):
    hover = pipeline.provide_hover(PY_DOC, Position(4, 3), [NAME_ERROR])

    assert hover is not None
    assert hover.is_trusted is True
    assert hover.range == NAME_ERROR.range
    assert hover.contents.startswith("**Error Oracle**\n\nThis Python error means")
    assert "  \n- Check for typos in the name  \n" in hover.contents


def test_hover_nothing_at_position(pipeline):
    assert pipeline.provide_hover(PY_DOC, Position(5, 0), [NAME_ERROR]) is None


def test_hover_ignores_warnings_by_default(pipeline):
    assert pipeline.provide_hover(PY_DOC, Position(0, 2), [UNUSED_IMPORT]) is None


def test_hover_uses_first_diagnostic_at_position(pipeline):
    """A warning listed before an overlapping error suppresses the hover."""
    overlapping_warning = Diagnostic(
        message="shadowed name",
        severity=Severity.WARNING,
        range=Range(Position(4, 0), Position(4, 20)),
    )
    assert pipeline.provide_hover(PY_DOC, Position(4, 5), [overlapping_warning, NAME_ERROR]) is None

    hover = pipeline.provide_hover(PY_DOC, Position(4, 5), [NAME_ERROR, overlapping_warning])
    assert hover is not None
    assert hover.range == NAME_ERROR.range


def test_command_uses_first_diagnostic_at_cursor():
    pipeline = DiagnosticsPipeline(command_min_severity=Severity.ERROR)
    overlapping_warning = Diagnostic(
        message="shadowed name",
        severity=Severity.WARNING,
        range=Range(Position(4, 0), Position(4, 20)),
    )
    result = pipeline.explain_error_command(PY_DOC, Position(4, 5), [overlapping_warning, NAME_ERROR])
    assert result.status is CommandStatus.NO_ERROR_AT_CURSOR


def test_command_survives_unencodable_message(pipeline):
    diagnostic = Diagnostic(
        message="bad \ud800 x",
        severity=Severity.ERROR,
        range=Range(Position(0, 0), Position(0, 5)),
    )
    result = pipeline.explain_error_command(PY_DOC, Position(0, 1), [diagnostic])

    assert result.status is CommandStatus.EXPLAINED
    assert "> bad \ud800 x" in result.explanation
    assert result.actions[0]["url"].endswith("python%20bad%20%3F%20x")


def test_hover_threshold_is_configurable():
    pipeline = DiagnosticsPipeline(hover_min_severity=Severity.WARNING)
    hover = pipeline.provide_hover(PY_DOC, Position(0, 2), [UNUSED_IMPORT])
    assert hover is not None
    assert "&gt;" not in hover.contents
    assert "> 'os' imported but unused" in hover.contents


def test_hover_skips_unregistered_language(pipeline):
    diagnostic = Diagnostic(
        message="syntax error",
        severity=Severity.ERROR,
        range=Range(Position(0, 0), Position(0, 3)),
    )
    assert pipeline.provide_hover(RUBY_DOC, Position(0, 1), [diagnostic]) is None


def test_hover_languages_are_configurable():
    pipeline = DiagnosticsPipeline(hover_languages=["ruby"])
    diagnostic = Diagnostic(
        message="syntax error",
        severity=Severity.ERROR,
        range=Range(Position(0, 0), Position(0, 3)),
    )
    assert pipeline.provide_hover(RUBY_DOC, Position(0, 1), [diagnostic]) is not None
    assert pipeline.provide_hover(PY_DOC, Position(4, 5), [NAME_ERROR]) is None


def test_pipeline_with_injected_rules():
    pipeline = DiagnosticsPipeline(rules=[make_rule("python", r"is not defined", "custom explanation")])
    result = pipeline.explain_error_command(PY_DOC, Position(4, 5), [NAME_ERROR])
    assert result.explanation == "custom explanation"
    assert pipeline.explain("TypeError: bad", "python").startswith("Error Oracle doesn't have")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
