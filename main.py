"""
Error Oracle - explains compiler/linter diagnostics for editor hosts.
Stateless API: the host posts its diagnostics snapshot, Error Oracle answers
with a hover body or a modal explanation plus a web search link.
"""

import json
import logging
import os
from typing import List, Optional

from fastapi import FastAPI, HTTPException, status
from fastapi.responses import JSONResponse

from common.rule_loader import RuleLoader, RuleLoadError, rule_to_dict
from diagnostics.message_catalog import COMMAND_ID
from diagnostics.models import (
    CommandAction, CommandRequest, CommandResponse, CommandStatus, DiagnosticModel,
    ExplainRequest, ExplainResponse, HoverModel, HoverRequest, HoverResponse,
    RangeModel, RuleModel,
)
from diagnostics.pipeline import DEFAULT_HOVER_LANGUAGES, DiagnosticsPipeline
from diagnostics.presentation import DEFAULT_SEARCH_URL, build_search_url
from diagnostics.rule_explainers.factory import RuleFactory
from diagnostics.types import Severity

# Global configuration with environment variable support
LOG_LEVEL = os.environ.get("ERROR_ORACLE_LOG_LEVEL", "INFO")
RULES_FILE = os.environ.get("ERROR_ORACLE_RULES_FILE")
RULES_MODE = os.environ.get("ERROR_ORACLE_RULES_MODE", "replace")
HOVER_LANGUAGES = os.environ.get("ERROR_ORACLE_HOVER_LANGUAGES", ",".join(DEFAULT_HOVER_LANGUAGES))
HOVER_MIN_SEVERITY = os.environ.get("ERROR_ORACLE_HOVER_MIN_SEVERITY", "error")
COMMAND_MIN_SEVERITY = os.environ.get("ERROR_ORACLE_COMMAND_MIN_SEVERITY", "hint")
SEARCH_URL = os.environ.get("ERROR_ORACLE_SEARCH_URL", DEFAULT_SEARCH_URL)

# Configure logging
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format='[%(levelname)s] %(message)s'
)
logger = logging.getLogger(__name__)


class EscapedJSONResponse(JSONResponse):
    """JSON response with non-ASCII characters escaped.

    Diagnostic messages are echoed back verbatim and may hold characters
    UTF-8 cannot encode (lone surrogates); \\u escapes keep them intact.
    """

    def render(self, content) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=True,
            allow_nan=False,
            indent=None,
            separators=(",", ":"),
        ).encode("ascii")


# Application
app = FastAPI(title="Error Oracle", version="1.0.0", default_response_class=EscapedJSONResponse)


def load_config():
    """
    Load and validate startup configuration.

    Raises:
        RuleLoadError: If a configured rule file cannot be loaded
        ValueError: If a severity or rules mode setting is invalid
    """
    try:
        if RULES_MODE not in ("replace", "extend"):
            raise ValueError(f"Invalid rules mode '{RULES_MODE}'. Must be one of: ['replace', 'extend']")

        extra_rules = None
        if RULES_FILE:
            extra_rules = RuleLoader().load(RULES_FILE)

        rules = RuleFactory().build(extra_rules, replace=(RULES_MODE == "replace"))

        hover_languages = [lang.strip() for lang in HOVER_LANGUAGES.split(",") if lang.strip()]

        config = {
            "rules": rules,
            "hover_languages": hover_languages,
            "hover_min_severity": Severity.parse(HOVER_MIN_SEVERITY),
            "command_min_severity": Severity.parse(COMMAND_MIN_SEVERITY),
            "search_url": SEARCH_URL,
        }

        logger.info(f"Rule table ready: {len(rules)} rules")
        logger.info(f"Hover languages: {', '.join(hover_languages) or '(none)'}")
        logger.info(
            f"Severity thresholds: hover={config['hover_min_severity'].value}, "
            f"command={config['command_min_severity'].value}"
        )
        return config
    except (RuleLoadError, ValueError) as e:
        logger.error(f"Failed to load configuration: {e}")
        raise


def create_pipeline(config: dict) -> DiagnosticsPipeline:
    return DiagnosticsPipeline(
        rules=config["rules"],
        hover_languages=config["hover_languages"],
        hover_min_severity=config["hover_min_severity"],
        command_min_severity=config["command_min_severity"],
        search_url=config["search_url"],
    )


# Load config on startup
config = load_config()
diagnostics_pipeline = create_pipeline(config)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
async def root():
    return {
        "message": "Error Oracle API is running",
        "docs": "/docs",
        "health": "/health",
        "command": f"/commands/{COMMAND_ID}",
    }


@app.get("/rules", response_model=List[RuleModel])
async def list_rules(language: Optional[str] = None):
    """List the active rule table in match order, optionally for one language."""
    rules = diagnostics_pipeline.resolver.rules
    if language is not None:
        rules = [rule for rule in rules if rule.applies_to(language)]
    return [RuleModel(**rule_to_dict(rule)) for rule in rules]


@app.post("/explain", response_model=ExplainResponse)
async def explain(request: ExplainRequest):
    """Explain a raw diagnostic message for a language."""
    try:
        rule = diagnostics_pipeline.resolver.match(request.message, request.language_id)
        return ExplainResponse(
            explanation=diagnostics_pipeline.explain(request.message, request.language_id),
            matched=rule is not None,
            language_id=request.language_id,
            search_url=build_search_url(request.language_id, request.message, diagnostics_pipeline.search_url),
        )
    except Exception as e:
        logger.error(f"Unexpected error explaining message: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal error while explaining the message"
        )


@app.post(f"/commands/{COMMAND_ID}", response_model=CommandResponse)
async def explain_error_command(request: CommandRequest):
    """
    Explain the diagnostic under the cursor.

    Without an active editor, or with nothing at the cursor, the response
    carries a notice instead of an explanation.
    """
    try:
        result = diagnostics_pipeline.explain_error_command(
            document=request.document.to_document() if request.document else None,
            position=request.position.to_position() if request.position else None,
            diagnostics=[d.to_diagnostic() for d in request.diagnostics],
        )
    except Exception as e:
        logger.error(f"Unexpected error in {COMMAND_ID}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal error while explaining the diagnostic"
        )

    if result.status is not CommandStatus.EXPLAINED:
        logger.info(f"{COMMAND_ID}: {result.status.value}")

    return CommandResponse(
        status=result.status,
        notice=result.notice,
        explanation=result.explanation,
        diagnostic=DiagnosticModel.from_diagnostic(result.diagnostic) if result.diagnostic else None,
        modal=result.modal,
        actions=[CommandAction(**action) for action in result.actions],
    )


@app.post("/hover", response_model=HoverResponse)
async def hover(request: HoverRequest):
    """Hover body for the diagnostic at a position, or null."""
    try:
        result = diagnostics_pipeline.provide_hover(
            document=request.document.to_document(),
            position=request.position.to_position(),
            diagnostics=[d.to_diagnostic() for d in request.diagnostics],
        )
    except Exception as e:
        logger.error(f"Unexpected error providing hover: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal error while providing hover"
        )

    if result is None:
        return HoverResponse(hover=None)

    return HoverResponse(
        hover=HoverModel(
            contents=result.contents,
            is_trusted=result.is_trusted,
            range=RangeModel.from_range(result.range),
        )
    )
