"""
Presentation layer for rendering explanations.

The resolver always produces plain multi-line text. This layer turns it into
what each surface shows: a markdown hover body, or a modal message with a
"search the web" action.
"""
from typing import Dict
from urllib.parse import quote
import logging

from diagnostics.message_catalog import PRODUCT_NAME, SEARCH_ACTION_TITLE

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_URL = "https://www.google.com/search?q="

# Characters encodeURIComponent leaves alone on top of quote()'s own set
_URI_COMPONENT_SAFE = "!~*'()"

# Markdown hard line break
MARKDOWN_LINE_BREAK = "  \n"


def encode_uri_component(value: str) -> str:
    """
    Percent-encode a value for embedding in a URL query (UTF-8).

    Characters UTF-8 cannot encode (lone surrogates) become "?" so a search
    link can always be built.
    """
    return quote(value, safe=_URI_COMPONENT_SAFE, errors="replace")


def build_search_query(language_id: str, message: str) -> str:
    """
    Build the encoded search query for a diagnostic.

    Args:
        language_id: Document language identifier
        message: Raw diagnostic message

    Returns:
        Percent-encoded "{language_id} {message}"
    """
    return encode_uri_component(f"{language_id} {message}")


def build_search_url(language_id: str, message: str, base_url: str = DEFAULT_SEARCH_URL) -> str:
    """
    Build the web search URL offered next to an explanation.

    Args:
        language_id: Document language identifier
        message: Raw diagnostic message
        base_url: Search endpoint ending with the query parameter

    Returns:
        Full search URL
    """
    return f"{base_url}{build_search_query(language_id, message)}"


def to_hover_markdown(explanation: str) -> str:
    """
    Render an explanation as a hover body.

    A bold product header is prepended and every newline becomes a markdown
    hard break so the explanation keeps its line layout.
    """
    body = explanation.replace("\n", MARKDOWN_LINE_BREAK)
    return f"**{PRODUCT_NAME}**\n\n{body}"


def build_search_action(language_id: str, message: str, base_url: str = DEFAULT_SEARCH_URL) -> Dict[str, str]:
    """Follow-up action shown with a modal explanation."""
    url = build_search_url(language_id, message, base_url)
    logger.debug(f"Search action URL: {url}")
    return {"title": SEARCH_ACTION_TITLE, "url": url}
