"""
Message catalog for user-facing text.

Every string the adapters show to the user lives here, so wording changes do
not touch resolver or presentation logic.

Structure:
- NOTICES: informational messages for the command path, keyed by status
- FALLBACK_*: pieces of the generic explanation used when no rule matches
"""

PRODUCT_NAME = "Error Oracle"

COMMAND_ID = "error-oracle.explainError"

SEARCH_ACTION_TITLE = "Search web for this error"

# Command status -> notice text
NOTICES = {
    "NO_ACTIVE_EDITOR": f"{PRODUCT_NAME}: No active editor.",
    "NO_ERROR_AT_CURSOR": (
        f"{PRODUCT_NAME}: No error found at the cursor. "
        "Move the cursor onto a red squiggly line."
    ),
}

FALLBACK_INTRO = f"{PRODUCT_NAME} doesn't have a specific explanation for this message yet."

FALLBACK_SUGGESTIONS = [
    "Read the error carefully and note which variable/type it's about",
    "Check the line above as well (errors often come from there)",
    "Search the exact error message online or in your language docs",
]


def get_notice(status: str) -> str:
    """
    Get the notice text for a command status.

    Args:
        status: Command status key (e.g. "NO_ACTIVE_EDITOR")

    Returns:
        Notice text

    Raises:
        KeyError: If the status has no notice
    """
    return NOTICES[status]


def build_fallback_explanation(message: str) -> str:
    """
    Generic explanation for messages no rule matches.

    The diagnostic message is echoed verbatim on a quoted line.
    """
    lines = [
        FALLBACK_INTRO,
        "",
        "Error text:",
        f"> {message}",
        "",
        "Things you can try:",
    ]
    lines.extend(f"- {suggestion}" for suggestion in FALLBACK_SUGGESTIONS)
    return "\n".join(lines)
