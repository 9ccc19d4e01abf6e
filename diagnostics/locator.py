from typing import Iterable, Optional
from diagnostics.types import Diagnostic, Position


def find_diagnostic_at(diagnostics: Iterable[Diagnostic], position: Position) -> Optional[Diagnostic]:
    """
    Return the first diagnostic whose range contains the position.

    Ranges are closed intervals. No severity filtering happens here, callers
    filter the snapshot first when they need to.

    Args:
        diagnostics: Snapshot of the document's diagnostics, in host order
        position: Cursor or hover position

    Returns:
        The diagnostic, or None when nothing covers the position
    """
    for diagnostic in diagnostics:
        if diagnostic.range.contains(position):
            return diagnostic
    return None
