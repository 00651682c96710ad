"""Text reflow for the fixed-height activity panels."""

import re
from typing import List

from ..config.settings import PANEL_LINE_LENGTH

_NEWLINE = re.compile(r"\r?\n")


def reflow(text: str, row_count: int, max_line_length: int = PANEL_LINE_LENGTH) -> List[str]:
    """
    Wrap ``text`` into exactly ``row_count`` display lines.

    Explicit newlines start a new line; inside a segment words are packed
    greedily while the line stays within ``max_line_length``. A single word
    longer than the limit is kept whole on its own line. Lines past
    ``row_count`` are dropped and missing lines are returned as ``""``.
    """
    if row_count <= 0:
        return []
    lines: List[str] = []
    for segment in _NEWLINE.split(text or ""):
        if len(lines) >= row_count:
            break
        current = ""
        for word in segment.split():
            candidate = f"{current} {word}" if current else word
            if len(candidate) > max_line_length:
                if current:
                    lines.append(current)
                current = word
            else:
                current = candidate
        if current:
            lines.append(current)
    lines = lines[:row_count]
    return lines + [""] * (row_count - len(lines))
