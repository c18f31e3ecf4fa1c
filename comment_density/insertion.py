"""
Insertion point resolution and placeholder comment edits.

Placeholder comments go directly after the opening brace of the function
body. Edits are expressed against the original document coordinates and
applied as one batch.
"""

import logging
import re
from typing import List, Optional, Sequence

from comment_density.config import CommentDensityConfig, DEFAULT_CONFIG
from comment_density.exceptions import EditApplicationError
from comment_density.models import InsertionPolicy, Position, TextEdit
from comment_density.syntax_tree import body_node

logger = logging.getLogger(__name__)

_LINE_BREAK_RE = re.compile(r"\r?\n")


def body_insertion_point(fn_node) -> Optional[Position]:
    """
    Position just after the ``{`` that opens the function body.

    Returns None when the function has no body or the body does not start
    with an opening brace; callers treat that as "cannot safely insert".
    """
    body = body_node(fn_node)
    if body is None:
        return None

    children = body.children
    open_brace = children[0] if children else None
    if open_brace is None or open_brace.type != "{":
        return None

    row, column = open_brace.end_point[0], open_brace.end_point[1]
    return Position(row=row, column=column)


def detect_eol(text: str) -> str:
    """Line ending used by the document, LF unless the first break is CRLF."""
    match = _LINE_BREAK_RE.search(text)
    if match is None:
        return "\n"
    return match.group(0)


def build_edits(
    position: Position,
    count: int,
    config: CommentDensityConfig = None,
    eol: str = "\n",
    close_line: bool = False,
) -> List[TextEdit]:
    """
    Build the placeholder-comment edits for ``count`` missing lines.

    single:    one edit holding every comment line.
    iterative: one edit per comment, each tagged with its index. All of
               them target the same position and are applied in issue
               order, so index 0 ends up topmost.

    With ``close_line`` the last edit ends with ``eol`` so text that
    followed the brace on its row moves to a line of its own.
    """
    config = config or DEFAULT_CONFIG
    if count <= 0:
        return []

    line = f"{config.comment_prefix}{config.auto_insert_comment_value}"
    if config.insertion_policy == InsertionPolicy.ITERATIVE:
        texts = [f"{eol}{line} {index}" for index in range(count)]
    else:
        texts = [f"{eol}{line}" * count]

    if close_line:
        texts[-1] += eol
    return [TextEdit(position=position, text=text) for text in texts]


def text_follows(text: str, position: Position) -> bool:
    """True when non-blank text follows ``position`` on the same row."""
    starts = _line_starts(text)
    offset = _offset_for(text, starts, position)
    match = _LINE_BREAK_RE.search(text, offset)
    line_end = match.start() if match else len(text)
    return text[offset:line_end].strip() != ""


def _line_starts(text: str) -> List[int]:
    starts = [0]
    starts.extend(m.end() for m in _LINE_BREAK_RE.finditer(text))
    return starts


def _offset_for(text: str, starts: Sequence[int], position: Position) -> int:
    """Character offset in ``text`` for a row and UTF-8 byte column."""
    if position.row < 0 or position.row >= len(starts):
        raise EditApplicationError(position.row, position.column, "row outside document")

    start = starts[position.row]
    if position.row + 1 < len(starts):
        end = starts[position.row + 1]
        match = _LINE_BREAK_RE.search(text, start, end)
        line_end = match.start() if match else end
    else:
        line_end = len(text)

    encoded = text[start:line_end].encode("utf-8")
    if position.column < 0 or position.column > len(encoded):
        raise EditApplicationError(position.row, position.column, "column outside line")
    try:
        prefix = encoded[: position.column].decode("utf-8")
    except UnicodeDecodeError:
        raise EditApplicationError(position.row, position.column, "column splits a character")
    return start + len(prefix)


def apply_edits(text: str, edits: Sequence[TextEdit]) -> str:
    """
    Apply a batch of insertions against the original ``text``.

    Every edit is resolved before any is applied, so an out-of-range edit
    leaves the document untouched. Insertions at the same position keep
    their issue order.
    """
    if not edits:
        return text

    starts = _line_starts(text)
    resolved = [(_offset_for(text, starts, edit.position), i, edit) for i, edit in enumerate(edits)]
    resolved.sort(key=lambda item: (item[0], item[1]))

    pieces = []
    cursor = 0
    for offset, _, edit in resolved:
        pieces.append(text[cursor:offset])
        pieces.append(edit.text)
        cursor = offset
    pieces.append(text[cursor:])

    logger.debug(f"Applied {len(edits)} edit(s)")
    return "".join(pieces)
