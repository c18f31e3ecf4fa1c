"""
Line classifier for a single function.

Partitions the rows of a function definition into comment rows and code
rows by walking its syntax subtree. Rows in neither set are blank.

Two policies are available:
    first_pass  - one walk; comments and code are marked as nodes are met
                  and a comment always takes a row back from code.
    two_phase   - one walk for comments, then one for code over the rows
                  the comments left unclaimed.

Shared rules:
    - A comment node's span is trusted as-is, blank rows included.
    - A code row must have non-empty text after stripping whitespace.
"""

import logging
from typing import Sequence, Set

from comment_density.models import ClassificationPolicy, LineClassification
from comment_density.syntax_tree import COMMENT, row_span, walk

logger = logging.getLogger(__name__)


def _has_text(source_lines: Sequence[str], row: int) -> bool:
    if row < 0 or row >= len(source_lines):
        return False
    return source_lines[row].strip() != ""


def classify_first_pass(fn_node, source_lines: Sequence[str]) -> LineClassification:
    """Classify rows with a single pre-order walk."""
    comment_lines: Set[int] = set()
    code_lines: Set[int] = set()

    for node in walk(fn_node):
        if node.type == COMMENT:
            for row in row_span(node):
                comment_lines.add(row)
                # The covering named node is visited first; the comment wins
                code_lines.discard(row)
        elif node.is_named:
            for row in row_span(node):
                if row not in comment_lines and _has_text(source_lines, row):
                    code_lines.add(row)

    return LineClassification(
        comment_lines=frozenset(comment_lines),
        code_lines=frozenset(code_lines),
        start_row=fn_node.start_point[0],
        end_row=fn_node.end_point[0],
    )


def classify_two_phase(fn_node, source_lines: Sequence[str]) -> LineClassification:
    """Classify rows with a comment walk followed by a code walk."""
    comment_lines: Set[int] = set()
    claimed: Set[int] = set()

    for node in walk(fn_node):
        if node.type == COMMENT:
            for row in row_span(node):
                comment_lines.add(row)
                claimed.add(row)

    code_lines: Set[int] = set()
    for node in walk(fn_node):
        if not node.is_named:
            continue
        for row in row_span(node):
            if row in claimed:
                continue
            code_lines.add(row)
            claimed.add(row)

    code_lines = {row for row in code_lines if _has_text(source_lines, row)}

    return LineClassification(
        comment_lines=frozenset(comment_lines),
        code_lines=frozenset(code_lines),
        start_row=fn_node.start_point[0],
        end_row=fn_node.end_point[0],
    )


def classify(
    fn_node,
    source_lines: Sequence[str],
    policy: ClassificationPolicy = ClassificationPolicy.FIRST_PASS,
) -> LineClassification:
    """Classify the rows of ``fn_node`` using the selected policy."""
    policy = ClassificationPolicy.from_string(policy)
    if policy == ClassificationPolicy.TWO_PHASE:
        result = classify_two_phase(fn_node, source_lines)
    else:
        result = classify_first_pass(fn_node, source_lines)

    logger.debug(
        f"Classified rows {result.start_row}-{result.end_row} ({policy.value}): "
        f"code={sorted(result.code_lines)} comment={sorted(result.comment_lines)}"
    )
    return result
