"""
Function locator: finds the function definition enclosing a cursor line.
"""

import logging
from typing import Optional

from comment_density.syntax_tree import FUNCTION_DEFINITION, walk

logger = logging.getLogger(__name__)


def find_enclosing_function(root, line: int) -> Optional[object]:
    """
    Return the innermost function definition whose row span contains ``line``.

    The whole tree is walked in pre-order and every matching definition
    replaces the previous match, so a nested definition wins over the one
    surrounding it. Returns None when the line is outside every function,
    including lines beyond the end of the document.
    """
    result = None
    for node in walk(root):
        if node.type != FUNCTION_DEFINITION:
            continue
        if node.start_point[0] <= line <= node.end_point[0]:
            result = node

    if result is None:
        logger.debug(f"No function definition contains row {line}")
    return result
