"""
Syntax tree access for C source.

Wraps the tree-sitter C grammar: parsing source text into a tree, splitting
the document into lines the same way the editor does, and a pre-order walk
over named nodes shared by the function locator and the line classifier.
"""

import logging
import re
from typing import Iterator, List, Optional

from comment_density.exceptions import ParserUnavailableError

logger = logging.getLogger(__name__)

FUNCTION_DEFINITION = "function_definition"
COMMENT = "comment"

_LINE_SPLIT_RE = re.compile(r"\r?\n")

_parser = None


def _load_parser():
    """Create the module-level tree-sitter parser on first use."""
    global _parser
    if _parser is not None:
        return _parser
    try:
        import tree_sitter_c as tsc
        from tree_sitter import Language, Parser
    except ImportError as e:
        raise ParserUnavailableError(str(e))

    try:
        c_language = Language(tsc.language())
        _parser = Parser(c_language)
    except (TypeError, ValueError) as e:
        raise ParserUnavailableError(f"incompatible tree-sitter bindings: {e}")

    logger.debug("Loaded tree-sitter C grammar")
    return _parser


def parse_c_source(text: str):
    """
    Parse C source text and return the tree-sitter Tree.

    Invalid or partial source still produces a tree; error recovery
    inserts ERROR nodes which are treated like any other named node.
    """
    parser = _load_parser()
    return parser.parse(text.encode("utf-8"))


def split_lines(text: str) -> List[str]:
    """Split document text into lines on LF or CRLF."""
    return _LINE_SPLIT_RE.split(text)


def walk(node) -> Iterator:
    """
    Yield ``node`` and all of its named descendants in pre-order.

    Parents come before their children and siblings in source order.
    Anonymous tokens (punctuation, keywords) are not visited.
    """
    if node is None:
        return
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        # Reverse so the first child is popped first
        stack.extend(reversed(current.named_children))


def row_span(node) -> range:
    """Inclusive row range covered by a node."""
    return range(node.start_point[0], node.end_point[0] + 1)


def node_text(node) -> str:
    """Decoded source text of a node, empty when unavailable."""
    raw = getattr(node, "text", None)
    if raw is None:
        return ""
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return str(raw)


def function_name(fn_node) -> str:
    """Identifier of a function definition, following nested declarators."""
    declarator = fn_node.child_by_field_name("declarator")
    while declarator is not None:
        if declarator.type in ("identifier", "field_identifier"):
            return node_text(declarator)
        inner = declarator.child_by_field_name("declarator")
        if inner is None:
            break
        declarator = inner
    return "<anonymous>"


def body_node(fn_node) -> Optional[object]:
    """The compound statement holding a function's body, if any."""
    return fn_node.child_by_field_name("body")
