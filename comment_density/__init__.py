"""
comment_density - comment-to-code ratio fixer for C functions.

Measures how many lines of the function under the cursor are comments and,
when the ratio is below the configured minimum, inserts the fewest
placeholder comments that bring it up to that minimum.

Architecture:
    ┌─────────────────────────────────────────────────┐
    │             CommentDensityAnalyzer              │  ← Public API
    │  (pipeline, failure absorption, FixOutcome)     │
    ├─────────────────────────────────────────────────┤
    │   locator.py        classifier.py    ratio.py   │  ← Analysis
    │  (enclosing fn)    (comment/code)  (needed n)   │
    ├─────────────────────────────────────────────────┤
    │                  insertion.py                   │  ← Edits
    │  (body brace position, comment edits, apply)    │
    ├─────────────────────────────────────────────────┤
    │                 syntax_tree.py                  │  ← Parsing
    │  (tree-sitter C grammar, pre-order walk)        │
    └─────────────────────────────────────────────────┘

Supporting modules:
    config.py      - CommentDensityConfig dataclass
    exceptions.py  - Custom exception hierarchy
    models.py      - Result, edit and outcome models
    utils.py       - Document I/O, backups, atomic writes, diffs
"""

# --- Core Public API ---
from comment_density.analyzer import CommentDensityAnalyzer
from comment_density.classifier import classify, classify_first_pass, classify_two_phase
from comment_density.insertion import apply_edits, body_insertion_point, build_edits
from comment_density.locator import find_enclosing_function
from comment_density.ratio import comment_ratio, compute_needed, format_report

# --- Configuration ---
from comment_density.config import CommentDensityConfig, DEFAULT_CONFIG

# --- Models ---
from comment_density.models import (
    AnalysisResult,
    ClassificationPolicy,
    FixOutcome,
    FixStatus,
    InsertionPolicy,
    LineClassification,
    Position,
    TextEdit,
)

# --- Exceptions ---
from comment_density.exceptions import (
    CommentDensityError,
    CursorOutsideFunctionError,
    EditApplicationError,
    InvalidConfigurationError,
    MalformedFunctionBodyError,
    NoActiveContextError,
    ParserUnavailableError,
)

# --- Parsing ---
from comment_density.syntax_tree import parse_c_source, split_lines, walk

__version__ = "1.0.0"

__all__ = [
    # Core
    "CommentDensityAnalyzer",
    "classify",
    "classify_first_pass",
    "classify_two_phase",
    "find_enclosing_function",
    "compute_needed",
    "comment_ratio",
    "format_report",
    "body_insertion_point",
    "build_edits",
    "apply_edits",
    # Config
    "CommentDensityConfig",
    "DEFAULT_CONFIG",
    # Models
    "AnalysisResult",
    "ClassificationPolicy",
    "FixOutcome",
    "FixStatus",
    "InsertionPolicy",
    "LineClassification",
    "Position",
    "TextEdit",
    # Exceptions
    "CommentDensityError",
    "CursorOutsideFunctionError",
    "EditApplicationError",
    "InvalidConfigurationError",
    "MalformedFunctionBodyError",
    "NoActiveContextError",
    "ParserUnavailableError",
    # Parsing
    "parse_c_source",
    "split_lines",
    "walk",
]
