"""
Structured data models for the comment_density package.

Typed result objects for each stage of the fix-function pipeline:
line classification, ratio analysis, insertion edits and the final
command outcome.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional


# --- Enums ---

class ClassificationPolicy(str, Enum):
    """How overlapping comment and code spans are resolved."""
    FIRST_PASS = "first_pass"
    TWO_PHASE = "two_phase"

    @classmethod
    def from_string(cls, value) -> "ClassificationPolicy":
        """Resolve a policy from its value, accepting dashes and any case."""
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.FIRST_PASS
        cleaned = str(value).strip().lower().replace("-", "_")
        for member in cls:
            if member.value == cleaned:
                return member
        raise ValueError(
            f"Unknown classification policy '{value}'. Valid: {[m.value for m in cls]}"
        )


class InsertionPolicy(str, Enum):
    """How placeholder comments are turned into edits."""
    SINGLE = "single"
    ITERATIVE = "iterative"

    @classmethod
    def from_string(cls, value) -> "InsertionPolicy":
        """Resolve a policy from its value, accepting any case."""
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.SINGLE
        cleaned = str(value).strip().lower()
        for member in cls:
            if member.value == cleaned:
                return member
        raise ValueError(
            f"Unknown insertion policy '{value}'. Valid: {[m.value for m in cls]}"
        )


class FixStatus(str, Enum):
    """Final state of one fix-function command invocation."""
    APPLIED = "applied"
    NOT_NEEDED = "not_needed"
    NO_CONTEXT = "no_context"
    OUTSIDE_FUNCTION = "outside_function"
    MALFORMED_BODY = "malformed_body"
    INVALID_CONFIG = "invalid_config"
    PARSER_ERROR = "parser_error"

    @property
    def is_failure(self) -> bool:
        """Statuses that the command line reports as errors."""
        return self in (FixStatus.INVALID_CONFIG, FixStatus.PARSER_ERROR)


# --- Positions and edits ---

@dataclass(frozen=True)
class Position:
    """A zero-based location in source; column counts UTF-8 bytes."""
    row: int
    column: int


@dataclass(frozen=True)
class TextEdit:
    """A single text insertion against the original document."""
    position: Position
    text: str


# --- Analysis results ---

@dataclass(frozen=True)
class LineClassification:
    """Disjoint comment and code row sets for one function span."""
    comment_lines: FrozenSet[int]
    code_lines: FrozenSet[int]
    start_row: int = 0
    end_row: int = -1

    @property
    def total(self) -> int:
        return len(self.code_lines) + len(self.comment_lines)

    @property
    def ratio(self) -> float:
        total = self.total
        return len(self.comment_lines) / total if total > 0 else 0.0

    @property
    def blank_lines(self) -> FrozenSet[int]:
        """Rows of the function span that are neither code nor comment."""
        span = range(self.start_row, self.end_row + 1)
        return frozenset(r for r in span if r not in self.code_lines and r not in self.comment_lines)


@dataclass
class AnalysisResult:
    """Comment-density report for a single function."""
    code_lines: int
    comment_lines: int
    total: int
    ratio: float
    need_comment: int
    min_comment_ratio: float = 0.25
    function_name: str = ""
    start_row: int = 0
    end_row: int = 0

    @property
    def meets_minimum(self) -> bool:
        return self.need_comment == 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase record shown to the user."""
        return {
            "codeLines": self.code_lines,
            "commentLines": self.comment_lines,
            "total": self.total,
            "ratio": self.ratio,
            "needComment": self.need_comment,
            "minCommentRatio": self.min_comment_ratio,
            "function": self.function_name,
            "startLine": self.start_row + 1,
            "endLine": self.end_row + 1,
        }


@dataclass
class FixOutcome:
    """
    Result of one fix-function command.
    Failures are absorbed here rather than raised to the caller.
    """
    status: FixStatus
    message: str = ""
    analysis: Optional[AnalysisResult] = None
    edits: List[TextEdit] = field(default_factory=list)
    new_text: Optional[str] = None

    @property
    def changed(self) -> bool:
        return self.status == FixStatus.APPLIED and bool(self.edits)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {
            "status": self.status.value,
            "message": self.message,
            "analysis": self.analysis.to_dict() if self.analysis else None,
            "edits": [
                {"line": e.position.row + 1, "column": e.position.column, "text": e.text}
                for e in self.edits
            ],
        }
