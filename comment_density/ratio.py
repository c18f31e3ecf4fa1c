"""
Comment ratio calculator.

Adding n comment lines raises both the comment count and the total by n,
so the smallest n with (comments + n) / (total + n) >= minimum is

    n = ceil((minimum * total - comments) / (1 - minimum))

clamped at zero once the current ratio already meets the minimum.
"""

import logging
import math
from fractions import Fraction

from comment_density.exceptions import InvalidConfigurationError
from comment_density.models import AnalysisResult, LineClassification

logger = logging.getLogger(__name__)


def _as_fraction(value: float) -> Fraction:
    # str() keeps the decimal the user wrote (0.1, not 0.1000000000000000055)
    return Fraction(str(value))


def check_min_ratio(min_ratio: float) -> float:
    """Reject minimum ratios outside [0, 1)."""
    if not isinstance(min_ratio, (int, float)) or math.isnan(min_ratio) or not 0 <= min_ratio < 1:
        raise InvalidConfigurationError(
            "min_comment_ratio", min_ratio, "must lie in the range [0, 1)"
        )
    return min_ratio


def comment_ratio(comment_count: int, total: int) -> float:
    """Comment lines over all classified lines, 0 for an empty function."""
    return comment_count / total if total > 0 else 0.0


def compute_needed(comment_count: int, total: int, min_ratio: float) -> int:
    """Minimal number of comment lines to add to reach ``min_ratio``."""
    check_min_ratio(min_ratio)
    if comment_count < 0 or total < comment_count:
        raise ValueError(
            f"Inconsistent line counts: comments={comment_count}, total={total}"
        )

    ratio = _as_fraction(min_ratio)
    raw = (ratio * total - comment_count) / (1 - ratio)
    if raw <= 0:
        return 0
    return math.ceil(raw)


def build_result(
    classification: LineClassification,
    min_ratio: float,
    function_name: str = "",
) -> AnalysisResult:
    """Turn a line classification into an AnalysisResult."""
    comments = len(classification.comment_lines)
    total = classification.total
    needed = compute_needed(comments, total, min_ratio)

    return AnalysisResult(
        code_lines=len(classification.code_lines),
        comment_lines=comments,
        total=total,
        ratio=comment_ratio(comments, total),
        need_comment=needed,
        min_comment_ratio=min_ratio,
        function_name=function_name,
        start_row=classification.start_row,
        end_row=classification.end_row,
    )


def format_report(result: AnalysisResult) -> str:
    """One-line, display-only summary of an analysis."""
    return (
        f"Code lines: {result.code_lines}, "
        f"Comment lines: {result.comment_lines}, "
        f"Comment ratio: {result.ratio * 100:.1f}%, "
        f"Needed comment lines: {result.need_comment}"
    )
