import logging
from typing import Optional, Sequence

from comment_density.classifier import classify
from comment_density.config import CommentDensityConfig, DEFAULT_CONFIG
from comment_density.exceptions import (
    CursorOutsideFunctionError,
    EditApplicationError,
    InvalidConfigurationError,
    MalformedFunctionBodyError,
    NoActiveContextError,
    ParserUnavailableError,
)
from comment_density.insertion import (
    apply_edits,
    body_insertion_point,
    build_edits,
    detect_eol,
    text_follows,
)
from comment_density.locator import find_enclosing_function
from comment_density.models import AnalysisResult, FixOutcome, FixStatus
from comment_density.ratio import build_result, format_report
from comment_density.syntax_tree import function_name, parse_c_source, split_lines

# Configure Logger
logger = logging.getLogger(__name__)


class CommentDensityAnalyzer:
    """
    High-level service running the fix-function command.
    Parses the document, finds the function under the cursor, measures its
    comment ratio and prepares the placeholder comments that bring it up to
    the configured minimum.
    """

    def __init__(self, config: CommentDensityConfig = None):
        self.config = config or DEFAULT_CONFIG

    def analyze_function(self, fn_node, source_lines: Sequence[str]) -> AnalysisResult:
        """Measure one function definition node."""
        self.config.ensure_valid()
        classification = classify(fn_node, source_lines, self.config.classification_policy)
        return build_result(
            classification,
            self.config.min_comment_ratio,
            function_name=function_name(fn_node),
        )

    def analyze(self, source: Optional[str], cursor_line: Optional[int]) -> AnalysisResult:
        """
        Analyze the function enclosing ``cursor_line`` (zero-based).
        Raises a CommentDensityError subclass when there is nothing to analyze.
        """
        fn_node, lines = self._locate(source, cursor_line)
        return self.analyze_function(fn_node, lines)

    def _locate(self, source: Optional[str], cursor_line: Optional[int]):
        if source is None or cursor_line is None:
            raise NoActiveContextError("no document or cursor")
        if cursor_line < 0:
            raise NoActiveContextError(f"invalid cursor line {cursor_line}")

        tree = parse_c_source(source)
        fn_node = find_enclosing_function(tree.root_node, cursor_line)
        if fn_node is None:
            raise CursorOutsideFunctionError(cursor_line)
        return fn_node, split_lines(source)

    def run(self, source: Optional[str], cursor_line: Optional[int]) -> FixOutcome:
        """
        Main entry point: analyze and, if needed, insert placeholder comments.
        Never raises for the command's expected failure modes; they are
        returned as a FixOutcome status with a display message.
        """
        try:
            fn_node, lines = self._locate(source, cursor_line)
            analysis = self.analyze_function(fn_node, lines)
        except NoActiveContextError as e:
            logger.debug(f"Nothing to do: {e}")
            return FixOutcome(status=FixStatus.NO_CONTEXT)
        except CursorOutsideFunctionError as e:
            logger.info(str(e))
            return FixOutcome(status=FixStatus.OUTSIDE_FUNCTION, message="Cursor is not inside a function")
        except InvalidConfigurationError as e:
            logger.warning(f"Configuration rejected: {e}")
            return FixOutcome(status=FixStatus.INVALID_CONFIG, message=str(e))
        except ParserUnavailableError as e:
            logger.error(f"Parser failure: {e}")
            return FixOutcome(status=FixStatus.PARSER_ERROR, message=str(e))

        report = format_report(analysis)
        logger.info(f"{analysis.function_name}: {report}")

        if analysis.need_comment <= 0:
            return FixOutcome(status=FixStatus.NOT_NEEDED, message=report, analysis=analysis)

        try:
            edits = self._plan_edits(fn_node, analysis, source)
            new_text = apply_edits(source, edits)
        except (MalformedFunctionBodyError, EditApplicationError) as e:
            # Valid C always has the brace; skip the edit rather than fail
            logger.warning(f"Skipping edit: {e}")
            return FixOutcome(status=FixStatus.MALFORMED_BODY, message=report, analysis=analysis)

        return FixOutcome(
            status=FixStatus.APPLIED,
            message=report,
            analysis=analysis,
            edits=edits,
            new_text=new_text,
        )

    def _plan_edits(self, fn_node, analysis: AnalysisResult, source: str):
        position = body_insertion_point(fn_node)
        if position is None:
            raise MalformedFunctionBodyError(analysis.function_name)
        logger.debug(
            f"Inserting {analysis.need_comment} comment line(s) after "
            f"{position.row + 1}:{position.column}"
        )
        return build_edits(
            position,
            analysis.need_comment,
            self.config,
            eol=detect_eol(source),
            close_line=text_follows(source, position),
        )
