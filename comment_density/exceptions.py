"""
Custom exception hierarchy for the comment_density package.

Each failure mode of the fix-function command has its own type so the
analyzer can absorb it into a specific outcome instead of a generic string.
"""


class CommentDensityError(Exception):
    """Base exception for all comment_density errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.details = details or {}


class NoActiveContextError(CommentDensityError):
    """No document or cursor is available to analyze."""

    def __init__(self, reason: str = "no active document"):
        super().__init__(
            f"No active context: {reason}",
            details={"reason": reason}
        )


class CursorOutsideFunctionError(CommentDensityError):
    """The cursor line is not inside any function definition."""

    def __init__(self, line: int):
        super().__init__(
            f"Cursor line {line + 1} is not inside a function",
            details={"line": line}
        )


class MalformedFunctionBodyError(CommentDensityError):
    """The function body or its opening brace could not be found."""

    def __init__(self, function_name: str = "", reason: str = "no opening brace"):
        super().__init__(
            f"Cannot locate insertion point in function '{function_name}': {reason}",
            details={"function_name": function_name, "reason": reason}
        )


class InvalidConfigurationError(CommentDensityError):
    """A configuration value is out of range or cannot be parsed."""

    def __init__(self, field: str, value, reason: str):
        super().__init__(
            f"Invalid configuration for '{field}' ({value!r}): {reason}",
            details={"field": field, "value": value, "reason": reason}
        )


class ParserUnavailableError(CommentDensityError):
    """The tree-sitter C grammar could not be loaded."""

    def __init__(self, reason: str = "Unknown"):
        super().__init__(
            f"C parser unavailable: {reason}. Install tree-sitter and tree-sitter-c.",
            details={"reason": reason}
        )


class EditApplicationError(CommentDensityError):
    """An edit batch does not fit the document it is applied to."""

    def __init__(self, row: int, column: int, reason: str):
        super().__init__(
            f"Cannot apply edit at {row + 1}:{column}: {reason}",
            details={"row": row, "column": column, "reason": reason}
        )
