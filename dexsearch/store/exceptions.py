from typing import Optional


class LoadError(Exception):
    """Raised when the dataset cannot be turned into entity records."""

    def __init__(
        self,
        message: str,
        source: str = "<bytes>",
        line: Optional[int] = None,
        column: Optional[str] = None,
        cause: Exception = None,
    ):
        location = source if line is None else f"{source}:{line}"
        super().__init__(f"{location}: {message}")
        self.message = message
        self.source = source
        self.line = line
        self.column = column
        self.cause = cause


class MalformedDataError(LoadError):
    """Raised for unparseable bytes, missing columns or badly typed values."""


class EmptyFieldError(LoadError):
    """Raised when a required field such as the name is empty."""
