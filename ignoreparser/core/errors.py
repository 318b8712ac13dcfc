"""
IgnoreParser Core: Exceptions.

Compilation and matching never raise; these exceptions cover the edges of the
package: locating directories to scan, configuration and command-line input.
Failures reading a rule file are not wrapped and reach the caller unchanged.
"""
from ignoreparser.core.constants import ErrorCode


class IgnoreParserError(Exception):
    """Base exception for IgnoreParser errors."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        """Initialize IgnoreParserError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class DirectoryNotFoundError(IgnoreParserError):
    """Raised when a directory to scan cannot be determined or does not exist."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.NOT_FOUND)
