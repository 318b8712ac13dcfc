"""
IgnoreParser Core: Constants and Error Codes

This module provides package-wide constants, error codes, and the defaults
shared by the rule loader, the configuration layer and the CLI.
"""
from enum import IntEnum
from typing import Tuple, TypeAlias

# Version information
IGNOREPARSER_VERSION = "1.0.0"


class ErrorCode(IntEnum):
    """Standardized error codes for IgnoreParser operations."""

    SUCCESS = 0  # Operation completed successfully
    INVALID_INPUT = 1  # Bad argument, invalid configuration
    NOT_FOUND = 2  # File or directory doesn't exist
    INTERNAL_ERROR = 6  # Bug in IgnoreParser


# Type aliases for clarity
RulePath: TypeAlias = str
NormalizedPath: TypeAlias = str
RegexFragment: TypeAlias = str

# Rule file handling
DEFAULT_RULE_FILE = ".gitignore"
DEFAULT_ENCODING = "utf-8"
LINE_BREAKS: Tuple[str, ...] = ("\r\n", "\r", "\n")
COMMENT_PREFIX = "#"
NEGATION_PREFIX = "!"

# Every compiled fragment assumes tested paths start with this separator
PATH_SEPARATOR = "/"

# Environment variables overriding configuration (IGNOREPARSER_SECTION_KEY=value)
ENV_PREFIX = "IGNOREPARSER_"
