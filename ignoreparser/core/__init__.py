"""IgnoreParser Core - constants and exceptions shared by every layer."""

from ignoreparser.core import constants
from ignoreparser.core.errors import DirectoryNotFoundError, IgnoreParserError

__all__ = [
    "constants",
    "IgnoreParserError",
    "DirectoryNotFoundError",
]
