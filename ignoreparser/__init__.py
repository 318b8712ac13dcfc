"""IgnoreParser - gitignore rule matching.

Compiles gitignore rules into regular expressions and decides whether paths
are kept or ignored, including ``!`` re-include rules.
"""

from ignoreparser.core.constants import IGNOREPARSER_VERSION
from ignoreparser.core.errors import DirectoryNotFoundError, IgnoreParserError
from ignoreparser.rules import (
    GitignoreMatcher,
    MismatchReport,
    compile_pattern,
    filter_directory,
    filter_directory_from_file,
    parse,
)

__version__ = IGNOREPARSER_VERSION

__all__ = [
    "GitignoreMatcher",
    "MismatchReport",
    "compile_pattern",
    "parse",
    "filter_directory",
    "filter_directory_from_file",
    "IgnoreParserError",
    "DirectoryNotFoundError",
    "__version__",
]
