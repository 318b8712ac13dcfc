"""IgnoreParser filesystem helpers.

Rule file reading and directory listing used around the rule engine.
"""

from .sources import default_directory, list_files, read_rules

__all__ = [
    "read_rules",
    "list_files",
    "default_directory",
]
