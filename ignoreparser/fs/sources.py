#!/usr/bin/env python3
"""Reading rule files and listing directory trees.

These are the filesystem collaborators of the rule engine:
- read_rules: decode a rule file with a given encoding
- list_files: flat, sorted listing of a tree as relative POSIX paths
- default_directory: the directory a rule file applies to

Example:
    >>> content = read_rules("/srv/repo/.gitignore")
    >>> list_files("/srv/repo")[:3]
    ['/', '.gitignore', 'README.md']
"""

import os
from pathlib import Path
from typing import List, Union

from ignoreparser.core.constants import DEFAULT_ENCODING
from ignoreparser.core.errors import DirectoryNotFoundError
from ignoreparser.infrastructure.logger import get_logger

BYTE_ORDER_MARK = "\ufeff"


def read_rules(path: Union[str, Path], encoding: str = DEFAULT_ENCODING) -> str:
    """Read the text of a rule file.

    Read and decode errors (``OSError``, ``UnicodeDecodeError``,
    ``LookupError`` for unknown codecs) propagate to the caller.

    Args:
        path: Path to the rule file
        encoding: Text encoding of the file

    Returns:
        File content without a leading byte order mark
    """
    path = Path(path)
    get_logger().debug("Reading rule file", path=str(path), encoding=encoding)

    content = path.read_text(encoding=encoding)
    if content.startswith(BYTE_ORDER_MARK):
        content = content[len(BYTE_ORDER_MARK):]
    return content


def list_files(directory: Union[str, Path], include_directories: bool = False) -> List[str]:
    """List every entry below a directory as relative POSIX paths.

    The listing starts with ``/`` for the directory itself. Files follow in
    walk order with sorted names; subdirectories are listed with a trailing
    ``/`` only when ``include_directories`` is set.

    Args:
        directory: Directory to walk
        include_directories: Also list subdirectories (``dir/``)

    Returns:
        Relative paths, root included as ``/``

    Raises:
        DirectoryNotFoundError: If directory does not exist
    """
    root = Path(directory)
    if not root.is_dir():
        raise DirectoryNotFoundError(f"Directory not found: {directory}")

    entries = ["/"]
    for current, dirnames, filenames in os.walk(root):
        dirnames.sort()
        relative = Path(current).relative_to(root)

        if include_directories and relative != Path("."):
            entries.append(relative.as_posix() + "/")

        for name in sorted(filenames):
            entries.append((relative / name).as_posix())

    get_logger().debug("Listed directory", directory=str(root), entries=len(entries))
    return entries


def default_directory(rule_path: Union[str, Path]) -> Path:
    """Return the directory a rule file applies to: its parent.

    Args:
        rule_path: Path to the rule file

    Returns:
        Absolute path of the parent directory

    Raises:
        DirectoryNotFoundError: If the rule path has no parent directory
    """
    path = Path(rule_path).expanduser().resolve()
    parent = path.parent

    if parent == path or not parent.is_dir():
        raise DirectoryNotFoundError(f'Couldn\'t find the parent directory for "{rule_path}"')

    return parent
