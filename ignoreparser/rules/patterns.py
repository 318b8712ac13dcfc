#!/usr/bin/env python3
r"""Gitignore pattern compilation.

This module turns one gitignore pattern line into a regular-expression
fragment:
- Leading ``/`` anchors the pattern to the rule file's directory (rooted)
- Trailing ``/`` (or a trailing ``/**``) restricts it to directories
- A ``/`` anywhere else in the pattern also roots it
- Bracket expressions (``[a-z]``) are copied through verbatim
- ``?``, ``*`` and ``**`` become separator-aware regex fragments

Every fragment assumes the tested path has been given a leading ``/``.

Example:
    >>> compile_pattern("a/**/b").regex
    '^\\/a(?:\\/|(?:\\/.+\\/))b(?:$|\\/)'
    >>> compile_pattern("e/").directory_only
    True
"""

import re
import warnings
from dataclasses import dataclass
from re import Match, Pattern
from typing import Callable, List, Tuple, Union

from ignoreparser.core.constants import RegexFragment
from ignoreparser.infrastructure.logger import get_logger

# Leading non-bracket text, then one bracket expression. Escaped characters are
# allowed on both sides; an unescaped ``]`` ends the bracket.
RANGE_RE = re.compile(r"^((?:[^\[\\]|(?:\\.))*)\[((?:[^\]\\]|(?:\\.))*)\]")

# Stands in for a bare ``**`` until the single ``*`` rewrite has run.
DOUBLESTAR_PLACEHOLDER = "\x00DOUBLESTAR\x00"

ROOTED_PREFIX = r"^\/"
UNROOTED_PREFIX = r"\/"
DIRECTORY_SUFFIX = r"\/"
ENTRY_SUFFIX = r"(?:$|\/)"


@dataclass(frozen=True)
class Transform:
    """One find/replace step applied to non-bracket pattern text."""

    name: str
    regex: Pattern[str]
    replacement: Union[str, Callable[[Match[str]], str]]
    forces_directory: bool = False


# Applied in order, each globally, to every run of text outside brackets.
TRANSFORMS: Tuple[Transform, ...] = (
    # Drop escapes; the next step re-escapes what needs it.
    Transform("unescape", re.compile(r"\\(.)"), r"\1"),
    Transform(
        "escape_special",
        re.compile(r"[\-\[\]\{\}\(\)\+\.\\\^\$\|]"),
        lambda m: "\\" + m.group(0),
    ),
    Transform("question_mark", re.compile(r"\?"), "[^/]"),
    Transform("slash_doublestar_slash", re.compile(r"/\*\*/"), "(?:/|(?:/.+/))"),
    Transform("leading_doublestar", re.compile(r"^\*\*/"), "(?:|(?:.+/))"),
    # `a/**` matches directory `a` itself and everything below it.
    Transform(
        "trailing_doublestar",
        re.compile(r"/\*\*$"),
        "(?:|(?:/.+))",
        forces_directory=True,
    ),
    Transform("doublestar", re.compile(r"\*\*"), DOUBLESTAR_PLACEHOLDER),
    # `a/*` matches `a/b` and `a/b/` but not `a` or `a/`.
    Transform("slash_star_boundary", re.compile(r"/\*(/|$)"), r"/[^/]+\1"),
    Transform("star", re.compile(r"\*"), "[^/]*"),
    Transform("doublestar_restore", re.compile(re.escape(DOUBLESTAR_PLACEHOLDER)), ".*"),
    Transform("slash", re.compile(r"/"), lambda m: "\\/"),
)


@dataclass(frozen=True)
class CompiledPattern:
    """A gitignore pattern and the regex fragment it compiles to.

    Attributes:
        pattern: The trimmed pattern line (without any ``!`` prefix)
        regex: Regex fragment source, valid for :func:`re.compile`
        rooted: Pattern is anchored to the rule file's directory
        directory_only: Pattern matches only directories and their contents
    """

    pattern: str
    regex: RegexFragment
    rooted: bool
    directory_only: bool


def compile_regex(source: RegexFragment) -> Pattern[str]:
    """Compile a fragment, silencing warnings about POSIX classes like ``[[:space:]]``.

    Bracket contents are copied through verbatim, so a ``[`` inside a bracket
    is matched literally and ``re`` warns that it may become a nested set.
    """
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", FutureWarning)
        return re.compile(source)


def transpile_part(text: str) -> Tuple[RegexFragment, bool]:
    """Run the transform table over text found outside bracket expressions.

    Args:
        text: Raw pattern text without bracket expressions

    Returns:
        Tuple of (regex source, whether a trailing ``/**`` forced directory mode)
    """
    if not text:
        return text, False

    forces_directory = False
    for transform in TRANSFORMS:
        text, count = transform.regex.subn(transform.replacement, text)
        if count and transform.forces_directory:
            forces_directory = True

    return text, forces_directory


def _split_brackets(text: str) -> Tuple[List[Tuple[str, str]], str]:
    """Split text into (prefix, bracket contents) pairs plus the trailing remainder."""
    segments = []
    match = RANGE_RE.match(text)
    while match:
        segments.append((match.group(1), match.group(2)))
        text = text[match.end():]
        match = RANGE_RE.match(text)
    return segments, text


def _assemble(
    text: str, rooted: bool, directory_only: bool, keep_brackets: bool
) -> Tuple[str, bool, bool]:
    body: List[str] = []

    if keep_brackets:
        segments, remainder = _split_brackets(text)
    else:
        segments, remainder = [], text

    for prefix, contents in segments:
        if "/" in prefix:
            rooted = True
        part, forced = transpile_part(prefix)
        directory_only = directory_only or forced
        body.append(part)
        body.append("[" + contents + "]")

    if remainder.strip():
        if "/" in remainder:
            rooted = True
        part, forced = transpile_part(remainder)
        directory_only = directory_only or forced
        body.append(part)

    regex = (
        (ROOTED_PREFIX if rooted else UNROOTED_PREFIX)
        + "".join(body)
        + (DIRECTORY_SUFFIX if directory_only else ENTRY_SUFFIX)
    )
    return regex, rooted, directory_only


def compile_pattern(pattern: str) -> CompiledPattern:
    """Compile one gitignore pattern into a regex fragment.

    Malformed input never raises: a bracket expression the regex engine
    rejects (``[z-a]``, ``[]``) is retried as literal text.

    Args:
        pattern: A trimmed, non-empty, non-comment pattern line

    Returns:
        The compiled pattern
    """
    text = pattern
    rooted = directory_only = False

    if text.startswith("/"):
        rooted = True
        text = text[1:]

    if text.endswith("/"):
        directory_only = True
        text = text[:-1]

    regex, is_rooted, is_directory = _assemble(text, rooted, directory_only, keep_brackets=True)
    try:
        compile_regex(regex)
    except re.error as e:
        get_logger().warning(
            "Invalid bracket expression, matching it literally", pattern=pattern, error=e
        )
        regex, is_rooted, is_directory = _assemble(
            text, rooted, directory_only, keep_brackets=False
        )

    return CompiledPattern(
        pattern=pattern,
        regex=regex,
        rooted=is_rooted,
        directory_only=is_directory,
    )
