#!/usr/bin/env python3
"""Compiled matchers for one rule polarity.

A :class:`Matcher` holds a merged regex (an alternation of every rule, used for
fast yes/no checks) and the individual compiled rules, index-aligned with the
sorted pattern list, used to measure match lengths.

Example:
    >>> matcher = build_matcher(["b", "/a"])
    >>> matcher.merged.pattern
    '(?:^\\\\/a(?:$|\\\\/))|(?:\\\\/b(?:$|\\\\/))'
    >>> matcher.matches("/x/b")
    True
"""

import re
from dataclasses import dataclass
from re import Pattern
from typing import Iterable, Optional, Tuple

from ignoreparser.rules.patterns import CompiledPattern, compile_pattern, compile_regex

# Never matches anything, not even the empty string.
MATCH_NOTHING: Pattern[str] = re.compile(r"(?!)")


@dataclass(frozen=True)
class CompiledRule:
    """A compiled pattern paired with its regex object."""

    pattern: CompiledPattern
    regex: Pattern[str]

    @property
    def source(self) -> str:
        """Original pattern line."""
        return self.pattern.pattern


@dataclass(frozen=True)
class RuleMatch:
    """Where a single rule matched a path."""

    rule: CompiledRule
    start: int
    text: str

    @property
    def length(self) -> int:
        return len(self.text)


@dataclass(frozen=True)
class Matcher:
    """Merged and individual regexes for one rule polarity."""

    merged: Pattern[str]
    rules: Tuple[CompiledRule, ...] = ()

    @property
    def individual(self) -> Tuple[Pattern[str], ...]:
        """Compiled regexes in sorted pattern order."""
        return tuple(rule.regex for rule in self.rules)

    def matches(self, path: str) -> bool:
        """Check whether any rule matches the normalized path."""
        return self.merged.search(path) is not None

    def longest_match(self, path: str) -> Optional[RuleMatch]:
        """Find the rule with the longest match against the normalized path.

        Each rule contributes its leftmost match. On equal lengths the rule
        that sorts first wins.

        Args:
            path: Normalized path (leading ``/``)

        Returns:
            The winning match, or None when no rule matches with non-zero length
        """
        best: Optional[RuleMatch] = None
        for rule in self.rules:
            m = rule.regex.search(path)
            if m is None or not m.group(0):
                continue
            if best is None or best.length < len(m.group(0)):
                best = RuleMatch(rule=rule, start=m.start(), text=m.group(0))
        return best

    def __len__(self) -> int:
        return len(self.rules)

    def __bool__(self) -> bool:
        return bool(self.rules)


EMPTY_MATCHER = Matcher(merged=MATCH_NOTHING)


def build_matcher(lines: Iterable[str]) -> Matcher:
    """Compile a list of pattern lines into a matcher.

    Lines are sorted by code point first, so identical rule text always
    produces identical regex sources.

    Args:
        lines: Pattern lines of a single polarity

    Returns:
        Matcher for the lines (EMPTY_MATCHER when there are none)
    """
    ordered = sorted(lines)
    if not ordered:
        return EMPTY_MATCHER

    compiled = [compile_pattern(line) for line in ordered]
    merged = compile_regex("|".join(f"(?:{c.regex})" for c in compiled))
    rules = tuple(CompiledRule(pattern=c, regex=compile_regex(c.regex)) for c in compiled)

    return Matcher(merged=merged, rules=rules)
