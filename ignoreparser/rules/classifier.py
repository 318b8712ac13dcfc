#!/usr/bin/env python3
"""Splitting gitignore content into ignore and re-include rules.

Blank lines and ``#`` comments are dropped; a leading ``!`` marks a
re-include (negative) rule. Lines are not validated here.

Example:
    >>> classify("# deps\\nnode_modules\\n!node_modules/keep\\n")
    ClassifiedRules(positives=('node_modules',), negatives=('node_modules/keep',))
"""

import re
from dataclasses import dataclass
from typing import List, Tuple

from ignoreparser.core.constants import COMMENT_PREFIX, LINE_BREAKS, NEGATION_PREFIX

LINE_BREAK_RE = re.compile("|".join(re.escape(brk) for brk in LINE_BREAKS))


@dataclass(frozen=True)
class ClassifiedRules:
    """Rule lines in file order, split by polarity."""

    positives: Tuple[str, ...]  # ignore rules
    negatives: Tuple[str, ...]  # re-include rules, `!` stripped


def split_lines(content: str) -> List[str]:
    """Split content on ``\\r\\n``, ``\\r`` or ``\\n`` and trim every line."""
    return [line.strip() for line in LINE_BREAK_RE.split(content)]


def classify(content: str) -> ClassifiedRules:
    """Classify rule lines into ignore and re-include lists.

    Args:
        content: Full text of a rule file

    Returns:
        Ordered positive and negative pattern lines
    """
    positives: List[str] = []
    negatives: List[str] = []

    for line in split_lines(content):
        if not line or line.startswith(COMMENT_PREFIX):
            continue

        if line.startswith(NEGATION_PREFIX):
            negatives.append(line[len(NEGATION_PREFIX):])
        else:
            positives.append(line)

    return ClassifiedRules(positives=tuple(positives), negatives=tuple(negatives))
