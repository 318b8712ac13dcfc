"""IgnoreParser Rules System.

This module compiles gitignore rules and evaluates paths against them:
- compile_pattern: one pattern line to a regex fragment
- classify: rule text to ignore / re-include lines
- build_matcher: lines to merged and individual regexes
- GitignoreMatcher: accepts / denies / inspects verdicts
"""

from .classifier import ClassifiedRules, classify, split_lines
from .diagnostics import LoggingObserver, MismatchObserver, MismatchReport, render_report
from .engine import (
    GitignoreMatcher,
    filter_directory,
    filter_directory_from_file,
    normalize_path,
    parse,
)
from .matcher import EMPTY_MATCHER, MATCH_NOTHING, CompiledRule, Matcher, RuleMatch, build_matcher
from .patterns import (
    TRANSFORMS,
    CompiledPattern,
    Transform,
    compile_pattern,
    compile_regex,
    transpile_part,
)

__all__ = [
    # Pattern compilation
    "Transform",
    "TRANSFORMS",
    "CompiledPattern",
    "compile_pattern",
    "compile_regex",
    "transpile_part",
    # Classification
    "ClassifiedRules",
    "classify",
    "split_lines",
    # Matchers
    "CompiledRule",
    "RuleMatch",
    "Matcher",
    "MATCH_NOTHING",
    "EMPTY_MATCHER",
    "build_matcher",
    # Decision engine
    "GitignoreMatcher",
    "normalize_path",
    "parse",
    "filter_directory",
    "filter_directory_from_file",
    # Diagnostics
    "MismatchReport",
    "MismatchObserver",
    "LoggingObserver",
    "render_report",
]
