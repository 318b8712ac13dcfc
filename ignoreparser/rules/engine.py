#!/usr/bin/env python3
"""Gitignore decision engine.

This module answers whether a path is kept or ignored by a set of gitignore
rules:
- Ignore rules and ``!`` re-include rules compile into two matchers
- A path untouched by every rule is accepted
- When rules of both polarities match, the longer individual match wins
  and ties go to acceptance
- Batch and directory-scoped helpers apply the same verdicts to many paths

Longest-match precedence approximates git's "last matching rule wins" well for
the common shapes (a broad ignore plus a narrower re-include) but does not
reproduce git's resolution literally. Rule order inside a file has no effect.

Example:
    >>> matcher = GitignoreMatcher("node_modules\\n!node_modules/keep\\n")
    >>> matcher.denies("node_modules/other")
    True
    >>> matcher.accepts("node_modules/keep")
    True
"""

from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

from ignoreparser.core.constants import DEFAULT_ENCODING, PATH_SEPARATOR, NormalizedPath, RulePath
from ignoreparser.fs.sources import default_directory, list_files, read_rules
from ignoreparser.infrastructure.logger import get_logger
from ignoreparser.rules.classifier import classify
from ignoreparser.rules.diagnostics import (
    ACCEPTS_FORMULA,
    DENIES_FORMULA,
    INSPECTS_FORMULA,
    LoggingObserver,
    MismatchObserver,
    MismatchReport,
)
from ignoreparser.rules.matcher import Matcher, RuleMatch, build_matcher

DirectoryLister = Callable[[Path], Sequence[str]]


def normalize_path(path: str) -> NormalizedPath:
    """Convert backslashes to ``/`` and make sure the path starts with ``/``."""
    path = path.replace("\\", PATH_SEPARATOR)
    if not path.startswith(PATH_SEPARATOR):
        path = PATH_SEPARATOR + path
    return path


def _match_length(match: Optional[RuleMatch]) -> int:
    return match.length if match else 0


def parse(content: str) -> Tuple[Matcher, Matcher]:
    """Compile gitignore content into (ignore, re-include) matchers.

    Args:
        content: Rule file text

    Returns:
        Tuple of (positives, negatives)
    """
    rules = classify(content)
    return build_matcher(rules.positives), build_matcher(rules.negatives)


class GitignoreMatcher:
    """Immutable verdicts for one set of gitignore rules.

    Paths are POSIX-style and relative to the rule file's directory; a leading
    ``/`` is optional. Directories must carry a trailing ``/`` for
    directory-only rules (``build/``) to match them. Instances hold no mutable
    state and may be queried from any number of threads.
    """

    def __init__(self, content: str, observer: Optional[MismatchObserver] = None):
        """Compile rule text.

        Args:
            content: Rule file text
            observer: Receives reports for queries whose ``expected`` verdict
                was wrong (default: log them)
        """
        self._positives, self._negatives = parse(content)
        self._observer = observer

        get_logger().debug(
            "Compiled gitignore rules",
            positives=len(self._positives),
            negatives=len(self._negatives),
        )

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        encoding: str = DEFAULT_ENCODING,
        observer: Optional[MismatchObserver] = None,
    ) -> "GitignoreMatcher":
        """Compile the rules of a rule file.

        Args:
            path: Path to the rule file
            encoding: Text encoding of the file
            observer: Optional mismatch observer

        Returns:
            Matcher for the file's rules
        """
        return cls(read_rules(path, encoding), observer=observer)

    @property
    def positives(self) -> Matcher:
        """Matcher for ignore rules."""
        return self._positives

    @property
    def negatives(self) -> Matcher:
        """Matcher for ``!`` re-include rules."""
        return self._negatives

    def _longest_matches(self, path: str) -> Tuple[Optional[RuleMatch], Optional[RuleMatch]]:
        # The merged alternation cannot tell which rule matched, so every
        # individual regex is measured instead.
        return self._negatives.longest_match(path), self._positives.longest_match(path)

    def accepts(self, path: str, expected: Optional[bool] = None) -> bool:
        """Check whether a path is kept (not ignored).

        Args:
            path: File or directory path (directories with trailing ``/``)
            expected: Optional expected verdict, reported when it differs

        Returns:
            True when the path passes the rules
        """
        path = normalize_path(path)
        accept_hit = self._negatives.matches(path)
        deny_hit = self._positives.matches(path)
        result = accept_hit or not deny_hit

        accept_match = deny_match = None
        if accept_hit and deny_hit:
            accept_match, deny_match = self._longest_matches(path)
            result = _match_length(accept_match) >= _match_length(deny_match)

        if expected is not None and expected != result:
            self._diagnose(
                "accepts", path, expected, accept_hit, accept_match, deny_hit, deny_match,
                ACCEPTS_FORMULA, result,
            )
        return result

    def denies(self, path: str, expected: Optional[bool] = None) -> bool:
        """Check whether a path is ignored.

        Always the complement of :meth:`accepts`.

        Args:
            path: File or directory path (directories with trailing ``/``)
            expected: Optional expected verdict, reported when it differs

        Returns:
            True when the path is ignored by the rules
        """
        path = normalize_path(path)
        accept_hit = self._negatives.matches(path)
        deny_hit = self._positives.matches(path)
        result = not accept_hit and deny_hit

        accept_match = deny_match = None
        if accept_hit and deny_hit:
            accept_match, deny_match = self._longest_matches(path)
            result = _match_length(accept_match) < _match_length(deny_match)

        if expected is not None and expected != result:
            self._diagnose(
                "denies", path, expected, accept_hit, accept_match, deny_hit, deny_match,
                DENIES_FORMULA, result,
            )
        return result

    def inspects(self, path: str, expected: Optional[bool] = None) -> bool:
        """Check whether any rule, of either polarity, matches a path.

        Useful when stacking nested rule files: a child rule set should only
        override its parent's verdict for paths it inspects.

        Args:
            path: File or directory path (directories with trailing ``/``)
            expected: Optional expected verdict, reported when it differs

        Returns:
            True when at least one rule matches the path
        """
        path = normalize_path(path)
        accept_hit = self._negatives.matches(path)
        deny_hit = self._positives.matches(path)
        result = accept_hit or deny_hit

        if expected is not None and expected != result:
            self._diagnose(
                "inspects", path, expected, accept_hit, None, deny_hit, None,
                INSPECTS_FORMULA, result,
            )
        return result

    def accepted(self, paths: Iterable[str]) -> List[str]:
        """Filter paths down to the ones that are kept, preserving order."""
        return [path for path in paths if self.accepts(path)]

    def denied(self, paths: Iterable[str]) -> List[str]:
        """Filter paths down to the ones that are ignored, preserving order."""
        return [path for path in paths if self.denies(path)]

    def accepted_in(
        self, directory: Union[str, Path], lister: DirectoryLister = list_files
    ) -> List[str]:
        """List a directory and keep the entries that are accepted.

        Args:
            directory: Directory to list
            lister: Returns relative paths for a directory, root as ``/``

        Returns:
            Accepted relative paths
        """
        return self.accepted(lister(Path(directory)))

    def denied_in(
        self, directory: Union[str, Path], lister: DirectoryLister = list_files
    ) -> List[str]:
        """List a directory and keep the entries that are ignored.

        Args:
            directory: Directory to list
            lister: Returns relative paths for a directory, root as ``/``

        Returns:
            Denied relative paths
        """
        return self.denied(lister(Path(directory)))

    def split(self, paths: Iterable[str]) -> Tuple[List[str], List[str]]:
        """Partition paths into (accepted, denied) lists."""
        accepted: List[str] = []
        denied: List[str] = []
        for path in paths:
            if self.accepts(path):
                accepted.append(path)
            else:
                denied.append(path)
        return accepted, denied

    def _diagnose(
        self,
        query: str,
        path: str,
        expected: bool,
        accept_hit: bool,
        accept_match: Optional[RuleMatch],
        deny_hit: bool,
        deny_match: Optional[RuleMatch],
        combine: str,
        result: bool,
    ) -> None:
        report = MismatchReport(
            query=query,
            path=path,
            expected=expected,
            accept_pattern=self._negatives.merged.pattern,
            accept_hit=accept_hit,
            accept_match=accept_match,
            deny_pattern=self._positives.merged.pattern,
            deny_hit=deny_hit,
            deny_match=deny_match,
            combine=combine,
            result=result,
        )
        observer = self._observer or LoggingObserver()
        observer.on_expected_match_fail(report)


def filter_directory(
    content: str,
    directory: Union[str, Path],
    lister: DirectoryLister = list_files,
) -> Tuple[List[str], List[str]]:
    """Apply gitignore content to every entry of a directory tree.

    Args:
        content: Rule file text
        directory: Directory to list
        lister: Directory listing capability

    Returns:
        Tuple of (accepted, denied) relative paths
    """
    matcher = GitignoreMatcher(content)
    return matcher.split(lister(Path(directory)))


def filter_directory_from_file(
    rule_path: Union[RulePath, Path],
    encoding: str = DEFAULT_ENCODING,
    directory: Optional[Union[str, Path]] = None,
    lister: DirectoryLister = list_files,
) -> Tuple[List[str], List[str]]:
    """Apply a rule file to a directory tree.

    Args:
        rule_path: Path to the rule file
        encoding: Text encoding of the rule file
        directory: Directory to list (default: the rule file's directory)
        lister: Directory listing capability

    Returns:
        Tuple of (accepted, denied) relative paths

    Raises:
        DirectoryNotFoundError: If no directory is given and the rule path
            has no parent directory
    """
    scan_root = Path(directory) if directory is not None else default_directory(rule_path)

    matcher = GitignoreMatcher.from_file(rule_path, encoding)
    with get_logger().add_context(rule_file=str(rule_path)):
        get_logger().debug("Filtering directory", directory=str(scan_root))
        return matcher.split(lister(scan_root))
