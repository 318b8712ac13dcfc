#!/usr/bin/env python3
"""Diagnostics for queries whose result differs from the caller's expectation.

Queries accept an optional ``expected`` verdict. When it disagrees with the
computed verdict the matcher builds a :class:`MismatchReport` and hands it to
its observer. Observers never influence the verdict.

Example:
    >>> from ignoreparser import GitignoreMatcher
    >>> class Recorder:
    ...     def __init__(self):
    ...         self.reports = []
    ...     def on_expected_match_fail(self, report):
    ...         self.reports.append(report)
    >>> recorder = Recorder()
    >>> matcher = GitignoreMatcher("node_modules", observer=recorder)
    >>> matcher.accepts("node_modules", expected=True)
    False
    >>> recorder.reports[0].combine
    '(Accept || !Deny)'
"""

from dataclasses import dataclass
from typing import Optional, Protocol

import jinja2

from ignoreparser.infrastructure.logger import Logger, get_logger
from ignoreparser.rules.matcher import RuleMatch

ACCEPTS_FORMULA = "(Accept || !Deny)"
DENIES_FORMULA = "(!Accept && Deny)"
INSPECTS_FORMULA = "(Accept || Deny)"

REPORT_TEMPLATE = """\
'{{ report.query }}': {
    'query': '{{ report.query }}',
    'input': '{{ report.path }}',
    'expected': '{{ report.expected }}',
    'acceptRe': '{{ report.accept_pattern }}',
    'acceptTest': '{{ report.accept_hit }}',
    'acceptMatch': '{{ evidence(report.accept_match) }}',
    'denyRe': '{{ report.deny_pattern }}',
    'denyTest': '{{ report.deny_hit }}',
    'denyMatch': '{{ evidence(report.deny_match) }}',
    'combine': '{{ report.combine }}',
    'returnVal': '{{ report.result }}'
}"""


@dataclass(frozen=True)
class MismatchReport:
    """Everything that went into a verdict the caller did not expect.

    Attributes:
        query: "accepts", "denies" or "inspects"
        path: Normalized path that was tested
        expected: Verdict the caller expected
        accept_pattern: Merged regex source of the re-include rules
        accept_hit: Whether the merged re-include regex matched
        accept_match: Longest re-include match, when both polarities matched
        deny_pattern: Merged regex source of the ignore rules
        deny_hit: Whether the merged ignore regex matched
        deny_match: Longest ignore match, when both polarities matched
        combine: Boolean formula used to combine the two hits
        result: Verdict actually returned
    """

    query: str
    path: str
    expected: bool
    accept_pattern: str
    accept_hit: bool
    accept_match: Optional[RuleMatch]
    deny_pattern: str
    deny_hit: bool
    deny_match: Optional[RuleMatch]
    combine: str
    result: bool


class MismatchObserver(Protocol):
    """Receives reports for queries that returned an unexpected verdict."""

    def on_expected_match_fail(self, report: MismatchReport) -> None:
        ...


def _format_evidence(match: Optional[RuleMatch]) -> str:
    if match is None:
        return ""
    return f"{match.text} (rule {match.rule.source!r} at {match.start})"


_environment = jinja2.Environment(autoescape=False, undefined=jinja2.StrictUndefined)
_environment.globals["evidence"] = _format_evidence
_report_template = _environment.from_string(REPORT_TEMPLATE)


def render_report(report: MismatchReport) -> str:
    """Render a mismatch report as a readable block of text."""
    return _report_template.render(report=report)


class LoggingObserver:
    """Default observer: logs the rendered report at WARNING level."""

    def __init__(self, logger: Optional[Logger] = None):
        self._logger = logger

    def on_expected_match_fail(self, report: MismatchReport) -> None:
        logger = self._logger or get_logger()
        logger.warning(
            "Unexpected gitignore verdict\n" + render_report(report),
            query=report.query,
            path=report.path,
        )
