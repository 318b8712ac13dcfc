#!/usr/bin/env python3
"""Tests for the gitignore decision engine.

This module tests:
- accepts / denies / inspects on a sample rule file
- Longest-match precedence between ignore and re-include rules
- Path normalization
- Batch and directory helpers
"""
import threading
from pathlib import Path
from unittest.mock import patch

import pytest

from ignoreparser.core.errors import DirectoryNotFoundError
from ignoreparser.rules.engine import (
    GitignoreMatcher,
    filter_directory,
    filter_directory_from_file,
    normalize_path,
    parse,
)


@pytest.fixture
def matcher(gitignore_fixture) -> GitignoreMatcher:
    return GitignoreMatcher(gitignore_fixture)


@pytest.fixture
def no_negatives(gitignore_no_negatives) -> GitignoreMatcher:
    return GitignoreMatcher(gitignore_no_negatives)


class TestNormalizePath:
    """Tests for path normalization."""

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("a/b", "/a/b"),
            ("/a/b", "/a/b"),
            ("a\\b\\c", "/a/b/c"),
            ("\\a", "/a"),
            ("", "/"),
            ("dir/", "/dir/"),
        ],
    )
    def test_normalize(self, path, expected):
        """Backslashes become slashes and a leading slash is added."""
        assert normalize_path(path) == expected


class TestParse:
    """Tests for parse()."""

    def test_returns_both_polarities(self, gitignore_fixture):
        """parse() compiles ignore and re-include matchers."""
        positives, negatives = parse(gitignore_fixture)

        assert len(positives) == 6
        assert len(negatives) == 1
        assert negatives.merged.pattern == r"(?:^\/nonexistent\/foo(?:$|\/))"

    def test_empty_content(self):
        """Empty content accepts everything and inspects nothing."""
        matcher = GitignoreMatcher("")

        assert matcher.accepts("anything")
        assert not matcher.denies("anything")
        assert not matcher.inspects("anything")
        assert matcher.positives.individual == ()
        assert matcher.negatives.individual == ()


class TestFixtureVerdicts:
    """Verdicts for the sample rule file."""

    @pytest.mark.parametrize(
        "path", ["test/index.js", "wat/test/index.js", "lib", "node_modules.json"]
    )
    def test_accepted(self, matcher, path):
        """Paths no ignore rule touches are kept."""
        assert matcher.accepts(path)
        assert not matcher.denies(path)

    @pytest.mark.parametrize(
        "path",
        [
            "test.swp",
            "foo/test.swp",
            "node_modules/wat.js",
            "foo/bar.wat",
            "debug.log",
            "deep/dir/trace.log",
            "baz",
            "nonexistent",
            "nonexistent/bar",
        ],
    )
    def test_denied(self, matcher, path):
        """Paths matched only by ignore rules are ignored."""
        assert matcher.denies(path)
        assert not matcher.accepts(path)

    @pytest.mark.parametrize("path", ["nonexistent/foo", "nonexistent/foo/wat"])
    def test_reincluded(self, matcher, path):
        """A longer re-include match overrides the ignore rule."""
        assert matcher.accepts(path)
        assert not matcher.denies(path)

    def test_nested_wat_not_matched(self, matcher):
        """/foo/*.wat only matches directly inside foo."""
        assert matcher.accepts("foo/sub/bar.wat")

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("lib", False),
            ("test/index.js", False),
            ("baz", True),
            ("baz/wat/foo", True),
            ("nonexistent/wat", True),
            ("nonexistent/foo", True),
        ],
    )
    def test_inspects(self, matcher, path, expected):
        """inspects() reports whether any rule matches."""
        assert matcher.inspects(path) is expected

    def test_no_negatives(self, no_negatives):
        """Without re-include rules nonexistent/foo stays ignored."""
        assert no_negatives.denies("nonexistent/foo")
        assert no_negatives.accepts("node_modules.json")
        assert no_negatives.denies("node_modules/wat.js")

    def test_leading_slash_optional(self, matcher):
        """Paths with and without a leading slash get the same verdict."""
        for path in ["test.swp", "foo/bar.wat", "nonexistent/foo", "lib"]:
            assert matcher.accepts(path) == matcher.accepts("/" + path)

    def test_backslash_paths(self, matcher):
        """Windows-style separators are normalized."""
        assert matcher.denies("foo\\bar.wat")
        assert matcher.accepts("nonexistent\\foo")


class TestPrecedence:
    """Tests for longest-match precedence."""

    @pytest.mark.parametrize("content", ["keep\n!keep/deep\n", "!keep/deep\nkeep\n"])
    def test_longer_reinclude_wins_in_any_order(self, content):
        """Rule order inside the file does not change the verdict."""
        matcher = GitignoreMatcher(content)

        assert matcher.accepts("keep/deep/file")
        assert matcher.denies("keep/other")

    def test_reincluded_child_of_ignored_directory(self):
        """A re-included entry inside an ignored directory is kept."""
        matcher = GitignoreMatcher("node_modules\n!node_modules/keep\n")

        assert matcher.denies("node_modules/keep") is False
        assert matcher.accepts("node_modules/keep") is True
        assert matcher.denies("node_modules/other") is True
        assert matcher.accepts("node_modules/other") is False

    def test_longer_ignore_wins(self):
        """A longer ignore match beats a shorter re-include match."""
        matcher = GitignoreMatcher("!*.txt\nbuild/**/*.txt\n")

        assert matcher.denies("build/x/notes.txt")
        assert matcher.accepts("docs/notes.txt")

    def test_tie_favours_acceptance(self):
        """Equal-length matches keep the path."""
        matcher = GitignoreMatcher("foo\n!foo\n")

        assert matcher.accepts("foo") is True
        assert matcher.denies("foo") is False

    def test_directory_only_rules(self):
        """Directory-only rules need the trailing slash on the directory itself."""
        matcher = GitignoreMatcher("build/\n")

        assert matcher.denies("build/")
        assert matcher.denies("build/out.o")
        assert matcher.accepts("build")

    @pytest.mark.parametrize(
        "rules,path",
        [
            ("/ajax/libs/bPopup/*b*", "/ajax/libs/bPopup/0.9.0"),
            ("/ajax/libs/jquery-form-validator/2.2", "/ajax/libs/jquery-form-validator/2.2.43"),
            ("/ajax/libs/punycode/2.0", "/ajax/libs/punycode/2.0.0"),
            ("/ajax/libs/typescript/*dev*", "/ajax/libs/typescript/2.0.6-insiders.20161014"),
        ],
    )
    def test_near_misses_are_accepted(self, rules, path):
        """Rules that only share a prefix with the path do not match it."""
        assert GitignoreMatcher(rules).accepts(path)

    @pytest.mark.parametrize(
        "rules,path",
        [
            ("node-modules", "packages/my-package/node-modules"),
            ("node-modules", "node-modules/a"),
            ("foo.txt", "a/foo.txt"),
        ],
    )
    def test_unrooted_rules_match_at_depth(self, rules, path):
        """Rules without a slash match in any directory."""
        assert GitignoreMatcher(rules).denies(path)

    def test_accepts_is_complement_of_denies(self, matcher):
        """accepts() and denies() never agree."""
        paths = ["a", "baz", "nonexistent/foo", "x.log", "foo/a.wat", "foo/", ""]
        for path in paths:
            assert matcher.accepts(path) != matcher.denies(path)


class TestBatchHelpers:
    """Tests for list and directory helpers."""

    def test_accepted_and_denied_preserve_order(self, matcher):
        """Filtering keeps the input order."""
        paths = ["a.log", "src/app.js", "b.swp", "README.md"]

        assert matcher.accepted(paths) == ["src/app.js", "README.md"]
        assert matcher.denied(paths) == ["a.log", "b.swp"]

    def test_split(self, matcher):
        """split() partitions paths into kept and ignored."""
        accepted, denied = matcher.split(["baz", "lib", "nonexistent/foo"])

        assert accepted == ["lib", "nonexistent/foo"]
        assert denied == ["baz"]

    def test_split_evaluates_each_path_once(self, matcher):
        """split() decides each path with a single accepts() call."""
        with patch.object(matcher, "denies") as denies:
            accepted, denied = matcher.split(["a.log", "README.md"])

        denies.assert_not_called()
        assert accepted == ["README.md"]
        assert denied == ["a.log"]

    def test_accepted_in_with_custom_lister(self, matcher):
        """A lister callable replaces the filesystem walk."""
        listed = []

        def lister(directory: Path):
            listed.append(directory)
            return ["/", "a.log", "src/main.py"]

        assert matcher.accepted_in("/repo", lister=lister) == ["/", "src/main.py"]
        assert matcher.denied_in("/repo", lister=lister) == ["a.log"]
        assert listed == [Path("/repo"), Path("/repo")]

    def test_filter_directory(self, project_dir):
        """filter_directory() applies rule text to a real tree."""
        content = (project_dir / ".gitignore").read_text()

        accepted, denied = filter_directory(content, project_dir)

        assert accepted == ["/", ".gitignore", "README.md", "build/keep.txt", "src/main.py"]
        assert denied == ["debug.log", "build/out.o", "src/trace.log"]

    def test_filter_directory_from_file(self, project_dir):
        """The rule file's directory is scanned by default."""
        accepted, denied = filter_directory_from_file(project_dir / ".gitignore")

        assert "build/keep.txt" in accepted
        assert denied == ["debug.log", "build/out.o", "src/trace.log"]

    def test_filter_directory_from_file_explicit_directory(self, project_dir):
        """An explicit directory overrides the rule file's parent."""
        rule_file = project_dir / "rules.txt"
        rule_file.write_text("*.py\n")

        accepted, denied = filter_directory_from_file(rule_file, directory=project_dir / "src")

        assert accepted == ["/", "trace.log"]
        assert denied == ["main.py"]

    def test_missing_parent_directory(self, temp_dir):
        """A rule path without a parent directory fails before reading."""
        with pytest.raises(DirectoryNotFoundError) as exc_info:
            filter_directory_from_file(temp_dir / "missing" / ".gitignore")

        assert "Couldn't find the parent directory" in str(exc_info.value)

    def test_from_file(self, test_data_dir):
        """from_file() reads and compiles a rule file."""
        matcher = GitignoreMatcher.from_file(test_data_dir / "gitignore-fixture")

        assert matcher.accepts("nonexistent/foo")
        assert matcher.denies("nonexistent/bar")

    def test_from_file_missing(self, temp_dir):
        """Read errors propagate unchanged."""
        with pytest.raises(FileNotFoundError):
            GitignoreMatcher.from_file(temp_dir / "absent")


class TestConcurrency:
    """Tests for concurrent queries."""

    def test_concurrent_queries(self, matcher):
        """One matcher answers queries from many threads."""
        errors = []

        def worker():
            for _ in range(200):
                if not (matcher.denies("foo/bar.wat") and matcher.accepts("nonexistent/foo")):
                    errors.append("wrong verdict")

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
