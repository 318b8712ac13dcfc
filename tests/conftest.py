"""Shared pytest fixtures for IgnoreParser tests."""
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Generator
from unittest.mock import MagicMock

import pytest
import yaml

from ignoreparser.infrastructure.logger import set_global_logger


@pytest.fixture(scope="session")
def test_data_dir() -> Path:
    """Path to test data directory."""
    return Path(__file__).parent / "data"


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(scope="session")
def gitignore_fixture(test_data_dir: Path) -> str:
    """Rule text with a re-include rule."""
    return (test_data_dir / "gitignore-fixture").read_text(encoding="utf-8")


@pytest.fixture(scope="session")
def gitignore_no_negatives(test_data_dir: Path) -> str:
    """Rule text without re-include rules."""
    return (test_data_dir / "gitignore-no-negatives").read_text(encoding="utf-8")


@pytest.fixture
def project_dir(temp_dir: Path) -> Path:
    """Create a small project tree with a .gitignore."""
    project = temp_dir / "project"
    project.mkdir()

    (project / ".gitignore").write_text("*.log\nbuild/\n!build/keep.txt\n")
    (project / "README.md").write_text("# Project")
    (project / "debug.log").write_text("log line")

    (project / "src").mkdir()
    (project / "src" / "main.py").write_text("print('main')")
    (project / "src" / "trace.log").write_text("trace")

    (project / "build").mkdir()
    (project / "build" / "out.o").write_text("binary")
    (project / "build" / "keep.txt").write_text("keep me")

    return project


@pytest.fixture
def sample_config() -> Dict[str, Any]:
    """Provide a sample IgnoreParser configuration."""
    return {
        "ignoreparser": {
            "rules": {
                "file": ".gitignore",
                "encoding": "utf-8",
            },
            "scan": {
                "include_directories": True,
            },
            "logging": {
                "level": "DEBUG",
                "file": None,
            },
        }
    }


@pytest.fixture
def config_file(temp_dir: Path, sample_config: Dict[str, Any]) -> Path:
    """Create a configuration file."""
    config_path = temp_dir / "ignoreparser.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config, f)
    return config_path


@pytest.fixture
def observer() -> MagicMock:
    """Mismatch observer recording every report."""
    return MagicMock()


@pytest.fixture
def mock_logger(reset_singletons) -> MagicMock:
    """Install a mock as the global logger."""
    logger = MagicMock()
    logger.name = "ignoreparser"
    set_global_logger(logger)
    return logger


@pytest.fixture(autouse=True)
def reset_singletons(monkeypatch):
    """Reset the global logger and IGNOREPARSER_ environment between tests."""
    for key in list(os.environ):
        if key.startswith("IGNOREPARSER_"):
            monkeypatch.delenv(key)

    set_global_logger(None)
    yield
    set_global_logger(None)
