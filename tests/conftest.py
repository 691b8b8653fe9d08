"""Pytest configuration and shared fixtures for the segdiff test suite."""

import os
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=50)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests - full pipeline tests")
    config.addinivalue_line("markers", "fuzzing: Property-based tests using Hypothesis")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def isolated_config_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run a test in an empty directory with no discoverable configuration.

    Yields
    ------
    Path
        The working directory, which is also used as the home directory.

    """
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.setenv("HOME", str(workdir))
    monkeypatch.delenv("SEGDIFF_CONFIG", raising=False)
    return workdir


@pytest.fixture
def edited_document() -> tuple[str, str]:
    """Provide two versions of a short document with a move, an edit and an addition.

    Returns
    -------
    tuple of str
        Old and new text.

    """
    old = (
        "# Release notes\n"
        "The parser now handles nested lists.\n"
        "Fixed a crash when reading empty files.\n"
        "Thanks to all contributors.\n"
    )
    new = (
        "# Release notes\n"
        "Fixed a crash when reading empty files.\n"
        "The parser now handles deeply nested lists.\n"
        "Added a --quiet flag.\n"
        "Thanks to all contributors.\n"
    )
    return old, new
