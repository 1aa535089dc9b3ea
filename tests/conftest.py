# SPDX-License-Identifier: MIT
"""Pytest configuration and fixtures for semreq tests."""

from __future__ import annotations

from pathlib import Path
from typing import Generator

import pytest
from click.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_project(tmp_path: Path) -> Generator[Path, None, None]:
    """Create a temporary project directory with pyproject.toml."""
    project_dir = tmp_path / "test_project"
    project_dir.mkdir()

    pyproject = project_dir / "pyproject.toml"
    pyproject.write_text(
        """[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "test-game"
version = "0.5.2"
description = "Test project"

[tool.semreq]
allow-pre = false

[tool.semreq.requirements]
archipelago = "~> 0.5"
client = ">= 0.4.0 and < 0.6.0 or == 1.0.0"
"""
    )

    yield project_dir


@pytest.fixture
def empty_project(tmp_path: Path) -> Path:
    """Create a project directory with a minimal pyproject.toml."""
    project_dir = tmp_path / "empty_project"
    project_dir.mkdir()
    (project_dir / "pyproject.toml").write_text('[project]\nname = "empty"\n')
    return project_dir
