# SPDX-License-Identifier: MIT
"""Configuration loading from pyproject.toml.

Projects declare their version requirements under ``[tool.semreq]``:

    [tool.semreq]
    allow-pre = false

    [tool.semreq.requirements]
    archipelago = "~> 0.5"
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .compiler import CompiledRequirement, compile_requirement
from .errors import InvalidRequirementError, InvalidVersionError, SemreqError
from .semver import Version, parse_version

logger = logging.getLogger(__name__)


class ConfigError(SemreqError):
    """Raised when configuration loading fails."""

    pass


@dataclass
class SemreqConfig:
    """Configuration loaded from pyproject.toml.

    Attributes:
        project_dir: Directory containing pyproject.toml
        version: The project's own version from ``[project].version``
        allow_pre: Default pre-release policy for matching
        requirements: Named requirements from ``[tool.semreq.requirements]``
    """

    project_dir: Path
    version: Optional[Version] = None
    allow_pre: bool = True
    requirements: dict[str, CompiledRequirement] = field(default_factory=dict)

    @classmethod
    def from_pyproject(cls, project_dir: str | Path) -> "SemreqConfig":
        """Load configuration from pyproject.toml.

        Args:
            project_dir: Directory containing pyproject.toml

        Returns:
            SemreqConfig instance

        Raises:
            ConfigError: If the file is invalid
            FileNotFoundError: If pyproject.toml doesn't exist
        """
        project_path = Path(project_dir)
        pyproject_path = project_path / "pyproject.toml"

        if not pyproject_path.exists():
            raise FileNotFoundError(f"pyproject.toml not found in {project_path}")

        try:
            with open(pyproject_path, "rb") as f:
                pyproject = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML syntax: {e}") from e

        logger.debug("Loaded configuration from %s", pyproject_path)
        return cls.from_pyproject_dict(pyproject, project_path)

    @classmethod
    def from_pyproject_dict(
        cls,
        pyproject: dict[str, Any],
        project_dir: Path,
    ) -> "SemreqConfig":
        """Create SemreqConfig from a parsed pyproject.toml dictionary.

        Raises:
            ConfigError: If a value has the wrong type or does not parse
        """
        project = pyproject.get("project", {})
        tool_semreq = pyproject.get("tool", {}).get("semreq", {})

        version: Optional[Version] = None
        raw_version = project.get("version")
        if raw_version:
            try:
                version = parse_version(raw_version)
            except InvalidVersionError as e:
                raise ConfigError(f"[project].version: {e}") from e

        allow_pre = tool_semreq.get("allow-pre", True)
        if not isinstance(allow_pre, bool):
            raise ConfigError(f"[tool.semreq].allow-pre must be a boolean, got {allow_pre!r}")

        raw_requirements = tool_semreq.get("requirements", {})
        if not isinstance(raw_requirements, dict):
            raise ConfigError("[tool.semreq.requirements] must be a table")

        requirements: dict[str, CompiledRequirement] = {}
        for name, text in raw_requirements.items():
            if not isinstance(text, str):
                raise ConfigError(f"Requirement {name!r} must be a string, got {text!r}")
            try:
                requirements[name] = compile_requirement(text)
            except InvalidRequirementError as e:
                raise ConfigError(f"Requirement {name!r}: {e}") from e

        return cls(
            project_dir=project_dir,
            version=version,
            allow_pre=allow_pre,
            requirements=requirements,
        )

    def has_pyproject(self) -> bool:
        """Check if pyproject.toml exists in the project directory."""
        return (self.project_dir / "pyproject.toml").exists()


def find_project_root(start_dir: Optional[str | Path] = None) -> Path:
    """Find the project root by looking for pyproject.toml.

    Args:
        start_dir: Directory to start searching from (defaults to cwd)

    Returns:
        Path to the project root directory

    Raises:
        ConfigError: If no project root is found
    """
    current = Path(start_dir) if start_dir else Path.cwd()
    current = current.resolve()

    while current != current.parent:
        if (current / "pyproject.toml").exists():
            return current
        current = current.parent

    raise ConfigError("Could not find project root (no pyproject.toml found)")


def load_config(project_dir: Optional[str | Path] = None) -> SemreqConfig:
    """Load configuration from the project directory.

    Args:
        project_dir: Project directory (defaults to finding project root)

    Returns:
        SemreqConfig instance; defaults when the directory has no pyproject.toml

    Raises:
        ConfigError: If configuration cannot be loaded
    """
    if project_dir is None:
        project_dir = find_project_root()

    project_path = Path(project_dir)

    if (project_path / "pyproject.toml").exists():
        return SemreqConfig.from_pyproject(project_path)

    return SemreqConfig(project_dir=project_path)
