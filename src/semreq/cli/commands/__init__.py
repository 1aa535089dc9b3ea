# SPDX-License-Identifier: MIT
"""CLI command implementations."""

from . import requirement, version

__all__ = ["requirement", "version"]
