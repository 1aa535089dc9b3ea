# SPDX-License-Identifier: MIT
"""Command line interface for semreq."""

from .main import cli, main

__all__ = ["cli", "main"]
