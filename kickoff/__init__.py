"""
kickoff package

This package implements the Node.js project kickoff generator as a CLI.

Key responsibilities are split across modules:
- `command.py`: run external executables (git, npm) and report progress
- `renderer.py`: render the declared template files into the new project
- `answers.py`: interactive questions, training preset overlay
- `generator.py`: stage orchestration (init -> prompt -> clone -> write -> install -> lint -> commit)
- `cli.py`: CLI entrypoint and terminal error reporting
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
