"""Lightweight in-repo task runner for the stylesheet build.

Provides a task registry, a per-file stream runner and a Typer CLI.
Implementation is minimal; the transformation work lives in `stages`.
"""

from .core import TaskSpec, TaskRegistry  # re-export for convenience
from .stream import FilePipeline, FileResult, StageError

__all__ = ["TaskSpec", "TaskRegistry", "FilePipeline", "FileResult", "StageError"]
