"""Utility helpers shared by the client and the CLI."""
from __future__ import annotations

import logging
import os
from pathlib import Path

from .errors import FileOperationError


def setup_logging(level: int = logging.INFO) -> None:
    """Configure global logging style for CLI use.

    ``GEMINI_DEBUG`` in the environment forces DEBUG.

    Args:
        level: Logging level passed to ``logging.basicConfig``.
    """

    if os.getenv("GEMINI_DEBUG"):
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="[%(levelname)s] %(message)s",
    )


def ensure_dir(path: Path) -> None:
    """Create directory if missing.

    Args:
        path: Directory path to create.

    Raises:
        FileOperationError: If the directory cannot be created.
    """

    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FileOperationError(f"Could not create directory: {path}", {"output_dir": str(path)}) from exc


def prompts_root() -> Path:
    """Return base directory for prompt files (env NANO_BANANA_PROMPT_DIR overrides)."""

    return Path(os.getenv("NANO_BANANA_PROMPT_DIR", "prompts"))
