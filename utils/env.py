from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv

"""Environment helper utilities.

Loads a `.env` file from the project root so that settings such as
``OPENAI_API_KEY`` or ``ASSISTANT_MODEL`` become available via ``os.getenv``
before `config.AssistantConfig.from_env` reads them.
"""

__all__ = ["load_project_dotenv"]


def _find_project_root(start: Path | None = None) -> Path:
    """Walk upwards until a directory containing `pyproject.toml` is found."""
    current = start or Path(__file__).resolve().parent
    for _ in range(10):
        if (current / "pyproject.toml").exists():
            return current
        if current.parent == current:
            break
        current = current.parent
    return Path(__file__).resolve().parent


def load_project_dotenv(start: Path | None = None) -> Path | None:
    """Load the project-level `.env` without overriding variables already set.

    Returns the path that was loaded, or None when there is no `.env` file.
    """
    project_root = _find_project_root(start)
    dotenv_path = project_root / ".env"
    if not dotenv_path.exists():
        return None
    load_dotenv(dotenv_path=dotenv_path, override=False)
    return dotenv_path
