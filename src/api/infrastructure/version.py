"""Version management for the Client Management API.

Provides version information using importlib.metadata with fallback to pyproject.toml.
"""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path


def get_version() -> str:
    """Get the application version.

    Tries to read from installed package metadata first (production/installed mode).
    Falls back to reading from pyproject.toml in development mode.

    Returns:
        Version string (e.g., "0.1.0")
    """
    try:
        return version("client-management-api")
    except PackageNotFoundError:
        # src/api/infrastructure/version.py -> repository root
        pyproject_path = Path(__file__).resolve().parents[3] / "pyproject.toml"

        with open(pyproject_path, "rb") as f:
            pyproject_data = tomllib.load(f)

        return pyproject_data["project"]["version"]


__version__ = get_version()
