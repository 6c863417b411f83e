"""Version management for the Security Server Admin API.

Provides version information using importlib.metadata with fallback to pyproject.toml.
"""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DISTRIBUTION_NAME = "serverconf-admin-api"


def get_version() -> str:
    """Get the application version.

    Tries to read from installed package metadata first (production/installed mode).
    Falls back to reading from pyproject.toml at the repository root in
    development mode.

    Returns:
        Version string (e.g., "0.1.0")
    """
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        # src/api/infrastructure/version.py -> repository root
        pyproject_path = Path(__file__).resolve().parents[3] / "pyproject.toml"

        with open(pyproject_path, "rb") as f:
            pyproject_data = tomllib.load(f)

        return pyproject_data["project"]["version"]


__version__ = get_version()
