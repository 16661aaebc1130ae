# yanker/core/constants.py

import importlib.metadata
import pathlib
import sys
import tomllib

PACKAGE_NAME = "yanker"
REGISTRY_URL = "https://crates.io"
MANIFEST_FILE = "Cargo.toml"
DEFAULT_CARGO_COMMAND = "cargo"
DEFAULT_HTTP_TIMEOUT = 30.0


def get_package_version() -> str:
    """Return the installed version of yanker, or the one in pyproject.toml."""
    # 1. Installed distribution
    try:
        return importlib.metadata.version(PACKAGE_NAME)
    except importlib.metadata.PackageNotFoundError:
        pass

    # 2. Source checkout: yanker/core/constants.py -> project root
    project_root = pathlib.Path(__file__).parent.parent.parent
    pyproject_path = project_root / "pyproject.toml"

    if pyproject_path.exists():
        try:
            with open(pyproject_path, "rb") as f:
                pyproject_data = tomllib.load(f)
            return pyproject_data.get("project", {}).get("version", "unknown")
        except (OSError, tomllib.TOMLDecodeError) as e:
            print(f"Warning: Could not read version from pyproject.toml: {e}", file=sys.stderr)
            return "unknown"

    return "unknown"


def get_user_agent() -> str:
    """User agent sent to the registry, e.g. 'yanker/0.1.0'."""
    return f"{PACKAGE_NAME}/{get_package_version()}"
