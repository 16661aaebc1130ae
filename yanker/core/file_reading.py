# yanker/core/file_reading.py

"""
Manifest reading utilities.

This module locates and loads the local Cargo.toml.
"""

import tomllib
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from .constants import MANIFEST_FILE
from .models import CargoManifest
from .exceptions import ManifestLoadError, ManifestNotFoundError


def load_cargo_manifest(path: Optional[Union[str, Path]] = None) -> CargoManifest:
    """
    Load Cargo.toml.

    Args:
        path:
            - None: current directory
            - Path to a Cargo.toml file
            - Directory (Cargo.toml is looked up inside it)

    Returns:
        CargoManifest instance

    Raises:
        ManifestNotFoundError: No Cargo.toml at the given location
        ManifestLoadError: Invalid TOML, or no [package] name

    Example:
        >>> manifest = load_cargo_manifest("path/to/crate")
        >>> print(manifest.package.name)
    """
    if path is None:
        path = Path.cwd()

    path = Path(path)

    if path.is_dir():
        manifest_path = path / MANIFEST_FILE
    else:
        manifest_path = path

    if not manifest_path.is_file():
        raise ManifestNotFoundError(str(path if path.is_dir() else path.parent))

    return _load_from_toml(manifest_path)


def _load_from_toml(path: Path) -> CargoManifest:
    """Load and parse a Cargo.toml file."""
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ManifestLoadError(str(path), str(e))

    if "package" not in data:
        raise ManifestLoadError(str(path), "missing [package] table (workspace roots are not supported)")

    try:
        return CargoManifest(**data)
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(x) for x in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ManifestLoadError(str(path), errors)
