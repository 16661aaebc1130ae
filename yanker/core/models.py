# yanker/core/models.py

"""
Data models for yanker.

Two documents are modelled here: the local Cargo.toml (only the parts
yanker reads) and the crates.io versions payload.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import (
    BaseModel,
    Field,
    field_validator,
    ConfigDict,
)

# ==============================================================
# CARGO MANIFEST
# ==============================================================

class CargoPackage(BaseModel):
    """The [package] table of Cargo.toml."""
    model_config = ConfigDict(extra="ignore")

    name: str = Field(
        ...,
        min_length=1,
        max_length=64,
        pattern=r"^[A-Za-z0-9_-]+$",
        description="Crate name as published on the registry"
    )

    # May be a string or {workspace = true}; only shown to the user
    version: Optional[str] = Field(
        default=None,
        description="Local crate version"
    )

    @field_validator("version", mode="before")
    @classmethod
    def validate_version(cls, v):
        """Drop inherited (workspace) versions, keep plain strings."""
        return v if isinstance(v, str) else None

class CargoManifest(BaseModel):
    """Cargo.toml, reduced to what yanker needs."""
    model_config = ConfigDict(extra="ignore")

    package: CargoPackage

# ==============================================================
# REGISTRY PAYLOAD
# ==============================================================

class CrateVersion(BaseModel):
    """One published version as listed by the registry."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    crate_name: str = Field(..., alias="crate", description="Crate name")
    version: str = Field(..., alias="num", description="Version string")
    yanked: bool = Field(..., description="Whether the version is already yanked")

class VersionsResponse(BaseModel):
    """Body of GET /api/v1/crates/<name>/versions."""
    model_config = ConfigDict(extra="ignore")

    versions: List[CrateVersion]
