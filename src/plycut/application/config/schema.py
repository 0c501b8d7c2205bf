"""Pydantic models for cut job configuration files.

A job lists the stock sheet and the furniture to build; each furniture item
is either an explicit list of cuts or a reference to a preset.
"""

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from plycut.domain.value_objects import Unit

# Version 1.0: Initial job schema (sheet, furniture, presets)
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})


class SheetConfigSchema(BaseModel):
    """Stock sheet configuration.

    Attributes:
        width: Sheet width (default 2440, an 8' plywood sheet in mm).
        height: Sheet height (default 1220).
        quantity: Number of sheets available (default 5).
        kerf: Saw blade width reserved between cuts (default 0).
    """

    model_config = ConfigDict(extra="forbid")

    width: float = Field(default=2440.0, gt=0, description="Sheet width")
    height: float = Field(default=1220.0, gt=0, description="Sheet height")
    quantity: int = Field(
        default=5, ge=1, le=100, description="Number of sheets available"
    )
    kerf: float = Field(default=0.0, ge=0, description="Saw blade width")


class CutConfig(BaseModel):
    """A single part of a furniture item.

    Attributes:
        name: Part name shown on diagrams.
        width: Part width.
        height: Part height.
        quantity: Copies of the part per furniture item.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(default="Part", min_length=1, description="Part name")
    width: float = Field(..., gt=0, description="Part width")
    height: float = Field(..., gt=0, description="Part height")
    quantity: int = Field(default=1, ge=1, le=1000, description="Copies per item")


class FurnitureConfig(BaseModel):
    """A furniture item built from cuts or from a named preset.

    Attributes:
        name: Display name; defaults to the preset's name or "Custom".
        quantity: Number of copies of the item to build.
        preset: Preset key to take cuts from.
        cuts: Explicit cuts; used instead of the preset's when given.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, description="Furniture name")
    quantity: int = Field(default=1, ge=1, le=100, description="Number of copies")
    preset: str | None = Field(default=None, description="Preset key")
    cuts: list[CutConfig] = Field(default_factory=list, description="Parts to cut")

    @model_validator(mode="after")
    def validate_cuts_or_preset(self) -> "FurnitureConfig":
        """Require either explicit cuts or a preset."""
        if not self.cuts and self.preset is None:
            raise ValueError("Furniture needs either 'cuts' or a 'preset'")
        return self


class PresetConfig(BaseModel):
    """A reusable furniture template.

    Attributes:
        name: Display name of the furniture.
        cuts: Parts making up one item.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1, description="Furniture name")
    cuts: list[CutConfig] = Field(..., min_length=1, description="Parts to cut")


class JobConfiguration(BaseModel):
    """Root configuration model for a cut job.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0")
        unit: Display unit for all dimensions
        sheet: Stock sheet configuration
        furniture: Furniture items to cut

    Example:
        >>> config = JobConfiguration(
        ...     schema_version="1.0",
        ...     furniture=[FurnitureConfig(preset="chair")],
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default="1.0", pattern=r"^\d+\.\d+$")
    unit: Unit = Field(default=Unit.MM, description="Display unit")
    sheet: SheetConfigSchema = Field(default_factory=SheetConfigSchema)
    furniture: list[FurnitureConfig] = Field(default_factory=list)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Validate that schema version is supported.

        Newer minor versions of a supported major version are accepted.
        """
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )
