"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class RectangleSchema(BaseModel):
    """Axis-aligned rectangle on a sheet."""

    x: float
    y: float
    width: float
    height: float


class PieceSchema(BaseModel):
    """Piece as requested."""

    id: str = Field(..., description="Unique piece identifier")
    label: str = Field(..., description="Part name")
    group: str = Field(default="", description="Furniture item the part belongs to")
    color: str = Field(..., description="Fill colour for diagrams")
    width: float = Field(..., description="Requested width")
    height: float = Field(..., description="Requested height")


class PlacementSchema(PieceSchema):
    """Piece placed on a sheet."""

    x: float = Field(..., description="Left edge position")
    y: float = Field(..., description="Top edge position")
    placed_width: float = Field(..., description="Width after rotation")
    placed_height: float = Field(..., description="Height after rotation")
    rotated: bool = Field(..., description="Whether the piece was turned 90 degrees")


class UnplacedSchema(PieceSchema):
    """Piece that could not be placed."""

    reason: str = Field(..., description="Why the piece was not placed")


class SheetLayoutSchema(BaseModel):
    """Layout of a single sheet."""

    index: int = Field(..., description="Zero-based sheet index")
    used_area: float
    waste_percentage: float
    total_free_area: float
    largest_free: RectangleSchema
    pieces: list[PlacementSchema] = Field(default_factory=list)
    free_rectangles: list[RectangleSchema] = Field(default_factory=list)


class SummarySchema(BaseModel):
    """Totals across all sheets."""

    total_sheets: int
    pieces_placed: int
    pieces_unplaced: int
    used_area: float
    waste_percentage: float
    theoretical_min_sheets: int


class SuggestionSchema(BaseModel):
    """Advisory hint about the layout."""

    type: str
    sheet: int
    message: str


class SheetSizeSchema(BaseModel):
    """Stock sheet dimensions."""

    width: float
    height: float


class OptimizeResponseSchema(BaseModel):
    """Response for cut optimization."""

    unit: str = Field(..., description="Display unit of the job")
    total_pieces: int = Field(..., description="Pieces the job expanded to")
    sheet: SheetSizeSchema
    summary: SummarySchema
    sheets: list[SheetLayoutSchema] = Field(default_factory=list)
    unplaced: list[UnplacedSchema] = Field(default_factory=list)
    suggestions: list[SuggestionSchema] = Field(default_factory=list)


class CutSchema(BaseModel):
    """Part of a preset."""

    name: str
    width: float
    height: float
    quantity: int


class PresetListItemSchema(BaseModel):
    """Preset listing entry."""

    key: str = Field(..., description="Preset key")
    name: str = Field(..., description="Furniture name")
    description: str = Field(..., description="Preset description")
    builtin: bool = Field(..., description="Whether the preset is bundled")
    piece_count: int = Field(..., description="Pieces per furniture item")


class PresetListSchema(BaseModel):
    """Response for listing presets."""

    presets: list[PresetListItemSchema]


class PresetContentSchema(BaseModel):
    """Response for a single preset."""

    key: str
    name: str
    builtin: bool
    cuts: list[CutSchema]


class ErrorResponseSchema(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error type identifier")
    details: list[dict[str, Any]] | dict[str, Any] | None = Field(
        default=None, description="Additional error details"
    )
