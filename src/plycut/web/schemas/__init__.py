"""Pydantic schemas for the REST API."""

from plycut.web.schemas.requests import OptimizeRequest
from plycut.web.schemas.responses import (
    CutSchema,
    ErrorResponseSchema,
    OptimizeResponseSchema,
    PieceSchema,
    PlacementSchema,
    PresetContentSchema,
    PresetListItemSchema,
    PresetListSchema,
    RectangleSchema,
    SheetLayoutSchema,
    SheetSizeSchema,
    SuggestionSchema,
    SummarySchema,
    UnplacedSchema,
)

__all__ = [
    # Requests
    "OptimizeRequest",
    # Responses
    "CutSchema",
    "ErrorResponseSchema",
    "OptimizeResponseSchema",
    "PieceSchema",
    "PlacementSchema",
    "PresetContentSchema",
    "PresetListItemSchema",
    "PresetListSchema",
    "RectangleSchema",
    "SheetLayoutSchema",
    "SheetSizeSchema",
    "SuggestionSchema",
    "SummarySchema",
    "UnplacedSchema",
]
