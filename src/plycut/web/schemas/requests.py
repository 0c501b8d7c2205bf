"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class OptimizeRequest(BaseModel):
    """Request for optimizing a cut job."""

    config: dict[str, Any] = Field(..., description="Full job configuration JSON")
