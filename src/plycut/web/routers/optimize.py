"""Cut optimization endpoints."""

from fastapi import APIRouter, Response

from plycut.application.config import load_config_from_dict
from plycut.infrastructure import CutDiagramRenderer, JsonExporter
from plycut.web.dependencies import OptimizeCommandDep
from plycut.web.schemas.requests import OptimizeRequest
from plycut.web.schemas.responses import OptimizeResponseSchema

router = APIRouter(prefix="/optimize", tags=["optimize"])


@router.post("", response_model=OptimizeResponseSchema)
async def optimize(
    request: OptimizeRequest,
    command: OptimizeCommandDep,
) -> OptimizeResponseSchema:
    """Optimize the cut layout for a job.

    Args:
        request: Request containing the job configuration.
        command: Injected OptimizeCutsCommand.

    Returns:
        Sheet layouts, unplaced pieces and suggestions.

    Raises:
        ConfigError: If the job is invalid (handled by exception handler).
    """
    config = load_config_from_dict(request.config)
    output = command.execute(config)

    data = JsonExporter().to_dict(output.result)
    return OptimizeResponseSchema.model_validate(
        {**data, "unit": output.unit.value, "total_pieces": output.total_pieces}
    )


@router.post("/svg")
async def optimize_svg(
    request: OptimizeRequest,
    command: OptimizeCommandDep,
) -> Response:
    """Optimize a job and return the combined SVG cut diagram."""
    config = load_config_from_dict(request.config)
    output = command.execute(config)

    svg = CutDiagramRenderer(unit=output.unit).render_combined_svg(output.result)
    return Response(content=svg, media_type="image/svg+xml")
