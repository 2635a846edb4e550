"""FastAPI main application."""

import time
import uuid
from typing import List, Optional

import structlog
import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, ValidationError

from .. import __version__
from ..config import get_templates, list_template_sets, settings
from ..core.context import MapOptions
from ..core.errors import MapConfigurationError, MapGenerationError
from ..core.models import Scenario
from ..core.naming import load_province_names
from ..core.scenario import ScenarioGenerator
from ..utils.logging import configure_logging

configure_logging(settings.log_level, settings.log_format)

logger = structlog.get_logger()

# Initialize FastAPI app
app = FastAPI(
    title="Hex Map Scenario API",
    description="Procedural hex-grid province maps with faction starting positions",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request/Response models
class MapGenerationRequest(BaseModel):
    """Request to generate a new scenario."""

    seed: Optional[str] = Field(None, description="Random seed for reproducible generation")
    width: int = Field(settings.default_map_width, ge=8, description="Map width in cells")
    height: int = Field(settings.default_map_height, ge=8, description="Map height in cells")
    radius: int = Field(settings.default_radius, ge=1, le=20, description="Province radius")
    land_fraction: float = Field(
        settings.default_land_fraction, gt=0.0, le=1.0, description="Target share of land"
    )
    template_set: str = Field(settings.template_set, description="Province template set")


class GenerationResponse(BaseModel):
    """A generated scenario with timing information."""

    generation_time_seconds: float
    scenario: Scenario


class TemplateSetSummary(BaseModel):
    """Names of the templates in a set."""

    name: str
    templates: List[str]


# API endpoints
@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Hex Map Scenario API",
        "version": __version__,
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/templates", response_model=List[TemplateSetSummary])
async def list_templates():
    """List the available province template sets."""
    return [
        TemplateSetSummary(name=name, templates=[t.name for t in get_templates(name)])
        for name in list_template_sets()
    ]


@app.post("/maps/generate", response_model=GenerationResponse)
def generate_map(request: MapGenerationRequest):
    """
    Generate a scenario synchronously.

    The same seed and parameters always produce the same scenario.
    """
    logger.info("Map generation requested", request=request.model_dump())

    if request.width > settings.max_map_width or request.height > settings.max_map_height:
        raise HTTPException(
            status_code=400,
            detail=f"Map size is limited to {settings.max_map_width}x{settings.max_map_height}",
        )
    if request.template_set not in list_template_sets():
        raise HTTPException(
            status_code=400, detail=f"Unknown template set: {request.template_set}"
        )

    seed = request.seed or str(uuid.uuid4())[:8]
    try:
        options = MapOptions(
            width=request.width,
            height=request.height,
            radius=request.radius,
            land_fraction=request.land_fraction,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    generator = ScenarioGenerator(
        get_templates(request.template_set),
        load_province_names(settings.province_names_file),
        options,
    )

    start = time.time()
    try:
        scenario = generator.generate(seed)
    except MapConfigurationError as e:
        logger.warning("Map generation rejected", seed=seed, error=str(e))
        raise HTTPException(status_code=400, detail=str(e))
    except MapGenerationError as e:
        logger.error("Map generation failed", seed=seed, error=str(e))
        raise HTTPException(status_code=500, detail=f"Map generation failed: {str(e)}")

    return GenerationResponse(
        generation_time_seconds=round(time.time() - start, 3),
        scenario=scenario,
    )


def run():
    """Serve the API with uvicorn on the configured host and port."""
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    run()
