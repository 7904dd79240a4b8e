"""FastAPI main application."""

import logging
from typing import Dict, List, Optional, Tuple

import structlog
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .. import __version__
from ..config import settings
from ..core.exceptions import InvalidParameter
from ..core.grid import BoundingBox
from ..core.random_source import create_random_source
from ..core.terrain_analysis import compute_statistics
from ..core.terrain_synthesizer import SynthesisParameters, TerrainSynthesizer
from ..core.visibility import visibility_report

# Configure logging
logging.basicConfig(format="%(message)s", level=settings.log_level.upper())

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.JSONRenderer()
        if settings.log_format == "json"
        else structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

# Initialize FastAPI app
app = FastAPI(
    title="Terrain Synthesis API",
    description="Multiresolution procedural terrain synthesis",
    version=__version__,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request/Response models
class TerrainRequest(BaseModel):
    """Request to synthesize a terrain."""

    roughness: float = Field(2.0, gt=0, description="Amplitude divisor applied every iteration")
    initial_height: float = Field(0.0, description="Elevation of the initial 3x3 lattice")
    initial_amplitude: float = Field(100.0, ge=0, description="Noise amplitude before decay")
    min_x: float = Field(0.0, description="Western edge")
    max_x: float = Field(100.0, description="Eastern edge")
    min_y: float = Field(0.0, description="Southern edge")
    max_y: float = Field(100.0, description="Northern edge")
    iteration_count: int = Field(5, ge=1, description="Number of refinement iterations")
    seed: Optional[str] = Field(None, description="Random seed for reproducible synthesis")
    backend: Optional[str] = Field(None, description="Random backend: alea or numpy")


class TerrainStatisticsModel(BaseModel):
    """Elevation summary of a terrain."""

    min: float
    max: float
    mean: float
    std: float
    relief: float
    land_fraction: float
    cell_count: int


class TerrainResponse(BaseModel):
    """Synthesized terrain."""

    seed: str
    backend: str
    shape: Tuple[int, int]
    amplitude: float
    x_axis: List[float]
    y_axis: List[float]
    elevation: List[List[float]]
    statistics: TerrainStatisticsModel


class VisibilityRequest(BaseModel):
    """Occlusion samples per target, True meaning occluded."""

    targets: Dict[str, List[bool]]


class VisibilityResult(BaseModel):
    """Visibility of one target."""

    target: str
    percentage: float
    label: str
    samples: int
    message: str


@app.exception_handler(InvalidParameter)
async def invalid_parameter_handler(request: Request, exc: InvalidParameter):
    """Report precondition violations with the offending field."""
    logger.warning("Invalid parameter", path=request.url.path, field=exc.field, error=exc.message)
    return JSONResponse(
        status_code=400, content={"detail": exc.message, "field": exc.field}
    )


# Event handlers
@app.on_event("startup")
async def startup_event():
    logger.info(
        "Starting Terrain Synthesis API",
        max_iterations=settings.max_iterations,
        default_backend=settings.default_backend,
    )


# API endpoints
@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Terrain Synthesis API",
        "version": __version__,
        "status": "running"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "max_iterations": settings.max_iterations}


@app.post("/terrain/synthesize", response_model=TerrainResponse)
def synthesize_terrain(request: TerrainRequest):
    """
    Synthesize a terrain and return its lattice and elevations.

    Synthesis runs inline and grows as 4^iteration_count, so the iteration
    count is capped by ``max_iterations``.
    """
    logger.info("Terrain synthesis requested", request=request.model_dump())

    if request.iteration_count > settings.max_iterations:
        raise HTTPException(
            status_code=400,
            detail=f"iteration_count must be <= {settings.max_iterations}",
        )

    seed = request.seed or settings.default_seed
    backend = request.backend or settings.default_backend

    params = SynthesisParameters(
        roughness=request.roughness,
        initial_height=request.initial_height,
        initial_amplitude=request.initial_amplitude,
        bounding_box=BoundingBox(
            min_x=request.min_x,
            max_x=request.max_x,
            min_y=request.min_y,
            max_y=request.max_y,
        ),
        iteration_count=request.iteration_count,
    )
    rng = create_random_source(seed, backend)
    surface = TerrainSynthesizer(params).synthesize(rng)
    stats = compute_statistics(surface.elevation, params.floor)

    return TerrainResponse(
        seed=seed,
        backend=backend,
        shape=surface.shape,
        amplitude=surface.amplitude,
        x_axis=surface.grid.x_axis.tolist(),
        y_axis=surface.grid.y_axis.tolist(),
        elevation=surface.elevation.tolist(),
        statistics=TerrainStatisticsModel(**stats.to_dict()),
    )


@app.post("/visibility", response_model=List[VisibilityResult])
async def report_visibility(request: VisibilityRequest):
    """Visibility percentage and label for each target."""
    reports = visibility_report(request.targets)
    return [
        VisibilityResult(
            target=str(report.target),
            percentage=report.percentage,
            label=report.label.value,
            samples=report.samples,
            message=report.message,
        )
        for report in reports
    ]


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)
