"""FastAPI application entrypoint for cvufgen service mode."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Callable, Dict, List, Optional

from fastapi import Body, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from ..config import load_config
from ..logging import configure_logging, get_logger
from ..orchestrator import Orchestrator

FAILURE_MESSAGE = "Failed to generate microapp"


class TemplateMatchModel(BaseModel):
    templateId: Optional[str] = None
    score: int = 0


class WarningModel(BaseModel):
    field: str
    message: str
    severity: str = "warning"


class GenerationMeta(BaseModel):
    requestId: str
    generationTimeMs: int
    templateMatch: TemplateMatchModel
    warnings: List[WarningModel] = Field(default_factory=list)


class GenerationResponse(BaseModel):
    """Response body keyed by the forms runtime integration IDs."""

    model_config = ConfigDict(populate_by_name=True)

    generatedCVUF: str
    generatedDependencies: str
    generatedSetupGuide: str
    generatedPitchPoints: str
    generatedBuildTime: str
    meta: GenerationMeta = Field(alias="_meta")


class ErrorResponse(BaseModel):
    error: str
    details: str


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator(load_config())


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing the generation endpoint.

    The orchestrator is built once at startup and shared by every request so
    that pending collaborator deliveries can be drained on shutdown. If it
    cannot be built, each request retries and reports the error as a 500.
    """
    logger = get_logger("service")
    build_lock = asyncio.Lock()

    async def get_orchestrator(app: FastAPI) -> Orchestrator:
        async with build_lock:
            orchestrator = getattr(app.state, "orchestrator", None)
            if orchestrator is None:
                orchestrator = orchestrator_factory()
                app.state.orchestrator = orchestrator
            return orchestrator

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            await get_orchestrator(app)
        except Exception as exc:
            logger.error("Failed to build orchestrator at startup: %s", exc)
        yield
        orchestrator = getattr(app.state, "orchestrator", None)
        if orchestrator is not None:
            await orchestrator.drain()

    app = FastAPI(title="CVUF Generator Service", version="1.0.0", lifespan=lifespan)

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post(
        "/api/generate-microapp",
        response_model=GenerationResponse,
        responses={500: {"model": ErrorResponse}},
    )
    async def generate_microapp(request: Request, payload: Dict[str, Any] = Body(...)) -> Any:
        try:
            orchestrator = await get_orchestrator(request.app)
            result = await orchestrator.generate(payload)
        except Exception as exc:
            logger.error("Generation request failed: %s", exc)
            return JSONResponse(
                status_code=500,
                content={"error": FAILURE_MESSAGE, "details": str(exc)},
            )
        return GenerationResponse.model_validate(result.to_response())

    return app


def run_service(
    host: str = "0.0.0.0",
    port: int = 8000,
    *,
    verbose: bool = False,
    log_file: Path | None = None,
) -> None:  # pragma: no cover - integration path
    import uvicorn

    configure_logging(verbose=verbose, log_file=log_file)
    app = create_app()
    uvicorn.run(app, host=host, port=port)
