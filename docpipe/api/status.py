"""Status API: reports whether a job's result is ready.

Run with ``uvicorn docpipe.api.status:app``.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from docpipe.api import health
from docpipe.api.deps import get_status_service
from docpipe.config.settings import Settings
from docpipe.context import AppContext, open_status_context
from docpipe.jobs.exceptions import TransientInfrastructureError
from docpipe.logging.logger import Log
from docpipe.status.service import StatusService

PROCESSING_MESSAGE = "Processing, please retry after some time."

router = APIRouter()


@router.get(
    "/api/status/{job_id}",
    response_class=JSONResponse,
    responses={
        200: {
            "description": "Result found",
            "content": {
                "application/json": {
                    "example": {
                        "id": "123e4567-e89b-12d3-a456-426614174000",
                        "status": "completed",
                        "data": {"result": "some result data", "file_type": "image"},
                    }
                }
            },
        },
        202: {
            "description": "Processing, please retry after some time",
            "content": {"application/json": {"example": {"message": PROCESSING_MESSAGE}}},
        },
        500: {"description": "Result store unavailable"},
    },
)
async def get_status(
    job_id: str,
    status_service: StatusService = Depends(get_status_service),
) -> JSONResponse:
    try:
        status = await status_service.lookup(job_id)
    except TransientInfrastructureError as exc:
        Log.error(f"Status lookup failed for job {job_id}: {exc}")
        raise HTTPException(status_code=500, detail=str(exc)) from exc

    if status.completed:
        return JSONResponse(
            status_code=200,
            content={"id": status.id, "status": "completed", "data": status.data},
        )
    return JSONResponse(
        status_code=202,
        headers={"Retry-After": str(status.retry_after_seconds)},
        content={"message": PROCESSING_MESSAGE},
    )


def create_app(context: AppContext | None = None, settings: Settings | None = None) -> FastAPI:
    """Build the status API. With ``context`` given (tests), no cloud clients are created."""
    settings = settings or (context.settings if context is not None else Settings())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        Log.configure(settings.log_level, "status-api")
        if context is not None:
            yield
        else:
            async with open_status_context(settings) as opened:
                app.state.context = opened
                yield
        Log.info("Status API shut down")

    app = FastAPI(
        title="docpipe status",
        description="API to get processed results",
        lifespan=lifespan,
    )
    if context is not None:
        app.state.context = context
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router)
    app.include_router(health.router)
    return app


app = create_app()
