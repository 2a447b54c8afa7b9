"""Processing API: accepts uploads and hands them to the worker via the queue.

Run with ``uvicorn docpipe.api.processing:app``.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI, File, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from docpipe.api import health
from docpipe.api.deps import get_ingress_service
from docpipe.api.errors import register_exception_handlers
from docpipe.config.settings import Settings
from docpipe.context import AppContext, open_processing_context
from docpipe.ingress.service import IngressService
from docpipe.logging.logger import Log

router = APIRouter()


@router.post(
    "/api/process",
    response_class=JSONResponse,
    status_code=202,
    responses={
        202: {
            "description": "Accepted and processing",
            "content": {
                "application/json": {
                    "example": {
                        "id": "123e4567-e89b-12d3-a456-426614174000",
                        "results_url": "https://example.com/api/status/123e4567-e89b-12d3-a456-426614174000",
                        "file_type": "image",
                    }
                }
            },
        },
        400: {"description": "Unsupported media type or empty file"},
        413: {"description": "File too large"},
        503: {"description": "Storage or queue unavailable"},
    },
)
async def process_file(
    file: UploadFile = File(...),
    ingress: IngressService = Depends(get_ingress_service),
) -> JSONResponse:
    ingress.check_size(file.size)
    data = await file.read()
    submitted = await ingress.submit(data, file.content_type, file.filename)
    return JSONResponse(
        status_code=202,
        content={
            "id": submitted.id,
            "results_url": submitted.results_url,
            "file_type": submitted.file_type.value,
        },
    )


def create_app(context: AppContext | None = None, settings: Settings | None = None) -> FastAPI:
    """Build the processing API.

    With ``context`` given (tests), no cloud clients are created.
    """
    settings = settings or (context.settings if context is not None else Settings())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        Log.configure(settings.log_level, "processing-api")
        if context is not None:
            yield
        else:
            async with open_processing_context(settings) as opened:
                app.state.context = opened
                yield
        Log.info("Processing API shut down")

    app = FastAPI(
        title="docpipe processing",
        description="API to submit images and PDFs for AI processing",
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
    register_exception_handlers(app)
    app.include_router(router)
    app.include_router(health.router)
    return app


app = create_app()
