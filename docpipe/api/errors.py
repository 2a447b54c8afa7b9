from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from docpipe.jobs.exceptions import (
    BlobAlreadyExistsError,
    IngressValidationError,
    OrphanBlobError,
    TransientInfrastructureError,
)
from docpipe.logging.logger import Log


async def _ingress_validation_error(request: Request, exc: IngressValidationError) -> JSONResponse:
    Log.info(f"Rejected upload on {request.url.path}: {exc}")
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})


async def _orphan_blob_error(request: Request, exc: OrphanBlobError) -> JSONResponse:
    Log.error(f"Orphan blob {exc.blob_name} for job {exc.job_id}")
    return JSONResponse(
        status_code=503,
        content={"detail": "Job could not be queued, please retry the upload."},
    )


async def _blob_exists_error(request: Request, exc: Exception) -> JSONResponse:
    Log.error(f"Overwrite guard tripped on {request.url.path}: {exc}")
    return JSONResponse(status_code=409, content={"detail": str(exc)})


async def _transient_error(request: Request, exc: Exception) -> JSONResponse:
    Log.error(f"Infrastructure error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=503,
        content={"detail": "Storage temporarily unavailable, please retry."},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(IngressValidationError, _ingress_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(OrphanBlobError, _orphan_blob_error)  # type: ignore[arg-type]
    app.add_exception_handler(BlobAlreadyExistsError, _blob_exists_error)
    app.add_exception_handler(TransientInfrastructureError, _transient_error)
