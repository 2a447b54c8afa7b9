from fastapi import Depends, Request

from docpipe.context import AppContext
from docpipe.ingress.service import IngressService
from docpipe.status.service import StatusService


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_ingress_service(context: AppContext = Depends(get_context)) -> IngressService:
    return IngressService(
        blob_store=context.require_blob_store(),
        queue_sender=context.require_queue_sender(),
        results_base_url=context.settings.processed_base_url,
        max_upload_bytes=context.settings.max_upload_bytes,
    )


def get_status_service(context: AppContext = Depends(get_context)) -> StatusService:
    return StatusService(
        result_store=context.require_result_store(),
        retry_after_seconds=context.settings.retry_after_seconds,
    )
