import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

from docpipe.jobs.exceptions import (
    EmptyUploadError,
    OrphanBlobError,
    TransientInfrastructureError,
    UploadTooLargeError,
)
from docpipe.jobs.media_types import blob_name_for, normalize_media_type, resolve_media_type
from docpipe.jobs.models import FileType, Job
from docpipe.logging.logger import Log
from docpipe.queue.base import BaseQueueSender
from docpipe.storage.base import BaseBlobStore


@dataclass(frozen=True)
class SubmittedJob:
    id: str
    results_url: str
    file_type: FileType


class IngressService:
    """Accepts an upload: validate -> write blob -> publish job envelope.

    The blob write always completes before the publish. A publish failure
    leaves the blob orphaned; it is reported, not cleaned up.
    """

    def __init__(
        self,
        blob_store: BaseBlobStore,
        queue_sender: BaseQueueSender,
        results_base_url: str,
        max_upload_bytes: int,
    ) -> None:
        self._blob_store = blob_store
        self._queue_sender = queue_sender
        self._results_base_url = results_base_url.rstrip("/")
        self._max_upload_bytes = max_upload_bytes

    def check_size(self, size: int | None) -> None:
        """Reject a payload above the upload limit. Unknown sizes (None) pass."""
        if size is not None and size > self._max_upload_bytes:
            raise UploadTooLargeError(
                f"Uploaded file is {size} bytes, limit is {self._max_upload_bytes}"
            )

    async def submit(
        self,
        data: bytes,
        content_type: str | None,
        original_filename: str | None = None,
    ) -> SubmittedJob:
        """Store the payload and enqueue a processing job for it.

        Raises:
            IngressValidationError: if the upload is rejected; nothing is stored.
            BlobAlreadyExistsError, TransientInfrastructureError: if the blob write fails.
            OrphanBlobError: if the blob was written but publishing failed.
        """
        file_type, extension = resolve_media_type(content_type)
        if not data:
            raise EmptyUploadError("Uploaded file is empty")
        self.check_size(len(data))

        job_id = str(uuid.uuid4())
        job = Job(
            id=job_id,
            blob_name=blob_name_for(job_id, extension),
            file_type=file_type,
            original_filename=original_filename or "",
            file_size_bytes=len(data),
            timestamp=datetime.now(timezone.utc).isoformat(),
            content_type=normalize_media_type(content_type),
        )

        await self._blob_store.upload(
            job.blob_name, data, content_type=job.content_type, overwrite=False
        )
        Log.info(f"Stored {job.file_size_bytes} bytes as {job.blob_name}")

        try:
            await self._queue_sender.publish(job)
        except TransientInfrastructureError as exc:
            Log.error(f"Job {job.id} could not be enqueued, blob {job.blob_name} is orphaned")
            raise OrphanBlobError(job.id, job.blob_name, exc) from exc

        Log.info(f"Job {job.id} accepted ({job.file_type.value})")
        return SubmittedJob(
            id=job.id,
            results_url=f"{self._results_base_url}/{job.id}",
            file_type=file_type,
        )
