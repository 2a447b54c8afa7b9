from datetime import datetime, timezone
from enum import Enum

from docpipe.extractors.registry import ExtractorRegistry
from docpipe.jobs.envelope import parse_envelope
from docpipe.jobs.exceptions import MalformedEnvelopeError, PoisonMessageError
from docpipe.jobs.models import Job
from docpipe.logging.logger import Log
from docpipe.queue.base import BaseQueueReceiver
from docpipe.queue.models import QueueMessage
from docpipe.results.base import BaseResultStore
from docpipe.results.models import ProcessingResult
from docpipe.storage.base import BaseBlobStore


class JobOutcome(str, Enum):
    COMPLETED = "completed"
    ABANDONED = "abandoned"
    DEAD_LETTERED = "dead_lettered"


class JobRunner:
    """Run one queue message to a terminal broker action.

    download -> extract -> store result -> complete. Any failure abandons the
    message (the broker redelivers it) or, once the attempt cap is reached,
    dead-letters it. A result is only written after extraction fully succeeded,
    and the message is only completed after the result was written.
    """

    def __init__(
        self,
        receiver: BaseQueueReceiver,
        blob_store: BaseBlobStore,
        result_store: BaseResultStore,
        extractors: ExtractorRegistry,
        max_attempts: int,
    ) -> None:
        self._receiver = receiver
        self._blob_store = blob_store
        self._result_store = result_store
        self._extractors = extractors
        self._max_attempts = max_attempts

    async def run(self, message: QueueMessage) -> JobOutcome:
        """Process a single message. Never raises."""
        try:
            job = parse_envelope(message.body)
        except MalformedEnvelopeError as exc:
            Log.error(f"Message {message.message_id} has a malformed envelope: {exc}")
            return await self._release(message, message.delivery_count, exc)

        attempt = max(job.attempt, message.delivery_count)
        if attempt > self._max_attempts:
            exc = PoisonMessageError(
                f"Job {job.id} exceeded {self._max_attempts} attempts (attempt {attempt})"
            )
            return await self._dead_letter(message, exc)
        job = job.with_attempt(attempt)
        Log.info(f"Running job {job.id} (attempt {attempt}, {job.file_type.value})")

        try:
            if await self._result_store.get(job.id) is not None:
                Log.warning(f"Job {job.id} already has a result, completing redelivered message")
            else:
                result = await self._process(job)
                await self._result_store.upsert(result)
                Log.info(f"Stored result for job {job.id}")
            await self._receiver.complete(message)
        except Exception as exc:
            Log.exception(f"Job {job.id} failed: {exc}")
            return await self._release(message, attempt, exc)

        Log.info(f"Job {job.id} completed successfully")
        return JobOutcome.COMPLETED

    async def _process(self, job: Job) -> ProcessingResult:
        processing_start = datetime.now(timezone.utc)
        payload = await self._blob_store.download(job.blob_name)
        Log.info(f"Downloaded {len(payload)} bytes from {job.blob_name}")

        extraction = await self._extractors.for_type(job.file_type).extract(job, payload)

        return ProcessingResult(
            id=job.id,
            ai_response=extraction.text,
            ai_summary=extraction.summary,
            page_count=extraction.page_count,
            file_type=job.file_type,
            blob_name=job.blob_name,
            original_filename=job.original_filename,
            attempt=job.attempt,
            processing_start=processing_start,
            processing_end=datetime.now(timezone.utc),
        )

    async def _release(self, message: QueueMessage, attempt: int, exc: Exception) -> JobOutcome:
        """Abandon for redelivery; dead-letter when this was the last allowed attempt."""
        if attempt >= self._max_attempts:
            return await self._dead_letter(message, exc)
        try:
            await self._receiver.abandon(message)
        except Exception as abandon_exc:
            Log.warning(
                f"Abandon failed for message {message.message_id}, "
                f"lock will expire instead: {abandon_exc}"
            )
        Log.warning(f"Message {message.message_id} abandoned for retry (attempt {attempt})")
        return JobOutcome.ABANDONED

    async def _dead_letter(self, message: QueueMessage, exc: Exception) -> JobOutcome:
        reason = (
            "MaxDeliveryAttemptsExceeded"
            if isinstance(exc, PoisonMessageError)
            else type(exc).__name__
        )
        try:
            await self._receiver.dead_letter(message, reason=reason, description=str(exc)[:1024])
        except Exception as dl_exc:
            Log.warning(
                f"Dead-lettering failed for message {message.message_id}, "
                f"lock will expire instead: {dl_exc}"
            )
            return JobOutcome.ABANDONED
        Log.error(f"Message {message.message_id} dead-lettered: {reason}")
        return JobOutcome.DEAD_LETTERED
