import io
import uuid
from dataclasses import replace
from typing import Any

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from docpipe.config.settings import Settings
from docpipe.jobs.exceptions import BlobAlreadyExistsError, BlobNotFoundError
from docpipe.jobs.models import Job
from docpipe.queue.base import BaseQueueReceiver, BaseQueueSender
from docpipe.queue.models import QueueMessage
from docpipe.results.base import BaseResultStore
from docpipe.results.models import ProcessingResult
from docpipe.storage.base import BaseBlobStore


class InMemoryBlobStore(BaseBlobStore):
    def __init__(self) -> None:
        self.blobs: dict[str, bytes] = {}
        self.content_types: dict[str, str | None] = {}

    async def upload(
        self,
        name: str,
        data: bytes,
        *,
        content_type: str | None = None,
        overwrite: bool = False,
    ) -> None:
        if name in self.blobs and not overwrite:
            raise BlobAlreadyExistsError(f"Blob {name} already exists")
        self.blobs[name] = data
        self.content_types[name] = content_type

    async def download(self, name: str) -> bytes:
        try:
            return self.blobs[name]
        except KeyError as exc:
            raise BlobNotFoundError(f"Blob {name} not found") from exc


class InMemoryQueue(BaseQueueSender, BaseQueueReceiver):
    """Peek-lock queue: abandoned messages go back with delivery_count + 1."""

    def __init__(self) -> None:
        self.pending: list[QueueMessage] = []
        self.locked: dict[str, QueueMessage] = {}
        self.completed: list[QueueMessage] = []
        self.abandoned: list[QueueMessage] = []
        self.dead_lettered: list[tuple[QueueMessage, str]] = []

    def put(self, body: str, delivery_count: int = 1) -> QueueMessage:
        message = QueueMessage(
            body=body,
            delivery_count=delivery_count,
            message_id=uuid.uuid4().hex,
            handle=None,
        )
        self.pending.append(message)
        return message

    async def publish(self, job: Job) -> None:
        self.put(job.to_message())

    async def receive(self, max_count: int, max_wait_time: float) -> list[QueueMessage]:
        batch = self.pending[:max_count]
        del self.pending[:max_count]
        for message in batch:
            self.locked[message.message_id] = message
        return batch

    async def complete(self, message: QueueMessage) -> None:
        self.locked.pop(message.message_id)
        self.completed.append(message)

    async def abandon(self, message: QueueMessage) -> None:
        self.locked.pop(message.message_id)
        self.abandoned.append(message)
        self.pending.append(replace(message, delivery_count=message.delivery_count + 1))

    async def dead_letter(self, message: QueueMessage, reason: str, description: str) -> None:
        self.locked.pop(message.message_id)
        self.dead_lettered.append((message, reason))


class InMemoryResultStore(BaseResultStore):
    def __init__(self) -> None:
        self.documents: dict[str, dict[str, Any]] = {}
        self.upserts: list[str] = []

    async def upsert(self, result: ProcessingResult) -> None:
        self.documents[result.id] = result.to_document()
        self.upserts.append(result.id)

    async def get(self, job_id: str) -> dict[str, Any] | None:
        return self.documents.get(job_id)


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        processed_base_url="https://example.com/api/status",
        inference_provider="example",
        retry_after_seconds=5,
        batch_size=5,
        batch_max_wait_time=0.1,
        poll_idle_seconds=0,
        max_delivery_attempts=3,
        pdf_max_tokens=50,
        max_upload_bytes=1024 * 1024,
    )


@pytest.fixture()
def blob_store() -> InMemoryBlobStore:
    return InMemoryBlobStore()


@pytest.fixture()
def queue() -> InMemoryQueue:
    return InMemoryQueue()


@pytest.fixture()
def result_store() -> InMemoryResultStore:
    return InMemoryResultStore()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()
