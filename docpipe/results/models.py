from dataclasses import dataclass
from datetime import datetime

from docpipe.jobs.models import FileType


@dataclass(frozen=True)
class ProcessingResult:
    """Terminal artifact of a successfully processed job, keyed by job id."""

    id: str
    ai_response: str
    file_type: FileType
    blob_name: str
    original_filename: str
    processing_start: datetime
    processing_end: datetime
    attempt: int = 1
    ai_summary: str | None = None
    page_count: int | None = None

    def to_document(self) -> dict[str, object]:
        """Build the JSON document stored in the result store."""
        document: dict[str, object] = {
            "id": self.id,
            "ai_response": self.ai_response,
            "file_type": self.file_type.value,
            "blob_name": self.blob_name,
            "original_filename": self.original_filename,
            "processing_start": self.processing_start.isoformat(),
            "processing_end": self.processing_end.isoformat(),
            "attempt": self.attempt,
        }
        if self.ai_summary is not None:
            document["ai_summary"] = self.ai_summary
        if self.page_count is not None:
            document["page_count"] = self.page_count
        return document
