import json
from dataclasses import asdict, dataclass, replace
from enum import Enum


class FileType(str, Enum):
    """Kind of payload; selects the extractor a job is dispatched to."""

    IMAGE = "image"
    PDF = "pdf"


@dataclass(frozen=True)
class Job:
    """Job envelope: the unit of work travelling from ingress to the worker.

    Never mutated once created. Redelivery bookkeeping produces a copy
    via ``with_attempt``.
    """

    id: str
    blob_name: str
    file_type: FileType
    original_filename: str
    file_size_bytes: int
    timestamp: str
    content_type: str = ""
    attempt: int = 1

    def to_message(self) -> str:
        """Serialize the envelope to the JSON body put on the work queue."""
        payload = asdict(self)
        payload["file_type"] = self.file_type.value
        return json.dumps(payload)

    def with_attempt(self, attempt: int) -> "Job":
        return replace(self, attempt=attempt)
