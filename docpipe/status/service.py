from dataclasses import dataclass, field
from typing import Any

from docpipe.logging.logger import Log
from docpipe.results.base import BaseResultStore


@dataclass(frozen=True)
class JobStatus:
    """Two-state view of a job: completed (with data) or still processing.

    Unknown ids and in-flight ids are reported the same way.
    """

    id: str
    completed: bool
    data: dict[str, Any] = field(default_factory=dict)
    retry_after_seconds: int = 0


class StatusService:
    def __init__(self, result_store: BaseResultStore, retry_after_seconds: int) -> None:
        self._result_store = result_store
        self._retry_after_seconds = retry_after_seconds

    async def lookup(self, job_id: str) -> JobStatus:
        """Look up the result for ``job_id``.

        Raises:
            TransientInfrastructureError: if the result store cannot be queried.
        """
        document = await self._result_store.get(job_id)
        if document is None:
            Log.debug(f"Result for job {job_id} not ready")
            return JobStatus(
                id=job_id,
                completed=False,
                retry_after_seconds=self._retry_after_seconds,
            )
        data: dict[str, Any] = {"result": document.get("ai_response", "")}
        if "file_type" in document:
            data["file_type"] = document["file_type"]
        if document.get("ai_summary"):
            data["summary"] = document["ai_summary"]
        return JobStatus(id=document.get("id", job_id), completed=True, data=data)
