from abc import ABC, abstractmethod
from typing import Any

from docpipe.results.models import ProcessingResult


class BaseResultStore(ABC):
    """Contract for the document store holding one result per job id."""

    @abstractmethod
    async def upsert(self, result: ProcessingResult) -> None:
        """Create or replace the document for ``result.id``.

        Raises:
            TransientInfrastructureError: on store failures.
        """

    @abstractmethod
    async def get(self, job_id: str) -> dict[str, Any] | None:
        """Return the stored document, or None if no result exists yet.

        Raises:
            TransientInfrastructureError: on store failures.
        """
