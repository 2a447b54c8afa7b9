from abc import ABC, abstractmethod
from dataclasses import dataclass

from docpipe.jobs.models import FileType, Job


@dataclass(frozen=True)
class Extraction:
    """Text an extractor produced for one payload."""

    text: str
    summary: str | None = None
    page_count: int | None = None


class BaseExtractor(ABC):
    """Turns raw file bytes into text; one subclass per FileType."""

    file_type: FileType

    @abstractmethod
    async def extract(self, job: Job, payload: bytes) -> Extraction:
        """Produce the AI text for ``payload``.

        Raises:
            PipelineError: on any failure. Nothing is returned partially.
        """
