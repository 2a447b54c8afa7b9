from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class PdfText:
    """Plain text pulled out of a PDF, one page after another."""

    text: str
    page_count: int


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction adapters.

    Extraction is CPU-bound and synchronous; async callers run it in a
    worker thread.
    """

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> PdfText:
        """Extract plain text from PDF bytes.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            PdfText with pages joined by newlines and surrounding whitespace stripped.

        Raises:
            PdfExtractionError: if extraction fails for any reason.
        """
