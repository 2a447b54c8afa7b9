from docpipe.logging.logger import Log
from docpipe.pdf.base import BasePdfExtractor
from docpipe.pdf.pdfplumber_adapter import PdfPlumberAdapter
from docpipe.pdf.pymupdf_adapter import PyMuPdfAdapter

ENGINES: dict[str, type[BasePdfExtractor]] = {
    "pdfplumber": PdfPlumberAdapter,
    "pymupdf": PyMuPdfAdapter,
}


class PdfExtractorFactory:
    """Builds the text extractor the PDF summarizer runs in its worker thread."""

    @staticmethod
    def create(engine: str) -> BasePdfExtractor:
        """Return the extractor for ``engine`` (``PDF_ENGINE``), matched case-insensitively."""
        key = engine.strip().lower()
        try:
            extractor_cls = ENGINES[key]
        except KeyError:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {sorted(ENGINES)}"
            ) from None
        Log.info(f"PDF text engine: {key}")
        return extractor_cls()
