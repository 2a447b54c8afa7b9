from docpipe.jobs.exceptions import PermanentProcessingError


class PdfExtractionError(PermanentProcessingError):
    """Raised when text cannot be extracted from a PDF payload."""
