from collections.abc import Mapping

from docpipe.config.settings import Settings
from docpipe.extractors.base import BaseExtractor
from docpipe.extractors.image import ImageDescriber
from docpipe.extractors.pdf import PdfSummarizer
from docpipe.inference.client_base import BaseInferenceClient
from docpipe.jobs.models import FileType
from docpipe.pdf.factory import PdfExtractorFactory


class ExtractorRegistry:
    """Dispatch table FileType -> extractor, complete for every FileType."""

    def __init__(self, extractors: Mapping[FileType, BaseExtractor]) -> None:
        missing = [t.value for t in FileType if t not in extractors]
        if missing:
            raise ValueError(f"No extractor registered for file types: {missing}")
        for file_type, extractor in extractors.items():
            if extractor.file_type is not file_type:
                raise ValueError(
                    f"{type(extractor).__name__} handles '{extractor.file_type.value}', "
                    f"not '{file_type.value}'"
                )
        self._extractors = dict(extractors)

    def for_type(self, file_type: FileType) -> BaseExtractor:
        return self._extractors[file_type]


def build_registry(settings: Settings, client: BaseInferenceClient) -> ExtractorRegistry:
    """Build the registry with the configured PDF engine and inference client."""
    return ExtractorRegistry(
        {
            FileType.IMAGE: ImageDescriber(client, settings.inference_temperature),
            FileType.PDF: PdfSummarizer(
                PdfExtractorFactory.create(settings.pdf_engine),
                client,
                max_tokens=settings.pdf_max_tokens,
                temperature=settings.inference_temperature,
            ),
        }
    )
