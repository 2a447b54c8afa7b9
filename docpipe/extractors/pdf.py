import asyncio

from docpipe.extractors.base import BaseExtractor, Extraction
from docpipe.extractors.tokens import estimate_tokens, truncate_to_token_budget
from docpipe.inference.client_base import BaseInferenceClient
from docpipe.inference.prompt_loader import load_prompt
from docpipe.jobs.models import FileType, Job
from docpipe.logging.logger import Log
from docpipe.pdf.base import BasePdfExtractor
from docpipe.pdf.exceptions import PdfExtractionError


class PdfSummarizer(BaseExtractor):
    """Extracts PDF text in a worker thread, then asks the model for a summary."""

    file_type = FileType.PDF

    def __init__(
        self,
        pdf_extractor: BasePdfExtractor,
        client: BaseInferenceClient,
        max_tokens: int,
        temperature: float = 0.2,
    ) -> None:
        self._pdf_extractor = pdf_extractor
        self._client = client
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._system_prompt = load_prompt("pdf_summary_system.txt")
        self._user_template = load_prompt("pdf_summary_user.txt")

    async def extract(self, job: Job, payload: bytes) -> Extraction:
        pdf_text = await asyncio.to_thread(self._pdf_extractor.extract, payload)
        if not pdf_text.text:
            raise PdfExtractionError(f"No text found in {job.blob_name}")
        Log.info(
            f"Extracted {len(pdf_text.text)} chars from {pdf_text.page_count} pages "
            f"of {job.blob_name}"
        )

        budgeted = truncate_to_token_budget(pdf_text.text, self._max_tokens)
        if len(budgeted) < len(pdf_text.text):
            Log.info(
                f"Truncated {job.blob_name} from ~{estimate_tokens(pdf_text.text)} "
                f"to ~{estimate_tokens(budgeted)} tokens"
            )

        summary = await self._client.create_chat_completion(
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_content=self._user_template.format(document_text=budgeted),
        )
        Log.debug(f"Summary for {job.blob_name}: {summary[:100]}")
        return Extraction(text=summary, summary=summary, page_count=pdf_text.page_count)
