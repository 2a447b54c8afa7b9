import base64

from docpipe.extractors.base import BaseExtractor, Extraction
from docpipe.inference.client_base import BaseInferenceClient
from docpipe.inference.prompt_loader import load_prompt
from docpipe.jobs.models import FileType, Job
from docpipe.logging.logger import Log

_DEFAULT_IMAGE_MIME = "image/jpeg"


class ImageDescriber(BaseExtractor):
    """Asks a vision-capable deployment for a caption of the image."""

    file_type = FileType.IMAGE

    def __init__(self, client: BaseInferenceClient, temperature: float = 0.2) -> None:
        self._client = client
        self._temperature = temperature
        self._system_prompt = load_prompt("image_system.txt")
        self._user_prompt = load_prompt("image_user.txt")

    async def extract(self, job: Job, payload: bytes) -> Extraction:
        encoded = base64.b64encode(payload).decode("utf-8")
        mime = job.content_type if job.content_type.startswith("image/") else _DEFAULT_IMAGE_MIME
        Log.info(f"Requesting description for image {job.blob_name}")
        description = await self._client.create_chat_completion(
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_content=[
                {"type": "text", "text": self._user_prompt},
                {"type": "image_url", "image_url": {"url": f"data:{mime};base64,{encoded}"}},
            ],
        )
        Log.debug(f"Image {job.blob_name} description: {description[:100]}")
        return Extraction(text=description)
