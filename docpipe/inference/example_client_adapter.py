"""Example inference client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseInferenceClient and register the provider in InferenceClientFactory.
"""

from typing import ClassVar

from docpipe.inference.client_base import BaseInferenceClient, UserContent


class ExampleClientAdapter(BaseInferenceClient):
    """Example adapter that answers every prompt with a fixed text.

    No network calls. Useful for local development and tests.
    """

    DEFAULT_RESPONSE: ClassVar[str] = "Example model response."

    def __init__(self, response: str | None = None) -> None:
        self._response = response or self.DEFAULT_RESPONSE

    async def create_chat_completion(
        self,
        *,
        temperature: float,
        system_prompt: str,
        user_content: UserContent,
    ) -> str:
        _ = temperature, system_prompt, user_content
        return self._response
