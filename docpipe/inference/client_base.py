from abc import ABC, abstractmethod

UserContent = str | list[dict[str, object]]


class BaseInferenceClient(ABC):
    """Contract for provider-specific chat completion clients."""

    @abstractmethod
    async def create_chat_completion(
        self,
        *,
        temperature: float,
        system_prompt: str,
        user_content: UserContent,
    ) -> str:
        """Return the model reply as plain text.

        ``user_content`` is either a text prompt or a list of content parts
        (text and image_url) for vision-capable deployments.
        """

    async def close(self) -> None:
        """Release network resources held by the client."""
