import httpx
import openai
from azure.identity.aio import DefaultAzureCredential, get_bearer_token_provider

from docpipe.inference.client_base import BaseInferenceClient, UserContent
from docpipe.inference.exceptions import InferenceError, InferenceNetworkError

_COGNITIVE_SERVICES_SCOPE = "https://cognitiveservices.azure.com/.default"


class AzureOpenAIClientAdapter(BaseInferenceClient):
    """Inference client for an Azure OpenAI chat deployment.

    Authenticates with the API key when one is configured, otherwise with
    an Entra ID token from ``credential``.
    """

    def __init__(
        self,
        *,
        endpoint: str,
        deployment: str,
        api_version: str,
        timeout_seconds: int,
        api_key: str = "",
        credential: DefaultAzureCredential | None = None,
    ) -> None:
        if not endpoint or not deployment:
            raise ValueError("azure_openai_endpoint and azure_openai_deployment_name are required")
        if api_key:
            self._client = openai.AsyncAzureOpenAI(
                api_key=api_key,
                azure_endpoint=endpoint,
                api_version=api_version,
                timeout=timeout_seconds,
            )
        else:
            if credential is None:
                raise ValueError("A credential is required when no API key is configured")
            self._client = openai.AsyncAzureOpenAI(
                azure_ad_token_provider=get_bearer_token_provider(
                    credential, _COGNITIVE_SERVICES_SCOPE
                ),
                azure_endpoint=endpoint,
                api_version=api_version,
                timeout=timeout_seconds,
            )
        self._deployment = deployment

    async def create_chat_completion(
        self,
        *,
        temperature: float,
        system_prompt: str,
        user_content: UserContent,
    ) -> str:
        try:
            response = await self._client.chat.completions.create(
                model=self._deployment,
                temperature=temperature,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_content},  # type: ignore[misc,list-item]
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise InferenceNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise InferenceNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise InferenceError("AI returned no choices")
        content = response.choices[0].message.content
        if not content or not content.strip():
            raise InferenceError("AI returned empty response")
        return content.strip()

    async def close(self) -> None:
        await self._client.close()
