from azure.identity.aio import DefaultAzureCredential

from docpipe.config.settings import Settings
from docpipe.inference.azure_openai_client_adapter import AzureOpenAIClientAdapter
from docpipe.inference.client_base import BaseInferenceClient
from docpipe.inference.example_client_adapter import ExampleClientAdapter


class InferenceClientFactory:
    """Creates the configured inference client adapter."""

    PROVIDERS = ("azure_openai", "example")

    @classmethod
    def create(
        cls,
        settings: Settings,
        credential: DefaultAzureCredential | None = None,
    ) -> BaseInferenceClient:
        provider = settings.inference_provider.lower()
        if provider == "example":
            return ExampleClientAdapter()
        if provider == "azure_openai":
            return AzureOpenAIClientAdapter(
                endpoint=settings.azure_openai_endpoint,
                deployment=settings.azure_openai_deployment_name,
                api_version=settings.azure_openai_api_version,
                timeout_seconds=settings.inference_timeout_seconds,
                api_key=settings.azure_openai_api_key,
                credential=credential,
            )
        raise ValueError(
            f"Unknown inference provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
