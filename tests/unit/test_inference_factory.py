import pytest

from docpipe.config.settings import Settings
from docpipe.inference.azure_openai_client_adapter import AzureOpenAIClientAdapter
from docpipe.inference.example_client_adapter import ExampleClientAdapter
from docpipe.inference.factory import InferenceClientFactory


class TestInferenceClientFactory:
    def test_creates_example_adapter(self) -> None:
        client = InferenceClientFactory.create(Settings(inference_provider="example"))
        assert isinstance(client, ExampleClientAdapter)

    def test_creates_azure_openai_adapter_with_api_key(self) -> None:
        settings = Settings(
            inference_provider="azure_openai",
            azure_openai_endpoint="https://fake-openai.openai.azure.com",
            azure_openai_deployment_name="fake-deployment",
            azure_openai_api_key="fake-key",
        )
        client = InferenceClientFactory.create(settings)
        assert isinstance(client, AzureOpenAIClientAdapter)

    def test_raises_for_unknown_provider(self) -> None:
        with pytest.raises(ValueError, match="Unknown inference provider"):
            InferenceClientFactory.create(Settings(inference_provider="nope"))
