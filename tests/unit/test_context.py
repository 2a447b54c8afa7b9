from collections.abc import Iterator
from contextlib import ExitStack
from unittest.mock import MagicMock, patch

import pytest

from docpipe.config.settings import Settings
from docpipe.context import AppContext, open_worker_context
from docpipe.queue.servicebus import ServiceBusQueueReceiver


def _entered(cls_mock: MagicMock) -> MagicMock:
    """Make ``cls_mock()`` usable with ``async with`` and return the entered instance."""
    instance = cls_mock.return_value
    instance.__aenter__.return_value = instance
    return instance


def _make_settings(**overrides: object) -> Settings:
    defaults: dict[str, object] = {
        "storage_account_url": "https://acct.blob.core.windows.net",
        "servicebus_fqdn": "ns.servicebus.windows.net",
        "cosmos_account_url": "https://acct.documents.azure.com:443/",
        "inference_provider": "example",
        "lock_renewal_seconds": 300,
    }
    defaults.update(overrides)
    return Settings(**defaults)


@pytest.fixture()
def azure_clients() -> Iterator[dict[str, MagicMock]]:
    names = [
        "DefaultAzureCredential",
        "BlobServiceClient",
        "CosmosClient",
        "ServiceBusClient",
        "AutoLockRenewer",
    ]
    with ExitStack() as stack:
        mocks = {name: stack.enter_context(patch(f"docpipe.context.{name}")) for name in names}
        for cls_mock in mocks.values():
            _entered(cls_mock)
        yield mocks


class TestOpenWorkerContext:
    async def test_receiver_renews_message_locks(self, azure_clients: dict[str, MagicMock]) -> None:
        renewer = azure_clients["AutoLockRenewer"].return_value
        servicebus = azure_clients["ServiceBusClient"].return_value

        async with open_worker_context(_make_settings()) as context:
            assert isinstance(context.queue_receiver, ServiceBusQueueReceiver)

        azure_clients["AutoLockRenewer"].assert_called_once_with(max_lock_renewal_duration=300)
        servicebus.get_queue_receiver.assert_called_once_with(
            queue_name="jobs",
            auto_lock_renewer=renewer,
        )

    async def test_closes_lock_renewer_on_exit(self, azure_clients: dict[str, MagicMock]) -> None:
        renewer = azure_clients["AutoLockRenewer"].return_value

        async with open_worker_context(_make_settings()):
            renewer.__aexit__.assert_not_awaited()

        renewer.__aexit__.assert_awaited_once()

    async def test_builds_every_worker_component(self, azure_clients: dict[str, MagicMock]) -> None:
        async with open_worker_context(_make_settings()) as context:
            assert isinstance(context, AppContext)
            context.require_blob_store()
            context.require_result_store()
            context.require_inference_client()

    async def test_missing_servicebus_namespace(self, azure_clients: dict[str, MagicMock]) -> None:
        with pytest.raises(ValueError, match="SERVICEBUS_FQDN"):
            async with open_worker_context(_make_settings(servicebus_fqdn="")):
                pass
