"""Application context: every long-lived client a process needs, built once at startup.

Handlers and workers receive the context explicitly; there are no module-level
client handles. Tests construct ``AppContext`` directly with in-memory fakes.
"""

from collections.abc import AsyncIterator
from contextlib import AsyncExitStack, asynccontextmanager
from dataclasses import dataclass
from typing import TypeVar

from azure.cosmos.aio import CosmosClient
from azure.identity.aio import DefaultAzureCredential
from azure.servicebus.aio import AutoLockRenewer, ServiceBusClient
from azure.storage.blob.aio import BlobServiceClient

from docpipe.config.settings import Settings
from docpipe.inference.client_base import BaseInferenceClient
from docpipe.inference.factory import InferenceClientFactory
from docpipe.logging.logger import Log
from docpipe.queue.base import BaseQueueReceiver, BaseQueueSender
from docpipe.queue.servicebus import ServiceBusQueueReceiver, ServiceBusQueueSender
from docpipe.results.base import BaseResultStore
from docpipe.results.cosmos_result_store import CosmosResultStore
from docpipe.storage.azure_blob_store import AzureBlobStore
from docpipe.storage.base import BaseBlobStore

_CHUNK_SIZE = 4 * 1024 * 1024

T = TypeVar("T")


@dataclass
class AppContext:
    settings: Settings
    blob_store: BaseBlobStore | None = None
    queue_sender: BaseQueueSender | None = None
    queue_receiver: BaseQueueReceiver | None = None
    result_store: BaseResultStore | None = None
    inference_client: BaseInferenceClient | None = None

    def require_blob_store(self) -> BaseBlobStore:
        return _require(self.blob_store, "blob_store")

    def require_queue_sender(self) -> BaseQueueSender:
        return _require(self.queue_sender, "queue_sender")

    def require_queue_receiver(self) -> BaseQueueReceiver:
        return _require(self.queue_receiver, "queue_receiver")

    def require_result_store(self) -> BaseResultStore:
        return _require(self.result_store, "result_store")

    def require_inference_client(self) -> BaseInferenceClient:
        return _require(self.inference_client, "inference_client")


def _require(component: T | None, name: str) -> T:
    if component is None:
        raise RuntimeError(f"AppContext.{name} is not configured for this process")
    return component


def _require_setting(value: str, env_name: str) -> str:
    if not value:
        raise ValueError(f"{env_name} environment variable is not set")
    return value


async def _blob_store(
    stack: AsyncExitStack,
    settings: Settings,
    credential: DefaultAzureCredential,
) -> BaseBlobStore:
    service = await stack.enter_async_context(
        BlobServiceClient(
            account_url=_require_setting(settings.storage_account_url, "STORAGE_ACCOUNT_URL"),
            credential=credential,
            max_single_get_size=_CHUNK_SIZE,
            max_chunk_get_size=_CHUNK_SIZE,
        )
    )
    return AzureBlobStore(service.get_container_client(settings.storage_container))


async def _servicebus(
    stack: AsyncExitStack,
    settings: Settings,
    credential: DefaultAzureCredential,
) -> ServiceBusClient:
    return await stack.enter_async_context(
        ServiceBusClient(
            _require_setting(settings.servicebus_fqdn, "SERVICEBUS_FQDN"),
            credential=credential,
        )
    )


async def _result_store(
    stack: AsyncExitStack,
    settings: Settings,
    credential: DefaultAzureCredential,
) -> BaseResultStore:
    client = await stack.enter_async_context(
        CosmosClient(
            _require_setting(settings.cosmos_account_url, "COSMOS_ACCOUNT_URL"),
            credential=credential,
        )
    )
    database = client.get_database_client(settings.cosmos_db_name)
    return CosmosResultStore(database.get_container_client(settings.cosmos_container_name))


@asynccontextmanager
async def open_processing_context(settings: Settings) -> AsyncIterator[AppContext]:
    """Blob store + queue sender for the processing API."""
    async with AsyncExitStack() as stack:
        credential = await stack.enter_async_context(DefaultAzureCredential())
        blob_store = await _blob_store(stack, settings, credential)
        servicebus = await _servicebus(stack, settings, credential)
        sender = await stack.enter_async_context(
            servicebus.get_queue_sender(settings.servicebus_queue)
        )
        Log.info("Processing context ready")
        yield AppContext(
            settings=settings,
            blob_store=blob_store,
            queue_sender=ServiceBusQueueSender(sender),
        )


@asynccontextmanager
async def open_status_context(settings: Settings) -> AsyncIterator[AppContext]:
    """Result store for the status API."""
    async with AsyncExitStack() as stack:
        credential = await stack.enter_async_context(DefaultAzureCredential())
        result_store = await _result_store(stack, settings, credential)
        Log.info("Status context ready")
        yield AppContext(settings=settings, result_store=result_store)


@asynccontextmanager
async def open_worker_context(settings: Settings) -> AsyncIterator[AppContext]:
    """Queue receiver, blob store, result store and inference client for the worker.

    Every received message gets its lock renewed for up to ``lock_renewal_seconds``
    while it is being processed.
    """
    async with AsyncExitStack() as stack:
        credential = await stack.enter_async_context(DefaultAzureCredential())
        blob_store = await _blob_store(stack, settings, credential)
        result_store = await _result_store(stack, settings, credential)
        servicebus = await _servicebus(stack, settings, credential)
        lock_renewer = await stack.enter_async_context(
            AutoLockRenewer(max_lock_renewal_duration=settings.lock_renewal_seconds)
        )
        receiver = await stack.enter_async_context(
            servicebus.get_queue_receiver(
                queue_name=settings.servicebus_queue,
                auto_lock_renewer=lock_renewer,
            )
        )
        inference_client = InferenceClientFactory.create(settings, credential)
        stack.push_async_callback(inference_client.close)
        Log.info("Worker context ready")
        yield AppContext(
            settings=settings,
            blob_store=blob_store,
            queue_receiver=ServiceBusQueueReceiver(receiver),
            result_store=result_store,
            inference_client=inference_client,
        )
