from azure.core.exceptions import AzureError, ResourceExistsError, ResourceNotFoundError
from azure.storage.blob import ContentSettings
from azure.storage.blob.aio import ContainerClient

from docpipe.jobs.exceptions import (
    BlobAlreadyExistsError,
    BlobNotFoundError,
    TransientInfrastructureError,
)
from docpipe.storage.base import BaseBlobStore


class AzureBlobStore(BaseBlobStore):
    """Blob store backed by one Azure Storage container."""

    def __init__(self, container_client: ContainerClient) -> None:
        self._container = container_client

    async def upload(
        self,
        name: str,
        data: bytes,
        *,
        content_type: str | None = None,
        overwrite: bool = False,
    ) -> None:
        content_settings = ContentSettings(content_type=content_type) if content_type else None
        try:
            await self._container.upload_blob(
                name=name,
                data=data,
                overwrite=overwrite,
                content_settings=content_settings,
            )
        except ResourceExistsError as exc:
            raise BlobAlreadyExistsError(f"Blob {name} already exists") from exc
        except AzureError as exc:
            raise TransientInfrastructureError(f"Blob upload failed for {name}: {exc}") from exc

    async def download(self, name: str) -> bytes:
        try:
            blob_client = self._container.get_blob_client(name)
            stream = await blob_client.download_blob()
            return await stream.readall()
        except ResourceNotFoundError as exc:
            raise BlobNotFoundError(f"Blob {name} not found") from exc
        except AzureError as exc:
            raise TransientInfrastructureError(f"Blob download failed for {name}: {exc}") from exc
