from abc import ABC, abstractmethod


class BaseBlobStore(ABC):
    """Contract for durable payload storage addressed by blob name."""

    @abstractmethod
    async def upload(
        self,
        name: str,
        data: bytes,
        *,
        content_type: str | None = None,
        overwrite: bool = False,
    ) -> None:
        """Write a payload under ``name``.

        Raises:
            BlobAlreadyExistsError: if the blob exists and overwrite is False.
            TransientInfrastructureError: on storage failures.
        """

    @abstractmethod
    async def download(self, name: str) -> bytes:
        """Read the full payload of ``name`` into memory.

        Raises:
            BlobNotFoundError: if the blob does not exist.
            TransientInfrastructureError: on storage failures.
        """
