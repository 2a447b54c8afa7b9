from typing import Any

from azure.cosmos.aio import ContainerProxy
from azure.cosmos.exceptions import CosmosHttpResponseError, CosmosResourceNotFoundError

from docpipe.jobs.exceptions import TransientInfrastructureError
from docpipe.results.base import BaseResultStore
from docpipe.results.models import ProcessingResult


class CosmosResultStore(BaseResultStore):
    """Result documents in a Cosmos DB container partitioned on /id."""

    def __init__(self, container: ContainerProxy) -> None:
        self._container = container

    async def upsert(self, result: ProcessingResult) -> None:
        try:
            await self._container.upsert_item(result.to_document())
        except CosmosHttpResponseError as exc:
            raise TransientInfrastructureError(
                f"Result upsert failed for job {result.id}: {exc}"
            ) from exc

    async def get(self, job_id: str) -> dict[str, Any] | None:
        try:
            return await self._container.read_item(item=job_id, partition_key=job_id)
        except CosmosResourceNotFoundError:
            return None
        except CosmosHttpResponseError as exc:
            raise TransientInfrastructureError(
                f"Result lookup failed for job {job_id}: {exc}"
            ) from exc
