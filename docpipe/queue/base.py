from abc import ABC, abstractmethod

from docpipe.jobs.models import Job
from docpipe.queue.models import QueueMessage


class BaseQueueSender(ABC):
    """Contract for publishing job envelopes to the work queue."""

    @abstractmethod
    async def publish(self, job: Job) -> None:
        """Enqueue ``job``.

        Raises:
            TransientInfrastructureError: if the broker rejects or is unreachable.
        """


class BaseQueueReceiver(ABC):
    """Contract for peek-lock consumption of the work queue."""

    @abstractmethod
    async def receive(self, max_count: int, max_wait_time: float) -> list[QueueMessage]:
        """Lock and return up to ``max_count`` messages, waiting at most ``max_wait_time``."""

    @abstractmethod
    async def complete(self, message: QueueMessage) -> None:
        """Acknowledge: remove the message from the queue for good."""

    @abstractmethod
    async def abandon(self, message: QueueMessage) -> None:
        """Release the lock without completing so the broker redelivers it."""

    @abstractmethod
    async def dead_letter(self, message: QueueMessage, reason: str, description: str) -> None:
        """Move the message to the dead-letter sub-queue."""
