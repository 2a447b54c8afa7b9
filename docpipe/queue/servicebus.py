from azure.servicebus import ServiceBusMessage, ServiceBusReceivedMessage
from azure.servicebus.aio import ServiceBusReceiver, ServiceBusSender
from azure.servicebus.exceptions import ServiceBusError

from docpipe.jobs.exceptions import TransientInfrastructureError
from docpipe.jobs.models import Job
from docpipe.queue.base import BaseQueueReceiver, BaseQueueSender
from docpipe.queue.models import QueueMessage


def _attempt_number(msg: ServiceBusReceivedMessage) -> int:
    """1-based delivery number.

    The AMQP header counts prior failed deliveries, so a first delivery reports 0.
    """
    return (msg.delivery_count or 0) + 1


class ServiceBusQueueSender(BaseQueueSender):
    """Publishes job envelopes to an Azure Service Bus queue."""

    def __init__(self, sender: ServiceBusSender) -> None:
        self._sender = sender

    async def publish(self, job: Job) -> None:
        message = ServiceBusMessage(
            job.to_message(),
            content_type="application/json",
            message_id=job.id,
            correlation_id=job.id,
        )
        try:
            await self._sender.send_messages(message)
        except ServiceBusError as exc:
            raise TransientInfrastructureError(f"Publish failed for job {job.id}: {exc}") from exc


class ServiceBusQueueReceiver(BaseQueueReceiver):
    """Peek-lock consumer over an Azure Service Bus queue receiver."""

    def __init__(self, receiver: ServiceBusReceiver) -> None:
        self._receiver = receiver

    async def receive(self, max_count: int, max_wait_time: float) -> list[QueueMessage]:
        try:
            received = await self._receiver.receive_messages(
                max_message_count=max_count,
                max_wait_time=max_wait_time,
            )
        except ServiceBusError as exc:
            raise TransientInfrastructureError(f"Receive failed: {exc}") from exc
        return [self._wrap(msg) for msg in received]

    async def complete(self, message: QueueMessage) -> None:
        await self._receiver.complete_message(self._native(message))

    async def abandon(self, message: QueueMessage) -> None:
        await self._receiver.abandon_message(self._native(message))

    async def dead_letter(self, message: QueueMessage, reason: str, description: str) -> None:
        await self._receiver.dead_letter_message(
            self._native(message),
            reason=reason,
            error_description=description,
        )

    @staticmethod
    def _wrap(msg: ServiceBusReceivedMessage) -> QueueMessage:
        return QueueMessage(
            body=str(msg),
            delivery_count=_attempt_number(msg),
            message_id=str(msg.message_id or ""),
            handle=msg,
        )

    @staticmethod
    def _native(message: QueueMessage) -> ServiceBusReceivedMessage:
        if not isinstance(message.handle, ServiceBusReceivedMessage):
            raise TypeError("QueueMessage was not received from Service Bus")
        return message.handle
