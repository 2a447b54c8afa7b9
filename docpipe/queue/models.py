from dataclasses import dataclass


@dataclass(frozen=True)
class QueueMessage:
    """A peek-locked message handed to the worker.

    ``handle`` is the broker-native message object; it must be passed back
    unchanged to complete/abandon/dead-letter the message.
    """

    body: str
    delivery_count: int
    message_id: str
    handle: object
