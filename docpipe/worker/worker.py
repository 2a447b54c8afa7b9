import asyncio
from collections import Counter

from docpipe.config.settings import Settings
from docpipe.logging.logger import Log
from docpipe.queue.base import BaseQueueReceiver
from docpipe.queue.models import QueueMessage
from docpipe.worker.job_runner import JobRunner


class Worker:
    """Poll loop: receive batch -> one task per message -> wait for the whole batch."""

    def __init__(
        self,
        receiver: BaseQueueReceiver,
        job_runner: JobRunner,
        settings: Settings,
    ) -> None:
        self._receiver = receiver
        self._job_runner = job_runner
        self._settings = settings

    async def run(self, max_polls: int | None = None) -> None:
        """Main poll loop. Runs forever until cancelled.

        If max_polls is set, stop after that many polls (for testing).
        """
        Log.info(
            f"Worker started, polling for up to {self._settings.batch_size} messages "
            f"every {self._settings.batch_max_wait_time}s"
        )
        polls = 0
        try:
            while max_polls is None or polls < max_polls:
                polls += 1
                messages = await self._try_receive()
                if messages:
                    await self.process_batch(messages)
                else:
                    Log.debug("No messages available, sleeping")
                    await asyncio.sleep(self._settings.poll_idle_seconds)
        finally:
            Log.info("Worker stopped")

    async def process_batch(self, messages: list[QueueMessage]) -> None:
        """Run every message of a batch concurrently; return once all are resolved."""
        tasks = [asyncio.create_task(self._job_runner.run(message)) for message in messages]
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)
        summary: Counter[str] = Counter()
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                Log.error(f"Unhandled error in job task: {outcome}")
                summary["error"] += 1
            else:
                summary[outcome.value] += 1
        Log.info(f"Batch of {len(messages)} finished: {dict(summary)}")

    async def _try_receive(self) -> list[QueueMessage]:
        """Receive the next batch. Gracefully handle broker errors."""
        try:
            return await self._receiver.receive(
                self._settings.batch_size,
                self._settings.batch_max_wait_time,
            )
        except Exception as exc:
            Log.warning(f"Queue error, will retry: {exc}")
            return []
