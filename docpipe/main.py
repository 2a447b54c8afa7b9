import asyncio

from docpipe.config.settings import Settings
from docpipe.context import open_worker_context
from docpipe.extractors.registry import build_registry
from docpipe.logging.logger import Log
from docpipe.worker.job_runner import JobRunner
from docpipe.worker.worker import Worker


async def run_worker(settings: Settings) -> None:
    """Open cloud clients -> build dependencies -> run the poll loop."""
    async with open_worker_context(settings) as context:
        receiver = context.require_queue_receiver()
        job_runner = JobRunner(
            receiver=receiver,
            blob_store=context.require_blob_store(),
            result_store=context.require_result_store(),
            extractors=build_registry(settings, context.require_inference_client()),
            max_attempts=settings.max_delivery_attempts,
        )
        worker = Worker(receiver, job_runner, settings)
        await worker.run()


def main() -> None:
    """Entry point of the worker process."""
    settings = Settings()
    Log.configure(settings.log_level, "worker")
    try:
        asyncio.run(run_worker(settings))
    except KeyboardInterrupt:
        Log.info("Worker shutting down gracefully")


if __name__ == "__main__":
    main()
