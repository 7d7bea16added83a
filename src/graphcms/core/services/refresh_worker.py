"""Refresh worker - recomputes cache entries from queued jobs."""

import logging
import threading

from graphcms.core.builders.document import RawDocument
from graphcms.core.entities.refresh_job import RefreshJob
from graphcms.core.errors import GraphCMSError
from graphcms.core.interfaces.cache_adapter import ICacheAdapter
from graphcms.core.interfaces.job_channel import IJobChannel
from graphcms.core.interfaces.transport import ITransport

logger = logging.getLogger(__name__)


class RefreshWorker:
    """Consumes refresh jobs and overwrites the matching cache entries.

    The worker runs independently of the clients that queued the jobs.
    Handling a job is idempotent: a duplicate delivery executes the
    document again and overwrites the entry with an equivalent payload.
    Failed jobs are logged and dropped; retrying is left to the queue.
    """

    def __init__(
        self,
        channel: IJobChannel,
        adapter: ICacheAdapter,
        transport: ITransport,
        credential: str | None = None,
        poll_timeout: float = 1.0,
    ) -> None:
        """Initialize the worker.

        Args:
            channel: Queue the jobs are read from.
            adapter: Cache adapter the fresh payloads are written to.
            transport: Transport used to execute the documents.
            credential: Bearer credential for the API.
            poll_timeout: Seconds to wait for a job before checking for stop.
        """
        self._channel = channel
        self._adapter = adapter
        self._transport = transport
        self._credential = credential
        self._poll_timeout = poll_timeout
        self._stop_event = threading.Event()

        self._processed = 0
        self._failed = 0

    @property
    def stats(self) -> dict[str, int]:
        """Get counts of processed and failed jobs."""
        return {"processed": self._processed, "failed": self._failed}

    def handle(self, job: RefreshJob) -> bool:
        """Execute one job and store its result.

        Args:
            job: The job to process.

        Returns:
            True if the entry was overwritten, False if the job was dropped.
        """
        document = RawDocument.from_job(job)
        document.bind(self._transport, job.endpoint_id, self._credential)

        try:
            payload = document.execute(job.variables)
        except GraphCMSError as e:
            self._failed += 1
            logger.warning("Dropping refresh job for %s: %s", job.operation_name, e)
            return False

        if not self._adapter.set(job.key, payload):
            self._failed += 1
            logger.warning("Refresh of %s computed but not stored", job.operation_name)
            return False

        self._processed += 1
        logger.debug("Refreshed entry for %s", job.operation_name)
        return True

    def run_once(self, timeout: float | None = None) -> bool:
        """Wait for one job and process it.

        Args:
            timeout: Seconds to wait. Defaults to the poll timeout.

        Returns:
            True if a job was received, False if the wait timed out.
        """
        job = self._channel.consume(self._poll_timeout if timeout is None else timeout)
        if job is None:
            return False
        try:
            self.handle(job)
        except Exception:
            # Unexpected failures drop the job, never the loop
            self._failed += 1
            logger.exception("Unexpected error refreshing %s", job.operation_name)
        return True

    def run(self) -> None:
        """Process jobs until :meth:`stop` is called."""
        logger.info("Refresh worker started")
        while not self._stop_event.is_set():
            try:
                self.run_once()
            except GraphCMSError as e:
                logger.error("Job channel unavailable: %s", e)
                self._stop_event.wait(self._poll_timeout)
        logger.info("Refresh worker stopped")

    def stop(self) -> None:
        """Ask the run loop to exit after the current job."""
        self._stop_event.set()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()
