"""Refresh job channel interface."""

from typing import Protocol

from graphcms.core.entities.refresh_job import RefreshJob


class IJobChannel(Protocol):
    """Contract for the queue carrying refresh jobs to workers.

    Delivery is at-least-once; consumers must tolerate duplicates.
    """

    def publish(self, job: RefreshJob) -> bool:
        """Enqueue a job without waiting for it to be processed.

        Returns:
            True if the job was accepted by the queue.
        """
        ...

    def consume(self, timeout: float = 1.0) -> RefreshJob | None:
        """Take the next job from the queue.

        Args:
            timeout: Seconds to wait for a job.

        Returns:
            The next job, or None if none arrived within the timeout.
        """
        ...
