"""Command line entry point for the Redis refresh worker.

The worker connects to the Redis instance shared with the clients, takes
refresh jobs from the job list and overwrites the cache entries with
fresh responses. It runs until it receives SIGINT or SIGTERM.

Usage::

    graphcms-refresh-worker --host 127.0.0.1 --port 6379 --token $TOKEN
"""

from __future__ import annotations

import logging
import signal
from typing import Any, Optional

import redis
import typer

from graphcms.core.interfaces.transport import ITransport
from graphcms.core.services.refresh_worker import RefreshWorker
from graphcms.infrastructure.transports.http import SIMPLE_URL, HttpTransport
from graphcms_redis.backend import RedisCacheAdapter
from graphcms_redis.channel import DEFAULT_CHANNEL, RedisJobChannel

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="graphcms-refresh-worker",
    help="Recompute stale GraphCMS cache entries queued in Redis.",
    add_completion=False,
)


def build_worker(
    client: redis.Redis,
    token: Optional[str] = None,
    channel: str = DEFAULT_CHANNEL,
    base_url: str = SIMPLE_URL,
    ttl: int = 3600,
    key_prefix: Optional[str] = None,
    transport: Optional[ITransport] = None,
) -> RefreshWorker:
    """Wire a worker to a Redis client.

    The adapter and channel settings must match the ones used by the
    clients, otherwise refreshed entries land under different keys.
    """
    if transport is None:
        transport = HttpTransport(base_url=base_url)
    job_channel = RedisJobChannel(client, name=channel)
    adapter = RedisCacheAdapter(
        client,
        ttl=ttl,
        channel=job_channel,
        key_prefix=key_prefix,
    )
    return RefreshWorker(job_channel, adapter, transport, credential=token)


def _setup_signal_handlers(worker: RefreshWorker) -> None:
    """Stop the worker loop on SIGINT and SIGTERM."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        logger.info("Received signal %s, stopping", signum)
        worker.stop()

    signal.signal(signal.SIGINT, _handler)
    signal.signal(signal.SIGTERM, _handler)


@app.command()
def run(
    host: str = typer.Option(
        "127.0.0.1", "--host", envvar="GRAPHCMS_REDIS_HOST", help="Redis host."
    ),
    port: int = typer.Option(
        6379, "--port", envvar="GRAPHCMS_REDIS_PORT", help="Redis port."
    ),
    db: int = typer.Option(0, "--db", help="Redis database number."),
    channel: str = typer.Option(
        DEFAULT_CHANNEL, "--channel", help="Redis list holding refresh jobs."
    ),
    token: Optional[str] = typer.Option(
        None, "--token", envvar="GRAPHCMS_TOKEN", help="GraphCMS API token."
    ),
    base_url: str = typer.Option(
        SIMPLE_URL, "--base-url", envvar="GRAPHCMS_BASE_URL", help="GraphCMS API root."
    ),
    ttl: int = typer.Option(3600, "--ttl", help="Entry freshness window in seconds."),
    key_prefix: Optional[str] = typer.Option(
        None, "--key-prefix", help="Prefix used by the clients for cache keys."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Process refresh jobs until interrupted."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    client = redis.Redis(host=host, port=port, db=db)
    worker = build_worker(
        client,
        token=token,
        channel=channel,
        base_url=base_url,
        ttl=ttl,
        key_prefix=key_prefix,
    )
    _setup_signal_handlers(worker)
    logger.info("Listening on %s at %s:%s", channel, host, port)
    try:
        worker.run()
    finally:
        client.close()


def main() -> None:
    """Entry point of the ``graphcms-refresh-worker`` console script."""
    app()
