"""Preload sinks — where the prioritized image queue ends up."""
from __future__ import annotations

import asyncio
import logging
import ssl
import threading
from collections.abc import Sequence

import aiohttp
import certifi

from ..config import PreloadConfig
from ..errors import PreloadSinkUnavailable
from ..models import PreloadRequest

logger = logging.getLogger(__name__)


class LoggingPreloadSink:
    """Log the queue instead of fetching it."""

    def __init__(self) -> None:
        self.batches: list[list[PreloadRequest]] = []

    def preload(self, requests: Sequence[PreloadRequest], batch_size: int) -> None:
        self.batches.append(list(requests))
        logger.info(
            "Preload queue: %d images (batch size %d)", len(requests), batch_size
        )
        for request in requests:
            logger.debug("  [%s] %s %s", request.priority.value, request.id, request.uri)


class HttpImagePreloader:
    """Warm image URLs over HTTP without blocking the caller.

    Fetches run on the caller's event loop when one is running, otherwise on
    a daemon thread with its own loop.
    """

    def __init__(self, config: PreloadConfig | None = None) -> None:
        config = config or PreloadConfig()
        self.max_concurrency = config.max_concurrency
        self.timeout = config.request_timeout
        self._closed = False
        self._tasks: set[asyncio.Task[None]] = set()
        self._threads: list[threading.Thread] = []

    def close(self) -> None:
        """Refuse further batches; in-flight fetches are left to finish."""
        self._closed = True

    def wait(self, timeout: float | None = None) -> bool:
        """Block until background fetch threads finish.

        Tasks scheduled on a running loop are the loop owner's to await.
        Returns False if a thread is still running after ``timeout``.
        """
        for thread in self._threads:
            thread.join(timeout)
        self._threads = [t for t in self._threads if t.is_alive()]
        return not self._threads

    def preload(self, requests: Sequence[PreloadRequest], batch_size: int) -> None:
        if self._closed:
            raise PreloadSinkUnavailable("HTTP image preloader is closed")

        queue = list(requests)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop is not None:
            task = loop.create_task(self.fetch_all(queue, batch_size))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
            return

        thread = threading.Thread(
            target=asyncio.run,
            args=(self.fetch_all(queue, batch_size),),
            name="image-preload",
            daemon=True,
        )
        try:
            thread.start()
        except RuntimeError as e:
            raise PreloadSinkUnavailable(f"Cannot start preload thread: {e}") from e
        self._threads.append(thread)

    async def fetch_all(
        self, requests: Sequence[PreloadRequest], batch_size: int
    ) -> int:
        """Fetch images batch by batch in queue order; return the success count."""
        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context, limit=self.max_concurrency)
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        semaphore = asyncio.Semaphore(self.max_concurrency)
        loaded = 0

        async with aiohttp.ClientSession(connector=connector, timeout=timeout) as session:
            for start in range(0, len(requests), batch_size):
                batch = requests[start : start + batch_size]
                results = await asyncio.gather(
                    *(self._fetch(session, semaphore, request) for request in batch)
                )
                loaded += sum(results)

        logger.info("Preloaded %d/%d images", loaded, len(requests))
        return loaded

    async def _fetch(
        self,
        session: aiohttp.ClientSession,
        semaphore: asyncio.Semaphore,
        request: PreloadRequest,
    ) -> bool:
        async with semaphore:
            try:
                async with session.get(request.uri) as response:
                    if response.status != 200:
                        logger.warning(
                            "Preload of %s failed: HTTP %s", request.uri, response.status
                        )
                        return False
                    await response.read()
                    return True
            except Exception as e:
                logger.warning("Preload of %s failed: %s", request.uri, e)
                return False


__all__ = ["HttpImagePreloader", "LoggingPreloadSink"]
