import asyncio
import logging
from typing import Callable, Optional

from contextlib import suppress

logger = logging.getLogger("aiostomp_queue.heartbeat")


class StompHeartbeater:

    HEART_BEAT = b"\n"

    def __init__(self, transport: asyncio.Transport, interval: int = 1000):
        self._transport = transport
        self.interval = interval / 1000.0
        self.task: Optional["asyncio.Future[None]"] = None
        self.is_started = False

    async def start(self) -> None:
        if self.is_started:
            await self.stop()

        self.is_started = True
        self.task = asyncio.ensure_future(self.run())

    async def stop(self) -> None:
        if self.is_started and self.task:
            self.is_started = False
            self.task.cancel()
            with suppress(asyncio.CancelledError):
                await self.task
            self.task = None

    def shutdown(self) -> None:
        self.is_started = False
        if self.task:
            self.task.cancel()
            self.task = None

    async def run(self) -> None:
        while True:
            self.send()
            await asyncio.sleep(self.interval)

    def send(self) -> None:
        if self._transport.is_closing():
            logger.debug("Transport closing, skipping heartbeat")
            return

        logger.debug("Sending heartbeat")
        self._transport.write(self.HEART_BEAT)


class StompServerMonitor:
    """Watches for incoming bytes and calls ``on_silence`` once the server
    stayed quiet longer than ``interval`` milliseconds times ``tolerance``.
    Any received data counts, heartbeats and frames alike.
    """

    def __init__(
        self,
        on_silence: Callable[[], None],
        interval: int = 1000,
        tolerance: float = 1.5,
    ):
        self._on_silence = on_silence
        self.interval = interval / 1000.0
        self.allowed_silence = self.interval * tolerance
        self.task: Optional["asyncio.Future[None]"] = None
        self.last_received = 0.0

    @property
    def is_started(self) -> bool:
        return self.task is not None

    def received(self) -> None:
        self.last_received = asyncio.get_event_loop().time()

    async def start(self) -> None:
        self.shutdown()

        self.received()
        self.task = asyncio.ensure_future(self.run())

    def shutdown(self) -> None:
        if self.task:
            self.task.cancel()
            self.task = None

    def silence(self) -> float:
        return asyncio.get_event_loop().time() - self.last_received

    async def run(self) -> None:
        while self.silence() <= self.allowed_silence:
            await asyncio.sleep(self.interval / 2)

        logger.warning("No data from server for %.3fs, closing", self.silence())
        self.task = None
        self._on_silence()
