import asyncio
import functools
import logging
import os
import uuid
from collections import OrderedDict, deque
from ssl import SSLContext
from typing import Deque, Dict, List, Optional, cast

import async_timeout

from aiostomp_queue.builders import FrameBuilder, builder_for
from aiostomp_queue.destination import ExtensionType
from aiostomp_queue.errors import StompDisconnectedError, StompError
from aiostomp_queue.frame import Frame
from aiostomp_queue.heartbeat import StompHeartbeater, StompServerMonitor
from aiostomp_queue.protocol import StompProtocol
from aiostomp_queue.stomp import Commands, Headers, Responses, Stomp

AIOSTOMP_QUEUE_ENABLE_STATS = bool(os.environ.get("AIOSTOMP_QUEUE_ENABLE_STATS", False))
AIOSTOMP_QUEUE_STATS_INTERVAL = int(os.environ.get("AIOSTOMP_QUEUE_STATS_INTERVAL", 10))
logger = logging.getLogger("aiostomp_queue")


class StompStats:
    def __init__(self) -> None:
        self.interval = AIOSTOMP_QUEUE_STATS_INTERVAL
        self.counters: Dict[str, int] = {"sent_frames": 0, "rec_msg": 0, "buffered": 0}

    def print_stats(self) -> None:
        logger.info("==== aiostomp_queue stats ====")
        logger.info(" sent_frames | rec_msg | buffered ")
        logger.info(
            " {:>11} | {:>7} | {:>8} ".format(
                self.counters["sent_frames"],
                self.counters["rec_msg"],
                self.counters["buffered"],
            )
        )
        logger.info("==============================")

    def increment(self, field: str, value: int = 1) -> None:
        self.counters[field] = self.counters.get(field, 0) + value

    async def run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            self.print_stats()


class StompReader(asyncio.Protocol):
    """Turns socket bytes into frames for a :class:`BufferedStompClient`."""

    def __init__(self, frame_handler: "BufferedStompClient") -> None:
        self._frame_handler = frame_handler
        self._transport: Optional[asyncio.Transport] = None
        self._protocol = StompProtocol()

    @property
    def version(self) -> str:
        return self._protocol.version

    @version.setter
    def version(self, version: str) -> None:
        self._protocol.version = version

    def connection_made(self, transport: asyncio.BaseTransport) -> None:
        logger.info("Connected")
        self._transport = cast(asyncio.Transport, transport)

    def connection_lost(self, exc: Optional[Exception]) -> None:
        logger.debug("connection lost")
        self._transport = None
        self._frame_handler.connection_lost(exc)

    def eof_received(self) -> Optional[bool]:
        logger.info("Got EOF from server")
        return None

    def data_received(self, data: Optional[bytes]) -> None:
        if not data:
            return

        self._frame_handler.data_arrived()
        self._protocol.feed_data(data)

        for frame in self._protocol.pop_frames():
            if frame.command != Responses.HEARTBEAT:
                self._frame_handler.frame_received(frame)

    def send_frame(self, frame: Frame) -> None:
        if not self._transport:
            raise StompDisconnectedError()

        logger.debug("Sending frame %s", frame)
        self._transport.write(self._protocol.serialize(frame))

    def pause_reading(self) -> None:
        if self._transport:
            self._transport.pause_reading()

    def resume_reading(self) -> None:
        if self._transport:
            self._transport.resume_reading()

    def close(self) -> None:
        # Close the transport only if already connection is made
        if self._transport:
            self._transport.close()


class BufferedStompClient:
    """A STOMP connection shared by many readers.

    MESSAGE frames are buffered per ``subscription`` header, so a consumer
    reading its own subscription never drops frames meant for another one.
    Once ``buffer_size`` frames wait in the buffers the socket stops being
    read until readers catch up.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 61613,
        login: Optional[str] = None,
        password: Optional[str] = None,
        vhost: Optional[str] = None,
        extension: str = ExtensionType.RABBITMQ,
        ssl_context: Optional[SSLContext] = None,
        client_id: Optional[str] = None,
        buffer_size: int = 1000,
        connection_timeout: float = 1,
        send_heartbeat: int = 0,
        receive_heartbeat: int = 0,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ):
        self._host = host
        self._port = port
        self._login = login
        self._password = password
        self._vhost = vhost
        self._extension = extension
        self._ssl_context = ssl_context
        self._client_id = client_id
        self._buffer_size = buffer_size
        self._connection_timeout = connection_timeout
        self._heartbeat = {"cx": send_heartbeat, "cy": receive_heartbeat}
        self._loop = loop

        self._reader: Optional[StompReader] = None
        self._connected = False
        self._connected_waiter: Optional["asyncio.Future[Frame]"] = None
        self.heartbeater: Optional[StompHeartbeater] = None
        self.server_monitor: Optional[StompServerMonitor] = None

        self._builder: FrameBuilder = builder_for(extension, client_id=client_id)

        self._buffers: Dict[str, Deque[Frame]] = {}
        self._unrouted: Deque[Frame] = deque()
        self._buffered = 0
        self._paused = False
        self._frames_available = asyncio.Event()

        self._stats: Optional[StompStats] = None
        self._stats_handler: Optional["asyncio.Task[None]"] = None
        if AIOSTOMP_QUEUE_ENABLE_STATS:
            self._stats = StompStats()

    @property
    def protocol(self) -> FrameBuilder:
        return self._builder

    @property
    def is_connected(self) -> bool:
        return self._connected

    def _connect_frame(self) -> Frame:
        headers: Dict[str, str] = OrderedDict()
        headers[Headers.Connect.ACCEPT_VERSION] = ",".join(Stomp.SUPPORTED_VERSIONS)

        if self._vhost is not None:
            headers[Headers.Connect.HOST] = self._vhost

        if self._client_id is not None:
            unique_id = uuid.uuid4()
            headers[Headers.Connect.CLIENT_ID] = f"{self._client_id}-{unique_id}"

        if self._heartbeat["cx"] or self._heartbeat["cy"]:
            headers[Headers.Connect.HEART_BEAT] = "{},{}".format(
                self._heartbeat["cx"], self._heartbeat["cy"]
            )

        if self._login is not None:
            headers[Headers.Connect.LOGIN] = self._login

        if self._password is not None:
            headers[Headers.Connect.PASSCODE] = self._password

        return Frame(Commands.CONNECT, headers)

    async def connect(self) -> None:
        loop = self._loop or asyncio.get_running_loop()

        logger.info("Connecting to stomp server: %s:%s", self._host, self._port)

        self._connected_waiter = asyncio.get_running_loop().create_future()

        try:
            async with async_timeout.timeout(self._connection_timeout):
                _, proto = await loop.create_connection(
                    functools.partial(StompReader, self),
                    host=self._host,
                    port=self._port,
                    ssl=self._ssl_context,
                )
                self._reader = cast(StompReader, proto)
                self._reader.send_frame(self._connect_frame())

                frame = await self._connected_waiter
        except asyncio.TimeoutError:
            logger.error("No CONNECTED frame within %ss", self._connection_timeout)
            self.close()
            raise StompDisconnectedError("Timed out waiting for CONNECTED frame")
        except StompError:
            self.close()
            raise

        await self._handle_connected(frame)

    async def _handle_connected(self, frame: Frame) -> None:
        version = frame.get(Headers.Connected.VERSION, Stomp.V1_0)
        logger.info(
            "Connected to %s, STOMP %s",
            frame.get(Headers.Connected.SERVER, "unknown server"),
            version,
        )

        if self._reader:
            self._reader.version = version
        self._builder = builder_for(self._extension, version, self._client_id)
        self._connected = True

        if self._stats and self._stats_handler is None:
            self._stats_handler = asyncio.ensure_future(self._stats.run())

        heartbeat = frame.get(Headers.Connected.HEART_BEAT)
        logger.debug("Expecting heartbeats: %s", heartbeat)
        if not heartbeat:
            return

        sx, sy = (int(x) for x in heartbeat.split(","))

        if self._heartbeat["cx"] and sy and self._reader and self._reader._transport:
            interval = max(self._heartbeat["cx"], sy)
            logger.debug("Sending heartbeats every %sms", interval)
            self.heartbeater = StompHeartbeater(
                self._reader._transport, interval=interval
            )
            await self.heartbeater.start()

        if self._heartbeat["cy"] and sx:
            interval = max(self._heartbeat["cy"], sx)
            logger.debug("Expecting server data at least every %sms", interval)
            self.server_monitor = StompServerMonitor(self._server_silent, interval=interval)
            await self.server_monitor.start()

    def data_arrived(self) -> None:
        if self.server_monitor:
            self.server_monitor.received()

    def _server_silent(self) -> None:
        self.server_monitor = None
        self.close()

    def frame_received(self, frame: Frame) -> None:
        waiter = self._connected_waiter

        if frame.command == Responses.CONNECTED:
            if waiter and not waiter.done():
                waiter.set_result(frame)
            return

        if frame.command == Responses.ERROR:
            message = frame.get(Headers.Error.MESSAGE)
            logger.error("Received error: %s", message)
            logger.debug("Error details: %s", frame.body)

            if waiter and not waiter.done():
                waiter.set_exception(StompError(message, frame.body))
                return

        if frame.command == Responses.RECEIPT:
            logger.debug("Ignoring receipt %s", frame)
            return

        if self._stats:
            self._stats.increment("rec_msg")

        if frame.command == Responses.MESSAGE:
            key = frame.get(Headers.Message.SUBSCRIPTION)
            if key is None:
                logger.warning("MESSAGE frame without subscription header: %s", frame)
                return

            self._buffers.setdefault(key, deque()).append(frame)
        else:
            self._unrouted.append(frame)

        self._buffered += 1
        if self._stats:
            self._stats.increment("buffered")

        if self._buffered >= self._buffer_size and not self._paused:
            logger.warning("Frame buffer full (%s), pausing reads", self._buffered)
            self._paused = True
            if self._reader:
                self._reader.pause_reading()

        self._frames_available.set()

    def _pop_frame(self, subscription_id: str) -> Optional[Frame]:
        frame: Optional[Frame] = None

        buffer = self._buffers.get(subscription_id)
        if buffer:
            frame = buffer.popleft()
        elif self._unrouted:
            frame = self._unrouted.popleft()

        if frame is None:
            return None

        self._buffered -= 1
        if self._stats:
            self._stats.increment("buffered", -1)

        if self._paused and self._buffered < self._buffer_size:
            logger.debug("Frame buffer drained, resuming reads")
            self._paused = False
            if self._reader:
                self._reader.resume_reading()

        return frame

    def buffered(self, subscription_id: Optional[str] = None) -> List[Frame]:
        if subscription_id is None:
            frames = list(self._unrouted)
            for buffer in self._buffers.values():
                frames.extend(buffer)
            return frames

        return list(self._buffers.get(subscription_id, ()))

    async def _wait_for_frame(self, subscription_id: str) -> Frame:
        while True:
            frame = self._pop_frame(subscription_id)
            if frame is not None:
                return frame

            if not self._connected:
                raise StompDisconnectedError()

            self._frames_available.clear()
            await self._frames_available.wait()

    async def read_message_frame(
        self, subscription_id: str, timeout: Optional[float] = None
    ) -> Optional[Frame]:
        """Next frame for ``subscription_id``.

        ``timeout`` is in seconds: 0 returns at once, None waits forever.
        Returns None when the wait expires.
        """
        frame = self._pop_frame(subscription_id)
        if frame is not None:
            return frame

        if timeout == 0:
            # let the loop deliver data already sitting on the socket
            await asyncio.sleep(0)
            return self._pop_frame(subscription_id)

        try:
            async with async_timeout.timeout(timeout):
                return await self._wait_for_frame(subscription_id)
        except asyncio.TimeoutError:
            return None

    def send_frame(self, frame: Frame) -> None:
        if self._reader is None:
            raise StompDisconnectedError()

        self._reader.send_frame(frame)

        if self._stats:
            self._stats.increment("sent_frames")

    def connection_lost(self, exc: Optional[Exception]) -> None:
        if self._connected:
            logger.info("Connection lost: %s", exc)

        self._connected = False
        self._reader = None

        if self.heartbeater:
            self.heartbeater.shutdown()
            self.heartbeater = None

        if self.server_monitor:
            self.server_monitor.shutdown()
            self.server_monitor = None

        waiter = self._connected_waiter
        if waiter and not waiter.done():
            waiter.set_exception(StompDisconnectedError(exc))

        # wake up readers, they raise once their buffer is empty
        self._frames_available.set()

    async def disconnect(self) -> None:
        if self._connected and self._reader:
            self._reader.send_frame(Frame(Commands.DISCONNECT))

        self.close()

    def close(self) -> None:
        self._connected = False

        if self._reader:
            self._reader.close()

        if self.heartbeater:
            self.heartbeater.shutdown()
            self.heartbeater = None

        if self.server_monitor:
            self.server_monitor.shutdown()
            self.server_monitor = None

        if self._stats_handler:
            self._stats_handler.cancel()
            self._stats_handler = None

        self._frames_available.set()
