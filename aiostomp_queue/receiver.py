import logging
from typing import Any, Callable, Optional

from aiostomp_queue import headers
from aiostomp_queue.errors import ConfigurationError, UnexpectedFrameError
from aiostomp_queue.frame import Frame
from aiostomp_queue.message import StompMessage
from aiostomp_queue.stomp import Headers, Responses
from aiostomp_queue.subscription import SubscriptionManager

logger = logging.getLogger("aiostomp_queue.receiver")


class ReceiveEngine:
    def __init__(
        self,
        client: Any,
        subscription: SubscriptionManager,
        ensure_subscribed: Callable[[], None],
    ):
        self._client = client
        self._subscription = subscription
        self._ensure_subscribed = ensure_subscribed

    async def receive(self, timeout: int = 0) -> Optional[StompMessage]:
        """Wait ``timeout`` milliseconds for a message, forever when 0."""
        if timeout < 0:
            raise ConfigurationError('Timeout must not be negative: "{}"'.format(timeout))

        self._ensure_subscribed()

        seconds = timeout / 1000.0 if timeout > 0 else None
        frame = await self._client.read_message_frame(self._subscription.id, seconds)

        if frame is None:
            return None

        return self.convert_frame(frame)

    async def receive_no_wait(self) -> Optional[StompMessage]:
        self._ensure_subscribed()

        frame = await self._client.read_message_frame(self._subscription.id, 0)

        if frame is None:
            return None

        return self.convert_frame(frame)

    def convert_frame(self, frame: Frame) -> StompMessage:
        if frame.command != Responses.MESSAGE:
            error = 'Frame is not MESSAGE frame but: "{}"'.format(frame.command)

            if frame.command == Responses.ERROR:
                error += "\n{}\n{}".format(
                    frame.get(Headers.Error.MESSAGE, ""), _text(frame.body)
                )

            logger.warning("Unexpected frame on %s: %s", self._subscription.id, frame)
            raise UnexpectedFrameError(error, frame)

        plain, properties = headers.decode(frame.headers)
        redelivered = frame.get(Headers.Message.REDELIVERED) == "true"

        return StompMessage(
            body=_text(frame.body),
            properties=properties,
            headers=plain,
            redelivered=redelivered,
            frame=frame,
        )


def _text(body: Any) -> str:
    if body is None:
        return ""

    if isinstance(body, (bytes, bytearray)):
        return body.decode("utf-8")

    return body
