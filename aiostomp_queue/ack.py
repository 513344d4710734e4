import logging
from typing import Any

from aiostomp_queue.errors import ConfigurationError, InvalidMessageError
from aiostomp_queue.frame import Frame
from aiostomp_queue.message import StompMessage
from aiostomp_queue.stomp import Headers

logger = logging.getLogger("aiostomp_queue.ack")


class AckMode:
    AUTO = Headers.Subscribe.AckModes.AUTO
    CLIENT = Headers.Subscribe.AckModes.CLIENT
    CLIENT_INDIVIDUAL = Headers.Subscribe.AckModes.CLIENT_INDIVIDUAL

    ALL = (AUTO, CLIENT, CLIENT_INDIVIDUAL)


class AckController:
    """Holds the ack mode and sends ACK/NACK frames for received messages."""

    def __init__(
        self, client: Any, subscription_id: str, ack_mode: str = AckMode.CLIENT_INDIVIDUAL
    ):
        self._client = client
        self._subscription_id = subscription_id
        self._ack_mode = AckMode.CLIENT_INDIVIDUAL
        self.ack_mode = ack_mode

    @property
    def ack_mode(self) -> str:
        return self._ack_mode

    @ack_mode.setter
    def ack_mode(self, mode: str) -> None:
        if mode not in AckMode.ALL:
            raise ConfigurationError('Ack mode is not valid: "{}"'.format(mode))

        self._ack_mode = mode

    def _origin_frame(self, message: Any) -> Frame:
        InvalidMessageError.assert_instance_of(message, StompMessage)

        if message.frame is None:
            raise InvalidMessageError(
                "The message must be a StompMessage returned by a consumer receive."
            )

        return message.frame

    def acknowledge(self, message: StompMessage) -> None:
        origin = self._origin_frame(message)

        frame = self._client.protocol.build_ack_frame(origin, self._subscription_id)
        logger.debug("Acknowledging message %s", origin.get(Headers.Message.MESSAGE_ID))

        self._client.send_frame(frame)

    def reject(self, message: StompMessage, requeue: bool = False) -> None:
        origin = self._origin_frame(message)

        frame = self._client.protocol.build_nack_frame(origin, self._subscription_id)
        frame[Headers.Nack.REQUEUE] = "true" if requeue else "false"
        logger.debug(
            "Rejecting message %s, requeue: %s",
            origin.get(Headers.Message.MESSAGE_ID),
            requeue,
        )

        self._client.send_frame(frame)
