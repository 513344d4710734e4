import logging
from typing import Any

from aiostomp_queue import headers
from aiostomp_queue.destination import StompDestination
from aiostomp_queue.errors import InvalidDestinationError, InvalidMessageError
from aiostomp_queue.interfaces import Producer
from aiostomp_queue.message import StompMessage

logger = logging.getLogger("aiostomp_queue.producer")


class StompProducer(Producer):
    def __init__(self, client: Any):
        self._client = client

    def send(self, destination: StompDestination, message: StompMessage) -> None:
        InvalidDestinationError.assert_instance_of(destination, StompDestination)
        InvalidMessageError.assert_instance_of(message, StompMessage)

        encoded = {key: headers.to_text(value) for key, value in message.headers.items()}
        encoded.update(headers.encode_properties(message.properties))

        frame = self._client.protocol.build_send_frame(
            destination.queue_name, message.body, encoded
        )
        logger.debug("Sending message to %s", destination.queue_name)

        self._client.send_frame(frame)
