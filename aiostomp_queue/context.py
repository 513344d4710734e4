import logging
import uuid
from typing import TYPE_CHECKING, Any, Dict, Optional

from aiostomp_queue.consumer import StompConsumer
from aiostomp_queue.destination import DestinationType, ExtensionType, StompDestination
from aiostomp_queue.errors import InvalidDestinationError
from aiostomp_queue.message import StompMessage
from aiostomp_queue.producer import StompProducer

if TYPE_CHECKING:
    from aiostomp_queue.connection import LazyConnection

logger = logging.getLogger("aiostomp_queue.context")


class StompContext:
    def __init__(self, connection: "LazyConnection", extension: str = ExtensionType.RABBITMQ):
        self._connection = connection
        self.extension = extension

    def create_message(
        self,
        body: str = "",
        properties: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> StompMessage:
        return StompMessage(body, properties, headers)

    def create_queue(self, name: str) -> StompDestination:
        return StompDestination(self.extension, name, DestinationType.QUEUE)

    def create_topic(self, name: str) -> StompDestination:
        if self.extension == ExtensionType.RABBITMQ:
            return StompDestination(self.extension, name, DestinationType.EXCHANGE)

        return StompDestination(self.extension, name, DestinationType.TOPIC)

    def create_temporary_queue(self) -> StompDestination:
        return StompDestination(
            self.extension, uuid.uuid4().hex, DestinationType.TEMP_QUEUE
        )

    async def create_consumer(self, destination: StompDestination) -> StompConsumer:
        InvalidDestinationError.assert_instance_of(destination, StompDestination)

        client = await self._connection.get()
        return StompConsumer(client, destination)

    async def create_producer(self) -> StompProducer:
        client = await self._connection.get()
        return StompProducer(client)

    async def close(self) -> None:
        client = self._connection.peek()
        if client is not None:
            logger.debug("Closing stomp connection")
            await client.disconnect()
