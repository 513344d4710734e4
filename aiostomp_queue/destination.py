from typing import Dict, Optional

from aiostomp_queue.errors import ConfigurationError
from aiostomp_queue.interfaces import Destination
from aiostomp_queue.stomp import Headers


class ExtensionType:
    ACTIVEMQ = "activemq"
    RABBITMQ = "rabbitmq"
    ARTEMIS = "artemis"

    ALL = (ACTIVEMQ, RABBITMQ, ARTEMIS)


class DestinationType:
    QUEUE = "queue"
    TOPIC = "topic"
    TEMP_QUEUE = "temp-queue"
    TEMP_TOPIC = "temp-topic"

    # RabbitMQ only
    EXCHANGE = "exchange"
    AMQ_QUEUE = "amq/queue"

    TEMPORARY = (TEMP_QUEUE, TEMP_TOPIC)


class StompDestination(Destination):
    def __init__(
        self,
        extension: str = ExtensionType.RABBITMQ,
        stomp_name: str = "",
        type: str = DestinationType.QUEUE,
        routing_key: Optional[str] = None,
        durable: bool = False,
        auto_delete: bool = False,
        exclusive: bool = False,
    ):
        self.extension = extension
        self.stomp_name = stomp_name
        self.type = type
        self.routing_key = routing_key
        self.durable = durable
        self.auto_delete = auto_delete
        self.exclusive = exclusive

    @property
    def is_temporary(self) -> bool:
        return self.type in DestinationType.TEMPORARY

    @property
    def queue_name(self) -> str:
        if not self.stomp_name:
            raise ConfigurationError("Destination name is not set")

        if self.extension == ExtensionType.ARTEMIS:
            return self.stomp_name

        name = "/{}/{}".format(self.type, self.stomp_name)
        if self.routing_key:
            name += "/{}".format(self.routing_key)

        return name

    @property
    def flags(self) -> Dict[str, bool]:
        """Broker extension flags to send along with SUBSCRIBE, set ones only."""
        flags = {
            Headers.Subscribe.DURABLE: self.durable,
            Headers.Subscribe.AUTO_DELETE: self.auto_delete,
            Headers.Subscribe.EXCLUSIVE: self.exclusive,
        }

        return {name: True for name, value in flags.items() if value}

    def __repr__(self) -> str:
        return "<StompDestination: {} ({})>".format(self.stomp_name, self.type)
