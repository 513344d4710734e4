from typing import Any, Optional

from aiostomp_queue.ack import AckController, AckMode
from aiostomp_queue.destination import StompDestination
from aiostomp_queue.errors import ConfigurationError, InvalidDestinationError
from aiostomp_queue.interfaces import Consumer
from aiostomp_queue.message import StompMessage
from aiostomp_queue.receiver import ReceiveEngine
from aiostomp_queue.subscription import SubscriptionManager


class StompConsumer(Consumer):
    """Reads and acknowledges messages of a single STOMP destination.

    The SUBSCRIBE frame is sent lazily, on the first receive, using the ack
    mode and prefetch count configured at that moment::

        consumer = StompConsumer(client, destination)
        consumer.prefetch_count = 10

        message = await consumer.receive(timeout=5000)
        if message:
            consumer.acknowledge(message)
    """

    ACK_AUTO = AckMode.AUTO
    ACK_CLIENT = AckMode.CLIENT
    ACK_CLIENT_INDIVIDUAL = AckMode.CLIENT_INDIVIDUAL

    def __init__(self, client: Any, destination: StompDestination):
        InvalidDestinationError.assert_instance_of(destination, StompDestination)

        self._client = client
        self._destination = destination
        self._prefetch_count = 1

        self._subscription = SubscriptionManager(client, destination)
        self._ack = AckController(client, self._subscription.id)
        self._receiver = ReceiveEngine(client, self._subscription, self._subscribe)

    @property
    def queue(self) -> StompDestination:
        return self._destination

    @property
    def subscription_id(self) -> str:
        return self._subscription.id

    @property
    def ack_mode(self) -> str:
        return self._ack.ack_mode

    @ack_mode.setter
    def ack_mode(self, mode: str) -> None:
        self._ack.ack_mode = mode

    @property
    def prefetch_count(self) -> int:
        return self._prefetch_count

    @prefetch_count.setter
    def prefetch_count(self, count: int) -> None:
        if isinstance(count, bool) or not isinstance(count, int) or count < 1:
            raise ConfigurationError(
                'Prefetch count must be a positive integer: "{}"'.format(count)
            )

        self._prefetch_count = count

    def _subscribe(self) -> None:
        self._subscription.ensure_subscribed(self.ack_mode, self.prefetch_count)

    async def receive(self, timeout: int = 0) -> Optional[StompMessage]:
        return await self._receiver.receive(timeout)

    async def receive_no_wait(self) -> Optional[StompMessage]:
        return await self._receiver.receive_no_wait()

    def acknowledge(self, message: StompMessage) -> None:
        self._ack.acknowledge(message)

    def reject(self, message: StompMessage, requeue: bool = False) -> None:
        self._ack.reject(message, requeue)

    def __repr__(self) -> str:
        return "<StompConsumer: {} id: {}>".format(
            self._destination.stomp_name, self.subscription_id
        )
