import logging
import uuid
from typing import Any

from aiostomp_queue import headers
from aiostomp_queue.destination import StompDestination
from aiostomp_queue.stomp import Headers

logger = logging.getLogger("aiostomp_queue.subscription")


class SubscriptionState:
    UNSUBSCRIBED = "unsubscribed"
    SUBSCRIBED = "subscribed"


class SubscriptionManager:
    """Sends the single SUBSCRIBE frame a consumer needs before reading.

    The state only moves from UNSUBSCRIBED to SUBSCRIBED, and only once the
    SUBSCRIBE frame went out. Temporary destinations are routed by the broker
    to their deterministic subscription id, so nothing is ever sent for them.
    """

    def __init__(self, client: Any, destination: StompDestination):
        self._client = client
        self.destination = destination
        self.state = SubscriptionState.UNSUBSCRIBED

        if destination.is_temporary:
            self.id = "/{}/{}".format(destination.type, destination.stomp_name)
        else:
            self.id = uuid.uuid4().hex

    @property
    def is_subscribed(self) -> bool:
        if self.destination.is_temporary:
            return True

        return self.state == SubscriptionState.SUBSCRIBED

    def ensure_subscribed(self, ack_mode: str, prefetch_count: int) -> None:
        if self.is_subscribed:
            return

        frame = self._client.protocol.build_subscribe_frame(
            self.id, self.destination.queue_name, ack_mode
        )

        extra_headers = dict(self.destination.flags)
        extra_headers[Headers.Subscribe.PREFETCH_COUNT] = prefetch_count

        for key, value in headers.encode_headers(extra_headers).items():
            frame[key] = value

        logger.debug(
            "Subscribing %s to %s, ack: %s", self.id, self.destination.queue_name, ack_mode
        )
        self._client.send_frame(frame)

        self.state = SubscriptionState.SUBSCRIBED
