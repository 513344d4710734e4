"""
Broker-specific construction of SUBSCRIBE, ACK, NACK and SEND frames.
"""
from typing import Dict, Optional, Type, Union

from aiostomp_queue.destination import ExtensionType
from aiostomp_queue.frame import Frame
from aiostomp_queue.stomp import Commands, Headers, Stomp


class FrameBuilder:
    """
    Generic STOMP 1.1/1.2 frames, no broker extension headers.
    """

    def __init__(self, version: str = Stomp.V1_1, client_id: Optional[str] = None):
        self.version = version
        self.client_id = client_id

    def build_subscribe_frame(
        self,
        subscription_id: str,
        destination: str,
        ack_mode: str = Headers.Subscribe.AckModes.AUTO,
        selector: Optional[str] = None,
    ) -> Frame:
        frame = Frame(Commands.SUBSCRIBE)
        frame[Headers.Subscribe.DESTINATION] = destination
        frame[Headers.Subscribe.ACK_MODE] = ack_mode
        frame[Headers.Subscribe.ID] = subscription_id

        if selector:
            frame[Headers.Subscribe.SELECTOR] = selector

        return frame

    def _acknowledge_headers(self, frame: Frame, subscription_id: str) -> Dict[str, str]:
        if self.version == Stomp.V1_2:
            return {Headers.Ack.ID: frame[Headers.Message.ACK]}

        return {
            Headers.Ack.MESSAGE_ID: frame[Headers.Message.MESSAGE_ID],
            Headers.Ack.SUBSCRIPTION: subscription_id,
        }

    def build_ack_frame(self, frame: Frame, subscription_id: str) -> Frame:
        return Frame(Commands.ACK, self._acknowledge_headers(frame, subscription_id))

    def build_nack_frame(self, frame: Frame, subscription_id: str) -> Frame:
        return Frame(Commands.NACK, self._acknowledge_headers(frame, subscription_id))

    def build_send_frame(
        self,
        destination: str,
        body: Union[str, bytes] = "",
        headers: Optional[Dict[str, str]] = None,
    ) -> Frame:
        body_b = body.encode("utf-8") if isinstance(body, str) else body

        frame = Frame(Commands.SEND, headers)
        frame[Headers.Send.DESTINATION] = destination
        # ActiveMQ determines the type of a message by the
        # inclusion of the content-length header
        frame[Headers.CONTENT_LENGTH] = str(len(body_b))
        frame.body = body_b

        return frame


class RabbitMqFrameBuilder(FrameBuilder):
    """
    RabbitMQ reads the prefetch window from the SUBSCRIBE frame.
    """

    def __init__(
        self,
        version: str = Stomp.V1_1,
        client_id: Optional[str] = None,
        prefetch_count: int = 1,
    ):
        super().__init__(version, client_id)
        self.prefetch_count = prefetch_count

    def build_subscribe_frame(
        self,
        subscription_id: str,
        destination: str,
        ack_mode: str = Headers.Subscribe.AckModes.AUTO,
        selector: Optional[str] = None,
    ) -> Frame:
        frame = super().build_subscribe_frame(
            subscription_id, destination, ack_mode, selector
        )
        frame[Headers.Subscribe.PREFETCH_COUNT] = str(self.prefetch_count)

        return frame


class ActiveMqFrameBuilder(FrameBuilder):
    """
    ActiveMQ names durable subscriptions after the client id and limits
    in-flight messages with ``activemq.prefetchSize``.
    """

    def __init__(
        self,
        version: str = Stomp.V1_1,
        client_id: Optional[str] = None,
        prefetch_size: int = 1,
    ):
        super().__init__(version, client_id)
        self.prefetch_size = prefetch_size

    def build_subscribe_frame(
        self,
        subscription_id: str,
        destination: str,
        ack_mode: str = Headers.Subscribe.AckModes.AUTO,
        selector: Optional[str] = None,
    ) -> Frame:
        frame = super().build_subscribe_frame(
            subscription_id, destination, ack_mode, selector
        )

        if ack_mode != Headers.Subscribe.AckModes.AUTO:
            frame[Headers.Subscribe.ACTIVEMQ_PREFETCH_SIZE] = str(self.prefetch_size)

        if self.client_id:
            frame[Headers.Subscribe.ACTIVEMQ_SUBSCRIPTION_NAME] = self.client_id

        return frame


class ArtemisFrameBuilder(FrameBuilder):
    pass


BUILDERS: Dict[str, Type[FrameBuilder]] = {
    ExtensionType.RABBITMQ: RabbitMqFrameBuilder,
    ExtensionType.ACTIVEMQ: ActiveMqFrameBuilder,
    ExtensionType.ARTEMIS: ArtemisFrameBuilder,
}


def builder_for(
    extension: str, version: str = Stomp.V1_1, client_id: Optional[str] = None
) -> FrameBuilder:
    return BUILDERS.get(extension, FrameBuilder)(version=version, client_id=client_id)
