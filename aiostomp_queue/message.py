from typing import Any, Dict, Optional

from aiostomp_queue.frame import Frame
from aiostomp_queue.interfaces import Message
from aiostomp_queue.stomp import Headers


class StompMessage(Message):
    def __init__(
        self,
        body: str = "",
        properties: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        redelivered: bool = False,
        frame: Optional[Frame] = None,
    ):
        self.body = body
        self.properties = properties or {}
        self.headers = headers or {}
        self.redelivered = redelivered
        self.frame = frame

    def get_header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.headers.get(name, default)

    def get_property(self, name: str, default: Any = None) -> Any:
        return self.properties.get(name, default)

    @property
    def message_id(self) -> Optional[str]:
        return self.get_header(Headers.Message.MESSAGE_ID)

    @property
    def correlation_id(self) -> Optional[str]:
        return self.get_header(Headers.Message.CORRELATION_ID)

    @property
    def reply_to(self) -> Optional[str]:
        return self.get_header(Headers.Message.REPLY_TO)

    @property
    def content_type(self) -> Optional[str]:
        return self.get_header(Headers.CONTENT_TYPE)

    @property
    def timestamp(self) -> Optional[int]:
        value = self.get_header(Headers.Message.TIMESTAMP)
        if value is None:
            return None

        try:
            return int(value)
        except ValueError:
            return None

    def __repr__(self) -> str:
        return "<StompMessage: {} redelivered: {}>".format(
            self.message_id, self.redelivered
        )
