"""Broker-agnostic messaging contracts.

The STOMP classes of this package implement these so application code can be
written against the contracts alone.
"""
import abc
from typing import Any, Dict, Optional


class Destination(abc.ABC):
    @property
    @abc.abstractmethod
    def queue_name(self) -> str:
        ...


class Message(abc.ABC):
    body: str
    headers: Dict[str, str]
    properties: Dict[str, Any]
    redelivered: bool

    @abc.abstractmethod
    def get_header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        ...

    @abc.abstractmethod
    def get_property(self, name: str, default: Any = None) -> Any:
        ...


class Consumer(abc.ABC):
    @property
    @abc.abstractmethod
    def queue(self) -> Destination:
        ...

    @abc.abstractmethod
    async def receive(self, timeout: int = 0) -> Optional[Message]:
        """Wait up to ``timeout`` milliseconds for a message, 0 waits forever."""

    @abc.abstractmethod
    async def receive_no_wait(self) -> Optional[Message]:
        ...

    @abc.abstractmethod
    def acknowledge(self, message: Message) -> None:
        ...

    @abc.abstractmethod
    def reject(self, message: Message, requeue: bool = False) -> None:
        ...


class Producer(abc.ABC):
    @abc.abstractmethod
    def send(self, destination: Destination, message: Message) -> None:
        ...
