from typing import Any, Optional


class StompError(Exception):
    def __init__(self, message: Optional[str], detail: Any):
        super().__init__(message)
        self.detail = detail


class StompDisconnectedError(Exception):
    pass


class StompQueueError(Exception):
    pass


class ConfigurationError(StompQueueError, ValueError):
    pass


class InvalidMessageError(StompQueueError):
    @classmethod
    def assert_instance_of(cls, message: Any, klass: type) -> None:
        if not isinstance(message, klass):
            raise cls(
                "The message must be an instance of {} but it is {}.".format(
                    klass.__name__, type(message).__name__
                )
            )


class InvalidDestinationError(StompQueueError):
    @classmethod
    def assert_instance_of(cls, destination: Any, klass: type) -> None:
        if not isinstance(destination, klass):
            raise cls(
                "The destination must be an instance of {} but got {}.".format(
                    klass.__name__, type(destination).__name__
                )
            )


class UnexpectedFrameError(StompQueueError):
    def __init__(self, message: str, frame: Any = None):
        super().__init__(message)
        self.frame = frame
