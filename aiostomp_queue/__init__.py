__version__ = '0.1.0'

from aiostomp_queue.ack import AckMode  # noqa
from aiostomp_queue.client import BufferedStompClient  # noqa
from aiostomp_queue.connection import StompConnectionFactory  # noqa
from aiostomp_queue.consumer import StompConsumer  # noqa
from aiostomp_queue.context import StompContext  # noqa
from aiostomp_queue.destination import DestinationType, ExtensionType, StompDestination  # noqa
from aiostomp_queue.frame import Frame  # noqa
from aiostomp_queue.message import StompMessage  # noqa
from aiostomp_queue.producer import StompProducer  # noqa
