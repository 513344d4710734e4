NULL = b'\x00'
NEWLINE = b'\n'


class Stomp:
    V1_0 = '1.0'
    V1_1 = '1.1'
    V1_2 = '1.2'

    SUPPORTED_VERSIONS = (V1_1, V1_2)


class Commands:
    CONNECT = 'CONNECT'
    SEND = 'SEND'
    DISCONNECT = 'DISCONNECT'
    SUBSCRIBE = 'SUBSCRIBE'
    ACK = 'ACK'

    # Version 1.1
    NACK = 'NACK'


class Responses:
    CONNECTED = 'CONNECTED'
    ERROR = 'ERROR'
    MESSAGE = 'MESSAGE'
    RECEIPT = 'RECEIPT'

    HEARTBEAT = 'HEARTBEAT'


class Headers:
    CONTENT_LENGTH = 'content-length'
    CONTENT_TYPE = 'content-type'
    RECEIPT_REQUEST = 'receipt'

    class Send:
        DESTINATION = 'destination'
        CORRELATION_ID = 'correlation-id'
        REPLY_TO = 'reply-to'

    class Message:
        MESSAGE_ID = 'message-id'
        DESTINATION = 'destination'
        CORRELATION_ID = 'correlation-id'
        REPLY_TO = 'reply-to'
        REDELIVERED = 'redelivered'
        TIMESTAMP = 'timestamp'
        SUBSCRIPTION = 'subscription'
        ACK = 'ack'

    class Subscribe:
        DESTINATION = 'destination'
        ACK_MODE = 'ack'
        ID = 'id'
        SELECTOR = 'selector'

        # Broker extensions
        DURABLE = 'durable'
        AUTO_DELETE = 'auto-delete'
        EXCLUSIVE = 'exclusive'
        PREFETCH_COUNT = 'prefetch-count'
        ACTIVEMQ_PREFETCH_SIZE = 'activemq.prefetchSize'
        ACTIVEMQ_SUBSCRIPTION_NAME = 'activemq.subscriptionName'

        class AckModes:
            AUTO = 'auto'
            CLIENT = 'client'
            CLIENT_INDIVIDUAL = 'client-individual'

    class Nack:
        # RabbitMQ extension
        REQUEUE = 'requeue'

    class Connect:
        LOGIN = 'login'
        PASSCODE = 'passcode'
        CLIENT_ID = 'client-id'

        # Version 1.1
        ACCEPT_VERSION = 'accept-version'
        HOST = 'host'
        HEART_BEAT = 'heart-beat'

    class Error:
        MESSAGE = 'message'

    class Connected:
        SESSION = 'session'

        # Version 1.1
        VERSION = 'version'
        SERVER = 'server'
        HEART_BEAT = 'heart-beat'

    class Ack:
        MESSAGE_ID = 'message-id'

        # Version 1.1
        SUBSCRIPTION = 'subscription'

        # Version 1.2
        ID = 'id'
