"""Typed values carried over plain-text STOMP headers.

STOMP headers are strings only, so every typed value travels as a pair of
headers: the value itself and a ``_type_<name>`` companion holding a one
letter tag. Application properties use the same scheme under the
``_property_`` prefix::

    >>> encode("prefetch-count", 10)
    {'prefetch-count': '10', '_type_prefetch-count': 'i'}
    >>> encode_property("retries", True)
    {'_property_retries': 'true', '_property__type_retries': 'b'}
"""
import logging
from typing import Any, Callable, Dict, Mapping, Tuple, Union

from aiostomp_queue.stomp import Headers

logger = logging.getLogger("aiostomp_queue.headers")

TYPE_PREFIX = "_type_"
PROPERTY_PREFIX = "_property_"

TYPE_STRING = "s"
TYPE_INT = "i"
TYPE_BOOL = "b"

HeaderValue = Union[str, int, bool]

RESERVED_HEADERS = (Headers.Message.REDELIVERED,)


def _encode_bool(value: bool) -> str:
    return "true" if value else "false"


def _decode_bool(value: str) -> bool:
    return value == "true"


# bool has to come before int, ``isinstance(True, int)`` holds
_ENCODERS: Tuple[Tuple[type, str, Callable[[Any], str]], ...] = (
    (bool, TYPE_BOOL, _encode_bool),
    (int, TYPE_INT, str),
    (str, TYPE_STRING, str),
)

_DECODERS: Dict[str, Callable[[str], HeaderValue]] = {
    TYPE_STRING: str,
    TYPE_INT: int,
    TYPE_BOOL: _decode_bool,
}


def _encode_value(name: str, value: Any) -> Tuple[str, str]:
    for klass, tag, encoder in _ENCODERS:
        if isinstance(value, klass):
            return encoder(value), tag

    raise TypeError(
        'Value type is not valid for header "{}": {}'.format(
            name, type(value).__name__
        )
    )


def _decode_value(name: str, value: str, tag: str) -> HeaderValue:
    decoder = _DECODERS.get(tag)
    if decoder is None:
        logger.debug("Unknown type tag %r for %s, keeping string", tag, name)
        return value

    try:
        return decoder(value)
    except ValueError:
        logger.debug("Cannot cast %s=%r with tag %r, keeping string", name, value, tag)
        return value


def encode(name: str, value: HeaderValue) -> Dict[str, str]:
    encoded, tag = _encode_value(name, value)

    return {name: encoded, TYPE_PREFIX + name: tag}


def encode_property(name: str, value: HeaderValue) -> Dict[str, str]:
    encoded, tag = _encode_value(name, value)

    return {
        PROPERTY_PREFIX + name: encoded,
        PROPERTY_PREFIX + TYPE_PREFIX + name: tag,
    }


def to_text(value: Any) -> str:
    """Untyped header text, booleans spelled the way the wire expects."""
    if isinstance(value, bool):
        return _encode_bool(value)

    return str(value)


def encode_headers(headers: Mapping[str, HeaderValue]) -> Dict[str, str]:
    encoded: Dict[str, str] = {}
    for name, value in headers.items():
        encoded.update(encode(name, value))

    return encoded


def encode_properties(properties: Mapping[str, HeaderValue]) -> Dict[str, str]:
    encoded: Dict[str, str] = {}
    for name, value in properties.items():
        encoded.update(encode_property(name, value))

    return encoded


def decode(
    headers: Mapping[str, str]
) -> Tuple[Dict[str, str], Dict[str, HeaderValue]]:
    """Split frame headers into plain headers and typed properties."""
    plain: Dict[str, str] = {}
    properties: Dict[str, HeaderValue] = {}

    property_type_prefix = PROPERTY_PREFIX + TYPE_PREFIX

    for key, value in headers.items():
        if key.startswith(property_type_prefix):
            continue

        if key.startswith(PROPERTY_PREFIX):
            name = key[len(PROPERTY_PREFIX):]
            tag = headers.get(property_type_prefix + name)

            if tag is None:
                properties[name] = value
            else:
                properties[name] = _decode_value(name, value, tag)
            continue

        if key in RESERVED_HEADERS:
            continue

        plain[key] = value

    return plain, properties
