# -*- coding:utf-8 -*-
import logging
import itertools
from collections import deque
from typing import List, Dict, Union, Optional, Deque

from aiostomp_queue.frame import Frame
from aiostomp_queue.stomp import Stomp, Responses, Headers

logger = logging.getLogger("aiostomp_queue.protocol")


class StompProtocol:
    """Incremental STOMP wire codec.

    Bytes read from the socket are pushed with :meth:`feed_data`, complete
    frames are collected with :meth:`pop_frames`. :meth:`serialize` turns a
    :class:`Frame` back into bytes ready for the transport.
    """

    HEART_BEAT = b"\n"
    EOF = b"\x00"
    CRLFCRLR = [b"\r", b"\n", b"\r", b"\n"]

    MAX_DATA_LENGTH = 1024 * 1024 * 100
    BODY_COMMANDS = ("SEND", "MESSAGE", "ERROR")

    def __init__(self, version: str = Stomp.V1_1) -> None:
        self._pending_parts: List[bytes] = []
        self._frames_ready: List[Frame] = []

        self.processed_headers = False
        self.awaiting_command = True
        self.read_length = 0
        self.content_length = -1
        self.previous_byte: Optional[bytes] = None

        self.action: Optional[str] = None
        self.headers: Dict[str, str] = {}
        self.current_command: Deque[int] = deque()

        self.version = version

    def _decode(self, byte_data: Union[str, bytes, bytearray]) -> str:
        try:
            if isinstance(byte_data, (bytes, bytearray)):
                return byte_data.decode("utf-8")
            if isinstance(byte_data, str):
                return byte_data
            else:
                raise TypeError("Must be bytes or string")

        except UnicodeDecodeError:
            logger.error("string was: %s", byte_data)
            raise

    def _decode_header(self, header: bytes) -> str:
        if self.version == Stomp.V1_0:
            return self._decode(header)

        decoded = []
        stream: Deque[int] = deque(header)

        while stream:
            _b = bytes([stream.popleft()])
            if _b != b"\\" or not stream:
                decoded.append(_b)
                continue

            _next = bytes([stream.popleft()])
            if _next == b"n":
                decoded.append(b"\n")
            elif _next == b"c":
                decoded.append(b":")
            elif _next == b"\\":
                decoded.append(b"\\")
            elif _next == b"r":
                decoded.append(b"\r")
            else:
                stream.appendleft(_next[0])
                decoded.append(_b)

        return self._decode(b"".join(decoded))

    def _encode(self, value: Union[str, bytes]) -> bytes:
        if isinstance(value, str):
            return value.encode("utf-8")

        return value

    def _encode_header(self, header_value: object) -> str:
        value = "{}".format(header_value)
        if self.version == Stomp.V1_0:
            return value

        encoded = []
        for c in value:
            if c == "\n":
                encoded.append("\\n")
            elif c == ":":
                encoded.append("\\c")
            elif c == "\\":
                encoded.append("\\\\")
            elif c == "\r":
                encoded.append("\\r")
            else:
                encoded.append(c)

        return "".join(encoded)

    def reset(self) -> None:
        self._frames_ready = []
        self.processed_headers = False
        self.awaiting_command = True
        self.read_length = 0
        self.content_length = -1
        self.previous_byte = None
        self.current_command.clear()

    def feed_data(self, inp: bytes) -> None:
        data: Deque[int] = deque(inp)

        while data:
            b = bytes([data.popleft()])

            if (
                not self.processed_headers
                and self.previous_byte == self.EOF
                and b == self.EOF
            ):
                continue

            if not self.processed_headers:
                if self.awaiting_command and b in (b"\n", b"\r"):
                    if b == b"\n":
                        self._frames_ready.append(
                            Frame(Responses.HEARTBEAT, headers={}, body=None)
                        )
                    continue

                self.awaiting_command = False

                self.current_command.append(b[0])
                if b == b"\n" and (
                    self.previous_byte == b"\n" or ends_with_crlf(self.current_command)
                ):
                    try:
                        self.action = self._parse_action(self.current_command)
                        self.headers = self._parse_headers(self.current_command)
                        logger.debug("Parsed action %s", self.action)

                        if (
                            self.action in self.BODY_COMMANDS
                            and Headers.CONTENT_LENGTH in self.headers
                        ):
                            self.content_length = int(
                                self.headers[Headers.CONTENT_LENGTH]
                            )
                        else:
                            self.content_length = -1
                    except ValueError:
                        logger.warning("Discarding malformed frame headers")
                        self.current_command.clear()
                        self.awaiting_command = True
                        return

                    self.processed_headers = True
                    self.current_command.clear()
            else:
                if self.content_length == -1:
                    if b == self.EOF:
                        self.process_command()
                    else:
                        self.current_command.append(b[0])

                        if len(self.current_command) > self.MAX_DATA_LENGTH:
                            logger.error("Frame body exceeds %s bytes", self.MAX_DATA_LENGTH)
                            self.current_command.clear()
                            return
                else:
                    if self.read_length == self.content_length:
                        self.process_command()
                        self.read_length = 0
                    else:
                        self.read_length += 1
                        self.current_command.append(b[0])

            self.previous_byte = b

    def process_command(self) -> None:
        body: Optional[bytes] = bytes(self.current_command)
        if body == b"":
            body = None
        frame = Frame(self.action or "", self.headers, body)
        self._frames_ready.append(frame)

        self.processed_headers = False
        self.awaiting_command = True
        self.content_length = -1
        self.current_command.clear()

    def _read_line(self, input: Deque[int]) -> bytes:
        result = []
        while input:
            b = input.popleft()
            if b == b"\n"[0]:
                break
            result.append(b)

        return bytes(result).rstrip(b"\r")

    def _parse_action(self, data: Deque[int]) -> str:
        action = self._read_line(data)
        return self._decode(action)

    def _parse_headers(self, data: Deque[int]) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        while True:
            line = self._read_line(data)
            if len(line) > 1:
                name, value = line.split(b":", 1)
                key = self._decode_header(name)
                # repeated headers: only the first occurrence counts
                if key not in headers:
                    headers[key] = self._decode_header(value)
            else:
                break
        return headers

    def serialize(self, frame: Frame) -> bytes:
        lines: List[Union[str, bytes]] = [frame.command, "\n"]

        for key, value in frame.headers.items():
            lines.append(
                f"{self._encode_header(key)}:{self._encode_header(value)}\n"
            )

        lines.append("\n")
        lines.append(frame.body or b"")
        lines.append(self.EOF)

        return b"".join(self._encode(line) for line in lines)

    def pop_frames(self) -> List[Frame]:
        frames = self._frames_ready
        self._frames_ready = []

        return frames


def ends_with_crlf(data: Deque[int]) -> bool:
    size = len(data)
    ending = list(itertools.islice(data, size - 4, size))

    return ending == StompProtocol.CRLFCRLR
