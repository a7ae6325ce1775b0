"""
Input sources and output sinks for ``,`` and ``.``.

An input source hands out one byte at a time and reports end of input as
``None``; it never raises for a drained stream.
"""

from __future__ import annotations

import sys
from typing import List, Optional, Protocol, TextIO, Union


class InputSource(Protocol):
    def read_byte(self) -> Optional[int]:
        ...


class OutputSink(Protocol):
    def write_byte(self, value: int) -> None:
        ...


class LineInput:
    """Blocks for one line per read and keeps only its first byte."""

    def __init__(self, stream: Optional[TextIO] = None, encoding: str = "utf-8"):
        self.stream = stream
        self.encoding = encoding

    def read_byte(self) -> Optional[int]:
        stream = self.stream if self.stream is not None else sys.stdin
        line = stream.readline()
        if not line:
            return None
        return line.encode(self.encoding)[0]


class BytesInput:
    def __init__(self, data: Union[bytes, str] = b""):
        if isinstance(data, str):
            data = data.encode("utf-8")
        self.data = bytes(data)
        self.index = 0

    def read_byte(self) -> Optional[int]:
        if self.index >= len(self.data):
            return None
        value = self.data[self.index]
        self.index += 1
        return value

    @property
    def remaining(self) -> int:
        return len(self.data) - self.index


class BufferOutput:
    def __init__(self):
        self.buffer: List[int] = []

    def write_byte(self, value: int) -> None:
        self.buffer.append(value & 0xFF)

    def getvalue(self) -> bytes:
        return bytes(self.buffer)


class TeeOutput(BufferOutput):
    """Forwards each byte to another sink and keeps a copy."""

    def __init__(self, sink: OutputSink):
        super().__init__()
        self.sink = sink

    def write_byte(self, value: int) -> None:
        super().write_byte(value)
        self.sink.write_byte(value)


class StreamOutput(BufferOutput):
    """Writes each byte as a character to a text stream, keeping a copy."""

    def __init__(self, stream: Optional[TextIO] = None):
        super().__init__()
        self.stream = stream

    def write_byte(self, value: int) -> None:
        super().write_byte(value)
        stream = self.stream if self.stream is not None else sys.stdout
        stream.write(chr(value & 0xFF))
        stream.flush()
