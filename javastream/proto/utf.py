"""Length-prefixed modified UTF-8 strings (the stream's `utf` element).

Java's modified UTF-8 differs from standard UTF-8 in two ways: U+0000 is
written as the two-byte form C0 80, and characters outside the BMP are
written as a surrogate pair, each half in the three-byte form.
"""

import struct
from typing import BinaryIO

from .serialization import StringDecodeError, StringEncodeError, at_offset, position_of

MAX_LENGTH = 0xFFFF


def _three_byte(cp: int) -> bytes:
    return bytes((0xE0 | cp >> 12, 0x80 | (cp >> 6) & 0x3F, 0x80 | cp & 0x3F))


def encode_modified_utf8(text: str) -> bytes:
    """Encode a string to modified UTF-8 without a length prefix."""
    output = bytearray()
    previous = 0

    for ch in text:
        cp = ord(ch)
        # A split pair would decode back as one supplementary character.
        if 0xD800 <= previous <= 0xDBFF and 0xDC00 <= cp <= 0xDFFF:
            raise StringEncodeError(
                f"surrogate pair U+{previous:04X} U+{cp:04X} given as separate code points"
            )
        previous = cp
        if 0 < cp < 0x80:
            output.append(cp)
        elif cp < 0x800:
            output.extend((0xC0 | cp >> 6, 0x80 | cp & 0x3F))
        elif cp < 0x10000:
            output.extend(_three_byte(cp))
        else:
            cp -= 0x10000
            output.extend(_three_byte(0xD800 | cp >> 10))
            output.extend(_three_byte(0xDC00 | cp & 0x3FF))

    return bytes(output)


def _continuation(data: bytes, index: int) -> int:
    if index >= len(data):
        raise StringDecodeError(f"truncated modified UTF-8 sequence at byte {index}")
    byte = data[index]
    if byte & 0xC0 != 0x80:
        raise StringDecodeError(f"invalid continuation byte 0x{byte:02x} at byte {index}")
    return byte & 0x3F


def _join_surrogates(code_points: list[int]) -> str:
    chars = []
    i = 0
    while i < len(code_points):
        cp = code_points[i]
        if 0xD800 <= cp <= 0xDBFF and i + 1 < len(code_points):
            low = code_points[i + 1]
            if 0xDC00 <= low <= 0xDFFF:
                chars.append(chr(0x10000 + ((cp - 0xD800) << 10) + (low - 0xDC00)))
                i += 2
                continue
        # Unpaired surrogates are legal in Java strings.
        chars.append(chr(cp))
        i += 1
    return "".join(chars)


def decode_modified_utf8(data: bytes) -> str:
    """Decode modified UTF-8 bytes without a length prefix."""
    code_points = []
    i = 0

    while i < len(data):
        byte = data[i]

        if byte == 0:
            raise StringDecodeError(f"unexpected NUL byte at byte {i}")

        if byte < 0x80:
            code_points.append(byte)
            i += 1
        elif byte & 0xE0 == 0xC0:
            code_points.append((byte & 0x1F) << 6 | _continuation(data, i + 1))
            i += 2
        elif byte & 0xF0 == 0xE0:
            code_points.append(
                (byte & 0x0F) << 12 | _continuation(data, i + 1) << 6 | _continuation(data, i + 2)
            )
            i += 3
        else:
            raise StringDecodeError(f"invalid modified UTF-8 lead byte 0x{byte:02x} at byte {i}")

    return _join_surrogates(code_points)


def encode(text: str) -> bytes:
    """Encode a string with its 2-byte big-endian length prefix."""
    if not isinstance(text, str):
        raise StringEncodeError(f"expected str, got {type(text).__name__}")

    data = encode_modified_utf8(text)
    if len(data) > MAX_LENGTH:
        raise StringEncodeError(f"encoded string is {len(data)} bytes, limit is {MAX_LENGTH}")

    return struct.pack(">H", len(data)) + data


def decode(stream: BinaryIO) -> str:
    """Decode a length-prefixed string from a binary stream."""
    position = position_of(stream)

    prefix = stream.read(2)
    if len(prefix) < 2:
        raise StringDecodeError(at_offset("truncated string length", position))
    (length,) = struct.unpack(">H", prefix)

    data = stream.read(length)
    if len(data) < length:
        raise StringDecodeError(
            at_offset(f"truncated string: expected {length} bytes, got {len(data)}", position)
        )

    try:
        return decode_modified_utf8(data)
    except StringDecodeError as e:
        e.add_note(at_offset("in string", position))
        raise
