"""Errors and the element base class for stream serialization."""

import io
from typing import BinaryIO, Self


class SerializationError(RuntimeError):
    """Raised when serialization or deserialization fails."""


class DecodeError(SerializationError):
    """Raised when the input stream is malformed or truncated."""


class EncodeError(SerializationError):
    """Raised when an in-memory element cannot be serialized."""


class MalformedDiscriminant(DecodeError):
    """Raised when a field type code is missing or unknown."""

    def __init__(self, code: int | None, position: int | None = None) -> None:
        self.code = code
        self.position = position
        if code is None:
            detail = "missing type discriminant (end of stream)"
        else:
            detail = f"invalid type discriminant 0x{code:02x}"
        super().__init__(at_offset(detail, position))


class MalformedStringEnvelope(DecodeError):
    """Raised when a field type signature is not wrapped in TC_STRING."""

    def __init__(self, tag: int | None, position: int | None = None) -> None:
        self.tag = tag
        self.position = position
        if tag is None:
            detail = "expected string envelope for field type signature, got end of stream"
        else:
            detail = f"expected string envelope for field type signature, got 0x{tag:02x}"
        super().__init__(at_offset(detail, position))


class StringDecodeError(DecodeError):
    """Raised when a modified UTF-8 string cannot be decoded."""


class StringEncodeError(EncodeError):
    """Raised when a string cannot be encoded as modified UTF-8."""


class InvalidTypeState(EncodeError):
    """Raised when a field carries a type outside the type code table."""

    def __init__(self, type: object, message: str | None = None) -> None:
        self.type = type
        super().__init__(message or f"invalid field type {type!r}")


class MissingFieldTypeSignature(EncodeError):
    """Raised when an object or array field has no type signature."""

    def __init__(self, name: object) -> None:
        self.name = name
        super().__init__(f"missing field type signature for object/array field {name!r}")


def at_offset(detail: str, position: int | None) -> str:
    if position is None:
        return detail
    return f"{detail} at offset {position}"


def position_of(stream: BinaryIO) -> int | None:
    """Current offset of a stream, or None if it cannot tell."""
    seekable = getattr(stream, "seekable", None)
    if seekable and seekable():
        return stream.tell()
    return None


class Element:
    """Base class for stream elements.

    Subclasses implement decode() and encode(); unpack() is derived from
    decode() for callers holding a byte buffer instead of a stream.
    """

    @classmethod
    def decode(cls, stream: BinaryIO) -> Self:
        """Decode one element from a binary stream."""
        raise NotImplementedError("decode() must be implemented by subclasses")

    def encode(self) -> bytes:
        """Encode this element to bytes."""
        raise NotImplementedError("encode() must be implemented by subclasses")

    @classmethod
    def unpack(cls, data: bytes | memoryview, offset: int = 0) -> tuple[Self, int]:
        """Decode an element from a byte buffer.

        Args:
            data: The bytes to decode from.
            offset: Starting offset in data.

        Returns:
            Tuple of (instance, bytes_consumed).
        """
        stream = io.BytesIO(bytes(data[offset:]))
        instance = cls.decode(stream)
        return instance, stream.tell()
