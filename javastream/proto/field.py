"""Field descriptors (fieldDesc) of a serialized class description.

A field descriptor is either primitive (primitiveDesc) or an object/array
reference (objectDesc). Only the latter carries a type signature, written
as a TC_STRING tagged string after the field name:

    fieldDesc:
      1 byte    type code        B C D F I J S Z [ L
      utf       field name
      if type code is [ or L:
        1 byte  TC_STRING
        utf     type signature   e.g. Ljava/lang/String;
"""

import struct
from collections.abc import Iterable
from dataclasses import dataclass
from typing import BinaryIO, Self

from ..log import logger
from . import utf
from .constants import TC_STRING
from .serialization import (
    DecodeError,
    Element,
    EncodeError,
    InvalidTypeState,
    MalformedStringEnvelope,
    MissingFieldTypeSignature,
    SerializationError,
    at_offset,
    position_of,
)
from .types import TYPE_NAMES, FieldType
from .types import is_object as is_object_type
from .types import is_primitive as is_primitive_type

MAX_FIELDS = 0xFFFF


def _read_byte(stream: BinaryIO) -> int | None:
    data = stream.read(1)
    return data[0] if data else None


@dataclass(frozen=True)
class FieldDescriptor(Element):
    """One field of a serialized class.

    Example:
        count = FieldDescriptor.primitive("integer", "count")
        value = FieldDescriptor.reference("object", "value", "Ljava/lang/String;")
    """

    type: FieldType
    name: str
    field_type: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.type, FieldType):
            if not isinstance(self.type, str) or self.type not in TYPE_NAMES:
                raise InvalidTypeState(self.type)
            object.__setattr__(self, "type", FieldType(self.type))
        self._validate()

    @classmethod
    def primitive(cls, type: FieldType | str, name: str) -> Self:
        """Build a primitive field descriptor."""
        if not is_primitive_type(type):
            raise InvalidTypeState(type, f"{type!r} is not a primitive field type")
        return cls(type, name)

    @classmethod
    def reference(cls, type: FieldType | str, name: str, field_type: str) -> Self:
        """Build an object or array field descriptor with its type signature."""
        if not is_object_type(type):
            raise InvalidTypeState(type, f"{type!r} is not an object or array field type")
        return cls(type, name, field_type)

    def is_type_valid(self) -> bool:
        return isinstance(self.type, FieldType)

    def is_primitive(self) -> bool:
        return self.is_type_valid() and self.type.is_primitive

    def is_object(self) -> bool:
        return self.is_type_valid() and self.type.is_object

    def _validate(self) -> None:
        if not self.is_type_valid():
            raise InvalidTypeState(self.type)
        if self.type.is_object and self.field_type is None:
            raise MissingFieldTypeSignature(self.name)
        if self.type.is_primitive and self.field_type is not None:
            raise InvalidTypeState(
                self.type, f"primitive field {self.name!r} cannot carry a type signature"
            )

    @classmethod
    def decode(cls, stream: BinaryIO) -> Self:
        position = position_of(stream)
        try:
            type = FieldType.from_code(_read_byte(stream), position)
        except DecodeError as e:
            logger.debug("Rejected field descriptor: %s", e)
            raise

        name = utf.decode(stream)

        field_type = None
        if type.is_object:
            position = position_of(stream)
            tag = _read_byte(stream)
            if tag != TC_STRING:
                logger.debug("Rejected type signature envelope of field %r", name)
                raise MalformedStringEnvelope(tag, position)
            field_type = utf.decode(stream)

        return cls(type, name, field_type)

    def encode(self) -> bytes:
        self._validate()

        encoded = bytearray()
        encoded.append(self.type.code)
        encoded.extend(utf.encode(self.name))

        if self.type.is_object:
            encoded.append(TC_STRING)
            encoded.extend(utf.encode(self.field_type))

        return bytes(encoded)


def decode_field_list(stream: BinaryIO) -> list[FieldDescriptor]:
    """Decode the field section of a class description.

    The section is a 2-byte big-endian count followed by that many field
    descriptors. Errors keep their type; the failing field index is added
    as a note.
    """
    position = position_of(stream)
    prefix = stream.read(2)
    if len(prefix) < 2:
        raise DecodeError(at_offset("truncated field count", position))
    (count,) = struct.unpack(">H", prefix)
    logger.debug("Decoding %d field descriptors", count)

    fields = []
    for index in range(count):
        try:
            fields.append(FieldDescriptor.decode(stream))
        except SerializationError as e:
            e.add_note(f"while decoding field {index}")
            raise

    return fields


def encode_field_list(fields: Iterable[FieldDescriptor]) -> bytes:
    """Encode field descriptors with their 2-byte count prefix."""
    fields = list(fields)
    if len(fields) > MAX_FIELDS:
        raise EncodeError(f"{len(fields)} fields exceed the limit of {MAX_FIELDS}")
    logger.debug("Encoding %d field descriptors", len(fields))

    encoded = bytearray(struct.pack(">H", len(fields)))
    for index, field in enumerate(fields):
        try:
            encoded.extend(field.encode())
        except SerializationError as e:
            e.add_note(f"while encoding field {index}")
            raise

    return bytes(encoded)
