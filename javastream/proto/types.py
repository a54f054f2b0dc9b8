"""Field type codes of the Java serialization field descriptor."""

from enum import StrEnum

from .serialization import MalformedDiscriminant


class FieldType(StrEnum):
    """Semantic type of a serialized field."""

    BYTE = "byte"
    CHAR = "char"
    DOUBLE = "double"
    FLOAT = "float"
    INTEGER = "integer"
    LONG = "long"
    SHORT = "short"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"

    @property
    def code(self) -> int:
        """The one-byte wire discriminant."""
        return _CODES[self]

    @property
    def is_object(self) -> bool:
        return self in _OBJECT_TYPES

    @property
    def is_primitive(self) -> bool:
        return not self.is_object

    @classmethod
    def from_code(cls, code: int | None, position: int | None = None) -> "FieldType":
        """Convert a raw discriminant byte.

        Raises:
            MalformedDiscriminant: code is None (end of stream) or unknown.
        """
        if code is None or code not in TYPE_CODES:
            raise MalformedDiscriminant(code, position)
        return TYPE_CODES[code]


PRIMITIVE_TYPE_CODES: dict[int, FieldType] = {
    ord("B"): FieldType.BYTE,
    ord("C"): FieldType.CHAR,
    ord("D"): FieldType.DOUBLE,
    ord("F"): FieldType.FLOAT,
    ord("I"): FieldType.INTEGER,
    ord("J"): FieldType.LONG,
    ord("S"): FieldType.SHORT,
    ord("Z"): FieldType.BOOLEAN,
}

OBJECT_TYPE_CODES: dict[int, FieldType] = {
    ord("["): FieldType.ARRAY,
    ord("L"): FieldType.OBJECT,
}

TYPE_CODES: dict[int, FieldType] = PRIMITIVE_TYPE_CODES | OBJECT_TYPE_CODES

_CODES = {t: code for code, t in TYPE_CODES.items()}
_OBJECT_TYPES = frozenset(OBJECT_TYPE_CODES.values())

TYPE_NAMES = frozenset(t.value for t in FieldType)


def is_type_valid(name: str) -> bool:
    """Check if a name is one of the field type names."""
    return name in TYPE_NAMES


def is_primitive(name: str) -> bool:
    """Check if a name is a primitive field type."""
    return is_type_valid(name) and FieldType(name).is_primitive


def is_object(name: str) -> bool:
    """Check if a name is an object or array field type."""
    return is_type_valid(name) and FieldType(name).is_object
