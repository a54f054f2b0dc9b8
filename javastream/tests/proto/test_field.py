"""Tests for field descriptors"""

# pylint: disable=redefined-outer-name,unused-variable,expression-not-assigned,singleton-comparison

import io

from pytest import raises

from javastream.proto import (
    TC_STRING,
    FieldDescriptor,
    FieldType,
    InvalidTypeState,
    MalformedDiscriminant,
    MalformedStringEnvelope,
    MissingFieldTypeSignature,
    StringDecodeError,
    StringEncodeError,
)

COUNT = b"I\x00\x05count"
VALUE = b"L\x00\x05value" + bytes([TC_STRING]) + b"\x00\x12Ljava/lang/String;"
ITEMS = b"[\x00\x05items" + bytes([TC_STRING]) + b"\x00\x13[Ljava/lang/Object;"

PRIMITIVES = ["byte", "char", "double", "float", "integer", "long", "short", "boolean"]


class ReadOnlyStream:
    """A stream that only supports read(n), like a socket reader."""

    def __init__(self, data: bytes) -> None:
        self._stream = io.BytesIO(data)

    def read(self, size: int) -> bytes:
        return self._stream.read(size)


def describe_decode():
    def decodes_primitive_field(expect, stream):
        field = FieldDescriptor.decode(stream(COUNT))
        expect(field) == FieldDescriptor(FieldType.INTEGER, "count")
        expect(field.type) == "integer"
        expect(field.field_type) == None

    def decodes_object_field(expect, stream):
        field = FieldDescriptor.decode(stream(VALUE))
        expect(field.type) == FieldType.OBJECT
        expect(field.name) == "value"
        expect(field.field_type) == "Ljava/lang/String;"

    def decodes_array_field(expect, stream):
        field = FieldDescriptor.decode(stream(ITEMS))
        expect(field) == FieldDescriptor.reference("array", "items", "[Ljava/lang/Object;")

    def consumes_exactly_one_descriptor(expect, stream):
        source = stream(VALUE, COUNT)
        expect(FieldDescriptor.decode(source).name) == "value"
        expect(source.tell()) == len(VALUE)
        expect(FieldDescriptor.decode(source).name) == "count"

    def decodes_every_primitive_code(expect, stream):
        for code, name in zip(b"BCDFIJSZ", PRIMITIVES):
            field = FieldDescriptor.decode(stream(bytes([code]), b"\x00\x01x"))
            expect(field.type) == name
            expect(field.is_primitive()) == True

    def unpacks_from_buffer_with_offset(expect):
        field, consumed = FieldDescriptor.unpack(b"\xff\xff" + COUNT + b"tail", offset=2)
        expect(field.name) == "count"
        expect(consumed) == len(COUNT)


def describe_decode_errors():
    def rejects_unknown_discriminant(expect, stream):
        for code in (0x00, ord("A"), ord("X")):
            source = stream(bytes([code]), b"\x00\x05count")
            with raises(MalformedDiscriminant) as exinfo:
                FieldDescriptor.decode(source)
            expect(exinfo.value.code) == code
            expect(exinfo.value.position) == 0
            expect(source.tell()) == 1

    def reports_discriminant_offset(expect, stream):
        source = stream(b"ab", b"X")
        source.seek(2)
        with raises(MalformedDiscriminant) as exinfo:
            FieldDescriptor.decode(source)
        expect(exinfo.value.position) == 2
        expect(str(exinfo.value)).includes("0x58 at offset 2")

    def rejects_empty_stream(expect, stream):
        with raises(MalformedDiscriminant) as exinfo:
            FieldDescriptor.decode(stream())
        expect(exinfo.value.code) == None

    def rejects_wrong_envelope_tag(expect, stream):
        # TC_REFERENCE in place of TC_STRING, followed by a valid string
        source = stream(b"L\x00\x05value", b"\x71", b"\x00\x12Ljava/lang/String;")
        with raises(MalformedStringEnvelope) as exinfo:
            FieldDescriptor.decode(source)
        expect(exinfo.value.tag) == 0x71
        expect(exinfo.value.position) == 8

    def rejects_missing_envelope_tag(expect, stream):
        with raises(MalformedStringEnvelope) as exinfo:
            FieldDescriptor.decode(stream(b"[\x00\x05items"))
        expect(exinfo.value.tag) == None

    def propagates_name_errors(expect, stream):
        with raises(StringDecodeError):
            FieldDescriptor.decode(stream(b"I\x00\x05cou"))

    def propagates_signature_errors(expect, stream):
        with raises(StringDecodeError):
            FieldDescriptor.decode(stream(b"L\x00\x01v", bytes([TC_STRING]), b"\x00"))

    def does_not_read_signature_for_primitives(expect, stream):
        source = stream(COUNT, bytes([TC_STRING]))
        FieldDescriptor.decode(source)
        expect(source.read()) == bytes([TC_STRING])


def describe_encode():
    def encodes_primitive_field(expect):
        expect(FieldDescriptor.primitive("integer", "count").encode()) == COUNT

    def encodes_object_field(expect):
        field = FieldDescriptor.reference("object", "value", "Ljava/lang/String;")
        expect(field.encode()) == VALUE

    def round_trips_decoded_bytes(expect, stream):
        for data in (COUNT, VALUE, ITEMS):
            expect(FieldDescriptor.decode(stream(data)).encode()) == data

    def round_trips_all_types(expect, stream):
        fields = [FieldDescriptor.primitive(name, f"f_{name}") for name in PRIMITIVES]
        fields.append(FieldDescriptor.reference("array", "arr", "[I"))
        fields.append(FieldDescriptor.reference("object", "obj", "Ljava/util/Map;"))
        fields.append(FieldDescriptor.reference("object", "n\x00me\U0001f600", "Lx;"))
        for field in fields:
            expect(FieldDescriptor.decode(stream(field.encode()))) == field

    def is_deterministic(expect):
        a = FieldDescriptor("long", "id")
        b = FieldDescriptor(FieldType.LONG, "id")
        expect(a) == b
        expect(a.encode()) == b.encode()
        expect(hash(a)) == hash(b)


def describe_invariants():
    def rejects_unknown_type(expect):
        with raises(InvalidTypeState) as exinfo:
            FieldDescriptor("int", "count")
        expect(exinfo.value.type) == "int"

    def rejects_object_without_signature(expect):
        with raises(MissingFieldTypeSignature) as exinfo:
            FieldDescriptor("object", "value")
        expect(exinfo.value.name) == "value"

    def rejects_primitive_with_signature(expect):
        with raises(InvalidTypeState):
            FieldDescriptor("integer", "count", "I")

    def factories_check_category(expect):
        with raises(InvalidTypeState):
            FieldDescriptor.primitive("object", "value")
        with raises(InvalidTypeState):
            FieldDescriptor.reference("integer", "count", "I")

    def is_immutable(expect):
        field = FieldDescriptor.primitive("integer", "count")
        with raises(AttributeError):
            field.name = "other"

    def encode_rejects_signature_removed_after_construction(expect):
        field = FieldDescriptor.reference("object", "value", "Ljava/lang/String;")
        object.__setattr__(field, "field_type", None)
        with raises(MissingFieldTypeSignature):
            field.encode()

    def encode_rejects_type_replaced_after_construction(expect):
        field = FieldDescriptor.primitive("integer", "count")
        object.__setattr__(field, "type", "int")
        expect(field.is_type_valid()) == False
        expect(field.is_primitive()) == False
        expect(field.is_object()) == False
        with raises(InvalidTypeState):
            field.encode()

    def propagates_name_encode_errors(expect):
        field = FieldDescriptor.primitive("integer", "x" * 0x10000)
        with raises(StringEncodeError):
            field.encode()


def describe_introspection():
    def answers_category_queries(expect):
        count = FieldDescriptor.primitive("integer", "count")
        items = FieldDescriptor.reference("array", "items", "[I")
        expect(count.is_type_valid()) == True
        expect(count.is_primitive()) == True
        expect(count.is_object()) == False
        expect(items.is_primitive()) == False
        expect(items.is_object()) == True


def describe_read_only_streams():
    def decodes_primitive_field(expect):
        field = FieldDescriptor.decode(ReadOnlyStream(COUNT))
        expect(field) == FieldDescriptor.primitive("integer", "count")

    def decodes_object_field(expect):
        field = FieldDescriptor.decode(ReadOnlyStream(VALUE))
        expect(field.field_type) == "Ljava/lang/String;"

    def rejects_discriminant_without_position(expect):
        with raises(MalformedDiscriminant) as exinfo:
            FieldDescriptor.decode(ReadOnlyStream(b"X\x00\x05count"))
        expect(exinfo.value.code) == ord("X")
        expect(exinfo.value.position) == None
        expect(str(exinfo.value)) == "invalid type discriminant 0x58"

    def rejects_envelope_without_position(expect):
        with raises(MalformedStringEnvelope) as exinfo:
            FieldDescriptor.decode(ReadOnlyStream(b"L\x00\x05value\x71"))
        expect(exinfo.value.tag) == 0x71
        expect(exinfo.value.position) == None

    def rejects_truncated_name_without_position(expect):
        with raises(StringDecodeError) as exinfo:
            FieldDescriptor.decode(ReadOnlyStream(b"I\x00"))
        expect(str(exinfo.value)) == "truncated string length"


def describe_surrogate_names():
    def rejects_split_surrogate_pair(expect):
        field = FieldDescriptor.primitive("integer", "\ud83d\ude00")
        with raises(StringEncodeError):
            field.encode()

    def round_trips_combined_character(expect, stream):
        field = FieldDescriptor.primitive("integer", "\U0001f600")
        expect(FieldDescriptor.decode(stream(field.encode()))) == field

    def round_trips_lone_surrogates(expect, stream):
        field = FieldDescriptor.reference("object", "\ude00\ud83d", "L\ud800x;")
        expect(FieldDescriptor.decode(stream(field.encode()))) == field
