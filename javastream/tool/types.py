"""Type definitions for field definitions and their JSON form."""

from dataclasses import dataclass

from dataclasses_json import DataClassJsonMixin

from javastream.proto import FieldDescriptor


@dataclass
class FieldDefinition(DataClassJsonMixin):
    """A field as written in a definition file or shown by the CLI.

    line is the definition file line, or None when the field was decoded
    from a stream.
    """

    type: str
    name: str
    signature: str | None
    line: int | None = None

    @classmethod
    def from_descriptor(cls, field: FieldDescriptor) -> "FieldDefinition":
        return cls(type=field.type.value, name=field.name, signature=field.field_type)

    def to_descriptor(self) -> FieldDescriptor:
        return FieldDescriptor(self.type, self.name, self.signature)
