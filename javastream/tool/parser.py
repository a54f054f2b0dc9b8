"""Field definition parser using Lark."""

import os
from dataclasses import dataclass
from typing import Any, TypeVar

from lark import Lark, Token
from lark.visitors import Transformer

from javastream.proto import FieldDescriptor, FieldType

from .types import FieldDefinition

_g_parser: Lark | None = None


class ValidationError(RuntimeError):
    """Raised when field definition validation fails."""


@dataclass
class _Comment:
    value: str


TFilter = TypeVar("TFilter", bound=object)


def _filter(args: list[Any], class_type: type[TFilter]) -> list[TFilter]:
    return [v for v in args if isinstance(v, class_type)]


class TreeTransformer(Transformer):
    """Transform parse tree into field definitions."""

    def comment(self, args: list[Any]) -> _Comment:
        return _Comment(value=str(args[0]).lstrip("#").strip())

    def type_name(self, args: list[Any]) -> str:
        return str(args[0])

    def name(self, args: list[Any]) -> Token:
        return args[0]

    def signature(self, args: list[Any]) -> str:
        return str(args[0])[1:-1]

    def field(self, args: list[Any]) -> FieldDefinition:
        name: Token = args[1]
        return FieldDefinition(
            type=args[0],
            name=str(name),
            signature=args[2] if len(args) > 2 else None,
            line=name.line,
        )


def validate(definitions: list[FieldDefinition]) -> list[FieldDescriptor]:
    """Validate parsed field definitions and build their descriptors."""
    seen: dict[str, int | None] = {}
    fields = []

    for definition in definitions:
        if definition.name in seen:
            raise ValidationError(
                f"Duplicate field {definition.name} on line {definition.line}, "
                f"first declared on line {seen[definition.name]}"
            )
        seen[definition.name] = definition.line

        field_type = FieldType(definition.type)
        if field_type.is_object and definition.signature is None:
            raise ValidationError(
                f"{definition.type} field {definition.name} requires a type signature"
            )
        if field_type.is_primitive and definition.signature is not None:
            raise ValidationError(
                f"{definition.type} field {definition.name} cannot have a type signature"
            )

        fields.append(definition.to_descriptor())

    return fields


def parse_definitions(text: str) -> list[FieldDefinition]:
    """Parse a field definition file without validating it."""
    global _g_parser

    if not _g_parser:
        with open(f"{os.path.dirname(__file__)}/fielddef.lark", encoding="utf-8") as f:
            grammar = f.read()

        _g_parser = Lark(grammar, parser="lalr")

    tree = _g_parser.parse(text)
    items = TreeTransformer().transform(tree).children

    return _filter(items, FieldDefinition)


def parse(text: str) -> list[FieldDescriptor]:
    """Parse and validate a field definition file."""
    return validate(parse_definitions(text))
