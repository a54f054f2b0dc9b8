"""Command-line interface for encoding and inspecting field descriptors."""

from __future__ import annotations

import io
import json
import logging
import sys
from typing import NoReturn

import click
from lark.exceptions import LarkError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from javastream.log import configure_logging, logger
from javastream.proto import (
    TYPE_CODES,
    FieldDescriptor,
    SerializationError,
    decode_field_list,
    encode_field_list,
)
from javastream.tool.parser import ValidationError, parse
from javastream.tool.types import FieldDefinition


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Java serialization field descriptor tool."""
    if verbose:
        configure_logging(logging.DEBUG)


def _fail(error: Exception) -> NoReturn:
    print(f"Error: {error}")
    for note in getattr(error, "__notes__", []):
        print(f"  {note}")
    sys.exit(1)


@cli.command()
@click.option("--input", "-i", "input_file", required=True, help="Input field definition file")
@click.option("--output", "-o", "output_file", default=None, help="Output file (binary)")
@click.option("--hex", "as_hex", is_flag=True, default=False, help="Print the encoding as hex")
def encode(input_file: str, output_file: str | None, as_hex: bool) -> None:
    """Encode a field definition file as a field list."""
    with open(input_file, encoding="utf-8") as f:
        text = f.read()

    try:
        encoded = encode_field_list(parse(text))
    except (LarkError, ValidationError, SerializationError) as e:
        _fail(e)

    if output_file:
        with open(output_file, "wb") as f:
            f.write(encoded)

    if as_hex or not output_file:
        print(encoded.hex())


@cli.command()
@click.option("--input", "-i", "input_file", required=True, help="Input file")
@click.option("--hex", "from_hex", is_flag=True, default=False, help="Input is hex text")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
@click.option(
    "--single",
    is_flag=True,
    default=False,
    help="Input is one field descriptor without a count prefix",
)
def decode(input_file: str, from_hex: bool, output_json: bool, single: bool) -> None:
    """Decode and display a field list."""
    with open(input_file, "rb") as f:
        data = f.read()

    if from_hex:
        try:
            data = bytes.fromhex(data.decode("ascii"))
        except (UnicodeDecodeError, ValueError) as e:
            _fail(ValueError(f"invalid hex input: {e}"))

    stream = io.BytesIO(data)
    try:
        if single:
            fields = [FieldDescriptor.decode(stream)]
        else:
            fields = decode_field_list(stream)
    except SerializationError as e:
        _fail(e)

    trailing = len(data) - stream.tell()
    if trailing:
        logger.warning("Ignoring %d trailing bytes", trailing)

    if output_json:
        _output_json(fields)
    else:
        _output_plain(fields)


@cli.command()
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def info(output_json: bool) -> None:
    """Display the field type code table."""
    if output_json:
        data = {
            chr(code): {"type": t.value, "category": "object" if t.is_object else "primitive"}
            for code, t in TYPE_CODES.items()
        }
        print(json.dumps(data, indent=2))
        return

    console = Console()
    table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    table.add_column("Code", style="yellow")
    table.add_column("Type", style="white")
    table.add_column("Category", style="dim")

    for code, t in TYPE_CODES.items():
        category = "object" if t.is_object else "primitive"
        table.add_row(chr(code), t.value, category)

    console.print(table)


def _output_json(fields: list[FieldDescriptor]) -> None:
    data = []
    for field in fields:
        entry = FieldDefinition.from_descriptor(field).to_dict()
        del entry["line"]
        entry["code"] = chr(field.type.code)
        data.append(entry)

    print(json.dumps(data, indent=2))


def _output_plain(fields: list[FieldDescriptor]) -> None:
    console = Console()
    console.print(f"[bold cyan]Fields[/bold cyan] ({len(fields)})")

    table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    table.add_column("#", style="dim", justify="right")
    table.add_column("Code", style="yellow")
    table.add_column("Type", style="white")
    table.add_column("Name", style="green")
    table.add_column("Signature", style="white")

    for index, field in enumerate(fields):
        table.add_row(
            str(index),
            chr(field.type.code),
            field.type.value,
            escape(field.name),
            escape(field.field_type or ""),
        )

    console.print(table)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
