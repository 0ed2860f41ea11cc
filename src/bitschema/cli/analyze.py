"""Schema analysis CLI command."""

from __future__ import annotations

import importlib.util
import inspect
import sys
from pathlib import Path
from typing import List, Tuple

from ..codec.schema import Schema, load_schema, schema_from_model
from ..models.base import BaseMessage


def analyze_file(file_path: Path) -> None:
    """Analyze the schemas declared in a file.

    A ``.json`` file holds a list of field declarations. A ``.py`` file is
    imported and every BaseMessage subclass defined in it is analyzed.

    Args:
        file_path: Path to a JSON schema or a Python file with message classes
    """
    if file_path.suffix == ".json":
        schemas = [(file_path.stem, load_schema(file_path))]
    else:
        schemas = _load_message_schemas(file_path)

    if not schemas:
        print(f"No schemas found in {file_path}")
        return

    print("|" * 7, "bitschema: Compact Schema-Driven Codec", "|" * 7)
    print(f"{len(schemas)} schema{'s' if len(schemas) != 1 else ''} loaded.")
    print("Field sizes are in bits unless otherwise noted.")
    print()

    for name, schema in schemas:
        analyze_schema(name, schema)


def _load_message_schemas(file_path: Path) -> List[Tuple[str, Schema]]:
    spec = importlib.util.spec_from_file_location("user_module", file_path)
    if spec is None or spec.loader is None:
        raise ValueError(f"Could not load module from {file_path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules["user_module"] = module
    spec.loader.exec_module(module)

    schemas = []
    for _name, obj in inspect.getmembers(module, inspect.isclass):
        if obj is not BaseMessage and issubclass(obj, BaseMessage):
            # Only include classes defined in this file (not imported)
            if obj.__module__ == "user_module":
                schemas.append((obj.__name__, schema_from_model(obj)))
    return schemas


def analyze_schema(name: str, schema: Schema) -> None:
    """Print a detailed breakdown of one schema.

    Args:
        name: Display name
        schema: Resolved schema
    """
    total_bits = schema.total_bits
    total_bytes = schema.max_byte_length
    padding_bits = (total_bytes * 8) - total_bits

    print(f"{'=' * 19} {name} {'=' * 19}")
    print(f"Fixed region size: {total_bytes} bytes / {total_bytes * 8} bits")
    print(f"        body{'.' * 34}{total_bits}")
    if padding_bits > 0:
        print(f"        padding to full byte{'.' * 19}{padding_bits}")

    max_payload = sum(field.max for field in schema.fields if field.is_bytes)
    if max_payload:
        print(f"Largest possible message: {total_bytes + max_payload} bytes")
    print()

    print(f"{'-' * 28} Fields {'-' * 28}")
    for i, field in enumerate(schema.fields, 1):
        if field.kind == "int":
            info = f"[{field.min}-{field.max}]"
            if field.always_present:
                info += " (always present)"
        elif field.kind == "bytes":
            info = f"(length prefix, max {field.max} bytes)"
        else:
            info = ""

        field_desc = f"{i}. {field.name}"
        dots_needed = 54 - len(field_desc) - len(str(field.bits)) - len(" bits")
        dots = "." * max(1, dots_needed)
        line = f"        {field_desc}{dots}{field.bits} bits"
        print(f"{line} {info}" if info else line)

    print()
