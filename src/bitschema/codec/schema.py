"""Schema resolution.

This module turns field declarations into a resolved ``Schema``: every field
gets its bit width, single-valued Int fields are marked always-present, and
Bytes fields are moved behind all fixed-width fields. Declarations can be
given as Python objects, loaded from JSON, or derived from a pydantic model.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import (
    Any,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Tuple,
    Type,
    Union,
    get_args,
    get_origin,
)

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic.fields import FieldInfo

from ..exceptions import SchemaError
from ..models.fields import BooleanField, BytesField, FieldSpec, IntField
from ..models.values import Value
from .bitpack import MAX_FIELD_BITS

logger = logging.getLogger(__name__)

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1

_FIELD_SPECS: TypeAdapter[List[FieldSpec]] = TypeAdapter(List[FieldSpec])


@dataclass(frozen=True)
class ResolvedField:
    """A field declaration with its resolved bit width.

    Attributes:
        name: Field name
        kind: ``"int"``, ``"boolean"`` or ``"bytes"``
        bits: Packed width; for Bytes fields the width of the length prefix
        min: Lower bound (Int only)
        max: Upper bound (Int) or maximum payload length (Bytes)
        always_present: True for an Int whose bounds collapse to one value
    """

    name: str
    kind: str
    bits: int
    min: Optional[int] = None
    max: Optional[int] = None
    always_present: bool = False

    @property
    def is_bytes(self) -> bool:
        return self.kind == "bytes"


class Schema:
    """An ordered, resolved set of fields.

    A Schema is built once by ``construct`` and then reused for any number
    of encode and decode calls. It holds no per-call state.

    Example:
        >>> schema = construct([Int("lives", 1, 5), Boolean("hardcore")])
        >>> data = schema.encode({"lives": 3, "hardcore": True})
        >>> unwrap(schema.decode(data))
        {'lives': 3, 'hardcore': True}
    """

    __slots__ = ("_fields", "_total_bits", "_max_byte_length")

    def __init__(self, fields: Iterable[ResolvedField]) -> None:
        self._fields: Tuple[ResolvedField, ...] = tuple(fields)
        self._total_bits = sum(field.bits for field in self._fields)
        self._max_byte_length = (self._total_bits + 7) // 8

    @property
    def fields(self) -> Tuple[ResolvedField, ...]:
        """Resolved fields; Bytes fields last."""
        return self._fields

    @property
    def total_bits(self) -> int:
        return self._total_bits

    @property
    def max_byte_length(self) -> int:
        """Size of the fixed region in bytes. Payloads are not included."""
        return self._max_byte_length

    def encode(self, values: Mapping[str, Union[Value, int, bool, bytes]]) -> bytes:
        """Encode a name-keyed value mapping. See ``encoder.to_buffer``."""
        from .encoder import to_buffer

        return to_buffer(self, values)

    def decode(self, data: bytes) -> Dict[str, Value]:
        """Decode bytes produced by ``encode``. See ``decoder.from_buffer``."""
        from .decoder import from_buffer

        return from_buffer(self, data)

    def field(self, name: str) -> ResolvedField:
        """Return the resolved field called ``name``.

        Raises:
            KeyError: If the schema has no such field
        """
        for field in self.fields:
            if field.name == name:
                return field
        raise KeyError(name)

    def __len__(self) -> int:
        return len(self.fields)

    def __repr__(self) -> str:
        names = ", ".join(f"{f.name}:{f.bits}" for f in self.fields)
        return f"Schema([{names}], max_byte_length={self.max_byte_length})"


def _bits_for_count(count: int) -> int:
    """Bits needed to tell ``count`` distinct values apart: ceil(log2(count))."""
    return (count - 1).bit_length()


def _resolve(spec: Any) -> ResolvedField:
    if isinstance(spec, IntField):
        if spec.min > spec.max:
            raise SchemaError(
                f"Field {spec.name}: invalid bounds min={spec.min} > max={spec.max}", spec.name
            )
        if spec.min < INT32_MIN or spec.max > INT32_MAX:
            raise SchemaError(
                f"Field {spec.name}: bounds [{spec.min}, {spec.max}] exceed 32-bit signed range",
                spec.name,
            )
        bits = _bits_for_count(spec.max - spec.min + 1)
        return ResolvedField(
            name=spec.name,
            kind="int",
            bits=bits,
            min=spec.min,
            max=spec.max,
            always_present=bits == 0,
        )

    if isinstance(spec, BooleanField):
        return ResolvedField(name=spec.name, kind="boolean", bits=1)

    if isinstance(spec, BytesField):
        if spec.max < 0:
            raise SchemaError(
                f"Field {spec.name}: max length must be >= 0, got {spec.max}", spec.name
            )
        bits = _bits_for_count(spec.max + 1)
        if bits > MAX_FIELD_BITS:
            raise SchemaError(
                f"Field {spec.name}: length prefix needs {bits} bits, "
                f"more than the {MAX_FIELD_BITS} supported",
                spec.name,
            )
        return ResolvedField(name=spec.name, kind="bytes", bits=bits, max=spec.max)

    raise SchemaError(
        f"Unsupported field declaration {spec!r}. Supported: IntField, BooleanField, BytesField."
    )


def construct(field_specs: Iterable[FieldSpec]) -> Schema:
    """Resolve field declarations into a Schema.

    Bit widths:
        - Int: ceil(log2(max - min + 1)); zero bits marks it always-present
        - Boolean: 1
        - Bytes: ceil(log2(max + 1)) for the length prefix

    The resolved order places every Bytes field after every Int/Boolean
    field. The partition is stable, so each group keeps declaration order.

    Args:
        field_specs: Field declarations in declaration order

    Returns:
        Resolved Schema

    Raises:
        SchemaError: If a declaration is invalid or a name is repeated
    """
    resolved: List[ResolvedField] = []
    seen = set()
    for spec in field_specs:
        field = _resolve(spec)
        if field.name in seen:
            raise SchemaError(f"Field {field.name}: declared more than once", field.name)
        seen.add(field.name)
        resolved.append(field)

    fixed = [field for field in resolved if not field.is_bytes]
    variable = [field for field in resolved if field.is_bytes]
    schema = Schema(fixed + variable)

    logger.debug(
        "resolved %d fields (%d bytes fields): %d bits, %d fixed bytes",
        len(schema),
        len(variable),
        schema.total_bits,
        schema.max_byte_length,
    )
    return schema


def schema_from_dicts(items: Iterable[Mapping[str, Any]]) -> Schema:
    """Build a Schema from plain declaration dicts.

    Example:
        >>> schema_from_dicts([{"kind": "int", "name": "lives", "min": 1, "max": 5}])

    Raises:
        SchemaError: If a declaration does not validate
    """
    try:
        specs = _FIELD_SPECS.validate_python(list(items))
    except ValidationError as err:
        raise SchemaError(f"Invalid field declarations: {err}") from err
    return construct(specs)


def load_schema(path: Union[str, Path]) -> Schema:
    """Load a Schema from a JSON file holding a list of declarations.

    Args:
        path: Path to the JSON file

    Returns:
        Resolved Schema

    Raises:
        SchemaError: If the file is not valid JSON or a declaration is invalid
        OSError: If the file cannot be read
    """
    raw = Path(path).read_bytes()
    try:
        specs = _FIELD_SPECS.validate_json(raw)
    except ValidationError as err:
        raise SchemaError(f"Invalid schema file {path}: {err}") from err
    logger.debug("loaded %d declarations from %s", len(specs), path)
    return construct(specs)


def schema_from_model(model_class: Type[BaseModel]) -> Schema:
    """Derive a Schema from a pydantic model.

    Supported field annotations:
        - ``bool``
        - ``int`` with both ``ge=`` and ``le=`` constraints
        - ``bytes`` with a ``max_length=`` constraint

    Args:
        model_class: Pydantic model class to introspect

    Returns:
        Resolved Schema

    Raises:
        SchemaError: If a field cannot be mapped to a declaration
    """
    specs: List[FieldSpec] = []
    for name, field_info in model_class.model_fields.items():
        try:
            specs.append(_spec_from_field_info(name, field_info))
        except ValidationError as err:
            raise SchemaError(f"Field {name}: invalid constraints: {err}", name) from err
    return construct(specs)


def _spec_from_field_info(name: str, field_info: FieldInfo) -> FieldSpec:
    annotation = field_info.annotation
    if annotation is None:
        raise SchemaError(f"Field {name} has no type annotation", name)

    if get_origin(annotation) is not None and type(None) in get_args(annotation):
        raise SchemaError(f"Field {name}: optional fields are not supported", name)

    min_value = None
    max_value = None
    max_length = None

    # Pydantic v2 stores constraints in metadata
    for constraint in field_info.metadata:
        if hasattr(constraint, "ge"):
            min_value = constraint.ge
        if hasattr(constraint, "le"):
            max_value = constraint.le
        if hasattr(constraint, "max_length"):
            max_length = constraint.max_length

    if annotation is bool:
        return BooleanField(name=name)

    if annotation is int:
        if min_value is None or max_value is None:
            raise SchemaError(
                f"Field {name}: integer fields require ge= and le= constraints", name
            )
        return IntField(name=name, min=min_value, max=max_value)

    if annotation is bytes:
        if max_length is None:
            raise SchemaError(f"Field {name}: bytes fields require a max_length= constraint", name)
        return BytesField(name=name, max=max_length)

    raise SchemaError(
        f"Field {name}: unsupported type {annotation}. Supported: bool, bounded int, bytes.",
        name,
    )
