"""Base message class for pydantic-declared schemas.

Subclasses declare their fields with ordinary pydantic annotations and
constraints; ``bitschema.codec.schema.schema_from_model`` maps them onto
field declarations.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class BaseMessage(BaseModel):
    """Base class for bitschema messages.

    Supported annotations are ``bool``, ``int`` with ``ge=``/``le=`` bounds,
    and ``bytes`` with ``max_length=``.

    Example:
        >>> from pydantic import Field
        >>> class Settings(BaseMessage):
        ...     lives: int = Field(ge=1, le=5)
        ...     hardcore: bool
        ...     note: bytes = Field(max_length=255)
    """

    model_config = ConfigDict(
        # Validate on assignment so bounds hold before encoding
        validate_assignment=True,
        # Forbid extra fields not defined in schema
        extra="forbid",
    )
