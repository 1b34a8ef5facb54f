"""Value adapters: conversions between semantic field types and raw bit patterns.

An adapter maps a Python value to an unsigned pattern of ``bit_width`` bits and
back. Built-in adapters cover bool, sized integers and integer-valued enums;
any object with the same four members can be used for other types.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Annotated, Any, Protocol, get_args, get_origin, runtime_checkable

from pydantic import Field, TypeAdapter, ValidationError

from ..exceptions import DecodeError, SchemaError, ValueOutOfRange


@runtime_checkable
class ValueAdapter(Protocol):
    """Conversion between a field's semantic type and its raw bits.

    Attributes:
        bit_width: Width of the raw pattern produced by to_raw
        signed: Whether the pattern is two's complement
    """

    bit_width: int
    signed: bool

    def to_raw(self, value: Any) -> int:
        """Return an unsigned pattern of bit_width bits.

        Raises:
            ValueOutOfRange: If value is not representable
        """
        ...

    def from_raw(self, raw: int) -> Any:
        """Return the value for an unsigned pattern of bit_width bits.

        Raises:
            DecodeError: If the pattern does not represent a valid value
        """
        ...


def _validated(validator: TypeAdapter[Any], value: Any, what: str) -> Any:
    try:
        return validator.validate_python(value)
    except ValidationError as err:
        raise ValueOutOfRange(f"{value!r} is not a valid {what}: {err.errors()[0]['msg']}") from err


class BoolAdapter:
    """Booleans as a single bit: False=0, True=1."""

    bit_width = 1
    signed = False

    _validator: TypeAdapter[bool] = TypeAdapter(Annotated[bool, Field(strict=True)])

    def to_raw(self, value: Any) -> int:
        return 1 if _validated(self._validator, value, "bool") else 0

    def from_raw(self, raw: int) -> bool:
        if raw not in (0, 1):
            raise DecodeError(f"raw value {raw} is not a boolean")
        return raw == 1

    def __repr__(self) -> str:
        return "BoolAdapter()"


class IntAdapter:
    """Fixed-width integers with two's complement semantics for signed widths.

    Example:
        >>> int8 = IntAdapter(8, signed=True)
        >>> int8.to_raw(-3)
        253
        >>> int8.from_raw(0xFD)
        -3
    """

    def __init__(self, bits: int, signed: bool = False) -> None:
        if not 1 <= bits <= 64:
            raise SchemaError(f"integer width must be 1-64 bits, got {bits}")
        self.bit_width = bits
        self.signed = signed
        if signed:
            self.min_value = -(1 << (bits - 1))
            self.max_value = (1 << (bits - 1)) - 1
        else:
            self.min_value = 0
            self.max_value = (1 << bits) - 1
        self._validator: TypeAdapter[int] = TypeAdapter(
            Annotated[int, Field(ge=self.min_value, le=self.max_value, strict=True)]
        )

    @property
    def type_name(self) -> str:
        return f"{'Int' if self.signed else 'UInt'}{self.bit_width}"

    def to_raw(self, value: Any) -> int:
        number = _validated(self._validator, value, self.type_name)
        return number & ((1 << self.bit_width) - 1)

    def from_raw(self, raw: int) -> int:
        if raw >> self.bit_width:
            raise DecodeError(f"raw value {raw} wider than {self.type_name}")
        if self.signed and raw >> (self.bit_width - 1):
            return raw - (1 << self.bit_width)
        return raw

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IntAdapter):
            return NotImplemented
        return (self.bit_width, self.signed) == (other.bit_width, other.signed)

    def __hash__(self) -> int:
        return hash((IntAdapter, self.bit_width, self.signed))

    def __repr__(self) -> str:
        return f"IntAdapter({self.bit_width}, signed={self.signed})"


class EnumAdapter:
    """Integer-valued enums, stored as their member values.

    Undefined codes read from the buffer raise DecodeError.

    Example:
        >>> class Mode(enum.IntEnum):
        ...     IDLE = 0
        ...     RUN = 3
        >>> EnumAdapter(Mode).bit_width
        2
    """

    signed = False

    def __init__(self, enum_type: type[enum.Enum], bits: int | None = None) -> None:
        members = list(enum_type)
        if not members:
            raise SchemaError(f"Enum {enum_type.__name__} has no values")
        for member in members:
            if not isinstance(member.value, int) or isinstance(member.value, bool):
                raise SchemaError(
                    f"Enum {enum_type.__name__}.{member.name}: value must be an int, "
                    f"got {member.value!r}"
                )
            if member.value < 0:
                raise SchemaError(
                    f"Enum {enum_type.__name__}.{member.name}: value must be non-negative"
                )

        needed = max(1, max(member.value for member in members).bit_length())
        if bits is None:
            bits = needed
        elif bits < needed:
            raise SchemaError(
                f"Enum {enum_type.__name__} needs {needed} bits, only {bits} allotted"
            )

        self.enum_type = enum_type
        self.bit_width = bits
        self._validator: TypeAdapter[enum.Enum] = TypeAdapter(
            Annotated[enum_type, Field(strict=True)]
        )

    def to_raw(self, value: Any) -> int:
        member = _validated(self._validator, value, self.enum_type.__name__)
        return int(member.value)

    def from_raw(self, raw: int) -> enum.Enum:
        try:
            return self.enum_type(raw)
        except ValueError as err:
            raise DecodeError(f"{raw} is not a valid {self.enum_type.__name__} code") from err

    def __repr__(self) -> str:
        return f"EnumAdapter({self.enum_type.__name__}, bits={self.bit_width})"


@dataclass(frozen=True)
class IntFormat:
    """Annotation metadata fixing the width and signedness of an int field."""

    bits: int
    signed: bool = False


def resolve_adapter(annotation: Any) -> ValueAdapter:
    """Choose the value adapter for a field annotation.

    Args:
        annotation: bool, an Enum subclass, int, or ``Annotated[int, IntFormat(...)]``

    Returns:
        Adapter for the annotation

    Raises:
        SchemaError: If no adapter applies
    """
    if get_origin(annotation) is Annotated:
        base, *metadata = get_args(annotation)
        for item in metadata:
            if isinstance(item, IntFormat) and base is int:
                return IntAdapter(item.bits, signed=item.signed)
        return resolve_adapter(base)

    if annotation is bool:
        return BoolAdapter()
    if isinstance(annotation, type) and issubclass(annotation, enum.Enum):
        return EnumAdapter(annotation)
    if annotation is int:
        return IntAdapter(64, signed=True)

    raise SchemaError(
        f"unsupported field type {annotation!r}. "
        f"Supported: bool, int, sized ints (UInt8..Int64), int-valued Enum, "
        f"or an explicit adapter."
    )
