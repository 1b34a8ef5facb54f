"""Field declarations for layout classes.

This module provides the Position descriptor used to declare fields on a
Layout subclass, and sized integer aliases for field annotations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Any

from ..codec.adapters import IntFormat, ValueAdapter, resolve_adapter
from ..codec.bitrange import FieldDescriptor
from ..exceptions import SchemaError
from .builder import MISSING

if TYPE_CHECKING:
    from .base import Layout

UInt8 = Annotated[int, IntFormat(8)]
UInt16 = Annotated[int, IntFormat(16)]
UInt32 = Annotated[int, IntFormat(32)]
UInt64 = Annotated[int, IntFormat(64)]
Int8 = Annotated[int, IntFormat(8, signed=True)]
Int16 = Annotated[int, IntFormat(16, signed=True)]
Int32 = Annotated[int, IntFormat(32, signed=True)]
Int64 = Annotated[int, IntFormat(64, signed=True)]


class Position:
    """Declares where a layout field lives and exposes it as an attribute.

    Coordinates are interpreted by the owning layout's convention: bit numbers
    within a byte or word for ByteLayout/WordLayout/SMBusWordLayout, 1-indexed
    byte numbers for ByteArrayLayout, raw 0-indexed bytes for Layout itself.
    The field's type comes from the class annotation unless an adapter is given.

    Args:
        default: Value written when an instance is created (omitted: zero bits)
        signed: Sign-extend the field's top bit (two's complement field)
        adapter: Explicit value adapter, overriding the annotation
        descriptor: Explicit 0-indexed descriptor, bypassing the convention
        **coords: Convention coordinates (bit=, msb=, lsb=, byte=, ...)

    Example:
        >>> class Status(ByteLayout):
        ...     ready: bool = Position(bit=7, default=True)
        ...     trim: Int8 = Position(msb=3, lsb=0, signed=True)
        >>> Status().to_bytes()
        b'\\x80'
    """

    def __init__(
        self,
        *,
        default: Any = MISSING,
        signed: bool = False,
        adapter: ValueAdapter | None = None,
        descriptor: FieldDescriptor | None = None,
        **coords: Any,
    ) -> None:
        if descriptor is not None and coords:
            raise SchemaError("give either descriptor= or coordinates, not both")
        self.default = default
        self.signed = signed
        self.coords = coords
        self.name: str | None = None
        self.adapter = adapter
        self.descriptor = descriptor

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def prepare(self, owner: type[Layout], annotation: Any) -> None:
        """Resolve the adapter and descriptor when owner is created.

        Raises:
            SchemaError: If the field type is unsupported
            RangeError: If the coordinates are invalid
        """
        if self.adapter is None:
            if annotation is None:
                raise SchemaError(
                    f"{owner.__name__}.{self.name}: field needs a type annotation or adapter="
                )
            self.adapter = resolve_adapter(annotation)
        if self.descriptor is None:
            self.descriptor = owner.convention.descriptor(signed=self.signed, **self.coords)

    def resolved(self) -> tuple[FieldDescriptor, ValueAdapter]:
        """Return the descriptor and adapter set by prepare().

        Raises:
            SchemaError: If the owning class has not prepared this position
        """
        if self.descriptor is None or self.adapter is None:
            raise SchemaError(f"Position {self.name!r} is not attached to a layout class")
        return self.descriptor, self.adapter

    def __get__(self, instance: Layout | None, owner: type) -> Any:
        if instance is None:
            return self
        return instance.read(self.name)

    def __set__(self, instance: Layout, value: Any) -> None:
        instance.write(self.name, value)

    def __repr__(self) -> str:
        return f"Position({self.name!r}, {self.descriptor!r})"
