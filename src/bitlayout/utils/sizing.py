"""Layout size and field map utilities.

This module provides functions to inspect how a layout class, or a layout
instance such as one assembled by LayoutBuilder.build(), occupies its buffer.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..codec.adapters import ValueAdapter
from ..codec.bitrange import FieldDescriptor
from ..layout.base import Layout


@dataclass(frozen=True)
class FieldPlacement:
    """Where one field of a layout lives.

    Attributes:
        name: Field name
        first_byte: Lowest 0-indexed byte the field touches
        last_byte: Highest 0-indexed byte the field touches
        msb: Bit of the most significant byte holding the field's top bit
        lsb: Bit of the least significant byte holding the field's bottom bit
        width: Encoded width in bits
        signed: Whether the field is two's complement
        little_endian: Whether the field's bytes are stored least significant first
        adapter: repr of the field's value adapter
    """

    name: str
    first_byte: int
    last_byte: int
    msb: int
    lsb: int
    width: int
    signed: bool
    little_endian: bool
    adapter: str


def _declared_fields(
    layout_or_class: Layout | type[Layout],
) -> list[tuple[str, FieldDescriptor, ValueAdapter]]:
    # Instances carry their bound fields; layouts from LayoutBuilder.build()
    # have no class-level positions
    if isinstance(layout_or_class, Layout):
        return [
            (name, field.descriptor, field.adapter)
            for name, field in layout_or_class.fields.items()
        ]
    return [
        (name, *position.resolved())
        for name, position in layout_or_class._positions.items()
    ]


def layout_size(layout_or_class: Layout | type[Layout]) -> int:
    """Calculate the buffer size of a layout in bytes.

    For an instance this is the length of its buffer.

    Example:
        >>> class Status(ByteLayout):
        ...     ready: bool = Position(bit=7)
        >>> layout_size(Status)
        1
    """
    if isinstance(layout_or_class, Layout):
        return len(layout_or_class.buffer)
    return layout_or_class.byte_size()


def layout_bits(layout_or_class: Layout | type[Layout]) -> int:
    """Calculate the number of bits claimed by the layout's fields.

    Aliased bits (layouts allowing overlap) are counted once.
    """
    claimed: set[tuple[int, int]] = set()
    for _name, descriptor, _adapter in _declared_fields(layout_or_class):
        claimed |= descriptor.bit_positions()
    return len(claimed)


def field_widths(layout_or_class: Layout | type[Layout]) -> dict[str, int]:
    """Get the encoded width in bits of each field of a layout.

    Example:
        >>> field_widths(Status)
        {'ready': 1}
    """
    return {placement.name: placement.width for placement in field_map(layout_or_class)}


def field_map(layout_or_class: Layout | type[Layout]) -> list[FieldPlacement]:
    """Describe the placement of every field, in declaration order."""
    return [
        FieldPlacement(
            name=name,
            first_byte=descriptor.first_byte,
            last_byte=descriptor.last_byte,
            msb=descriptor.msb,
            lsb=descriptor.lsb,
            width=descriptor.width,
            signed=descriptor.signed,
            little_endian=descriptor.little_endian,
            adapter=repr(adapter),
        )
        for name, descriptor, adapter in _declared_fields(layout_or_class)
    ]
