"""Coordinate conventions: datasheet-style positions to 0-indexed descriptors.

Datasheets number bits within a register (bit 15 of a word) or bytes within a
message starting at 1. Each convention here translates its own notation into
a FieldDescriptor.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..codec.bitrange import FieldDescriptor
from ..exceptions import BadByteIndex, BitOrdering, ByteWidthExceeded, SchemaError


def _bit_range(bit: int | None, msb: int | None, lsb: int | None) -> tuple[int, int]:
    if bit is not None:
        if msb is not None or lsb is not None:
            raise SchemaError("give either bit= or msb=/lsb=, not both")
        return bit, bit
    if msb is None or lsb is None:
        raise SchemaError("a position needs bit= or both msb= and lsb=")
    return msb, lsb


class Convention(ABC):
    """Translates a convention's coordinates into a FieldDescriptor."""

    #: Fixed number of bytes the convention addresses (None: unbounded)
    byte_width: int | None = None

    @abstractmethod
    def descriptor(self, *, signed: bool = False, **coords: int | None) -> FieldDescriptor:
        """Build the 0-indexed descriptor for coords.

        Raises:
            RangeError: If the coordinates are outside the convention
            SchemaError: If the coordinates are incomplete or contradictory
        """


class ByteConvention(Convention):
    """Bits 7..0 of a single byte.

    Example:
        >>> ByteConvention().descriptor(msb=4, lsb=0).width
        5
    """

    byte_width = 1

    def descriptor(  # type: ignore[override]
        self,
        *,
        bit: int | None = None,
        msb: int | None = None,
        lsb: int | None = None,
        signed: bool = False,
    ) -> FieldDescriptor:
        msb, lsb = _bit_range(bit, msb, lsb)
        return FieldDescriptor(significant_byte=0, msb=msb, minor_byte=0, lsb=lsb, signed=signed)


class WordConvention(Convention):
    """Bits 15..0 of a two-byte word.

    Big-endian words (the default) store bits 15..8 in the first byte; SMBus
    words are little-endian and store bits 7..0 first.
    """

    byte_width = 2

    def __init__(self, little_endian: bool = False) -> None:
        self.little_endian = little_endian

    def _byte_of(self, bit: int) -> int:
        return bit // 8 if self.little_endian else 1 - bit // 8

    def descriptor(  # type: ignore[override]
        self,
        *,
        bit: int | None = None,
        msb: int | None = None,
        lsb: int | None = None,
        signed: bool = False,
    ) -> FieldDescriptor:
        msb, lsb = _bit_range(bit, msb, lsb)
        for name, value in (("msb", msb), ("lsb", lsb)):
            if not 0 <= value < 16:
                raise ByteWidthExceeded(f"{name} must be 0-15 within a word, got {value}")
        if msb < lsb:
            raise BitOrdering(f"msb {msb} is below lsb {lsb}")

        return FieldDescriptor(
            significant_byte=self._byte_of(msb),
            msb=msb % 8,
            minor_byte=self._byte_of(lsb),
            lsb=lsb % 8,
            signed=signed,
            little_endian=self.little_endian,
        )


class ByteArrayConvention(Convention):
    """Explicit byte numbers plus bits 7..0 within those bytes.

    Byte numbers start at index_base: 1 for datasheet notation, 0 for raw
    buffer indices. A field either lies within one byte (byte=) or spans from
    significant_byte to minor_byte.

    Example:
        >>> d = ByteArrayConvention().descriptor(
        ...     significant_byte=1, msb=4, minor_byte=3, lsb=5)
        >>> (d.significant_byte, d.minor_byte, d.width)
        (0, 2, 16)
    """

    def __init__(self, index_base: int = 1) -> None:
        self.index_base = index_base

    def descriptor(  # type: ignore[override]
        self,
        *,
        byte: int | None = None,
        bit: int | None = None,
        msb: int | None = None,
        lsb: int | None = None,
        significant_byte: int | None = None,
        minor_byte: int | None = None,
        signed: bool = False,
        little_endian: bool = False,
    ) -> FieldDescriptor:
        msb, lsb = _bit_range(bit, msb, lsb)
        if byte is not None:
            if significant_byte is not None or minor_byte is not None:
                raise SchemaError("give either byte= or significant_byte=/minor_byte=, not both")
            significant_byte = minor_byte = byte
        if significant_byte is None or minor_byte is None:
            raise SchemaError("a position needs byte= or both significant_byte= and minor_byte=")

        for name, value in (("significant_byte", significant_byte), ("minor_byte", minor_byte)):
            if value < self.index_base:
                raise BadByteIndex(f"{name} must be >= {self.index_base}, got {value}")

        return FieldDescriptor(
            significant_byte=significant_byte - self.index_base,
            msb=msb,
            minor_byte=minor_byte - self.index_base,
            lsb=lsb,
            signed=signed,
            little_endian=little_endian,
        )
