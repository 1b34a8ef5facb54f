"""Bit-range codec: moves integers in and out of arbitrary bit ranges of a buffer.

A field occupies the bits ``msb..0`` of its most-significant byte, every bit of
the bytes in between, and the bits ``7..lsb`` of its least-significant byte.
Big-endian fields place the most-significant byte at the lower index;
little-endian fields the reverse.

Values travel through the codec in a 64-bit unsigned container. Signed fields
are sign-extended into that container on read and must arrive sign-extended
on write.
"""

from __future__ import annotations

from typing import Iterator

from pydantic import BaseModel, ConfigDict, model_validator

from ..exceptions import BadByteIndex, BitOrdering, ByteWidthExceeded, ValueOutOfRange
from .buffer import ByteBuffer

WORD_BITS = 64
WORD_MASK = (1 << WORD_BITS) - 1
SIGN_BIT = 1 << (WORD_BITS - 1)


def _low_mask(num_bits: int) -> int:
    return (1 << num_bits) - 1


class FieldDescriptor(BaseModel):
    """Validated, 0-indexed location of a field within a buffer.

    Attributes:
        significant_byte: Index of the byte holding the field's most significant bits
        msb: Bit (0-7) of significant_byte holding the field's most significant bit
        minor_byte: Index of the byte holding the field's least significant bits
        lsb: Bit (0-7) of minor_byte holding the field's least significant bit
        signed: Whether the field holds a two's complement value
        little_endian: Whether significant_byte sits at a higher index than minor_byte

    Raises:
        BadByteIndex: Negative byte index, or byte order contradicting endianness
        BitOrdering: msb < lsb within a single byte
        ByteWidthExceeded: Bit outside 0..7, or more than 64 bits encoded

    Example:
        >>> FieldDescriptor(significant_byte=0, msb=3, minor_byte=1, lsb=4).width
        8
    """

    model_config = ConfigDict(frozen=True, strict=True)

    significant_byte: int
    msb: int
    minor_byte: int
    lsb: int
    signed: bool = False
    little_endian: bool = False

    @model_validator(mode="after")
    def _check_range(self) -> FieldDescriptor:
        if self.significant_byte < 0 or self.minor_byte < 0:
            raise BadByteIndex(
                f"byte indices must be non-negative, got {self.significant_byte} "
                f"and {self.minor_byte}"
            )
        for name, bit in (("msb", self.msb), ("lsb", self.lsb)):
            if not 0 <= bit < 8:
                raise ByteWidthExceeded(f"{name} must be 0-7, got {bit}")

        if self.little_endian and self.significant_byte < self.minor_byte:
            raise BadByteIndex(
                f"little-endian field must not place significant byte {self.significant_byte} "
                f"before minor byte {self.minor_byte}"
            )
        if not self.little_endian and self.significant_byte > self.minor_byte:
            raise BadByteIndex(
                f"big-endian field must not place significant byte {self.significant_byte} "
                f"after minor byte {self.minor_byte}"
            )
        if self.significant_byte == self.minor_byte and self.msb < self.lsb:
            raise BitOrdering(f"msb {self.msb} is below lsb {self.lsb} in byte {self.minor_byte}")

        if self.width > WORD_BITS:
            raise ByteWidthExceeded(
                f"field spans {self.width} bits, more than the {WORD_BITS}-bit working integer"
            )
        return self

    @property
    def width(self) -> int:
        """Number of bits encoded by the field."""
        return 8 * abs(self.minor_byte - self.significant_byte) + self.msb - self.lsb + 1

    @property
    def first_byte(self) -> int:
        return min(self.significant_byte, self.minor_byte)

    @property
    def last_byte(self) -> int:
        return max(self.significant_byte, self.minor_byte)

    @property
    def byte_span(self) -> tuple[int, int]:
        """Inclusive range of byte indices the field touches."""
        return (self.first_byte, self.last_byte)

    def segments(self) -> Iterator[tuple[int, int, int]]:
        """Yield ``(byte_index, high_bit, low_bit)`` from most to least significant."""
        step = -1 if self.little_endian else 1
        for index in range(self.significant_byte, self.minor_byte + step, step):
            high = self.msb if index == self.significant_byte else 7
            low = self.lsb if index == self.minor_byte else 0
            yield index, high, low

    def bit_positions(self) -> frozenset[tuple[int, int]]:
        """Return every ``(byte_index, bit)`` pair the field occupies."""
        return frozenset(
            (index, bit)
            for index, high, low in self.segments()
            for bit in range(low, high + 1)
        )

    def overlaps(self, other: FieldDescriptor) -> bool:
        return bool(self.bit_positions() & other.bit_positions())


class BitRangeCodec:
    """Reads and writes one field's bits in a shared ByteBuffer.

    Example:
        >>> buffer = ByteBuffer()
        >>> codec = BitRangeCodec.from_coordinates(0, 7, 0, 4, signed=True, buffer=buffer)
        >>> codec.write(codec.extend_sign(0b1101, from_width=4))
        >>> bytes(buffer)
        b'\\xd0'
        >>> codec.read() - (1 << 64)
        -3
    """

    def __init__(self, descriptor: FieldDescriptor, buffer: ByteBuffer) -> None:
        self.descriptor = descriptor
        self.buffer = buffer
        self._segments = list(descriptor.segments())
        self._width = descriptor.width
        self._excess_mask = WORD_MASK & ~_low_mask(self._width)

    @classmethod
    def from_coordinates(
        cls,
        significant_byte: int,
        msb: int,
        minor_byte: int,
        lsb: int,
        *,
        signed: bool = False,
        little_endian: bool = False,
        buffer: ByteBuffer,
    ) -> BitRangeCodec:
        """Validate raw 0-indexed coordinates and bind a codec to buffer.

        Raises:
            RangeError: If the coordinates do not describe a valid field
        """
        descriptor = FieldDescriptor(
            significant_byte=significant_byte,
            msb=msb,
            minor_byte=minor_byte,
            lsb=lsb,
            signed=signed,
            little_endian=little_endian,
        )
        return cls(descriptor, buffer)

    @property
    def width(self) -> int:
        return self._width

    @property
    def signed(self) -> bool:
        return self.descriptor.signed

    @property
    def excess_mask(self) -> int:
        """Mask of the container bits (width..63) the field cannot hold."""
        return self._excess_mask

    def extend_sign(self, raw: int, from_width: int) -> int:
        """Sign-extend a from_width-bit pattern into the 64-bit container.

        Unsigned codecs return raw unchanged.
        """
        if not self.signed:
            return raw
        if raw >> (from_width - 1) & 1:
            return raw | (WORD_MASK & ~_low_mask(from_width))
        return raw

    def read(self) -> int:
        """Assemble the field's bits into the 64-bit container.

        Returns:
            Unsigned value, sign-extended to 64 bits for negative signed fields

        Raises:
            IndexError: If the buffer has not grown to cover the field
        """
        value = 0
        for index, high, low in self._segments:
            num_bits = high - low + 1
            value = (value << num_bits) | ((self.buffer.get(index) >> low) & _low_mask(num_bits))

        if self.signed and value >> (self._width - 1) & 1:
            value |= self._excess_mask
        return value

    def write(self, raw: int) -> None:
        """Store a 64-bit container value into the field's bits.

        Bits of the buffer outside the field are left untouched.

        Raises:
            ValueOutOfRange: If raw does not fit the field
        """
        remaining = self._checked(raw)
        self.buffer.ensure_length(self.descriptor.last_byte + 1)

        for index, high, low in reversed(self._segments):
            num_bits = high - low + 1
            mask = _low_mask(num_bits)
            cleared = self.buffer.get(index) & ~(mask << low) & 0xFF
            self.buffer.set(index, cleared | ((remaining & mask) << low))
            remaining >>= num_bits

    def clear(self) -> None:
        """Zero the field's bits."""
        self.write(0)

    def _checked(self, raw: int) -> int:
        d = self.descriptor
        where = f"byte {d.significant_byte}, bit {d.msb} ({self._width} bits)"

        if not 0 <= raw <= WORD_MASK:
            raise ValueOutOfRange(f"raw value {raw} is not a {WORD_BITS}-bit container value")

        if self.signed and raw & SIGN_BIT:
            if raw & self._excess_mask != self._excess_mask:
                raise ValueOutOfRange(f"negative value too negative to fit at {where}")
            remaining = raw & ~self._excess_mask
            if not remaining >> (self._width - 1):
                raise ValueOutOfRange(f"negative value too negative to fit at {where}")
            return remaining

        if self.signed:
            if raw >> (self._width - 1):
                raise ValueOutOfRange(f"value {raw} does not fit signed field at {where}")
            return raw

        if raw & self._excess_mask:
            raise ValueOutOfRange(f"value {raw} does not fit field at {where}")
        return raw

    def __repr__(self) -> str:
        d = self.descriptor
        return (
            f"BitRangeCodec(bytes={d.significant_byte}->{d.minor_byte}, msb={d.msb}, "
            f"lsb={d.lsb}, signed={d.signed}, little_endian={d.little_endian})"
        )
