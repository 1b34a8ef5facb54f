"""Unit tests for the bit-range codec."""

from __future__ import annotations

import pytest

from bitlayout import (
    BadByteIndex,
    BitOrdering,
    BitRangeCodec,
    ByteBuffer,
    ByteWidthExceeded,
    FieldDescriptor,
    ValueOutOfRange,
)
from bitlayout.codec.bitrange import WORD_MASK


def as_container(value: int) -> int:
    """Two's complement pattern of value in the 64-bit container."""
    return value & WORD_MASK


class TestFieldDescriptor:
    """Test descriptor validation and derived properties."""

    def test_negative_byte_index(self) -> None:
        """Test byte indices must not be negative."""
        with pytest.raises(BadByteIndex):
            FieldDescriptor(significant_byte=-1, msb=3, minor_byte=0, lsb=0)

    def test_big_endian_byte_order(self) -> None:
        """Test big-endian fields must not place the significant byte last."""
        with pytest.raises(BadByteIndex, match="big-endian"):
            FieldDescriptor(significant_byte=2, msb=3, minor_byte=1, lsb=0)

    def test_little_endian_byte_order(self) -> None:
        """Test little-endian fields must not place the significant byte first."""
        with pytest.raises(BadByteIndex, match="little-endian"):
            FieldDescriptor(significant_byte=1, msb=3, minor_byte=2, lsb=0, little_endian=True)

    def test_msb_below_lsb_in_one_byte(self) -> None:
        """Test msb and lsb ordering within a byte."""
        with pytest.raises(BitOrdering):
            FieldDescriptor(significant_byte=0, msb=2, minor_byte=0, lsb=3)

    def test_msb_below_lsb_across_bytes_is_fine(self) -> None:
        """Test msb < lsb is legal when the field spans bytes."""
        descriptor = FieldDescriptor(significant_byte=0, msb=2, minor_byte=1, lsb=7)
        assert descriptor.width == 4

    @pytest.mark.parametrize("msb,lsb", [(8, 6), (3, -1), (-1, -2)])
    def test_bit_outside_byte(self, msb: int, lsb: int) -> None:
        """Test bit indices must lie in 0..7."""
        with pytest.raises(ByteWidthExceeded):
            FieldDescriptor(significant_byte=0, msb=msb, minor_byte=1, lsb=lsb)

    def test_width_beyond_64_bits(self) -> None:
        """Test fields wider than the working integer are rejected."""
        with pytest.raises(ByteWidthExceeded, match="64-bit"):
            FieldDescriptor(significant_byte=0, msb=7, minor_byte=8, lsb=0)

    def test_width(self) -> None:
        """Test encoded width across bytes."""
        assert FieldDescriptor(significant_byte=0, msb=0, minor_byte=0, lsb=0).width == 1
        assert FieldDescriptor(significant_byte=1, msb=4, minor_byte=4, lsb=7).width == 22
        assert FieldDescriptor(significant_byte=0, msb=3, minor_byte=8, lsb=4).width == 64
        assert (
            FieldDescriptor(
                significant_byte=1, msb=2, minor_byte=0, lsb=7, little_endian=True
            ).width
            == 4
        )

    def test_byte_span(self) -> None:
        """Test the inclusive byte span, whatever the endianness."""
        big = FieldDescriptor(significant_byte=1, msb=7, minor_byte=3, lsb=0)
        little = FieldDescriptor(significant_byte=3, msb=7, minor_byte=1, lsb=0, little_endian=True)
        assert big.byte_span == (1, 3)
        assert little.byte_span == (1, 3)

    def test_bit_positions(self) -> None:
        """Test the set of occupied bits."""
        descriptor = FieldDescriptor(significant_byte=0, msb=1, minor_byte=1, lsb=6)
        assert descriptor.bit_positions() == {(0, 1), (0, 0), (1, 7), (1, 6)}

    def test_overlaps(self) -> None:
        """Test overlap detection between descriptors."""
        high = FieldDescriptor(significant_byte=0, msb=7, minor_byte=0, lsb=4)
        low = FieldDescriptor(significant_byte=0, msb=3, minor_byte=0, lsb=0)
        spanning = FieldDescriptor(significant_byte=0, msb=4, minor_byte=1, lsb=0)
        assert not high.overlaps(low)
        assert high.overlaps(spanning)

    def test_immutable(self) -> None:
        """Test descriptors cannot be altered after validation."""
        descriptor = FieldDescriptor(significant_byte=0, msb=7, minor_byte=0, lsb=0)
        with pytest.raises(Exception):
            descriptor.msb = 3  # type: ignore[misc]


class TestBitRangeCodec:
    """Test BitRangeCodec reads and writes."""

    def test_from_coordinates_validates(self, buffer: ByteBuffer) -> None:
        """Test coordinates are validated when binding."""
        with pytest.raises(BitOrdering):
            BitRangeCodec.from_coordinates(0, 2, 0, 3, buffer=buffer)

    def test_three_byte_span(self, buffer: ByteBuffer) -> None:
        """Test a field touching four bytes grows the buffer to its last byte."""
        codec = BitRangeCodec.from_coordinates(1, 4, 4, 7, buffer=buffer)

        codec.write(0)
        assert codec.read() == 0
        assert len(buffer) == 5

        for value in (1_234_567, 1, 32):
            codec.write(value)
            assert codec.read() == value

    def test_adjacent_span_big_endian(self, buffer: ByteBuffer) -> None:
        """Test a big-endian field split over two bytes."""
        codec = BitRangeCodec.from_coordinates(0, 2, 1, 7, buffer=buffer)

        codec.write(0b1101)
        assert codec.read() == 0b1101
        assert buffer[0] == 0b110
        assert buffer[1] == 0b1000_0000

        codec.write(9)
        assert codec.read() == 9

    def test_adjacent_span_little_endian(self, buffer: ByteBuffer) -> None:
        """Test the low bit lands in the lower-indexed byte for little-endian fields."""
        codec = BitRangeCodec.from_coordinates(1, 2, 0, 7, little_endian=True, buffer=buffer)

        codec.write(0b1101)
        assert codec.read() == 0b1101
        assert buffer[0] == 0b1000_0000
        assert buffer[1] == 0b110

    def test_single_byte(self, buffer: ByteBuffer) -> None:
        """Test a field within one byte."""
        codec = BitRangeCodec.from_coordinates(2, 3, 2, 0, buffer=buffer)

        for value in (0, 9, 13, 1):
            codec.write(value)
            assert codec.read() == value
        assert bytes(buffer) == b"\x00\x00\x01"

    def test_single_bit(self, buffer: ByteBuffer) -> None:
        """Test a one-bit field."""
        codec = BitRangeCodec.from_coordinates(0, 5, 0, 5, buffer=buffer)
        codec.write(1)
        assert bytes(buffer) == b"\x20"
        assert codec.read() == 1

    def test_full_64_bit_field_with_offset(self, buffer: ByteBuffer) -> None:
        """Test the widest field, spanning nine bytes, keeps every bit."""
        codec = BitRangeCodec.from_coordinates(0, 3, 8, 4, buffer=buffer)
        value = WORD_MASK - 2

        codec.write(value)
        assert codec.read() == value
        assert len(buffer) == 9

    def test_full_64_bit_field_isolation(self, sentinel_buffer: ByteBuffer) -> None:
        """Test the bits around a nine-byte field survive a write."""
        codec = BitRangeCodec.from_coordinates(0, 3, 8, 4, buffer=sentinel_buffer)
        codec.write(0)
        assert bytes(sentinel_buffer) == b"\xf0" + b"\x00" * 7 + b"\x0f" + b"\xff"

    def test_signed_read_extends_sign(self) -> None:
        """Test negative signed fields are sign-extended to 64 bits."""
        buffer = ByteBuffer(b"\xd0")
        signed = BitRangeCodec.from_coordinates(0, 7, 0, 4, signed=True, buffer=buffer)
        unsigned = BitRangeCodec.from_coordinates(0, 7, 0, 4, buffer=buffer)

        assert signed.read() == as_container(-3)
        assert unsigned.read() == 0b1101

    def test_signed_write_minus_three(self) -> None:
        """Test -3 in a high nibble leaves the low nibble alone."""
        buffer = ByteBuffer(b"\x00")
        codec = BitRangeCodec.from_coordinates(0, 7, 0, 4, signed=True, buffer=buffer)

        codec.write(as_container(-3))
        assert buffer[0] == 0b1101_0000

        buffer[0] = 0xFF
        codec.write(as_container(-3))
        assert buffer[0] == 0b1101_1111

    @pytest.mark.parametrize("value", [-8, -1, 0, 7])
    def test_signed_range_accepted(self, buffer: ByteBuffer, value: int) -> None:
        """Test the full range of a 4-bit signed field."""
        codec = BitRangeCodec.from_coordinates(0, 3, 0, 0, signed=True, buffer=buffer)
        codec.write(as_container(value))
        assert codec.read() == as_container(value)

    @pytest.mark.parametrize("value", [-17, -9, 8, 15])
    def test_signed_range_rejected(self, buffer: ByteBuffer, value: int) -> None:
        """Test values needing more than 3 magnitude bits are rejected."""
        codec = BitRangeCodec.from_coordinates(0, 3, 0, 0, signed=True, buffer=buffer)
        with pytest.raises(ValueOutOfRange):
            codec.write(as_container(value))

    def test_unsigned_too_wide(self, buffer: ByteBuffer) -> None:
        """Test unsigned values wider than the field are rejected, not truncated."""
        codec = BitRangeCodec.from_coordinates(0, 3, 0, 0, buffer=buffer)
        with pytest.raises(ValueOutOfRange, match="does not fit"):
            codec.write(16)
        assert len(buffer) == 0

    def test_rejects_non_container_values(self, buffer: ByteBuffer) -> None:
        """Test raw values must already be 64-bit container patterns."""
        codec = BitRangeCodec.from_coordinates(0, 3, 0, 0, signed=True, buffer=buffer)
        with pytest.raises(ValueOutOfRange, match="container"):
            codec.write(-1)
        with pytest.raises(ValueOutOfRange, match="container"):
            codec.write(1 << 64)

    def test_extend_sign(self, buffer: ByteBuffer) -> None:
        """Test sign extension only applies to signed codecs."""
        signed = BitRangeCodec.from_coordinates(0, 3, 0, 0, signed=True, buffer=buffer)
        unsigned = BitRangeCodec.from_coordinates(0, 3, 0, 0, buffer=buffer)

        assert signed.extend_sign(0xFD, from_width=8) == as_container(-3)
        assert signed.extend_sign(0x7D, from_width=8) == 0x7D
        assert unsigned.extend_sign(0xFD, from_width=8) == 0xFD

    def test_excess_mask(self, buffer: ByteBuffer) -> None:
        """Test the mask of bits a field cannot hold."""
        codec = BitRangeCodec.from_coordinates(0, 3, 0, 0, buffer=buffer)
        wide = BitRangeCodec.from_coordinates(0, 3, 8, 4, buffer=buffer)
        assert codec.excess_mask == WORD_MASK ^ 0xF
        assert wide.excess_mask == 0

    def test_growth_zero_fills(self) -> None:
        """Test writing past the end grows the buffer with zero bytes."""
        buffer = ByteBuffer(b"\xaa")
        codec = BitRangeCodec.from_coordinates(3, 0, 3, 0, buffer=buffer)
        codec.write(1)
        assert bytes(buffer) == b"\xaa\x00\x00\x01"

    def test_read_before_growth(self, buffer: ByteBuffer) -> None:
        """Test reading a field the buffer does not cover yet."""
        codec = BitRangeCodec.from_coordinates(0, 7, 0, 0, buffer=buffer)
        with pytest.raises(IndexError):
            codec.read()

    def test_clear(self) -> None:
        """Test clearing zeroes only the field's bits."""
        buffer = ByteBuffer(b"\xff")
        codec = BitRangeCodec.from_coordinates(0, 5, 0, 2, buffer=buffer)
        codec.clear()
        assert buffer[0] == 0b1100_0011
