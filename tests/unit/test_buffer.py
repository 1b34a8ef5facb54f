"""Unit tests for the growable byte buffer."""

from __future__ import annotations

import pytest

from bitlayout import ByteBuffer


class TestByteBuffer:
    """Test ByteBuffer functionality."""

    def test_starts_empty(self, buffer: ByteBuffer) -> None:
        """Test a new buffer holds no bytes."""
        assert len(buffer) == 0
        assert bytes(buffer) == b""

    def test_ensure_length_zero_fills(self, buffer: ByteBuffer) -> None:
        """Test growth appends zero bytes."""
        buffer.ensure_length(3)
        assert bytes(buffer) == b"\x00\x00\x00"

    def test_ensure_length_never_shrinks(self) -> None:
        """Test asking for a shorter length keeps the contents."""
        buffer = ByteBuffer(b"\x01\x02\x03")
        buffer.ensure_length(1)
        assert bytes(buffer) == b"\x01\x02\x03"

    def test_get_set(self, buffer: ByteBuffer) -> None:
        """Test reading and writing single bytes."""
        buffer.ensure_length(2)
        buffer.set(1, 0xA5)
        assert buffer.get(1) == 0xA5
        assert buffer.get(0) == 0

    def test_get_out_of_bounds(self, buffer: ByteBuffer) -> None:
        """Test reading past the end is an error."""
        with pytest.raises(IndexError, match="outside buffer"):
            buffer.get(0)

    def test_set_out_of_bounds(self, buffer: ByteBuffer) -> None:
        """Test writing past the end is an error (grow first)."""
        with pytest.raises(IndexError, match="outside buffer"):
            buffer.set(0, 1)

    def test_set_rejects_non_byte(self, buffer: ByteBuffer) -> None:
        """Test only 0-255 can be stored."""
        buffer.ensure_length(1)
        with pytest.raises(ValueError, match="0-255"):
            buffer.set(0, 256)

    def test_load_replaces_contents(self) -> None:
        """Test loading raw bytes from a device."""
        buffer = ByteBuffer(b"\x00\x00\x00")
        buffer.load(b"\x12\x34")
        assert bytes(buffer) == b"\x12\x34"
        assert buffer.to_bytes() == b"\x12\x34"

    def test_sequence_access(self) -> None:
        """Test index access and iteration."""
        buffer = ByteBuffer(b"\x01\x02")
        buffer[0] = 0xFF
        assert buffer[0] == 0xFF
        assert list(buffer) == [0xFF, 0x02]

    def test_equality(self) -> None:
        """Test buffers compare by contents."""
        assert ByteBuffer(b"\x01") == ByteBuffer(b"\x01")
        assert ByteBuffer(b"\x01") == b"\x01"
        assert ByteBuffer(b"\x01") != ByteBuffer(b"\x02")

    def test_hex(self) -> None:
        """Test hex rendering."""
        assert ByteBuffer(b"\x84\x01").hex() == "8401"
        assert ByteBuffer(b"\x84\x01").hex(" ") == "84 01"
