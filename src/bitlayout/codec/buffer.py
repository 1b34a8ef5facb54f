"""Growable byte storage shared by the fields of one layout instance.

All indices are 0-based and bytes are kept in wire order.
"""

from __future__ import annotations

from typing import Iterator


class ByteBuffer:
    """An owned, growable sequence of bytes.

    The buffer grows on demand (zero-filled) to accommodate the highest byte
    index a field writes to; the codec never shrinks it.

    Example:
        >>> buffer = ByteBuffer()
        >>> buffer.ensure_length(2)
        >>> buffer.set(1, 0x80)
        >>> bytes(buffer)
        b'\\x00\\x80'
    """

    def __init__(self, data: bytes | bytearray | None = None) -> None:
        """Initialize the buffer, optionally with raw contents.

        Args:
            data: Initial bytes (copied)
        """
        self._bytes = bytearray(data or b"")

    def get(self, index: int) -> int:
        """Return the byte at index.

        Raises:
            IndexError: If index is outside the buffer
        """
        if index < 0 or index >= len(self._bytes):
            raise IndexError(f"byte index {index} outside buffer of length {len(self._bytes)}")
        return self._bytes[index]

    def set(self, index: int, byte: int) -> None:
        """Store a byte at index.

        Raises:
            IndexError: If index is outside the buffer
            ValueError: If byte is not in 0..255
        """
        if index < 0 or index >= len(self._bytes):
            raise IndexError(f"byte index {index} outside buffer of length {len(self._bytes)}")
        if not 0 <= byte <= 0xFF:
            raise ValueError(f"byte value must be 0-255, got {byte}")
        self._bytes[index] = byte

    def ensure_length(self, length: int) -> None:
        """Append zero bytes until the buffer holds at least length bytes."""
        missing = length - len(self._bytes)
        if missing > 0:
            self._bytes.extend(b"\x00" * missing)

    def load(self, data: bytes | bytearray) -> None:
        """Replace the contents with raw bytes received from a device."""
        self._bytes[:] = data

    def to_bytes(self) -> bytes:
        """Return an immutable snapshot of the contents."""
        return bytes(self._bytes)

    def hex(self, sep: str = "") -> str:
        return self._bytes.hex(sep) if sep else self._bytes.hex()

    def __len__(self) -> int:
        return len(self._bytes)

    def __getitem__(self, index: int) -> int:
        return self._bytes[index]

    def __setitem__(self, index: int, byte: int) -> None:
        self._bytes[index] = byte

    def __iter__(self) -> Iterator[int]:
        return iter(self._bytes)

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ByteBuffer):
            return self._bytes == other._bytes
        if isinstance(other, (bytes, bytearray)):
            return self._bytes == other
        return NotImplemented

    # Buffers are mutable and compared by contents
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ByteBuffer({bytes(self._bytes)!r})"
