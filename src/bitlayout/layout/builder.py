"""Shared-buffer construction protocol for layout instances.

Every field of a layout instance must read and write the same buffer, and no
two instances may share one. LayoutBuilder hands the buffer under construction
to each field as it is bound, then seals that buffer for the owning instance
and starts a fresh one for the next.

Construction is sequential: all of one instance's fields are bound, then the
instance seals, before any other instance begins on the same builder. The
builder detects a second owner beginning early but does not lock; it is not
meant to be shared between threads.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping

from ..codec.adapters import ValueAdapter
from ..codec.bitrange import WORD_MASK, BitRangeCodec, FieldDescriptor
from ..codec.buffer import ByteBuffer
from ..exceptions import (
    ByteWidthExceeded,
    DecodeError,
    OverlapError,
    SchemaError,
    SequencingError,
    ValueOutOfRange,
)
from .config import LayoutConfig

if TYPE_CHECKING:
    from .base import Layout

logger = logging.getLogger(__name__)


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


class Field:
    """A named field bound to a buffer: codec plus value adapter.

    Attributes:
        name: Field name
        codec: Codec bound to the owning layout's buffer
        adapter: Conversion between the semantic type and raw bits
        default: Value written when the owning layout is created (MISSING: zero bits)
    """

    def __init__(
        self,
        name: str,
        codec: BitRangeCodec,
        adapter: ValueAdapter,
        default: Any = MISSING,
    ) -> None:
        self.name = name
        self.codec = codec
        self.adapter = adapter
        self.default = default

    @property
    def descriptor(self) -> FieldDescriptor:
        return self.codec.descriptor

    @property
    def width(self) -> int:
        return self.codec.width

    def get(self) -> Any:
        """Decode the field's current value.

        Raises:
            DecodeError: If the bits do not represent a valid value
        """
        wide = self.codec.read()
        bits = self.adapter.bit_width

        # Anything above the adapter's width must be a zero or sign extension
        high = wide >> bits
        if high and high != WORD_MASK >> bits:
            raise DecodeError(
                f"Field {self.name}: raw value {wide:#x} does not fit {bits}-bit {self.adapter!r}"
            )

        try:
            return self.adapter.from_raw(wide & ((1 << bits) - 1))
        except DecodeError as err:
            raise DecodeError(f"Field {self.name}: {err}") from err

    def get_or(self, default: Any) -> Any:
        """Decode the field's value, or return default if the bits are invalid."""
        try:
            return self.get()
        except DecodeError:
            return default

    def set(self, value: Any) -> None:
        """Encode value into the field's bits.

        Raises:
            ValueOutOfRange: If value is not valid for the field
        """
        try:
            raw = self.adapter.to_raw(value)
            self.codec.write(self.codec.extend_sign(raw, self.adapter.bit_width))
        except ValueOutOfRange as err:
            raise ValueOutOfRange(f"Field {self.name}: {err}") from err

    def reset(self) -> None:
        """Write the default value, or zero bits when there is none."""
        if self.default is MISSING:
            self.codec.clear()
        else:
            self.set(self.default)

    def __repr__(self) -> str:
        return f"Field({self.name!r}, {self.codec!r}, {self.adapter!r})"


class LayoutBuilder:
    """Binds fields to one buffer per layout instance.

    Example:
        >>> builder = LayoutBuilder()
        >>> flag = builder.bind("flag", FieldDescriptor(
        ...     significant_byte=0, msb=7, minor_byte=0, lsb=7), BoolAdapter())
        >>> buffer = builder.seal_and_rotate()
        >>> flag.codec.buffer is buffer
        True
        >>> builder.current_buffer() is buffer
        False
    """

    def __init__(self, config: LayoutConfig | None = None) -> None:
        self.config = config or LayoutConfig()
        self._buffer = ByteBuffer()
        self._fields: dict[str, Field] = {}
        self._owner: object | None = None

    @property
    def building(self) -> bool:
        """Whether an instance has begun construction and not yet sealed."""
        return self._owner is not None or bool(self._fields)

    @property
    def pending_fields(self) -> Mapping[str, Field]:
        return dict(self._fields)

    def current_buffer(self) -> ByteBuffer:
        """Return the buffer that fields bound now will share."""
        return self._buffer

    def begin(self, owner: object) -> None:
        """Mark the start of owner's construction.

        Raises:
            SequencingError: If another owner has begun and not yet sealed
        """
        if self._owner is not None and self._owner is not owner:
            raise SequencingError(
                f"{type(owner).__name__} began construction while "
                f"{type(self._owner).__name__} had not sealed"
            )
        self._owner = owner

    def bind(
        self,
        name: str,
        descriptor: FieldDescriptor,
        adapter: ValueAdapter,
        default: Any = MISSING,
        *,
        check_overlap: bool = True,
    ) -> Field:
        """Create a field over the buffer under construction.

        Args:
            name: Field name, unique within the instance
            descriptor: Location of the field's bits
            adapter: Conversion for the field's semantic type
            default: Value written when the layout is created
            check_overlap: Compare the field's bits with those already bound.
                Layout classes pass False for instances, having checked the
                field set once when the class was created.

        Returns:
            The bound field

        Raises:
            SchemaError: If name is already bound
            OverlapError: If the field claims bits of another field
            ByteWidthExceeded: If the field reaches past config.max_bytes
        """
        if name in self._fields:
            raise SchemaError(f"Field {name} is already bound")

        max_bytes = self.config.max_bytes
        if max_bytes is not None and descriptor.last_byte >= max_bytes:
            raise ByteWidthExceeded(
                f"Field {name}: byte {descriptor.last_byte} is past the {max_bytes}-byte limit"
            )

        others = list(self._fields.values()) if check_overlap else []
        for other in others:
            if descriptor.overlaps(other.descriptor):
                if not self.config.allow_overlap:
                    raise OverlapError(f"Field {name} overlaps field {other.name}")
                logger.debug("Field %s aliases bits of field %s", name, other.name)

        field = Field(name, BitRangeCodec(descriptor, self._buffer), adapter, default)
        self._fields[name] = field
        logger.debug("Bound field %s: %r", name, field.codec)
        return field

    def seal_and_rotate(self) -> ByteBuffer:
        """Hand the buffer under construction to its owner and start a new one.

        Sealing with no fields bound hands over an empty buffer.

        Returns:
            The sealed buffer, now exclusive to the instance being built
        """
        sealed = self._buffer
        logger.debug(
            "Sealed buffer for %s with %d field(s)",
            type(self._owner).__name__ if self._owner is not None else "builder",
            len(self._fields),
        )
        self._buffer = ByteBuffer()
        self._fields = {}
        self._owner = None
        return sealed

    def discard(self) -> None:
        """Abandon the instance under construction, dropping its bound fields."""
        if self.building:
            logger.debug("Discarded %d pending field(s)", len(self._fields))
        self.seal_and_rotate()

    def build(self) -> Layout:
        """Seal the bound fields into a generic Layout and initialize them.

        Returns:
            Layout owning the sealed buffer; fields are reached by name
        """
        # Import here to avoid circular dependency
        from .base import Layout

        fields = dict(self._fields)
        buffer = self.seal_and_rotate()
        return Layout._from_parts(buffer, fields)
