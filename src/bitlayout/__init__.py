"""bitlayout: Bitfield Layout Codec

A Python library for declaring the bit layout of hardware wire formats (sensor
registers, SMBus/I2C messages) and reading or writing each field as its
semantic type. The engine does the masking, shifting, buffer growth, sign
extension and byte ordering.

Key Features:
- Declarative layouts with datasheet-style bit and byte numbering
- Fields of 1 to 64 bits spanning any number of bytes, big- or little-endian
- Signed fields with two's complement sign extension
- bool, sized integer and Enum fields, plus pluggable value adapters
- Writes never touch bits outside the field; bad values are rejected, not truncated

Quick Start:
    >>> import enum
    >>> from bitlayout import ByteLayout, Int8, Position
    >>>
    >>> class Mode(enum.IntEnum):
    ...     IDLE = 0
    ...     MEASURE = 1
    ...     CALIBRATE = 2
    >>>
    >>> class Control(ByteLayout):
    ...     enable: bool = Position(bit=7, default=True)
    ...     mode: Mode = Position(msb=6, lsb=5, default=Mode.IDLE)
    ...     trim: Int8 = Position(msb=3, lsb=0, signed=True)
    >>>
    >>> control = Control(trim=-3)
    >>> bytes(control)
    b'\\x8d'
    >>> Control.from_bytes(b"\\xa0").mode
    <Mode.MEASURE: 1>
"""

from __future__ import annotations

from .codec import (
    BitRangeCodec,
    BoolAdapter,
    ByteBuffer,
    EnumAdapter,
    FieldDescriptor,
    IntAdapter,
    IntFormat,
    ValueAdapter,
    resolve_adapter,
)
from .exceptions import (
    BadByteIndex,
    BitOrdering,
    ByteWidthExceeded,
    DecodeError,
    EncodeError,
    LayoutError,
    OverlapError,
    RangeError,
    SchemaError,
    SequencingError,
    ValueOutOfRange,
)
from .layout import (
    ByteArrayLayout,
    ByteLayout,
    Field,
    Int8,
    Int16,
    Int32,
    Int64,
    Layout,
    LayoutBuilder,
    LayoutConfig,
    Position,
    SMBusWordLayout,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
    WordLayout,
)
from .utils import field_map, field_widths, layout_bits, layout_size

__version__ = "0.1.0"

__all__ = [
    # Layouts
    "Layout",
    "ByteLayout",
    "WordLayout",
    "SMBusWordLayout",
    "ByteArrayLayout",
    "Position",
    # Sized integer annotations
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    # Builder
    "LayoutBuilder",
    "LayoutConfig",
    "Field",
    # Codec
    "ByteBuffer",
    "BitRangeCodec",
    "FieldDescriptor",
    # Value adapters
    "ValueAdapter",
    "BoolAdapter",
    "IntAdapter",
    "EnumAdapter",
    "IntFormat",
    "resolve_adapter",
    # Exceptions
    "LayoutError",
    "SchemaError",
    "RangeError",
    "BadByteIndex",
    "BitOrdering",
    "ByteWidthExceeded",
    "OverlapError",
    "EncodeError",
    "ValueOutOfRange",
    "DecodeError",
    "SequencingError",
    # Sizing
    "layout_size",
    "layout_bits",
    "field_widths",
    "field_map",
    # Version
    "__version__",
]
