"""Base layout class connecting declared fields to their shared buffer.

Layout subclasses declare fields with Position. Creating an instance binds each
field to the class builder's buffer under construction, then seals that
buffer so it belongs to the instance alone.
"""

from __future__ import annotations

import typing
from types import MappingProxyType
from typing import Any, ClassVar, Mapping

from ..codec.buffer import ByteBuffer
from ..exceptions import DecodeError, SchemaError
from .builder import Field, LayoutBuilder
from .config import LayoutConfig
from .conventions import ByteArrayConvention, Convention
from .fields import Position


class Layout:
    """Base class for bit layouts.

    Fields are declared as annotated Position attributes and read or written as
    ordinary attributes. Layout itself addresses raw 0-indexed bytes; the
    presets (ByteLayout, WordLayout, SMBusWordLayout, ByteArrayLayout) use
    datasheet conventions.

    Layout options can be configured as ClassVar attributes:

    Example:
        >>> class Header(Layout):
        ...     version: int = Position(byte=0, msb=7, lsb=4, default=1)
        ...     length: int = Position(significant_byte=0, msb=3, minor_byte=1, lsb=0)
        >>> header = Header(length=300)
        >>> header.to_bytes()
        b'\\x11,'
        >>> Header.from_bytes(b"\\x11,").length
        300

    Attributes:
        layout_config: Builder options (overlap policy, byte limit)
        layout_byte_width: Fixed buffer size in bytes (None: sized by the fields)
        convention: Coordinate convention for Position arguments
    """

    layout_config: ClassVar[LayoutConfig] = LayoutConfig()
    layout_byte_width: ClassVar[int | None] = None
    convention: ClassVar[Convention] = ByteArrayConvention(index_base=0)

    _positions: ClassVar[dict[str, Position]] = {}
    _builder: ClassVar[LayoutBuilder] = LayoutBuilder()

    _buffer: ByteBuffer
    _fields: dict[str, Field]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        """Hook called when a subclass is created.

        Resolves the annotations and coordinates of newly declared positions,
        then checks the whole field set once so configuration errors surface
        at the class statement rather than at first use.
        """
        super().__init_subclass__(**kwargs)

        own = {name: value for name, value in vars(cls).items() if isinstance(value, Position)}
        if own:
            try:
                hints = typing.get_type_hints(cls, include_extras=True)
            except NameError as err:
                raise SchemaError(
                    f"{cls.__name__}: cannot resolve field annotations ({err}); "
                    f"declare field types at module level or pass adapter="
                ) from err
            for name, position in own.items():
                position.prepare(cls, hints.get(name))

        positions: dict[str, Position] = {}
        for klass in reversed(cls.__mro__):
            for name, value in vars(klass).items():
                if isinstance(value, Position):
                    positions[name] = value
        cls._positions = positions

        if cls.layout_byte_width is None and cls.convention.byte_width is not None:
            cls.layout_byte_width = cls.convention.byte_width

        cls._builder = LayoutBuilder(cls.layout_config)
        cls._check_fields()

    @classmethod
    def _check_fields(cls) -> None:
        builder = LayoutBuilder(cls.layout_config)
        for name, position in cls._positions.items():
            descriptor, adapter = position.resolved()
            builder.bind(name, descriptor, adapter, position.default)
        # build() writes the defaults, so a default that does not fit fails here too
        builder.build()

    def __init__(self, data: bytes | bytearray | None = None, **values: Any) -> None:
        """Create an instance with its own buffer.

        Args:
            data: Raw bytes to load after defaults are written (e.g. read from a device)
            **values: Field values to assign after loading

        Raises:
            SchemaError: If values names an unknown field
            DecodeError: If data is too short for the layout
            ValueOutOfRange: If a value does not fit its field
        """
        cls = type(self)
        builder = cls._builder
        builder.begin(self)
        try:
            fields: dict[str, Field] = {}
            for name, position in cls._positions.items():
                descriptor, adapter = position.resolved()
                # Overlaps were checked when the class was created
                fields[name] = builder.bind(
                    name, descriptor, adapter, position.default, check_overlap=False
                )
        except BaseException:
            builder.discard()
            raise
        self._attach(builder.seal_and_rotate(), fields)

        if data is not None:
            self.load(data)
        for name, value in values.items():
            self.write(name, value)

    @classmethod
    def _from_parts(cls, buffer: ByteBuffer, fields: dict[str, Field]) -> Layout:
        instance = cls.__new__(cls)
        instance._attach(buffer, fields)
        return instance

    def _attach(self, buffer: ByteBuffer, fields: dict[str, Field]) -> None:
        self._buffer = buffer
        self._fields = fields
        if self.layout_byte_width is not None:
            buffer.ensure_length(self.layout_byte_width)
        for field in fields.values():
            field.reset()

    @classmethod
    def from_bytes(cls, data: bytes | bytearray) -> Layout:
        """Create an instance holding raw bytes received from a device."""
        return cls(data)

    @classmethod
    def byte_size(cls) -> int:
        """Number of bytes an instance of this class occupies."""
        extent = max(
            (p.descriptor.last_byte + 1 for p in cls._positions.values() if p.descriptor),
            default=0,
        )
        return max(extent, cls.layout_byte_width or 0)

    @property
    def buffer(self) -> ByteBuffer:
        """The instance's buffer, shared by all its fields."""
        return self._buffer

    @property
    def fields(self) -> Mapping[str, Field]:
        return MappingProxyType(self._fields)

    def load(self, data: bytes | bytearray) -> None:
        """Replace the buffer contents with raw bytes.

        Raises:
            DecodeError: If data does not cover every field
        """
        needed = max(
            [field.descriptor.last_byte + 1 for field in self._fields.values()]
            + [self.layout_byte_width or 0]
        )
        if len(data) < needed:
            raise DecodeError(
                f"Truncated data for {type(self).__name__}: need {needed} bytes, got {len(data)}"
            )
        self._buffer.load(data)

    def to_bytes(self) -> bytes:
        return self._buffer.to_bytes()

    def _field(self, name: str) -> Field:
        try:
            return self._fields[name]
        except KeyError:
            raise SchemaError(f"{type(self).__name__} has no field {name!r}") from None

    def read(self, name: str) -> Any:
        """Decode a field by name.

        Raises:
            DecodeError: If the field's bits are not a valid value
        """
        return self._field(name).get()

    def read_or(self, name: str, default: Any = None) -> Any:
        """Decode a field by name, returning default if its bits are invalid."""
        return self._field(name).get_or(default)

    def write(self, name: str, value: Any) -> None:
        """Encode a field by name.

        Raises:
            ValueOutOfRange: If value does not fit the field
        """
        self._field(name).set(value)

    def to_dict(self) -> dict[str, Any]:
        """Decode every field.

        Raises:
            DecodeError: If any field's bits are not a valid value
        """
        return {name: field.get() for name, field in self._fields.items()}

    def __getitem__(self, name: str) -> Any:
        return self.read(name)

    def __setitem__(self, name: str, value: Any) -> None:
        self.write(name, value)

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Layout) or type(other) is not type(self):
            return NotImplemented
        return self._buffer == other._buffer

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        invalid = object()
        parts = []
        for name, field in self._fields.items():
            value = field.get_or(invalid)
            parts.append(f"{name}=<invalid>" if value is invalid else f"{name}={value!r}")
        return f"{type(self).__name__}({', '.join(parts)})"
