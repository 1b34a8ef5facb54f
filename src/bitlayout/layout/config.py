"""Configuration for layout construction.

This module provides the configuration dataclass consulted by LayoutBuilder
while fields are bound to a buffer.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class LayoutConfig:
    """Options applied when binding fields to a layout's buffer.

    Attributes:
        allow_overlap: Accept fields that claim the same bits (default False).
            Some register maps deliberately alias bits, e.g. a whole-byte view
            next to the individual flags it contains. When False, binding an
            overlapping field raises OverlapError.

        max_bytes: Upper bound on the buffer size in bytes (default None, unbounded).
            Binding a field that reaches past it raises ByteWidthExceeded.
            Typical values:
            - Single register: 1 or 2 bytes
            - SMBus block read: up to 32 bytes

    Examples:
        ```python
        from typing import ClassVar

        from bitlayout import ByteArrayLayout, LayoutConfig, Position

        class Aliased(ByteArrayLayout):
            layout_config: ClassVar[LayoutConfig] = LayoutConfig(allow_overlap=True)

            raw: int = Position(byte=1, msb=7, lsb=0)
            ready: bool = Position(byte=1, bit=7)
        ```
    """

    allow_overlap: bool = False
    max_bytes: int | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.max_bytes is not None and self.max_bytes <= 0:
            raise ValueError(f"max_bytes must be > 0, got {self.max_bytes}")
