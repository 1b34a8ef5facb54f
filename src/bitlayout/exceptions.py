"""Exception hierarchy for bitlayout.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from LayoutError for easy catching of any bitlayout-specific error.
"""

from __future__ import annotations


class LayoutError(Exception):
    """Base exception for all bitlayout errors."""

    pass


class SchemaError(LayoutError):
    """Raised when a layout declaration is invalid.

    Examples:
        - Unsupported field annotation (no value adapter for the type)
        - Two fields declared with the same name
        - Enum whose values are not non-negative integers
    """

    pass


class RangeError(LayoutError):
    """Raised when a field descriptor does not describe a usable bit range.

    These are configuration errors: they surface when the field is declared or
    bound, before any buffer access.
    """

    pass


class BadByteIndex(RangeError):
    """Raised for a byte index that is negative (or below 1 in one-indexed
    conventions), or whose ordering contradicts the requested endianness."""

    pass


class BitOrdering(RangeError):
    """Raised when msb < lsb within a single byte."""

    pass


class ByteWidthExceeded(RangeError):
    """Raised when a bit index falls outside 0..7, or the encoded width
    exceeds the 64-bit working integer (or the layout's byte budget)."""

    pass


class OverlapError(RangeError):
    """Raised when two fields of one layout claim the same bits."""

    pass


class EncodeError(LayoutError):
    """Raised when writing a field value fails."""

    pass


class ValueOutOfRange(EncodeError):
    """Raised when a value does not fit the bits allotted to a field.

    Examples:
        - Unsigned value wider than the field
        - Signed value whose excess bits are not a sign extension
        - Value of the wrong type for the field's adapter
    """

    pass


class DecodeError(LayoutError):
    """Raised when the bits of a field do not represent a valid value.

    The buffer contents usually come from a device, so this is a recoverable
    error: callers may catch it per field and decide how to proceed.

    Examples:
        - Enum code with no corresponding member
        - Boolean field holding something other than 0 or 1
    """

    pass


class SequencingError(LayoutError):
    """Raised when the builder protocol is violated.

    Examples:
        - A second layout begins construction on a builder before the first sealed
    """

    pass
