"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from bitlayout import ByteBuffer, LayoutBuilder


@pytest.fixture
def buffer() -> ByteBuffer:
    """Empty byte buffer for codec tests."""
    return ByteBuffer()


@pytest.fixture
def sentinel_buffer() -> ByteBuffer:
    """Ten bytes of 0xFF, for checking that writes leave other bits alone."""
    return ByteBuffer(b"\xff" * 10)


@pytest.fixture
def builder() -> LayoutBuilder:
    """Fresh layout builder with default configuration."""
    return LayoutBuilder()
