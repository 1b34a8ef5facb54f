"""Layout analysis CLI command."""

from __future__ import annotations

import importlib.util
import inspect
import sys
from pathlib import Path

from ..exceptions import DecodeError
from ..layout.base import Layout
from ..utils.sizing import field_map, layout_bits, layout_size


def analyze_file(file_path: Path, data: bytes | None = None) -> None:
    """Analyze all Layout classes in a Python file.

    Args:
        file_path: Path to Python file containing layout definitions
        data: Optional raw bytes to decode with each layout
    """
    # Load the Python module
    spec = importlib.util.spec_from_file_location("user_module", file_path)
    if spec is None or spec.loader is None:
        raise ValueError(f"Could not load module from {file_path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules["user_module"] = module
    spec.loader.exec_module(module)

    # Find all Layout subclasses defined in this file (not imported presets)
    layout_classes = [
        obj
        for _name, obj in inspect.getmembers(module, inspect.isclass)
        if issubclass(obj, Layout) and obj.__module__ == "user_module"
    ]

    if not layout_classes:
        print(f"No Layout classes found in {file_path}")
        return

    # Print header
    print("|" * 7, "bitlayout: Bitfield Layout Codec", "|" * 7)
    print(f"{len(layout_classes)} layout{'s' if len(layout_classes) != 1 else ''} loaded.")
    print("Byte numbers are 0-indexed; bit 7 is the most significant bit of a byte.")
    print()

    for layout_class in layout_classes:
        analyze_layout_class(layout_class)
        if data is not None:
            decode_with(layout_class, data)


def analyze_layout_class(layout_class: type[Layout]) -> None:
    """Print the size and field placement of a single layout class.

    Args:
        layout_class: Layout class to analyze
    """
    total_bytes = layout_size(layout_class)
    claimed_bits = layout_bits(layout_class)

    print(f"{'=' * 19} {layout_class.__name__} {'=' * 19}")
    print(f"Buffer size: {total_bytes} bytes / {total_bytes * 8} bits")
    print(f"        claimed by fields{'.' * 21}{claimed_bits}")
    if total_bytes * 8 > claimed_bits:
        print(f"        unassigned{'.' * 28}{total_bytes * 8 - claimed_bits}")
    print()

    print(f"{'-' * 28} Fields {'-' * 28}")
    for i, placement in enumerate(field_map(layout_class), 1):
        if placement.first_byte == placement.last_byte:
            where = f"byte {placement.first_byte} [{placement.msb}:{placement.lsb}]"
        else:
            significant, minor = placement.first_byte, placement.last_byte
            if placement.little_endian:
                significant, minor = minor, significant
            where = f"byte {significant}[{placement.msb}] .. byte {minor}[{placement.lsb}]"

        flags = []
        if placement.signed:
            flags.append("signed")
        if placement.little_endian:
            flags.append("little-endian")
        info = f" ({', '.join(flags)})" if flags else ""

        field_desc = f"{i}. {placement.name}"
        dots = "." * max(1, 30 - len(field_desc))
        print(f"        {field_desc}{dots}{placement.width:>2} bits  {where}{info}")

    print()


def decode_with(layout_class: type[Layout], data: bytes) -> None:
    """Decode raw bytes with a layout class and print each field's value.

    Args:
        layout_class: Layout class to decode with
        data: Raw bytes
    """
    print(f"{'-' * 27} Decoded {'-' * 27}")
    try:
        instance = layout_class.from_bytes(data)
    except DecodeError as e:
        print(f"        {e}")
        print()
        return

    for name, field in instance.fields.items():
        try:
            value = field.get()
        except DecodeError as e:
            print(f"        {name}: <invalid> {e}")
            continue
        print(f"        {name} = {value!r}")

    print()
