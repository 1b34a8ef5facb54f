#!/usr/bin/env python3
"""Sensor register example for bitlayout.

This example demonstrates:
1. Declaring register layouts with datasheet bit numbering
2. Decoding raw bytes read from an I2C temperature sensor
3. Read-modify-write of a configuration register
4. Little-endian SMBus words from a smart battery
5. Inspecting field placement

Run it directly, or analyze it with the CLI:

    bitlayout --analyze examples/sensor_registers.py --decode 1900
"""

from __future__ import annotations

import enum

from bitlayout import (
    ByteArrayLayout,
    DecodeError,
    Int16,
    Position,
    SMBusWordLayout,
    UInt8,
    WordLayout,
    field_widths,
    layout_size,
)


class ConversionRate(enum.IntEnum):
    """TMP102 continuous conversion rates."""

    QUARTER_HZ = 0
    ONE_HZ = 1
    FOUR_HZ = 2
    EIGHT_HZ = 3


class BatteryError(enum.IntEnum):
    """Smart Battery status error codes."""

    OK = 0
    BUSY = 1
    RESERVED_COMMAND = 2
    UNSUPPORTED_COMMAND = 3
    ACCESS_DENIED = 4
    OVERFLOW_UNDERFLOW = 5
    BAD_SIZE = 6
    UNKNOWN = 7


class TemperatureReading(ByteArrayLayout):
    """TMP102 temperature register.

    The reading is a 12-bit two's complement count of 0.0625 C steps, left
    justified in the two register bytes.
    """

    counts: Int16 = Position(significant_byte=1, msb=7, minor_byte=2, lsb=4, signed=True)

    @property
    def celsius(self) -> float:
        return self.counts * 0.0625


class ThermometerConfig(WordLayout):
    """TMP102 configuration register (power-on value 0x60A0)."""

    one_shot: bool = Position(bit=15)
    resolution: UInt8 = Position(msb=14, lsb=13, default=3)
    fault_queue: UInt8 = Position(msb=12, lsb=11)
    polarity: bool = Position(bit=10)
    thermostat_mode: bool = Position(bit=9)
    shutdown: bool = Position(bit=8)
    conversion_rate: ConversionRate = Position(msb=7, lsb=6, default=ConversionRate.FOUR_HZ)
    alert: bool = Position(bit=5, default=True)
    extended_mode: bool = Position(bit=4)


class BatteryStatus(SMBusWordLayout):
    """Smart Battery BatteryStatus() word."""

    over_charged_alarm: bool = Position(bit=15)
    terminate_charge_alarm: bool = Position(bit=14)
    over_temp_alarm: bool = Position(bit=12)
    terminate_discharge_alarm: bool = Position(bit=11)
    remaining_capacity_alarm: bool = Position(bit=9)
    remaining_time_alarm: bool = Position(bit=8)
    initialized: bool = Position(bit=7)
    discharging: bool = Position(bit=6)
    fully_charged: bool = Position(bit=5)
    fully_discharged: bool = Position(bit=4)
    error: BatteryError = Position(msb=3, lsb=0)


def main() -> None:
    """Run the sensor register example."""
    print("=" * 60)
    print("bitlayout Sensor Register Example")
    print("=" * 60)
    print()

    # Decode temperature readings
    print("1. Decoding TMP102 temperature readings...")
    for raw in (b"\x19\x00", b"\x00\x10", b"\xe7\x00"):
        reading = TemperatureReading.from_bytes(raw)
        print(f"   {raw.hex()} -> {reading.counts:5d} counts = {reading.celsius:8.4f} C")
    print()

    # Read-modify-write of the configuration register
    print("2. Putting the sensor into shutdown at 1 Hz...")
    config = ThermometerConfig.from_bytes(b"\x60\xa0")
    print(f"   Read:    {config.to_bytes().hex()}  {config}")
    config.shutdown = True
    config.conversion_rate = ConversionRate.ONE_HZ
    print(f"   Written: {config.to_bytes().hex()}  {config}")
    print()

    # SMBus words are little-endian
    print("3. Decoding smart battery status words...")
    for raw in (b"\xc7\x40", b"\x88\x00"):
        status = BatteryStatus.from_bytes(raw)
        print(f"   {raw.hex()} -> {status}")
        try:
            print(f"   error code: {status.error.name}")
        except DecodeError as e:
            print(f"   error code unreadable: {e}")
    print()

    # Field placement
    print("4. Analyzing field placement...")
    for layout_class in (TemperatureReading, ThermometerConfig, BatteryStatus):
        widths = field_widths(layout_class)
        print(
            f"   {layout_class.__name__}: {layout_size(layout_class)} bytes, "
            f"{sum(widths.values())} bits in {len(widths)} fields"
        )
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
