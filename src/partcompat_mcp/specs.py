"""Spec values: the atomic datum compared by tolerance rules.

A SpecValue holds one attribute's value (number or text) and its unit tag.
It has no comparison logic of its own - the same raw value can be judged by
different rules depending on which attribute it represents.

An attribute that was not extracted is represented as None, never as a
SpecValue holding zero or an empty string.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Mapping


class SpecUnit(Enum):
    """Unit tags for spec values (symbol, human name)."""

    # Voltage
    VOLTS = ("V", "Voltage")
    MILLIVOLTS = ("mV", "Millivolts")
    # Current
    AMPS = ("A", "Current")
    MILLIAMPS = ("mA", "Milliamps")
    MICROAMPS = ("µA", "Microamps")
    # Power
    WATTS = ("W", "Power")
    MILLIWATTS = ("mW", "Milliwatts")
    # Resistance
    OHMS = ("Ω", "Resistance")
    KILOOHMS = ("kΩ", "Kiloohms")
    MEGAOHMS = ("MΩ", "Megaohms")
    # Capacitance
    FARADS = ("F", "Capacitance")
    MICROFARADS = ("µF", "Microfarads")
    NANOFARADS = ("nF", "Nanofarads")
    PICOFARADS = ("pF", "Picofarads")
    # Inductance
    HENRIES = ("H", "Inductance")
    MILLIHENRIES = ("mH", "Millihenries")
    MICROHENRIES = ("µH", "Microhenries")
    # Frequency
    HERTZ = ("Hz", "Frequency")
    KILOHERTZ = ("kHz", "Kilohertz")
    MEGAHERTZ = ("MHz", "Megahertz")
    GIGAHERTZ = ("GHz", "Gigahertz")
    # Time
    SECONDS = ("s", "Seconds")
    NANOSECONDS = ("ns", "Nanoseconds")
    # Memory
    BITS = ("bit", "Bits")
    BYTES = ("B", "Bytes")
    # Misc
    CELSIUS = ("°C", "Celsius")
    MILLIMETERS = ("mm", "Millimeters")
    NANOMETERS = ("nm", "Nanometers")
    MILLICANDELA = ("mcd", "Millicandela")
    VOLTS_PER_MICROSECOND = ("V/µs", "Volts per Microsecond")
    PERCENTAGE = ("%", "Percentage")
    PPM = ("ppm", "Parts Per Million")
    DECIBELS = ("dB", "Decibels")
    DEGREES = ("°", "Degrees")
    COUNT = ("pcs", "Count")
    NONE = ("", "No Unit")

    @property
    def symbol(self) -> str:
        return self.value[0]

    @property
    def label(self) -> str:
        return self.value[1]


@dataclass(frozen=True)
class SpecValue:
    """An immutable, unit-tagged attribute value."""

    value: int | float | str | None
    unit: SpecUnit = SpecUnit.NONE

    @property
    def is_numeric(self) -> bool:
        """True for int/float values (bool is not numeric)."""
        return isinstance(self.value, (int, float)) and not isinstance(self.value, bool)

    def formatted(self) -> str:
        """Render the value with its unit: '10000 Ω', 'X7R', 'N/A'."""
        if self.value is None:
            return "N/A"
        if self.is_numeric:
            text = f"{self.value:g}"
        else:
            text = str(self.value)
        return f"{text} {self.unit.symbol}" if self.unit.symbol else text

    def __str__(self) -> str:
        return self.formatted()


# Attribute name -> value. Missing keys (or None values) mean "not extracted".
SpecSet = Mapping[str, SpecValue | None]


def spec(value: int | float | str, unit: SpecUnit = SpecUnit.NONE) -> SpecValue:
    """Shorthand constructor: spec(10_000, SpecUnit.OHMS)."""
    return SpecValue(value, unit)
