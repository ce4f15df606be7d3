"""Parsers turning display strings into typed SpecValues.

Distributor data and tool callers supply spec values as text ('10kΩ',
'1/4W', '±5%'). The scoring engine compares typed numbers, so these helpers
convert text to base SI units before comparison:

- Voltage: volts (V)
- Current: amps (A)
- Resistance: ohms (Ω)
- Capacitance: farads (F)
- Inductance: henries (H)
- Frequency: hertz (Hz)
- Power: watts (W)
- Memory: bytes

These parse attribute values only. Identifying a part from its MPN is the
extraction layer's job.
"""

import re
from typing import Any, Callable, Mapping

from .specs import SpecUnit, SpecValue


# =============================================================================
# PRE-COMPILED REGEX PATTERNS
# =============================================================================

_VOLTAGE_KV_PATTERN = re.compile(r"([\d.]+)\s*kV", re.IGNORECASE)
_VOLTAGE_MV_PATTERN = re.compile(r"([\d.]+)\s*mV")
_VOLTAGE_PATTERN = re.compile(r"([\d.]+)\s*V", re.IGNORECASE)
_TOLERANCE_PATTERN = re.compile(r"([\d.]+)\s*%")
_PPM_PATTERN = re.compile(r"[±]?([\d.]+)\s*ppm", re.IGNORECASE)
_POWER_FRACTION_PATTERN = re.compile(r"(\d+)/(\d+)\s*W", re.IGNORECASE)
_POWER_MW_PATTERN = re.compile(r"([\d.]+)\s*mW", re.IGNORECASE)
_POWER_W_PATTERN = re.compile(r"([\d.]+)\s*W", re.IGNORECASE)
_CURRENT_UA_PATTERN = re.compile(r"([\d.]+)\s*[uµ]A", re.IGNORECASE)
_CURRENT_MA_PATTERN = re.compile(r"([\d.]+)\s*mA", re.IGNORECASE)
_CURRENT_A_PATTERN = re.compile(r"([\d.]+)\s*A", re.IGNORECASE)
_RESISTANCE_PATTERN = re.compile(r"([\d.]+)\s*([kKmM])?")
# European notation: 4k7 = 4.7k, 4R7 = 4.7Ω, 1M5 = 1.5M (suffix replaces decimal point)
_RESISTANCE_EURO_PATTERN = re.compile(r"(\d+)([kKrR])(\d+)|(\d+)(M)(\d+)", re.IGNORECASE)
_CAPACITANCE_PATTERN = re.compile(r"([\d.]+)\s*([pnuµm])?", re.IGNORECASE)
_INDUCTANCE_PATTERN = re.compile(r"([\d.]+)\s*([nuµm])?", re.IGNORECASE)
_FREQUENCY_PATTERN = re.compile(r"([\d.]+)\s*([kKmMgG])?")
_MEMORY_BIT_PATTERN = re.compile(r"([\d.]+)\s*([KMG])?BIT", re.IGNORECASE)
_MEMORY_BYTE_PATTERN = re.compile(r"([\d.]+)\s*([KMG])?B", re.IGNORECASE)
_WAVELENGTH_PATTERN = re.compile(r"([\d.]+)\s*nm", re.IGNORECASE)
_LUMINOSITY_PATTERN = re.compile(r"([\d.]+)\s*mcd", re.IGNORECASE)
_LENGTH_MM_PATTERN = re.compile(r"([\d.]+)\s*mm", re.IGNORECASE)
_NUMBER_PATTERN = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)\s*$")
_INTEGER_PATTERN = re.compile(r"(\d+)")

_MEMORY_MULTIPLIERS = {"": 1, "K": 1024, "M": 1024 * 1024, "G": 1024 * 1024 * 1024}


# =============================================================================
# VALUE PARSERS
# =============================================================================
# Each parser returns a float in base units, or None if unparseable.


def parse_voltage(s: str) -> float | None:
    """Parse voltage: '25V' -> 25, '6.3V' -> 6.3, '5kV' -> 5000, '600mV' -> 0.6"""
    if not s:
        return None
    match = _VOLTAGE_KV_PATTERN.search(s)
    if match:
        return float(match.group(1)) * 1000
    match = _VOLTAGE_MV_PATTERN.search(s)
    if match:
        return float(match.group(1)) / 1000
    match = _VOLTAGE_PATTERN.search(s)
    return float(match.group(1)) if match else None


def parse_tolerance(s: str) -> float | None:
    """Parse tolerance: '±1%' -> 1, '±10%' -> 10, '1%' -> 1"""
    if not s:
        return None
    match = _TOLERANCE_PATTERN.search(s)
    return float(match.group(1)) if match else None


def parse_ppm(s: str) -> float | None:
    """Parse ppm: '±20ppm' -> 20, '100ppm/℃' -> 100"""
    if not s:
        return None
    match = _PPM_PATTERN.search(s)
    return float(match.group(1)) if match else None


def parse_power(s: str) -> float | None:
    """Parse power in watts: '100mW' -> 0.1, '1/4W' -> 0.25, '0.25W' -> 0.25"""
    if not s:
        return None
    match = _POWER_FRACTION_PATTERN.search(s)
    if match:
        return float(match.group(1)) / float(match.group(2))
    match = _POWER_MW_PATTERN.search(s)
    if match:
        return float(match.group(1)) / 1000
    match = _POWER_W_PATTERN.search(s)
    return float(match.group(1)) if match else None


def parse_current(s: str) -> float | None:
    """Parse current in amps: '2A' -> 2, '500mA' -> 0.5, '100uA' -> 0.0001"""
    if not s:
        return None
    match = _CURRENT_UA_PATTERN.search(s)
    if match:
        return float(match.group(1)) / 1_000_000
    match = _CURRENT_MA_PATTERN.search(s)
    if match:
        return float(match.group(1)) / 1000
    match = _CURRENT_A_PATTERN.search(s)
    return float(match.group(1)) if match else None


def parse_resistance(s: str) -> float | None:
    """Parse resistance in ohms: '10kΩ' -> 10000, '17mΩ' -> 0.017, '4k7' -> 4700

    mΩ/mohm is milliohm; M (without the milli marker) is mega.
    """
    if not s:
        return None

    is_milliohm = "mΩ" in s or "mohm" in s.lower()
    s_clean = s.replace("Ω", "").replace("ohm", "").replace("Ohm", "").strip()

    if not is_milliohm:
        euro_match = _RESISTANCE_EURO_PATTERN.search(s_clean)
        if euro_match:
            if euro_match.group(1) is not None:
                int_part, suffix, frac_part = euro_match.group(1, 2, 3)
            else:
                int_part, suffix, frac_part = euro_match.group(4, 5, 6)
            value = float(f"{int_part}.{frac_part}")
            suffix = suffix.upper()
            if suffix == "K":
                return value * 1000
            if suffix == "M":
                return value * 1_000_000
            return value  # R = ohms

    # Jumper
    if s_clean.upper() == "0R":
        return 0.0

    match = _RESISTANCE_PATTERN.search(s_clean)
    if not match:
        return None
    value = float(match.group(1))
    if is_milliohm:
        return value / 1000

    suffix = (match.group(2) or "").upper()
    if suffix == "K":
        return value * 1000
    elif suffix == "M":
        return value * 1_000_000
    return value


def parse_capacitance(s: str) -> float | None:
    """Parse capacitance in farads: '100nF' -> 1e-7, '10uF' -> 1e-5, '1pF' -> 1e-12"""
    if not s:
        return None
    s = s.replace("F", "").strip()
    match = _CAPACITANCE_PATTERN.search(s)
    if not match:
        return None
    value = float(match.group(1))
    suffix = (match.group(2) or "").lower()
    if suffix == "p":
        return value * 1e-12
    elif suffix == "n":
        return value * 1e-9
    elif suffix in ("u", "µ"):
        return value * 1e-6
    elif suffix == "m":
        return value * 1e-3
    return value


def parse_inductance(s: str) -> float | None:
    """Parse inductance in henries: '10uH' -> 1e-5, '100nH' -> 1e-7, '1mH' -> 1e-3"""
    if not s:
        return None
    s = s.replace("H", "").strip()
    match = _INDUCTANCE_PATTERN.search(s)
    if not match:
        return None
    value = float(match.group(1))
    suffix = (match.group(2) or "").lower()
    if suffix == "n":
        return value * 1e-9
    elif suffix in ("u", "µ"):
        return value * 1e-6
    elif suffix == "m":
        return value * 1e-3
    return value


def parse_frequency(s: str) -> float | None:
    """Parse frequency in Hz: '8MHz' -> 8e6, '32.768kHz' -> 32768"""
    if not s:
        return None
    s = s.replace("Hz", "").strip()
    match = _FREQUENCY_PATTERN.search(s)
    if not match:
        return None
    value = float(match.group(1))
    suffix = (match.group(2) or "").upper()
    if suffix == "K":
        return value * 1e3
    elif suffix == "M":
        return value * 1e6
    elif suffix == "G":
        return value * 1e9
    return value


def parse_memory_size(s: str) -> float | None:
    """Parse memory size in bytes: '128KB' -> 131072, '2MB' -> 2097152, '128Mbit' -> 16777216"""
    if not s:
        return None
    s_upper = s.upper()

    match = _MEMORY_BIT_PATTERN.search(s_upper)
    if match:
        return float(match.group(1)) * _MEMORY_MULTIPLIERS[match.group(2) or ""] / 8

    match = _MEMORY_BYTE_PATTERN.search(s_upper)
    if match:
        return float(match.group(1)) * _MEMORY_MULTIPLIERS[match.group(2) or ""]

    return None


def parse_wavelength(s: str) -> float | None:
    """Parse wavelength in nm: '525nm' -> 525"""
    if not s:
        return None
    match = _WAVELENGTH_PATTERN.search(s)
    return float(match.group(1)) if match else None


def parse_luminosity(s: str) -> float | None:
    """Parse luminous intensity in mcd: '1200mcd' -> 1200"""
    if not s:
        return None
    match = _LUMINOSITY_PATTERN.search(s)
    return float(match.group(1)) if match else None


def parse_length_mm(s: str) -> float | None:
    """Parse length in mm: '2.54mm' -> 2.54"""
    if not s:
        return None
    match = _LENGTH_MM_PATTERN.search(s)
    return float(match.group(1)) if match else None


def parse_integer(s: str) -> int | None:
    """Parse integer: '8' -> 8, '40 pins' -> 40"""
    if not s:
        return None
    match = _INTEGER_PATTERN.search(s)
    return int(match.group(1)) if match else None


def parse_number(s: str) -> float | None:
    """Parse a bare number: '100' -> 100.0, '2.5' -> 2.5. Units are not allowed."""
    if not s:
        return None
    return float(s) if _NUMBER_PATTERN.match(s) else None


# =============================================================================
# KIND MAPPING
# =============================================================================
# Kind name -> (parser, unit). "text" kinds are kept as strings.

SPEC_KINDS: dict[str, tuple[Callable[[str], float | int | None], SpecUnit]] = {
    "voltage": (parse_voltage, SpecUnit.VOLTS),
    "current": (parse_current, SpecUnit.AMPS),
    "power": (parse_power, SpecUnit.WATTS),
    "resistance": (parse_resistance, SpecUnit.OHMS),
    "capacitance": (parse_capacitance, SpecUnit.FARADS),
    "inductance": (parse_inductance, SpecUnit.HENRIES),
    "frequency": (parse_frequency, SpecUnit.HERTZ),
    "tolerance": (parse_tolerance, SpecUnit.PERCENTAGE),
    "ppm": (parse_ppm, SpecUnit.PPM),
    "memory": (parse_memory_size, SpecUnit.BYTES),
    "wavelength": (parse_wavelength, SpecUnit.NANOMETERS),
    "luminosity": (parse_luminosity, SpecUnit.MILLICANDELA),
    "length": (parse_length_mm, SpecUnit.MILLIMETERS),
    "count": (parse_integer, SpecUnit.COUNT),
    "number": (parse_number, SpecUnit.NONE),
}

# Attribute name -> kind, for the attributes used by the built-in metadata.
# Attributes not listed are compared as text.
ATTRIBUTE_KINDS: dict[str, str] = {
    # Passives
    "resistance": "resistance",
    "capacitance": "capacitance",
    "inductance": "inductance",
    "tolerance": "tolerance",
    "powerRating": "power",
    "temperatureCoefficient": "ppm",
    "esr": "resistance",
    "voltage": "voltage",
    # Semiconductors
    "voltageRating": "voltage",
    "currentRating": "current",
    "rdsOn": "resistance",
    "threshold": "voltage",
    "forwardVoltage": "voltage",
    "hfe": "number",
    "gateCharge": "number",
    "reverseRecovery": "number",
    "gbw": "frequency",
    "slewRate": "number",
    "inputOffset": "voltage",
    # Digital
    "flashSize": "memory",
    "ramSize": "memory",
    "capacity": "memory",
    "ioCount": "count",
    "frequency": "frequency",
    "speed": "frequency",
    # Opto
    "brightness": "luminosity",
    "viewingAngle": "number",
    "wavelength": "wavelength",
    # Connectors
    "pinCount": "count",
    "pitch": "length",
}


def parse_spec_value(raw: Any, kind: str | None = None) -> SpecValue | None:
    """Convert a raw value to a SpecValue.

    Args:
        raw: Text ('10kΩ'), a number, or None
        kind: Key into SPEC_KINDS; None or "text" keeps the value as text

    Returns:
        SpecValue in base units, a text SpecValue if the text does not parse,
        or None for missing/empty input.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None

    parser_entry = SPEC_KINDS.get(kind) if kind else None
    if parser_entry is None:
        return SpecValue(raw)

    parser, unit = parser_entry
    if isinstance(raw, (int, float)):
        return SpecValue(raw, unit)

    parsed = parser(str(raw))
    if parsed is None:
        # Keep the text so exact-match fallback can still compare it
        return SpecValue(str(raw))
    return SpecValue(parsed, unit)


def parse_spec_set(
    raw_specs: Mapping[str, Any] | None,
    kinds: Mapping[str, str] | None = None,
) -> dict[str, SpecValue]:
    """Convert a {name: raw value} mapping into a {name: SpecValue} spec set.

    Kinds default to ATTRIBUTE_KINDS. Missing/empty values are dropped.
    """
    if not raw_specs:
        return {}
    kind_map = ATTRIBUTE_KINDS if kinds is None else kinds
    result: dict[str, SpecValue] = {}
    for name, raw in raw_specs.items():
        value = parse_spec_value(raw, kind_map.get(name))
        if value is not None:
            result[name] = value
    return result
