"""Tests for the parsers module - raw spec text to base-unit SpecValues."""

import pytest

from partcompat_mcp.parsers import (
    ATTRIBUTE_KINDS,
    SPEC_KINDS,
    parse_capacitance,
    parse_current,
    parse_frequency,
    parse_inductance,
    parse_integer,
    parse_length_mm,
    parse_luminosity,
    parse_memory_size,
    parse_number,
    parse_power,
    parse_ppm,
    parse_resistance,
    parse_spec_set,
    parse_spec_value,
    parse_tolerance,
    parse_voltage,
    parse_wavelength,
)
from partcompat_mcp.specs import SpecUnit, SpecValue


class TestParseResistance:
    """Tests for parse_resistance function."""

    @pytest.mark.parametrize("input_val,expected", [
        # European notation - kilo
        ("4k7", 4700),
        ("4K7", 4700),
        ("10k0", 10000),
        # European notation - ohms
        ("4R7", 4.7),
        ("4r7", 4.7),
        ("470R", 470),
        # European notation - mega
        ("1M5", 1500000),
        ("1m5", 1500000),
        ("2M2", 2200000),
    ])
    def test_european_notation(self, input_val: str, expected: float):
        """Test European notation parsing (4k7 = 4.7kΩ)."""
        result = parse_resistance(input_val)
        assert result == pytest.approx(expected), f"{input_val} should parse to {expected}"

    @pytest.mark.parametrize("input_val,expected", [
        ("17mΩ", 0.017),
        ("17mohm", 0.017),
        ("100mΩ", 0.1),
        ("50mOhm", 0.05),
    ])
    def test_milliohm(self, input_val: str, expected: float):
        """Test milliohm parsing (m with an ohm marker is milli, not mega)."""
        result = parse_resistance(input_val)
        assert result == pytest.approx(expected), f"{input_val} should parse to {expected}"

    @pytest.mark.parametrize("input_val,expected", [
        ("10k", 10000),
        ("4.7K", 4700),
        ("100", 100),
        ("2.2M", 2200000),
        ("10kΩ", 10000),
        ("1MΩ", 1000000),
        ("10kohm", 10000),
    ])
    def test_standard_notation(self, input_val: str, expected: float):
        """Test standard resistance notation."""
        result = parse_resistance(input_val)
        assert result == pytest.approx(expected), f"{input_val} should parse to {expected}"

    def test_jumper_zero_ohm(self):
        """Test 0R jumper resistor edge cases."""
        assert parse_resistance("0R") == 0.0
        assert parse_resistance("0") == 0.0
        assert parse_resistance("0Ω") == 0.0

    def test_empty_returns_none(self):
        assert parse_resistance("") is None
        assert parse_resistance(None) is None


class TestParseCapacitance:
    """Tests for parse_capacitance function."""

    @pytest.mark.parametrize("input_val,expected", [
        ("100uF", 100e-6),
        ("100µF", 100e-6),
        ("4.7uF", 4.7e-6),
        ("100nF", 100e-9),
        ("10pF", 10e-12),
        ("1mF", 1e-3),
    ])
    def test_capacitance_parsing(self, input_val: str, expected: float):
        result = parse_capacitance(input_val)
        assert result == pytest.approx(expected), f"{input_val} should parse to {expected}"


class TestParseVoltage:
    """Tests for parse_voltage function."""

    @pytest.mark.parametrize("input_val,expected", [
        ("5V", 5),
        ("3.3V", 3.3),
        ("50V", 50),
        ("1kV", 1000),
        ("2.5kV", 2500),
        ("6.3v", 6.3),
        ("600mV", 0.6),
    ])
    def test_voltage_parsing(self, input_val: str, expected: float):
        result = parse_voltage(input_val)
        assert result == pytest.approx(expected), f"{input_val} should parse to {expected}"

    def test_no_unit_returns_none(self):
        assert parse_voltage("fifty") is None


class TestParseCurrent:
    """Tests for parse_current function."""

    @pytest.mark.parametrize("input_val,expected", [
        ("2A", 2),
        ("500mA", 0.5),
        ("100uA", 0.0001),
        ("50µA", 0.00005),
    ])
    def test_current_parsing(self, input_val: str, expected: float):
        result = parse_current(input_val)
        assert result == pytest.approx(expected), f"{input_val} should parse to {expected}"


class TestParseTolerance:
    """Tests for parse_tolerance and parse_ppm."""

    @pytest.mark.parametrize("input_val,expected", [
        ("1%", 1),
        ("0.1%", 0.1),
        ("±5%", 5),
    ])
    def test_tolerance_parsing(self, input_val: str, expected: float):
        result = parse_tolerance(input_val)
        assert result == pytest.approx(expected), f"{input_val} should parse to {expected}"

    @pytest.mark.parametrize("input_val,expected", [
        ("±100ppm/℃", 100),
        ("50ppm", 50),
        ("±20 PPM", 20),
    ])
    def test_ppm_parsing(self, input_val: str, expected: float):
        assert parse_ppm(input_val) == pytest.approx(expected)


class TestParsePower:
    """Tests for parse_power function."""

    @pytest.mark.parametrize("input_val,expected", [
        ("1W", 1),
        ("100mW", 0.1),
        ("1/4W", 0.25),
        ("1/10W", 0.1),
    ])
    def test_power_parsing(self, input_val: str, expected: float):
        result = parse_power(input_val)
        assert result == pytest.approx(expected), f"{input_val} should parse to {expected}"


class TestParseOtherUnits:
    """Tests for inductance, frequency, memory and the smaller parsers."""

    @pytest.mark.parametrize("input_val,expected", [
        ("10uH", 10e-6),
        ("100nH", 100e-9),
        ("1mH", 1e-3),
    ])
    def test_inductance(self, input_val: str, expected: float):
        assert parse_inductance(input_val) == pytest.approx(expected)

    @pytest.mark.parametrize("input_val,expected", [
        ("8MHz", 8e6),
        ("32.768kHz", 32768),
        ("2.4GHz", 2.4e9),
        ("50Hz", 50),
    ])
    def test_frequency(self, input_val: str, expected: float):
        assert parse_frequency(input_val) == pytest.approx(expected)

    @pytest.mark.parametrize("input_val,expected", [
        ("128KB", 131072),
        ("2MB", 2097152),
        ("128Mbit", 16777216),  # 128Mbit = 16MB
        ("64Kbit", 8192),
    ])
    def test_memory_size(self, input_val: str, expected: float):
        assert parse_memory_size(input_val) == pytest.approx(expected)

    def test_small_parsers(self):
        assert parse_wavelength("525nm") == 525
        assert parse_luminosity("1200mcd") == 1200
        assert parse_length_mm("2.54mm") == pytest.approx(2.54)
        assert parse_integer("40 pins") == 40
        assert parse_integer("none") is None

    def test_parse_number_rejects_units(self):
        assert parse_number("100") == 100.0
        assert parse_number(" 2.5 ") == 2.5
        assert parse_number("100V") is None
        assert parse_number("") is None


class TestParseSpecValue:
    """Tests for parse_spec_value - raw tool input to SpecValue."""

    def test_missing_input_is_none(self):
        assert parse_spec_value(None, "voltage") is None
        assert parse_spec_value("", "voltage") is None
        assert parse_spec_value("   ", "voltage") is None
        assert parse_spec_value(True, "voltage") is None

    def test_text_without_kind(self):
        assert parse_spec_value("X7R") == SpecValue("X7R")
        assert parse_spec_value(" 0603 ") == SpecValue("0603")

    def test_parses_with_kind(self):
        assert parse_spec_value("10kΩ", "resistance") == SpecValue(10000.0, SpecUnit.OHMS)
        assert parse_spec_value("50V", "voltage") == SpecValue(50.0, SpecUnit.VOLTS)

    def test_numbers_pass_through_with_unit(self):
        assert parse_spec_value(50, "voltage") == SpecValue(50, SpecUnit.VOLTS)
        assert parse_spec_value(0, "voltage") == SpecValue(0, SpecUnit.VOLTS)

    def test_unparseable_text_kept_as_text(self):
        assert parse_spec_value("see datasheet", "voltage") == SpecValue("see datasheet")

    def test_unknown_kind_keeps_text(self):
        assert parse_spec_value("10kΩ", "no_such_kind") == SpecValue("10kΩ")

    def test_every_kind_has_parser_and_unit(self):
        for kind, (parser, unit) in SPEC_KINDS.items():
            assert callable(parser), kind
            assert isinstance(unit, SpecUnit), kind

    def test_attribute_kinds_reference_known_kinds(self):
        for name, kind in ATTRIBUTE_KINDS.items():
            assert kind in SPEC_KINDS, f"{name} maps to unknown kind {kind}"


class TestParseSpecSet:
    """Tests for parse_spec_set."""

    def test_default_attribute_kinds(self):
        result = parse_spec_set({
            "resistance": "10kΩ",
            "tolerance": "±1%",
            "package": "0603",
            "powerRating": "1/10W",
        })
        assert result["resistance"] == SpecValue(10000.0, SpecUnit.OHMS)
        assert result["tolerance"] == SpecValue(1.0, SpecUnit.PERCENTAGE)
        assert result["package"] == SpecValue("0603")
        assert result["powerRating"].value == pytest.approx(0.1)

    def test_drops_missing_values(self):
        result = parse_spec_set({"resistance": "10k", "package": "", "composition": None})
        assert set(result) == {"resistance"}

    def test_custom_kinds(self):
        result = parse_spec_set({"vin": "12V", "resistance": "10k"}, kinds={"vin": "voltage"})
        assert result["vin"] == SpecValue(12.0, SpecUnit.VOLTS)
        # Custom map replaces the defaults entirely
        assert result["resistance"] == SpecValue("10k")

    def test_empty(self):
        assert parse_spec_set(None) == {}
        assert parse_spec_set({}) == {}
