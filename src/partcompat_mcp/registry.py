"""Registration table: component type key -> ComponentTypeMetadata.

Adding a component category is a data change here, not new dispatch code.
Built-in definitions are registered at import time; callers may register
their own (or override a built-in) before scoring starts.

Keys are case-insensitive. Manufacturer-specific keys fall back to the
longest registered prefix: "resistor_chip_yageo" -> "resistor_chip" ->
"resistor".
"""

import logging

from .metadata import ComponentTypeMetadata, MetadataBuilder, SpecImportance
from .tolerance import (
    exact_match,
    maximum_allowed,
    minimum_required,
    percentage_tolerance,
    range_tolerance,
)

logger = logging.getLogger(__name__)

CRITICAL = SpecImportance.CRITICAL
HIGH = SpecImportance.HIGH
MEDIUM = SpecImportance.MEDIUM
LOW = SpecImportance.LOW

_METADATA: dict[str, ComponentTypeMetadata] = {}


def _normalize_key(component_type: str) -> str:
    return component_type.strip().lower().replace("-", "_").replace(" ", "_")


def register_metadata(metadata: ComponentTypeMetadata) -> None:
    """Register metadata under its component type. Replaces any existing entry."""
    key = _normalize_key(metadata.component_type)
    if key in _METADATA:
        logger.info(f"Replacing metadata for component type '{key}'")
    else:
        logger.debug(f"Registered metadata for '{key}': {metadata!r}")
    _METADATA[key] = metadata


def lookup_metadata(component_type: str | None) -> ComponentTypeMetadata | None:
    """Find metadata for a component type, falling back to its base type."""
    if not component_type:
        return None
    key = _normalize_key(component_type)
    parts = key.split("_")
    # Try exact key first, then progressively shorter prefixes
    for end in range(len(parts), 0, -1):
        metadata = _METADATA.get("_".join(parts[:end]))
        if metadata is not None:
            return metadata
    return None


def registered_types() -> list[str]:
    """Registered component type keys, sorted."""
    return sorted(_METADATA)


# =============================================================================
# BUILT-IN DEFINITIONS
# =============================================================================
# Direction conventions:
# - minimum_required(): ratings where higher is an acceptable substitute
# - maximum_allowed(m > 1): lower is better, slightly worse still usable


def _register_builtin_metadata() -> None:
    register_metadata(
        MetadataBuilder("resistor")
        .add_spec("resistance", CRITICAL, percentage_tolerance(1.0))
        .add_spec("tolerance", CRITICAL, exact_match())
        .add_spec("package", HIGH, exact_match())
        .add_spec("powerRating", MEDIUM, minimum_required())  # 1/4W can replace 1/10W
        .add_spec("temperatureCoefficient", LOW, percentage_tolerance(20.0))
        .add_spec("composition", LOW, exact_match())
        .build()
    )

    register_metadata(
        MetadataBuilder("capacitor")
        .add_spec("capacitance", CRITICAL, percentage_tolerance(5.0))
        .add_spec("voltage", CRITICAL, minimum_required())
        .add_spec("dielectric", CRITICAL, exact_match())  # X7R != X5R
        .add_spec("package", HIGH, exact_match())
        .add_spec("tolerance", MEDIUM, exact_match())
        .add_spec("temperatureCharacteristic", MEDIUM, exact_match())
        .add_spec("esr", LOW, maximum_allowed(1.5))
        .build()
    )

    register_metadata(
        MetadataBuilder("mosfet")
        .add_spec("voltageRating", CRITICAL, minimum_required())
        .add_spec("currentRating", CRITICAL, minimum_required())
        .add_spec("channel", CRITICAL, exact_match())  # N vs P
        .add_spec("rdsOn", HIGH, maximum_allowed(1.2))
        .add_spec("package", MEDIUM, exact_match())
        .add_spec("gateCharge", LOW, percentage_tolerance(30.0))
        .add_spec("threshold", LOW, range_tolerance(0.8, 1.2))
        .build()
    )

    register_metadata(
        MetadataBuilder("transistor")
        .add_spec("polarity", CRITICAL, exact_match())  # NPN vs PNP
        .add_spec("voltageRating", CRITICAL, minimum_required())
        .add_spec("currentRating", CRITICAL, minimum_required())
        .add_spec("package", HIGH, exact_match())
        .add_spec("hfe", MEDIUM, range_tolerance(0.7, 1.5))
        .add_spec("powerRating", MEDIUM, minimum_required())
        .build()
    )

    register_metadata(
        MetadataBuilder("diode")
        .add_spec("type", CRITICAL, exact_match())  # signal, rectifier, zener, schottky
        .add_spec("voltageRating", CRITICAL, minimum_required())
        .add_spec("currentRating", CRITICAL, minimum_required())
        .add_spec("package", HIGH, exact_match())
        .add_spec("forwardVoltage", MEDIUM, maximum_allowed(1.2))
        .add_spec("reverseRecovery", LOW, maximum_allowed(1.5))
        .build()
    )

    register_metadata(
        MetadataBuilder("opamp")
        .add_spec("configuration", CRITICAL, exact_match())  # single, dual, quad
        .add_spec("inputType", HIGH, exact_match())
        .add_spec("package", HIGH, exact_match())
        .add_spec("gbw", MEDIUM, minimum_required())
        .add_spec("slewRate", MEDIUM, minimum_required())
        .add_spec("inputOffset", LOW, maximum_allowed(1.5))
        .build()
    )

    register_metadata(
        MetadataBuilder("microcontroller")
        .add_spec("family", CRITICAL, exact_match())
        .add_spec("series", HIGH, exact_match())
        .add_spec("flashSize", HIGH, minimum_required())
        .add_spec("ramSize", HIGH, minimum_required())
        .add_spec("ioCount", MEDIUM, minimum_required())
        .add_spec("package", MEDIUM, exact_match())
        .add_spec("frequency", LOW, minimum_required())
        .build()
    )

    register_metadata(
        MetadataBuilder("memory")
        .add_spec("type", CRITICAL, exact_match())  # EEPROM, Flash, SRAM
        .add_spec("capacity", CRITICAL, minimum_required())
        .add_spec("interface", CRITICAL, exact_match())  # I2C, SPI, parallel
        .add_spec("voltage", HIGH, exact_match())
        .add_spec("package", MEDIUM, exact_match())
        .add_spec("speed", LOW, minimum_required())
        .build()
    )

    register_metadata(
        MetadataBuilder("led")
        .add_spec("color", CRITICAL, exact_match())
        .add_spec("package", HIGH, exact_match())
        .add_spec("brightness", MEDIUM, minimum_required())
        .add_spec("forwardVoltage", MEDIUM, range_tolerance(0.9, 1.1))
        .add_spec("viewingAngle", LOW, minimum_required())
        .add_spec("wavelength", LOW, percentage_tolerance(5.0))
        .build()
    )

    register_metadata(
        MetadataBuilder("connector")
        .add_spec("pinCount", CRITICAL, exact_match())
        .add_spec("pitch", CRITICAL, exact_match())
        .add_spec("gender", CRITICAL, exact_match())
        .add_spec("mountingType", HIGH, exact_match())  # SMD, THT
        .add_spec("currentRating", MEDIUM, minimum_required())
        .add_spec("voltageRating", MEDIUM, minimum_required())
        .build()
    )


_register_builtin_metadata()
