"""Component type metadata: which specs matter, how much, and how to compare them.

Each component type declares its meaningful attributes once, at startup:

    metadata = (
        MetadataBuilder("resistor")
        .add_spec("resistance", SpecImportance.CRITICAL, percentage_tolerance(1.0))
        .add_spec("tolerance", SpecImportance.HIGH, exact_match())
        .add_spec("package", SpecImportance.MEDIUM, exact_match())
        .build()
    )

The built ComponentTypeMetadata is read-only and safe to share across threads.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from functools import total_ordering
from types import MappingProxyType
from typing import Mapping

from .errors import ConfigurationError
from .tolerance import ToleranceRule

logger = logging.getLogger(__name__)


@total_ordering
class SpecImportance(Enum):
    """Importance tier of a spec. Ordered CRITICAL > HIGH > MEDIUM > LOW."""

    CRITICAL = 1.0  # Mismatch alone disqualifies a substitute
    HIGH = 0.7
    MEDIUM = 0.4
    LOW = 0.2

    @property
    def base_weight(self) -> float:
        return self.value

    @property
    def is_mandatory(self) -> bool:
        return self is SpecImportance.CRITICAL

    def __lt__(self, other):
        if not isinstance(other, SpecImportance):
            return NotImplemented
        return self.value < other.value


class SimilarityProfile(Enum):
    """Advisory scoring context.

    Carried on metadata and consulted by callers (which threshold to apply,
    how to weigh results). The scorer itself never reads it.
    """

    DESIGN_PHASE = (
        "design_phase",
        "Exact specification match required",
        {"CRITICAL": 1.0, "HIGH": 0.9, "MEDIUM": 0.7, "LOW": 0.4},
        0.85,
    )
    REPLACEMENT = (
        "replacement",
        "Drop-in replacement - form/fit/function compatible",
        {"CRITICAL": 1.0, "HIGH": 0.7, "MEDIUM": 0.4, "LOW": 0.2},
        0.75,
    )
    COST_OPTIMIZATION = (
        "cost_optimization",
        "Accept downgrade if cheaper, maintain critical specs",
        {"CRITICAL": 1.0, "HIGH": 0.4, "MEDIUM": 0.2, "LOW": 0.0},
        0.60,
    )
    PERFORMANCE_UPGRADE = (
        "performance_upgrade",
        "Accept better specs, prioritize performance",
        {"CRITICAL": 1.0, "HIGH": 0.8, "MEDIUM": 0.5, "LOW": 0.2},
        0.70,
    )
    EMERGENCY_SOURCING = (
        "emergency_sourcing",
        "Any functional equivalent acceptable",
        {"CRITICAL": 0.8, "HIGH": 0.4, "MEDIUM": 0.2, "LOW": 0.0},
        0.50,
    )

    def __init__(self, key: str, description: str, multipliers: dict[str, float], minimum_score: float):
        self.key = key
        self.description = description
        self._multipliers = multipliers
        self.minimum_score = minimum_score

    def multiplier(self, importance: SpecImportance) -> float:
        return self._multipliers.get(importance.name, 0.0)

    def effective_weight(self, importance: SpecImportance) -> float:
        """Base weight scaled by this profile's multiplier."""
        return importance.base_weight * self.multiplier(importance)

    def meets_threshold(self, score: float) -> bool:
        return score >= self.minimum_score

    @classmethod
    def from_key(cls, key: str) -> "SimilarityProfile":
        """Look up a profile by key ('replacement') or name ('REPLACEMENT')."""
        normalized = key.strip().lower().replace("-", "_").replace(" ", "_")
        for profile in cls:
            if profile.key == normalized:
                return profile
        raise ValueError(f"Unknown similarity profile: {key}")


@dataclass(frozen=True)
class SpecConfig:
    """How one attribute is weighed and compared."""

    importance: SpecImportance
    rule: ToleranceRule


@dataclass(frozen=True, eq=False)
class ComponentTypeMetadata:
    """Immutable spec configuration for one component type.

    Build through MetadataBuilder, which guarantees at least one spec.
    """

    component_type: str
    specs: Mapping[str, SpecConfig]
    default_profile: SimilarityProfile = SimilarityProfile.REPLACEMENT
    critical_specs: frozenset[str] = field(init=False)

    def __post_init__(self):
        if not self.specs:
            raise ConfigurationError(
                f"Metadata for '{self.component_type}' must declare at least one spec"
            )
        # Copy the caller's dict
        object.__setattr__(self, "specs", MappingProxyType(dict(self.specs)))
        object.__setattr__(
            self,
            "critical_specs",
            frozenset(name for name, cfg in self.specs.items() if cfg.importance.is_mandatory),
        )

    @property
    def spec_names(self) -> list[str]:
        """All configured spec names, in registration order."""
        return list(self.specs)

    def spec_config(self, name: str) -> SpecConfig | None:
        return self.specs.get(name)

    def importance(self, name: str) -> SpecImportance | None:
        config = self.specs.get(name)
        return config.importance if config else None

    def tolerance_rule(self, name: str) -> ToleranceRule | None:
        config = self.specs.get(name)
        return config.rule if config else None

    def is_critical(self, name: str) -> bool:
        return name in self.critical_specs

    def __contains__(self, name: object) -> bool:
        return name in self.specs

    def __len__(self) -> int:
        return len(self.specs)

    def __repr__(self) -> str:
        return (
            f"ComponentTypeMetadata(type={self.component_type!r}, specs={len(self.specs)}, "
            f"critical={len(self.critical_specs)}, profile={self.default_profile.key})"
        )


class MetadataBuilder:
    """Accumulates (name, importance, rule) registrations for one component type."""

    def __init__(self, component_type: str):
        if not component_type or not isinstance(component_type, str):
            raise ConfigurationError("Component type cannot be empty")
        self._component_type = component_type
        self._specs: dict[str, SpecConfig] = {}
        self._default_profile = SimilarityProfile.REPLACEMENT

    def add_spec(self, name: str, importance: SpecImportance, rule: ToleranceRule) -> "MetadataBuilder":
        """Register a spec. Re-registering a name replaces the earlier config."""
        if not name or not isinstance(name, str):
            raise ConfigurationError("Spec name cannot be empty")
        if not isinstance(importance, SpecImportance):
            raise ConfigurationError(f"Invalid importance for '{name}': {importance!r}")
        if not isinstance(rule, ToleranceRule):
            raise ConfigurationError(f"Invalid tolerance rule for '{name}': {rule!r}")

        if name in self._specs:
            logger.debug(f"Spec '{name}' re-registered for {self._component_type}, keeping latest")
            # Move to the end so registration order reflects the latest call
            del self._specs[name]
        self._specs[name] = SpecConfig(importance, rule)
        return self

    def default_profile(self, profile: SimilarityProfile) -> "MetadataBuilder":
        if not isinstance(profile, SimilarityProfile):
            raise ConfigurationError(f"Invalid similarity profile: {profile!r}")
        self._default_profile = profile
        return self

    def build(self) -> ComponentTypeMetadata:
        if not self._specs:
            raise ConfigurationError(
                f"Cannot build metadata for '{self._component_type}' without any specs"
            )
        return ComponentTypeMetadata(
            component_type=self._component_type,
            specs=self._specs,
            default_profile=self._default_profile,
        )
