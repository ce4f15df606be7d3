"""Specification compatibility scoring for electronic part substitution."""

__version__ = "0.1.0"

from .errors import ConfigurationError
from .metadata import (
    ComponentTypeMetadata,
    MetadataBuilder,
    SimilarityProfile,
    SpecConfig,
    SpecImportance,
)
from .registry import lookup_metadata, register_metadata, registered_types
from .scorer import CompatibilityResult, SpecComparison, compare_specs, is_acceptable, score
from .specs import SpecSet, SpecUnit, SpecValue, spec
from .tolerance import (
    DEFAULT_ACCEPTANCE_THRESHOLD,
    ToleranceRule,
    exact_match,
    maximum_allowed,
    minimum_required,
    percentage_tolerance,
    range_tolerance,
)

__all__ = [
    "__version__",
    # Errors
    "ConfigurationError",
    # Values
    "SpecValue",
    "SpecUnit",
    "SpecSet",
    "spec",
    # Rules
    "ToleranceRule",
    "DEFAULT_ACCEPTANCE_THRESHOLD",
    "exact_match",
    "percentage_tolerance",
    "minimum_required",
    "maximum_allowed",
    "range_tolerance",
    # Metadata
    "SpecImportance",
    "SimilarityProfile",
    "SpecConfig",
    "ComponentTypeMetadata",
    "MetadataBuilder",
    "register_metadata",
    "lookup_metadata",
    "registered_types",
    # Scoring
    "score",
    "is_acceptable",
    "compare_specs",
    "CompatibilityResult",
    "SpecComparison",
]
