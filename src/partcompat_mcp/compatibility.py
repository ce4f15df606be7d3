"""Response building for the compatibility tools.

Turns raw tool input ({spec name: display string}) into typed spec sets,
runs the scorer, and shapes the result into the dicts the MCP tools return.
Caller mistakes come back as {"error": ...} dicts rather than exceptions.
"""

import logging
from typing import Any

from .config import ACCEPTANCE_THRESHOLD, DEFAULT_PROFILE, MAX_SPEC_VALUE_LENGTH, MAX_SPECS_PER_PART
from .metadata import ComponentTypeMetadata, SimilarityProfile
from .parsers import parse_spec_set
from .registry import lookup_metadata, registered_types
from .scorer import CompatibilityResult, compare_specs

logger = logging.getLogger(__name__)


def validate_spec_payload(specs: Any, label: str) -> str | None:
    """Return an error message if a raw spec payload is unusable, else None."""
    if specs is None:
        return None
    if not isinstance(specs, dict):
        return f"{label} must be an object mapping spec names to values"
    if len(specs) > MAX_SPECS_PER_PART:
        return f"Too many {label} (max {MAX_SPECS_PER_PART})"
    for name, value in specs.items():
        if not isinstance(name, str) or not name:
            return f"{label} contains an empty or non-string spec name"
        if isinstance(value, str) and len(value) > MAX_SPEC_VALUE_LENGTH:
            return f"{label}['{name}'] too long (max {MAX_SPEC_VALUE_LENGTH} characters)"
        if value is not None and not isinstance(value, (str, int, float)):
            return f"{label}['{name}'] must be a string or number"
    return None


def resolve_profile(profile: str | None, metadata: ComponentTypeMetadata) -> SimilarityProfile:
    """Explicit profile, else the server-wide DEFAULT_PROFILE, else the type's default.

    Raises:
        ValueError: Unknown profile key
    """
    key = profile or DEFAULT_PROFILE
    if key:
        return SimilarityProfile.from_key(key)
    return metadata.default_profile


def describe_metadata(metadata: ComponentTypeMetadata) -> dict[str, Any]:
    """Summarise a component type's configured specs for display."""
    return {
        "component_type": metadata.component_type,
        "default_profile": metadata.default_profile.key,
        "specs": [
            {
                "spec": name,
                "importance": config.importance.name,
                "rule": config.rule.describe(),
                "critical": metadata.is_critical(name),
            }
            for name, config in metadata.specs.items()
        ],
    }


def _summary_message(result: CompatibilityResult, profile: SimilarityProfile) -> str:
    if result.vetoed:
        return f"Not a substitute: critical spec mismatch ({', '.join(result.vetoed_by)})"
    if profile.meets_threshold(result.score):
        return f"Compatible substitute for {profile.key} (score {result.score:.2f})"
    if result.acceptable:
        return (
            f"Acceptable substitute, but below the {profile.key} threshold "
            f"of {profile.minimum_score:.2f}"
        )
    return f"Weak match (score {result.score:.2f}) - review specs manually"


def build_compatibility_response(
    component_type: str,
    original_specs: dict[str, Any] | None,
    candidate_specs: dict[str, Any] | None,
    profile: str | None = None,
) -> dict[str, Any]:
    """Score a candidate against an original and build the tool response."""
    metadata = lookup_metadata(component_type)
    if metadata is None:
        return {
            "error": f"Unknown component type: {component_type}",
            "supported_types": registered_types(),
        }

    for specs, label in ((original_specs, "original_specs"), (candidate_specs, "candidate_specs")):
        error = validate_spec_payload(specs, label)
        if error:
            return {"error": error}

    try:
        selected_profile = resolve_profile(profile, metadata)
    except ValueError as e:
        return {
            "error": str(e),
            "supported_profiles": [p.key for p in SimilarityProfile],
        }

    original = parse_spec_set(original_specs)
    candidate = parse_spec_set(candidate_specs)
    result = compare_specs(original, candidate, metadata, threshold=ACCEPTANCE_THRESHOLD)

    declared = set(metadata.spec_names)
    ignored = sorted((set(original) | set(candidate)) - declared)
    missing = result.specs_missing

    logger.debug(
        f"Compared {metadata.component_type}: score={result.score:.3f} "
        f"vetoed_by={list(result.vetoed_by)} missing={missing}"
    )

    return {
        "component_type": metadata.component_type,
        "score": round(result.score, 4),
        "acceptable": result.acceptable,
        "vetoed_by": list(result.vetoed_by),
        "specs": [c.to_dict() for c in result.comparisons],
        "specs_missing": missing,
        "specs_ignored": ignored,
        "profile": {
            "name": selected_profile.key,
            "description": selected_profile.description,
            "minimum_score": selected_profile.minimum_score,
            "meets_threshold": selected_profile.meets_threshold(result.score),
        },
        "confidence": {
            "level": "high" if not missing else "medium",
            "reason": (
                "All configured specs present on both parts"
                if not missing
                else "Some specs missing on one or both parts - verify manually"
            ),
        },
        "summary": _summary_message(result, selected_profile),
    }
