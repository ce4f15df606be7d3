"""Compatibility scoring: aggregate per-spec rule scores into one number.

For every spec the metadata declares, both sides' values are run through that
spec's tolerance rule. If any CRITICAL spec is not acceptable the overall
score is 0.0 regardless of everything else. Otherwise the result is the
importance-weighted mean of all per-spec scores.

Specs the metadata does not declare are ignored. Declared specs missing on
either side score 0.0 (and veto when CRITICAL).

Pure functions over immutable inputs - safe to call from any number of
threads against shared metadata.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from .metadata import ComponentTypeMetadata, SpecImportance
from .specs import SpecSet, SpecValue
from .tolerance import DEFAULT_ACCEPTANCE_THRESHOLD

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpecComparison:
    """Outcome of comparing one spec."""

    name: str
    importance: SpecImportance
    rule: str
    original: SpecValue | None
    candidate: SpecValue | None
    score: float
    acceptable: bool

    @property
    def is_missing(self) -> bool:
        return self.original is None or self.candidate is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "spec": self.name,
            "importance": self.importance.name,
            "rule": self.rule,
            "original": self.original.formatted() if self.original else None,
            "candidate": self.candidate.formatted() if self.candidate else None,
            "score": round(self.score, 4),
            "acceptable": self.acceptable,
        }


@dataclass(frozen=True)
class CompatibilityResult:
    """Overall score plus the per-spec breakdown that produced it."""

    score: float
    acceptable: bool
    comparisons: tuple[SpecComparison, ...] = field(default_factory=tuple)
    vetoed_by: tuple[str, ...] = field(default_factory=tuple)

    @property
    def vetoed(self) -> bool:
        return bool(self.vetoed_by)

    @property
    def spec_scores(self) -> dict[str, float]:
        return {c.name: c.score for c in self.comparisons}

    @property
    def specs_missing(self) -> list[str]:
        return [c.name for c in self.comparisons if c.is_missing]


def _lookup(specs: SpecSet | None, name: str) -> SpecValue | None:
    if not specs:
        return None
    value = specs.get(name)
    if value is None or value.value is None:
        return None
    return value


def _weighted_mean(comparisons: list[SpecComparison]) -> float:
    total_weight = 0.0
    weighted = 0.0
    for comparison in comparisons:
        weight = comparison.importance.base_weight
        weighted += comparison.score * weight
        total_weight += weight
    if total_weight == 0:
        return 0.0
    return max(0.0, min(1.0, weighted / total_weight))


def compare_specs(
    original: SpecSet | None,
    candidate: SpecSet | None,
    metadata: ComponentTypeMetadata,
    threshold: float = DEFAULT_ACCEPTANCE_THRESHOLD,
) -> CompatibilityResult:
    """Score candidate against original under metadata, with full breakdown.

    Args:
        original: Specs of the part being replaced (name -> SpecValue)
        candidate: Specs of the proposed substitute
        metadata: Component type metadata declaring specs and rules
        threshold: Overall score needed for `acceptable`

    Returns:
        CompatibilityResult with score in [0, 1]
    """
    comparisons: list[SpecComparison] = []
    vetoed_by: list[str] = []

    for name, config in metadata.specs.items():
        orig_val = _lookup(original, name)
        cand_val = _lookup(candidate, name)
        score = config.rule.compare(orig_val, cand_val)
        acceptable = score >= config.rule.acceptance_threshold
        comparisons.append(
            SpecComparison(
                name=name,
                importance=config.importance,
                rule=config.rule.describe(),
                original=orig_val,
                candidate=cand_val,
                score=score,
                acceptable=acceptable,
            )
        )
        if metadata.is_critical(name) and not acceptable:
            vetoed_by.append(name)

    if vetoed_by:
        logger.debug(f"{metadata.component_type}: critical spec mismatch on {', '.join(vetoed_by)}")
        overall = 0.0
    else:
        overall = _weighted_mean(comparisons)

    return CompatibilityResult(
        score=overall,
        acceptable=overall >= threshold,
        comparisons=tuple(comparisons),
        vetoed_by=tuple(vetoed_by),
    )


def score(
    original: SpecSet | None,
    candidate: SpecSet | None,
    metadata: ComponentTypeMetadata,
) -> float:
    """Overall compatibility score in [0, 1]."""
    return compare_specs(original, candidate, metadata).score


def is_acceptable(
    original: SpecSet | None,
    candidate: SpecSet | None,
    metadata: ComponentTypeMetadata,
    threshold: float = DEFAULT_ACCEPTANCE_THRESHOLD,
) -> bool:
    """True when the candidate is an acceptable substitute (score >= threshold)."""
    return score(original, candidate, metadata) >= threshold
