"""Tolerance rules: how "close enough" is measured for one attribute.

Each rule compares an original and a candidate SpecValue and returns a score
in [0, 1]. The comparison direction lives in the rule, so configuration can
say once whether a higher value is better, worse, or merely different:

- exact_match():          equal (case-insensitive for text) or nothing
- percentage_tolerance(): within ±N% scores 1.0, linear decay out to ±2N%
- minimum_required():     candidate must meet or exceed (voltage rating)
- maximum_allowed(m):     candidate must not exceed m x original (ESR, RDS(on))
- range_tolerance(lo, hi): candidate within [lo x original, hi x original]

Rules never raise while comparing. Missing or non-finite (NaN, inf) operands
score 0.0, non-numeric operands passed to a numeric rule fall back to exact
matching.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass

from .errors import ConfigurationError
from .specs import SpecValue


DEFAULT_ACCEPTANCE_THRESHOLD = 0.7

# Absorbs float representation error at exact boundaries (10k vs 10.1k at 1%)
_EPSILON = 1e-9


# =============================================================================
# HELPERS
# =============================================================================


def _clamp(score: float) -> float:
    if math.isnan(score):
        return 0.0
    return max(0.0, min(1.0, score))


def _present(value: SpecValue | None) -> bool:
    return value is not None and value.value is not None


def _finite(value: SpecValue) -> bool:
    """Text is always finite; NaN and infinities are not usable numbers."""
    return not value.is_numeric or math.isfinite(value.value)


def _both_numeric(original: SpecValue, candidate: SpecValue) -> bool:
    return original.is_numeric and candidate.is_numeric


def _values_equal(original: SpecValue, candidate: SpecValue) -> bool:
    """Value equality: numbers by value, text case-insensitively."""
    if _both_numeric(original, candidate):
        return float(original.value) == float(candidate.value)
    if original.is_numeric or candidate.is_numeric:
        return False
    return str(original.value).strip().lower() == str(candidate.value).strip().lower()


def _exact_score(original: SpecValue, candidate: SpecValue) -> float:
    return 1.0 if _values_equal(original, candidate) else 0.0


# =============================================================================
# RULES
# =============================================================================


@dataclass(frozen=True)
class ToleranceRule(ABC):
    """Base class for comparison policies.

    Subclasses implement describe() and _score() for two present, finite
    operands; compare() handles absent or non-finite operands and clamping.
    """

    def compare(self, original: SpecValue | None, candidate: SpecValue | None) -> float:
        """Score candidate against original, 0.0 if either side is absent or non-finite."""
        if not _present(original) or not _present(candidate):
            return 0.0
        if not _finite(original) or not _finite(candidate):
            return 0.0
        return _clamp(self._score(original, candidate))

    def is_acceptable(self, original: SpecValue | None, candidate: SpecValue | None) -> bool:
        return self.compare(original, candidate) >= self.acceptance_threshold

    @property
    def acceptance_threshold(self) -> float:
        return DEFAULT_ACCEPTANCE_THRESHOLD

    @abstractmethod
    def describe(self) -> str:
        """Short human-readable form, e.g. "within ±1%"."""

    @abstractmethod
    def _score(self, original: SpecValue, candidate: SpecValue) -> float:
        """Score two present operands; may fall outside [0, 1]."""


@dataclass(frozen=True)
class ExactMatchRule(ToleranceRule):
    """1.0 when values are equal, else 0.0. Symmetric."""

    def describe(self) -> str:
        return "exact match"

    def _score(self, original: SpecValue, candidate: SpecValue) -> float:
        return _exact_score(original, candidate)


@dataclass(frozen=True)
class PercentageToleranceRule(ToleranceRule):
    """Within ±percent scores 1.0; decays linearly to 0.0 at ±2 x percent."""

    percent: float

    def __post_init__(self):
        if self.percent < 0:
            raise ConfigurationError(f"Tolerance percent must be >= 0, got {self.percent}")

    def describe(self) -> str:
        return f"within ±{self.percent:g}%"

    def _score(self, original: SpecValue, candidate: SpecValue) -> float:
        if not _both_numeric(original, candidate):
            return _exact_score(original, candidate)

        orig = float(original.value)
        cand = float(candidate.value)
        if orig == 0:
            return 1.0 if cand == 0 else 0.0

        tolerance = self.percent / 100
        deviation = abs(cand - orig) / abs(orig)
        if deviation <= tolerance + _EPSILON:
            return 1.0
        if deviation >= 2 * tolerance - _EPSILON:
            return 0.0
        return 1.0 - (deviation - tolerance) / tolerance


@dataclass(frozen=True)
class MinimumRequiredRule(ToleranceRule):
    """Candidate must meet or exceed the original (voltage rating, current).

    Exact 1.0, higher 0.95, 90-100% of original 0.8, below 90% 0.0.
    """

    def describe(self) -> str:
        return "same or higher"

    def _score(self, original: SpecValue, candidate: SpecValue) -> float:
        if not _both_numeric(original, candidate):
            return _exact_score(original, candidate)

        orig = float(original.value)
        cand = float(candidate.value)
        if cand == orig:
            return 1.0
        if cand > orig:
            return 0.95
        if orig == 0:
            return 0.0
        if cand >= orig * 0.9 - _EPSILON * abs(orig):
            return 0.8
        return 0.0


@dataclass(frozen=True)
class MaximumAllowedRule(ToleranceRule):
    """Lower is better, capped at max_multiplier x original (ESR, RDS(on), Vf).

    Exact 1.0, lower 0.98, between 100% and the cap decays from 1.0 to 0.7,
    beyond the cap 0.0.
    """

    max_multiplier: float = 1.2

    def __post_init__(self):
        if self.max_multiplier < 1.0:
            raise ConfigurationError(
                f"Max multiplier must be >= 1.0, got {self.max_multiplier}"
            )

    def describe(self) -> str:
        return f"same or lower (max {self.max_multiplier:g}x)"

    def _score(self, original: SpecValue, candidate: SpecValue) -> float:
        if not _both_numeric(original, candidate):
            return _exact_score(original, candidate)

        orig = float(original.value)
        cand = float(candidate.value)
        if cand == orig:
            return 1.0
        if orig == 0:
            return 0.0
        if cand < orig:
            return 0.98

        ratio = cand / orig
        if ratio > self.max_multiplier + _EPSILON:
            return 0.0
        if self.max_multiplier == 1.0:
            return 0.7
        return 1.0 - 0.3 * (ratio - 1.0) / (self.max_multiplier - 1.0)


@dataclass(frozen=True)
class RangeToleranceRule(ToleranceRule):
    """Candidate within [min_multiplier, max_multiplier] x original scores 0.9."""

    min_multiplier: float
    max_multiplier: float

    def __post_init__(self):
        if self.min_multiplier < 0 or self.max_multiplier < 0:
            raise ConfigurationError(
                f"Range multipliers must be >= 0, got "
                f"({self.min_multiplier}, {self.max_multiplier})"
            )
        if self.min_multiplier > self.max_multiplier:
            raise ConfigurationError(
                f"Range min multiplier {self.min_multiplier} exceeds "
                f"max multiplier {self.max_multiplier}"
            )

    def describe(self) -> str:
        return f"between {self.min_multiplier:g}x and {self.max_multiplier:g}x"

    def _score(self, original: SpecValue, candidate: SpecValue) -> float:
        if not _both_numeric(original, candidate):
            return _exact_score(original, candidate)

        orig = float(original.value)
        cand = float(candidate.value)
        if cand == orig:
            return 1.0
        if orig == 0:
            return 0.0

        low, high = sorted((orig * self.min_multiplier, orig * self.max_multiplier))
        slack = _EPSILON * abs(orig)
        if low - slack <= cand <= high + slack:
            return 0.9
        return 0.0


# =============================================================================
# FACTORIES
# =============================================================================
# Stateless rules are shared instances.

_EXACT_MATCH = ExactMatchRule()
_MINIMUM_REQUIRED = MinimumRequiredRule()


def exact_match() -> ToleranceRule:
    return _EXACT_MATCH


def percentage_tolerance(percent: float) -> ToleranceRule:
    """Rule accepting ±percent (1.0 means ±1%)."""
    return PercentageToleranceRule(percent)


def minimum_required() -> ToleranceRule:
    return _MINIMUM_REQUIRED


def maximum_allowed(max_multiplier: float = 1.2) -> ToleranceRule:
    return MaximumAllowedRule(max_multiplier)


def range_tolerance(min_multiplier: float, max_multiplier: float) -> ToleranceRule:
    return RangeToleranceRule(min_multiplier, max_multiplier)
