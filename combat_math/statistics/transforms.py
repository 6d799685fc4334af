"""
PURPOSE: Transforms from a base (binomial) distribution to derived forms.

RESPONSIBILITIES:
- Renormalize distributions whose mass drifted from 1 through grouping/averaging
- Lower cumulative transform: P(X <= k)
- Survivor (upper cumulative) transform: P(X >= k)
- Single responsibility: reshaping existing distributions, never building them
"""

import logging
from typing import List

import numpy as np

from combat_math.statistics.config import PROBABILITY_TOLERANCE
from combat_math.statistics.outcomes import BinomialOutcome, DistributionType

logger = logging.getLogger(__name__)

__all__ = [
    "normalize_distribution",
    "apply_cumulative_function",
    "apply_survivor_function",
    "apply_distribution_type",
]


def _probabilities(distribution: List[BinomialOutcome]) -> np.ndarray:
    return np.array([outcome.probability for outcome in distribution], dtype=float)


def _rebuild(distribution: List[BinomialOutcome], probabilities: np.ndarray) -> List[BinomialOutcome]:
    return [
        BinomialOutcome(outcome.successes, float(probability))
        for outcome, probability in zip(distribution, probabilities)
    ]


def normalize_distribution(distribution: List[BinomialOutcome]) -> List[BinomialOutcome]:
    """
    Rescale a distribution so its probabilities sum to 1.

    Distributions whose total is already within tolerance of 1, or of 0,
    are returned unchanged. A near-zero total is never divided by.

    Args:
        distribution: Base distribution, possibly empty.

    Returns:
        list[BinomialOutcome]: The normalized distribution.
    """
    if not distribution:
        return distribution

    probabilities = _probabilities(distribution)
    total_probability = float(np.sum(probabilities))

    if abs(total_probability) < PROBABILITY_TOLERANCE or abs(total_probability - 1.0) < PROBABILITY_TOLERANCE:
        return distribution

    logger.debug(f"Normalizing distribution with total probability {total_probability}")
    return _rebuild(distribution, probabilities / total_probability)


def apply_cumulative_function(distribution: List[BinomialOutcome]) -> List[BinomialOutcome]:
    """
    Convert P(X = k) into P(X <= k).

    Each running sum is capped at 1.0, and the last entry is snapped to
    exactly 1.0 when the total is within tolerance of it.
    """
    if not distribution:
        return []

    cumulative = np.minimum(np.cumsum(_probabilities(distribution)), 1.0)
    if abs(cumulative[-1] - 1.0) < PROBABILITY_TOLERANCE:
        cumulative[-1] = 1.0

    return _rebuild(distribution, cumulative)


def apply_survivor_function(distribution: List[BinomialOutcome]) -> List[BinomialOutcome]:
    """
    Convert P(X = k) into P(X >= k).

    Sums run from the highest k downward. The k = 0 entry is snapped to
    exactly 1.0 when the total is within tolerance of it.
    """
    if not distribution:
        return []

    survivor = np.cumsum(_probabilities(distribution)[::-1])[::-1]
    survivor = np.minimum(survivor, 1.0)
    if abs(survivor[0] - 1.0) < PROBABILITY_TOLERANCE:
        survivor[0] = 1.0

    return _rebuild(distribution, survivor)


def apply_distribution_type(
    distribution: List[BinomialOutcome], distribution_type: DistributionType
) -> List[BinomialOutcome]:
    """
    Apply the transform selected by distribution_type to a base distribution.

    Raises:
        ValueError: If distribution_type is not a DistributionType.
    """
    if distribution_type == DistributionType.BINOMIAL:
        return distribution
    if distribution_type == DistributionType.CUMULATIVE:
        return apply_cumulative_function(distribution)
    if distribution_type == DistributionType.SURVIVOR:
        return apply_survivor_function(distribution)
    raise ValueError(f"Unknown distribution_type: {distribution_type}")
