"""
PURPOSE: Memoized binomial probability mass function.

RESPONSIBILITIES:
- Evaluate P(X = k) for n Bernoulli trials with success probability p
- Memoize results in a capacity-bounded cache owned by the PMF instance
- Raise nothing: invalid regions return 0 so callers can compose freely

SRP/DRY CHECK:
    Exact integer maths lives in exact_arithmetic.py. Building whole
    distributions lives in distributions.py. This module only evaluates
    single points of the PMF.
"""

import logging
import math
import threading
from collections import OrderedDict
from typing import Dict, Hashable, Optional, Tuple

from combat_math.statistics.config import MAX_CACHE
from combat_math.statistics.exact_arithmetic import binomial_coefficient

logger = logging.getLogger(__name__)

__all__ = [
    "BoundedCache",
    "ProbabilityMassFunction",
    "probability_of_multiple_successes",
    "probability_mass_function",
    "reset_default_cache",
    "DEFAULT_PMF",
]

PMFKey = Tuple[int, int, float]


class BoundedCache:
    """
    Thread-safe mapping that holds at most `capacity` entries.

    When an insert pushes the size over capacity, the least recently used
    entry is evicted. Lookups refresh recency. Two threads missing on the
    same key may both compute and store it; the later write wins.
    """

    def __init__(self, capacity: int = MAX_CACHE):
        if not isinstance(capacity, int) or isinstance(capacity, bool) or capacity < 1:
            raise ValueError(f"capacity must be a positive int, got: {capacity!r}")
        self.capacity = capacity
        self._entries: "OrderedDict[Hashable, float]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def get(self, key: Hashable) -> Optional[float]:
        """Return the cached value for key, or None on a miss."""
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                self.hits += 1
                return self._entries[key]
            self.misses += 1
            return None

    def put(self, key: Hashable, value: float) -> None:
        with self._lock:
            self._entries[key] = value
            self._entries.move_to_end(key)
            while len(self._entries) > self.capacity:
                evicted_key, _ = self._entries.popitem(last=False)
                self.evictions += 1
                logger.debug(f"Evicted PMF cache entry {evicted_key}")

    def clear(self) -> None:
        """Drop all entries and reset the counters."""
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0
            self.evictions = 0

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def info(self) -> Dict[str, int]:
        """Return hit/miss/eviction counters and current size."""
        with self._lock:
            return {
                "hits": self.hits,
                "misses": self.misses,
                "evictions": self.evictions,
                "size": len(self._entries),
                "capacity": self.capacity,
            }


def probability_of_multiple_successes(probability: float, number_of_successes: int) -> float:
    """
    Calculate the probability that number_of_successes independent trials
    all succeed.

    Args:
        probability: Probability of success for a single trial.
        number_of_successes: Number of trials that must all succeed.

    Returns:
        float: probability ** number_of_successes, with p <= 0 -> 0,
        p >= 1 -> 1 and a negative count -> 0.
    """
    if probability <= 0:
        logger.debug("probability_of_multiple_successes() | Probability is less than or equal to 0. Returning 0 ...")
        return 0.0

    if probability >= 1:
        logger.debug("probability_of_multiple_successes() | Probability is greater than or equal to 1. Returning 1 ...")
        return 1.0

    if number_of_successes < 0:
        logger.debug("probability_of_multiple_successes() | Number of successes is less than 0. Returning 0 ...")
        return 0.0

    return probability ** number_of_successes


class ProbabilityMassFunction:
    """
    Binomial PMF with its own bounded memoization cache.

    The cache is a pure performance layer: results are identical with or
    without it. Pass a BoundedCache to share one between instances, or a
    capacity to size a fresh one.
    """

    def __init__(self, cache: Optional[BoundedCache] = None, capacity: int = MAX_CACHE):
        self.cache = cache if cache is not None else BoundedCache(capacity)

    def __call__(self, number_of_trials: int, number_of_successes: int, probability: float) -> float:
        """
        Calculate P(X = number_of_successes) as C(n,k) * p^k * (1-p)^(n-k).

        Args:
            number_of_trials: Total number of dice rolled (n).
            number_of_successes: Exact number of successes wanted (k).
            probability: Probability of success for a single die (p).

        Returns:
            float: The probability mass at k. 0 for n < 1, k < 0, k > n or
            p <= 0. For p >= 1 the result is 1 when k == n and 0 otherwise.
        """
        if number_of_trials < 1:
            logger.debug("probability_mass_function() | Number of trials is less than 1. Returning 0 ...")
            return 0.0

        if number_of_successes < 0 or number_of_successes > number_of_trials:
            logger.debug(
                "probability_mass_function() | Number of successes %s is outside 0..%s. Returning 0 ...",
                number_of_successes,
                number_of_trials,
            )
            return 0.0

        if probability <= 0:
            logger.debug("probability_mass_function() | Probability is less than or equal to 0. Returning 0 ...")
            return 0.0

        if probability >= 1:
            logger.debug("probability_mass_function() | Probability is greater than or equal to 1.")
            return 1.0 if number_of_successes == number_of_trials else 0.0

        key: PMFKey = (number_of_trials, number_of_successes, probability)
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        coefficient = binomial_coefficient(number_of_trials, number_of_successes)
        try:
            success_probability = probability_of_multiple_successes(probability, number_of_successes)
            failure_probability = probability_of_multiple_successes(
                1 - probability, number_of_trials - number_of_successes
            )
            result = float(coefficient) * success_probability * failure_probability
        except OverflowError:
            # C(n, k) no longer fits in a double; evaluate in log space instead.
            logger.debug(
                "probability_mass_function() | C(%s, %s) overflows a float. Using log space ...",
                number_of_trials,
                number_of_successes,
            )
            result = math.exp(
                math.log(coefficient)
                + number_of_successes * math.log(probability)
                + (number_of_trials - number_of_successes) * math.log1p(-probability)
            )

        self.cache.put(key, result)
        return result

    def cache_info(self) -> Dict[str, int]:
        return self.cache.info()


# Shared instance behind the module-level convenience function.
DEFAULT_PMF = ProbabilityMassFunction()


def probability_mass_function(number_of_trials: int, number_of_successes: int, probability: float) -> float:
    """Module-level wrapper around the shared ProbabilityMassFunction."""
    return DEFAULT_PMF(number_of_trials, number_of_successes, probability)


def reset_default_cache() -> None:
    """Clear the cache of the shared ProbabilityMassFunction."""
    DEFAULT_PMF.cache.clear()
