"""
Unit tests for the memoized probability mass function.

STRATEGY:
    1. Pin the closed form against known values and against scipy.stats.binom
    2. Check every invalid region returns 0 (or 1 at the p >= 1 boundary)
    3. Check the bounded cache: hits, capacity, eviction, isolation
    4. Check the cache never changes results
"""

import unittest

import numpy as np
from scipy.stats import binom

from combat_math.statistics.config import get_cache_settings
from combat_math.statistics.pmf import (
    BoundedCache,
    ProbabilityMassFunction,
    probability_mass_function,
    probability_of_multiple_successes,
    reset_default_cache,
)


class TestProbabilityOfMultipleSuccesses(unittest.TestCase):
    def test_probability_at_or_below_zero(self):
        """p <= 0 gives 0."""
        self.assertEqual(probability_of_multiple_successes(-1, 1), 0)
        self.assertEqual(probability_of_multiple_successes(0, 3), 0)

    def test_probability_at_or_above_one(self):
        """p >= 1 gives 1."""
        self.assertEqual(probability_of_multiple_successes(2, 1), 1)
        self.assertEqual(probability_of_multiple_successes(1, 7), 1)

    def test_negative_number_of_successes(self):
        """A negative exponent gives 0."""
        self.assertEqual(probability_of_multiple_successes(0.5, -1), 0)

    def test_known_values(self):
        """Plain powers of p."""
        self.assertEqual(probability_of_multiple_successes(0.1, 1), 0.1)
        self.assertEqual(probability_of_multiple_successes(0.5, 2), 0.25)
        self.assertEqual(round(probability_of_multiple_successes(0.9, 5), 2), 0.59)


class TestProbabilityMassFunction(unittest.TestCase):
    def setUp(self):
        self.pmf = ProbabilityMassFunction(capacity=100)

    def test_invalid_inputs_return_zero(self):
        """Out-of-range n, k or p give 0."""
        self.assertEqual(self.pmf(0, 1, 0.5), 0)
        self.assertEqual(self.pmf(1, -1, 0.5), 0)
        self.assertEqual(self.pmf(1, 2, 0.5), 0)
        self.assertEqual(self.pmf(1, 1, -1), 0)
        self.assertEqual(self.pmf(3, 0, 0.0), 0)

    def test_probability_at_or_above_one(self):
        """p >= 1 puts all mass on k == n."""
        self.assertEqual(self.pmf(1, 1, 2), 1)
        self.assertEqual(self.pmf(4, 4, 1.0), 1)
        self.assertEqual(self.pmf(4, 3, 1.0), 0)

    def test_known_values(self):
        """Closed form matches hand-computed values."""
        self.assertEqual(self.pmf(1, 1, 0.5), 0.5)
        self.assertEqual(round(self.pmf(10, 5, 0.25), 4), 0.0584)
        self.assertEqual(round(self.pmf(50, 32, 0.5), 4), 0.0160)

    def test_matches_scipy(self):
        """Closed form matches scipy over small n."""
        for n in (1, 2, 5, 12, 40):
            for p in (0.1, 1 / 3, 0.5, 5 / 6):
                expected = binom.pmf(np.arange(n + 1), n, p)
                actual = [self.pmf(n, k, p) for k in range(n + 1)]
                np.testing.assert_allclose(actual, expected, rtol=1e-9, atol=1e-15)

    def test_large_trials_match_scipy(self):
        """Past n = 1029 the coefficient overflows a float; results still track scipy."""
        n = 1100
        for p in (0.5, 1 / 3):
            k = np.arange(int(n * p) - 40, int(n * p) + 41)
            actual = [self.pmf(n, int(successes), p) for successes in k]
            np.testing.assert_allclose(actual, binom.pmf(k, n, p), rtol=1e-9)

    def test_large_trials_far_tail_underflows_to_zero(self):
        """An overflowing coefficient paired with a vanishing tail gives 0, not an error."""
        self.assertEqual(self.pmf(1100, 550, 0.01), 0.0)

    def test_degenerate_inputs_are_logged(self):
        """Each early return leaves a debug record naming the reason."""
        cases = [
            ((0, 1, 0.5), "Number of trials is less than 1"),
            ((3, 4, 0.5), "outside 0..3"),
            ((3, 1, 0.0), "less than or equal to 0"),
            ((3, 3, 1.0), "greater than or equal to 1"),
        ]
        for arguments, fragment in cases:
            with self.subTest(arguments=arguments):
                with self.assertLogs("combat_math.statistics.pmf", level="DEBUG") as captured:
                    self.pmf(*arguments)
                self.assertIn(fragment, "\n".join(captured.output))

    def test_module_level_function(self):
        """The shared instance computes the same values."""
        reset_default_cache()
        self.assertEqual(round(probability_mass_function(10, 5, 0.25), 4), 0.0584)


class TestBoundedCache(unittest.TestCase):
    def test_capacity_must_be_positive(self):
        """Capacity below 1 is rejected."""
        with self.assertRaises(ValueError):
            BoundedCache(0)
        with self.assertRaises(ValueError):
            BoundedCache(-5)

    def test_hit_after_miss(self):
        """A repeat call is served from the cache."""
        pmf = ProbabilityMassFunction(capacity=10)
        first = pmf(10, 5, 0.25)
        second = pmf(10, 5, 0.25)
        self.assertEqual(first, second)
        info = pmf.cache_info()
        self.assertEqual(info["misses"], 1)
        self.assertEqual(info["hits"], 1)
        self.assertEqual(info["size"], 1)

    def test_degenerate_inputs_are_not_cached(self):
        """Early returns never occupy a cache slot."""
        pmf = ProbabilityMassFunction(capacity=10)
        pmf(0, 1, 0.5)
        pmf(3, 3, 1.0)
        self.assertEqual(len(pmf.cache), 0)

    def test_capacity_is_enforced(self):
        """The cache never grows past its capacity."""
        pmf = ProbabilityMassFunction(capacity=3)
        for k in range(10):
            pmf(20, k, 0.5)
        self.assertEqual(len(pmf.cache), 3)
        self.assertEqual(pmf.cache_info()["evictions"], 7)

    def test_least_recently_used_is_evicted(self):
        """Reading an entry protects it from the next eviction."""
        cache = BoundedCache(2)
        cache.put("a", 1.0)
        cache.put("b", 2.0)
        cache.get("a")
        cache.put("c", 3.0)
        self.assertIn("a", cache)
        self.assertNotIn("b", cache)
        self.assertIn("c", cache)

    def test_clear_resets_entries_and_counters(self):
        """clear() empties entries and zeroes counters."""
        cache = BoundedCache(5)
        cache.put("a", 1.0)
        cache.get("a")
        cache.clear()
        self.assertEqual(cache.info(), {"hits": 0, "misses": 0, "evictions": 0, "size": 0, "capacity": 5})

    def test_default_capacity_comes_from_config(self):
        """The default capacity is MAX_CACHE."""
        self.assertEqual(ProbabilityMassFunction().cache.capacity, get_cache_settings()["max_cache"])

    def test_shared_cache_between_instances(self):
        """Two PMFs can share one cache."""
        cache = BoundedCache(10)
        ProbabilityMassFunction(cache=cache)(6, 2, 0.5)
        ProbabilityMassFunction(cache=cache)(6, 2, 0.5)
        self.assertEqual(cache.info()["hits"], 1)

    def test_cache_does_not_change_results(self):
        """A one-entry cache gives the same values as a large one."""
        tiny = ProbabilityMassFunction(capacity=1)
        large = ProbabilityMassFunction(capacity=1000)
        for _ in range(2):
            for n in range(1, 15):
                for k in range(n + 1):
                    self.assertEqual(tiny(n, k, 0.4), large(n, k, 0.4))


if __name__ == "__main__":
    unittest.main()
