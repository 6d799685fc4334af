"""
PURPOSE: Build binomial, cumulative and survivor distributions of grouped successes.

RESPONSIBILITIES:
- Validate trial counts, probabilities and group-success counts
- Fall back to documented degenerate distributions instead of raising
- Build base distributions for fixed or variable trials crossed with fixed
  or variable grouping
- Hand the base distribution to transforms.py for the requested type

SRP/DRY CHECK:
    One builder handles all four parameterizations. Trials and grouping are
    passed as Fixed or Range values (see outcomes.py) rather than through
    separate entry points per combination.
"""

import logging
from typing import List, Optional, Sequence, Union

import numpy as np

from combat_math.statistics import config
from combat_math.statistics.outcomes import (
    BinomialOutcome,
    CountParameter,
    DistributionType,
    Fixed,
    Range,
    as_count,
    format_distribution,
)
from combat_math.statistics.pmf import DEFAULT_PMF, ProbabilityMassFunction
from combat_math.statistics.transforms import apply_distribution_type, normalize_distribution

logger = logging.getLogger(__name__)

__all__ = [
    "DistributionBuilder",
    "get_distribution",
    "get_binomial_distribution",
    "get_cumulative_distribution",
    "get_survivor_distribution",
]


def _to_outcomes(probabilities: Sequence[float]) -> List[BinomialOutcome]:
    return [BinomialOutcome(k, float(probability)) for k, probability in enumerate(probabilities)]


def _certain_no_successes(max_trials: int) -> List[BinomialOutcome]:
    """Zero successes is certain; every other count is impossible."""
    return [BinomialOutcome(0, 1.0)] + [BinomialOutcome(k, 0.0) for k in range(1, max_trials + 1)]


def _certain_all_successes(max_trials: int) -> List[BinomialOutcome]:
    """Every trial succeeds; only k = max_trials is possible."""
    return [BinomialOutcome(k, 0.0) for k in range(max_trials)] + [BinomialOutcome(max_trials, 1.0)]


_DEGENERATE = (BinomialOutcome(0, 1.0),)


class DistributionBuilder:
    """
    Builds distributions of grouped successes over a number of trials.

    A grouped success is `g` raw trial successes counted together as one.
    Trial counts and group counts can each be Fixed or a Range; ranges are
    modelled as a uniform mixture over every value between the bounds.

    Args:
        pmf: ProbabilityMassFunction to evaluate points with. Defaults to a
            fresh instance with its own cache.
        average_from_min_trials: When True, variable trial counts are averaged
            over [min, max]. When False (default, see config), over [1, max].
    """

    def __init__(
        self,
        pmf: Optional[ProbabilityMassFunction] = None,
        average_from_min_trials: Optional[bool] = None,
    ):
        self.pmf = pmf if pmf is not None else ProbabilityMassFunction()
        if average_from_min_trials is None:
            average_from_min_trials = config.AVERAGE_VARIABLE_TRIALS_FROM_MIN
        self.average_from_min_trials = average_from_min_trials

    def build(
        self,
        trials: CountParameter,
        probability: float,
        group_success_count: CountParameter = 1,
        distribution_type: DistributionType = DistributionType.BINOMIAL,
    ) -> List[BinomialOutcome]:
        """
        Build a distribution for the given parameters.

        Args:
            trials: Number of trials, as an int, Fixed, Range or (min, max) tuple.
            probability: Probability of success for a single trial.
            group_success_count: Raw successes per grouped success, same shapes
                as trials. Defaults to 1.
            distribution_type: BINOMIAL (P(X=k)), CUMULATIVE (P(X<=k)) or
                SURVIVOR (P(X>=k)).

        Returns:
            list[BinomialOutcome]: One outcome per k = 0..maxK, ascending.
            Out-of-range inputs give a degenerate distribution, never an error.

        Raises:
            TypeError: If trials or group_success_count has an unsupported shape.
            ValueError: If distribution_type is not a DistributionType.
        """
        if not isinstance(distribution_type, DistributionType):
            raise ValueError(f"Unknown distribution_type: {distribution_type}")

        trials = as_count(trials)
        grouping = as_count(group_success_count)

        base = self._validate(trials, probability, grouping, distribution_type)
        if base is None:
            base = self._create_base_distribution(trials, probability, grouping)

        return apply_distribution_type(base, distribution_type)

    def _validate(
        self,
        trials: Union[Fixed, Range],
        probability: float,
        grouping: Union[Fixed, Range],
        distribution_type: DistributionType,
    ) -> Optional[List[BinomialOutcome]]:
        """Return a degenerate base distribution for out-of-range input, else None."""
        caller = f"{distribution_type.value}_distribution()"

        if isinstance(trials, Fixed):
            if trials.value <= 0:
                logger.debug(f"{caller} | Number of trials is less than 1.")
                return list(_DEGENERATE)
        else:
            if trials.minimum <= 0:
                logger.debug(f"{caller} | Min number of trials is less than 1.")
                return list(_DEGENERATE)
            if trials.maximum <= 0:
                logger.debug(f"{caller} | Max number of trials is less than 1.")
                return list(_DEGENERATE)
            if trials.minimum > trials.maximum:
                logger.debug(f"{caller} | Min number of trials is greater than max number of trials.")
                return list(_DEGENERATE)

        max_trials = trials.maximum

        if probability <= 0:
            logger.debug(f"{caller} | Probability is less than or equal to 0.")
            return _certain_no_successes(max_trials)

        # The plain binomial form lets the PMF handle p >= 1 itself.
        if probability >= 1 and distribution_type != DistributionType.BINOMIAL:
            logger.debug(f"{caller} | Probability is greater than or equal to 1.")
            return _certain_all_successes(max_trials)

        if isinstance(grouping, Fixed):
            if grouping.value <= 0:
                logger.debug(f"{caller} | Group success count is less than 1.")
                return list(_DEGENERATE)
            if grouping.value > max_trials:
                logger.debug(f"{caller} | Group success count is greater than the total number of trials.")
                return list(_DEGENERATE)
        else:
            if grouping.minimum <= 0:
                logger.debug(f"{caller} | Minimum group success count is less than 1.")
                return list(_DEGENERATE)
            if grouping.maximum <= 0:
                logger.debug(f"{caller} | Maximum group success count is less than 1.")
                return list(_DEGENERATE)
            if grouping.minimum > grouping.maximum:
                logger.debug(f"{caller} | Minimum group success count is greater than maximum group success count.")
                return list(_DEGENERATE)
            if grouping.minimum > max_trials:
                logger.debug(f"{caller} | Minimum group success count is greater than the total number of trials.")
                return list(_DEGENERATE)

        return None

    def _create_base_distribution(
        self,
        trials: Union[Fixed, Range],
        probability: float,
        grouping: Union[Fixed, Range],
    ) -> List[BinomialOutcome]:
        if isinstance(trials, Range) and trials.is_degenerate:
            trials = Fixed(trials.maximum)
        if isinstance(grouping, Range) and grouping.is_degenerate:
            grouping = Fixed(grouping.maximum)

        if isinstance(trials, Fixed):
            if isinstance(grouping, Fixed):
                return self.fixed_trials_fixed_grouping(trials.value, probability, grouping.value)
            return self.fixed_trials_variable_grouping(
                trials.value, probability, grouping.minimum, grouping.maximum
            )

        if isinstance(grouping, Fixed):
            return self.variable_trials_fixed_grouping(
                trials.minimum, trials.maximum, probability, grouping.value
            )
        return self.variable_trials_variable_grouping(
            trials.minimum, trials.maximum, probability, grouping.minimum, grouping.maximum
        )

    def fixed_trials_fixed_grouping(
        self, number_of_trials: int, probability: float, group_success_count: int = 1
    ) -> List[BinomialOutcome]:
        """
        P(k) = PMF(n, k*g, p) for k = 0..n//g.

        With g > 1 the multiples of g do not cover every outcome, so the
        result is renormalized. With g == 1 this is the ordinary binomial.
        """
        max_k = number_of_trials // group_success_count
        probabilities = [
            self.pmf(number_of_trials, k * group_success_count, probability)
            for k in range(max_k + 1)
        ]

        distribution = _to_outcomes(probabilities)
        if group_success_count > 1:
            distribution = normalize_distribution(distribution)
        return distribution

    def fixed_trials_variable_grouping(
        self,
        number_of_trials: int,
        probability: float,
        min_group_success_count: int,
        max_group_success_count: int,
    ) -> List[BinomialOutcome]:
        """Average PMF(n, k*g, p) over every g in [g_min, g_max], then renormalize."""
        if min_group_success_count == max_group_success_count:
            return self.fixed_trials_fixed_grouping(number_of_trials, probability, max_group_success_count)

        max_k = number_of_trials // min_group_success_count
        probability_sums = np.zeros(max_k + 1)
        probability_weights = np.zeros(max_k + 1)

        for g in range(min_group_success_count, max_group_success_count + 1):
            for k in range(max_k + 1):
                probability_sums[k] += self.pmf(number_of_trials, k * g, probability)
                probability_weights[k] += 1

        return normalize_distribution(_to_outcomes(probability_sums / probability_weights))

    def variable_trials_fixed_grouping(
        self,
        min_number_of_trials: int,
        max_number_of_trials: int,
        probability: float,
        group_success_count: int = 1,
    ) -> List[BinomialOutcome]:
        """Average PMF(n, k*g, p) over the trial counts, then renormalize."""
        if min_number_of_trials == max_number_of_trials:
            return self.fixed_trials_fixed_grouping(max_number_of_trials, probability, group_success_count)

        max_k = max_number_of_trials // group_success_count
        probabilities = [
            self._average_over_trials(
                min_number_of_trials, max_number_of_trials, k * group_success_count, probability
            )
            for k in range(max_k + 1)
        ]

        return normalize_distribution(_to_outcomes(probabilities))

    def variable_trials_variable_grouping(
        self,
        min_number_of_trials: int,
        max_number_of_trials: int,
        probability: float,
        min_group_success_count: int,
        max_group_success_count: int,
    ) -> List[BinomialOutcome]:
        """Average over both trial counts and group sizes, then renormalize."""
        if min_number_of_trials == max_number_of_trials:
            return self.fixed_trials_variable_grouping(
                max_number_of_trials, probability, min_group_success_count, max_group_success_count
            )
        if min_group_success_count == max_group_success_count:
            return self.variable_trials_fixed_grouping(
                min_number_of_trials, max_number_of_trials, probability, max_group_success_count
            )

        max_k = max_number_of_trials // min_group_success_count
        probability_sums = np.zeros(max_k + 1)
        probability_weights = np.zeros(max_k + 1)

        for g in range(min_group_success_count, max_group_success_count + 1):
            for k in range(max_k + 1):
                probability_sums[k] += self._average_over_trials(
                    min_number_of_trials, max_number_of_trials, k * g, probability
                )
                probability_weights[k] += 1

        return normalize_distribution(_to_outcomes(probability_sums / probability_weights))

    def _average_over_trials(
        self,
        min_number_of_trials: int,
        max_number_of_trials: int,
        number_of_successes: int,
        probability: float,
    ) -> float:
        """Mean of PMF(n, successes, p) over the trial counts being mixed."""
        lowest = min_number_of_trials if self.average_from_min_trials else 1
        count = max_number_of_trials - lowest + 1

        combined_probability = 0.0
        for n in range(lowest, max_number_of_trials + 1):
            combined_probability += self.pmf(n, number_of_successes, probability)

        return combined_probability / count


_DEFAULT_BUILDER = DistributionBuilder(pmf=DEFAULT_PMF)


def get_distribution(
    distribution_type: DistributionType,
    trials: CountParameter,
    probability: float,
    group_success_count: CountParameter = 1,
    builder: Optional[DistributionBuilder] = None,
) -> List[BinomialOutcome]:
    """Module-level wrapper: build a distribution of the given type."""
    builder = builder if builder is not None else _DEFAULT_BUILDER
    return builder.build(trials, probability, group_success_count, distribution_type)


def get_binomial_distribution(
    trials: CountParameter,
    probability: float,
    group_success_count: CountParameter = 1,
    builder: Optional[DistributionBuilder] = None,
) -> List[BinomialOutcome]:
    """
    P(X = k) for each achievable number of grouped successes.

    Examples:
        get_binomial_distribution(10, 0.5)             # 10 dice
        get_binomial_distribution(Range(1, 3), 0.5)    # D3 dice
        get_binomial_distribution(10, 0.5, Range(2, 3))
    """
    return get_distribution(DistributionType.BINOMIAL, trials, probability, group_success_count, builder)


def get_cumulative_distribution(
    trials: CountParameter,
    probability: float,
    group_success_count: CountParameter = 1,
    builder: Optional[DistributionBuilder] = None,
) -> List[BinomialOutcome]:
    """P(X <= k) for each achievable number of grouped successes."""
    return get_distribution(DistributionType.CUMULATIVE, trials, probability, group_success_count, builder)


def get_survivor_distribution(
    trials: CountParameter,
    probability: float,
    group_success_count: CountParameter = 1,
    builder: Optional[DistributionBuilder] = None,
) -> List[BinomialOutcome]:
    """P(X >= k) for each achievable number of grouped successes."""
    return get_distribution(DistributionType.SURVIVOR, trials, probability, group_success_count, builder)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    # Ten dice hitting on 3+
    hit_probability = 4 / config.NUMBER_OF_SIDES
    for distribution_type in DistributionType:
        print(f"--- {distribution_type.value} ---")
        print(format_distribution(get_distribution(distribution_type, 10, hit_probability)))
    logger.info("PMF cache: %s", DEFAULT_PMF.cache_info())
