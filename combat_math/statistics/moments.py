"""
PURPOSE: Summary statistics for dice and binomial processes.

RESPONSIBILITIES:
- Single-trial success probability from counts of die faces
- Mean and spread of the result of repeated fair dice
- Mean and spread of a binomial distribution, with or without a variable
  number of trials
- Single responsibility: closed-form moments, no distribution building
"""

import logging
import math
from typing import Sequence

import numpy as np
from scipy.stats import binom

from combat_math.statistics.outcomes import BinomialOutcome

logger = logging.getLogger(__name__)


def get_probability_of_success(number_of_possible_results: int, number_of_successful_results: int) -> float:
    """
    Probability that a single trial succeeds, e.g. 4 successful faces of 6.

    Returns 0 when there are no possible results or fewer than one successful
    result, and 1 when the successful results exceed the possible ones.
    """
    if number_of_possible_results <= 0:
        logger.debug("get_probability_of_success() | Number of possible results is less than or equal to 0. Returning 0 ...")
        return 0.0

    if number_of_successful_results < 1:
        logger.debug("get_probability_of_success() | Number of successful results is less than 1. Returning 0 ...")
        return 0.0

    if number_of_successful_results > number_of_possible_results:
        logger.debug("get_probability_of_success() | Successful results exceed possible results. Returning 1 ...")
        return 1.0

    return number_of_successful_results / number_of_possible_results


def get_mean_result(number_of_possible_results: int) -> int:
    """Mean face of a die numbered 1..n, rounded to the nearest int (0 if n <= 0)."""
    if number_of_possible_results <= 0:
        return 0

    total = number_of_possible_results * (number_of_possible_results + 1) / 2
    return int(round(total / number_of_possible_results))


def get_variance_of_results(number_of_trials: int, number_of_possible_results: float) -> float:
    """
    Variance of the total of number_of_trials fair dice with n faces.

    One die has variance (n^2 - 1) / 12.
    """
    if number_of_trials <= 0 or number_of_possible_results <= 1:
        return 0.0

    single_die_variance = (number_of_possible_results ** 2 - 1) / 12.0
    return number_of_trials * single_die_variance


def get_standard_deviation_of_results(number_of_trials: int, number_of_possible_results: float) -> float:
    return math.sqrt(get_variance_of_results(number_of_trials, number_of_possible_results))


def get_mean_of_distribution(number_of_trials: int, probability: float) -> float:
    """Expected successes of Binomial(n, p): n * p, or 0 for n < 1 or p <= 0."""
    if number_of_trials < 1:
        return 0.0

    if probability <= 0:
        return 0.0

    return float(binom.mean(number_of_trials, min(probability, 1.0)))


def get_variance_of_distribution(number_of_trials: int, probability: float) -> float:
    """Variance of Binomial(n, p): n * p * (1 - p), or 0 outside 0 <= p < 1."""
    if number_of_trials < 0:
        return 0.0

    if probability < 0:
        return 0.0

    if probability >= 1:
        return 0.0

    return float(binom.var(number_of_trials, probability))


def get_standard_deviation_of_distribution(number_of_trials: int, probability: float) -> float:
    return math.sqrt(get_variance_of_distribution(number_of_trials, probability))


def get_combined_variance_of_distribution(
    expected_number_of_trials: float,
    variance_of_number_of_trials: float,
    probability: float,
) -> float:
    """
    Variance of successes when the number of trials is itself random.

    Law of total variance: E[n] * p * (1 - p) + Var[n] * p^2.
    """
    return (
        expected_number_of_trials * probability * (1 - probability)
        + variance_of_number_of_trials * probability ** 2
    )


def get_combined_standard_deviation_of_distribution(
    expected_number_of_trials: float,
    variance_of_number_of_trials: float,
    probability: float,
) -> float:
    return math.sqrt(
        get_combined_variance_of_distribution(
            expected_number_of_trials, variance_of_number_of_trials, probability
        )
    )


def get_expected_successes(distribution: Sequence[BinomialOutcome]) -> float:
    """Mean k of a base (P(X = k)) distribution. 0 for an empty distribution."""
    if not distribution:
        return 0.0

    successes = np.array([outcome.successes for outcome in distribution], dtype=float)
    probabilities = np.array([outcome.probability for outcome in distribution], dtype=float)
    return float(np.dot(successes, probabilities))
