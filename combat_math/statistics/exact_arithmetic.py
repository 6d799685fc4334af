"""
PURPOSE: Exact integer arithmetic for binomial probabilities.

RESPONSIBILITIES:
- Compute n! as an arbitrary-precision integer
- Compute the binomial coefficient C(n, k) without floating-point error
- Single responsibility: pure integer maths, no caching and no probabilities
"""

import logging
import math

logger = logging.getLogger(__name__)

__all__ = ["factorial", "binomial_coefficient"]


def factorial(number: int) -> int:
    """
    Calculate n! exactly.

    Args:
        number: Non-negative integer.

    Returns:
        int: The factorial of number. factorial(0) is 1.

    Raises:
        ValueError: If number is negative. Factorial is undefined there, so
            this is a hard failure rather than a clamped result.
    """
    if number < 0:
        raise ValueError(f"factorial is undefined for negative numbers, got {number}")

    return math.factorial(number)


def binomial_coefficient(population: int, combination_size: int) -> int:
    """
    Calculate the number of unordered combinations of combination_size
    elements drawn from a population.

    Out-of-range arguments mean "zero ways to choose" and return 0.

    Args:
        population: Total number of elements (n).
        combination_size: Number of elements in one combination (k).

    Returns:
        int: C(n, k), or 0 when n < 0, k < 0 or k > n.
    """
    if population < 0:
        logger.debug("binomial_coefficient() | Population is less than 0. Returning 0 ...")
        return 0

    if combination_size < 0:
        logger.debug("binomial_coefficient() | Combination size is less than 0. Returning 0 ...")
        return 0

    if combination_size > population:
        logger.debug(
            "binomial_coefficient() | Combination size %s is greater than population %s. Returning 0 ...",
            combination_size,
            population,
        )
        return 0

    # The quotient is always an integer, so floor division is exact.
    factorial_total = factorial(population)
    factorial_combination = factorial(combination_size)
    factorial_difference = factorial(population - combination_size)
    return factorial_total // (factorial_combination * factorial_difference)
