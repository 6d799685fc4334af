"""
Binomial statistics engine for tabletop wargame combat maths.

PURPOSE:
    Turn "n dice, each succeeding with probability p" into full probability
    distributions over the number of successes, so the combat-rule layer can
    chain hits, wounds and saves into the chance of destroying models.

RESPONSIBILITIES:
    - Exact factorials and binomial coefficients
    - Memoized binomial probability mass function with a bounded cache
    - Distributions for fixed or variable trials crossed with fixed or
      variable grouped successes
    - Cumulative (P(X<=k)) and survivor (P(X>=k)) transforms
    - Closed-form means and variances

SRP/DRY CHECK:
    Each submodule has a single responsibility:
    - exact_arithmetic.py: integer maths only
    - pmf.py: single-point PMF + cache only
    - distributions.py: validation and base distribution building only
    - transforms.py: normalize / cumulative / survivor only
    - moments.py: closed-form summary statistics only
"""

from .distributions import (
    DistributionBuilder,
    get_binomial_distribution,
    get_cumulative_distribution,
    get_distribution,
    get_survivor_distribution,
)
from .exact_arithmetic import binomial_coefficient, factorial
from .outcomes import (
    BinomialOutcome,
    DistributionType,
    Fixed,
    Range,
    distributions_match,
    outcomes_match,
)
from .pmf import (
    BoundedCache,
    ProbabilityMassFunction,
    probability_mass_function,
    probability_of_multiple_successes,
    reset_default_cache,
)
from .transforms import (
    apply_cumulative_function,
    apply_survivor_function,
    normalize_distribution,
)

__version__ = "0.1.0"

__all__ = [
    "factorial",
    "binomial_coefficient",
    "BoundedCache",
    "ProbabilityMassFunction",
    "probability_mass_function",
    "probability_of_multiple_successes",
    "reset_default_cache",
    "BinomialOutcome",
    "DistributionType",
    "Fixed",
    "Range",
    "outcomes_match",
    "distributions_match",
    "DistributionBuilder",
    "get_distribution",
    "get_binomial_distribution",
    "get_cumulative_distribution",
    "get_survivor_distribution",
    "normalize_distribution",
    "apply_cumulative_function",
    "apply_survivor_function",
]
