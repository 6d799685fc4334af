"""
PURPOSE: Engine constants and tolerance parameters for the statistics package.

RESPONSIBILITIES:
- Define cache sizing for the memoized probability mass function
- Floating-point tolerances used by normalization and the cumulative transforms
- Die size shared with the combat-rule layer
- Single responsibility: configuration only, no probability logic
"""

# Cache Parameters
MAX_CACHE = 5000  # Max number of memoized PMF results per cache

# Numerical Tolerances
PROBABILITY_TOLERANCE = 1e-10  # Below this, totals are treated as exactly 0 or 1
ROUND_PROBABILITY = 4  # Decimal places used when comparing outcomes

# Dice
NUMBER_OF_SIDES = 6  # Standard six-sided die

# Variable Trials
# When False, variable-trial distributions average over n = 1..max_trials,
# which is what the published expected values are computed with.
# When True, the average runs over n = min_trials..max_trials.
AVERAGE_VARIABLE_TRIALS_FROM_MIN = False


def get_cache_settings():
    """Return cache sizing configuration for the PMF memoization layer."""
    return {
        "max_cache": MAX_CACHE,
    }


def get_tolerance_settings():
    """Return floating-point tolerances for distribution transforms."""
    return {
        "probability_tolerance": PROBABILITY_TOLERANCE,
        "round_probability": ROUND_PROBABILITY,
    }
