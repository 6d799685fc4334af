"""
PURPOSE: Value types shared by the distribution builder and its callers.

BinomialOutcome is one (k, probability) entry of a distribution. Whether the
probability means P(X=k), P(X<=k) or P(X>=k) depends on the DistributionType
that produced it. Fixed and Range describe whether a trial count or a
group-success count is known exactly or varies between two bounds.
"""

import numbers
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Sequence, Tuple, Union

from combat_math.statistics.config import ROUND_PROBABILITY


class DistributionType(Enum):
    """Selects the transform applied to a base distribution."""
    BINOMIAL = "binomial"
    CUMULATIVE = "cumulative"
    SURVIVOR = "survivor"


@dataclass(frozen=True)
class BinomialOutcome:
    """One entry of a distribution.

    Attributes:
        successes (int): Number of grouped successes (the k index).
        probability (float): Probability attached to k.
    """
    successes: int
    probability: float

    def __str__(self) -> str:
        return f"P({self.successes}) = {self.probability:.4f}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert outcome to dictionary for JSON serialization."""
        return {
            "successes": self.successes,
            "probability": self.probability,
        }


Distribution = List[BinomialOutcome]


@dataclass(frozen=True)
class Fixed:
    """A count that is known exactly."""
    value: int

    @property
    def minimum(self) -> int:
        return self.value

    @property
    def maximum(self) -> int:
        return self.value


@dataclass(frozen=True)
class Range:
    """A count that varies uniformly between two inclusive bounds."""
    minimum: int
    maximum: int

    @property
    def is_degenerate(self) -> bool:
        """True when both bounds are equal, so the range is really a Fixed."""
        return self.minimum == self.maximum


CountParameter = Union[int, Fixed, Range, Tuple[int, int]]


def as_count(value: CountParameter) -> Union[Fixed, Range]:
    """
    Coerce a trial or group-success argument to Fixed or Range.

    Plain ints become Fixed, (min, max) tuples become Range.

    Raises:
        TypeError: If value is none of the accepted shapes, including tuples
            holding floats or bools.
    """
    if isinstance(value, (Fixed, Range)):
        return value
    if _is_whole_count(value):
        return Fixed(int(value))
    if isinstance(value, tuple) and len(value) == 2 and all(_is_whole_count(bound) for bound in value):
        return Range(int(value[0]), int(value[1]))
    raise TypeError(f"count must be an int, Fixed, Range or (min, max) tuple of ints, got {value!r}")


def _is_whole_count(value) -> bool:
    # bool is an int subclass but never a meaningful count
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def outcomes_match(first: BinomialOutcome, second: BinomialOutcome, places: int = ROUND_PROBABILITY) -> bool:
    """Compare two outcomes on successes and on probability rounded to `places` decimals."""
    return (
        first.successes == second.successes
        and round(first.probability, places) == round(second.probability, places)
    )


def distributions_match(
    first: Sequence[BinomialOutcome],
    second: Sequence[BinomialOutcome],
    places: int = ROUND_PROBABILITY,
) -> bool:
    """Element-wise outcomes_match over two distributions of equal length."""
    if len(first) != len(second):
        return False
    return all(outcomes_match(a, b, places) for a, b in zip(first, second))


def format_distribution(distribution: Sequence[BinomialOutcome]) -> str:
    """Render a distribution one outcome per line."""
    return "\n".join(str(outcome) for outcome in distribution)
