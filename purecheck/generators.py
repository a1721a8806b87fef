"""Input producers for property-style cases.

Pass a generator to GivenStep.given_by and repeat() the case to run it over
many inputs.
"""

import random
from collections.abc import Callable, Sequence

from purecheck.errors import PreconditionError

type Generator[T] = Callable[[], T]


def random_int(
    low: int = -(2**31), high: int = 2**31 - 1, seed: int | None = None
) -> Generator[int]:
    """Generate integers in [low, high]; a seed makes the sequence reproducible."""
    if low > high:
        raise PreconditionError(f"empty range [{low}, {high}]")
    rng = random.Random(seed)
    return lambda: rng.randint(low, high)


def one_of[T](values: Sequence[T], seed: int | None = None) -> Generator[T]:
    """Generate items picked at random from values."""
    if not values:
        raise PreconditionError("one_of needs at least one value")
    rng = random.Random(seed)
    return lambda: rng.choice(values)
