"""
Weighted choice combinators.

Every selection draws from the explicit ``random.Random`` passed in, so a
fixed seed replays the same sequence of choices.
"""
import random
from typing import Sequence, Tuple, TypeVar

from pysimgen.core.errors import EmptyChoiceSet

__all__ = ["frequency", "one_of", "pick", "pick_index"]

T = TypeVar("T")


def frequency(choices: Sequence[Tuple[float, T]], rng: random.Random) -> T:
    """Pick an item with probability proportional to its weight.

    Entries whose weight is not strictly positive are never selected.
    """
    eligible = [(w, item) for w, item in choices if w > 0]
    if not eligible:
        raise EmptyChoiceSet("No candidate has a positive weight")

    total = sum(w for w, _ in eligible)
    target = rng.uniform(0, total)
    upto = 0.0
    for w, item in eligible:
        if upto + w >= target:
            return item
        upto += w
    return eligible[-1][1]


def one_of(items: Sequence[T], rng: random.Random) -> T:
    """Uniform choice among candidate tags."""
    return pick(items, rng)


def pick(items: Sequence[T], rng: random.Random) -> T:
    """Uniformly pick one element of a non-empty sequence."""
    if not items:
        raise EmptyChoiceSet("Cannot pick from an empty collection")
    return items[rng.randrange(len(items))]


def pick_index(length: int, rng: random.Random) -> int:
    if length <= 0:
        raise EmptyChoiceSet("Cannot pick an index from an empty collection")
    return rng.randrange(length)
