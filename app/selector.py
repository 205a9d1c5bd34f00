import logging
import random
from typing import Optional, Protocol, Sequence

from .errors import NoEligibleRoute
from .models import RoutingMode, WeightedMid

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    def random(self) -> float:
        """Uniform draw from [0, 1)."""
        ...


# SystemRandom draws from os.urandom and is safe to share between threads.
DEFAULT_RNG: RandomSource = random.SystemRandom()


def best_match(weighted: Sequence[WeightedMid]) -> WeightedMid:
    best = weighted[0]
    for candidate in weighted[1:]:
        if candidate.weight > best.weight:
            best = candidate
    return best


def weighted_split(weighted: Sequence[WeightedMid], rng: RandomSource) -> WeightedMid:
    positive = [w for w in weighted if w.weight > 0]
    if not positive:
        raise NoEligibleRoute("No eligible route has a positive weight")
    if len(positive) == 1:
        return positive[0]

    total = sum(w.weight for w in positive)
    r = rng.random() * total
    cum = 0.0
    for candidate in positive:
        cum += candidate.weight
        if r < cum:
            return candidate

    logger.warning("Split draw %r fell outside cumulative total %r, using last MID", r, total)
    return positive[-1]


def select(
    weighted: Sequence[WeightedMid],
    mode: RoutingMode,
    rng: Optional[RandomSource] = None,
) -> WeightedMid:
    if not weighted:
        raise NoEligibleRoute()
    if mode == RoutingMode.SIMPLE:
        return best_match(weighted)
    return weighted_split(weighted, rng or DEFAULT_RNG)
