# tactician/dice.py
from __future__ import annotations

import random
from typing import Optional


class Dice:
    """
    The one random source for the AI and the duel loop, so you can:
    - seed for reproducible tests
    - give each agent its own stream
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> None:
        self._rng = rng if rng is not None else random.Random(seed)

    def spawn(self) -> "Dice":
        """Derive an independent, still reproducible, stream."""
        return Dice(rng=random.Random(self._rng.randrange(1_000_000_000)))

    def chance(self, probability: float) -> bool:
        """True with the given probability (0..1). Certain outcomes draw nothing."""
        if probability >= 1.0:
            return True
        if probability <= 0.0:
            return False
        return self._rng.random() < probability

    def nudge(self, spread: float) -> float:
        """Uniform jitter in [-spread, +spread]; exactly 0.0 when spread is 0."""
        if spread <= 0:
            return 0.0
        return (self._rng.random() - 0.5) * 2.0 * spread
