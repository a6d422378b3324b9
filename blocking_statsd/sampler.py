from __future__ import annotations

import random
from typing import Callable


class Sampler:
    """Per-call sampling decision.

    A rate of exactly 1.0 always emits and never draws a random number.
    Rates outside (0, 1] are not validated.
    """

    def __init__(self, rng: Callable[[], float] = random.random):
        self.rng = rng

    def should_emit(self, sample_rate: float) -> bool:
        if sample_rate == 1.0:
            return True
        return self.rng() <= sample_rate
