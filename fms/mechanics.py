# fms/mechanics.py
from typing import Optional
import numpy as np


class FailureModel:
    """
    Exponential time-to-failure.
    One RandomState per simulator, seeded once; every draw advances it.
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[np.random.RandomState] = None):
        self.rng = rng if rng is not None else np.random.RandomState(seed)

    def draw(self, mttf: int) -> int:
        """Days until the next failure for a machine with the given MTTF."""
        # Rate 1/mttf, truncated toward zero
        day = int(self.rng.exponential(scale=mttf))
        # At least one day until failure
        return max(1, day)
