import logging
import numpy as np
from typing import List, Optional, Sequence, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar('T')


class RandomSampler:
    """Uniform sampling without replacement via a full random permutation"""

    def __init__(self, rng: Optional[np.random.Generator] = None, seed: Optional[int] = None):
        if rng is not None and seed is not None:
            raise ValueError("Pass either rng or seed, not both")
        # No seed means fresh OS entropy on every run
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def sample(self, records: Sequence[T], k: int) -> List[T]:
        """Return k records in shuffled order, or all of them if k exceeds the pool"""
        if k < 0:
            raise ValueError(f"Sample size must be non-negative, got {k}")

        order = self.rng.permutation(len(records))
        selected = [records[i] for i in order[:k]]

        if k > len(records):
            logger.debug("Requested %d records but only %d available", k, len(records))
        return selected


def sample(records: Sequence[T], k: int, rng: Optional[np.random.Generator] = None) -> List[T]:
    return RandomSampler(rng=rng).sample(records, k)
