# sampler.py
"""
Seedable source of uniform random numbers.

All randomness in the engine flows through a RandomSampler handed in by
the caller. There is no module-level generator, so two runs built from
the same seed produce identical trajectories.
"""
import logging
import numpy as np
from typing import Optional, Union

# --- Data Contracts ---
#
# class RandomSampler:
#   - __init__(self, seed: Optional[int] = None)
#   - uniform(self, low, high, size=None) -> float | np.ndarray
#     - Outputs: values in [low, high). A plain float when size is None,
#       otherwise a float64 array of `size` independent draws.


class RandomSampler:
    """
    Thin wrapper around a NumPy Generator with an injectable seed.
    """
    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = np.random.default_rng(seed)
        logging.debug(f"RandomSampler created (seed={seed}).")

    def uniform(self, low: float, high: float, size: Optional[int] = None) -> Union[float, np.ndarray]:
        if size is None:
            return float(self._rng.uniform(low, high))
        return self._rng.uniform(low, high, size)
