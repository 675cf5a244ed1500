# particle.py
"""
Manages the state of all particles in the simulation.

This module defines the ParticleEnsemble class, which stores particle
state (position, velocity, brightness) as five parallel float64 NumPy
arrays indexed by particle id. Each array has a twin back buffer; a step
writes the back buffers and then commits them in one swap, so readers
only ever see fully stepped state.
"""
import logging
import threading
import numpy as np
from typing import NamedTuple, Tuple

# --- Data Contracts ---
#
# class ParticleEnsemble:
#   - __init__(self, count: int = 0)
#     - Side Effects: Allocates zeroed state arrays of length max(count, 0).
#     - Invariants:
#       - position_x, position_y, velocity_x, velocity_y, brightness are
#         float64 arrays of shape (N,), all with the same N.
#       - N only changes through resize() or load().
#
#   - snapshot(self) -> ParticleSnapshot
#     - Outputs: read-only copies of the five arrays, taken atomically.
#
#   - back_buffers(self) -> Tuple[np.ndarray, ...]
#     - Outputs: scratch arrays of shape (N,) for the next step to write.
#   - commit(self) -> None
#     - Side Effects: Atomically swaps back buffers to the front.

FIELDS = ('position_x', 'position_y', 'velocity_x', 'velocity_y', 'brightness')


class ParticleSnapshot(NamedTuple):
    position_x: np.ndarray
    position_y: np.ndarray
    velocity_x: np.ndarray
    velocity_y: np.ndarray
    brightness: np.ndarray

    @property
    def count(self) -> int:
        return self.position_x.shape[0]


class ParticleEnsemble:
    """
    A structure-of-arrays container for N non-interacting particles.
    """
    def __init__(self, count: int = 0):
        self._lock = threading.Lock()
        self._front = self._allocate(count)
        self._back = self._allocate(count)

    @staticmethod
    def _allocate(count: int) -> Tuple[np.ndarray, ...]:
        count = max(int(count), 0)
        return tuple(np.zeros(count, dtype=np.float64) for _ in FIELDS)

    @property
    def count(self) -> int:
        return self._front[0].shape[0]

    def __len__(self):
        return self.count

    @property
    def position_x(self) -> np.ndarray:
        return self._front[0]

    @property
    def position_y(self) -> np.ndarray:
        return self._front[1]

    @property
    def velocity_x(self) -> np.ndarray:
        return self._front[2]

    @property
    def velocity_y(self) -> np.ndarray:
        return self._front[3]

    @property
    def brightness(self) -> np.ndarray:
        return self._front[4]

    def arrays(self) -> Tuple[np.ndarray, ...]:
        """Returns the live front arrays in FIELDS order."""
        return self._front

    def resize(self, count: int) -> None:
        """Replaces all state with zeroed arrays of the given length."""
        front = self._allocate(count)
        back = self._allocate(count)
        with self._lock:
            self._front, self._back = front, back
        logging.debug(f"ParticleEnsemble resized to {self.count} particles.")

    def load(self, position_x, position_y, velocity_x, velocity_y, brightness) -> None:
        """
        Replaces the ensemble state with copies of the given sequences.

        Raises:
            ValueError: If the sequences are not 1-D or differ in length.
        """
        front = tuple(
            np.array(values, dtype=np.float64, copy=True)
            for values in (position_x, position_y, velocity_x, velocity_y, brightness)
        )
        lengths = {a.shape for a in front}
        if len(lengths) != 1 or front[0].ndim != 1:
            msg = (
                f"Particle state arrays must be 1-D and of equal length, "
                f"got shapes {[a.shape for a in front]}."
            )
            logging.error(msg)
            raise ValueError(msg)
        back = self._allocate(front[0].shape[0])
        with self._lock:
            self._front, self._back = front, back

    def back_buffers(self) -> Tuple[np.ndarray, ...]:
        return self._back

    def commit(self) -> None:
        with self._lock:
            self._front, self._back = self._back, self._front

    def snapshot(self) -> ParticleSnapshot:
        with self._lock:
            copies = [a.copy() for a in self._front]
        for a in copies:
            a.setflags(write=False)
        return ParticleSnapshot(*copies)
