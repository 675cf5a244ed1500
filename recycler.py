# recycler.py
"""
Re-emits particles that crossed the event horizon.

Particles are never removed. A particle whose distance fell below the
horizon radius during a step is placed back on the outer respawn ring
with a fresh orbital velocity and a fixed brightness, which keeps the
particle count constant and sustains a steady inflow through the disk.
"""
import logging
import numpy as np
from typing import Sequence

from constants import TWO_PI, RESPAWN_SPIN, VELOCITY_JITTER, RESPAWN_BRIGHTNESS
from initializer import orbital_velocities
from params import ParameterSet

# --- Data Contracts ---
#
# class HorizonRecycler:
#   - __init__(self, params: ParameterSet, rng)
#   - recycle(self, buffers, swallowed) -> int:
#     - Inputs:
#       - buffers: the five post-step state arrays (FIELDS order), mutated
#         in place.
#       - swallowed: boolean array of shape (N,), True where the particle's
#         pre-step distance was inside the horizon.
#     - Outputs: number of particles re-emitted.
#     - Invariants: re-emitted particles lie at a distance in
#       [respawn_radius_min, respawn_radius_max] with brightness
#       RESPAWN_BRIGHTNESS.
#     - Random draws happen in ascending particle-id order, as three
#       vectors (u, theta, jitter), so parallel kernels upstream do not
#       affect reproducibility.


class HorizonRecycler:
    """
    Moves swallowed particles back to the outer ring of the disk.
    """
    def __init__(self, params: ParameterSet, rng):
        self.params = params
        self.rng = rng

    def recycle(self, buffers: Sequence[np.ndarray], swallowed: np.ndarray) -> int:
        indices = np.flatnonzero(swallowed)
        n = indices.shape[0]
        if n == 0:
            return 0

        p = self.params
        u = np.asarray(self.rng.uniform(0.0, 1.0, n), dtype=np.float64)
        theta = np.asarray(self.rng.uniform(0.0, TWO_PI, n), dtype=np.float64)
        jitter = np.asarray(self.rng.uniform(-VELOCITY_JITTER, VELOCITY_JITTER, n), dtype=np.float64)

        # Linear in u: the ring is thin, so no area correction is applied.
        radius = p.respawn_radius_min + (p.respawn_radius_max - p.respawn_radius_min) * u
        x = radius * np.cos(theta)
        y = radius * np.sin(theta)
        vx, vy = orbital_velocities(x, y, p, RESPAWN_SPIN, jitter)

        position_x, position_y, velocity_x, velocity_y, brightness = buffers
        position_x[indices] = x
        position_y[indices] = y
        velocity_x[indices] = vx
        velocity_y[indices] = vy
        brightness[indices] = RESPAWN_BRIGHTNESS

        logging.debug(f"Recycled {n} particles from the horizon to the outer ring.")
        return n
