# initializer.py
"""
Seeds a ParticleEnsemble with a rotating disk.

Radii are drawn with sqrt(u) so the disk is area-uniform, which leaves
the particle density biased toward the center. Each particle is given a
tangential velocity slightly above the circular speed of the combined
central-mass and halo potential, plus a small jitter, which makes the
disk wind into spiral structure instead of settling into rings.
"""
import logging
import numpy as np
from typing import Tuple

from constants import (
    INIT_RADIUS_MIN, INIT_RADIUS_MAX, SEED_DISTANCE_FLOOR, TWO_PI,
    INIT_SPIN, VELOCITY_JITTER, INIT_BRIGHTNESS_LOW, INIT_BRIGHTNESS_HIGH
)
from params import ParameterSet
from particle import ParticleEnsemble

# --- Data Contracts ---
#
# orbital_velocities(x, y, params, spin, jitter) -> (vx, vy):
#   - Inputs: positions (arrays of shape (N,)), a ParameterSet, a spin
#     multiplier and per-particle jitter fractions of shape (N,).
#   - Outputs: tangential (counter-clockwise) velocity components.
#
# initialize(ensemble, count, params, rng) -> None:
#   - Side Effects: Replaces the ensemble's state with `count` fresh
#     particles. count <= 0 leaves an empty ensemble.
#   - Random draws, in order, each a vector of `count` values:
#     u in [0, 1), theta in [0, 2pi), jitter in [-J, J), brightness in [0.5, 1).


def orbital_velocities(
    x: np.ndarray, y: np.ndarray, params: ParameterSet, spin: float, jitter: np.ndarray
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Tangential velocities for particles at (x, y).

    The circular speed combines the central mass (softened) with the flat
    halo contribution: v_circ = sqrt(G*M / (d + softening) + v0^2).
    """
    dist = np.maximum(np.sqrt(x * x + y * y), SEED_DISTANCE_FLOOR)
    rx = x / dist
    ry = y / dist

    v_bh_sq = params.gravity_constant * params.central_mass / (dist + params.softening)
    v_dm_sq = params.halo_velocity * params.halo_velocity
    v_circ = np.sqrt(v_bh_sq + v_dm_sq)

    speed = v_circ * spin * (1.0 + jitter)
    # Tangent is the radial unit vector rotated by +90 degrees.
    return -ry * speed, rx * speed


def initialize(ensemble: ParticleEnsemble, count: int, params: ParameterSet, rng) -> None:
    """
    Populates the ensemble from scratch.

    Args:
        ensemble (ParticleEnsemble): The ensemble to (re)seed in place.
        count (int): Number of particles. Non-positive values give an empty ensemble.
        params (ParameterSet): Physical constants for the velocity formula.
        rng: Any object with a `uniform(low, high, size)` method.
    """
    count = max(int(count), 0)
    if count == 0:
        ensemble.resize(0)
        logging.info("Ensemble initialized empty.")
        return

    u = np.asarray(rng.uniform(0.0, 1.0, count), dtype=np.float64)
    theta = np.asarray(rng.uniform(0.0, TWO_PI, count), dtype=np.float64)
    jitter = np.asarray(rng.uniform(-VELOCITY_JITTER, VELOCITY_JITTER, count), dtype=np.float64)
    brightness = np.asarray(
        rng.uniform(INIT_BRIGHTNESS_LOW, INIT_BRIGHTNESS_HIGH, count), dtype=np.float64
    )

    radius = INIT_RADIUS_MIN + (INIT_RADIUS_MAX - INIT_RADIUS_MIN) * np.sqrt(u)
    x = radius * np.cos(theta)
    y = radius * np.sin(theta)
    vx, vy = orbital_velocities(x, y, params, INIT_SPIN, jitter)

    ensemble.load(x, y, vx, vy, brightness)

    logging.info(f"Ensemble initialized with {count} particles.")
    logging.debug(
        f"Initial radius range [{radius.min():.3f}, {radius.max():.3f}], "
        f"mean brightness {brightness.mean():.3f}."
    )
