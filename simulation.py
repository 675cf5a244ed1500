# simulation.py
"""
Handles the core simulation logic and physics calculations.

This module defines the Simulation class, which is responsible for
advancing the particle ensemble by one fixed time step. Every particle
feels the same analytic potential (a softened central mass plus an
isothermal dark matter halo); particles never interact with each other,
so the per-particle loop is data-parallel. With accretion enabled, the
step also applies disk viscosity, viscous heating and cooling, and sends
particles that crossed the horizon back to the outer ring.
"""
import logging
import threading
import numpy as np
from typing import Dict, Any, Optional
from numba import jit, prange

from constants import DISTANCE_EPSILON, VISCOSITY_CAP, BRIGHTNESS_MIN, BRIGHTNESS_MAX
from initializer import initialize
from params import ParameterSet
from particle import ParticleEnsemble, ParticleSnapshot
from recycler import HorizonRecycler

# --- Data Contracts ---
#
# class Simulation:
#   - __init__(self, params: ParameterSet, rng, ensemble: Optional[ParticleEnsemble] = None):
#     - Inputs:
#       - params: validated physical constants.
#       - rng: any object with `uniform(low, high, size)`; used for seeding
#         and for horizon respawns.
#       - ensemble: existing state to drive. A new empty one if omitted.
#
#   - init(self, count: int) -> None:
#     - Side Effects: Atomically reseeds the ensemble. Safe between steps
#       and from another thread while a step is running.
#
#   - step(self) -> None:
#     - Side Effects: Advances every particle by params.time_step.
#       Integrator -> AccretionModel -> HorizonRecycler, per particle.
#     - Invariants: Particle count remains constant. Brightness stays in
#       [BRIGHTNESS_MIN, BRIGHTNESS_MAX] when accretion is enabled. Readers
#       of snapshot() never see a partially stepped ensemble.
#
# class FixedStepAccumulator:
#   - advance(self, elapsed: float) -> int:
#     - Outputs: number of fixed steps a presentation layer should run to
#       keep up with `elapsed` seconds of wall time, capped per frame.


@jit(nopython=True)
def _integrate_particle(x, y, vx, vy, gm, softening, halo_v_sq, halo_core, dt):
    """
    Semi-implicit Euler step under the central mass and halo.

    Velocity is updated first and the new velocity moves the position;
    this ordering keeps orbits bounded over long runs.
    Returns the new state and the pre-step regularized distance.
    """
    dist = np.sqrt(x * x + y * y) + DISTANCE_EPSILON
    inv_dist = 1.0 / dist

    # Unit vector towards the center
    dx = -x * inv_dist
    dy = -y * inv_dist

    a_bh_mag = gm / (dist * dist + softening)
    # Isothermal halo: a = v0^2 / (r + r_core) gives a flat rotation curve
    a_dm_mag = halo_v_sq / (dist + halo_core)
    a_mag = a_bh_mag + a_dm_mag

    vx += dx * a_mag * dt
    vy += dy * a_mag * dt
    x += vx * dt
    y += vy * dt
    return x, y, vx, vy, dist


@jit(nopython=True)
def _accrete_particle(vx, vy, brightness, dist, viscosity_base, viscosity_floor, heat_scale, cool_factor):
    """
    Viscous heating, frictional damping and cooling for one particle.

    Heat is added and clamped before cooling is applied.
    """
    eta = viscosity_base / (dist + viscosity_floor)
    if eta > VISCOSITY_CAP:
        eta = VISCOSITY_CAP

    speed_sq = vx * vx + vy * vy
    brightness += heat_scale * eta * speed_sq
    if brightness > BRIGHTNESS_MAX:
        brightness = BRIGHTNESS_MAX

    damp = 1.0 - eta
    vx *= damp
    vy *= damp

    brightness *= cool_factor
    if brightness < BRIGHTNESS_MIN:
        brightness = BRIGHTNESS_MIN
    return vx, vy, brightness


@jit(nopython=True, parallel=True)
def _step_numba(
    pos_x, pos_y, vel_x, vel_y, bright,
    out_pos_x, out_pos_y, out_vel_x, out_vel_y, out_bright, swallowed,
    gm, softening, halo_v_sq, halo_core, dt,
    accretion_enabled, viscosity_base, viscosity_floor, heat_scale, cool_factor, horizon_radius
):
    """
    Numba-jitted step over all particles.

    Reads only the input arrays and writes only the output arrays, so
    every particle sees pre-step state regardless of iteration order.
    Flags particles whose pre-step distance was inside the horizon;
    re-emission happens afterwards, outside the parallel loop.
    """
    n = pos_x.shape[0]
    for i in prange(n):
        x, y, vx, vy, dist = _integrate_particle(
            pos_x[i], pos_y[i], vel_x[i], vel_y[i],
            gm, softening, halo_v_sq, halo_core, dt
        )
        b = bright[i]
        if accretion_enabled:
            vx, vy, b = _accrete_particle(
                vx, vy, b, dist, viscosity_base, viscosity_floor, heat_scale, cool_factor
            )
            swallowed[i] = dist < horizon_radius
        else:
            # No heating or cooling, but loaded state still honours the bounds.
            if b > BRIGHTNESS_MAX:
                b = BRIGHTNESS_MAX
            elif b < BRIGHTNESS_MIN:
                b = BRIGHTNESS_MIN
            swallowed[i] = False

        out_pos_x[i] = x
        out_pos_y[i] = y
        out_vel_x[i] = vx
        out_vel_y[i] = vy
        out_bright[i] = b


class Simulation:
    """
    Drives a ParticleEnsemble through fixed-size time steps.
    """
    def __init__(self, params: ParameterSet, rng, ensemble: Optional[ParticleEnsemble] = None):
        """
        Initializes the simulation environment.

        Args:
            params (ParameterSet): Physical constants for this run.
            rng: Random sampler used for seeding and respawns.
            ensemble (Optional[ParticleEnsemble]): State to drive.
        """
        self.params = params
        self.rng = rng
        self.ensemble = ensemble if ensemble is not None else ParticleEnsemble()
        self.recycler = HorizonRecycler(params, rng)

        # Serializes step(), init() and reconfigure() against each other.
        self._lock = threading.Lock()
        self._swallowed = np.zeros(self.ensemble.count, dtype=np.bool_)

        self.step_count = 0
        self.recycled_last_step = 0
        self.recycled_total = 0

        logging.info("Simulation logic initialized.")
        logging.debug(f"Simulation parameters: {params.as_dict()}")

    def init(self, count: int) -> None:
        """(Re)seeds the ensemble with `count` particles."""
        with self._lock:
            initialize(self.ensemble, count, self.params, self.rng)
            self._swallowed = np.zeros(self.ensemble.count, dtype=np.bool_)
            self.step_count = 0
            self.recycled_last_step = 0
            self.recycled_total = 0

    def reconfigure(self, params: ParameterSet) -> None:
        """Swaps in a new ParameterSet; takes effect from the next step."""
        with self._lock:
            self.params = params
            self.recycler = HorizonRecycler(params, self.rng)
        logging.info("Simulation parameters reconfigured.")
        logging.debug(f"New simulation parameters: {params.as_dict()}")

    def step(self) -> None:
        """
        Executes one time step of the simulation.
        """
        with self._lock:
            ensemble = self.ensemble
            n = ensemble.count
            if n == 0:
                return
            if self._swallowed.shape[0] != n:
                self._swallowed = np.zeros(n, dtype=np.bool_)

            p = self.params
            front = ensemble.arrays()
            back = ensemble.back_buffers()

            # 1. Integrate and apply accretion physics into the back buffers
            _step_numba(
                *front, *back, self._swallowed,
                p.gravity_constant * p.central_mass, p.softening,
                p.halo_velocity * p.halo_velocity, p.halo_core_radius, p.time_step,
                p.accretion_enabled, p.viscosity_base, p.viscosity_floor_radius,
                p.heat_scale, p.brightness_cool_factor, p.horizon_radius
            )

            # 2. Re-emit particles that fell through the horizon
            recycled = 0
            if p.accretion_enabled:
                recycled = self.recycler.recycle(back, self._swallowed)

            # 3. Publish the new state in one swap
            ensemble.commit()

            self.step_count += 1
            self.recycled_last_step = recycled
            self.recycled_total += recycled

    def run(self, steps: int) -> None:
        for _ in range(max(int(steps), 0)):
            self.step()

    def snapshot(self) -> ParticleSnapshot:
        return self.ensemble.snapshot()

    def diagnostics(self) -> Dict[str, Any]:
        """Aggregate metrics for throttled logging."""
        snap = self.snapshot()
        stats = {
            'step': self.step_count,
            'count': snap.count,
            'mean_speed': 0.0,
            'mean_brightness': 0.0,
            'mean_radius': 0.0,
            'recycled_last_step': self.recycled_last_step,
            'recycled_total': self.recycled_total,
        }
        if snap.count > 0:
            stats['mean_speed'] = float(np.mean(np.hypot(snap.velocity_x, snap.velocity_y)))
            stats['mean_brightness'] = float(np.mean(snap.brightness))
            stats['mean_radius'] = float(np.mean(np.hypot(snap.position_x, snap.position_y)))
        return stats


class FixedStepAccumulator:
    """
    Converts elapsed wall-clock time into a whole number of fixed steps.

    The physics step size never changes; leftover time is carried to the
    next frame. When a frame falls too far behind, the backlog beyond
    `max_steps_per_frame` is dropped rather than replayed.
    """
    def __init__(self, time_step: float, max_steps_per_frame: int = 8):
        if time_step <= 0:
            raise ValueError(f"time_step must be positive, got {time_step}.")
        if max_steps_per_frame < 1:
            raise ValueError(f"max_steps_per_frame must be at least 1, got {max_steps_per_frame}.")
        self.time_step = time_step
        self.max_steps_per_frame = int(max_steps_per_frame)
        self.accumulated = 0.0

    def advance(self, elapsed: float) -> int:
        self.accumulated += max(elapsed, 0.0)
        steps = int(self.accumulated // self.time_step)
        if steps > self.max_steps_per_frame:
            logging.debug(
                f"Frame fell behind by {steps} steps; running {self.max_steps_per_frame} "
                f"and dropping the rest."
            )
            steps = self.max_steps_per_frame
            self.accumulated = 0.0
        else:
            self.accumulated -= steps * self.time_step
        return steps
