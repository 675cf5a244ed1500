import math

import numpy as np

from constants import INIT_SPIN, INIT_RADIUS_MIN, INIT_RADIUS_MAX
from initializer import initialize, orbital_velocities
from particle import ParticleEnsemble


def test_scripted_single_particle_matches_closed_form(params, scripted):
    # Draw order: u, theta, jitter, brightness.
    rng = scripted([0.5, 0.0, 0.0, 0.75])
    ensemble = ParticleEnsemble()
    initialize(ensemble, 1, params, rng)

    r = 2.0 + 28.0 * math.sqrt(0.5)
    v_bh_sq = params.gravity_constant * params.central_mass / (r + params.softening)
    speed = math.sqrt(v_bh_sq + params.halo_velocity ** 2) * 1.6

    assert abs(r - 21.799) < 1e-3
    assert abs(ensemble.position_x[0] - r) < 1e-5
    assert abs(ensemble.position_y[0]) < 1e-5
    assert abs(ensemble.velocity_x[0]) < 1e-5
    assert abs(ensemble.velocity_y[0] - speed) < 1e-5
    assert ensemble.brightness[0] == 0.75


def test_jitter_scales_speed(params, scripted):
    ensemble = ParticleEnsemble()
    initialize(ensemble, 1, params, scripted([0.5, 0.0, 0.05, 0.75]))
    fast = ensemble.velocity_y[0]
    initialize(ensemble, 1, params, scripted([0.5, 0.0, 0.0, 0.75]))
    assert abs(fast / ensemble.velocity_y[0] - 1.05) < 1e-12


def test_seeded_disk_shape(params, rng):
    ensemble = ParticleEnsemble()
    initialize(ensemble, 5000, params, rng)

    radius = np.hypot(ensemble.position_x, ensemble.position_y)
    assert ensemble.count == 5000
    assert radius.min() >= INIT_RADIUS_MIN - 1e-9
    assert radius.max() <= INIT_RADIUS_MAX + 1e-9
    assert np.all((ensemble.brightness >= 0.5) & (ensemble.brightness < 1.0))

    # Velocities are purely tangential and counter-clockwise.
    radial = ensemble.position_x * ensemble.velocity_x + ensemble.position_y * ensemble.velocity_y
    angular = ensemble.position_x * ensemble.velocity_y - ensemble.position_y * ensemble.velocity_x
    assert np.allclose(radial / radius, 0.0, atol=1e-9)
    assert np.all(angular > 0.0)


def test_sqrt_sampling_is_area_uniform(params, rng):
    ensemble = ParticleEnsemble()
    initialize(ensemble, 20000, params, rng)
    radius = np.hypot(ensemble.position_x, ensemble.position_y)
    # sqrt(u) puts fewer than half the particles inside the midpoint radius
    assert np.mean(radius < 16.0) < 0.5


def test_non_positive_count_empties_ensemble(params, rng):
    ensemble = ParticleEnsemble(10)
    initialize(ensemble, 0, params, rng)
    assert ensemble.count == 0
    initialize(ensemble, -5, params, rng)
    assert ensemble.count == 0


def test_orbital_velocity_at_origin_is_finite(params):
    vx, vy = orbital_velocities(np.zeros(1), np.zeros(1), params, INIT_SPIN, np.zeros(1))
    assert np.all(np.isfinite(vx)) and np.all(np.isfinite(vy))
