# constants.py
"""
Engine-level constants.

These values are fixed and do not change between simulation runs. They
shape the sampling and clamping behaviour of the engine itself and are
deliberately not part of the tunable ParameterSet, which holds the
physical constants of an experiment.
"""
import math

# Initial disk sampling bounds. Independent of the horizon/respawn ring.
INIT_RADIUS_MIN = 2.0
INIT_RADIUS_MAX = 30.0

# Floor applied to |position| when seeding velocities.
SEED_DISTANCE_FLOOR = 0.1

# Added to |position| in the integrator so the distance is never zero.
DISTANCE_EPSILON = 1e-3

TWO_PI = 2.0 * math.pi

# --- Orbital seeding ---
# Super-circular spin multipliers. Values > 1 give the disk its spiral look.
INIT_SPIN = 1.6
RESPAWN_SPIN = 1.4
# Per-particle speed jitter, drawn uniformly in [-JITTER, JITTER).
VELOCITY_JITTER = 0.05

# --- Accretion disk ---
# Upper bound on the per-step viscosity coefficient.
VISCOSITY_CAP = 0.02
BRIGHTNESS_MIN = 0.2
BRIGHTNESS_MAX = 2.0
# Brightness range for freshly seeded particles.
INIT_BRIGHTNESS_LOW = 0.5
INIT_BRIGHTNESS_HIGH = 1.0
# Brightness given to particles re-emitted at the outer ring.
RESPAWN_BRIGHTNESS = 0.6

# Default ensemble size for the headless runner.
DEFAULT_PARTICLE_COUNT = 10000
