# params.py
"""
Physical parameters of a simulation run.

This module defines the ParameterSet value type. It is the entire tunable
surface of the engine: every physical constant the integrator, accretion
model and horizon recycler read comes from here. Instances are immutable
and validated on construction, so a malformed configuration is rejected
before a single step runs.
"""
import dataclasses
import logging
import math
import numpy as np
from dataclasses import dataclass
from typing import Dict, Any

# --- Data Contracts ---
#
# class ParameterSet (frozen dataclass):
#   - Fields: see below. Defaults reproduce the reference galaxy.
#   - Invariants (checked in __post_init__):
#     - horizon_radius < respawn_radius_min < respawn_radius_max
#     - softening > 0, viscosity_floor_radius > 0 (singularity guards)
#     - time_step > 0, halo_core_radius > 0
#     - 0 < brightness_cool_factor <= 1
#     - all numeric fields finite; coupling constants non-negative
#     - accretion_enabled is a real bool (JSON true/false)
#   - Raises: ConfigurationError on any violation.
#
# ParameterSet.from_dict(params: Dict[str, Any]) -> ParameterSet:
#   - Inputs: the "simulation_parameters" section of config.json.
#   - Raises: ConfigurationError on unknown keys or invalid values.


class ConfigurationError(ValueError):
    """Raised when a ParameterSet violates one of its invariants."""


@dataclass(frozen=True)
class ParameterSet:
    gravity_constant: float = 2.0
    central_mass: float = 400.0
    softening: float = 0.5

    # Dark matter halo: flat rotation curve velocity and core radius
    halo_velocity: float = 2.2
    halo_core_radius: float = 1.2

    time_step: float = 0.01

    # Accretion disk
    viscosity_base: float = 0.003
    viscosity_floor_radius: float = 1.0
    heat_scale: float = 0.0012
    brightness_cool_factor: float = 0.997
    horizon_radius: float = 7.0
    respawn_radius_min: float = 18.0
    respawn_radius_max: float = 28.0

    # When False the engine runs pure gravity: no viscosity, heating,
    # cooling or horizon recycling.
    accretion_enabled: bool = True

    def __post_init__(self):
        for field in dataclasses.fields(self):
            if field.name == 'accretion_enabled':
                if not isinstance(self.accretion_enabled, (bool, np.bool_)):
                    self._fail(
                        f"'accretion_enabled' must be true or false, got {self.accretion_enabled!r}."
                    )
                object.__setattr__(self, field.name, bool(self.accretion_enabled))
                continue
            value = getattr(self, field.name)
            try:
                value = float(value)
            except (TypeError, ValueError):
                self._fail(f"'{field.name}' must be a number, got {value!r}.")
            if not math.isfinite(value):
                self._fail(f"'{field.name}' must be finite, got {value}.")
            object.__setattr__(self, field.name, value)
        self._validate()

    def _validate(self) -> None:
        for name in ('gravity_constant', 'central_mass', 'halo_velocity',
                     'viscosity_base', 'heat_scale'):
            if getattr(self, name) < 0.0:
                self._fail(f"'{name}' must be non-negative, got {getattr(self, name)}.")
        for name in ('softening', 'viscosity_floor_radius', 'time_step', 'halo_core_radius'):
            if getattr(self, name) <= 0.0:
                self._fail(f"'{name}' must be strictly positive, got {getattr(self, name)}.")
        if not 0.0 < self.brightness_cool_factor <= 1.0:
            self._fail(
                f"'brightness_cool_factor' must lie in (0, 1], "
                f"got {self.brightness_cool_factor}."
            )
        if self.respawn_radius_min >= self.respawn_radius_max:
            self._fail(
                f"Respawn ring is empty: respawn_radius_min ({self.respawn_radius_min}) "
                f"must be below respawn_radius_max ({self.respawn_radius_max})."
            )
        if self.horizon_radius >= self.respawn_radius_min:
            self._fail(
                f"horizon_radius ({self.horizon_radius}) must be below "
                f"respawn_radius_min ({self.respawn_radius_min}), otherwise respawned "
                f"particles would fall straight back into the horizon."
            )

    @staticmethod
    def _fail(reason: str) -> None:
        msg = f"Configuration error: {reason}"
        logging.critical(msg)
        raise ConfigurationError(msg)

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> "ParameterSet":
        """Builds a ParameterSet from a config section, rejecting unknown keys."""
        known = {field.name for field in dataclasses.fields(cls)}
        unknown = sorted(set(params) - known)
        if unknown:
            cls._fail(f"unknown simulation parameter(s): {', '.join(unknown)}.")
        return cls(**params)

    def replace(self, **changes: Any) -> "ParameterSet":
        """Returns a validated copy with the given fields changed."""
        return dataclasses.replace(self, **changes)

    def as_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)
