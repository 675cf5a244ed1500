import math

import pytest

from params import ParameterSet, ConfigurationError


def test_defaults_match_reference_galaxy():
    p = ParameterSet()
    assert p.gravity_constant == 2.0
    assert p.central_mass == 400.0
    assert p.horizon_radius == 7.0
    assert (p.respawn_radius_min, p.respawn_radius_max) == (18.0, 28.0)
    assert p.accretion_enabled is True


def test_values_are_coerced_to_float():
    p = ParameterSet(central_mass=100, time_step="0.02")
    assert isinstance(p.central_mass, float)
    assert p.time_step == 0.02


@pytest.mark.parametrize("changes", [
    {"horizon_radius": 18.0},
    {"horizon_radius": 20.0},
    {"respawn_radius_min": 28.0},
    {"respawn_radius_min": 30.0, "respawn_radius_max": 29.0},
    {"softening": 0.0},
    {"viscosity_floor_radius": -1.0},
    {"time_step": 0.0},
    {"halo_core_radius": 0.0},
    {"brightness_cool_factor": 1.5},
    {"brightness_cool_factor": 0.0},
    {"heat_scale": -0.1},
    {"central_mass": math.inf},
    {"gravity_constant": math.nan},
    {"softening": "soft"},
    {"accretion_enabled": "false"},
    {"accretion_enabled": 0},
    {"accretion_enabled": None},
])
def test_invalid_parameters_are_rejected(changes):
    with pytest.raises(ConfigurationError):
        ParameterSet(**changes)


def test_configuration_error_is_a_value_error():
    assert issubclass(ConfigurationError, ValueError)


def test_from_dict_fills_missing_fields_with_defaults():
    p = ParameterSet.from_dict({"central_mass": 250.0, "accretion_enabled": False})
    assert p.central_mass == 250.0
    assert p.softening == ParameterSet().softening
    assert p.accretion_enabled is False


def test_from_dict_rejects_unknown_keys():
    with pytest.raises(ConfigurationError, match="black_hole_mass"):
        ParameterSet.from_dict({"black_hole_mass": 400.0})


def test_replace_revalidates():
    p = ParameterSet()
    assert p.replace(time_step=0.005).time_step == 0.005
    with pytest.raises(ConfigurationError):
        p.replace(horizon_radius=25.0)


def test_parameter_set_is_immutable():
    p = ParameterSet()
    with pytest.raises(AttributeError):
        p.time_step = 1.0
