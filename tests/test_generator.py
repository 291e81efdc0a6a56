import logging

import numpy as np
import pytest

from procedural_noise import config as DEFAULTS
from procedural_noise.generator import FieldGenerator
from procedural_noise.kernel import NoiseMethod, fractal_noise
from procedural_noise.permutation import PermutationTable


def test_defaults_are_used_when_config_is_empty(logger):
    gen = FieldGenerator({}, logger)
    assert gen.settings['octaves'] == DEFAULTS.DEFAULT_OCTAVES
    assert gen.settings['lacunarity'] == DEFAULTS.DEFAULT_LACUNARITY
    assert gen.settings['persistence'] == DEFAULTS.DEFAULT_PERSISTENCE
    assert gen.settings['frequency'] == DEFAULTS.DEFAULT_FREQUENCY
    assert gen.settings['dimensions'] == DEFAULTS.DEFAULT_DIMENSIONS
    assert gen.settings['resolution'] == DEFAULTS.DEFAULT_RESOLUTION
    assert gen.method is NoiseMethod.PERLIN
    assert gen.permutation_table == PermutationTable()


def test_config_overrides_defaults(logger):
    gen = FieldGenerator({'octaves': 5, 'method': 'Lattice', 'dimensions': 1, 'frequency': 2.0}, logger)
    assert gen.settings['octaves'] == 5
    assert gen.method is NoiseMethod.LATTICE
    assert gen.settings['method'] == 'lattice'
    assert gen.settings['dimensions'] == 1
    assert gen.settings['frequency'] == 2.0


def test_config_values_are_clamped(logger):
    gen = FieldGenerator({'octaves': 0, 'frequency': -4.0, 'dimensions': 7, 'resolution': 100000}, logger)
    assert gen.settings['octaves'] == 1
    assert gen.settings['frequency'] == 0.0
    assert gen.settings['dimensions'] == 2
    assert gen.settings['resolution'] == DEFAULTS.MAX_RESOLUTION


def test_setters_clamp_like_ui_callbacks(logger):
    gen = FieldGenerator({}, logger)

    gen.set_octaves(-3)
    assert gen.settings['octaves'] == 1
    gen.set_octaves(4.9)
    assert gen.settings['octaves'] == 4

    gen.set_frequency(-1.0)
    assert gen.settings['frequency'] == 0.0

    gen.set_noise_dimensions(0)
    assert gen.settings['dimensions'] == 1
    gen.set_noise_dimensions(1.8)
    assert gen.settings['dimensions'] == 1
    gen.set_noise_dimensions(5)
    assert gen.settings['dimensions'] == 2

    gen.set_resolution(1)
    assert gen.settings['resolution'] == DEFAULTS.MIN_RESOLUTION

    # Lacunarity and persistence are deliberately unconstrained.
    gen.set_lacunarity(-2.5)
    gen.set_persistence(3.0)
    assert gen.settings['lacunarity'] == -2.5
    assert gen.settings['persistence'] == 3.0


@pytest.mark.parametrize("value, expected", [
    (0, NoiseMethod.VALUE),
    (1, NoiseMethod.LATTICE),
    (2, NoiseMethod.PERLIN),
    (-5, NoiseMethod.VALUE),
    (9.7, NoiseMethod.PERLIN),
    ("VALUE", NoiseMethod.VALUE),
    ("perlin", NoiseMethod.PERLIN),
    (NoiseMethod.LATTICE, NoiseMethod.LATTICE),
])
def test_set_noise_method(logger, value, expected):
    gen = FieldGenerator({}, logger)
    gen.set_noise_method(value)
    assert gen.method is expected


def test_unknown_method_name_raises(logger):
    gen = FieldGenerator({}, logger)
    with pytest.raises(ValueError):
        gen.set_noise_method("simplex")


def test_seeded_and_injected_tables(logger):
    seeded = FieldGenerator({'seed': 1337}, logger)
    assert seeded.permutation_table == PermutationTable.from_seed(1337)

    injected_table = PermutationTable.from_seed(7)
    injected = FieldGenerator({'seed': 1337}, logger, permutation_table=injected_table)
    assert injected.permutation_table is injected_table
    assert injected.kernel.table is injected_table


def test_get_primitive_follows_settings(logger):
    gen = FieldGenerator({'method': 'value', 'dimensions': 1}, logger)
    assert gen.get_primitive() == gen.kernel.value_1d
    gen.set_noise_method(2)
    gen.set_noise_dimensions(2)
    assert gen.get_primitive() == gen.kernel.perlin_2d


def test_sample_matches_fractal_driver(logger):
    gen = FieldGenerator({'method': 'lattice', 'dimensions': 2, 'octaves': 4}, logger)
    point = (0.3, 0.6, 0.0)
    expected = fractal_noise(gen.get_primitive(), point, gen.settings['frequency'], 4,
                             gen.settings['lacunarity'], gen.settings['persistence'])
    assert gen.sample(point) == pytest.approx(expected, rel=1e-12)


def test_coordinate_grid_uses_pixel_centres(logger):
    gen = FieldGenerator({}, logger)
    x, y = gen.get_coordinate_grid(4)
    assert x.shape == y.shape == (4, 4)
    assert x[0].tolist() == [0.125, 0.375, 0.625, 0.875]
    assert y[:, 0].tolist() == [0.125, 0.375, 0.625, 0.875]


@pytest.mark.parametrize("method", ["value", "lattice", "perlin"])
@pytest.mark.parametrize("dimensions", [1, 2])
def test_generate_field_is_normalized(logger, method, dimensions):
    gen = FieldGenerator({'method': method, 'dimensions': dimensions}, logger)
    field = gen.generate_field(32)
    assert field.shape == (32, 32)
    assert np.isfinite(field).all()
    # The gradient methods overshoot [-1, 1] slightly before rescaling.
    assert field.min() >= -0.05
    assert field.max() <= 1.05
    if method != "perlin":
        assert field.min() >= 0.0
        assert field.max() <= 1.0


def test_generate_field_is_deterministic(logger):
    a = FieldGenerator({'seed': 99}, logger).generate_field(24)
    b = FieldGenerator({'seed': 99}, logger).generate_field(24)
    assert np.array_equal(a, b)


def test_generate_field_matches_point_samples(logger):
    gen = FieldGenerator({'method': 'perlin', 'dimensions': 2, 'octaves': 3}, logger)
    resolution = 8
    field = gen.generate_field(resolution)
    for row in (0, 3, 7):
        for col in (0, 5, 7):
            point = ((col + 0.5) / resolution, (row + 0.5) / resolution, 0.0)
            assert field[row, col] == pytest.approx(gen.sample(point) * 0.5 + 0.5, rel=1e-12)


def test_unsigned_fields_are_not_rescaled(logger):
    gen = FieldGenerator({'method': 'value', 'dimensions': 2, 'octaves': 1, 'frequency': 4.0}, logger)
    field = gen.generate_field(4)
    # One pixel per lattice cell at frequency 4 on a 4x4 field.
    p = gen.permutation_table
    for row in range(4):
        for col in range(4):
            assert field[row, col] == p[p[col] + row] / 255


def test_one_dimensional_fields_are_constant_along_y(logger):
    gen = FieldGenerator({'method': 'lattice', 'dimensions': 1}, logger)
    field = gen.generate_field(16)
    assert np.array_equal(field, np.broadcast_to(field[0], field.shape))


def test_generate_field_uses_resolution_setting(logger):
    gen = FieldGenerator({'resolution': 10}, logger)
    assert gen.generate_field().shape == (10, 10)


def test_initialization_is_logged(caplog):
    logger = logging.getLogger("test.generator")
    with caplog.at_level(logging.INFO, logger="test.generator"):
        FieldGenerator({'seed': 3}, logger)
    assert "FieldGenerator initialized" in caplog.text
