# procedural_noise/generator.py

"""
================================================================================
NOISE FIELD GENERATOR
================================================================================
This module contains the FieldGenerator class, responsible for holding a set
of fractal noise settings and sampling them over a square field.

Data Contract:
---------------
- Inputs (on initialization):
    - config (dict): A dictionary of parameters which can override the
      internal defaults. Expected keys include 'octaves', 'frequency', etc.
    - logger: A configured Python logging object for runtime messages.
- Outputs (from methods):
    - Single fractal samples, and NumPy fields normalized to [0, 1].
- Side Effects: Logs messages using the provided logger.
- Invariants: Given the same table and settings, the output is deterministic.
================================================================================
"""

import logging
import time

import numpy as np

from . import config as DEFAULTS
from .kernel import NoiseKernel, NoiseMethod
from .permutation import PermutationTable

# Order used when a method is given as a number, e.g. by a UI slider.
METHOD_ORDER = (NoiseMethod.VALUE, NoiseMethod.LATTICE, NoiseMethod.PERLIN)


def _clamp(value, lower, upper):
    return min(upper, max(lower, value))


class FieldGenerator:
    """
    Generates fractal noise fields from a consolidated set of settings.
    This class is backend-only and does not handle any visualization.
    """
    def __init__(self, config: dict, logger: logging.Logger, permutation_table: PermutationTable = None):
        """
        Initializes the field generator.

        Args:
            config (dict): User-defined parameters to override defaults.
            logger (logging.Logger): The logger instance for all output.
            permutation_table (PermutationTable, optional): A pre-built table.
                If None, one is built from the 'seed' setting.
        """
        self.logger = logger
        self.user_config = config
        self.logger.info("FieldGenerator initializing...")

        # --- Consolidate Configuration ---
        self.settings = {
            'seed': self.user_config.get('seed', DEFAULTS.DEFAULT_SEED),
            'octaves': self.user_config.get('octaves', DEFAULTS.DEFAULT_OCTAVES),
            'lacunarity': self.user_config.get('lacunarity', DEFAULTS.DEFAULT_LACUNARITY),
            'persistence': self.user_config.get('persistence', DEFAULTS.DEFAULT_PERSISTENCE),
            'frequency': self.user_config.get('frequency', DEFAULTS.DEFAULT_FREQUENCY),
            'method': self.user_config.get('method', DEFAULTS.DEFAULT_METHOD),
            'dimensions': self.user_config.get('dimensions', DEFAULTS.DEFAULT_DIMENSIONS),
            'resolution': self.user_config.get('resolution', DEFAULTS.DEFAULT_RESOLUTION),
        }

        # Route every value through its setter so config files get the same
        # clamping as interactive changes.
        self.set_octaves(self.settings['octaves'])
        self.set_lacunarity(self.settings['lacunarity'])
        self.set_persistence(self.settings['persistence'])
        self.set_frequency(self.settings['frequency'])
        self.set_noise_method(self.settings['method'])
        self.set_noise_dimensions(self.settings['dimensions'])
        self.set_resolution(self.settings['resolution'])

        # --- Initialize Noise ---
        if permutation_table is not None:
            table = permutation_table
            self.logger.debug("Initialized with injected permutation table.")
        elif self.settings['seed'] is None:
            table = PermutationTable()
            self.logger.debug("No seed provided, using the reference permutation table.")
        else:
            self.logger.debug(f"Generating permutation table from seed {self.settings['seed']}.")
            table = PermutationTable.from_seed(self.settings['seed'])

        self.kernel = NoiseKernel(table)
        self.permutation_table = table

        self.logger.info(
            f"FieldGenerator initialized: {self.method.value} {self.settings['dimensions']}D, "
            f"frequency={self.settings['frequency']}, octaves={self.settings['octaves']}, "
            f"lacunarity={self.settings['lacunarity']}, persistence={self.settings['persistence']}"
        )

    # --- Setters ---

    def set_octaves(self, value):
        """Sets the octave count. Values below 1 become 1."""
        self.settings['octaves'] = int(max(DEFAULTS.MIN_OCTAVES, value))

    def set_lacunarity(self, value):
        self.settings['lacunarity'] = float(value)

    def set_persistence(self, value):
        self.settings['persistence'] = float(value)

    def set_frequency(self, value):
        """Sets the base frequency. Negative values become 0."""
        self.settings['frequency'] = float(max(DEFAULTS.MIN_FREQUENCY, value))

    def set_noise_dimensions(self, value):
        """Sets the dimensionality, clamped to 1 or 2."""
        self.settings['dimensions'] = int(_clamp(value, DEFAULTS.MIN_DIMENSIONS, DEFAULTS.MAX_DIMENSIONS))

    def set_noise_method(self, value):
        """
        Sets the noise method from a NoiseMethod, its name or value
        ('Perlin', 'perlin'), or a number clamped to [0, 2].

        Raises:
            ValueError: If a string does not name a method.
        """
        if isinstance(value, NoiseMethod):
            method = value
        elif isinstance(value, str):
            try:
                method = NoiseMethod(value.lower())
            except ValueError:
                raise ValueError(f"Unknown noise method: '{value}'") from None
        else:
            method = METHOD_ORDER[int(_clamp(value, 0, len(METHOD_ORDER) - 1))]
        self.settings['method'] = method.value

    def set_resolution(self, value):
        """Sets the field resolution, clamped to the supported range."""
        self.settings['resolution'] = int(_clamp(value, DEFAULTS.MIN_RESOLUTION, DEFAULTS.MAX_RESOLUTION))

    # --- Sampling ---

    @property
    def method(self) -> NoiseMethod:
        return NoiseMethod(self.settings['method'])

    def get_primitive(self):
        """Returns the (point, frequency) -> float primitive currently selected."""
        return self.kernel.get_primitive(self.method, self.settings['dimensions'])

    def sample(self, point) -> float:
        """Returns the raw fractal sample at a single point."""
        return self.kernel.fractal_noise(
            self.method, self.settings['dimensions'], point,
            self.settings['frequency'],
            self.settings['octaves'],
            self.settings['lacunarity'],
            self.settings['persistence']
        )

    def get_coordinate_grid(self, resolution: int = None):
        """
        Returns (x, y) grids of pixel-centre coordinates over the unit square,
        (i + 0.5) / resolution along each axis, indexed [y, x].
        """
        if resolution is None:
            resolution = self.settings['resolution']
        stride = 1.0 / resolution
        coords = (np.arange(resolution) + 0.5) * stride
        return np.meshgrid(coords, coords)

    def normalize(self, raw_field: np.ndarray) -> np.ndarray:
        """Maps a raw field into [0, 1]. Unsigned methods are already there."""
        if self.method.is_signed:
            return raw_field * 0.5 + 0.5
        return raw_field

    def generate_field(self, resolution: int = None) -> np.ndarray:
        """
        Samples the current settings over a square field.

        Args:
            resolution (int, optional): Pixels per side. Defaults to the
                'resolution' setting. Clamped to the supported range.

        Returns:
            np.ndarray: A (resolution, resolution) float array in [0, 1],
            indexed [y, x] with y = 0 at the bottom of the field.
        """
        if resolution is None:
            resolution = self.settings['resolution']
        resolution = int(_clamp(resolution, DEFAULTS.MIN_RESOLUTION, DEFAULTS.MAX_RESOLUTION))

        start_time = time.perf_counter()
        x_grid, y_grid = self.get_coordinate_grid(resolution)
        raw_field = self.kernel.fractal_field(
            self.method, self.settings['dimensions'],
            x_grid, y_grid,
            self.settings['frequency'],
            self.settings['octaves'],
            self.settings['lacunarity'],
            self.settings['persistence']
        )
        field = self.normalize(raw_field)

        self.logger.info(
            f"Generated {resolution}x{resolution} {self.method.value} field "
            f"in {time.perf_counter() - start_time:.3f} seconds."
        )
        return field
