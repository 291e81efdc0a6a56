# procedural_noise/kernel.py

"""
================================================================================
NOISE KERNEL
================================================================================
This module wraps the compiled kernels in noise.py behind a small object that
owns its permutation table and gradient set. Every primitive is exposed as a
bound method with the signature (point, frequency) -> float, so any of them
can be handed to fractal_noise().

Data Contract:
---------------
- Inputs (on initialization):
    - table (PermutationTable, optional): Defaults to the reference table.
- Inputs (per call):
    - point: A 3-component position (x, y, z). Only x, or x and y, are read.
    - frequency, octaves, lacunarity, persistence: Unvalidated numbers.
- Outputs:
    - Python floats, or NumPy arrays for fractal_field().
- Side Effects: None.
- Invariants: The kernel never mutates its table or gradients, so one
  instance may be shared freely between threads.
================================================================================
"""

import enum

import numpy as np

from . import noise
from .permutation import PermutationTable


class NoiseMethod(enum.Enum):
    """The family of a noise primitive. Dimensionality is chosen separately."""
    VALUE = "value"
    LATTICE = "lattice"
    PERLIN = "perlin"

    @property
    def is_signed(self) -> bool:
        """True if the primitive's nominal range is [-1, 1] rather than [0, 1]."""
        return self is NoiseMethod.PERLIN


# Explicit {method, dimensions} -> compiled kernel mapping.
_COMPILED_PRIMITIVES = {
    (NoiseMethod.VALUE, 1): noise.value_1d,
    (NoiseMethod.VALUE, 2): noise.value_2d,
    (NoiseMethod.LATTICE, 1): noise.lattice_1d,
    (NoiseMethod.LATTICE, 2): noise.lattice_2d,
    (NoiseMethod.PERLIN, 1): noise.perlin_1d,
    (NoiseMethod.PERLIN, 2): noise.perlin_2d,
}


def get_compiled_primitive(method: NoiseMethod, dimensions: int):
    """
    Returns the compiled kernel for a method and dimensionality.

    Raises:
        ValueError: If no primitive exists for the combination.
    """
    try:
        return _COMPILED_PRIMITIVES[(NoiseMethod(method), dimensions)]
    except (KeyError, ValueError):
        raise ValueError(
            f"No noise primitive for method={method!r} with {dimensions} dimension(s)."
        ) from None


def fractal_noise(primitive, point, frequency, octaves, lacunarity, persistence) -> float:
    """
    Generate fractal noise (1/f) by summing octaves of any primitive.

    Each extra octave multiplies the frequency by the lacunarity and the
    amplitude by the persistence. The sum is divided by the total of all
    amplitudes used, so the output stays in the primitive's nominal range
    whatever the octave count. Fewer than two octaves returns the single
    base sample.

    Args:
        primitive: Any callable (point, frequency) -> float.
        point: The sample position, passed through untouched.
        frequency (float): Frequency of the first octave.
        octaves (int): Number of octaves to sum.
        lacunarity (float): Frequency ratio between octaves.
        persistence (float): Amplitude ratio between octaves.
    """
    total = primitive(point, frequency)
    amplitude = 1.0
    amplitude_range = 1.0

    for _ in range(1, octaves):
        frequency *= lacunarity
        amplitude *= persistence
        amplitude_range += amplitude
        total += primitive(point, frequency) * amplitude

    return total / amplitude_range


def _unpack(point):
    """Splits a 1-, 2- or 3-component point into float x, y, z."""
    coords = tuple(float(c) for c in point) + (0.0, 0.0)
    return coords[0], coords[1], coords[2]


class NoiseKernel:
    """
    Owns an immutable permutation table and gradient set and evaluates the
    six noise primitives against them.
    """
    def __init__(self, table: PermutationTable = None):
        self.table = table if table is not None else PermutationTable()
        self.gradients = noise.GRADIENT_VECTORS
        self._p = self.table.values

    def _evaluate(self, kernel, point, frequency) -> float:
        x, y, z = _unpack(point)
        return float(kernel(self._p, self.gradients, x, y, z, float(frequency)))

    # --- Primitives: (point, frequency) -> float ---

    def value_1d(self, point, frequency=1.0) -> float:
        return self._evaluate(noise.value_1d, point, frequency)

    def value_2d(self, point, frequency=1.0) -> float:
        return self._evaluate(noise.value_2d, point, frequency)

    def lattice_1d(self, point, frequency=1.0) -> float:
        return self._evaluate(noise.lattice_1d, point, frequency)

    def lattice_2d(self, point, frequency=1.0) -> float:
        return self._evaluate(noise.lattice_2d, point, frequency)

    def perlin_1d(self, point, frequency=1.0) -> float:
        return self._evaluate(noise.perlin_1d, point, frequency)

    def perlin_2d(self, point, frequency=1.0) -> float:
        return self._evaluate(noise.perlin_2d, point, frequency)

    def get_primitive(self, method: NoiseMethod, dimensions: int):
        """Returns the bound primitive for a method and dimensionality."""
        kernel = get_compiled_primitive(method, dimensions)
        return getattr(self, kernel.py_func.__name__)

    # --- Fractal Summation ---

    def fractal_noise(self, method: NoiseMethod, dimensions: int, point,
                      frequency, octaves, lacunarity, persistence) -> float:
        """
        Compiled equivalent of the module-level fractal_noise() for one of
        the built-in primitives.
        """
        x, y, z = _unpack(point)
        return float(noise.fractal_noise(
            get_compiled_primitive(method, dimensions),
            self._p, self.gradients, x, y, z,
            float(frequency), int(octaves), float(lacunarity), float(persistence)
        ))

    def fractal_field(self, method: NoiseMethod, dimensions: int,
                      x_coords: np.ndarray, y_coords: np.ndarray,
                      frequency, octaves, lacunarity, persistence) -> np.ndarray:
        """Fractal noise at every point of two equally shaped 2D coordinate arrays."""
        return noise.fractal_field(
            get_compiled_primitive(method, dimensions),
            self._p, self.gradients,
            np.ascontiguousarray(x_coords, dtype=np.float64),
            np.ascontiguousarray(y_coords, dtype=np.float64),
            float(frequency), int(octaves), float(lacunarity), float(persistence)
        )
