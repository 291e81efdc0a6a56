# procedural_noise/noise.py

"""
================================================================================
NOISE GENERATION KERNELS
================================================================================
This module provides the compiled sampling primitives for 1D and 2D value,
lattice and gradient (Perlin) noise, plus the fractal summation driver that
combines any one of them into 1/f noise. It is designed to be a pure,
stateless utility: the permutation table and gradient set are passed in.

Data Contract:
---------------
- Inputs:
    - p: A 512-entry duplicated permutation table (int array).
    - gradients: The (4, 2) gradient set, see GRADIENT_VECTORS.
    - x, y, z: Sample position. z is accepted for interface compatibility
      and ignored.
    - frequency, octaves, lacunarity, persistence: Standard noise parameters.
- Outputs:
    - value_*/lattice_*: floats in [0, 1].
    - perlin_*: floats in roughly [-1, 1].
    - fractal_noise: a float in the nominal range of its primitive.
    - fractal_field: a NumPy array with the shape of x and y.
- Side Effects: None.
- Invariants: Every primitive shares one signature,
  (p, gradients, x, y, z, frequency) -> float, so fractal_noise and
  fractal_field accept any of them. Lattice coordinates wrap with & 255.
================================================================================
"""

import numpy as np
from numba import njit

from . import config as DEFAULTS

# Pre-defined gradient vectors. The first two are the +/- x directions used
# by 1D gradient noise.
GRADIENT_VECTORS = np.array([[1.0, 0.0], [-1.0, 0.0], [0.0, 1.0], [0.0, -1.0]])
GRADIENT_VECTORS.setflags(write=False)

GRADIENT_MASK_1D = 1
GRADIENT_MASK_2D = 3

_HASH_MASK = DEFAULTS.HASH_MASK
_HASH_NORMALIZER = float(DEFAULTS.HASH_MASK)


@njit
def lerp(a, b, t):
    "Linear interpolation."
    return a + t * (b - a)

@njit
def smooth(t):
    "6t^5 - 15t^4 + 10t^3"
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)

@njit
def dot(gradients, h, x, y):
    """Dot product between gradient vector h and the offset (x, y)."""
    return gradients[h, 0] * x + gradients[h, 1] * y


# --- Value Noise ---

@njit
def value_1d(p, gradients, x, y, z, frequency):
    """One hashed value per lattice cell along x. A step function."""
    i = int(np.floor(x * frequency)) & _HASH_MASK
    return p[i] / _HASH_NORMALIZER

@njit
def value_2d(p, gradients, x, y, z, frequency):
    """One hashed value per lattice cell in (x, y), using a double hash."""
    i = int(np.floor(x * frequency)) & _HASH_MASK
    j = int(np.floor(y * frequency)) & _HASH_MASK
    return p[p[i] + j] / _HASH_NORMALIZER

@njit
def lattice_1d(p, gradients, x, y, z, frequency):
    """
    Smoothly interpolated value noise along x. Neighbouring cells share
    the hash at their common lattice point, so the result is continuous.
    """
    x_sample = x * frequency
    xi = int(np.floor(x_sample))
    t = smooth(x_sample - xi)

    i = xi & _HASH_MASK
    return lerp(p[i], p[i + 1], t) / _HASH_NORMALIZER

@njit
def lattice_2d(p, gradients, x, y, z, frequency):
    """Bilinear interpolation of the four hashed cell corners."""
    x_sample = x * frequency
    y_sample = y * frequency

    xi = int(np.floor(x_sample))
    yi = int(np.floor(y_sample))

    tx = smooth(x_sample - xi)
    ty = smooth(y_sample - yi)

    ix0 = xi & _HASH_MASK
    iy0 = yi & _HASH_MASK

    h0 = p[ix0]
    h1 = p[ix0 + 1]
    h00 = p[h0 + iy0]
    h10 = p[h1 + iy0]
    h01 = p[h0 + iy0 + 1]
    h11 = p[h1 + iy0 + 1]

    return lerp(lerp(h00, h10, tx), lerp(h01, h11, tx), ty) / _HASH_NORMALIZER


# --- Gradient Noise ---

@njit
def perlin_1d(p, gradients, x, y, z, frequency):
    """
    Gradient noise along x. The cell's hash picks a +/- x gradient for its
    left lattice point and the hash plus one picks the right one.
    """
    x_sample = x * frequency
    xi = int(np.floor(x_sample))
    t0 = x_sample - xi

    h = p[xi & _HASH_MASK]
    g0 = gradients[h & GRADIENT_MASK_1D, 0]
    g1 = gradients[(h + 1) & GRADIENT_MASK_1D, 0]

    # Interpolating two opposing unit gradients peaks at 0.5, so scale by 2.
    return lerp(t0 * g0, (t0 - 1.0) * g1, smooth(t0)) * 2.0

@njit
def perlin_2d(p, gradients, x, y, z, frequency):
    """Gradient noise over the unit cell containing (x, y)."""
    x_sample = x * frequency
    y_sample = y * frequency

    xi = int(np.floor(x_sample))
    yi = int(np.floor(y_sample))

    tx0 = x_sample - xi
    ty0 = y_sample - yi
    tx1 = tx0 - 1.0
    ty1 = ty0 - 1.0

    u0 = xi & _HASH_MASK
    v0 = yi & _HASH_MASK
    v1 = v0 + 1

    hu0 = p[u0]
    hu1 = p[u0 + 1]

    g00 = dot(gradients, p[hu0 + v0] & GRADIENT_MASK_2D, tx0, ty0)
    g10 = dot(gradients, p[hu1 + v0] & GRADIENT_MASK_2D, tx1, ty0)
    g01 = dot(gradients, p[hu0 + v1] & GRADIENT_MASK_2D, tx0, ty1)
    g11 = dot(gradients, p[hu1 + v1] & GRADIENT_MASK_2D, tx1, ty1)

    u = smooth(tx0)
    v = smooth(ty0)

    return lerp(lerp(g00, g10, u), lerp(g01, g11, u), v) * 2.0


# --- Fractal Summation ---

@njit
def fractal_noise(primitive, p, gradients, x, y, z, frequency, octaves, lacunarity, persistence):
    """
    Sums octaves of a compiled primitive and divides by the total amplitude,
    keeping the result in the primitive's own nominal range.
    """
    total = primitive(p, gradients, x, y, z, frequency)
    amplitude = 1.0
    amplitude_range = 1.0

    for _ in range(1, octaves):
        frequency *= lacunarity
        amplitude *= persistence
        amplitude_range += amplitude
        total += primitive(p, gradients, x, y, z, frequency) * amplitude

    return total / amplitude_range

@njit
def fractal_field(primitive, p, gradients, x, y, frequency, octaves, lacunarity, persistence):
    """
    Evaluates fractal_noise at every (x[i, j], y[i, j]).
    It uses explicit loops, which Numba compiles to efficient machine code.
    """
    rows, cols = x.shape
    field = np.zeros((rows, cols))

    for i in range(rows):
        for j in range(cols):
            field[i, j] = fractal_noise(
                primitive, p, gradients,
                x[i, j], y[i, j], 0.0,
                frequency, octaves, lacunarity, persistence
            )

    return field
