# procedural_noise/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the noise
field generator. These values are used if they are not explicitly provided by
the user's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC TEXTURE.
Instead, pass a configuration dictionary to the FieldGenerator instance.
================================================================================
"""

# --- Permutation Table ---
# None selects Ken Perlin's published reference permutation. Any integer
# selects a seeded shuffle of 0..255 instead.
DEFAULT_SEED = None
PERMUTATION_SIZE = 256
HASH_MASK = PERMUTATION_SIZE - 1

# --- Fractal Settings ---
# Number of frequency octaves to sum.
DEFAULT_OCTAVES = 3
MIN_OCTAVES = 1

# Frequency ratio between harmonics.
DEFAULT_LACUNARITY = 3.68

# Amplitude degradation per octave.
DEFAULT_PERSISTENCE = 0.47

# Base sampling frequency. A field spans the unit square, so this is also
# the number of lattice cells across the field at the first octave.
DEFAULT_FREQUENCY = 8.1
MIN_FREQUENCY = 0.0

# --- Primitive Selection ---
# 'value', 'lattice' or 'perlin'.
DEFAULT_METHOD = 'perlin'
DEFAULT_DIMENSIONS = 2
MIN_DIMENSIONS = 1
MAX_DIMENSIONS = 2

# --- Field Output ---
# The number of pixels on one side of a generated (square) field.
DEFAULT_RESOLUTION = 256
MIN_RESOLUTION = 2
MAX_RESOLUTION = 512

# The directory bake_noise.py writes to when --output is not given.
DEFAULT_OUTPUT_DIR = "baked_noise"
