# procedural_noise/__init__.py

# This file makes the 'procedural_noise' directory a Python package.
# We also use it to define the public API of the package.

from .permutation import PermutationTable, REFERENCE_PERMUTATION
from .kernel import NoiseKernel, NoiseMethod, fractal_noise
from .generator import FieldGenerator

__all__ = [
    "PermutationTable",
    "REFERENCE_PERMUTATION",
    "NoiseKernel",
    "NoiseMethod",
    "fractal_noise",
    "FieldGenerator",
]
