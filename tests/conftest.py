import logging

import pytest

from procedural_noise.kernel import NoiseKernel
from procedural_noise.permutation import PermutationTable


@pytest.fixture
def logger():
    return logging.getLogger("test")


@pytest.fixture(scope="session")
def reference_table():
    return PermutationTable()


@pytest.fixture(scope="session")
def kernel(reference_table):
    return NoiseKernel(reference_table)
