# procedural_noise/permutation.py

"""
================================================================================
PERMUTATION TABLE
================================================================================
This module provides the hash used by every noise primitive: a 256-entry
permutation of 0..255 stored twice in a row, so that a lookup at a masked
lattice coordinate plus one never runs off the end of the table.

Data Contract:
---------------
- Inputs (on initialization):
    - Nothing (reference table), a seed, or an explicit permutation.
- Outputs:
    - values: A read-only NumPy int64 array of 512 entries in [0, 255].
    - hash(i): table[i & 255] for any integer i, including negatives.
- Side Effects: None.
- Invariants: values[i] == values[i + 256] for all i in [0, 256). The
  table never changes after construction.
================================================================================
"""

import numpy as np

from . import config as DEFAULTS

# Ken Perlin's reference permutation from his "Improved Noise" implementation.
# Reproducing it exactly keeps generated fields bit-compatible with existing
# textures.
REFERENCE_PERMUTATION = (
    151, 160, 137,  91,  90,  15, 131,  13, 201,  95,  96,  53, 194, 233,   7, 225,
    140,  36, 103,  30,  69, 142,   8,  99,  37, 240,  21,  10,  23, 190,   6, 148,
    247, 120, 234,  75,   0,  26, 197,  62,  94, 252, 219, 203, 117,  35,  11,  32,
     57, 177,  33,  88, 237, 149,  56,  87, 174,  20, 125, 136, 171, 168,  68, 175,
     74, 165,  71, 134, 139,  48,  27, 166,  77, 146, 158, 231,  83, 111, 229, 122,
     60, 211, 133, 230, 220, 105,  92,  41,  55,  46, 245,  40, 244, 102, 143,  54,
     65,  25,  63, 161,   1, 216,  80,  73, 209,  76, 132, 187, 208,  89,  18, 169,
    200, 196, 135, 130, 116, 188, 159,  86, 164, 100, 109, 198, 173, 186,   3,  64,
     52, 217, 226, 250, 124, 123,   5, 202,  38, 147, 118, 126, 255,  82,  85, 212,
    207, 206,  59, 227,  47,  16,  58,  17, 182, 189,  28,  42, 223, 183, 170, 213,
    119, 248, 152,   2,  44, 154, 163,  70, 221, 153, 101, 155, 167,  43, 172,   9,
    129,  22,  39, 253,  19,  98, 108, 110,  79, 113, 224, 232, 178, 185, 112, 104,
    218, 246,  97, 228, 251,  34, 242, 193, 238, 210, 144,  12, 191, 179, 162, 241,
     81,  51, 145, 235, 249,  14, 239, 107,  49, 192, 214,  31, 181, 199, 106, 157,
    184,  84, 204, 176, 115, 121,  50,  45, 127,   4, 150, 254, 138, 236, 205,  93,
    222, 114,  67,  29,  24,  72, 243, 141, 128, 195,  78,  66, 215,  61, 156, 180,
)


class PermutationTable:
    """
    An immutable, duplicated 512-entry permutation used as a lattice hash.
    """
    def __init__(self, permutation=REFERENCE_PERMUTATION):
        """
        Args:
            permutation: A sequence holding each integer in [0, 255] exactly
                once. Defaults to the reference permutation.

        Raises:
            ValueError: If the sequence is not a permutation of 0..255.
        """
        p = np.asarray(permutation, dtype=np.int64)
        if p.shape != (DEFAULTS.PERMUTATION_SIZE,) or not np.array_equal(
            np.sort(p), np.arange(DEFAULTS.PERMUTATION_SIZE)
        ):
            raise ValueError(
                f"Expected a permutation of 0..{DEFAULTS.HASH_MASK}, "
                f"got an array of shape {p.shape}."
            )

        # Two copies back to back; see the module invariants.
        values = np.stack([p, p]).flatten()
        values.setflags(write=False)
        self._values = values

    @classmethod
    def from_seed(cls, seed: int) -> "PermutationTable":
        """Builds a table from a deterministic shuffle of 0..255."""
        p = np.arange(DEFAULTS.PERMUTATION_SIZE, dtype=np.int64)
        rng = np.random.default_rng(seed)
        rng.shuffle(p)
        return cls(p)

    @classmethod
    def from_permutation(cls, permutation) -> "PermutationTable":
        """Builds a table from any permutation of 0..255."""
        return cls(permutation)

    @property
    def values(self) -> np.ndarray:
        """The read-only 512-entry table, as passed to the compiled kernels."""
        return self._values

    def hash(self, i: int) -> int:
        """Returns the pseudo-random value for lattice coordinate i."""
        return int(self._values[i & DEFAULTS.HASH_MASK])

    def __len__(self):
        return len(self._values)

    def __getitem__(self, index):
        return int(self._values[index])

    def __eq__(self, other):
        if not isinstance(other, PermutationTable):
            return NotImplemented
        return np.array_equal(self._values, other._values)

    def __hash__(self):
        return hash(self._values.tobytes())

    def __repr__(self):
        return f"PermutationTable(head={self._values[:4].tolist()}...)"
