# procedural_noise/image_export.py

"""
================================================================================
FIELD EXPORT UTILITIES
================================================================================
This module converts normalized noise fields into grayscale pixel data and
writes them to disk as PNG images.

It is designed to be a pure, stateless utility with no dependencies on a
renderer, so it can be used by both scripts and tests.
================================================================================
"""
import os

import numpy as np
from PIL import Image


def get_grayscale_array(field: np.ndarray) -> np.ndarray:
    """
    Converts a normalized [0, 1] field indexed [y, x] (y = 0 at the bottom)
    into a uint8 grayscale array indexed [row, column] with row 0 at the top.
    """
    # Values outside [0, 1] would wrap around when cast to uint8.
    gray_values = (np.clip(field, 0.0, 1.0) * 255).astype(np.uint8)
    return np.flipud(gray_values)

def save_field_image(field: np.ndarray, directory: str, name: str) -> str:
    """
    Saves a normalized field as an 8-bit grayscale PNG.

    Returns:
        str: The path of the written file.
    """
    os.makedirs(directory, exist_ok=True)
    file_path = os.path.join(directory, f"{name}.png")

    # A 2D uint8 array maps to Pillow's 8-bit grayscale mode 'L'.
    img = Image.fromarray(np.ascontiguousarray(get_grayscale_array(field)))
    img.save(file_path, 'PNG', optimize=True)
    return file_path
