# renderer/tone_mapping.py
import math

import numpy as np
from numba import njit


@njit(cache=True)
def gamma_quantize_kernel(accumulated, scale, output_image):
    """
    Average, gamma-correct (gamma 2) and quantize an accumulated radiance
    buffer into 8-bit channels. NaN and negative radiance map to 0.
    """
    height, width, channels = accumulated.shape
    for y in range(height):
        for x in range(width):
            for c in range(channels):
                value = accumulated[y, x, c] * scale
                # Also catches NaN
                if not value > 0.0:
                    value = 0.0
                value = math.sqrt(value)
                if value > 0.999:
                    value = 0.999
                output_image[y, x, c] = int(256.0 * value)


def to_rgb8(accumulated: np.ndarray, samples_per_pixel: int) -> np.ndarray:
    """Convert summed sample colors (height, width, 3) to a uint8 image."""
    output_image = np.zeros(accumulated.shape, dtype=np.uint8)
    gamma_quantize_kernel(np.ascontiguousarray(accumulated, dtype=np.float64),
                          1.0 / samples_per_pixel, output_image)
    return output_image
