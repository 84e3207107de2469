# renderer/tone_mapping.py
import math
import numpy as np
from numba import njit

@njit(cache=True)
def _gamma_quantize_kernel(accumulated, scale, output):
    height, width, _ = accumulated.shape
    for y in range(height):
        for x in range(width):
            for c in range(3):
                # Divide by the sample count and gamma-correct for gamma=2.0
                value = math.sqrt(max(0.0, accumulated[y, x, c] * scale))
                value = min(max(value, 0.0), 0.999)
                output[y, x, c] = int(256 * value)

def gamma_correct(accumulated, samples_per_pixel: int):
    """
    Turn summed sample colors into 8-bit pixels: average, apply square-root
    gamma, clamp to [0, 0.999] and quantize to 0..255.
    """
    accumulated = np.ascontiguousarray(accumulated, dtype=np.float32)
    output = np.zeros(accumulated.shape, dtype=np.uint8)
    _gamma_quantize_kernel(accumulated, 1.0 / samples_per_pixel, output)
    return output
