# renderer/image_io.py
import os
import numpy as np
from PIL import Image

def write_ppm(path: str, pixels: np.ndarray):
    """Write an (height, width, 3) uint8 array as a plain-text P3 PPM, top row first."""
    height, width, _ = pixels.shape
    with open(path, "w") as f:
        f.write(f"P3\n{width} {height}\n255\n")
        for row in pixels:
            for r, g, b in row:
                f.write(f"{r} {g} {b}\n")

def save_image(path: str, pixels: np.ndarray):
    """Save pixels as PPM when the extension asks for it, otherwise through Pillow."""
    if os.path.splitext(path)[1].lower() == ".ppm":
        write_ppm(path, pixels)
    else:
        Image.fromarray(np.asarray(pixels, dtype=np.uint8)).save(path)
