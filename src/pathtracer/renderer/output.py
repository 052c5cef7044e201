# renderer/output.py
import logging
import os
from typing import TextIO

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


def write_ppm(image: np.ndarray, stream: TextIO):
    """Write a uint8 (height, width, 3) image as ASCII PPM, top row first."""
    height, width = image.shape[:2]
    stream.write(f"P3\n{width} {height}\n255\n")
    for row in image:
        stream.write("".join(f"{r} {g} {b}\n" for r, g, b in row.tolist()))


def save_image(image: np.ndarray, path: str):
    """Save to `path`: PPM for a .ppm suffix, otherwise whatever Pillow infers."""
    if os.path.splitext(path)[1].lower() == ".ppm":
        with open(path, "w") as f:
            write_ppm(image, f)
    else:
        Image.fromarray(image).save(path)
    logger.info("Image saved to %s", path)
