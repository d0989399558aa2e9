# renderer/image_writer.py
import os
from typing import TextIO, Union

import numpy as np
from PIL import Image

from pathtracer.core.vector import Color
from pathtracer.renderer.tone_mapping import color_string, to_8bit

PathLike = Union[str, os.PathLike]


def write_ppm(image: np.ndarray, stream: TextIO):
    """
    Write a float image of shape (height, width, 3) as plain-text PPM (P3).
    Rows go top to bottom, pixels left to right.
    """
    height, width, _ = image.shape
    stream.write(f"P3\n{width} {height}\n255\n")
    for row in image:
        for r, g, b in row:
            stream.write(color_string(Color(r, g, b)))
            stream.write("\n")


def save_png(image: np.ndarray, path: PathLike):
    Image.fromarray(to_8bit(image)).save(path)


def save_image(image: np.ndarray, path: PathLike):
    """
    Save to path, choosing the format from its suffix. .ppm is written as
    plain text; every other suffix goes through Pillow.
    """
    if os.fspath(path).lower().endswith(".ppm"):
        with open(path, "w") as f:
            write_ppm(image, f)
    else:
        save_png(image, path)
