# renderer/tone_mapping.py
import numpy as np

from pathtracer.core.vector import Color


def gamma_correct(color: Color, gamma: float = 2.0) -> Color:
    """
    Raise each channel to 1/gamma; gamma 2 is a square root.
    """
    inv_gamma = 1.0 / gamma
    return Color(max(color.x, 0.0) ** inv_gamma,
                 max(color.y, 0.0) ** inv_gamma,
                 max(color.z, 0.0) ** inv_gamma)


def clamp_color(color: Color, low: float = 0.0, high: float = 1.0) -> Color:
    return Color(min(max(color.x, low), high),
                 min(max(color.y, low), high),
                 min(max(color.z, low), high))


def quantize(channel: float) -> int:
    return int(round(255 * channel))


def color_string(color: Color) -> str:
    """
    Format a color in [0, 1] as the "r g b" line of a plain PPM file.
    """
    for name, channel in zip("rgb", color):
        if not 0.0 <= channel <= 1.0:
            raise ValueError(f"color channel {name}={channel} outside [0, 1]")
    return f"{quantize(color.x)} {quantize(color.y)} {quantize(color.z)}"


def to_8bit(image: np.ndarray) -> np.ndarray:
    """
    Quantize a float image in [0, 1] to uint8, rounding like color_string().
    """
    if image.size and (image.min() < 0.0 or image.max() > 1.0):
        raise ValueError(f"image values outside [0, 1]: min={image.min()}, max={image.max()}")
    return np.rint(image * 255).astype(np.uint8)
