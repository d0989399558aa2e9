# materials/presets.py
from typing import Callable, Dict

from pathtracer.core.vector import Color
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.material import Material
from pathtracer.materials.metal import Metal


class MetalPresets:
    """Predefined metal materials with realistic properties."""

    @staticmethod
    def gold() -> Metal:
        return Metal(Color(1.0, 0.78, 0.34), fuzz=0.1)

    @staticmethod
    def silver() -> Metal:
        return Metal(Color(0.95, 0.93, 0.88), fuzz=0.05)

    @staticmethod
    def copper() -> Metal:
        return Metal(Color(0.95, 0.64, 0.54), fuzz=0.1)

    @staticmethod
    def chrome() -> Metal:
        return Metal(Color(0.9, 0.9, 0.9), fuzz=0.0)

    @staticmethod
    def brushed_metal() -> Metal:
        return Metal(Color(0.8, 0.8, 0.8), fuzz=0.3)


class DielectricPresets:
    """Predefined dielectric materials with realistic refractive indices."""

    @staticmethod
    def glass() -> Dielectric:
        return Dielectric(1.5)

    @staticmethod
    def water() -> Dielectric:
        return Dielectric(1.33)

    @staticmethod
    def diamond() -> Dielectric:
        return Dielectric(2.42)

    @staticmethod
    def ice() -> Dielectric:
        return Dielectric(1.31)


class ColorPresets:
    """Common albedo colors."""

    RED = Color(0.9, 0.2, 0.2)
    GREEN = Color(0.2, 0.8, 0.2)
    BLUE = Color(0.1, 0.2, 0.5)
    GROUND = Color(0.8, 0.8, 0.0)
    WHITE = Color(0.9, 0.9, 0.9)
    GRAY = Color(0.5, 0.5, 0.5)


PRESETS: Dict[str, Callable[[], Material]] = {
    "gold": MetalPresets.gold,
    "silver": MetalPresets.silver,
    "copper": MetalPresets.copper,
    "chrome": MetalPresets.chrome,
    "brushed_metal": MetalPresets.brushed_metal,
    "glass": DielectricPresets.glass,
    "water": DielectricPresets.water,
    "diamond": DielectricPresets.diamond,
    "ice": DielectricPresets.ice,
}


def preset(name: str) -> Material:
    """Look up a named material preset."""
    try:
        factory = PRESETS[name]
    except KeyError:
        raise ValueError(f"Unknown material preset {name!r}; choose from {', '.join(sorted(PRESETS))}") from None
    return factory()
