# renderer/sampler.py
from pathtracer.core.vector import Color


class ColorSampler:
    """
    Running mean of the radiance samples taken for one pixel.
    """
    def __init__(self):
        self.count = 0
        self.total = Color.zero()

    def add(self, color: Color):
        self.count += 1
        self.total = self.total + color

    def get_and_reset(self) -> Color:
        """
        Returns the mean of the samples added since the last reset and
        empties the accumulator.
        """
        if self.count == 0:
            raise ValueError("no samples added since the last reset")
        mean = self.total / self.count
        self.count = 0
        self.total = Color.zero()
        return mean
