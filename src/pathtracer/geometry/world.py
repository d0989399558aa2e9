# geometry/world.py
from typing import Iterable, Iterator, List, Optional

from pathtracer.core.ray import Ray
from pathtracer.geometry.hittable import HitRecord, Hittable, Validator


class HittableList(Hittable):
    """
    A list of Hittable objects. Every member is tested; the hit with the
    smallest |t| wins regardless of insertion order.

    The comparison uses |t|, so the validator passed in must already reject
    hits behind the ray origin.
    """
    def __init__(self, objects: Optional[Iterable[Hittable]] = None):
        self.objects: List[Hittable] = list(objects) if objects is not None else []

    def add(self, obj: Hittable):
        self.objects.append(obj)

    def clear(self):
        self.objects.clear()

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self.objects)

    def hit(self, ray: Ray, validate_t: Validator) -> Optional[HitRecord]:
        closest = None
        for obj in self.objects:
            rec = obj.hit(ray, validate_t)
            if rec is not None and (closest is None or abs(rec.t) < abs(closest.t)):
                closest = rec
        return closest
