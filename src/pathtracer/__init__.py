"""Offline Monte-Carlo path tracer for scenes of spheres.

Subpackages:
    core: Vector3, Ray and random sampling helpers
    geometry: Hit records, spheres and hittable lists
    materials: Lambertian, metal and dielectric scattering
    camera: Simple and look-at cameras
    renderer: Integrator, pixel sampler, tone mapping and image output
"""

__version__ = "0.1.0"
