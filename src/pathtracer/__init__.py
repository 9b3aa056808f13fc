"""CPU path tracer.

Subpackages:
    core: Vector, interval, bounding box and ray types
    geometry: Intersectable primitives, transforms and the BVH
    materials: Scattering models and textures
    camera: Camera configuration and sample ray generation
    renderer: Path integrator and output conversion
"""

__version__ = "0.1.0"
