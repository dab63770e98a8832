"""Whitted-style ray tracer driven by per-material shading node graphs.

Each pixel's camera ray is traced to its closest hit, where the hit object's
material sums the contributions of its shading nodes (diffuse lighting,
mirror reflection, refraction, Fresnel-weighted reflect/refract), recursing
up to a fixed bounce depth.

Subpackages:
    core: Ray and vector utilities, color pipeline, the tracer
    camera: Pinhole camera and primary ray generation
    geometry: Sphere and plane primitives with UV mapping
    materials: Textures and shading-node materials
    scene: Lights, scene container, intersection queries, demo scenes
    preview: Frame export
"""

__version__ = "0.1.0"
