"""
PathForge - A Python Recursive Path Tracer

Renders small scenes of spheres and planes lit by point lights, with:
- Diffuse surfaces with Phong highlights
- Emissive surfaces
- Perfect mirrors
- Refraction with total internal reflection
- Shadow rays for direct lighting
- Multi-threaded tile rendering
"""

__version__ = "0.1.0"
__author__ = "PathForge Team"

from .vec3 import Vec3, Point3
from .ray import Ray
from .radiance import Radiance
from .shapes import Shape, Sphere, Plane, EPSILON
from .materials import (
    Material, DiffuseMaterial, EmitterMaterial, ReflectiveMaterial, RefractiveMaterial,
    TraceCallback, reflect, refract
)
from .objects import SurfaceObject, Intersection
from .lights import LightSource
from .scene import Scene
from .camera import RayMaker, OriginCamera
from .pathtracing import trace_path
from .renderer import (
    Renderer, RenderSettings, render_pixel, render_image, color_from_radiance, to_byte
)
from .scene_parser import SceneParser, SceneParseError, load_scene, parse_scene
from .scenes import SCENES, make_diffuse_scene, make_mirror_scene, make_glass_scene
from .logconfig import level_for_verbosity, setup_logging
