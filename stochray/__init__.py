"""
stochray - A small Monte Carlo ray tracer for sphere scenes

Features:
- Jittered anti-aliasing with multi-sample accumulation
- Recursive path sampling with a fixed bounce limit
- Solid and checkerboard textures
- Reflectance-controlled scatter materials
- Multi-threaded tile rendering with reproducible seeding
- Gamma-encoded 8-bit RGBA output
"""

__version__ = "0.1.0"

from .vec3 import Vec3, Point3, Color, DegenerateVectorError
from .ray import Ray
from .camera import Camera
from .textures import Texture, SolidColor, Checkerboard
from .materials import Material, MaterialError
from .shapes import Intersection, Intersectable, Sphere, Scene, DEFAULT_EPSILON
from .renderer import Renderer, RenderSettings, sample, to_rgba, get_platform_info
from .scene_parser import (
    SceneParser, SceneParseError, load_scene, parse_scene, create_default_scene
)
