"""
Scene description parser.

Scenes can be described as dictionaries, JSON files or YAML files with:
- Camera configuration
- Render settings
- Named textures and materials (shared by reference)
- Objects (spheres with materials)

Example scene file:
```yaml
camera:
  look_from: [-2, 0, 0]
  look_at: [0, 0, 0]
  vfov: 90

render:
  width: 320
  height: 240
  samples: 16
  aa: 4
  max_bounces: 3

textures:
  checker:
    type: checkerboard
    color1: [0.9, 0.9, 0.9]
    color2: [0.8, 0.2, 0.2]
    scale: 20
    corrected: true

materials:
  ground:
    texture: checker
    reflectance: 0.0
  white:
    texture: {type: solid, color: [0.9, 0.9, 0.9], corrected: true}

objects:
  - type: sphere
    center: [0, -900, 0]
    radius: 899.5
    material: ground

  - type: sphere
    center: [0, 0, 0]
    radius: 0.5
    material: white
```
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional, Tuple

import yaml

from .vec3 import Vec3, Point3, Color
from .camera import Camera
from .shapes import Sphere, Scene
from .textures import Texture, SolidColor, Checkerboard
from .materials import Material, MaterialError
from .renderer import RenderSettings

logger = logging.getLogger(__name__)

ParsedScene = Tuple[Scene, Camera, RenderSettings]


class SceneParseError(Exception):
    """Error during scene parsing."""
    pass


class SceneParser:
    """Parser for scene descriptions."""

    def __init__(self):
        self.textures: Dict[str, Texture] = {}
        self.materials: Dict[str, Material] = {}
        self.objects: Scene = Scene()
        self.camera: Optional[Camera] = None
        self.settings: Optional[RenderSettings] = None

    def parse_file(self, filepath: str) -> ParsedScene:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (YAML or JSON)

        Returns:
            Tuple of (scene, camera, settings)
        """
        path = Path(filepath)
        if not path.exists():
            raise SceneParseError(f"Scene file not found: {filepath}")

        content = path.read_text()

        try:
            if path.suffix == '.json':
                data = json.loads(content)
            else:
                # YAML is a superset of JSON, so anything else goes through it
                data = yaml.safe_load(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise SceneParseError(f"Cannot read scene file {filepath}: {e}") from e

        if not isinstance(data, dict):
            raise SceneParseError(f"Scene file {filepath} must contain a mapping")

        return self.parse_dict(data)

    def parse_dict(self, data: Dict[str, Any]) -> ParsedScene:
        """Parse a scene from a dictionary.

        Args:
            data: Scene description dictionary

        Returns:
            Tuple of (scene, camera, settings)

        Raises:
            SceneParseError: for any malformed section or value
        """
        data = self._expect_mapping(data, "scene")

        # Settings first: the camera's default aspect ratio comes from them
        if 'render' in data:
            self._parse_settings(self._expect_mapping(data['render'], "render"))
        else:
            self.settings = RenderSettings()

        # Textures before materials, materials before objects
        if 'textures' in data:
            self._parse_textures(self._expect_mapping(data['textures'], "textures"))

        if 'materials' in data:
            self._parse_materials(self._expect_mapping(data['materials'], "materials"))

        if 'objects' in data:
            objects_data = data['objects']
            if not isinstance(objects_data, list):
                raise SceneParseError(f"objects must be a list, got {objects_data!r}")
            self._parse_objects(objects_data)

        self._parse_camera(self._expect_mapping(data.get('camera', {}), "camera"))

        logger.debug(
            "Parsed scene: %d objects, %d materials, %d textures",
            len(self.objects), len(self.materials), len(self.textures),
        )
        return self.objects, self.camera, self.settings

    @staticmethod
    def _expect_mapping(data: Any, what: str) -> Dict[str, Any]:
        if not isinstance(data, dict):
            raise SceneParseError(f"{what} must be a mapping, got {data!r}")
        return data

    @staticmethod
    def _float(value: Any, what: str) -> float:
        """Convert a scalar to float, reporting bad input as a parse error."""
        if isinstance(value, bool):
            raise SceneParseError(f"{what} must be a number, got {value!r}")
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"{what} must be a number, got {value!r}") from e

    @staticmethod
    def _int(value: Any, what: str) -> int:
        """Convert a scalar to int; floats must be whole numbers."""
        if isinstance(value, bool):
            raise SceneParseError(f"{what} must be an integer, got {value!r}")
        if isinstance(value, int):
            return value
        try:
            number = float(value)
        except (TypeError, ValueError) as e:
            raise SceneParseError(f"{what} must be an integer, got {value!r}") from e
        if not number.is_integer():
            raise SceneParseError(f"{what} must be an integer, got {value!r}")
        return int(number)

    @staticmethod
    def _type_name(data: Dict[str, Any], default: str) -> str:
        type_name = data.get('type', default)
        if not isinstance(type_name, str):
            raise SceneParseError(f"type must be a string, got {type_name!r}")
        return type_name.lower()

    def _parse_vec3(self, data: Any) -> Vec3:
        """Parse a Vec3 from a list or an {x, y, z} mapping."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Vec3 must have 3 components, got {len(data)}")
            xyz = data
        elif isinstance(data, dict):
            xyz = (data.get('x', 0), data.get('y', 0), data.get('z', 0))
        else:
            raise SceneParseError(f"Cannot parse Vec3 from: {data}")
        return Vec3(*(self._float(c, "Vec3 component") for c in xyz))

    def _parse_color(self, data: Any, corrected: bool = False) -> Color:
        """Parse a Color from a list, an {r, g, b} mapping or a hex string.

        With `corrected` the values are treated as display-space and
        converted to linear light.
        """
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Color must have 3 components, got {len(data)}")
            rgb = tuple(self._float(c, "Color component") for c in data)
        elif isinstance(data, dict):
            rgb = tuple(
                self._float(data.get(key, 0), "Color component") for key in ('r', 'g', 'b')
            )
        elif isinstance(data, str) and data.startswith('#') and len(data) == 7:
            try:
                rgb = tuple(int(data[i:i + 2], 16) / 255.0 for i in (1, 3, 5))
            except ValueError as e:
                raise SceneParseError(f"Cannot parse color from string: {data}") from e
        else:
            raise SceneParseError(f"Cannot parse Color from: {data}")

        if corrected:
            try:
                return Color.corrected(*rgb)
            except ValueError as e:
                raise SceneParseError(str(e)) from e
        return Color(*rgb)

    def _parse_texture(self, tex_data: Any) -> Texture:
        """Build a single texture from its description."""
        tex_data = self._expect_mapping(tex_data, "texture")
        tex_type = self._type_name(tex_data, 'solid')
        corrected = bool(tex_data.get('corrected', False))

        if tex_type == 'solid':
            return SolidColor(self._parse_color(tex_data.get('color', [0.5, 0.5, 0.5]), corrected))

        elif tex_type == 'checkerboard':
            color1 = self._parse_color(tex_data.get('color1', [0.9, 0.9, 0.9]), corrected)
            color2 = self._parse_color(tex_data.get('color2', [0.1, 0.1, 0.1]), corrected)
            scale = self._int(tex_data.get('scale', 20), "scale")
            return Checkerboard(color1, color2, scale)

        raise SceneParseError(f"Unknown texture type: {tex_type}")

    def _parse_textures(self, textures_data: Dict[str, Any]) -> None:
        """Parse textures section."""
        for name, tex_data in textures_data.items():
            self.textures[name] = self._parse_texture(tex_data)

    def _get_texture(self, tex_ref: Any) -> Texture:
        """Get a texture by name or inline definition."""
        if isinstance(tex_ref, str):
            if tex_ref not in self.textures:
                raise SceneParseError(f"Unknown texture: {tex_ref}")
            return self.textures[tex_ref]
        elif isinstance(tex_ref, dict):
            return self._parse_texture(tex_ref)
        else:
            raise SceneParseError(f"Invalid texture reference: {tex_ref}")

    def _parse_material(self, mat_data: Any) -> Material:
        """Build a single material from its description."""
        mat_data = self._expect_mapping(mat_data, "material")
        if 'texture' in mat_data:
            texture = self._get_texture(mat_data['texture'])
        else:
            corrected = bool(mat_data.get('corrected', False))
            texture = SolidColor(self._parse_color(mat_data.get('color', [0.5, 0.5, 0.5]), corrected))

        reflectance = self._float(mat_data.get('reflectance', 0.0), "reflectance")
        try:
            return Material(texture, reflectance)
        except MaterialError as e:
            raise SceneParseError(str(e)) from e

    def _parse_materials(self, materials_data: Dict[str, Any]) -> None:
        """Parse materials section."""
        for name, mat_data in materials_data.items():
            self.materials[name] = self._parse_material(mat_data)

    def _get_material(self, mat_ref: Any) -> Material:
        """Get a material by name or inline definition."""
        if isinstance(mat_ref, str):
            if mat_ref not in self.materials:
                raise SceneParseError(f"Unknown material: {mat_ref}")
            return self.materials[mat_ref]
        elif isinstance(mat_ref, dict):
            return self._parse_material(mat_ref)
        else:
            raise SceneParseError(f"Invalid material reference: {mat_ref}")

    def _parse_objects(self, objects_data: list) -> None:
        """Parse objects section."""
        for obj_data in objects_data:
            obj_data = self._expect_mapping(obj_data, "object")
            obj_type = self._type_name(obj_data, 'sphere')
            if 'material' not in obj_data:
                raise SceneParseError(f"Object has no material: {obj_data}")
            material = self._get_material(obj_data['material'])

            if obj_type == 'sphere':
                center = self._parse_vec3(obj_data.get('center', [0, 0, 0]))
                radius = self._float(obj_data.get('radius', 1.0), "radius")
                try:
                    self.objects.add(Sphere(center, radius, material))
                except ValueError as e:
                    raise SceneParseError(str(e)) from e

            else:
                raise SceneParseError(f"Unknown object type: {obj_type}")

    def _parse_camera(self, camera_data: Dict[str, Any]) -> None:
        """Parse camera section."""
        look_from = self._parse_vec3(camera_data.get('look_from', [-2, 0, 0]))
        look_at = self._parse_vec3(camera_data.get('look_at', [0, 0, 0]))
        vup = self._parse_vec3(camera_data.get('vup', [0, 1, 0]))
        vfov = self._float(camera_data.get('vfov', 90), "vfov")
        aspect_ratio = self._float(
            camera_data.get('aspect_ratio', self.settings.aspect_ratio), "aspect_ratio"
        )

        try:
            self.camera = Camera(
                look_from=look_from,
                look_at=look_at,
                vup=vup,
                vfov=vfov,
                aspect_ratio=aspect_ratio,
            )
        except ValueError as e:
            raise SceneParseError(f"Invalid camera: {e}") from e

    def _parse_settings(self, settings_data: Dict[str, Any]) -> None:
        """Parse render settings section."""
        get = settings_data.get
        kwargs: Dict[str, Any] = dict(
            width=self._int(get('width', 800), "width"),
            height=self._int(get('height', 600), "height"),
            samples_per_pixel=self._int(get('samples', 16), "samples"),
            aa_samples=self._int(get('aa', 4), "aa"),
            max_bounces=self._int(get('max_bounces', 3), "max_bounces"),
            epsilon=self._float(get('epsilon', 1e-4), "epsilon"),
            gamma=self._float(get('gamma', 2.2), "gamma"),
            tile_size=self._int(get('tile_size', 32), "tile_size"),
            num_threads=self._int(get('threads', 0), "threads"),
        )
        if 'background' in settings_data:
            kwargs['background_color'] = self._parse_color(settings_data['background'])
        if get('seed') is not None:
            kwargs['seed'] = self._int(settings_data['seed'], "seed")

        try:
            self.settings = RenderSettings(**kwargs)
        except ValueError as e:
            raise SceneParseError(f"Invalid render settings: {e}") from e


def create_default_scene(width: int = 800, height: int = 600) -> ParsedScene:
    """Build the built-in demo: a white ball resting on a checkered floor.

    The floor is a huge sphere just below the ball; the camera looks
    at the ball from two units along -X.
    """
    settings = RenderSettings(width=width, height=height)

    checkerboard = Checkerboard(
        Color.corrected(0.9, 0.9, 0.9), Color.corrected(0.8, 0.2, 0.2), 20
    )
    scene = Scene()
    scene.add(Sphere(Point3(0, 0, 0), 0.5, Material(SolidColor(Color.corrected(0.9, 0.9, 0.9)), 0.0)))
    scene.add(Sphere(Point3(0, -900, 0), 899.5, Material(checkerboard, 0.0)))

    camera = Camera(
        look_from=Point3(-2.0, 0.0, 0.0),
        look_at=Point3(0.0, 0.0, 0.0),
        vup=Vec3(0.0, 1.0, 0.0),
        vfov=90.0,
        aspect_ratio=settings.aspect_ratio,
    )
    return scene, camera, settings


def load_scene(filepath: str) -> ParsedScene:
    """Convenience function to load a scene file.

    Args:
        filepath: Path to the scene file

    Returns:
        Tuple of (scene, camera, settings)
    """
    parser = SceneParser()
    return parser.parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> ParsedScene:
    """Convenience function to parse a scene from a dictionary.

    Args:
        data: Scene description dictionary

    Returns:
        Tuple of (scene, camera, settings)
    """
    parser = SceneParser()
    return parser.parse_dict(data)
