"""
Scene description language parser.

Supports a YAML (or JSON) scene description format with:
- Render settings
- Camera configuration
- Materials library
- Objects (shapes with materials)
- Point lights

Example scene file:
```yaml
render:
  width: 200
  height: 200
  bounce_limit: 3

camera:
  aperture: 2.0

materials:
  white:
    type: diffuse
    diffuse: [1, 1, 1]
    specular: [0.2, 0.2, 0.2]
    shininess: 16

  mirror:
    type: reflective
    attenuation: [0.9, 0.9, 0.9]

objects:
  - type: sphere
    center: [0, 0, 5]
    radius: 3
    material: white

  - type: plane
    coefficients: [0, -1, 0, 3]
    material: mirror

lights:
  - position: [0, -5, 0]
    power: [20, 20, 20]
```
"""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml

from .vec3 import Vec3
from .radiance import Radiance
from .camera import OriginCamera
from .shapes import Shape, Sphere, Plane
from .materials import (
    Material, DiffuseMaterial, EmitterMaterial, ReflectiveMaterial, RefractiveMaterial
)
from .objects import SurfaceObject
from .lights import LightSource
from .scene import Scene
from .renderer import RenderSettings

logger = logging.getLogger(__name__)

DEFAULT_APERTURE = 2.0


class SceneParseError(Exception):
    """Error during scene parsing."""
    pass


def _to_float(value: Any, what: str) -> float:
    """Convert a scene value to float, reporting bad input as SceneParseError."""
    if isinstance(value, bool):
        raise SceneParseError(f"Invalid {what}: {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise SceneParseError(f"Invalid {what}: {value!r}") from e


def _to_int(value: Any, what: str) -> int:
    if isinstance(value, bool):
        raise SceneParseError(f"Invalid {what}: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise SceneParseError(f"Invalid {what}: {value!r}") from e


def _section(data: Dict[str, Any], key: str, kind: type) -> Any:
    """Fetch a top-level section; a missing or empty section reads as empty."""
    value = data.get(key)
    if value is None:
        return kind()
    if not isinstance(value, kind):
        raise SceneParseError(f"Section '{key}' must be a {kind.__name__}, got {type(value).__name__}")
    return value


class SceneParser:
    """Parser for scene description files."""

    def __init__(self):
        self.materials: Dict[str, Material] = {}
        self.objects: List[SurfaceObject] = []
        self.lights: List[LightSource] = []

    def parse_file(self, filepath: str) -> Tuple[Scene, OriginCamera, RenderSettings]:
        """Parse a scene file.

        Args:
            filepath: Path to the scene file (YAML or JSON)

        Returns:
            Tuple of (scene, camera, settings)
        """
        path = Path(filepath)
        if not path.exists():
            raise SceneParseError(f"Scene file not found: {filepath}")

        try:
            content = path.read_text()
        except (OSError, UnicodeDecodeError) as e:
            raise SceneParseError(f"Cannot read scene file {filepath}: {e}") from e

        try:
            if path.suffix == '.json':
                data = json.loads(content)
            else:
                # JSON is a subset of YAML, so anything else goes through YAML
                data = yaml.safe_load(content)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise SceneParseError(f"Cannot read scene file {filepath}: {e}") from e

        if not isinstance(data, dict):
            raise SceneParseError(f"Scene file must contain a mapping: {filepath}")

        logger.debug("Loaded scene description from %s", path)
        return self.parse_dict(data)

    def parse_dict(self, data: Dict[str, Any]) -> Tuple[Scene, OriginCamera, RenderSettings]:
        """Parse a scene from a dictionary.

        Args:
            data: Scene description dictionary

        Returns:
            Tuple of (scene, camera, settings)
        """
        if not isinstance(data, dict):
            raise SceneParseError(f"Scene description must be a mapping, got {type(data).__name__}")

        # Materials first, objects reference them
        self._parse_materials(_section(data, 'materials', dict))
        self._parse_objects(_section(data, 'objects', list))
        self._parse_lights(_section(data, 'lights', list))

        settings = self._parse_settings(_section(data, 'render', dict))
        camera = self._parse_camera(_section(data, 'camera', dict), settings)
        scene = Scene(self.objects, self.lights)

        logger.debug(
            "Parsed scene: %d materials, %d objects, %d lights",
            len(self.materials), len(scene.objects), len(scene.light_sources)
        )
        return scene, camera, settings

    def _parse_vec3(self, data: Any) -> Vec3:
        """Parse a Vec3 from a list or an x/y/z mapping."""
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Vec3 must have 3 components, got {len(data)}")
            return Vec3(*(_to_float(v, 'vector component') for v in data))
        elif isinstance(data, dict):
            return Vec3(
                _to_float(data.get('x', 0), 'vector component'),
                _to_float(data.get('y', 0), 'vector component'),
                _to_float(data.get('z', 0), 'vector component'),
            )
        else:
            raise SceneParseError(f"Cannot parse Vec3 from: {data}")

    def _parse_radiance(self, data: Any) -> Radiance:
        """Parse a Radiance from a list, an r/g/b mapping, a hex string or a scalar."""
        if isinstance(data, bool):
            raise SceneParseError(f"Cannot parse color from: {data}")
        if isinstance(data, (int, float)):
            return Radiance.white(float(data))
        if isinstance(data, (list, tuple)):
            if len(data) != 3:
                raise SceneParseError(f"Color must have 3 components, got {len(data)}")
            return Radiance(*(_to_float(v, 'color component') for v in data))
        elif isinstance(data, dict):
            return Radiance(
                _to_float(data.get('r', 0), 'color component'),
                _to_float(data.get('g', 0), 'color component'),
                _to_float(data.get('b', 0), 'color component'),
            )
        elif isinstance(data, str):
            if data.startswith('#') and len(data) == 7:
                try:
                    r = int(data[1:3], 16) / 255.0
                    g = int(data[3:5], 16) / 255.0
                    b = int(data[5:7], 16) / 255.0
                except ValueError as e:
                    raise SceneParseError(f"Cannot parse color from string: {data}") from e
                return Radiance(r, g, b)
            raise SceneParseError(f"Cannot parse color from string: {data}")
        else:
            raise SceneParseError(f"Cannot parse color from: {data}")

    def _build_material(self, mat_data: Dict[str, Any]) -> Material:
        if not isinstance(mat_data, dict):
            raise SceneParseError(f"Material must be a mapping, got: {mat_data!r}")
        mat_type = str(mat_data.get('type', 'diffuse')).lower()

        if mat_type == 'diffuse':
            diffuse = self._parse_radiance(mat_data.get('diffuse', [0.5, 0.5, 0.5]))
            specular = self._parse_radiance(mat_data.get('specular', [0, 0, 0]))
            shininess = _to_float(mat_data.get('shininess', 1.0), 'shininess')
            if shininess < 0:
                raise SceneParseError(f"Shininess must be non-negative, got {shininess}")
            return DiffuseMaterial(diffuse, specular, shininess)

        elif mat_type == 'emitter':
            return EmitterMaterial(self._parse_radiance(mat_data.get('emission', [1, 1, 1])))

        elif mat_type == 'reflective':
            return ReflectiveMaterial(self._parse_radiance(mat_data.get('attenuation', [1, 1, 1])))

        elif mat_type == 'refractive':
            attenuation = self._parse_radiance(mat_data.get('attenuation', [1, 1, 1]))
            index = _to_float(mat_data.get('index', 1.5), 'refractive index')
            if index <= 0:
                raise SceneParseError(f"Refractive index must be positive, got {index}")
            return RefractiveMaterial(attenuation, index)

        else:
            raise SceneParseError(f"Unknown material type: {mat_type}")

    def _parse_materials(self, materials_data: Dict[str, Any]) -> None:
        """Parse materials section."""
        for name, mat_data in materials_data.items():
            self.materials[name] = self._build_material(mat_data)

    def _get_material(self, mat_ref: Any) -> Material:
        """Get a material by name or inline definition."""
        if mat_ref is None:
            raise SceneParseError("Object has no material")
        if isinstance(mat_ref, str):
            if mat_ref not in self.materials:
                raise SceneParseError(f"Unknown material: {mat_ref}")
            return self.materials[mat_ref]
        elif isinstance(mat_ref, dict):
            return self._build_material(mat_ref)
        else:
            raise SceneParseError(f"Invalid material reference: {mat_ref}")

    def _build_shape(self, obj_data: Dict[str, Any]) -> Shape:
        obj_type = str(obj_data.get('type', 'sphere')).lower()

        if obj_type == 'sphere':
            center = self._parse_vec3(obj_data.get('center', [0, 0, 0]))
            radius = _to_float(obj_data.get('radius', 1.0), 'sphere radius')
            if radius <= 0:
                raise SceneParseError(f"Sphere radius must be positive, got {radius}")
            return Sphere(center, radius)

        elif obj_type == 'plane':
            if 'coefficients' in obj_data:
                coefficients = obj_data['coefficients']
                if not isinstance(coefficients, (list, tuple)) or len(coefficients) != 4:
                    raise SceneParseError(
                        f"Plane needs 4 coefficients, got {coefficients!r}"
                    )
                a, b, c, d = (_to_float(k, 'plane coefficient') for k in coefficients)
                if a == 0 and b == 0 and c == 0:
                    raise SceneParseError("Plane normal must not be zero")
                return Plane.from_coefficients(a, b, c, d)
            point = self._parse_vec3(obj_data.get('point', [0, 0, 0]))
            normal = self._parse_vec3(obj_data.get('normal', [0, -1, 0]))
            if normal.length() == 0:
                raise SceneParseError("Plane normal must not be zero")
            return Plane.from_point_normal(point, normal)

        else:
            raise SceneParseError(f"Unknown object type: {obj_type}")

    def _parse_objects(self, objects_data: list) -> None:
        """Parse objects section."""
        for obj_data in objects_data:
            if not isinstance(obj_data, dict):
                raise SceneParseError(f"Object entry must be a mapping, got: {obj_data!r}")
            shape = self._build_shape(obj_data)
            material = self._get_material(obj_data.get('material'))
            self.objects.append(SurfaceObject(shape, material))

    def _parse_lights(self, lights_data: list) -> None:
        """Parse lights section."""
        for light_data in lights_data:
            if not isinstance(light_data, dict):
                raise SceneParseError(f"Light entry must be a mapping, got: {light_data!r}")
            light_type = str(light_data.get('type', 'point')).lower()
            if light_type != 'point':
                raise SceneParseError(f"Unknown light type: {light_type}")

            position = self._parse_vec3(light_data.get('position', [0, -5, 0]))
            power = self._parse_radiance(light_data.get('power', [1, 1, 1]))
            self.lights.append(LightSource(position, power))

    def _parse_camera(self, camera_data: Dict[str, Any], settings: RenderSettings) -> OriginCamera:
        """Parse camera section; the image size comes from the render settings."""
        aperture = _to_float(camera_data.get('aperture', DEFAULT_APERTURE), 'camera aperture')
        return OriginCamera(aperture=aperture, width=settings.width, height=settings.height)

    def _parse_settings(self, settings_data: Dict[str, Any]) -> RenderSettings:
        """Parse render settings section."""
        defaults = RenderSettings()
        values = {
            field: _to_int(settings_data.get(key, getattr(defaults, field)), key)
            for field, key in (
                ('width', 'width'),
                ('height', 'height'),
                ('bounce_limit', 'bounce_limit'),
                ('tile_size', 'tile_size'),
                ('num_workers', 'workers'),
            )
        }
        try:
            return RenderSettings(**values)
        except ValueError as e:
            raise SceneParseError(f"Invalid render settings: {e}") from e


def load_scene(filepath: str) -> Tuple[Scene, OriginCamera, RenderSettings]:
    """Convenience function to load a scene file.

    Args:
        filepath: Path to the scene file

    Returns:
        Tuple of (scene, camera, settings)
    """
    parser = SceneParser()
    return parser.parse_file(filepath)


def parse_scene(data: Dict[str, Any]) -> Tuple[Scene, OriginCamera, RenderSettings]:
    """Convenience function to parse a scene from a dictionary.

    Args:
        data: Scene description dictionary

    Returns:
        Tuple of (scene, camera, settings)
    """
    parser = SceneParser()
    return parser.parse_dict(data)
