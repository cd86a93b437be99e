"""
Renderer module: turns a scene and camera into an 8-bit image.

Implements:
- Per-pixel path tracing through the camera
- Tone mapping of radiance to bytes (scale, clamp, round)
- Tile-based rendering, optionally on a thread pool
- PNG output through Pillow
"""

from __future__ import annotations
import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np

from .radiance import Radiance
from .camera import RayMaker
from .scene import Scene
from .pathtracing import trace_path

logger = logging.getLogger(__name__)

Pixel = Tuple[int, int, int]
PixelRenderer = Callable[[int, int], Pixel]
Tile = Tuple[int, int, int, int]


@dataclass
class RenderSettings:
    """Configuration for the renderer."""
    width: int = 400
    height: int = 400
    bounce_limit: int = 4
    tile_size: int = 32
    num_workers: int = 1  # 0 = auto-detect

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image size must be positive, got {self.width}x{self.height}")
        if self.bounce_limit < 0:
            raise ValueError(f"bounce_limit must be non-negative, got {self.bounce_limit}")
        if self.tile_size <= 0:
            raise ValueError(f"tile_size must be positive, got {self.tile_size}")
        if self.num_workers < 0:
            raise ValueError(f"num_workers must be non-negative, got {self.num_workers}")
        if self.num_workers == 0:
            self.num_workers = os.cpu_count() or 4


def to_byte(channel: float) -> int:
    """Map one radiance channel to 0..255: scale, clamp, round."""
    scaled = channel * 255.0
    fenced = min(max(scaled, 0.0), 255.0)
    return int(round(fenced))


def color_from_radiance(radiance: Radiance) -> Pixel:
    return (to_byte(radiance.red), to_byte(radiance.green), to_byte(radiance.blue))


def render_pixel(camera: RayMaker, scene: Scene, x: int, y: int, bounce_limit: int) -> Pixel:
    """Trace the primary ray through pixel (x, y) and tone map the result."""
    ray = camera.make_ray(x, y)
    return color_from_radiance(trace_path(scene, ray, bounce_limit))


def render_image(width: int, height: int, pixel_renderer: PixelRenderer) -> np.ndarray:
    """Fill a width x height image by calling ``pixel_renderer`` once per pixel.

    Args:
        width: Image width
        height: Image height
        pixel_renderer: Function (x, y) -> (r, g, b) bytes

    Returns:
        Image as uint8 array of shape (height, width, 3)
    """
    image = np.zeros((height, width, 3), dtype=np.uint8)
    for y in range(height):
        for x in range(width):
            image[y, x] = pixel_renderer(x, y)
    return image


class Renderer:
    """Tile-based path tracing renderer."""

    def __init__(self, settings: Optional[RenderSettings] = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def render(self, scene: Scene, camera: RayMaker) -> np.ndarray:
        """Render the scene and return the image as a numpy array.

        Every pixel depends only on the scene, camera and its coordinates,
        so tiles may finish in any order; each tile writes only its own
        slice of the output.

        Args:
            scene: The scene to render
            camera: The camera to render from

        Returns:
            LDR image as uint8 array of shape (height, width, 3)
        """
        width = self.settings.width
        height = self.settings.height
        bounce_limit = self.settings.bounce_limit

        image = np.zeros((height, width, 3), dtype=np.uint8)
        tiles = self._generate_tiles(width, height)
        total_tiles = len(tiles)
        completed_tiles = [0]

        logger.info(
            "Rendering %dx%d, %d objects, %d lights, bounce limit %d, %d tiles on %d worker(s)",
            width, height, len(scene.objects), len(scene.light_sources),
            bounce_limit, total_tiles, self.settings.num_workers
        )
        start_time = time.perf_counter()

        def render_tile(tile: Tile) -> Tile:
            x0, y0, x1, y1 = tile
            for y in range(y0, y1):
                for x in range(x0, x1):
                    image[y, x] = render_pixel(camera, scene, x, y, bounce_limit)
            return tile

        def tile_done(tile: Tile) -> None:
            completed_tiles[0] += 1
            logger.debug("Finished tile %s (%d/%d)", tile, completed_tiles[0], total_tiles)
            if self._progress_callback:
                self._progress_callback(completed_tiles[0] / total_tiles)

        if self.settings.num_workers > 1:
            with ThreadPoolExecutor(max_workers=self.settings.num_workers) as executor:
                futures = [executor.submit(render_tile, tile) for tile in tiles]
                # Progress is counted here, on the calling thread
                for future in as_completed(futures):
                    tile_done(future.result())
        else:
            for tile in tiles:
                tile_done(render_tile(tile))

        logger.info("Render finished in %.2f s", time.perf_counter() - start_time)
        return image

    def _generate_tiles(self, width: int, height: int) -> list[Tile]:
        """Split the image into tiles as (x0, y0, x1, y1) tuples."""
        tile_size = self.settings.tile_size
        tiles = []

        for y in range(0, height, tile_size):
            for x in range(0, width, tile_size):
                x1 = min(x + tile_size, width)
                y1 = min(y + tile_size, height)
                tiles.append((x, y, x1, y1))

        return tiles

    def save_image(self, image: np.ndarray, filename: str) -> None:
        """Save an 8-bit RGB image; the extension picks the format."""
        from PIL import Image as PILImage

        pil_image = PILImage.fromarray(np.ascontiguousarray(image, dtype=np.uint8))
        pil_image.save(filename)
        logger.info("Saved %dx%d image to %s", image.shape[1], image.shape[0], filename)
