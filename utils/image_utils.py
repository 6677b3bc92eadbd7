"""
Image utility functions for background color sampling
"""

import io
import math
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

import numpy as np
from loguru import logger
from PIL import Image, UnidentifiedImageError

from config import settings
from utils.color_utils import hex_to_rgb, rgb_to_hex
from utils.exceptions import LayoutInputError
from utils.math_utils import round_half_up


@dataclass(frozen=True)
class Sampled:
    """Color read from the background raster"""
    color: str

    @property
    def is_fallback(self) -> bool:
        return False


@dataclass(frozen=True)
class DefaultedTo:
    """Fallback color used because sampling failed"""
    color: str
    cause: str

    @property
    def is_fallback(self) -> bool:
        return True


SampleResult = Union[Sampled, DefaultedTo]


def load_image_bytes(data: bytes) -> np.ndarray:
    """
    Decode an encoded raster (PNG, JPEG, WebP, ...) into an RGB array

    Args:
        data: Encoded image bytes

    Returns:
        Image as numpy array (H, W, 3) in RGB format

    Raises:
        ValueError: If the bytes cannot be decoded or the raster has more
            than SAMPLE_MAX_PIXELS pixels
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            # Header size only; pixels are not decoded yet
            width, height = img.size
            if width * height > settings.SAMPLE_MAX_PIXELS:
                raise ValueError(
                    f"Failed to decode image: {width}x{height} exceeds {settings.SAMPLE_MAX_PIXELS} pixels"
                )
            return np.asarray(img.convert("RGB"))
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError) as e:
        raise ValueError(f"Failed to decode image: {e}") from e


class BackgroundSampler:
    """
    Samples average colors from regions of one background raster

    The raster is decoded once. Region means are cached, so repeated
    extracts of the same region (one per grid cell per candidate) cost
    nothing after the first.
    """

    def __init__(self, image: Optional[np.ndarray] = None, decode_error: Optional[str] = None):
        self.image = image
        self.decode_error = decode_error
        self.region_cap = settings.SAMPLE_REGION_CAP
        self.fallback_color = settings.SAMPLE_FALLBACK_COLOR
        self._cache: Dict[Tuple[int, int, int, int], SampleResult] = {}

    @classmethod
    def from_bytes(cls, data: bytes) -> "BackgroundSampler":
        """Decode raster bytes; a decode failure yields a sampler that always defaults"""
        try:
            return cls(image=load_image_bytes(data))
        except ValueError as e:
            logger.warning(f"Background decode failed, sampling will default: {e}")
            return cls(image=None, decode_error=str(e))

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height) of the decoded raster, (0, 0) when unavailable"""
        if self.image is None:
            return (0, 0)
        h, w = self.image.shape[:2]
        return (w, h)

    def sample_region_color(self, region: Tuple[float, float, float, float]) -> SampleResult:
        """
        Average color of a region

        The extract starts at the rounded top-left (clamped at 0) and is
        capped at region_cap pixels per side.

        Args:
            region: (x, y, w, h) in pixels

        Returns:
            Sampled(color), or DefaultedTo(gray, cause) when the extract is
            empty or falls outside the raster
        """
        x, y, w, h = region
        left = max(0, round_half_up(x))
        top = max(0, round_half_up(y))
        width = min(round_half_up(w), self.region_cap)
        height = min(round_half_up(h), self.region_cap)
        key = (left, top, width, height)

        if key in self._cache:
            return self._cache[key]

        result = self._extract_mean(left, top, width, height)
        self._cache[key] = result
        return result

    def _extract_mean(self, left: int, top: int, width: int, height: int) -> SampleResult:
        if self.image is None:
            return DefaultedTo(self.fallback_color, self.decode_error or "No background image")

        img_w, img_h = self.size
        if width <= 0 or height <= 0:
            cause = f"Empty extract {width}x{height}"
        elif left + width > img_w or top + height > img_h:
            cause = f"Extract {left},{top} {width}x{height} outside {img_w}x{img_h} image"
        else:
            patch = self.image[top:top + height, left:left + width]
            mean = patch.reshape(-1, 3).mean(axis=0)
            return Sampled(rgb_to_hex(*mean))

        logger.debug(f"Color sampling failed: {cause}")
        return DefaultedTo(self.fallback_color, cause)

    def sample_background_colors(
        self,
        bounds: Tuple[float, float, float, float],
        samples: int = None
    ) -> SampleResult:
        """
        Coarse dominant color of a box: mean over a grid of region samples

        Args:
            bounds: (x, y, w, h) of the text box
            samples: Number of sample points (grid side = ceil(sqrt(samples)))

        Returns:
            Sampled(average of the cells read from the raster; defaulted
            cells are left out), or DefaultedTo(fallback, first cause) when
            no cell could be read

        Raises:
            LayoutInputError: If the grid would be empty (samples < 1)
        """
        samples = settings.SAMPLE_COUNT if samples is None else samples
        if samples < 1:
            raise LayoutInputError("samples", samples, f"Sampling grid needs at least 1 sample, got {samples}")

        grid_size = math.ceil(math.sqrt(samples))
        x, y, w, h = bounds
        step_x = w / grid_size
        step_y = h / grid_size

        results = []
        for i in range(grid_size):
            for j in range(grid_size):
                results.append(self.sample_region_color((x + i * step_x, y + j * step_y, step_x, step_y)))

        real = [r for r in results if not r.is_fallback]
        if not real:
            return DefaultedTo(self.fallback_color, results[0].cause)

        if len(real) < len(results):
            logger.debug(f"{len(results) - len(real)} of {len(results)} sample cells defaulted, averaging the rest")

        rgbs = [hex_to_rgb(r.color) for r in real]
        n = len(rgbs)
        return Sampled(rgb_to_hex(
            sum(c[0] for c in rgbs) / n,
            sum(c[1] for c in rgbs) / n,
            sum(c[2] for c in rgbs) / n,
        ))
