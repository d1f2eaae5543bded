"""
Raster buffer with plain PPM (P3) output.

Pixels are stored as an HDR float array of shape (height, width, 3);
channels are clamped and scaled to 0-255 only when serialized.
"""

from __future__ import annotations
import logging
import textwrap
from pathlib import Path
from typing import List, Union
import numpy as np

from .color import Color, BLACK

logger = logging.getLogger(__name__)

PPM_MAX_LINE_LENGTH = 70
PPM_MAX_COLOR_VALUE = 255


class Canvas:
    """A grid of colors addressed by (x, y), with y = 0 at the top row."""

    def __init__(self, width: int, height: int, fill: Color = BLACK):
        """Create a canvas.

        Args:
            width: Number of columns
            height: Number of rows
            fill: Initial color of every pixel
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width, 3), dtype=np.float64)
        self.pixels[:, :] = fill.to_array()

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) outside {self.width}x{self.height} canvas"
            )

    def write(self, x: int, y: int, color: Color) -> None:
        self._check_bounds(x, y)
        self.pixels[y, x] = color.to_array()

    def pixel_at(self, x: int, y: int) -> Color:
        self._check_bounds(x, y)
        return Color.from_array(self.pixels[y, x].copy())

    def fill(self, color: Color) -> None:
        self.pixels[:, :] = color.to_array()

    def ppm_header(self) -> str:
        return f"P3\n{self.width} {self.height}\n{PPM_MAX_COLOR_VALUE}\n"

    def ppm_body(self) -> str:
        """Serialize pixel data, one or more lines per canvas row.

        Each channel is clamped to [0, 0.999] and multiplied by 256. Rows
        are wrapped on spaces so that no line exceeds 70 characters.
        """
        scaled = (np.clip(self.pixels, 0.0, 0.999) * 256).astype(np.int64)

        lines: List[str] = []
        for row in scaled:
            row_text = " ".join(str(v) for v in row.ravel())
            lines.extend(textwrap.wrap(
                row_text,
                width=PPM_MAX_LINE_LENGTH,
                break_long_words=False,
                break_on_hyphens=False,
            ))
        return "".join(line + "\n" for line in lines)

    def to_ppm(self) -> str:
        """Return the complete PPM file contents, ending with a newline."""
        return self.ppm_header() + self.ppm_body()

    def save_ppm(self, filename: Union[str, Path]) -> Path:
        """Write the canvas to ``filename`` as PPM, creating parent directories."""
        path = Path(filename)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_ppm())
        logger.debug("Wrote %dx%d canvas to %s", self.width, self.height, path)
        return path

    def __repr__(self) -> str:
        return f"Canvas(width={self.width}, height={self.height})"
