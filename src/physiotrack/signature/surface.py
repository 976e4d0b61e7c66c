from __future__ import annotations

from PIL import Image, ImageDraw

from ..core.constants import SIGNATURE_LINE_WIDTH, SIGNATURE_STROKE_COLOR
from .codec import encode_png

Point = tuple[float, float]


class RasterSurface:
    """Transparent RGBA drawing surface backed by a Pillow image.

    Mirrors the subset of a 2D canvas the signature pad needs: sizing, a pen
    with round caps, straight segments, clearing and PNG export.
    """

    def __init__(self, width: int = 1, height: int = 1):
        self._image = self._blank(width, height)
        self._draw = ImageDraw.Draw(self._image)
        self.line_width = SIGNATURE_LINE_WIDTH
        self.stroke_color = SIGNATURE_STROKE_COLOR

    @staticmethod
    def _blank(width: int, height: int) -> Image.Image:
        # Pillow cannot export a zero-sized PNG.
        return Image.new("RGBA", (max(int(width), 1), max(int(height), 1)), (0, 0, 0, 0))

    @property
    def size(self) -> tuple[int, int]:
        return self._image.size

    def resize(self, width: int, height: int, *, keep_content: bool = False) -> None:
        old = self._image
        self._image = self._blank(width, height)
        if keep_content:
            self._image.paste(old, (0, 0))
        self._draw = ImageDraw.Draw(self._image)

    def set_pen(self, *, width: int, color: str) -> None:
        self.line_width = int(width)
        self.stroke_color = color

    def line(self, start: Point, end: Point) -> None:
        self._draw.line([start, end], fill=self.stroke_color, width=self.line_width)
        r = self.line_width / 2
        for x, y in (start, end):
            self._draw.ellipse([x - r, y - r, x + r, y + r], fill=self.stroke_color)

    def clear(self) -> None:
        self.resize(*self._image.size)

    def to_image(self) -> Image.Image:
        return self._image.copy()

    def to_data_url(self) -> str:
        return encode_png(self._image)
