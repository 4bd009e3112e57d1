"""A simple RGB raster image that reads and writes binary PPM files."""

from __future__ import annotations

import os
from typing import Union

from meshsimplify.geometry import Color

PathLike = Union[str, "os.PathLike[str]"]


def _check_ppm_name(path: PathLike) -> str:
    name = os.fspath(path)
    if not (len(name) > 4 and name.endswith(".ppm")):
        raise ValueError(f"This is not a PPM filename: {name}")
    return name


class Image:
    """A width x height grid of colours; (0, 0) is the bottom-left pixel."""

    def __init__(self, width: int = 0, height: int = 0) -> None:
        if not (width == 0 and height == 0) and (width <= 0 or height <= 0):
            raise ValueError(f"invalid image size {width}x{height}")
        self._width = width
        self._height = height
        self._pixels: list[Color] = [Color()] * (width * height)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"pixel ({x}, {y}) outside {self._width}x{self._height} image")
        return y * self._width + x

    def get_pixel(self, x: int, y: int) -> Color:
        return self._pixels[self._index(x, y)]

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        self._pixels[self._index(x, y)] = color

    def set_all_pixels(self, color: Color) -> None:
        self._pixels = [color] * (self._width * self._height)

    def copy(self) -> Image:
        other = Image(self._width, self._height)
        other._pixels = list(self._pixels)
        return other

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Image):
            return NotImplemented
        return (
            self._width == other._width
            and self._height == other._height
            and self._pixels == other._pixels
        )

    @classmethod
    def load(cls, path: PathLike) -> Image:
        """Read a binary (P6) PPM file with a maximum value of 255."""
        name = _check_ppm_name(path)
        with open(name, "rb") as f:
            if b"P6" not in f.readline():
                raise ValueError(f"{name}: not a binary PPM (P6) file")
            line = f.readline()
            while line.startswith(b"#"):
                line = f.readline()
            fields = line.split()
            try:
                width, height = int(fields[0]), int(fields[1])
            except (IndexError, ValueError):
                raise ValueError(f"{name}: malformed image size line") from None
            if b"255" not in f.readline():
                raise ValueError(f"{name}: maximum value must be 255")
            data = f.read(width * height * 3)
        if len(data) < width * height * 3:
            raise ValueError(f"{name}: truncated pixel data")

        image = cls(width, height)
        triples = iter(zip(*[iter(data)] * 3))
        for y in range(height - 1, -1, -1):
            for x in range(width):
                r, g, b = next(triples)
                image.set_pixel(x, y, Color(r, g, b))
        return image

    def save(self, path: PathLike) -> None:
        """Write the image as a binary (P6) PPM file."""
        name = _check_ppm_name(path)
        body = bytearray()
        for y in range(self._height - 1, -1, -1):
            for x in range(self._width):
                c = self.get_pixel(x, y)
                body += bytes((c.r & 0xFF, c.g & 0xFF, c.b & 0xFF))
        with open(name, "wb") as f:
            f.write(f"P6\n{self._width} {self._height}\n255\n".encode("ascii"))
            f.write(body)