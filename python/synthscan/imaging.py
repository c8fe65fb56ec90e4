"""Image decoding and container metadata.

Pillow handles both the header-level metadata read and the full decode to
an RGB raster.  The raster is a read-only numpy array so analyses cannot
modify it while scoring.
"""
import io
import logging
from typing import Tuple

import numpy as np
from PIL import Image, UnidentifiedImageError

from .types import ContainerMetadata

logger = logging.getLogger(__name__)


class DecodeError(ValueError):
    """Raised when image bytes cannot be decoded."""


class RasterImage:
    """Decoded RGB pixel grid with random-access reads."""

    def __init__(self, pixels: np.ndarray):
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ValueError(f"Expected an H x W x 3 array, got shape {pixels.shape}")
        if pixels.shape[0] == 0 or pixels.shape[1] == 0:
            raise ValueError("Raster has no pixels")
        arr = np.array(pixels, dtype=np.uint8, copy=True)
        arr.setflags(write=False)
        self._pixels = arr

    @classmethod
    def from_pil(cls, img: Image.Image) -> "RasterImage":
        return cls(np.asarray(img.convert("RGB")))

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    @property
    def size(self) -> int:
        return self.width * self.height

    def pixel(self, x: int, y: int) -> Tuple[int, int, int]:
        r, g, b = self._pixels[y, x]
        return int(r), int(g), int(b)

    def __repr__(self) -> str:
        return f"RasterImage(width={self.width}, height={self.height})"


def _open(image_bytes: bytes) -> Image.Image:
    if not image_bytes:
        raise DecodeError("Empty image buffer")
    try:
        return Image.open(io.BytesIO(image_bytes))
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError, SyntaxError) as e:
        raise DecodeError(f"Unrecognised image data: {e}") from e


def _metadata_from(img: Image.Image) -> ContainerMetadata:
    width, height = img.size
    return ContainerMetadata(
        width=width or None,
        height=height or None,
        has_exif=bool(img.info.get("exif")),
        has_icc_profile=bool(img.info.get("icc_profile")),
        format=img.format,
    )


def read_metadata(image_bytes: bytes) -> ContainerMetadata:
    """Read container metadata without decoding pixel data.

    Args:
        image_bytes: Raw encoded image bytes.

    Returns:
        ContainerMetadata with dimensions and EXIF/ICC presence.

    Raises:
        DecodeError: if the container is not a recognised image.
    """
    with _open(image_bytes) as img:
        return _metadata_from(img)


def decode_image(image_bytes: bytes) -> Tuple[RasterImage, ContainerMetadata]:
    """Decode image bytes to an RGB raster plus its container metadata.

    Animated formats are reduced to their first frame.

    Raises:
        DecodeError: on unreadable, truncated or empty image data.
    """
    with _open(image_bytes) as img:
        try:
            img.load()
            raster = RasterImage.from_pil(img)
        except (Image.DecompressionBombError, OSError, ValueError, SyntaxError) as e:
            raise DecodeError(f"Failed to decode image data: {e}") from e
        # PNG eXIf chunks after IDAT only show up in img.info once loaded
        metadata = _metadata_from(img)

    logger.debug("Decoded %s image %dx%d", metadata.format, raster.width, raster.height)
    return raster, metadata
