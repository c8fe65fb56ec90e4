"""Shared pytest fixtures for SynthScan tests."""

import io

import numpy as np
import pytest
from PIL import Image

from synthscan import Detector, DetectionOptions, PixelSampler, RasterImage


def encode(arr: np.ndarray, fmt: str = "PNG", **save_kwargs) -> bytes:
    """Encode an H x W x 3 uint8 array with Pillow."""
    buf = io.BytesIO()
    Image.fromarray(arr.astype(np.uint8)).save(buf, format=fmt, **save_kwargs)
    return buf.getvalue()


def uniform_array(w: int = 100, h: int = 100, color: tuple = (128, 128, 128)) -> np.ndarray:
    """Single flat color."""
    arr = np.zeros((h, w, 3), dtype=np.uint8)
    arr[:, :] = color
    return arr


def noise_array(w: int = 128, h: int = 128, seed: int = 7) -> np.ndarray:
    """Uniform random RGB noise - rich texture, no symmetry."""
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, (h, w, 3), dtype=np.uint8)


def mirrored_array(w: int = 100, h: int = 100, seed: int = 3) -> np.ndarray:
    """Random left half reflected onto the right half."""
    arr = noise_array(w, h, seed)
    arr[:, w - w // 2:] = arr[:, : w // 2][:, ::-1]
    return arr


# ---------------------------------------------------------------------------
# Sampler / detector fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sampler():
    """Seeded sampler for reproducible sub-scores."""
    return PixelSampler(seed=1234)


@pytest.fixture()
def detector():
    """Seeded Detector with the video probe disabled."""
    return Detector(DetectionOptions(seed=1234, probe_video=False))


# ---------------------------------------------------------------------------
# Raster fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def uniform_raster():
    return RasterImage(uniform_array())


@pytest.fixture()
def noise_raster():
    return RasterImage(noise_array())


@pytest.fixture()
def mirrored_raster():
    return RasterImage(mirrored_array())


# ---------------------------------------------------------------------------
# Encoded content fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def uniform_square_png():
    """100x100 flat gray PNG without EXIF or ICC."""
    return encode(uniform_array(100, 100))


@pytest.fixture()
def noise_png():
    """128x128 random noise PNG."""
    return encode(noise_array(128, 128))


@pytest.fixture()
def exif_jpeg():
    """JPEG carrying a minimal EXIF block."""
    exif = Image.Exif()
    exif[0x010F] = "Canon"
    exif[0x0110] = "EOS 5D"
    return encode(noise_array(64, 48), "JPEG", quality=90, exif=exif.tobytes())


@pytest.fixture()
def icc_png():
    """PNG with an ICC profile but no EXIF."""
    return encode(noise_array(64, 48), "PNG", icc_profile=b"\x00" * 128)
