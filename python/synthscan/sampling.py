"""Random pixel sampling over a raster."""
from typing import Optional, Tuple

import numpy as np

from .imaging import RasterImage


class PixelSampler:
    """Draws pixel coordinates uniformly at random, with replacement.

    Sampling is unseeded by default.  Pass ``seed`` (or a ready
    ``numpy.random.Generator`` as ``rng``) for reproducible draws.
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[np.random.Generator] = None):
        self._rng = rng if rng is not None else np.random.default_rng(seed)

    def coordinates(self, x_high: int, y_high: int, n: int) -> Tuple[np.ndarray, np.ndarray]:
        """Draw ``n`` coordinate pairs from ``[0, x_high) x [0, y_high)``."""
        xs = self._rng.integers(0, max(1, x_high), size=n)
        ys = self._rng.integers(0, max(1, y_high), size=n)
        return xs, ys

    def sample(self, raster: RasterImage, n: int) -> np.ndarray:
        """Return up to ``n`` RGB triples as an ``n x 3`` int array.

        ``n`` is clamped to the raster's pixel count.
        """
        n = max(0, min(n, raster.size))
        xs, ys = self.coordinates(raster.width, raster.height, n)
        return raster.pixels[ys, xs].astype(np.int32)
