"""
Pixel-statistics heuristics for AI-generated image detection.

Each analysis is a pure function of a decoded raster (or its container
metadata) and returns an AnalysisFactor whose score never exceeds the
factor's fixed weight.  aggregate_score folds the factors into a single
0-100 confidence.

Analyses:
  1. Noise variance       - brightness variance of sampled pixels
  2. Symmetry             - left/right mirror agreement over the top rows
  3. Color distribution   - diversity of a coarsely quantized palette
  4. Metadata             - presence of EXIF / ICC profile
  5. Smoothness           - density of sharp transitions (edges)
"""
import logging
from typing import Iterable, Optional, Tuple

import numpy as np

from .imaging import RasterImage
from .sampling import PixelSampler
from .types import AnalysisFactor, ContainerMetadata

logger = logging.getLogger(__name__)


class AnalysisError(RuntimeError):
    """An individual analysis failed unexpectedly."""

    def __init__(self, analysis: str, cause: BaseException):
        super().__init__(f"{analysis} analysis failed: {cause}")
        self.analysis = analysis
        self.cause = cause


# Fixed ceilings per factor; they also form the normalization denominator.
WEIGHTS = {
    'noise': 15,
    'symmetry': 12,
    'color': 10,
    'metadata': 8,
    'smoothness': 12,
}

THRESHOLDS = {
    'noise_variance_high': 100,     # below -> full score
    'noise_variance_moderate': 200,
    'symmetry_pixel_diff': 10,      # summed |dR|+|dG|+|dB| counted as a match
    'symmetry_ratio_high': 0.7,
    'symmetry_ratio_moderate': 0.5,
    'color_diversity_low': 0.1,
    'color_diversity_high': 0.9,
    'color_diversity_moderate_low': 0.15,
    'color_diversity_moderate_high': 0.8,
    'edge_pixel_diff': 30,
    'edge_ratio_high': 0.1,
    'edge_ratio_moderate': 0.15,
}

NOISE_SAMPLES = 100
SYMMETRY_ROWS = 50
COLOR_SAMPLES = 1000
COLOR_QUANT_STEP = 32
EDGE_SAMPLES = 200
SQUARE_BONUS = 5

SQUARE_REASON = 'Square aspect ratio detected (common in AI-generated images)'


def _channel_diff(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Summed absolute per-channel difference of two pixel arrays."""
    return np.abs(a.astype(np.int32) - b.astype(np.int32)).sum(axis=-1)


def analyze_noise(raster: RasterImage, sampler: PixelSampler) -> AnalysisFactor:
    """Score low brightness variance (over-smooth texture)."""
    samples = sampler.sample(raster, NOISE_SAMPLES)
    brightness = samples.mean(axis=1)
    variance = float(np.var(brightness))

    score = 0
    reason = 'Natural noise patterns detected'
    if variance < THRESHOLDS['noise_variance_high']:
        score = 15
        reason = 'Unusually smooth texture detected - low noise variance suggests AI generation'
    elif variance < THRESHOLDS['noise_variance_moderate']:
        score = 8
        reason = 'Moderate smoothness detected - possible AI generation'

    return AnalysisFactor(
        name='Noise patterns',
        weight=WEIGHTS['noise'],
        score=score,
        reason=reason,
        details={'variance': variance, 'samples': int(len(samples))},
    )


def symmetry_ratio(raster: RasterImage, rows: int = SYMMETRY_ROWS) -> float:
    """Fraction of mirrored pixel pairs that match in the top ``rows`` rows."""
    rows = min(rows, raster.height)
    half = raster.width // 2
    if rows == 0 or half == 0:
        return 0.0

    band = raster.pixels[:rows]
    left = band[:, :half]
    # Column width-1-x for every x in [0, half)
    right = band[:, ::-1][:, :half]
    matches = int((_channel_diff(left, right) < THRESHOLDS['symmetry_pixel_diff']).sum())
    return matches / (rows * half)


def analyze_symmetry(raster: RasterImage) -> AnalysisFactor:
    """Score strong left/right mirror symmetry."""
    ratio = symmetry_ratio(raster)

    score = 0
    reason = 'Natural asymmetry detected'
    if ratio > THRESHOLDS['symmetry_ratio_high']:
        score = 12
        reason = 'High symmetry detected - AI models often generate highly symmetrical images'
    elif ratio > THRESHOLDS['symmetry_ratio_moderate']:
        score = 6
        reason = 'Moderate symmetry detected - possible AI generation'

    return AnalysisFactor(
        name='Symmetry',
        weight=WEIGHTS['symmetry'],
        score=score,
        reason=reason,
        details={'symmetry_ratio': ratio},
    )


def analyze_color_distribution(raster: RasterImage, sampler: PixelSampler) -> AnalysisFactor:
    """Score palettes that are either too uniform or too scattered."""
    samples = sampler.sample(raster, COLOR_SAMPLES)
    quantized = (samples // COLOR_QUANT_STEP) * COLOR_QUANT_STEP
    histogram = {}
    for key in map(tuple, quantized.tolist()):
        histogram[key] = histogram.get(key, 0) + 1
    diversity = len(histogram) / len(samples)

    score = 0
    reason = 'Natural color distribution detected'
    if diversity < THRESHOLDS['color_diversity_low'] or diversity > THRESHOLDS['color_diversity_high']:
        score = 10
        reason = 'Unusual color distribution detected - may indicate AI generation'
    elif (diversity < THRESHOLDS['color_diversity_moderate_low']
          or diversity > THRESHOLDS['color_diversity_moderate_high']):
        score = 5
        reason = 'Moderate color distribution anomaly detected'

    return AnalysisFactor(
        name='Color distribution',
        weight=WEIGHTS['color'],
        score=score,
        reason=reason,
        details={'color_diversity': diversity, 'unique_colors': len(histogram)},
    )


def analyze_metadata(metadata: ContainerMetadata) -> AnalysisFactor:
    """Score missing camera metadata.

    The reason is None when EXIF is present; callers skip it.
    """
    score = 0
    reason: Optional[str] = None
    if not metadata.has_exif and not metadata.has_icc_profile:
        score = 8
        reason = 'Missing EXIF/ICC metadata - AI-generated images often lack camera metadata'
    elif not metadata.has_exif:
        score = 4
        reason = 'Limited metadata detected - may indicate generated content'

    return AnalysisFactor(
        name='Metadata',
        weight=WEIGHTS['metadata'],
        score=score,
        reason=reason,
        details={'has_exif': metadata.has_exif, 'has_icc_profile': metadata.has_icc_profile},
    )


def analyze_smoothness(raster: RasterImage, sampler: PixelSampler) -> AnalysisFactor:
    """Score a lack of sharp transitions between neighbouring pixels."""
    n = min(EDGE_SAMPLES, raster.size)
    width, height = raster.width, raster.height
    xs, ys = sampler.coordinates(width - 2, height - 2, n)
    # Neighbours clamp for 1-pixel-wide or -tall rasters
    xr = np.minimum(xs + 1, width - 1)
    yb = np.minimum(ys + 1, height - 1)

    px = raster.pixels
    center = px[ys, xs]
    diff_x = _channel_diff(center, px[ys, xr])
    diff_y = _channel_diff(center, px[yb, xs])
    limit = THRESHOLDS['edge_pixel_diff']
    edges = int(np.count_nonzero((diff_x > limit) | (diff_y > limit)))
    edge_ratio = edges / n

    score = 0
    reason = 'Natural texture and edges detected'
    if edge_ratio < THRESHOLDS['edge_ratio_high']:
        score = 12
        reason = 'Unusually smooth texture detected - lack of natural edges suggests AI generation'
    elif edge_ratio < THRESHOLDS['edge_ratio_moderate']:
        score = 6
        reason = 'Moderate smoothness detected - possible AI generation'

    return AnalysisFactor(
        name='Smoothness',
        weight=WEIGHTS['smoothness'],
        score=score,
        reason=reason,
        details={'edge_ratio': edge_ratio, 'edges': edges},
    )


def aggregate_score(factors: Iterable[AnalysisFactor], square: bool = False) -> Tuple[float, float, float]:
    """Combine factor scores into a clamped 0-100 confidence.

    A square aspect ratio adds SQUARE_BONUS to the numerator only; the
    denominator stays the sum of the factor weights.

    Returns:
        (confidence, score, total_weight)
    """
    factors = list(factors)
    score = float(sum(f.score for f in factors))
    total_weight = float(sum(f.weight for f in factors))
    if square:
        score += SQUARE_BONUS

    normalized = (score / total_weight) * 100 if total_weight > 0 else 0.0
    return min(100.0, max(0.0, normalized)), score, total_weight
