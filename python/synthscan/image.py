"""
Heuristic image analysis for AI-generated content detection.

Runs the five pixel-statistics analyses over a decoded image and folds
them into one confidence value.  Failures never escape: a decode or
analysis error yields a degraded ImageAnalysis with a neutral confidence.
"""
import logging
from typing import Optional

from . import analyses
from .analyses import AnalysisError
from .imaging import DecodeError, RasterImage, decode_image
from .sampling import PixelSampler
from .types import ContainerMetadata, ImageAnalysis

logger = logging.getLogger(__name__)

NEUTRAL_CONFIDENCE = 50
DEGRADED_REASON = 'Unable to complete full analysis due to processing error'


class ImageAnalyzer:
    """
    Heuristic image analysis layer.

    Each analysis contributes a bounded score; the weights below are the
    score ceilings and sum to the normalization denominator (57):

    1. Noise patterns      (15) - low brightness variance
    2. Symmetry            (12) - mirrored left/right halves
    3. Color distribution  (10) - too few or too many distinct colors
    4. Metadata            (8)  - missing EXIF / ICC profile
    5. Smoothness          (12) - few sharp edges

    A square image adds a flat bonus of 5 to the numerator only.
    """

    WEIGHTS = analyses.WEIGHTS
    THRESHOLDS = analyses.THRESHOLDS

    def __init__(self, sampler: Optional[PixelSampler] = None):
        """Initialize ImageAnalyzer.

        Args:
            sampler: Pixel sampler shared by the sampling analyses.
                Defaults to an unseeded PixelSampler.
        """
        self._sampler = sampler or PixelSampler()

    def analyze(self, image_bytes: bytes) -> ImageAnalysis:
        """Analyze encoded image bytes.

        Args:
            image_bytes: Raw image bytes (JPEG, PNG, WebP, GIF).

        Returns:
            ImageAnalysis; ``degraded`` is set when decoding or any
            analysis failed.
        """
        try:
            raster, metadata = decode_image(image_bytes)
            return self.analyze_raster(raster, metadata)
        except DecodeError as e:
            logger.exception("Failed to decode image data")
            return self._degraded(e)
        except AnalysisError as e:
            logger.exception("Image analysis failed")
            return self._degraded(e)
        except Exception as e:
            logger.exception("Image analysis failed with exception")
            return self._degraded(e)

    def analyze_raster(self, raster: RasterImage, metadata: ContainerMetadata) -> ImageAnalysis:
        """Score an already decoded raster.

        Raises:
            AnalysisError: if an individual analysis fails.
        """
        analysis_tasks = [
            ('noise', analyses.analyze_noise, (raster, self._sampler)),
            ('symmetry', analyses.analyze_symmetry, (raster,)),
            ('color', analyses.analyze_color_distribution, (raster, self._sampler)),
            ('metadata', analyses.analyze_metadata, (metadata,)),
            ('smoothness', analyses.analyze_smoothness, (raster, self._sampler)),
        ]

        factors = []
        for key, fn, args in analysis_tasks:
            try:
                factor = fn(*args)
            except Exception as e:
                raise AnalysisError(key, e) from e
            logger.debug("%s: %s/%s", factor.name, factor.score, factor.weight)
            factors.append(factor)

        square = metadata.is_square
        confidence, score, total_weight = analyses.aggregate_score(factors, square=square)

        reasoning = [analyses.SQUARE_REASON] if square else []
        reasoning.extend(f.reason for f in factors if f.reason)

        logger.debug("Image score %.1f / %.1f -> %.1f%%", score, total_weight, confidence)
        return ImageAnalysis(confidence=confidence, reasoning=reasoning, factors=factors)

    @staticmethod
    def _degraded(error: Exception) -> ImageAnalysis:
        return ImageAnalysis(
            confidence=NEUTRAL_CONFIDENCE,
            reasoning=[DEGRADED_REASON],
            error=str(error),
        )
