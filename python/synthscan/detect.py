"""Main SynthScan implementation.

Heuristic detection of AI-generated images and videos.
"""
import logging
import math
from typing import Optional

from .image import ImageAnalyzer
from .sampling import PixelSampler
from .types import DetectionOptions, DetectionVerdict, MediaType
from .video import VideoAnalyzer

logger = logging.getLogger(__name__)

AI_THRESHOLD = 50


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class Detector:
    """Main class for AI-content detection."""

    def __init__(self, options: Optional[DetectionOptions] = None):
        """Initialize Detector instance.

        Args:
            options: Detection options (sampling seed, video probing)
        """
        self.options = options or DetectionOptions()
        self._image_analyzer = ImageAnalyzer(sampler=PixelSampler(seed=self.options.seed))
        self._video_analyzer = VideoAnalyzer(probe=self.options.probe_video)

    def detect(self, content: bytes, mime_type: str, file_name: str) -> DetectionVerdict:
        """Detect whether content is likely AI-generated.

        Args:
            content: Encoded image or video bytes
            mime_type: Declared MIME type; ``image/*`` selects the image
                path, anything else the video path
            file_name: Declared file name, echoed in the verdict

        Returns:
            DetectionVerdict with rounded confidence and reasoning
        """
        file_type = self._media_type(mime_type)

        if file_type == MediaType.IMAGE:
            analysis = self._image_analyzer.analyze(content)
            factors = analysis.factors
            degraded = analysis.degraded
            if degraded:
                logger.debug(f"Degraded analysis for {file_name}: {analysis.error}")
        else:
            analysis = self._video_analyzer.analyze(content, file_name)
            factors = []
            degraded = False

        confidence = _round_half_up(min(100.0, max(0.0, analysis.confidence)))

        return DetectionVerdict(
            is_ai_generated=confidence >= AI_THRESHOLD,
            confidence=confidence,
            reasoning=list(analysis.reasoning),
            file_name=file_name,
            file_type=file_type,
            factors=list(factors),
            degraded=degraded,
        )

    @staticmethod
    def _media_type(mime_type: str) -> MediaType:
        if (mime_type or '').lower().startswith('image/'):
            return MediaType.IMAGE
        return MediaType.VIDEO


def detect_ai_content(content: bytes, mime_type: str, file_name: str) -> DetectionVerdict:
    """Run a default Detector over one file."""
    return Detector().detect(content, mime_type, file_name)
