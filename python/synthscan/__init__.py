"""
SynthScan - Python Implementation

Heuristic detection of AI-generated images and videos
from plain pixel statistics.
"""

from .detect import Detector, detect_ai_content
from .types import (
    MediaType,
    ContainerMetadata,
    AnalysisFactor,
    ImageAnalysis,
    VideoAnalysis,
    DetectionVerdict,
    DetectionOptions,
)
from .imaging import RasterImage, DecodeError, decode_image, read_metadata
from .sampling import PixelSampler
from .analyses import AnalysisError
from .image import ImageAnalyzer
from .video import VideoAnalyzer

__version__ = "0.0.1"
__all__ = [
    "Detector",
    "detect_ai_content",
    "MediaType",
    "ContainerMetadata",
    "AnalysisFactor",
    "ImageAnalysis",
    "VideoAnalysis",
    "DetectionVerdict",
    "DetectionOptions",
    "RasterImage",
    "DecodeError",
    "decode_image",
    "read_metadata",
    "PixelSampler",
    "AnalysisError",
    "ImageAnalyzer",
    "VideoAnalyzer",
]
