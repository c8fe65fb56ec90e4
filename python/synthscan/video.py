"""
Coarse heuristic for AI-generated video.

Frames are never decoded.  The score depends only on the encoded byte
length, so confidence is capped well below what the image path can
reach.  An optional OpenCV probe reads container header properties
(frame count, fps, resolution) for reporting; it never affects the score.
"""
import logging
import os
import tempfile
from typing import Any, Dict

import cv2

from .types import VideoAnalysis

logger = logging.getLogger(__name__)

VIDEO_BASE_SCORE = 30
VIDEO_MAX_CONFIDENCE = 60
SMALL_VIDEO_MB = 1.0
SMALL_VIDEO_SCORE = 10

LIMITED_REASON = (
    'Video analysis: Limited analysis performed '
    '(frame extraction recommended for deeper analysis)'
)
SMALL_FILE_REASON = 'Unusually small file size may indicate generated content'
RECOMMEND_REASON = 'For accurate video detection, frame-by-frame analysis with ML models is recommended'


def probe_video(video_bytes: bytes, suffix: str = '.mp4') -> Dict[str, Any]:
    """Read container properties without reading any frame.

    Uses a temporary file because OpenCV's VideoCapture doesn't support
    reading from memory buffers directly.

    Returns:
        Dict of frame_count, fps, width, height, duration_seconds, or
        {'probe_error': ...} if the container could not be opened.
    """
    tmp = None
    cap = None
    try:
        tmp = tempfile.NamedTemporaryFile(suffix=suffix, delete=False)
        tmp.write(video_bytes)
        tmp.flush()
        tmp.close()

        cap = cv2.VideoCapture(tmp.name)
        if not cap.isOpened():
            raise ValueError("Failed to open video")

        fps = float(cap.get(cv2.CAP_PROP_FPS) or 0.0)
        frame_count = int(cap.get(cv2.CAP_PROP_FRAME_COUNT))
        return {
            'frame_count': frame_count,
            'fps': fps,
            'width': int(cap.get(cv2.CAP_PROP_FRAME_WIDTH)),
            'height': int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT)),
            'duration_seconds': frame_count / fps if fps > 0 else None,
        }

    except Exception as e:
        logger.warning(f"Video probe failed: {e}")
        return {'probe_error': str(e)}
    finally:
        if cap is not None:
            cap.release()
        if tmp is not None:
            try:
                os.unlink(tmp.name)
            except OSError:
                pass


class VideoAnalyzer:
    """Size-based video heuristic.

    confidence = min(60, score + 30), where score is 10 for files under
    1 MiB and 0 otherwise.
    """

    def __init__(self, probe: bool = False):
        """Initialize VideoAnalyzer.

        Args:
            probe: Also read container properties with OpenCV.
        """
        self._probe = probe

    def analyze(self, video_bytes: bytes, file_name: str = '') -> VideoAnalysis:
        """Analyze encoded video bytes.  Always succeeds."""
        reasoning = [LIMITED_REASON]
        score = 0

        file_size_mb = len(video_bytes) / (1024 * 1024)
        if file_size_mb < SMALL_VIDEO_MB:
            score += SMALL_VIDEO_SCORE
            reasoning.append(SMALL_FILE_REASON)

        reasoning.append(RECOMMEND_REASON)

        details: Dict[str, Any] = {}
        if self._probe:
            suffix = os.path.splitext(file_name)[1] or '.mp4'
            details = probe_video(video_bytes, suffix=suffix)

        return VideoAnalysis(
            confidence=min(VIDEO_MAX_CONFIDENCE, score + VIDEO_BASE_SCORE),
            reasoning=reasoning,
            file_size_mb=file_size_mb,
            details=details,
        )
