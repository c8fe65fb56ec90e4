"""Type definitions for SynthScan."""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Any, Optional


class MediaType(Enum):
    """Kinds of media the detector accepts."""
    IMAGE = "image"
    VIDEO = "video"


@dataclass(frozen=True)
class ContainerMetadata:
    """Container-level metadata read from the encoded bytes."""
    width: Optional[int] = None
    height: Optional[int] = None
    has_exif: bool = False
    has_icc_profile: bool = False
    format: Optional[str] = None

    @property
    def is_square(self) -> bool:
        return bool(self.width) and self.width == self.height


@dataclass
class AnalysisFactor:
    """Weighted contribution of one image analysis."""
    name: str
    weight: float
    score: float
    reason: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ImageAnalysis:
    """Outcome of the image path.

    A set ``error`` marks a degraded analysis: decoding or one of the
    analyses failed and the confidence is the neutral fallback.
    """
    confidence: float
    reasoning: List[str] = field(default_factory=list)
    factors: List[AnalysisFactor] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def degraded(self) -> bool:
        return self.error is not None


@dataclass
class VideoAnalysis:
    """Outcome of the video heuristic."""
    confidence: float
    reasoning: List[str] = field(default_factory=list)
    file_size_mb: float = 0.0
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DetectionVerdict:
    """Final verdict for one uploaded file."""
    is_ai_generated: bool
    confidence: int
    reasoning: List[str]
    file_name: str
    file_type: MediaType
    factors: List[AnalysisFactor] = field(default_factory=list)
    degraded: bool = False

    def __post_init__(self):
        object.__setattr__(self, "reasoning", list(self.reasoning))
        object.__setattr__(self, "factors", list(self.factors))

    def to_dict(self) -> Dict[str, Any]:
        """Public JSON shape of the verdict."""
        return {
            "isAiGenerated": self.is_ai_generated,
            "confidence": self.confidence,
            "reasoning": list(self.reasoning),
            "fileName": self.file_name,
            "fileType": self.file_type.value,
        }


@dataclass
class DetectionOptions:
    """Options for detection."""
    seed: Optional[int] = None
    probe_video: bool = True
