"""Tests for VideoAnalyzer."""

import os
import tempfile

import cv2
import numpy as np
import pytest

from synthscan.video import (
    LIMITED_REASON,
    RECOMMEND_REASON,
    SMALL_FILE_REASON,
    VideoAnalyzer,
    probe_video,
)

MIB = 1024 * 1024


def _make_mp4(frames: list, fps: float = 30.0) -> bytes:
    """Write a list of BGR uint8 frames to an MP4 byte buffer via temp file."""
    h, w = frames[0].shape[:2]
    tmp = tempfile.NamedTemporaryFile(suffix=".mp4", delete=False)
    try:
        fourcc = cv2.VideoWriter_fourcc(*"mp4v")
        writer = cv2.VideoWriter(tmp.name, fourcc, fps, (w, h))
        for frame in frames:
            writer.write(frame)
        writer.release()
        tmp.close()
        with open(tmp.name, "rb") as f:
            return f.read()
    finally:
        try:
            os.unlink(tmp.name)
        except OSError:
            pass


def _natural_frames(n: int = 30, w: int = 64, h: int = 48) -> list:
    """Frames with smooth brightness change and noise."""
    frames = []
    for i in range(n):
        brightness = 80 + int(40 * np.sin(2 * np.pi * i / n))
        frame = np.full((h, w, 3), brightness, dtype=np.uint8)
        noise = np.random.randint(-15, 16, (h, w, 3), dtype=np.int16)
        frame = np.clip(frame.astype(np.int16) + noise, 0, 255).astype(np.uint8)
        frames.append(frame)
    return frames


class TestVideoAnalyzerScoring:
    def test_small_file(self):
        result = VideoAnalyzer().analyze(b"\x00" * 1000)
        assert result.confidence == 40
        assert result.reasoning == [LIMITED_REASON, SMALL_FILE_REASON, RECOMMEND_REASON]

    def test_two_mib_file(self):
        result = VideoAnalyzer().analyze(b"\x00" * (2 * MIB))
        assert result.confidence == 30
        assert result.reasoning == [LIMITED_REASON, RECOMMEND_REASON]
        assert result.file_size_mb == 2.0

    def test_exactly_one_mib_is_not_small(self):
        result = VideoAnalyzer().analyze(b"\x00" * MIB)
        assert result.confidence == 30

    def test_empty_buffer(self):
        result = VideoAnalyzer().analyze(b"")
        assert result.confidence == 40

    def test_never_above_sixty(self):
        for size in (0, 10, MIB - 1, MIB, 3 * MIB):
            assert VideoAnalyzer().analyze(b"\x00" * size).confidence <= 60

    def test_no_probe_by_default(self):
        assert VideoAnalyzer().analyze(b"\x00" * 10).details == {}


class TestProbeVideo:
    def test_unreadable_container(self):
        details = probe_video(b"\x00" * 100)
        assert "probe_error" in details

    def test_probe_failure_does_not_change_score(self):
        result = VideoAnalyzer(probe=True).analyze(b"\x00" * 100, "clip.webm")
        assert result.confidence == 40
        assert "probe_error" in result.details

    @pytest.mark.slow
    def test_probe_reads_header(self):
        video_bytes = _make_mp4(_natural_frames(30))
        details = probe_video(video_bytes)
        assert details["width"] == 64
        assert details["height"] == 48
        assert details["frame_count"] > 0
        assert details["fps"] > 0

    @pytest.mark.slow
    def test_probe_attached_to_analysis(self):
        video_bytes = _make_mp4(_natural_frames(10))
        result = VideoAnalyzer(probe=True).analyze(video_bytes, "clip.mp4")
        assert result.details.get("width") == 64
        assert result.confidence == 40
