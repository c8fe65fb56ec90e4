"""Command-line interface for SynthScan."""
import argparse
import json
import logging
import mimetypes
import sys
from pathlib import Path
from typing import Optional

from .detect import Detector
from .types import DetectionOptions

VALID_IMAGE_TYPES = ['image/jpeg', 'image/jpg', 'image/png', 'image/webp', 'image/gif']
VALID_VIDEO_TYPES = ['video/mp4', 'video/webm', 'video/ogg', 'video/quicktime']
MAX_UPLOAD_BYTES = 50 * 1024 * 1024

EXIT_AUTHENTIC = 0
EXIT_AI_GENERATED = 1
EXIT_USAGE = 2


class UploadError(ValueError):
    """Upload rejected before detection."""


def sniff_mime_type(content: bytes) -> Optional[str]:
    """Detect a supported MIME type from magic numbers."""
    if len(content) < 4:
        return None

    # JPEG
    if content[0:2] == b'\xff\xd8':
        return 'image/jpeg'

    # PNG
    if content[0:4] == b'\x89PNG':
        return 'image/png'

    # GIF
    if content[0:4] == b'GIF8':
        return 'image/gif'

    # WebP
    if content[0:4] == b'RIFF' and len(content) > 11 and content[8:12] == b'WEBP':
        return 'image/webp'

    # MP4 / QuickTime (ftyp box)
    if content[4:8] == b'ftyp':
        if content[8:12] == b'qt  ':
            return 'video/quicktime'
        return 'video/mp4'

    # WebM (EBML header)
    if content[0:4] == b'\x1a\x45\xdf\xa3':
        return 'video/webm'

    # Ogg
    if content[0:4] == b'OggS':
        return 'video/ogg'

    return None


def resolve_mime_type(content: bytes, file_name: str, declared: Optional[str] = None) -> Optional[str]:
    """Declared type first, then magic numbers, then the file extension."""
    if declared:
        return declared.lower()
    return sniff_mime_type(content) or mimetypes.guess_type(file_name)[0]


def validate_upload(content: bytes, mime_type: Optional[str]) -> None:
    """Reject uploads the detector must not see.

    Raises:
        UploadError: on an unsupported MIME type or an oversized payload.
    """
    if mime_type not in VALID_IMAGE_TYPES and mime_type not in VALID_VIDEO_TYPES:
        raise UploadError('Invalid file type. Please upload an image or video.')
    if len(content) > MAX_UPLOAD_BYTES:
        raise UploadError('File size exceeds 50MB limit')


def detect_command(args):
    """Detect AI-generated content command."""
    content_path = Path(args.file)
    if not content_path.exists():
        print(f"Error: File not found: {args.file}", file=sys.stderr)
        sys.exit(EXIT_USAGE)

    content = content_path.read_bytes()
    mime_type = resolve_mime_type(content, content_path.name, getattr(args, "mime_type", None))

    try:
        validate_upload(content, mime_type)
    except UploadError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_USAGE)

    options = DetectionOptions(
        seed=getattr(args, "seed", None),
        probe_video=not getattr(args, "no_probe", False),
    )
    verdict = Detector(options).detect(content, mime_type, content_path.name)

    if args.json:
        print(json.dumps(verdict.to_dict(), indent=2))
    else:
        print(f"\n{'='*60}")
        print("  AI Content Detection Report")
        print(f"{'='*60}\n")
        print(f"File: {content_path.resolve()}")
        print(f"Type: {verdict.file_type.value} ({mime_type})")
        print(f"Verdict: {'LIKELY AI-GENERATED' if verdict.is_ai_generated else 'LIKELY AUTHENTIC'}")
        print(f"Confidence: {verdict.confidence}%")

        if verdict.reasoning:
            print("\nReasoning:")
            for reason in verdict.reasoning:
                print(f"  • {reason}")

        if args.verbose and verdict.factors:
            print("\nFactors:")
            for factor in verdict.factors:
                print(f"  {factor.name}: {factor.score:g}/{factor.weight:g}")

        print(f"\n{'='*60}\n")

    sys.exit(EXIT_AI_GENERATED if verdict.is_ai_generated else EXIT_AUTHENTIC)


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="synthscan",
        description="CLI tool for heuristic AI-generated content detection"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Detect command
    detect_parser = subparsers.add_parser("detect", help="Detect AI-generated images and videos")
    detect_parser.add_argument("file", help="Image or video file to analyze")
    detect_parser.add_argument("-m", "--mime-type", help="Declared MIME type (sniffed from content if omitted)")
    detect_parser.add_argument("-j", "--json", action="store_true", help="Output as JSON")
    detect_parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")
    detect_parser.add_argument("-s", "--seed", type=int, help="Seed for pixel sampling (reproducible scores)")
    detect_parser.add_argument("--no-probe", action="store_true", help="Skip the video container probe")
    detect_parser.set_defaults(func=detect_command)

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(EXIT_USAGE)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    args.func(args)


if __name__ == "__main__":
    main()
