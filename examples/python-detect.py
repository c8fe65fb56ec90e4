import os
import sys
import json
from pathlib import Path

# Add python directory to path to import synthscan
sys.path.append(os.path.join(os.path.dirname(__file__), '../python'))

from synthscan import Detector, DetectionOptions
from synthscan.cli import UploadError, resolve_mime_type, validate_upload


def main():
    print("--- Testing AI Content Detection (Python) ---")

    if len(sys.argv) < 2:
        print("Usage: python-detect.py FILE [FILE ...]")
        sys.exit(1)

    detector = Detector(DetectionOptions(seed=0))

    for arg in sys.argv[1:]:
        path = Path(arg)
        if not path.exists():
            print(f"Not found: {path}")
            continue

        content = path.read_bytes()
        mime_type = resolve_mime_type(content, path.name)
        try:
            validate_upload(content, mime_type)
        except UploadError as e:
            print(f"Skipping {path.name}: {e}")
            continue

        print(f"\nAnalyzing: {path.name} ({mime_type}, {len(content)} bytes)")
        verdict = detector.detect(content, mime_type, path.name)

        print(f"AI-generated: {verdict.is_ai_generated}")
        print(f"Confidence: {verdict.confidence}%")
        for factor in verdict.factors:
            print(f"  {factor.name}: {factor.score}/{factor.weight} {json.dumps(factor.details)}")
        print(json.dumps(verdict.to_dict(), indent=2))


if __name__ == "__main__":
    main()
