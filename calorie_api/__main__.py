"""Analyze a food photo from the command line.

    python -m calorie_api photo.jpg
    python -m calorie_api photo.png --raw
"""
from __future__ import annotations

import argparse
import base64
import json
import mimetypes
import sys
from pathlib import Path

from calorie_api.config import configure_logging, load_settings
from calorie_api.errors import AnalyzeError
from calorie_api.services.image_relay import ImageRelay
from calorie_api.services.result_interpreter import interpret


def to_data_uri(source: str) -> str:
    """Turn a local path into a data-URI; data-URIs pass through."""
    if source.startswith("data:"):
        return source
    path = Path(source).expanduser()
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    mime = mimetypes.guess_type(str(path))[0] or "image/jpeg"
    b64 = base64.b64encode(path.read_bytes()).decode()
    return f"data:{mime};base64,{b64}"


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Estimate calories for a food photo")
    parser.add_argument("image", help="Path to an image file or a data-URI")
    parser.add_argument("--raw", action="store_true", help="Print the untouched Gemini response")
    args = parser.parse_args(argv)

    settings = load_settings()
    configure_logging(settings.log_level)

    try:
        image = to_data_uri(args.image)
        raw = ImageRelay(settings).analyze(image)
    except FileNotFoundError as e:
        print(e, file=sys.stderr)
        return 1
    except AnalyzeError as e:
        print(json.dumps(e.to_body(), ensure_ascii=False, indent=2), file=sys.stderr)
        return 1

    if args.raw:
        print(json.dumps(raw, ensure_ascii=False, indent=2))
        return 0

    result = interpret(raw)
    if result.parsed:
        print(json.dumps([i.model_dump() for i in result.items], ensure_ascii=False, indent=2))
    else:
        print(result.raw_text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
