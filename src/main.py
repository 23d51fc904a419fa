"""
Command-line entry point for parsing board screenshots.

Usage:
    python -m src.main screenshot.png --config config.yaml
    python -m src.main screenshot.png --query "SCRABBLE EXTRACT" --verbose
    python -m src.main --text model_output.txt
    python -m src.main --text model_output.txt --legacy
"""

import argparse
import json
import logging
import mimetypes
import sys
from pathlib import Path
from typing import Any, Dict

import yaml

from .board_state import ErrorCode, ParseResult, build_summary, parse_legacy_model_output, parse_model_output
from .extraction import ExtractionConfig, ExtractionError, VisionClient


EXIT_OK = 0
EXIT_EXTRACTION_FAILED = 1
EXIT_PARSE_FAILED = 2


def load_config(config_path: str) -> ExtractionConfig:
    """Load extraction configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return ExtractionConfig(**data)


def build_response(result: ParseResult) -> Dict[str, Any]:
    """Shape a parse result the way API clients expect it: board plus summary, or the error."""
    payload = result.to_payload()
    if result.ok:
        payload["summary"] = build_summary(result.board).model_dump(by_alias=True)
    return payload


def exit_code_for(result: ParseResult) -> int:
    # Flagged content still counts as a successful request
    if result.ok or result.error.code is ErrorCode.SUSPICIOUS:
        return EXIT_OK
    return EXIT_PARSE_FAILED


def guess_mime_type(path: Path) -> str:
    mime_type, _ = mimetypes.guess_type(path.name)
    return mime_type or "application/octet-stream"


def main():
    parser = argparse.ArgumentParser(
        description="Parse a word-puzzle screenshot into a validated board",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  model: gpt-4o
  temperature: 0.0
  max_tokens: 4096
  query: SCRABBLE EXTRACT_BOARD_STATE
        """
    )
    parser.add_argument(
        "image",
        nargs="?",
        help="Path to a PNG, JPEG or WebP screenshot (not needed with --text)"
    )
    parser.add_argument(
        "--config", "-c",
        help="Path to YAML extraction configuration"
    )
    parser.add_argument(
        "--query", "-q",
        help="Query sent with the screenshot (overrides the config)"
    )
    parser.add_argument(
        "--text", "-t",
        help="Parse a saved model response instead of calling the model"
    )
    parser.add_argument(
        "--legacy",
        action="store_true",
        help="Parse the saved response in the legacy letters/solvedWords/unsolvedSlots format"
    )
    parser.add_argument(
        "--output", "-o",
        help="Write the JSON response to this file instead of stdout"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log debug output to stderr"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.text:
        try:
            model_text = Path(args.text).read_text()
        except OSError as e:
            print(f"Error reading {args.text}: {e}", file=sys.stderr)
            return EXIT_EXTRACTION_FAILED
    else:
        if not args.image:
            print("Error: screenshot path required (or use --text)", file=sys.stderr)
            return EXIT_EXTRACTION_FAILED

        try:
            config = load_config(args.config) if args.config else ExtractionConfig()
        except Exception as e:
            print(f"Error loading config: {e}", file=sys.stderr)
            return EXIT_EXTRACTION_FAILED

        image_path = Path(args.image)
        try:
            client = VisionClient.from_config(config)
            model_text = client.extract(
                image_path.read_bytes(),
                guess_mime_type(image_path),
                query=args.query,
            )
        except ExtractionError as e:
            print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
            if e.details is not None:
                print(f"Details: {e.details}", file=sys.stderr)
            return EXIT_EXTRACTION_FAILED
        except OSError as e:
            print(f"Error reading {args.image}: {e}", file=sys.stderr)
            return EXIT_EXTRACTION_FAILED

    if args.legacy:
        result = parse_legacy_model_output(model_text)
    else:
        result = parse_model_output(model_text)

    output = json.dumps(build_response(result), indent=2)
    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(output + "\n")
        if args.verbose:
            print(f"Response saved to: {output_path}")
    else:
        print(output)

    return exit_code_for(result)


if __name__ == "__main__":
    sys.exit(main())
