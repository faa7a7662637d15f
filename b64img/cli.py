"""
b64img CLI.

Extract base64 encoded images from JSON or text into files, encode image
files to base64 sidecars, decode sidecars back to images, or download an
image from a URL and encode it.

Examples:
    b64img s.json | jq                 Process JSON file, output compact JSON
    b64img --pretty s.json             Process JSON file, output pretty JSON
    b64img image.png                   Encode image to base64 (same directory)
    b64img -o /tmp image.png           Encode image to base64 (given directory)
    b64img image.mime.b64              Decode a sidecar back to an image
    b64img document.md                 Process markdown/text file
    b64img http://example.com/pic.jpg  Download and encode image from URL
    cat s.json | b64img -f | jq        Process stdin with pretty output
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from b64img import __version__
from b64img.config import get_config
from b64img.dispatch import UrlResult, classify, run
from b64img.errors import B64ImgError
from b64img.extract import DocumentResult
from b64img.log import setup_logging
from b64img.transcode import DecodeResult, EncodeResult


def prompt_overwrite(path: Path) -> bool:
    """Ask on the terminal whether an existing file may be overwritten."""
    try:
        response = input(f"File '{path}' already exists. Overwrite? (y/N): ")
    except EOFError:
        return False
    return response.strip().lower() in ("y", "yes")


def print_encoded(result: EncodeResult) -> None:
    print("Generated:")
    print(f"  {result.raw_path}")
    print(f"  {result.mime_path}")


def print_document(result: DocumentResult) -> None:
    text = result.text + "\n" if result.is_json else result.text
    try:
        sys.stdout.write(text)
    except UnicodeEncodeError:
        # text read from undecodable input keeps its original bytes
        sys.stdout.flush()
        sys.stdout.buffer.write(text.encode("utf-8", errors="surrogateescape"))
        sys.stdout.buffer.flush()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="b64img",
        description=(
            "Extract base64 encoded images from text or JSON to the decoded/ directory, "
            "encode image files to base64, or download and encode images from a URL."
        ),
        epilog=(
            "Supported inputs: JSON with base64 images, text with data URLs, "
            "Markdown with embedded images, image files (PNG, JPEG, GIF, WebP, BMP, SVG), "
            ".b64 files and HTTP/HTTPS image URLs."
        ),
    )
    parser.add_argument(
        "target",
        nargs="?",
        help="Input file or URL to process (reads from stdin if omitted)",
    )
    parser.add_argument(
        "-p",
        "--pretty",
        "-f",
        "--format-json",
        dest="pretty",
        action="store_true",
        help="Pretty print JSON output (JSON input only)",
    )
    parser.add_argument(
        "-o",
        "--output",
        metavar="DIR",
        default=None,
        help="Output directory for generated files",
    )
    parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Overwrite existing decoded images without prompting",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print progress information",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = get_config(
            output_dir=args.output,
            pretty=args.pretty,
            verbose=args.verbose,
            assume_yes=args.yes,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging("b64img", config.log_level)

    try:
        kind = classify(args.target)
        result = run(kind, config, confirm_overwrite=prompt_overwrite)
    except B64ImgError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("Aborted.", file=sys.stderr)
        return 130

    if isinstance(result, UrlResult):
        print_encoded(result.encoded)
    elif isinstance(result, EncodeResult):
        print_encoded(result)
    elif isinstance(result, DecodeResult):
        print(f"Decoded image saved to: {result.path}")
    else:
        print_document(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
