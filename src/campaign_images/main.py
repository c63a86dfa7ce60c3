"""Main module for the campaign images CLI."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, Optional

from pydantic import ValidationError as ModelValidationError

from .core import (
    DecodeError,
    ImageMetadata,
    ImageProcessingError,
    PipelineConfig,
    ProcessedImageSet,
    SourceImage,
    ValidationError,
    get_logger,
    parse_photo_metadata,
    to_content_fields,
)
from .core.config import DEFAULT_MAX_PIXELS, IMAGE_CONFIGS
from .core.factories import PipelineFactory
from .core.reporting import describe_variants
from .processors import RESIZE_STRATEGIES

VERSION = "0.1.0"


def positive_int(value: str) -> int:
    """argparse type accepting integers greater than zero."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{value}'")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with its subcommands."""
    parser = argparse.ArgumentParser(
        prog="campaign-images",
        description="Campaign Images - resize uploaded photos into large, medium and small variants",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Resize a hero photo into ./out
  campaign-images process portrait.jpg --output-dir out

  # Family photo, resized with a thread pool, with a content record
  campaign-images process family.png --profile family \\
                          --processor multithread --content-record --alt-text "The family"

  # Show the savings of a stored upload
  campaign-images report out/portrait-metadata.json
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    process_parser = subparsers.add_parser(
        "process", help="Resize an image into its three variants"
    )
    process_parser.add_argument("file", type=Path, help="Image file to process")
    process_parser.add_argument(
        "--profile",
        default="hero",
        choices=sorted(IMAGE_CONFIGS),
        help="Resize preset to apply (default: hero)",
    )
    process_parser.add_argument(
        "--processor",
        default="asyncio",
        choices=sorted(RESIZE_STRATEGIES),
        help="How the three resizes are run (default: asyncio)",
    )
    process_parser.add_argument(
        "--mime-type",
        default=None,
        help="Declared MIME type (guessed from the file extension by default)",
    )
    process_parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("."),
        help="Directory the variants and metadata are written to",
    )
    process_parser.add_argument(
        "--max-pixels",
        type=positive_int,
        default=DEFAULT_MAX_PIXELS,
        help=f"Refuse sources larger than this many pixels (default: {DEFAULT_MAX_PIXELS})",
    )
    process_parser.add_argument(
        "--content-record",
        action="store_true",
        help="Also write the photo fields of a content record as JSON",
    )
    process_parser.add_argument(
        "--alt-text", default="", help="Alt text stored in the content record"
    )
    process_parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging"
    )

    report_parser = subparsers.add_parser(
        "report", help="Show sizes and savings of a processed image"
    )
    report_parser.add_argument(
        "metadata", type=Path, help="Metadata JSON or content record JSON"
    )

    subparsers.add_parser("version", help="Show version information")

    return parser


def write_outputs(
    processed: ProcessedImageSet,
    output_dir: Path,
    stem: str,
    alt_text: Optional[str] = None,
) -> Dict[str, Path]:
    """
    Write the encoded variants and their metadata to disk.

    Args:
        processed: Result of the pipeline
        output_dir: Target directory, created if missing
        stem: Base name for the written files
        alt_text: When given, a content record JSON is written as well

    Returns:
        Mapping of output name to written path
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    written: Dict[str, Path] = {}

    for name, variant in processed.variants().items():
        extension = "png" if variant.mime_type == "image/png" else "jpg"
        path = output_dir / f"{stem}-{name}.{extension}"
        path.write_bytes(variant.data)
        written[name] = path

    metadata_path = output_dir / f"{stem}-metadata.json"
    metadata_path.write_text(processed.metadata.model_dump_json(by_alias=True, indent=2))
    written["metadata"] = metadata_path

    if alt_text is not None:
        record_path = output_dir / f"{stem}-content.json"
        record_path.write_text(json.dumps(to_content_fields(processed, alt_text), indent=2))
        written["content"] = record_path

    return written


def run_process(args: argparse.Namespace) -> int:
    """Run the pipeline for the `process` subcommand and return an exit code."""
    logger = get_logger("cli")
    if args.debug:
        logger.setLevel(logging.DEBUG)

    config = PipelineConfig(
        profile=args.profile,
        strategy=args.processor,
        max_pixels=args.max_pixels,
        debug=args.debug,
    )
    pipeline = PipelineFactory.create_pipeline(config)

    try:
        source = SourceImage.from_path(args.file, args.mime_type)
    except OSError as e:
        logger.error(f"Cannot read {args.file}: {e}")
        return 1

    logger.info(f"Processing {source.name} ({source.mime_type}) with profile '{config.profile}'")

    try:
        processed = pipeline.process(source)
    except ValidationError as e:
        logger.error(f"Rejected {source.name}: {e}")
        return 1
    except DecodeError as e:
        logger.error(f"Failed to process image, please try again. ({e})")
        return 1
    except ImageProcessingError as e:
        logger.error(f"Processing failed: {e}")
        return 1

    written = write_outputs(
        processed,
        args.output_dir,
        args.file.stem,
        alt_text=args.alt_text if args.content_record else None,
    )

    for line in describe_variants(processed.metadata):
        logger.info(line)
    for name, path in written.items():
        logger.debug(f"Wrote {name}: {path}")

    return 0


def run_report(args: argparse.Namespace) -> int:
    """Print the size report for stored metadata and return an exit code."""
    logger = get_logger("cli")

    try:
        data = json.loads(args.metadata.read_text())
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Cannot read {args.metadata}: {e}")
        return 1

    try:
        metadata: Optional[ImageMetadata]
        if "photo_metadata" in data:
            metadata = parse_photo_metadata(data)
        else:
            metadata = ImageMetadata.model_validate(data)
    except ModelValidationError as e:
        logger.error(f"Invalid metadata in {args.metadata}: {e}")
        return 1

    if metadata is None:
        print("No photo uploaded")
        return 1

    print(f"{metadata.original_name} (processed {metadata.processed_at.isoformat()})")
    for line in describe_variants(metadata):
        print(line)
    return 0


def main() -> None:
    """
    Entry point for the command-line interface (CLI).

    Dispatches to the `process`, `report` and `version` subcommands and
    exits with status 1 when no subcommand is given.
    """
    parser = build_parser()
    args: argparse.Namespace = parser.parse_args()

    if args.command == "process":
        sys.exit(run_process(args))

    elif args.command == "report":
        sys.exit(run_report(args))

    elif args.command == "version":
        print("Campaign Images CLI")
        print(f"Version {VERSION}")
        print("Resizes uploaded photos into large, medium and small variants")
        sys.exit(0)

    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
