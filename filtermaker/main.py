"""
Filter Maker - Main Entry Point

Pass an image and any number of filter names, which may repeat and are
applied in sequence. A new image is written next to the source, named after
the filters in use: `filtermaker photo.jpg invert grayscale` writes
`photo_invert_grayscale.jpg`.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .core import ExportSpec, RecipeError, UsageError
from .logging_config import setup_logging
from .oiio import OiioAdapter
from .processing import ProcessingPipeline, get_all_categories, get_filters_by_category
from .services import ExportRunner, RecipeSerializer, Settings

SYNOPSIS = "filtermaker <image> [<filter1> [<filter2> [...]]]"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="filtermaker",
        usage=f"{SYNOPSIS} [options]",
        description="Apply a chain of image filters and write the result to a new file.",
    )
    parser.add_argument("image", nargs="?", help="Source image")
    parser.add_argument(
        "filters",
        nargs="*",
        help="Filter names, applied left to right (case insensitive)",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for the result (default: beside the source image)",
    )
    parser.add_argument(
        "--extension",
        default=None,
        help="Output file extension (default from settings: jpg)",
    )
    parser.add_argument(
        "--quality",
        type=int,
        default=None,
        help="JPEG quality 1-100 (default from settings: 90)",
    )
    parser.add_argument("--settings", default=None, help="Path to a settings.ini file")
    parser.add_argument(
        "--recipe",
        default=None,
        help="JSON recipe whose filters run before the ones on the command line",
    )
    parser.add_argument(
        "--save-recipe",
        default=None,
        help="Save the resolved filter chain as a JSON recipe once the export succeeds",
    )
    parser.add_argument(
        "--list-filters",
        action="store_true",
        help="List the available filters and exit",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate and print the output path without writing anything",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log warnings and errors")
    return parser


def list_filters() -> None:
    """Print the filters grouped by category."""
    for category in get_all_categories():
        print(f"{category}:")
        for f in get_filters_by_category(category):
            print(f"  {f.filter_id:<14} {f.description}")


def build_pipeline(args: argparse.Namespace) -> ProcessingPipeline:
    """Recipe filters first, then the command-line filters."""
    if not args.image:
        raise UsageError(f"Syntax error, the correct syntax is: {SYNOPSIS}")

    pipeline = ProcessingPipeline()
    if args.recipe:
        pipeline.extend(RecipeSerializer.load_from_file(args.recipe))
    pipeline.extend(ProcessingPipeline.from_names(args.filters))
    return pipeline


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = Settings(args.settings)
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    else:
        level = settings.get_log_level()
    logger = setup_logging(level)
    logger.debug(f"OpenImageIO version: {OiioAdapter.get_oiio_version()}")

    if args.list_filters:
        list_filters()
        return 0

    try:
        pipeline = build_pipeline(args)
    except UsageError as e:
        parser.print_usage(sys.stderr)
        print(e.message, file=sys.stderr)
        return 2
    except RecipeError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    export_spec = ExportSpec(
        source_path=args.image,
        filter_names=pipeline.filter_ids(),
        output_dir=args.output_dir or settings.get_output_dir(),
        extension=(args.extension or settings.get_extension()).lstrip("."),
        quality=args.quality if args.quality is not None else settings.get_quality(),
    )

    result = ExportRunner(export_spec, pipeline).run(dry_run=args.dry_run)
    if not result.success:
        print(f"Error: {result.message}", file=sys.stderr)
        return 1

    if args.save_recipe:
        try:
            RecipeSerializer.save_to_file(pipeline, args.save_recipe)
        except RecipeError as e:
            print(f"Error: {e.message}", file=sys.stderr)
            return 1

    print(result.output_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
