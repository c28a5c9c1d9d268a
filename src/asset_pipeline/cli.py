"""Command-line interface for the asset pipeline.

This module provides the CLI entry point for building (or reusing) a
concatenated artifact from a list of asset names.
"""

import argparse
import logging
import sys
from pathlib import Path

from .config import DEFAULT_CACHE_DIRECTORY, PipelineConfig, load_config
from .core.errors import AssetPipelineError
from .core.types import BuildResult
from .pipeline import AssetPipeline


def build_config(args: argparse.Namespace) -> PipelineConfig:
    """Build the pipeline configuration from parsed arguments.

    Values from ``--config`` are loaded first; explicit flags override them.

    Raises:
        ConfigurationError: If the configuration file is invalid
        ValueError: If no asset directory is given at all
    """
    if args.config:
        config = load_config(Path(args.config))
    elif args.assets:
        config = PipelineConfig(asset_directory=Path(args.assets))
    else:
        raise ValueError("Either --assets or --config is required")

    if args.assets:
        config.asset_directory = Path(args.assets)
    if args.cache is not None:
        config.cache_directory = args.cache
    if args.fallback:
        config.fallback_directories = [Path(p) for p in args.fallback]
    if args.no_options:
        config.default_options = []
    elif args.option:
        config.default_options = list(args.option)

    return config


def run(config: PipelineConfig, asset_names: list[str]) -> BuildResult:
    """Process one request and report progress on stderr."""
    pipeline = AssetPipeline(config)

    print(f"Resolving {len(asset_names)} assets from: {config.asset_directory}", file=sys.stderr)
    result = pipeline.process(asset_names)

    if result.from_cache:
        print(f"Serving cached artifact: {result.cache_key}", file=sys.stderr)
    else:
        print(f"Built artifact: {result.cache_key} ({len(result.content)} bytes)", file=sys.stderr)

    return result


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the asset pipeline script."""
    parser = argparse.ArgumentParser(
        description="Concatenate assets into a cached artifact",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Build public/js/cache/jquery+app.js
  asset-pipeline --assets public/js jquery.js app.js

  # Search vendor/ for assets missing from public/js, with an option token
  asset-pipeline --assets public/js --fallback vendor --option min jquery.js app.js

  # Use a configuration file and print the artifact content
  asset-pipeline --config pipeline.json --print jquery.js app.js > bundle.js
        """,
    )

    parser.add_argument("names", nargs="+", metavar="NAME", help="Asset names in order")

    parser.add_argument("--assets", help="Primary asset directory")

    parser.add_argument(
        "--cache",
        help=f"Cache directory, relative to the asset directory (default: {DEFAULT_CACHE_DIRECTORY})",
    )

    parser.add_argument(
        "--fallback",
        action="append",
        default=[],
        help="Fallback directory searched recursively (repeatable, searched in order)",
    )

    options_group = parser.add_mutually_exclusive_group()

    options_group.add_argument(
        "--option",
        action="append",
        default=[],
        help="Option token prefixed to the cache key (repeatable, order matters)",
    )

    options_group.add_argument(
        "--no-options",
        action="store_true",
        help="Ignore default options from the configuration file",
    )

    parser.add_argument("--config", help="JSON configuration file")

    parser.add_argument(
        "--print",
        dest="print_content",
        action="store_true",
        help="Write the artifact content to stdout instead of its location",
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = build_config(args)

        if not config.asset_directory.is_dir():
            print(f"Error: Asset directory does not exist: {config.asset_directory}", file=sys.stderr)
            sys.exit(1)

        result = run(config, args.names)

    except (AssetPipelineError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.print_content:
        sys.stdout.buffer.write(result.content)
        sys.stdout.flush()
    else:
        print(result.location)


if __name__ == "__main__":
    main()
