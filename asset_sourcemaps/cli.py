"""Command line interface for minifying and source-mapping compiled assets."""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from . import __version__
from .config import MINIFIERS, PipelineConfig
from .errors import InvalidAssetsDirectoryError
from .pipeline import AssetPipeline
from .report import RunReport

logger = logging.getLogger(__name__)


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def build_parser(defaults: PipelineConfig | None = None) -> argparse.ArgumentParser:
    defaults = defaults or PipelineConfig()
    parser = argparse.ArgumentParser(
        prog="asset-sourcemaps",
        usage="%(prog)s [options] /path/to/project/root",
        description=(
            "Minify the compiled JavaScript under <root>/public/<assets folder>, "
            "write a source map next to each file and gzip the result. "
            "Non-fingerprinted copies reuse the output of their fingerprinted twin."
        ),
    )
    parser.add_argument("root", nargs="?", help="Project root containing the public/ directory")
    parser.add_argument(
        "-t",
        "--threads",
        type=positive_int,
        default=defaults.concurrency,
        help=f"number of files processed concurrently (default: {defaults.concurrency})",
    )
    parser.add_argument(
        "-Z",
        "--no-gzip",
        dest="gzip",
        action="store_false",
        default=defaults.gzip,
        help="do not gzip files",
    )
    parser.add_argument(
        "-a",
        "--assets-folder",
        default=defaults.assets_folder,
        help=f"folder below public/ holding compiled assets (default: {defaults.assets_folder})",
    )
    parser.add_argument(
        "--minifier",
        choices=MINIFIERS,
        default=defaults.minifier,
        help=f"minifier backend (default: {defaults.minifier})",
    )
    parser.add_argument(
        "--terser-bin",
        default=defaults.terser_bin,
        help="terser executable used with --minifier terser",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log debug output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def format_summary(report: RunReport) -> str:
    summary = report.summarize()
    return (
        f"Total: {summary['total']} files, "
        f"Processed: {summary['processed']}, "
        f"Reused: {summary['reused']}, "
        f"Already processed: {summary['already_processed']}, "
        f"Failed: {summary['failed']}"
    )


def main(argv: list[str] | None = None) -> int:
    try:
        defaults = PipelineConfig.from_env()
    except ValueError as exc:
        print(f"Invalid environment configuration: {exc}", file=sys.stderr)
        return 2
    parser = build_parser(defaults)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    if not args.root:
        parser.print_help()
        return 1

    config = PipelineConfig(
        concurrency=args.threads,
        gzip=args.gzip,
        assets_folder=args.assets_folder,
        minifier=args.minifier,
        terser_bin=args.terser_bin,
    )
    pipeline = AssetPipeline(config)
    try:
        report = asyncio.run(pipeline.run(Path(args.root)))
    except InvalidAssetsDirectoryError as exc:
        logger.error("%s", exc)
        parser.print_help()
        return 1

    print(format_summary(report))
    if report.failures:
        print("\nFailed files:")
        for outcome in report.failures:
            print(f"  {outcome.path}: {outcome.error}")
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
