"""Command-line interface for the quote resolution pipeline."""

import argparse
import logging
import sys
from pathlib import Path

from .config import DEFAULT_DCS_URL, Config, SourceConfig
from .errors import DocumentUnavailable
from .pipeline import QuotesPipeline


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Convert gloss-translation quotes in a TSV7 notes table to original-language quotes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Using a config file
  origl-quotes --config config.yaml

  # Fetch documents from the content service
  origl-quotes --book TIT --input tn_TIT.tsv --output tn_TIT.origl.tsv

  # Use USFM files from a local directory (<dir>/en_ult/57-TIT.usfm, ...)
  origl-quotes --book TIT --input tn_TIT.tsv --output out.tsv --local-dir ./usfm
        """,
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--book",
        help="Book code, e.g. TIT or GEN",
    )
    parser.add_argument(
        "--input",
        type=Path,
        help="Input TSV7 notes table",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Output TSV7 notes table",
    )
    parser.add_argument(
        "--errors",
        type=Path,
        help="Write one line per unresolved quote to this file",
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--dcs-url",
        default=DEFAULT_DCS_URL,
        help=f"Content service base URL (default: {DEFAULT_DCS_URL})",
    )
    source.add_argument(
        "--local-dir",
        type=Path,
        help="Read USFM files from this directory instead of the content service",
    )

    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable the progress bar",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> Config:
    """Create configuration from command-line arguments."""
    if not args.book:
        raise ValueError("--book is required when not using --config")
    if not args.input:
        raise ValueError("--input is required when not using --config")
    if not args.output:
        raise ValueError("--output is required when not using --config")

    if args.local_dir:
        source = SourceConfig(kind="local", local_dir=args.local_dir)
    else:
        source = SourceConfig(kind="dcs", dcs_url=args.dcs_url)

    return Config(
        book=args.book,
        input_path=args.input,
        output_path=args.output,
        errors_path=args.errors,
        show_progress=not args.no_progress,
        source=source,
    )


def config_from_file(config_path: Path) -> Config:
    """Load configuration from YAML file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
    return Config.from_yaml(config_path)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        if args.config:
            config = config_from_file(args.config)
        else:
            config = config_from_args(args)

        pipeline = QuotesPipeline(config)
        result = pipeline.run()

        print(f"\nResolved {result.counts.passed} quotes, {result.counts.failed} not found")
        print(f"Results saved to: {config.output_path}")
        return 0

    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except DocumentUnavailable as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logging.exception("Pipeline failed")
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
