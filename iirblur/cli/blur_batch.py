"""CLI for blurring images listed in a CSV manifest."""

import argparse
import sys
from pathlib import Path

from iirblur import BlurConfig
from iirblur.cli import setup_logging
from iirblur.generators import BatchBlurGenerator


def main(argv=None):
    parser = argparse.ArgumentParser(description="Blur images from a CSV manifest")
    parser.add_argument("csv", type=Path, help="Path to CSV manifest")
    parser.add_argument("-i", "--input", type=Path, required=True, help="Input images root directory")
    parser.add_argument("-o", "--output", type=Path, required=True, help="Output images root directory")
    parser.add_argument("-c", "--config", type=Path, default=None, help="YAML configuration file")
    parser.add_argument("-w", "--workers", type=int, default=None, help="Number of parallel workers")
    parser.add_argument("--device", type=str, default=None, help="Torch device for sequential runs")
    parser.add_argument("--no-skip", action="store_true", help="Don't skip existing outputs")
    parser.add_argument("--no-progress", action="store_true", help="Disable progress bar")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)")

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        cfg = BlurConfig.from_yaml(args.config) if args.config else BlurConfig()
        if args.device is not None:
            cfg.device = args.device
        if args.workers is not None:
            cfg.workers = args.workers
        if args.no_skip:
            cfg.skip_existing = False
        gen = BatchBlurGenerator(args.csv, args.input, args.output, cfg)
    except (ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    results = gen.generate(progress=not args.no_progress)

    print(f"\nBlur complete:")
    print(f"  Total samples: {results['total']}")
    print(f"  Processed: {results['processed']}")
    print(f"  Skipped: {results['skipped']}")
    print(f"  Errors: {len(results['errors'])}")

    if results['errors']:
        print("\nErrors:")
        for err in results['errors'][:10]:
            print(f"  {err['sample_id']}: {err['error']}")
        if len(results['errors']) > 10:
            print(f"  ... and {len(results['errors']) - 10} more")

    return 1 if results['errors'] else 0


if __name__ == "__main__":
    raise SystemExit(main())
