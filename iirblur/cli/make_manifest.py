"""CLI for generating CSV blur manifests."""

import argparse
from pathlib import Path

from iirblur.cli import setup_logging
from iirblur.generators import ManifestGenerator


def main(argv=None):
    parser = argparse.ArgumentParser(description="Generate a CSV manifest for iirblur-batch")
    parser.add_argument("config", type=Path, help="Path to YAML manifest configuration")
    parser.add_argument("-o", "--output", type=Path, required=True, help="Output CSV path")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)")

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    gen = ManifestGenerator(args.config)
    n = gen.generate(args.output)
    print(f"Generated {n} samples -> {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
