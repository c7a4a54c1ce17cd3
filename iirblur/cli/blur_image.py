"""CLI for blurring a single image."""

import argparse
import sys
from pathlib import Path

from iirblur import BlurConfig, BlurEngine
from iirblur.cli import setup_logging
from iirblur.imaging import blur_file


def main(argv=None):
    parser = argparse.ArgumentParser(description="Blur an image with the recursive Gaussian filter")
    parser.add_argument("input", type=Path, help="Input image")
    parser.add_argument("-o", "--output", type=Path, required=True, help="Output image")
    parser.add_argument("-c", "--config", type=Path, default=None, help="YAML configuration file")
    parser.add_argument("--sigma-x", type=float, default=None, help="Horizontal sigma (0 disables)")
    parser.add_argument("--sigma-y", type=float, default=None, help="Vertical sigma (0 disables)")
    parser.add_argument("--steps", type=int, default=None, help="Forward/backward sweep pairs per axis")
    parser.add_argument("--device", type=str, default=None, help="Torch device")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)")

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        cfg = BlurConfig.from_yaml(args.config) if args.config else BlurConfig()
        if args.steps is not None:
            cfg.steps = args.steps
        if args.device is not None:
            cfg.device = args.device
        cfg.validate()
        params = cfg.params(args.sigma_x, args.sigma_y)
        blur_file(args.input, args.output, params, engine=BlurEngine(cfg))
    except (ValueError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    print(f"Blurred {args.input} (sigma_x={params.sigma_x}, sigma_y={params.sigma_y}, steps={params.steps}) -> {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
