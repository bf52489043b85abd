#!/usr/bin/env python3
"""
raykernel - sampling diagnostics

Draws samples from one of the kernel's distributions, prints them as
"x y z" lines and optionally reports how their statistics compare with
the analytic values.
"""

import argparse
import logging
import sys
import time
from pathlib import Path

from raykernel.vec3 import Vec3
from raykernel.diagnostics import (
    Distribution, SampleSettings, draw_samples, summarize, write_samples
)

logger = logging.getLogger("raykernel")


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the command line."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(name)s [%(levelname)s] %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='raykernel - sample the ray tracing distributions',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --distribution unit_sphere --count 10
  python main.py --distribution hemisphere --normal 0 0 1 --count 5000 --stats
  python main.py --distribution unit_disk --seed 7 --output output/disk.txt
        '''
    )

    parser.add_argument('--distribution', type=str, default='unit_sphere',
                        choices=[d.value for d in Distribution],
                        help='Distribution to sample (default: unit_sphere)')
    parser.add_argument('--count', type=int, default=1000, help='Number of samples (default: 1000)')
    parser.add_argument('--seed', type=int, default=None, help='Random seed (default: OS entropy)')
    parser.add_argument('--normal', type=float, nargs=3, default=[0.0, 1.0, 0.0],
                        metavar=('X', 'Y', 'Z'), help='Hemisphere normal (default: 0 1 0)')
    parser.add_argument('--output', type=str, default=None,
                        help='Write samples to this file instead of stdout')
    parser.add_argument('--stats', action='store_true', help='Report statistics instead of samples')
    parser.add_argument('--log-level', type=str, default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging verbosity (default: INFO)')
    return parser


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        settings = SampleSettings(
            distribution=args.distribution,
            count=args.count,
            seed=args.seed,
            normal=Vec3(*args.normal)
        )
    except ValueError as e:
        logger.error("%s", e)
        return 1

    start_time = time.time()
    samples = draw_samples(settings)
    logger.info("Sampled in %.3fs", time.time() - start_time)

    if args.stats:
        stats = summarize(samples, settings.distribution, settings.normal.unit())
        print(f"Samples: {stats.count}")
        print(f"Mean |p|^2: {stats.mean_length_squared:.6f} (expected {stats.expected_length_squared:.6f})")
        print(f"Max |p|^2: {stats.max_length_squared:.6f}")
        if stats.min_normal_dot is not None:
            print(f"Min dot with normal: {stats.min_normal_dot:.6f}")
        return 0

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w') as f:
            written = write_samples(samples, f)
        logger.info("Wrote %d samples to %s", written, output_path)
    else:
        write_samples(samples, sys.stdout)

    return 0


if __name__ == '__main__':
    sys.exit(main())
