#!/usr/bin/env python3
"""Compute NPP for a synthetic 16-day time series and print a summary.

The grids stand in for already-reprojected MODIS-style inputs: NDVI,
daytime LST in degrees Celsius, accumulated solar radiation in MJ/m2,
and a water-stress index We = 0.5 + 0.5 * ET / PET.

Usage:
    python run_example.py --frames 4 --size 50 --workers 2

Example:
    python run_example.py --frames 4 --csv npp_summary.csv
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import numpy as np

# Check imports before running
try:
    import nppmodel
except ImportError:
    print("Error: nppmodel not installed. Run: pip install nppmodel")
    sys.exit(1)

CONSTANT_TOPT = 21.66
CONSTANT_LUEMAX = 0.72


def synthetic_inputs(
    frames: int,
    size: int,
    seed: int = 0,
) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Build four aligned ``(frames, size, size)`` stacks with plausible ranges."""
    rng = np.random.default_rng(seed)
    shape = (frames, size, size)

    ndvi = rng.uniform(0.2, 1.0, shape)
    lst = rng.uniform(20.0, 35.0, shape)
    sol = rng.uniform(315.0, 415.0, shape)
    et = rng.uniform(10.0, 60.0, shape)
    pet = et + rng.uniform(0.0, 40.0, shape)
    we = et / pet * 0.5 + 0.5

    # Mark a water body as no data in every NDVI frame.
    ndvi[:, : size // 10, : size // 10] = np.nan
    return ndvi, lst, sol, we


def main() -> None:
    """Entry point for the example script."""
    parser = argparse.ArgumentParser(
        description="Compute NPP for a synthetic time series",
    )
    parser.add_argument(
        "--frames",
        type=int,
        default=4,
        help="Number of observation periods (default: 4)",
    )
    parser.add_argument(
        "--size",
        type=int,
        default=50,
        help="Grid width and height in pixels (default: 50)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Threads used to evaluate frames (default: 1)",
    )
    parser.add_argument(
        "--csv",
        type=str,
        default=None,
        help="Write the per-frame summary to this CSV file (optional)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show library log messages",
    )

    args = parser.parse_args()

    if args.frames < 1 or args.size < 1:
        print("Error: --frames and --size must be at least 1.")
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = nppmodel.Config(max_workers=args.workers)
    ndvi, lst, sol, we = synthetic_inputs(args.frames, args.size)

    print("===== single-frame example =====")
    single = nppmodel.compute_single(
        ndvi[0], lst[0], sol[0], we[0], CONSTANT_TOPT, CONSTANT_LUEMAX, config=config
    )
    if isinstance(single, nppmodel.Diagnostic):
        print(single)
        sys.exit(1)
    print(single)

    print("===== time-series example =====")
    series = nppmodel.compute_batch(
        ndvi, lst, sol, we, CONSTANT_TOPT, CONSTANT_LUEMAX, config=config
    )
    if isinstance(series, nppmodel.Diagnostic):
        print(series)
        sys.exit(1)
    summary = series.to_dataframe()
    print(summary[["index", "valid_pixel_count", "mean_npp", "min_npp", "max_npp"]])

    if args.csv:
        output_path = Path(args.csv)
        summary.to_csv(output_path, index=False)
        print(f"Summary written to {output_path}")


if __name__ == "__main__":
    main()
