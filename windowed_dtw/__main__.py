#!/usr/bin/env python3
"""Command-line interface for windowed-dtw."""
import argparse
import json
import logging
import sys
import typing

import numpy as np

from . import align, pairwise_distances
from .const import (
    DEFAULT_DISTANCE_FUNC,
    DEFAULT_WINDOW_FRAC,
    InternalError,
    InvalidArgumentError,
)

_LOGGER = logging.getLogger("windowed-dtw")

# -----------------------------------------------------------------------------


def main(argv: typing.Optional[typing.List[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(prog="windowed-dtw")
    parser.add_argument(
        "sequence",
        nargs="*",
        help="Files with whitespace-separated numbers (use - for stdin)",
    )
    parser.add_argument(
        "--window-frac",
        type=float,
        default=DEFAULT_WINDOW_FRAC,
        help=f"Band size as a fraction (0-1) of the second sequence's length (default: {DEFAULT_WINDOW_FRAC})",
    )
    parser.add_argument(
        "--distance-func",
        default=DEFAULT_DISTANCE_FUNC,
        help=f"scipy cdist metric for element distance (default: {DEFAULT_DISTANCE_FUNC})",
    )
    parser.add_argument(
        "--path", action="store_true", help="Include optimal warping path in output"
    )
    parser.add_argument(
        "--buffer",
        action="store_true",
        help="Include flat [N, i0, j0, ...] path buffer in output",
    )
    parser.add_argument(
        "--pairwise",
        action="store_true",
        help="Compute distances between all pairs of sequences",
    )
    parser.add_argument(
        "--workers",
        type=int,
        help="Number of threads for pairwise distances (default: automatic)",
    )
    parser.add_argument(
        "--debug", action="store_true", help="Print DEBUG messages to the console"
    )
    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO)

    _LOGGER.debug(args)

    if args.pairwise:
        if len(args.sequence) < 1:
            parser.error("--pairwise requires at least one sequence file")

        if args.path or args.buffer:
            parser.error("--path and --buffer can't be used with --pairwise")
    elif len(args.sequence) != 2:
        parser.error("Expected exactly two sequence files")

    try:
        sequences = [load_sequence(p) for p in args.sequence]

        if args.pairwise:
            distances = pairwise_distances(
                sequences,
                window_frac=args.window_frac,
                distance_func=args.distance_func,
                max_workers=args.workers,
            )
            output_dict: typing.Dict[str, typing.Any] = {
                "files": args.sequence,
                "distances": distances.tolist(),
            }
        else:
            alignment = align(
                sequences[0],
                sequences[1],
                window_frac=args.window_frac,
                distance_func=args.distance_func,
            )
            output_dict = {
                "distance": alignment.distance,
                "normalized_distance": alignment.normalized_distance,
                "window": alignment.window,
            }

            if args.path:
                output_dict["path"] = [[i, j] for i, j in alignment.path]

            if args.buffer:
                output_dict["buffer"] = alignment.to_buffer().tolist()
    except (OSError, InvalidArgumentError) as e:
        _LOGGER.error(e)
        return 1
    except InternalError:
        _LOGGER.exception("Internal error")
        return 2

    print(json.dumps(output_dict, ensure_ascii=False), flush=True)

    return 0


# -----------------------------------------------------------------------------


def load_sequence(sequence_path: str) -> np.ndarray:
    """Load whitespace-separated numbers from a file or stdin."""
    try:
        if sequence_path == "-":
            return np.loadtxt(sys.stdin, dtype=float, ndmin=1)

        return np.loadtxt(sequence_path, dtype=float, ndmin=1)
    except ValueError as e:
        raise InvalidArgumentError(f"Failed to read {sequence_path}: {e}") from e


# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
