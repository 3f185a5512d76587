"""Exact dynamic time warping between numeric sequences under a fixed band."""
import concurrent.futures
import logging
import typing
from dataclasses import dataclass, field

import numpy as np

from .const import (
    DEFAULT_DISTANCE_FUNC,
    DEFAULT_WINDOW_FRAC,
    UNREACHABLE,
    DtwError,
    InternalError,
    InvalidArgumentError,
)
from .dtw import DistanceFunc, DynamicTimeWarping, WarpPath
from .utils import buffer_to_path, check_window_frac, path_to_buffer, to_sequence

_LOGGER = logging.getLogger("windowed-dtw")

__all__ = [
    "Alignment",
    "DEFAULT_DISTANCE_FUNC",
    "DEFAULT_WINDOW_FRAC",
    "DtwError",
    "DynamicTimeWarping",
    "InternalError",
    "InvalidArgumentError",
    "UNREACHABLE",
    "align",
    "buffer_to_path",
    "distance",
    "pairwise_distances",
    "path",
    "path_to_buffer",
]

# -----------------------------------------------------------------------------


@dataclass
class Alignment:
    """Result of aligning two sequences."""

    distance: float
    window: int
    xsize: int
    ysize: int
    path: WarpPath = field(default_factory=list)

    @property
    def normalized_distance(self) -> float:
        """Distance normalized by sum of sequence lengths."""
        total_size = self.xsize + self.ysize
        if total_size <= 0:
            return 0.0

        return self.distance / total_size

    def to_buffer(self) -> np.ndarray:
        """Path as a flat [N, i0, j0, ...] integer buffer."""
        return path_to_buffer(self.path)


# -----------------------------------------------------------------------------


def distance(
    x: typing.Any,
    y: typing.Any,
    window_frac: float = DEFAULT_WINDOW_FRAC,
    distance_func: DistanceFunc = DEFAULT_DISTANCE_FUNC,
) -> float:
    """Compute the DTW distance between two sequences.

    Parameters
    ----------

    x: sequence of floats
        First sequence

    y: sequence of floats
        Second sequence

    window_frac: float
        Locality constraint, given as a fraction from 0 to 1 of the size of y.
        The band is never narrower than the difference in lengths.

    Returns
    -------

    DTW distance between x and y (0 if either sequence is empty)
    """
    return DynamicTimeWarping(distance_func).compute_cost(x, y, window_frac)


def path(
    x: typing.Any,
    y: typing.Any,
    window_frac: float = DEFAULT_WINDOW_FRAC,
    distance_func: DistanceFunc = DEFAULT_DISTANCE_FUNC,
) -> WarpPath:
    """Determine the optimal warping between two sequences.

    Returns
    -------

    List of (i, j) index pairs from (0, 0) to (len(x) - 1, len(y) - 1).
    Empty if either sequence is empty.
    """
    return align(x, y, window_frac, distance_func).path


def align(
    x: typing.Any,
    y: typing.Any,
    window_frac: float = DEFAULT_WINDOW_FRAC,
    distance_func: DistanceFunc = DEFAULT_DISTANCE_FUNC,
) -> Alignment:
    """Compute distance and warping path from a single cost matrix."""
    x = to_sequence(x, name="x")
    y = to_sequence(y, name="y")

    dtw = DynamicTimeWarping(distance_func)
    dtw_distance = dtw.compute_cost(x, y, window_frac, keep_matrix=True)
    warp_path = dtw.compute_path()

    assert dtw.window is not None
    return Alignment(
        distance=dtw_distance,
        window=dtw.window,
        xsize=len(x),
        ysize=len(y),
        path=warp_path or [],
    )


def pairwise_distances(
    sequences: typing.Sequence[typing.Any],
    window_frac: float = DEFAULT_WINDOW_FRAC,
    distance_func: DistanceFunc = DEFAULT_DISTANCE_FUNC,
    max_workers: typing.Optional[int] = None,
) -> np.ndarray:
    """Compute DTW distances between all pairs of sequences.

    Entry [r][c] is the distance with sequences[r] as x and sequences[c] as y.
    The band follows the length of y, so the matrix is only guaranteed to be
    symmetric when all sequences have the same length.
    """
    # Fail on bad input before any work is scheduled
    window_frac = check_window_frac(window_frac)
    arrays = [to_sequence(s, name=f"sequences[{n}]") for n, s in enumerate(sequences)]

    num_sequences = len(arrays)
    distances = np.zeros(shape=(num_sequences, num_sequences), dtype=float)

    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        # future -> (row, col)
        future_to_index = {}

        for row in range(num_sequences):
            for col in range(num_sequences):
                if row == col:
                    continue

                future = executor.submit(
                    distance, arrays[row], arrays[col], window_frac, distance_func
                )
                future_to_index[future] = (row, col)

        for future in concurrent.futures.as_completed(future_to_index):
            row, col = future_to_index[future]
            distances[row][col] = future.result()

    _LOGGER.debug("Computed %s pairwise distance(s)", len(future_to_index))

    return distances
