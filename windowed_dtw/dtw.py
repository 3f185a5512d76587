"""Implementation of dynamic time warping with a Sakoe-Chiba band.

Window size is given as a fraction of the second sequence's length and is
never smaller than the difference in lengths, so the final cell is always
reachable.
"""
import logging
import math
import time
import typing

import numpy as np
import scipy.spatial.distance

from .const import (
    DEFAULT_DISTANCE_FUNC,
    DEFAULT_WINDOW_FRAC,
    UNREACHABLE,
    InternalError,
    InvalidArgumentError,
)
from .utils import check_window_frac, to_sequence

_LOGGER = logging.getLogger("windowed-dtw")

WarpPath = typing.List[typing.Tuple[int, int]]
DistanceFunc = typing.Union[str, typing.Callable[[np.ndarray, np.ndarray], float]]

# -----------------------------------------------------------------------------


def compute_window(xsize: int, ysize: int, window_frac: float) -> int:
    """Half-bandwidth of the band around the diagonal."""
    return max(int(math.floor(window_frac * ysize)), abs(xsize - ysize))


def build_cost_matrix(
    x: np.ndarray,
    y: np.ndarray,
    window_frac: float,
    distance_func: DistanceFunc = DEFAULT_DISTANCE_FUNC,
) -> np.ndarray:
    """Build the (len(x) + 1) x (len(y) + 1) cumulative cost matrix.

    Cell (0, 0) is 0 and cells outside the band stay UNREACHABLE.
    Predecessors are considered in the order match, insertion, deletion and
    the first one with the smallest cost wins.
    """
    xsize = len(x)
    ysize = len(y)

    cost_matrix = np.full(
        shape=(xsize + 1, ysize + 1), fill_value=UNREACHABLE, dtype=float
    )
    cost_matrix[0][0] = 0.0

    if (xsize == 0) or (ysize == 0):
        return cost_matrix

    window = compute_window(xsize, ysize, window_frac)

    # Need 2-D arrays for distance calculation
    distance_matrix = scipy.spatial.distance.cdist(
        x.reshape(-1, 1), y.reshape(-1, 1), metric=distance_func
    )

    if not np.all(np.isfinite(distance_matrix)):
        raise InvalidArgumentError("Element distances are not finite")

    # No path has more than xsize + ysize cells
    max_total = float(distance_matrix.max()) * (xsize + ysize)
    if not math.isfinite(max_total):
        raise InvalidArgumentError("Cumulative distance would overflow")

    for i in range(xsize):
        j_start = max(0, i - window)
        j_end = min(ysize - 1, i + window)

        prev_row = cost_matrix[i]
        row = cost_matrix[i + 1]
        costs = distance_matrix[i]

        for j in range(j_start, j_end + 1):
            min_cost = prev_row[j]  # match
            if prev_row[j + 1] < min_cost:
                min_cost = prev_row[j + 1]  # insertion
            if row[j] < min_cost:
                min_cost = row[j]  # deletion

            row[j + 1] = costs[j] + min_cost

    return cost_matrix


def reconstruct_path(cost_matrix: np.ndarray) -> WarpPath:
    """Backtrace the optimal warping path through a completed cost matrix.

    Mirrors the tie-break order of build_cost_matrix. Pairs are returned from
    the start of both sequences to their end.
    """
    rows, cols = cost_matrix.shape
    row = rows - 1
    col = cols - 1

    if (row == 0) or (col == 0):
        return []

    path: WarpPath = []

    while (row > 0) or (col > 0):
        if (row > 0) and (col > 0):
            path.append((row - 1, col - 1))

            next_row, next_col = row - 1, col - 1  # match
            min_cost = cost_matrix[row - 1][col - 1]

            if cost_matrix[row - 1][col] < min_cost:
                next_row, next_col = row - 1, col  # insertion
                min_cost = cost_matrix[row - 1][col]

            if cost_matrix[row][col - 1] < min_cost:
                next_row, next_col = row, col - 1  # deletion

            row, col = next_row, next_col
        elif row > 0:
            row = row - 1
        else:
            col = col - 1

    path.reverse()

    return path


def check_distance(distance: float) -> float:
    """Raise InternalError if distance could not have come from a valid path."""
    if (not math.isfinite(distance)) or (distance < 0) or (distance >= UNREACHABLE):
        raise InternalError(f"DTW produced an impossible distance: {distance}")

    return float(distance)


# -----------------------------------------------------------------------------


class DynamicTimeWarping:
    """Computes DTW and holds results.

    Uses absolute difference (cityblock distance) by default.
    Not safe to share between threads when keep_matrix is used.
    """

    def __init__(self, distance_func: typing.Optional[DistanceFunc] = None):
        self.cost_matrix: typing.Optional[np.ndarray] = None
        self.distance: typing.Optional[float] = None
        self.window: typing.Optional[int] = None
        self.distance_func = distance_func or DEFAULT_DISTANCE_FUNC

    def compute_cost(
        self,
        x: typing.Any,
        y: typing.Any,
        window_frac: float = DEFAULT_WINDOW_FRAC,
        keep_matrix: bool = False,
    ) -> float:
        """Compute non-normalized distance between x and y within the band."""
        window_frac = check_window_frac(window_frac)
        x = to_sequence(x, name="x")
        y = to_sequence(y, name="y")

        self.cost_matrix = None
        self.window = compute_window(len(x), len(y), window_frac)

        if (len(x) == 0) or (len(y) == 0):
            _LOGGER.debug("Empty sequence (x=%s, y=%s)", len(x), len(y))
            if keep_matrix:
                self.cost_matrix = build_cost_matrix(
                    x, y, window_frac, self.distance_func
                )

            self.distance = 0.0
            return self.distance

        start_time = time.perf_counter()
        cost_matrix = build_cost_matrix(x, y, window_frac, self.distance_func)
        distance = check_distance(cost_matrix[len(x)][len(y)])

        _LOGGER.debug(
            "DTW for %sx%s (window=%s) in %s second(s)",
            len(x),
            len(y),
            self.window,
            time.perf_counter() - start_time,
        )

        if keep_matrix:
            self.cost_matrix = cost_matrix

        self.distance = distance

        return distance

    def compute_path(self) -> typing.Optional[WarpPath]:
        """Get actual path if cost matrix is available."""
        if self.cost_matrix is None:
            return None

        return reconstruct_path(self.cost_matrix)
