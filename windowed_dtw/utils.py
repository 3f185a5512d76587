"""Utility methods for windowed-dtw."""
import math
import numbers
import typing

import numpy as np

from .const import InvalidArgumentError

# -----------------------------------------------------------------------------


def to_sequence(values: typing.Any, name: str = "sequence") -> np.ndarray:
    """Interpret values as a contiguous 1-D array of finite 64-bit floats."""
    try:
        sequence = np.asarray(values)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"{name} is not a numeric sequence: {e}") from e

    if sequence.ndim != 1:
        raise InvalidArgumentError(
            f"{name} must be one-dimensional (got shape {sequence.shape})"
        )

    if np.iscomplexobj(sequence):
        raise InvalidArgumentError(f"{name} contains complex values")

    try:
        sequence = np.ascontiguousarray(sequence, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError(f"{name} is not a numeric sequence: {e}") from e

    if not np.all(np.isfinite(sequence)):
        raise InvalidArgumentError(f"{name} contains NaN or infinite values")

    return sequence


def check_window_frac(window_frac: typing.Any) -> float:
    """Ensure window fraction is a real number in [0, 1]."""
    if isinstance(window_frac, bool) or (
        not isinstance(window_frac, numbers.Real)
    ):
        raise InvalidArgumentError(f"window_frac must be a number: {window_frac!r}")

    window_frac = float(window_frac)
    if math.isnan(window_frac) or (window_frac < 0) or (window_frac > 1):
        raise InvalidArgumentError(
            f"window_frac must be between 0 and 1: {window_frac}"
        )

    return window_frac


# -----------------------------------------------------------------------------


def path_to_buffer(path: typing.Sequence[typing.Tuple[int, int]]) -> np.ndarray:
    """Flatten a warping path to [N, i0, j0, i1, j1, ...] 32-bit integers."""
    buffer = np.empty(shape=(1 + (2 * len(path)),), dtype=np.int32)
    buffer[0] = len(path)

    if path:
        buffer[1:] = np.asarray(path, dtype=np.int32).reshape(-1)

    return buffer


def buffer_to_path(buffer: typing.Any) -> typing.List[typing.Tuple[int, int]]:
    """Unpack a [N, i0, j0, ...] integer buffer into a list of index pairs."""
    buffer = np.asarray(buffer)
    if (buffer.ndim != 1) or (len(buffer) < 1):
        raise InvalidArgumentError("Path buffer must be a non-empty flat array")

    if not np.issubdtype(buffer.dtype, np.integer):
        raise InvalidArgumentError(f"Path buffer must hold integers: {buffer.dtype}")

    num_pairs = int(buffer[0])
    if (num_pairs < 0) or (len(buffer) != (1 + (2 * num_pairs))):
        raise InvalidArgumentError(
            f"Path buffer declares {num_pairs} pair(s) but has {len(buffer) - 1} value(s)"
        )

    pairs = buffer[1:].reshape(-1, 2)

    return [(int(i), int(j)) for i, j in pairs]
