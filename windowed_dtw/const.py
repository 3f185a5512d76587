"""Shared constants and exceptions for windowed-dtw."""
import math

# Cost of cells that no warping path can reach.
# Larger than any finite cumulative cost.
UNREACHABLE = math.inf

DEFAULT_WINDOW_FRAC = 0.1
DEFAULT_DISTANCE_FUNC = "cityblock"

# -----------------------------------------------------------------------------


class DtwError(Exception):
    """Base class for dynamic time warping errors."""


class InvalidArgumentError(DtwError, ValueError):
    """Malformed or out-of-range input (window fraction, sequence data, buffers)."""


class InternalError(DtwError, RuntimeError):
    """Computed distance violates the reachability invariant of the band."""
