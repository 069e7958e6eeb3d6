"""
joust - Song graph geometry

Fits a Line into a width x height box and closes it into a filled outline
with a flat skirt of ``baseline_height`` pixels at the bottom:

         ____
      __/    \\__
   __/          \\__

  becomes

      ____
   __/    \\__
   |________|   <- baseline skirt

Screen coordinates start at the top-left, so y is flipped.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from line import DegenerateLineError, Line, LineError, ZeroWidthError, x_range, y_range
from logging_utils import log_event


class ProjectionAllocationError(LineError, MemoryError):
    """The projected point buffer could not be allocated."""


class PathReleasedError(LineError):
    """A LinePath was used after release()."""


class LinePath:
    """Owned, drawable outline produced by project().

    The caller releases it once when the graph is torn down. release() is
    safe to call again, and ``with project(...) as path:`` releases on exit.
    """

    def __init__(self, points: np.ndarray):
        self._points: Optional[np.ndarray] = points

    @property
    def released(self) -> bool:
        return self._points is None

    def _require(self) -> np.ndarray:
        if self._points is None:
            raise PathReleasedError("LinePath used after release()")
        return self._points

    @property
    def num_points(self) -> int:
        return 0 if self._points is None else int(self._points.shape[0])

    @property
    def points(self) -> List[Tuple[int, int]]:
        return [(int(x), int(y)) for x, y in self._require()]

    def as_array(self) -> np.ndarray:
        return self._require().copy()

    def release(self) -> None:
        if self._points is not None:
            log_event("DEBUG", "LinePath", "Released", points=self._points.shape[0])
        self._points = None

    def __len__(self) -> int:
        return self.num_points

    def __enter__(self) -> "LinePath":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __repr__(self) -> str:
        if self._points is None:
            return "LinePath(released)"
        return f"LinePath({self.points!r})"


def project(line: Line, target_width: int, target_height: int, baseline_height: int) -> LinePath:
    """Map ``line`` into a target_width x target_height box with a baseline skirt.

    Returns len(line) + 2 points: (0, target_height), the mapped control
    points, then (target_width, target_height). Each control point maps to
    (x * scale_x, target_height - y * scale_y), truncated to int.

    Raises DegenerateLineError for fewer than 2 points, ZeroWidthError when
    the x or y span is zero, and ProjectionAllocationError when the output
    cannot be allocated.
    """
    if len(line) < 2:
        raise DegenerateLineError(f"cannot project a line with {len(line)} point(s)")

    xmin, xmax = x_range(line)
    ymin, ymax = y_range(line)
    if xmax == xmin:
        raise ZeroWidthError("cannot project a line with zero x span")
    if ymax == ymin:
        raise ZeroWidthError("cannot project a line with zero y span")

    scale_x = float(target_width) / float(xmax - xmin)
    scale_y = float(target_height - baseline_height) / float(ymax - ymin)

    log_event("DEBUG", "LinePath", "Projecting",
              xmin=xmin, xmax=xmax, ymin=ymin, ymax=ymax,
              tx=f"{scale_x:.4f}", ty=f"{scale_y:.4f}")

    n = len(line)
    try:
        out = np.empty((n + 2, 2), dtype=np.int32)
        src = np.asarray(line.points, dtype=np.float64)
    except MemoryError as e:
        log_event("ERROR", "LinePath", "Could not allocate projected points", points=n + 2)
        raise ProjectionAllocationError(f"could not allocate {n + 2} projected points") from e

    out[0] = (0, target_height)
    # astype truncates toward zero
    out[1:n + 1, 0] = (src[:, 0] * scale_x).astype(np.int32)
    out[1:n + 1, 1] = (target_height - src[:, 1] * scale_y).astype(np.int32)
    out[n + 1] = (target_width, target_height)

    return LinePath(out)
