"""Jerk between consecutive accelerometer samples."""

from __future__ import annotations

from typing import NamedTuple, Tuple

import numpy as np


class AccelSample(NamedTuple):
    """One accelerometer reading in milli-g."""
    x: int = 0
    y: int = 0
    z: int = 0


def jerk_vector(prev: AccelSample, cur: AccelSample) -> Tuple[int, int, int]:
    return (int(cur[0]) - int(prev[0]),
            int(cur[1]) - int(prev[1]),
            int(cur[2]) - int(prev[2]))


def jerk_magnitude(prev: AccelSample, cur: AccelSample) -> int:
    """Length of the change between two samples, truncated to int."""
    delta = np.asarray(jerk_vector(prev, cur), dtype=np.float64)
    return int(np.sqrt(np.dot(delta, delta)))
