"""
joust - Piecewise-linear "song" envelope

A Line is an ordered run of integer control points (x, y). It is read as a
function of x: exact at the control points, linearly interpolated between
them, and periodic outside [first.x, last.x].

The song starts life in milliseconds and is converted to game ticks once,
with convert_units(), before the game loop reads it every tick.
"""

from __future__ import annotations

from typing import Iterable, Iterator, NamedTuple, Tuple

from logging_utils import log_event


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class LineError(ValueError):
    """Base class for invalid line geometry."""


class DegenerateLineError(LineError):
    """The line has too few points for the requested operation."""


class ZeroWidthError(LineError):
    """Two points share an x, or a domain/range span is zero."""


# ---------------------------------------------------------------------------
# Data
# ---------------------------------------------------------------------------

class Point(NamedTuple):
    x: int
    y: int


def _coerce_points(points: Iterable) -> Tuple[Point, ...]:
    out = []
    for p in points:
        x, y = p
        out.append(Point(int(x), int(y)))
    return tuple(out)


def _div_toward_zero(num: int, den: int) -> int:
    """Integer division truncated toward zero, like C. ``den`` is positive."""
    q = abs(num) // den
    return q if num >= 0 else -q


def _check_increasing(points: Tuple[Point, ...]) -> None:
    for i in range(1, len(points)):
        if points[i].x <= points[i - 1].x:
            raise ZeroWidthError(
                f"x must be strictly increasing: point {i - 1} has x={points[i - 1].x}, "
                f"point {i} has x={points[i].x}"
            )


class Line:
    """
    Ordered control points read as a piecewise-linear function.

    Points are validated on construction (strictly increasing x) and kept
    in an immutable tuple. A line with fewer than 2 points is allowed but
    degenerate: it evaluates to 0 everywhere.
    """

    def __init__(self, points: Iterable = ()):
        pts = _coerce_points(points)
        _check_increasing(pts)
        self._points = pts
        self._conversions = 0

    @property
    def points(self) -> Tuple[Point, ...]:
        return self._points

    @property
    def degenerate(self) -> bool:
        return len(self._points) < 2

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self._points)

    def __getitem__(self, index: int) -> Point:
        return self._points[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Line):
            return NotImplemented
        return self._points == other._points

    def __repr__(self) -> str:
        return f"Line({list(map(tuple, self._points))!r})"

    # Method forms of the module functions below
    def evaluate(self, x: int) -> int:
        return evaluate(self, x)

    def x_range(self) -> Tuple[int, int]:
        return x_range(self)

    def y_range(self) -> Tuple[int, int]:
        return y_range(self)

    def convert_units(self, divisor: int) -> None:
        convert_units(self, divisor)


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------

def evaluate(line: Line, x: int) -> int:
    """Evaluate ``line`` at ``x``.

    Points outside the domain wrap around modulo the domain width, so the
    song repeats. Between control points the value is interpolated with
    exact integer arithmetic and truncated toward zero. Lines with fewer
    than two points evaluate to 0.
    """
    points = line.points
    if len(points) < 2:
        log_event("DEBUG", "Line", "Degenerate line evaluated as 0", length=len(points))
        return 0

    first = points[0]
    last = points[-1]
    x = int(x)

    if x < first.x or x > last.x:
        # Python's % is non-negative for a positive divisor
        x = first.x + (x - first.x) % (last.x - first.x)

    before = first
    for point in points:
        if point.x == x:
            return point.y
        if point.x > x:
            after = point
            break
        before = point
    else:
        # Unreachable once x is inside [first.x, last.x]
        return last.y

    # y = (before.y * dx + dy * offset) / dx, truncated
    dx = after.x - before.x
    return _div_toward_zero(before.y * dx + (after.y - before.y) * (x - before.x), dx)


def x_range(line: Line) -> Tuple[int, int]:
    """(min, max) of x. Points are sorted, so these are the end points."""
    points = line.points
    if not points:
        raise DegenerateLineError("x_range of an empty line")
    return points[0].x, points[-1].x


def y_range(line: Line) -> Tuple[int, int]:
    """(min, max) of y over every point. y is not assumed monotonic."""
    points = line.points
    if not points:
        raise DegenerateLineError("y_range of an empty line")
    ys = [p.y for p in points]
    return min(ys), max(ys)


def convert_units(line: Line, divisor: int) -> None:
    """Divide every x by ``divisor`` in place (e.g. milliseconds to ticks).

    This is one-time setup, not a general utility: a second call divides
    again and loses precision. If the division would merge two points onto
    the same x the line is left untouched and ZeroWidthError is raised.
    Division truncates toward zero, so negative x values round up.
    """
    divisor = int(divisor)
    if divisor <= 0:
        raise ValueError(f"divisor must be positive, got {divisor}")

    converted = tuple(Point(_div_toward_zero(p.x, divisor), p.y) for p in line.points)
    _check_increasing(converted)

    if line._conversions:
        log_event("WARN", "Line", "Units converted more than once",
                  conversions=line._conversions + 1, divisor=divisor)
    line._points = converted
    line._conversions += 1
    log_event("DEBUG", "Line", "Converted units", divisor=divisor, length=len(converted))
