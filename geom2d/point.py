from __future__ import annotations

import logging
import math
import random
from collections.abc import (
    Callable,
    Iterable,
    Sequence
)
from numbers import Real
from typing import Union

from geom2d import vector
from geom2d.errors import InvalidArgument
from geom2d.polar import (
    Heading,
    heading_for,
    ieee_div,
    normalize_angle,
    polar_from_xy,
    turn
)
from geom2d.records import (
    ORIGIN,
    XY,
    Operand,
    PositionLike,
    RectLike,
    as_rect,
    as_xy,
    dump_xy,
    retort,
    xy_from_sequence
)


logger = logging.getLogger(__name__)

PointSource = Union[float, PositionLike, Sequence[float]]


class Point:
    """
    A 2D point that keeps its polar view in sync with its coordinates.

    `length`, `angle` (degrees in [0, 360)), `angle_in_radians` and `quadrant`
    are cached. Changing `x` or `y` recomputes them from the new coordinates;
    changing `angle` recomputes `x` and `y` instead, keeping `length`.
    """

    __slots__ = ("_x", "_y", "_polar", "_selected")
    __match_args__ = ("x", "y")

    def __init__(self, x: PointSource = 0.0, y: float = 0.0, /) -> None:
        xy = _coerce(x, y)
        self._x = xy.x
        self._y = xy.y
        self._polar = polar_from_xy(xy.x, xy.y)
        self._selected = False

    @property
    def x(self) -> float:
        return self._x

    @x.setter
    def x(self, value: float) -> None:
        self.set(x=value)

    @property
    def y(self) -> float:
        return self._y

    @y.setter
    def y(self, value: float) -> None:
        self.set(y=value)

    @property
    def angle(self) -> float:
        """Angle to the positive x half-axis, in degrees"""
        return self._polar.angle

    @angle.setter
    def angle(self, value: float) -> None:
        self.set(angle=value)

    @property
    def length(self) -> float:
        """Distance from the origin"""
        return self._polar.length

    @property
    def angle_in_radians(self) -> float:
        """Absolute arctangent of the slope, always within [0, pi/2]"""
        return self._polar.radians

    @property
    def quadrant(self) -> int:
        return self._polar.quadrant

    @property
    def selected(self) -> bool:
        return self._selected

    # Mutation

    def set(
        self,
        *,
        x: float | None = None,
        y: float | None = None,
        angle: float | None = None,
    ) -> None:
        """
        Update the point in place.

        A new `angle` is applied first and moves the point along it at the
        current length. `x` and `y` are applied afterwards, so they win over
        the coordinates derived from `angle` when both are given.
        """
        if angle is not None:
            self._point_along(heading_for(_number("angle", angle)), ORIGIN)
            logger.debug("Turned to %s degrees: %s", self._polar.angle, self)

        if x is not None or y is not None:
            self._move_to(
                self._x if x is None else _number("x", x),
                self._y if y is None else _number("y", y),
            )

    def rotate(self, angle: float, center: PositionLike = ORIGIN) -> None:
        """
        Rotate clockwise by `angle` degrees, in place.

        The offset from the origin is turned and then laid out from `center`,
        so `length` and the cached angle describe that offset afterwards.
        """
        pivot = as_xy(center)
        heading = heading_for(self._polar.angle - normalize_angle(angle))
        self._point_along(heading, pivot)
        logger.debug("Rotated by %s around %s: %s", angle, pivot, self)

    def _move_to(self, x: float, y: float) -> None:
        self._x = x
        self._y = y
        self._polar = polar_from_xy(x, y)

    def _point_along(self, heading: Heading, center: XY) -> None:
        length = self._polar.length
        self._x = center.x + heading.x_scale * length
        self._y = center.y + heading.y_scale * length
        self._polar = turn(self._polar, heading)

    # Queries

    def equals(self, other: PositionLike) -> bool:
        return points_equal(self, other)

    def distance_to(self, other: PositionLike) -> float:
        return Point.distance(self, other)

    def is_inside(self, rect: RectLike) -> bool:
        r = as_rect(rect)
        # The upper y bound is `height` itself, not `y + height`.
        return r.x <= self._x <= r.x + r.width and r.y <= self._y <= r.height

    def is_close(self, other: PositionLike, tolerance: float) -> bool:
        return self.distance_to(other) <= tolerance

    def is_collinear(self, other: PositionLike) -> bool:
        o = as_xy(other)
        return ieee_div(self._y, self._x) == ieee_div(o.y, o.x)

    def is_orthogonal(self, other: PositionLike) -> bool:
        o = as_xy(other)
        return ieee_div(ieee_div(self._y, self._x) * o.y, o.x) == -1

    def is_zero(self) -> bool:
        return self._x == 0 and self._y == 0

    def is_in_quadrant(self, quadrant: int) -> bool:
        """A point lying on an axis belongs to both quadrants next to it."""
        match self._polar.angle:
            case 0 | 360:
                return quadrant in (1, 4)
            case 90:
                return quadrant in (1, 2)
            case 180:
                return quadrant in (2, 3)
            case 270:
                return quadrant in (3, 4)
        return self._polar.quadrant == quadrant

    def dot(self, other: PositionLike) -> float:
        o = as_xy(other)
        return self._x * o.x + self._y * o.y

    def cross(self, other: PositionLike) -> float:
        o = as_xy(other)
        return self._x * o.y - self._y * o.x

    def project(self, other: PositionLike) -> Point:
        """
        Foot of the perpendicular dropped from this point onto the line
        through `other` and the origin.
        """
        o = as_xy(other)
        slope = ieee_div(o.y, o.x)
        intercept = o.y - slope * o.x

        m = self._x + slope * self._y
        x = (m - slope * intercept) / (slope * slope + 1)

        result = Point(x, slope * x + intercept)
        logger.debug("Projected %s onto %s: %s", self, o, result)
        return result

    def round(self) -> Point:
        """Round half up, component by component."""
        return self._map(_round_half_up)

    def ceil(self) -> Point:
        return self._map(math.ceil)

    def floor(self) -> Point:
        return self._map(math.floor)

    def abs(self) -> Point:
        return Point(abs(self._x), abs(self._y))

    def _map(self, fn: Callable[[float], int]) -> Point:
        return Point(_integral(fn, self._x), _integral(fn, self._y))

    # Arithmetic

    def add(self, operand: Operand) -> Point:
        return vector.add(self, operand)

    def subtract(self, operand: Operand) -> Point:
        return vector.subtract(self, operand)

    def multiply(self, operand: Operand) -> Point:
        return vector.multiply(self, operand)

    def divide(self, operand: Operand) -> Point:
        return vector.divide(self, operand)

    def modulo(self, operand: Operand) -> Point:
        return vector.modulo(self, operand)

    def __add__(self, other: Operand) -> Point:
        return self.add(other)

    def __radd__(self, other: Operand) -> Point:
        return self.add(other)

    def __sub__(self, other: Operand) -> Point:
        return self.subtract(other)

    def __mul__(self, other: Operand) -> Point:
        return self.multiply(other)

    def __rmul__(self, other: Operand) -> Point:
        return self.multiply(other)

    def __truediv__(self, other: Operand) -> Point:
        return self.divide(other)

    def __mod__(self, other: Operand) -> Point:
        return self.modulo(other)

    def __abs__(self) -> Point:
        return self.abs()

    def __round__(self, ndigits: int | None = None) -> Point:
        if ndigits is None:
            return self.round()
        return Point(round(self._x, ndigits), round(self._y, ndigits))

    def __ceil__(self) -> Point:
        return self.ceil()

    def __floor__(self) -> Point:
        return self.floor()

    # Conversions

    def clone(self) -> Point:
        return Point(self._x, self._y)

    def to_xy(self) -> XY:
        return XY(self._x, self._y)

    def to_dict(self) -> dict[str, float]:
        return retort.dump(self.to_xy(), XY)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self.equals(other)

    def __str__(self) -> str:
        return dump_xy(self.to_xy())

    def __repr__(self) -> str:
        return f"Point({self._x!r}, {self._y!r})"

    # Helpers over several points

    @staticmethod
    def min(points: Iterable[PositionLike]) -> Point:
        xys = _collect(points)
        return Point(min(p.x for p in xys), min(p.y for p in xys))

    @staticmethod
    def max(points: Iterable[PositionLike]) -> Point:
        xys = _collect(points)
        return Point(max(p.x for p in xys), max(p.y for p in xys))

    @staticmethod
    def random() -> Point:
        return Point(random.random(), random.random())

    @staticmethod
    def distance(p1: PositionLike, p2: PositionLike = ORIGIN) -> float:
        a, b = as_xy(p1), as_xy(p2)
        dx = a.x - b.x
        dy = a.y - b.y
        return math.sqrt(dx * dx + dy * dy)


def points_equal(a: PositionLike, b: PositionLike) -> bool:
    """Exact comparison, no tolerance."""
    p, q = as_xy(a), as_xy(b)
    return p.x == q.x and p.y == q.y


def _coerce(x: PointSource, y: float) -> XY:
    match x:
        case bool() | str() | bytes():
            pass
        case Real():
            if isinstance(y, bool) or not isinstance(y, Real):
                raise InvalidArgument(f"Expected a number for y, got {y!r}")
            return XY(float(x), float(y))
        case Sequence():
            return xy_from_sequence(x)
        case _:
            return as_xy(x)
    raise InvalidArgument(f"Cannot build a point from {x!r}")


def _collect(points: Iterable[PositionLike]) -> list[XY]:
    xys = [as_xy(p) for p in points]
    if not xys:
        raise InvalidArgument("Expected at least one point")
    return xys


def _integral(fn: Callable[[float], int], value: float) -> float:
    if not math.isfinite(value):
        return value
    return float(fn(value))


def _round_half_up(value: float) -> int:
    # floor(value + 0.5) rounds 0.49999999999999994 up to 1
    r = math.floor(value)
    return r + 1 if value - r >= 0.5 else r


def _number(name: str, value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidArgument(f"Expected a number for {name}, got {value!r}")
    return float(value)
