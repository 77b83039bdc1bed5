from __future__ import annotations

import json
from collections.abc import (
    Mapping,
    Sequence
)
from numbers import Real
from typing import (
    Protocol,
    Union
)

from adaptix import Retort
from adaptix.load_error import LoadError
from attr import frozen

from geom2d.errors import InvalidArgument


class Position(Protocol):
    @property
    def x(self) -> float:
        ...

    @property
    def y(self) -> float:
        ...


@frozen
class XY:
    x: float
    y: float


@frozen
class Rect:
    x: float
    y: float
    width: float
    height: float


PositionLike = Union[Position, Mapping[str, float]]
RectLike = Union[Rect, Mapping[str, float]]
Operand = Union[float, PositionLike]

ORIGIN = XY(0.0, 0.0)


###


retort = Retort()


def as_xy(value: object) -> XY:
    """
    Coerce anything with an `x` and a `y` into an `XY` record.

    Always builds a fresh record of floats. Accepts records, mappings with
    "x" and "y" keys and objects exposing numeric `x`/`y` attributes
    (a `Point` included).
    """
    match value:
        case Mapping():
            return _load(value, XY)
        case object(x=Real() as x, y=Real() as y):
            return XY(float(x), float(y))
    raise InvalidArgument(f"Expected a position with numeric x and y, got {value!r}")


def as_rect(value: object) -> Rect:
    match value:
        case Mapping():
            return _load(value, Rect)
        case object(x=Real() as x, y=Real() as y, width=Real() as w, height=Real() as h):
            return Rect(float(x), float(y), float(w), float(h))
    raise InvalidArgument(f"Expected a rectangle with x, y, width and height, got {value!r}")


def xy_from_sequence(items: Sequence[object]) -> XY:
    """Missing components default to 0."""
    if len(items) > 2:
        raise InvalidArgument(f"Expected at most 2 coordinates, got {len(items)}")
    coords = [0.0, 0.0]
    for i, item in enumerate(items):
        if isinstance(item, bool) or not isinstance(item, Real):
            raise InvalidArgument(f"Coordinate {i} is not a number: {item!r}")
        coords[i] = float(item)
    return XY(coords[0], coords[1])


def dump_xy(xy: XY) -> str:
    return json.dumps(retort.dump(xy, XY), separators=(",", ":"))


def _load(data: Mapping[str, object], cls: type[XY] | type[Rect]) -> XY | Rect:
    try:
        return retort.load(data, cls)
    except LoadError as exc:
        raise InvalidArgument(f"Cannot read {cls.__name__} from {data!r}") from exc
