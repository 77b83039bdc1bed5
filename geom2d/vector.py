"""
Element-wise arithmetic on anything with an `x` and a `y`.

Every function takes a position and either a scalar (applied to both
components) or another position (applied component by component), and
returns a fresh `Point`. Operands are never modified.

Division and modulo by zero give 0 for the affected component.
"""
from __future__ import annotations

import math
import operator
from collections.abc import Callable
from numbers import Real
from typing import TYPE_CHECKING

from geom2d import point as _point
from geom2d.records import (
    Operand,
    PositionLike,
    as_xy
)

if TYPE_CHECKING:
    from geom2d.point import Point


_BinOp = Callable[[float, float], float]


def add(p: PositionLike, operand: Operand) -> Point:
    return _apply(p, operand, operator.add)


def subtract(p: PositionLike, operand: Operand) -> Point:
    return _apply(p, operand, operator.sub)


def multiply(p: PositionLike, operand: Operand) -> Point:
    return _apply(p, operand, operator.mul)


def divide(p: PositionLike, operand: Operand) -> Point:
    return _apply(p, operand, _zero_or(operator.truediv))


def modulo(p: PositionLike, operand: Operand) -> Point:
    # Remainder keeps the sign of the dividend: modulo((-7, 7), 3) == (-1, 1)
    return _apply(p, operand, _zero_or(_remainder))


def _zero_or(op: _BinOp) -> _BinOp:
    def saturating(a: float, b: float) -> float:
        if b == 0:
            return 0.0
        return op(a, b)

    return saturating


def _remainder(a: float, b: float) -> float:
    if math.isinf(a):
        return math.nan
    return math.fmod(a, b)


def _apply(p: PositionLike, operand: Operand, op: _BinOp) -> Point:
    left = as_xy(p)
    if isinstance(operand, Real) and not isinstance(operand, bool):
        return _point.Point(op(left.x, float(operand)), op(left.y, float(operand)))
    right = as_xy(operand)
    return _point.Point(op(left.x, right.x), op(left.y, right.y))
