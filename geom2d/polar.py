from __future__ import annotations

import math

from attr import frozen


FULL_TURN = 360.0


@frozen
class Polar:
    """
    Polar view of a point, cached next to its cartesian coordinates.

    `radians` is the absolute arctangent of the slope, i.e. the angle to the
    nearest x half-axis folded into the first quadrant. It is *not* `angle`
    converted to radians.
    """

    length: float
    angle: float
    radians: float
    quadrant: int


@frozen
class Heading:
    """A normalized angle together with its unit-circle projection."""

    angle: float
    radians: float
    quadrant: int
    x_scale: float
    y_scale: float


def normalize_angle(angle: float) -> float:
    """Fold any angle in degrees into [0, 360)."""
    folded = angle % FULL_TURN
    # -1e-20 % 360 rounds up to 360.0
    return 0.0 if folded == FULL_TURN else folded


def ieee_div(num: float, den: float) -> float:
    """Float division that yields inf/nan instead of raising on a zero divisor."""
    if den != 0:
        return num / den
    if num == 0 or math.isnan(num):
        return math.nan
    return math.copysign(math.inf, num) * math.copysign(1.0, den)


def quadrant_of(x: float, y: float) -> int:
    if x >= 0 and y >= 0:
        return 1
    if x < 0 and y >= 0:
        return 2
    if x <= 0 and y < 0:
        return 3
    return 4


def angle_props(x: float, y: float) -> tuple[float, float, int]:
    """
    Derive `(angle, radians, quadrant)` from cartesian coordinates.

    The origin is degenerate and maps to angle 0 in the first quadrant.
    """
    if x == 0 and y == 0:
        return 0.0, 0.0, 1

    radians = abs(math.atan(ieee_div(y, x)))
    quadrant = quadrant_of(x, y)

    if radians == 0:
        angle = 0.0 if x >= 0 else 180.0
    else:
        angle = 180 * radians / math.pi + (quadrant - 1) * 90
    return angle, radians, quadrant


def polar_from_xy(x: float, y: float) -> Polar:
    angle, radians, quadrant = angle_props(x, y)
    return Polar(math.sqrt(x * x + y * y), angle, radians, quadrant)


def heading_for(angle: float) -> Heading:
    """
    Project a target angle onto the unit circle.

    The cosine and sine are taken of the first-quadrant reference angle and the
    signs are flipped per quadrant, so the axis angles land exactly on the
    boundary quadrant listed below.
    """
    angle = normalize_angle(angle)

    if angle > 270:
        ref = math.radians(FULL_TURN - angle)
        quadrant, x_scale, y_scale = 4, math.cos(ref), -math.sin(ref)
    elif angle > 180:
        ref = math.radians(angle - 180)
        quadrant, x_scale, y_scale = 3, -math.cos(ref), -math.sin(ref)
    elif angle > 90:
        ref = math.radians(180 - angle)
        quadrant, x_scale, y_scale = 2, -math.cos(ref), math.sin(ref)
    else:
        ref = math.radians(angle)
        quadrant, x_scale, y_scale = 1, math.cos(ref), math.sin(ref)

    return Heading(angle, ref, quadrant, x_scale, y_scale)


def turn(polar: Polar, heading: Heading) -> Polar:
    """The cache after pointing `polar` along `heading` with its length kept."""
    return Polar(polar.length, heading.angle, heading.radians, heading.quadrant)
