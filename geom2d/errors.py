class GeometryError(Exception):
    """Base class for every error raised by geom2d."""


class InvalidArgument(GeometryError, ValueError):
    """An operand does not have any of the accepted shapes."""
