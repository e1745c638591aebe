"""Exception family for the grid engine and its collaborators."""


class GridError(Exception):
    """Base class for errors raised by grid-engine components."""


class InvalidParameter(GridError, ValueError):
    """Grid planner was given a non-positive spacing or a negative count."""
