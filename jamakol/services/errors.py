"""Failures raised by the Vedic day and special-point engine.

The engine never recovers from these itself; they propagate to whoever
asked for the computation. Only the HTTP layer translates them.
"""

from __future__ import annotations


class VedicEngineError(Exception):
    """Base class for every engine failure."""


class SunEventUnavailableError(VedicEngineError):
    """No sunrise or sunset exists for the requested date and latitude."""


class NonMonotonicTriadError(VedicEngineError):
    """Sunrise, sunset and next sunrise are not strictly increasing."""


class DegenerateArcError(VedicEngineError):
    """A day or night arc has zero (or negative) length."""


class MomentOutOfRangeError(VedicEngineError, ValueError):
    """The instant lies outside the sunrise-to-next-sunrise span of a triad.

    This signals a mismatch between the triad and the query moment in the
    calling code rather than a recoverable domain condition.
    """


class InvalidQueryMomentError(VedicEngineError, ValueError):
    """Coordinates out of range or a timestamp that is not local wall-clock."""
