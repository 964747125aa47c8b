"""Exception types raised by the audit engine."""

from __future__ import annotations


class PolarisError(Exception):
    """Base class for all audit engine errors."""


class InputError(PolarisError):
    """The document snapshot cannot be audited (missing, empty or malformed)."""


class InvalidColorError(PolarisError, ValueError):
    """A color specification cannot be interpreted as a contrast partner."""


# Name used by the contrast inspector when skipping a single node.
ColorParseError = InvalidColorError


class CollaboratorUnavailable(PolarisError):
    """The optional baseline defect source could not be reached or timed out."""
