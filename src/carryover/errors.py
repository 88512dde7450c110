"""Exceptions raised by carryover."""


class CarryoverError(Exception):
    """Base class for all carryover errors."""


class InvalidArgumentError(CarryoverError, ValueError):
    """
    A transform parameter or input series is out of its valid domain.

    Raised at call entry, before any computation, so no partial result is
    ever returned. Subclasses ``ValueError`` so generic callers can keep
    catching that.
    """
