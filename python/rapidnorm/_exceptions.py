"""Distribution exceptions."""

from __future__ import annotations

__all__ = ["DistributionError", "InvalidParameter", "OutOfRange"]


class DistributionError(ValueError):
    """Base exception for distribution errors."""

    pass


class InvalidParameter(DistributionError):
    """Raised when a distribution is constructed with invalid parameters.

    Attributes
    ----------
    parameters : dict[str, object]
        The rejected parameters, keyed by name
    """

    def __init__(self, message: str, parameters: dict[str, object]) -> None:
        super().__init__(message)
        self.parameters = parameters


class OutOfRange(DistributionError):
    """Raised when a probability is outside the domain of the quantile function.

    Attributes
    ----------
    p : object
        The offending probability
    """

    def __init__(self, message: str, p: object) -> None:
        super().__init__(message)
        self.p = p
