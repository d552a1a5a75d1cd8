from __future__ import annotations

import logging
import math
import numbers
import re
from typing import Optional, Protocol, Union, runtime_checkable

import numpy as np

from ._exceptions import InvalidParameter, OutOfRange
from ._random import RandomLike, _to_random

logger = logging.getLogger(__name__)

# Break-points between the tail and central approximations of the quantile.
P_LOW = 0.02425
P_HIGH = 1 - P_LOW

# Coefficients of Acklam's rational approximations, highest power first.
CENTRAL_NUMERATOR = (
    -3.969683028665376e01,
    2.209460984245205e02,
    -2.759285104469687e02,
    1.383577518672690e02,
    -3.066479806614716e01,
    2.506628277459239e00,
)
CENTRAL_DENOMINATOR = (
    -5.447609879822406e01,
    1.615858368580409e02,
    -1.556989798598866e02,
    6.680131188771972e01,
    -1.328068155288572e01,
    1.0,
)
TAIL_NUMERATOR = (
    -7.784894002430293e-03,
    -3.223964580411365e-01,
    -2.400758277161838e00,
    -2.549732539343734e00,
    4.374664141464968e00,
    2.938163982698783e00,
)
TAIL_DENOMINATOR = (
    7.784695709041462e-03,
    3.224671290700398e-01,
    2.445134137142996e00,
    3.754408661907416e00,
    1.0,
)


def _horner(coefficients, x):
    res = coefficients[0]
    for c in coefficients[1:]:
        res = res * x + c

    return res


def _central_quantile(p):
    q = p - 0.5
    r = q * q

    return _horner(CENTRAL_NUMERATOR, r) * q / _horner(CENTRAL_DENOMINATOR, r)


def _tail_quantile(q):
    return _horner(TAIL_NUMERATOR, q) / _horner(TAIL_DENOMINATOR, q)


# Plain decimal or exponent notation with optional surrounding whitespace. Forms such
# as "1_000", "nan" or "inf" are not numeric strings.
_NUMERIC_STRING = re.compile(r"\s*[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?\s*")


def _is_numeric(value) -> bool:
    if isinstance(value, bool):
        return False
    elif isinstance(value, numbers.Real):
        return True
    elif isinstance(value, str):
        return _NUMERIC_STRING.fullmatch(value) is not None
    else:
        return False


def _render_parameters(parameters: dict[str, object]) -> str:
    return ", ".join(f"{k}={v!r}" for k, v in parameters.items())


def _standard_quantile(p: float) -> float:
    """Acklam's approximation of the standard normal quantile. Relative error is
    below 1.15e-9 over (0, 1).
    """
    if not _is_numeric(p):
        logger.debug("Rejected non-numeric probability p=%r", p)
        raise OutOfRange(
            f"Could not estimate ICDF, p={p!r} is not a number.", p
        )

    try:
        q = float(p)
    except OverflowError:
        q = math.nan

    if q == 1:
        return math.inf
    elif 0 < q < P_LOW:
        return _tail_quantile(math.sqrt(-2.0 * math.log(q)))
    elif P_LOW <= q <= P_HIGH:
        return _central_quantile(q)
    elif P_HIGH < q < 1:
        return -_tail_quantile(math.sqrt(-2.0 * math.log(1.0 - q)))
    else:
        logger.debug("Rejected probability p=%r outside (0, 1]", p)
        raise OutOfRange(
            f"Could not estimate ICDF, p={p!r} is outside safe estimation region (0, 1].",
            p,
        )


@runtime_checkable
class Distribution(Protocol):
    """The capabilities shared by univariate distributions.

    Added in version 0.1.0
    ----------------------
    """

    def mean(self) -> float: ...

    def variance(self) -> float: ...

    def sd(self) -> float: ...

    def pdf(self, x: float) -> float: ...

    def cdf(self, x: float) -> float: ...

    def icdf(self, p: float) -> float: ...

    def rand(
        self, size: Optional[int] = None, rng: RandomLike = None
    ) -> Union[float, np.ndarray]: ...


class Normal:
    r"""The normal distribution \( N(\mu, \sigma^2) \), parameterized by its mean and
    variance. Instances are immutable.

    Parameters
    ----------
    mean : float, optional
        Location \( \mu \), by default 0
    variance : float, optional
        Dispersion \( \sigma^2 \). Must be strictly positive, by default 1
    skewness : float, optional
        Accepted for interface symmetry with a generalized normal. Validated but
        unused, by default 0
    kurtosis : float, optional
        Accepted for interface symmetry with a generalized normal. Validated but
        unused, by default 0

    Raises
    ------
    InvalidParameter
        If any parameter is not numeric, `mean` or `variance` is not finite, or
        `variance` is not strictly positive

    Examples
    --------
    ``` py
    import rapidnorm
    dist = rapidnorm.Normal(mean=5, variance=4)
    dist.sd()
    ```
    2.0

    Added in version 0.1.0
    ----------------------
    """

    __slots__ = ("_mean", "_variance")

    def __init__(
        self,
        mean: float = 0,
        variance: float = 1,
        skewness: float = 0,
        kurtosis: float = 0,
    ) -> None:
        self.validate_parameters(mean, variance, skewness, kurtosis)

        object.__setattr__(self, "_mean", float(mean))
        object.__setattr__(self, "_variance", float(variance))

    @staticmethod
    def validate_parameters(
        mean: float, variance: float, skewness: float = 0, kurtosis: float = 0
    ) -> None:
        """Checks that the parameters describe a valid normal distribution.

        Raises
        ------
        InvalidParameter
            If any parameter is not numeric, `mean` or `variance` is not finite, or
            `variance` is not strictly positive
        """
        parameters = {
            "mean": mean,
            "variance": variance,
            "skewness": skewness,
            "kurtosis": kurtosis,
        }

        if not all(_is_numeric(v) for v in parameters.values()):
            logger.debug("Rejected non-numeric parameters %r", parameters)
            raise InvalidParameter(
                f"Non-numeric parameter in normal distribution ({_render_parameters(parameters)}).",
                parameters,
            )

        try:
            finite = math.isfinite(float(mean)) and math.isfinite(float(variance))
        except OverflowError:
            finite = False

        if not finite:
            logger.debug("Rejected non-finite parameters %r", parameters)
            raise InvalidParameter(
                f"Non-finite parameter in normal distribution ({_render_parameters(parameters)}).",
                parameters,
            )

        if float(variance) <= 0:
            logger.debug("Rejected non-positive variance %r", variance)
            raise InvalidParameter(
                f"Variance must be strictly positive (it is sigma squared), got variance={variance!r}.",
                parameters,
            )

    def __setattr__(self, name, value):
        raise AttributeError(f"`{type(self).__name__}` is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"`{type(self).__name__}` is immutable")

    def __reduce__(self):
        return (type(self), (self._mean, self._variance))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(mean={self._mean!r}, variance={self._variance!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Normal):
            return NotImplemented

        return self._mean == other._mean and self._variance == other._variance

    def __hash__(self) -> int:
        return hash((self._mean, self._variance))

    def mean(self) -> float:
        return self._mean

    def variance(self) -> float:
        return self._variance

    def sd(self) -> float:
        r"""The standard deviation, \( \sqrt{\sigma^2} \)."""
        return math.sqrt(self._variance)

    def rand(
        self, size: Optional[int] = None, rng: RandomLike = None
    ) -> Union[float, np.ndarray]:
        """Draws from this distribution. See `Normal.draw`."""
        return self.draw(self._mean, self._variance, size=size, rng=rng)

    @staticmethod
    def draw(
        mean: float,
        variance: float,
        size: Optional[int] = None,
        rng: RandomLike = None,
    ) -> Union[float, np.ndarray]:
        r"""Draws from \( N(\mu, \sigma^2) \) without constructing a distribution.
        The parameters are not validated.

        Parameters
        ----------
        mean : float
        variance : float
        size : Optional[int], optional
            Number of draws. If None, a single float is returned, by default None
        rng : None | int | Random | np.random.Generator, optional
            Source of randomness. None uses a shared unseeded `Random`, an integer
            seeds a fresh `Random`, by default None

        Returns
        -------
        float | np.ndarray
        """
        return _to_random(rng).normal(mean, variance, size)

    @staticmethod
    def box_muller(rng: RandomLike = None) -> float:
        """One standard normal variate via the Box-Muller transform."""
        return _to_random(rng).standard_normal()

    def pdf(self, x: float) -> float:
        # NOTE: z is scaled by the variance, not the standard deviation, so the density
        # integrates to 1 only when variance == 1.
        z = (x - self._mean) / self._variance

        return math.exp(-z * z / 2) / (
            self._variance * math.sqrt(math.pi) * math.sqrt(2)
        )

    def cdf(self, x: float) -> float:
        r"""The cumulative distribution function

        \[
            F(x) = \frac{1}{2}\left[1 + \text{erf}\left(\frac{x - \mu}{\sigma\sqrt{2}}\right)\right]
        \]
        """
        d = x - self._mean

        return 0.5 * (1 + math.erf(d / (math.sqrt(self._variance) * math.sqrt(2))))

    def sf(self, x: float) -> float:
        """The survival function, 1 - CDF, computed with `erfc` to keep precision in
        the upper tail.

        Added in version 0.1.0
        ----------------------
        """
        d = x - self._mean

        return 0.5 * math.erfc(d / (math.sqrt(self._variance) * math.sqrt(2)))

    def icdf(self, p: float) -> float:
        r"""The inverse cumulative distribution function, also called the quantile or
        percent point function. Uses Peter John Acklam's rational approximation of
        the standard normal quantile, which splits (0, 1) into a central region and
        two tails, and then rescales

        \[
            F^{-1}(p) = \mu + \sigma \Phi^{-1}(p)
        \]

        Parameters
        ----------
        p : float
            Probability in (0, 1]

        Returns
        -------
        float
            The quantile. If `p` is 1, returns infinity.

        Raises
        ------
        OutOfRange
            If `p` is not in (0, 1]
        """
        x = _standard_quantile(p)

        if math.isinf(x):
            return x

        return self._mean + self.sd() * x

    def ppf(self, p: float) -> float:
        """Alias of `Normal.icdf`."""
        return self.icdf(p)


_STANDARD_NORMAL = Normal()


class norm:
    """Functions for working with a standard normal continuous random variable."""

    @staticmethod
    def ppf(q: float) -> float:
        r"""The percent point function. Also called the quantile, percentile, inverse
        CDF, or inverse distribution function. Computes the value of a random variable
        such that its probability is \( \leq q \). If `q` is 1, it returns infinity.

        Parameters
        ----------
        q : float
            Probability value in (0, 1]

        Returns
        -------
        float
            The value at or below which a standard normal random variable falls with
            probability `q`

        Raises
        ------
        OutOfRange
            If `q` is not in (0, 1]
        """
        return _STANDARD_NORMAL.icdf(q)

    @staticmethod
    def cdf(x: float) -> float:
        r"""The cumulative distribution function.

        Parameters
        ----------
        x : float

        Returns
        -------
        float
            The probability a random variable will take a value \( \leq x \)
        """
        return _STANDARD_NORMAL.cdf(x)
