from __future__ import annotations

import logging
import math
import numbers
from typing import Optional, Union

import numpy as np

logger = logging.getLogger(__name__)

RandomLike = Union["Random", np.random.Generator, int, None]


class Random:
    """A seedable source of uniform and normal random numbers.

    Normal variates are produced with the Box-Muller transform (Box, Muller 1958)
    from two independent uniforms. The underlying `numpy.random.Generator` is not
    thread-safe, so use one `Random` per thread.

    Parameters
    ----------
    seed : Optional[int], optional
        Seed that controls the stream. Set this to any integer to make results
        reproducible, by default None

    Examples
    --------
    ``` py
    import rapidnorm
    r = rapidnorm.Random(208)
    r.normal(5, 4, size=3)
    ```

    Added in version 0.1.0
    ----------------------
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self._generator = np.random.default_rng(seed)

        logger.debug("Created Random with seed=%r", seed)

    @classmethod
    def from_generator(cls, generator: np.random.Generator) -> Random:
        """Wrap an existing `numpy.random.Generator` without reseeding it."""
        r = cls.__new__(cls)
        r.seed = None
        r._generator = generator

        return r

    def random(self, size: Optional[int] = None) -> Union[float, np.ndarray]:
        """Uniform values in [0, 1)."""
        return self._generator.random(size)

    def uniform(self, size: Optional[int] = None) -> Union[float, np.ndarray]:
        """Uniform values in (0, 1]. Never exactly zero, so safe to pass to `log`."""
        return 1.0 - self._generator.random(size)

    def standard_normal(
        self, size: Optional[int] = None
    ) -> Union[float, np.ndarray]:
        r"""Draws from \( N(0, 1) \) via the Box-Muller transform

        \[
            z = \sqrt{-2 \ln u} \cos(2 \pi v)
        \]

        where \( u \in (0, 1] \) and \( v \in [0, 1) \).

        Parameters
        ----------
        size : Optional[int], optional
            Number of draws. If None, a single float is returned, by default None

        Returns
        -------
        float | np.ndarray
        """
        u = self.uniform(size)
        v = self.random(size)

        if size is None:
            return math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)

        logger.debug("Drawing %d standard normal variates", size)

        return np.sqrt(-2.0 * np.log(u)) * np.cos(2.0 * np.pi * v)

    def normal(
        self,
        mean: float = 0.0,
        variance: float = 1.0,
        size: Optional[int] = None,
    ) -> Union[float, np.ndarray]:
        """Draws from a normal distribution with the given mean and variance.

        Parameters
        ----------
        mean : float, optional
            Mean of the distribution, by default 0.0
        variance : float, optional
            Variance of the distribution (not the standard deviation), by default 1.0
        size : Optional[int], optional
            Number of draws. If None, a single float is returned, by default None

        Returns
        -------
        float | np.ndarray
        """
        return self.standard_normal(size) * math.sqrt(variance) + mean


_DEFAULT_RANDOM = Random()


def _to_random(rng: RandomLike) -> Random:
    if rng is None:
        return _DEFAULT_RANDOM
    elif isinstance(rng, Random):
        return rng
    elif isinstance(rng, np.random.Generator):
        return Random.from_generator(rng)
    elif isinstance(rng, numbers.Integral) and not isinstance(rng, bool):
        return Random(int(rng))
    else:
        raise TypeError(
            "`rng` must be None, an integer seed, a `rapidnorm.Random`, or a `numpy.random.Generator`"
        )
