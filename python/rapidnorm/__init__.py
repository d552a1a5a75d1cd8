import logging

from rapidnorm import polars

from ._distributions import Distribution, Normal, norm
from ._exceptions import DistributionError, InvalidParameter, OutOfRange
from ._random import Random

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
