from __future__ import annotations

import math

import polars as pl
import scipy.special

from .._distributions import (
    P_HIGH,
    P_LOW,
    Normal,
    _central_quantile,
    _tail_quantile,
)
from ._utils import (
    IntoExprColumn,
    NumericLiteral,
    _is_numeric_literal,
    _numeric_to_expr,
    _str_to_expr,
)


def _validate_literals(
    mean: IntoExprColumn | NumericLiteral, variance: IntoExprColumn | NumericLiteral
) -> None:
    # Column parameters can only be checked row-wise, so only literals are validated.
    Normal.validate_parameters(
        mean if _is_numeric_literal(mean) else 0.0,
        variance if _is_numeric_literal(variance) else 1.0,
    )


def _erf(s: pl.Series) -> pl.Series:
    res = pl.Series(s.name, scipy.special.erf(s.to_numpy()), dtype=pl.Float64)

    if s.null_count() > 0:
        res = res.scatter(s.is_null().arg_true(), None)

    return res


def _where_valid_variance(res: pl.Expr, variance: pl.Expr) -> pl.Expr:
    # Column variances are only known row-wise, so rows with variance <= 0 are NaN.
    return pl.when(variance.gt(0.0) | variance.is_null()).then(res).otherwise(math.nan)


def normal_pdf(
    x: IntoExprColumn,
    mean: IntoExprColumn | NumericLiteral = 0.0,
    variance: IntoExprColumn | NumericLiteral = 1.0,
) -> pl.Expr:
    r"""Evaluates `rapidnorm.Normal.pdf` row-wise. Rows whose variance is not positive
    are NaN.

    \[
        f(x) = \frac{e^{-z^2 / 2}}{\sigma^2 \sqrt{2\pi}}, \quad z = \frac{x - \mu}{\sigma^2}
    \]

    Parameters
    ----------
    x : pl.Expr | str
    mean : pl.Expr | str | float, optional
        Mean of the distribution, by default 0.0
    variance : pl.Expr | str | float, optional
        Variance of the distribution, by default 1.0

    Returns
    -------
    pl.Expr

    Raises
    ------
    InvalidParameter
        If `mean` or `variance` is a literal that does not describe a valid normal
        distribution

    Added in version 0.1.0
    ----------------------
    """
    _validate_literals(mean, variance)

    x = _str_to_expr(x).cast(pl.Float64)
    mean = _numeric_to_expr(mean)
    variance = _numeric_to_expr(variance)

    z = x.sub(mean).truediv(variance)

    res = (
        z.pow(2)
        .truediv(-2.0)
        .exp()
        .truediv(variance.mul(math.sqrt(math.pi) * math.sqrt(2)))
    )

    return _where_valid_variance(res, variance)


def normal_cdf(
    x: IntoExprColumn,
    mean: IntoExprColumn | NumericLiteral = 0.0,
    variance: IntoExprColumn | NumericLiteral = 1.0,
) -> pl.Expr:
    """Evaluates `rapidnorm.Normal.cdf` row-wise. The error function is scipy's
    vectorized `scipy.special.erf`. Rows whose variance is not positive are NaN.

    Parameters
    ----------
    x : pl.Expr | str
    mean : pl.Expr | str | float, optional
        Mean of the distribution, by default 0.0
    variance : pl.Expr | str | float, optional
        Variance of the distribution, by default 1.0

    Returns
    -------
    pl.Expr

    Raises
    ------
    InvalidParameter
        If `mean` or `variance` is a literal that does not describe a valid normal
        distribution

    Examples
    --------
    ``` py
    import polars as pl
    import rapidnorm.polars as rnp

    df = pl.DataFrame({"x": [-1.0, 0.0, 1.0]})
    df.select(rnp.normal_cdf("x"))
    ```
    ``` title="output"
    shape: (3, 1)
    ┌──────────┐
    │ x        │
    │ ---      │
    │ f64      │
    ╞══════════╡
    │ 0.158655 │
    │ 0.5      │
    │ 0.841345 │
    └──────────┘
    ```

    Added in version 0.1.0
    ----------------------
    """
    _validate_literals(mean, variance)

    x = _str_to_expr(x).cast(pl.Float64)
    mean = _numeric_to_expr(mean)
    variance = _numeric_to_expr(variance)

    res = (
        x.sub(mean)
        .truediv(variance.sqrt().mul(math.sqrt(2)))
        .map_batches(_erf, return_dtype=pl.Float64)
        .add(1.0)
        .mul(0.5)
    )

    return _where_valid_variance(res, variance)


def normal_ppf(
    p: IntoExprColumn,
    mean: IntoExprColumn | NumericLiteral = 0.0,
    variance: IntoExprColumn | NumericLiteral = 1.0,
) -> pl.Expr:
    """Evaluates `rapidnorm.Normal.icdf` row-wise with the same Acklam approximation.

    An expression cannot raise for a single row, so unlike `Normal.icdf`, a `p`
    outside of (0, 1], or a row whose variance is not positive, results in NaN. If
    `p` is 1, the result is infinity. Nulls propagate.

    Parameters
    ----------
    p : pl.Expr | str
        Probabilities
    mean : pl.Expr | str | float, optional
        Mean of the distribution, by default 0.0
    variance : pl.Expr | str | float, optional
        Variance of the distribution, by default 1.0

    Returns
    -------
    pl.Expr

    Raises
    ------
    InvalidParameter
        If `mean` or `variance` is a literal that does not describe a valid normal
        distribution

    Added in version 0.1.0
    ----------------------
    """
    _validate_literals(mean, variance)

    p = _str_to_expr(p).cast(pl.Float64)
    mean = _numeric_to_expr(mean)
    variance = _numeric_to_expr(variance)

    lower_q = p.log().mul(-2.0).sqrt()
    upper_q = pl.lit(1.0).sub(p).log().mul(-2.0).sqrt()

    x = (
        pl.when(p.is_null())
        .then(p)
        .when(p.eq(1.0))
        .then(math.inf)
        .when(p.gt(0.0) & p.lt(P_LOW))
        .then(_tail_quantile(lower_q))
        .when(p.ge(P_LOW) & p.le(P_HIGH))
        .then(_central_quantile(p))
        .when(p.gt(P_HIGH) & p.lt(1.0))
        .then(-_tail_quantile(upper_q))
        .otherwise(math.nan)
    )

    return _where_valid_variance(x.mul(variance.sqrt()).add(mean), variance)
