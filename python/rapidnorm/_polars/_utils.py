from __future__ import annotations

from typing import Union

import polars as pl

IntoExprColumn = Union[pl.Expr, str]
NumericLiteral = Union[float, int]


def _str_to_expr(expr: IntoExprColumn) -> pl.Expr:
    if isinstance(expr, str):
        return pl.col(expr)
    elif isinstance(expr, pl.Expr):
        return expr
    else:
        raise TypeError("Must be of type `str` or `pl.Expr`")


def _is_numeric_literal(expr) -> bool:
    return isinstance(expr, (float, int)) and not isinstance(expr, bool)


def _numeric_to_expr(expr: IntoExprColumn | NumericLiteral) -> pl.Expr:
    if isinstance(expr, pl.Expr):
        return expr
    elif isinstance(expr, str):
        return pl.col(expr)
    elif _is_numeric_literal(expr):
        return pl.lit(float(expr))
    else:
        raise TypeError("Must be of type `int`, `float`, `str`, or `pl.Expr`")
