from ._polars._distributions import normal_cdf, normal_pdf, normal_ppf

__all__ = ["normal_cdf", "normal_pdf", "normal_ppf"]
