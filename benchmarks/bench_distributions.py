import math
import timeit
from pathlib import Path

import numpy as np
import polars as pl
import scipy.stats
import tqdm

import rapidnorm
import rapidnorm.polars as rnp

np.random.seed(208)

BASE_PATH = Path(__file__).resolve().parents[0]
TIMING_RUNS = 10
DIST = rapidnorm.Normal(5, 4)


def scalar_icdf(p):
    for x in p:
        DIST.icdf(x)


def scipy_scalar_ppf(p):
    for x in p:
        scipy.stats.norm.ppf(x, loc=5, scale=2)


def scalar_cdf(p):
    for x in p:
        DIST.cdf(x)


def scipy_scalar_cdf(p):
    for x in p:
        scipy.stats.norm.cdf(x, loc=5, scale=2)


def polars_ppf(p):
    pl.DataFrame({"p": p}).select(rnp.normal_ppf("p", 5, 4))


def polars_cdf(p):
    pl.DataFrame({"p": p}).select(rnp.normal_cdf("p", 5, 4))


def scipy_vector_ppf(p):
    scipy.stats.norm.ppf(p, loc=5, scale=2)


def rand(p):
    DIST.rand(size=len(p), rng=208)


def numpy_normal(p):
    np.random.default_rng(208).normal(5, math.sqrt(4), size=len(p))


def main():
    data = {"function": [], "data_size": [], "time": []}

    funcs = [
        scalar_icdf,
        scipy_scalar_ppf,
        scalar_cdf,
        scipy_scalar_cdf,
        polars_ppf,
        polars_cdf,
        scipy_vector_ppf,
        rand,
        numpy_normal,
    ]

    sizes = [100, 1_000, 10_000]

    with tqdm.tqdm(total=len(sizes) * len(funcs)) as pbar:
        for data_size in sizes:
            p = np.random.rand(data_size)

            for f in funcs:
                data["function"].append(f.__name__)
                data["data_size"].append(data_size)
                data["time"].append(
                    timeit.timeit(lambda: f(p), number=TIMING_RUNS) / TIMING_RUNS
                )

                pbar.update()

    df = pl.DataFrame(data)
    df.write_parquet(BASE_PATH / "benchmark_distributions.parquet")

    print(df.pivot(on="data_size", index="function", values="time"))


if __name__ == "__main__":
    main()
