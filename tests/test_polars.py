import math

import numpy as np
import polars as pl
import polars.testing as plt
import pytest
import scipy.stats

import rapidnorm as rn
import rapidnorm.polars as rnp

np.random.seed(208)

N_ROWS = 1_000
X = np.random.randn(N_ROWS) * 3
P = np.random.rand(N_ROWS)
PARAMS = [(0, 1), (5, 4), (-3.5, 0.25)]


@pytest.mark.parametrize("mean,variance", PARAMS)
def test_normal_pdf(mean, variance):
    dist = rn.Normal(mean, variance)
    res = pl.DataFrame({"x": X}).select(rnp.normal_pdf("x", mean, variance))["x"]

    assert pytest.approx([dist.pdf(x) for x in X]) == res.to_list()


@pytest.mark.parametrize("mean,variance", PARAMS)
def test_normal_cdf(mean, variance):
    res = pl.DataFrame({"x": X}).select(rnp.normal_cdf("x", mean, variance))["x"]
    ref = scipy.stats.norm.cdf(X, loc=mean, scale=math.sqrt(variance))

    assert pytest.approx(ref.tolist()) == res.to_list()


@pytest.mark.parametrize("mean,variance", PARAMS)
def test_normal_ppf(mean, variance):
    dist = rn.Normal(mean, variance)
    res = pl.DataFrame({"p": P}).select(rnp.normal_ppf("p", mean, variance))["p"]

    assert pytest.approx([dist.icdf(p) for p in P], rel=1e-12) == res.to_list()


def test_normal_ppf_tails():
    p = [1e-10, 0.001, 0.02425, 0.5, 0.97575, 0.999, 1 - 1e-10]
    res = pl.DataFrame({"p": p}).select(rnp.normal_ppf("p"))["p"]

    assert pytest.approx(scipy.stats.norm.ppf(p).tolist(), rel=1e-8) == res.to_list()


def test_normal_ppf_out_of_range():
    df = pl.DataFrame({"p": [1.0, 0.0, -0.1, 1.1, float("nan"), None]}).select(
        rnp.normal_ppf("p", 3, 2)
    )

    res = df["p"].to_list()

    assert res[0] == math.inf
    assert all(math.isnan(x) for x in res[1:5])
    assert res[5] is None


def test_normal_cdf_nulls():
    df = pl.DataFrame({"x": [None, 0.0]}, schema={"x": pl.Float64}).select(
        rnp.normal_cdf("x")
    )

    assert df["x"].to_list() == [None, 0.5]


def test_column_parameters():
    df = pl.DataFrame(
        {
            "x": [0.0, 1.0, 7.0],
            "p": [0.5, 0.975, 0.1],
            "mean": [0.0, 1.0, 5.0],
            "variance": [1.0, 4.0, 4.0],
        }
    ).with_columns(
        rnp.normal_cdf("x", "mean", "variance").alias("cdf"),
        rnp.normal_pdf(pl.col("x"), pl.col("mean"), pl.col("variance")).alias("pdf"),
        rnp.normal_ppf("p", "mean", pl.col("variance")).alias("ppf"),
    )

    rows = df.iter_rows(named=True)

    for row in rows:
        dist = rn.Normal(row["mean"], row["variance"])

        assert pytest.approx(dist.cdf(row["x"])) == row["cdf"]
        assert pytest.approx(dist.pdf(row["x"])) == row["pdf"]
        assert pytest.approx(dist.icdf(row["p"])) == row["ppf"]


def test_output_name():
    df = pl.DataFrame({"a": [0.0, 1.0], "b": [0.25, 0.75]}).with_columns(
        rnp.normal_cdf("a"), rnp.normal_ppf("b")
    )

    assert df.columns == ["a", "b"]

    plt.assert_series_equal(
        df["a"],
        pl.Series("a", [rn.norm.cdf(0.0), rn.norm.cdf(1.0)]),
    )
    plt.assert_series_equal(
        df["b"],
        pl.Series("b", [rn.norm.ppf(0.25), rn.norm.ppf(0.75)]),
    )


def test_group_by():
    df = pl.concat(
        pl.LazyFrame({"p": P}).with_columns(pl.lit(i).alias("idx")) for i in range(3)
    )

    res = (
        df.with_columns(rnp.normal_ppf("p").alias("ppf"))
        .group_by("idx")
        .agg(pl.col("ppf").mean())
        .collect()["ppf"]
        .to_list()
    )

    ref = sum(rn.norm.ppf(p) for p in P) / N_ROWS

    assert pytest.approx([ref] * 3) == res


@pytest.mark.parametrize("f", [rnp.normal_pdf, rnp.normal_cdf, rnp.normal_ppf])
def test_invalid_literal_parameters(f):
    with pytest.raises(rn.InvalidParameter):
        f("x", 0, 0)

    with pytest.raises(rn.InvalidParameter):
        f("x", 0, -1.0)

    with pytest.raises(rn.InvalidParameter):
        f("x", math.nan, 1)


@pytest.mark.parametrize("f", [rnp.normal_pdf, rnp.normal_cdf, rnp.normal_ppf])
def test_invalid_input_types(f):
    with pytest.raises(TypeError):
        f(1.0)

    with pytest.raises(TypeError):
        f("x", [0.0])

    with pytest.raises(TypeError):
        f("x", 0.0, True)


@pytest.mark.parametrize("f", [rnp.normal_pdf, rnp.normal_cdf, rnp.normal_ppf])
def test_non_positive_variance_column(f):
    df = pl.DataFrame(
        {"x": [0.5, 0.5, 0.5, 0.5], "variance": [-1.0, 0.0, None, 4.0]}
    ).select(f("x", 0.0, "variance"))

    res = df["x"].to_list()

    assert math.isnan(res[0])
    assert math.isnan(res[1])
    assert res[2] is None
    assert not math.isnan(res[3])


def test_normal_pdf_never_negative():
    variance = np.random.randn(N_ROWS)
    res = pl.DataFrame({"x": X, "variance": variance}).select(
        rnp.normal_pdf("x", 0.0, "variance")
    )["x"]

    assert res.filter(pl.Series(variance > 0)).ge(0).all()
    assert res.filter(pl.Series(variance <= 0)).is_nan().all()


def test_normal_cdf_matches_scalar_with_nulls():
    x = [-2.0, None, 0.3, float("nan"), 8.0]
    res = pl.DataFrame({"x": x}, schema={"x": pl.Float64}).select(
        rnp.normal_cdf("x", 1, 4)
    )["x"].to_list()

    dist = rn.Normal(1, 4)

    assert pytest.approx(dist.cdf(-2.0)) == res[0]
    assert res[1] is None
    assert pytest.approx(dist.cdf(0.3)) == res[2]
    assert math.isnan(res[3])
    assert pytest.approx(dist.cdf(8.0)) == res[4]
