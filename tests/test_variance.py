import warnings

import numpy as np
import pytest

from natural import DegenerateFitWarning, FitRecord, VarianceEstimator


def make_fit(rss=4.0, coef=(1.0, -2.0, 0.0), lambda_=0.1, df=2):
    return FitRecord(
        lambda_=lambda_,
        coef=np.array(coef),
        coef_scaled=np.array(coef),
        intercept=0.0,
        df=df,
        rss=rss,
    )


def test_natural_lasso_estimators():
    estimate = VarianceEstimator(n_observations=10, penalty="natural").from_fit(make_fit())
    assert estimate.sig_naive == pytest.approx(0.4)
    assert estimate.sig_obj == pytest.approx(0.4 + 2 * 0.1 * 3.0)
    assert estimate.sig_df == pytest.approx(4.0 / 8)
    assert estimate.penalty == "natural"
    assert estimate.lambda_ == 0.1


def test_organic_lasso_uses_squared_l1():
    estimate = VarianceEstimator(n_observations=10, penalty="organic").from_fit(make_fit())
    assert estimate.sig_obj == pytest.approx(0.4 + 2 * 0.1 * 3.0**2)
    assert estimate.sig_naive == pytest.approx(0.4)
    assert estimate.penalty == "organic"


def test_objective_uses_coefficients_on_penalized_scale():
    fit = FitRecord(
        lambda_=0.5,
        coef=np.array([10.0]),
        coef_scaled=np.array([1.0]),
        intercept=0.0,
        df=1,
        rss=0.0,
    )
    estimate = VarianceEstimator(5).from_fit(fit)
    assert estimate.sig_obj == pytest.approx(1.0)


@pytest.mark.parametrize("rss", [0.0, 1e-300, -1e-12], ids=["zero", "tiny", "negative"])
@pytest.mark.parametrize("penalty", ["natural", "organic"])
def test_estimators_are_non_negative(rss, penalty):
    estimator = VarianceEstimator(n_observations=20, penalty=penalty)
    estimate = estimator.from_fit(make_fit(rss=rss, coef=(0.0, 0.0)))
    assert estimate.sig_obj >= 0
    assert estimate.sig_naive >= 0
    assert estimate.sig_df >= 0
    assert estimator.sig_naive(rss) >= 0


@pytest.mark.parametrize("df", [10, 11], ids=["df_equal_n", "df_larger_n"])
def test_degenerate_degrees_of_freedom(df):
    estimator = VarianceEstimator(n_observations=10)
    with pytest.warns(DegenerateFitWarning):
        estimate = estimator.from_fit(make_fit(df=df))
    assert np.isnan(estimate.sig_df), "sig_df should be undefined"
    # The other estimators are unaffected
    assert estimate.sig_naive == pytest.approx(0.4)
    assert np.isfinite(estimate.sig_obj)


def test_no_warning_for_regular_fit():
    with warnings.catch_warnings():
        warnings.simplefilter("error", DegenerateFitWarning)
        VarianceEstimator(n_observations=10).from_fit(make_fit(df=9))


def test_from_path():
    fits = [make_fit(lambda_=lam) for lam in (0.3, 0.2, 0.1)]
    estimates = VarianceEstimator(n_observations=10).from_path(fits)
    assert [e.lambda_ for e in estimates] == [0.3, 0.2, 0.1]
    assert estimates[0].sig_obj > estimates[-1].sig_obj


def test_estimates_are_immutable():
    estimate = VarianceEstimator(n_observations=10).from_fit(make_fit())
    with pytest.raises(AttributeError):
        estimate.sig_obj = 0.0
    fit = make_fit()
    with pytest.raises(ValueError):
        fit.coef[0] = 1.0
