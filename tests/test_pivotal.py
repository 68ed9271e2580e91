import numpy as np
import pytest

from natural import InvalidInputError, PivotalTuningSelector


def test_lambda_1_closed_form(sparse_data):
    X, _ = sparse_data
    selector = PivotalTuningSelector()
    assert selector.lambda_1(X) == pytest.approx(np.log(10) / 50)


def test_lambda_1_requires_two_features():
    X = np.random.default_rng(0).standard_normal((20, 1))
    with pytest.raises(InvalidInputError):
        PivotalTuningSelector().lambda_1(X)


@pytest.mark.parametrize("n_jobs", [1, 2], ids=["sequential", "parallel"])
def test_lambda_2_is_reproducible(sparse_data, n_jobs):
    X, _ = sparse_data
    reference = PivotalTuningSelector(n_replicates=50, random_state=42).lambda_2(X)
    other = PivotalTuningSelector(
        n_replicates=50, random_state=42, n_jobs=n_jobs
    ).lambda_2(X)
    assert other == reference


def test_lambda_2_depends_on_seed(sparse_data):
    X, _ = sparse_data
    first = PivotalTuningSelector(n_replicates=50, random_state=0).lambda_2(X)
    second = PivotalTuningSelector(n_replicates=50, random_state=1).lambda_2(X)
    assert first != second


def test_lambda_2_scale(sparse_data):
    # For standardized X, X^T e / n has entries with variance 1 / n, so lambda_2
    # is of the order log(p) / n.
    X, _ = sparse_data
    replicates = PivotalTuningSelector(n_replicates=200, random_state=0).replicates(X)
    assert replicates.shape == (200,)
    assert np.all(replicates > 0)
    assert 1 / 50 / 10 < np.mean(replicates) < 10 * np.log(10) / 50


def test_lambda_2_quantile(sparse_data):
    X, _ = sparse_data
    replicates = PivotalTuningSelector(n_replicates=100, random_state=0).replicates(X)
    median = PivotalTuningSelector(
        n_replicates=100, quantile=0.5, random_state=0
    ).lambda_2(X)
    maximum = PivotalTuningSelector(
        n_replicates=100, quantile=1.0, random_state=0
    ).lambda_2(X)
    assert median == pytest.approx(np.median(replicates))
    assert maximum == pytest.approx(np.max(replicates))


@pytest.mark.parametrize(
    "params",
    [{"n_replicates": 0}, {"quantile": 1.5}, {"quantile": -0.1}],
    ids=["no_replicates", "quantile_too_large", "quantile_negative"],
)
def test_invalid_parameters(sparse_data, params):
    X, y = sparse_data
    with pytest.raises(InvalidInputError):
        PivotalTuningSelector(**params).fit(X, y)


def test_pivotal_fit(make_data):
    X, y = make_data(n=100, p=20, seed=5, sigma2=1.0)
    result = PivotalTuningSelector(n_replicates=100, random_state=0).fit(X, y)

    assert result.lambda_1 == pytest.approx(np.log(20) / 100)
    assert result.fit_1.lambda_ == result.lambda_1
    assert result.fit_2.lambda_ == result.lambda_2
    assert result.estimate_1.penalty == "organic"
    assert result.replicates.shape == (100,)
    # sig_obj exceeds the naive estimate by the penalty term 2 lambda ||b||_1^2,
    # which grows with the signal strength.
    for fit, estimate in ((result.fit_1, result.estimate_1), (result.fit_2, result.estimate_2)):
        penalty = 2 * fit.lambda_ * np.sum(np.abs(fit.coef_scaled)) ** 2
        assert np.isfinite(estimate.sig_obj)
        assert estimate.sig_naive <= estimate.sig_obj
        assert estimate.sig_obj == pytest.approx(estimate.sig_naive + penalty)
        assert 0.3 < estimate.sig_naive < 3.0


def test_pivotal_fit_single_feature_fails():
    rng = np.random.default_rng(0)
    X = rng.standard_normal((30, 1))
    y = X[:, 0] + rng.standard_normal(30)
    with pytest.raises(InvalidInputError):
        PivotalTuningSelector().fit(X, y)
