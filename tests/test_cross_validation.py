import numpy as np
import pytest

from natural import (
    CrossValidator,
    FitRecord,
    InvalidInputError,
    PathSolver,
    SolverFailureError,
)
from natural.cross_validation import select_lambda_1se, select_lambda_index


class ConstantSolver(PathSolver):
    """Predicts the mean of the training response for every lambda."""

    def __init__(self):
        self.calls = 0

    def fit_path(self, X, y, lambda_path, penalty, standardize=True):
        self.calls += 1
        return tuple(
            FitRecord(
                lambda_=float(lambda_),
                coef=np.zeros(X.shape[1]),
                coef_scaled=np.zeros(X.shape[1]),
                intercept=float(np.mean(y)),
                df=0,
                rss=float(np.sum((y - np.mean(y)) ** 2)),
            )
            for lambda_ in lambda_path
        )


class FailOnSmallSampleSolver(ConstantSolver):
    """Fails for the held-in data of the cross-validation, i.e. all but the full sample."""

    def __init__(self, n_full):
        super().__init__()
        self.n_full = n_full

    def fit_path(self, X, y, lambda_path, penalty, standardize=True):
        if X.shape[0] < self.n_full:
            raise SolverFailureError("Degenerate fold.")
        return super().fit_path(X, y, lambda_path, penalty, standardize)


@pytest.mark.parametrize("penalty", ["natural", "organic"])
def test_cv_curve(sparse_data, penalty):
    X, y = sparse_data
    lambda_n = 20
    result = CrossValidator(
        penalty=penalty, n_folds=5, lambda_n=lambda_n, random_state=1
    ).fit(X, y)

    curve = result.curve
    assert len(curve) == lambda_n
    assert curve.cv_mean.shape == curve.cv_se.shape == (lambda_n,)
    assert curve.fold_errors.shape == (5, lambda_n)
    assert np.all(np.diff(curve.lambda_path) < 0)
    assert np.allclose(curve.cv_mean, curve.fold_errors.mean(axis=0))
    assert np.all(curve.cv_se >= 0)
    assert result.n_folds == 5
    assert result.lambda_min == curve.lambda_path[result.index_min]
    assert result.lambda_1se >= result.lambda_min
    assert result.fit.lambda_ == result.lambda_min
    assert result.estimate.lambda_ == result.lambda_min
    assert result.estimate.penalty == penalty
    assert result.curve.cv_mean[result.index_min] == np.min(result.curve.cv_mean)


def test_cv_keeps_user_path_order(sparse_data):
    X, y = sparse_data
    user_path = np.array([0.05, 0.5, 0.01, 0.2])
    result = CrossValidator(n_folds=3, random_state=0).fit(X, y, lambda_path=user_path)
    assert np.array_equal(result.curve.lambda_path, user_path)
    assert result.lambda_min in user_path


def test_cv_single_lambda(sparse_data):
    X, y = sparse_data
    result = CrossValidator(n_folds=5, random_state=0).fit(X, y, lambda_path=[0.1])
    assert len(result.curve) == 1
    assert result.index_min == 0
    assert result.lambda_min == 0.1


def test_cv_is_reproducible(sparse_data):
    X, y = sparse_data
    first = CrossValidator(lambda_n=15, random_state=3).fit(X, y)
    second = CrossValidator(lambda_n=15, random_state=3, n_jobs=2).fit(X, y)
    assert np.array_equal(first.fold_ids, second.fold_ids)
    assert np.array_equal(first.curve.cv_mean, second.curve.cv_mean)
    assert first.lambda_min == second.lambda_min
    assert first.estimate == second.estimate


def test_cv_user_fold_ids(sparse_data):
    X, y = sparse_data
    fold_ids = np.arange(X.shape[0]) % 4
    result = CrossValidator(n_folds=10, lambda_n=10).fit(X, y, fold_ids=fold_ids)
    assert result.n_folds == 4
    assert np.array_equal(result.fold_ids, fold_ids)


def test_tie_break_prefers_smaller_lambda():
    lambda_path = np.array([1.0, 0.5, 0.25, 0.125])
    cv_mean = np.array([2.0, 1.0, 1.0, 3.0])
    assert select_lambda_index(lambda_path, cv_mean) == 2

    # independent of the order of the path
    assert select_lambda_index(lambda_path[::-1], cv_mean[::-1]) == 1

    # all equal: the smallest lambda
    assert select_lambda_index(lambda_path, np.ones(4)) == 3


def test_tie_break_in_cross_validation(sparse_data):
    # A constant predictor has the same CV error for every lambda.
    X, y = sparse_data
    user_path = np.array([0.3, 0.1, 0.2])
    result = CrossValidator(solver=ConstantSolver(), n_folds=5, random_state=0).fit(
        X, y, lambda_path=user_path
    )
    assert np.all(result.curve.cv_mean == result.curve.cv_mean[0])
    assert result.lambda_min == 0.1
    assert result.index_min == 1


def test_lambda_1se():
    lambda_path = np.array([1.0, 0.5, 0.25, 0.125])
    cv_mean = np.array([3.0, 1.5, 1.0, 1.2])
    cv_se = np.array([0.1, 0.1, 0.6, 0.1])
    assert select_lambda_1se(lambda_path, cv_mean, cv_se, index_min=2) == 0.5


def test_natural_lasso_cv_recovers_variance(make_data):
    # n = 50, p = 10, two non-zero coefficients and sigma^2 = 1.
    for seed in range(3):
        X, y = make_data(n=50, p=10, seed=seed, sigma2=1.0)
        result = CrossValidator(n_folds=5, lambda_n=50, random_state=seed).fit(X, y)
        assert 0.5 <= result.estimate.sig_df <= 2.0, f"sig_df off for seed {seed}"
        assert result.estimate.sig_obj >= result.estimate.sig_naive
        assert result.fit.df >= 2, "The true variables should be selected"


@pytest.mark.parametrize("n_folds", [1, 51])
def test_invalid_number_of_folds(sparse_data, n_folds):
    X, y = sparse_data
    solver = ConstantSolver()
    with pytest.raises(InvalidInputError):
        CrossValidator(n_folds=n_folds, solver=solver).fit(X, y)
    assert solver.calls == 0


def test_no_columns_rejected():
    solver = ConstantSolver()
    with pytest.raises(InvalidInputError):
        CrossValidator(solver=solver).fit(np.empty((20, 0)), np.zeros(20))
    assert solver.calls == 0


def test_fold_failure_aborts_cross_validation(sparse_data):
    X, y = sparse_data
    solver = FailOnSmallSampleSolver(n_full=X.shape[0])
    with pytest.raises(SolverFailureError):
        CrossValidator(solver=solver, lambda_n=5).fit(X, y)


class NonFiniteSolver(ConstantSolver):
    """Predicts `nan` for every observation."""

    def fit_path(self, X, y, lambda_path, penalty, standardize=True):
        fits = super().fit_path(X, y, lambda_path, penalty, standardize)
        return tuple(
            FitRecord(
                lambda_=fit.lambda_,
                coef=fit.coef,
                coef_scaled=fit.coef_scaled,
                intercept=np.nan,
                df=0,
                rss=fit.rss,
            )
            for fit in fits
        )


def test_non_finite_cv_error_raises_solver_failure(sparse_data):
    X, y = sparse_data
    with pytest.raises(SolverFailureError):
        CrossValidator(solver=NonFiniteSolver(), random_state=0).fit(
            X, y, lambda_path=[0.2, 0.1]
        )
