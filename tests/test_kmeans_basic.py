# tests/test_kmeans_basic.py
"""
Clustering driver

Covers:
- exactly K centroids and one label per sample, labels in [0, K)
- the black/white example and the K=1 mean example
- fixed seed gives identical results across fits
- objective is non-increasing over iterations
- labels are consistent with the returned centroids
- status transitions, iteration cap, verbose output and warnings
- per-iteration history only keeps per-cluster data
- invalid input is reported before any work
"""

from __future__ import annotations

import warnings

import numpy as np
import pytest
import torch

from colorquant import KMeans, FitStatus
from colorquant.base.exceptions import (
    InvalidInputError, NotFittedError, DimensionMismatchError, ConvergenceWarning
)
from colorquant.utils.metrics import inertia

from data_gen import make_color_blobs
from utils import match_centers, labels_equal_up_to_perm


BLACK_WHITE = [[0, 0, 0], [0, 0, 0], [255, 255, 255], [255, 255, 255]]


def test_kmeans_fits_simple_blobs(torch_device):
    X, y, C = make_color_blobs(n_per=60, noise=3.0, seed=0)

    km = KMeans(n_clusters=4, random_state=0, device=torch_device)
    km.fit(X)

    assert km.labels_.shape == (X.shape[0],)
    assert km.cluster_centers_.shape == (4, 3)
    assert int(km.labels_.min()) >= 0 and int(km.labels_.max()) < 4
    assert km.status_ in (FitStatus.CONVERGED, FitStatus.MAX_ITERATIONS_REACHED)


def test_black_and_white_example(torch_device):
    km = KMeans(n_clusters=2, random_state=3, device=torch_device).fit(BLACK_WHITE)

    centers = km.cluster_centers_
    labels = km.labels_.tolist()

    # Even when both initial draws hit the same color, the empty cluster keeps
    # that color and the pair separates on the next round.
    assert labels[0] == labels[1]
    assert labels[2] == labels[3]
    assert labels[0] != labels[2]

    err, _ = match_centers(centers, np.array([[0, 0, 0], [255, 255, 255]]))
    assert err < 1e-9
    assert km.status_ is FitStatus.CONVERGED


def test_black_and_white_with_separate_initial_centers(torch_device):
    km = KMeans(n_clusters=2, init=[[0, 0, 0], [255, 255, 255]], device=torch_device)
    km.fit(BLACK_WHITE)

    assert km.labels_.tolist() == [0, 0, 1, 1]
    assert torch.equal(km.cluster_centers_,
                       torch.tensor([[0.0, 0.0, 0.0], [255.0, 255.0, 255.0]], dtype=torch.float64))
    assert km.status_ is FitStatus.CONVERGED
    assert km.n_iter_ == 1


def test_single_cluster_is_the_mean(rng, torch_device):
    X = rng.integers(0, 256, size=(37, 3)).astype(np.float64)

    km = KMeans(n_clusters=1, random_state=5, device=torch_device).fit(X)

    assert torch.allclose(km.cluster_centers_[0], torch.from_numpy(X.mean(axis=0)))
    assert km.labels_.tolist() == [0] * 37
    assert km.status_ is FitStatus.CONVERGED


def test_fixed_seed_is_idempotent(torch_device):
    X, _, _ = make_color_blobs(n_per=40, noise=20.0, seed=11)

    a = KMeans(n_clusters=5, random_state=123, device=torch_device).fit(X)
    b = KMeans(n_clusters=5, random_state=123, device=torch_device).fit(X)
    assert torch.equal(a.labels_, b.labels_)
    assert torch.equal(a.cluster_centers_, b.cluster_centers_)

    # Refitting the same estimator uses a fresh generator for int seeds
    first_centers = a.cluster_centers_.clone()
    a.fit(X)
    assert torch.equal(a.cluster_centers_, first_centers)


def test_generator_random_state(torch_device):
    X, _, _ = make_color_blobs(n_per=30, seed=2)
    g1 = torch.Generator().manual_seed(9)
    g2 = torch.Generator().manual_seed(9)

    a = KMeans(n_clusters=4, random_state=g1, device=torch_device).fit(X)
    b = KMeans(n_clusters=4, random_state=g2, device=torch_device).fit(X)
    assert torch.equal(a.cluster_centers_, b.cluster_centers_)


def test_objective_non_increasing(rng, torch_device):
    X = rng.uniform(0, 255, size=(500, 3))

    km = KMeans(n_clusters=8, random_state=0, max_iter=50, device=torch_device).fit(X)
    objectives = [state.objective_value for state in km.history_]

    assert len(objectives) == km.n_iter_
    for prev, cur in zip(objectives, objectives[1:]):
        assert cur <= prev + 1e-6 * max(1.0, abs(prev))


def test_final_labels_match_returned_centroids(rng, torch_device):
    X = rng.uniform(0, 255, size=(300, 3))

    # A tiny iteration cap leaves the last loop assignment stale
    km = KMeans(n_clusters=6, random_state=1, max_iter=2, device=torch_device).fit(X)
    centers = km.cluster_centers_
    Xt = torch.from_numpy(X)

    d = ((Xt.unsqueeze(1) - centers.unsqueeze(0)) ** 2).sum(dim=2)
    assigned = d.gather(1, km.labels_.unsqueeze(1)).squeeze(1)
    assert torch.allclose(assigned, d.min(dim=1).values)
    assert km.inertia_ == pytest.approx(inertia(Xt, km.labels_, centers))


def test_status_lifecycle(torch_device):
    km = KMeans(n_clusters=2, random_state=0, device=torch_device)
    assert km.status_ is FitStatus.UNINITIALIZED
    assert not km.status_.is_terminal

    km.fit(BLACK_WHITE)
    assert km.status_.is_terminal


def test_max_iterations_reached(rng, torch_device):
    X = rng.uniform(0, 255, size=(400, 3))
    km = KMeans(n_clusters=10, random_state=0, max_iter=1, device=torch_device).fit(X)

    assert km.n_iter_ == 1
    if not km.history_[-1].converged:
        assert km.status_ is FitStatus.MAX_ITERATIONS_REACHED


def test_verbose_warns_when_not_converged(rng, torch_device, capsys):
    X = rng.uniform(0, 255, size=(400, 3))
    km = KMeans(n_clusters=10, random_state=0, max_iter=1, verbose=2, device=torch_device)

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        km.fit(X)

    out = capsys.readouterr().out
    assert "Initializing 10 clusters" in out
    assert "Iteration   0" in out
    assert "Total fitting time" in out
    if km.status_ is FitStatus.MAX_ITERATIONS_REACHED:
        assert any(issubclass(w.category, ConvergenceWarning) for w in caught)


def test_silent_by_default(capsys):
    KMeans(n_clusters=2, random_state=0, device="cpu").fit(BLACK_WHITE)
    assert capsys.readouterr().out == ""


def test_more_clusters_than_distinct_samples(torch_device):
    X = [[10, 10, 10], [10, 10, 10], [90, 90, 90]]
    km = KMeans(n_clusters=5, random_state=0, device=torch_device).fit(X)

    assert km.cluster_centers_.shape == (5, 3)
    assert not torch.isnan(km.cluster_centers_).any()
    assert len(km.labels_) == 3


def test_history_tracks_empty_clusters(torch_device):
    X = [[10, 10, 10], [10, 10, 10]]
    km = KMeans(n_clusters=3, init=[[10, 10, 10], [200, 0, 0], [0, 200, 0]],
                device=torch_device).fit(X)

    assert km.history_[0].metadata["empty_clusters"] == [1, 2]
    assert km.history_[0].counts.tolist() == [2, 0, 0]
    assert km.cluster_centers_[1].tolist() == [200.0, 0.0, 0.0]
    assert km.cluster_centers_[2].tolist() == [0.0, 200.0, 0.0]


def test_history_keeps_no_per_sample_tensors(rng, torch_device):
    X = rng.uniform(0, 255, size=(2000, 3))
    km = KMeans(n_clusters=4, random_state=0, tol=0.0, max_iter=5, device=torch_device).fit(X)

    for state in km.history_:
        tensors = [v for v in vars(state).values() if isinstance(v, torch.Tensor)]
        tensors += [v for v in vars(state.cluster_state).values() if isinstance(v, torch.Tensor)]
        assert all(t.shape[0] == 4 for t in tensors)
        assert int(state.counts.sum()) == 2000


def test_predict_and_score(torch_device):
    X, y, _ = make_color_blobs(n_per=50, noise=3.0, seed=4)
    km = KMeans(n_clusters=4, init=make_color_blobs()[2], device=torch_device).fit(X)

    pred = km.predict(X)
    assert labels_equal_up_to_perm(pred, y)
    assert torch.equal(km.fit_predict(X), km.labels_)
    assert km.score(X) == pytest.approx(-km.inertia_)


@pytest.mark.parametrize("samples", [[], np.empty((0, 3)), torch.empty(0, 3)])
def test_empty_samples_rejected(samples):
    with pytest.raises(InvalidInputError):
        KMeans(n_clusters=2).fit(samples)


@pytest.mark.parametrize("k", [0, -3])
def test_non_positive_k_rejected(k):
    with pytest.raises(InvalidInputError):
        KMeans(n_clusters=k).fit(BLACK_WHITE)


def test_invalid_max_iter_and_init():
    with pytest.raises(InvalidInputError):
        KMeans(n_clusters=2, max_iter=0).fit(BLACK_WHITE)
    with pytest.raises(InvalidInputError):
        KMeans(n_clusters=2, init="k-means++").fit(BLACK_WHITE)


def test_not_fitted_errors():
    km = KMeans(n_clusters=2)
    with pytest.raises(NotFittedError):
        km.predict(BLACK_WHITE)
    with pytest.raises(NotFittedError):
        _ = km.cluster_centers_
    with pytest.raises(NotFittedError):
        _ = km.inertia_


def test_predict_dimension_mismatch():
    km = KMeans(n_clusters=2, random_state=0, device="cpu").fit(BLACK_WHITE)
    with pytest.raises(DimensionMismatchError):
        km.predict([[1, 2, 3, 4]])


def test_get_and_set_params():
    km = KMeans(n_clusters=3, device="cpu")
    params = km.get_params()
    assert params["n_clusters"] == 3
    assert params["max_iter"] == 100
    assert params["tol"] == pytest.approx(1e-3)

    km.set_params(n_clusters=2)
    km.fit(BLACK_WHITE)
    assert km.cluster_centers_.shape == (2, 3)
