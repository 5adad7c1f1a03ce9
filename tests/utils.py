# tests/utils.py
"""
Small, reusable helpers used across the test suite.

Functions:
- match_centers(A, B): best one-to-one matching of rows of A to rows of B; returns (max_error, perm).
- labels_equal_up_to_perm(y1, y2): whether two labelings describe the same partition.
- time_block(label, meta=None): context manager that prints wall-clock time with optional metadata.
- print_timing(label, seconds, **meta): convenience printer for timings (used by time_block).

Notes:
- Keep dependencies light; torch is optional.
"""

from __future__ import annotations

import json
import itertools
import time
from contextlib import contextmanager
from typing import Any, Dict, Tuple, Union

import numpy as np

try:
    import torch
    from torch import Tensor as TorchTensor
except Exception:  # pragma: no cover
    torch = None  # type: ignore
    TorchTensor = None  # type: ignore

ArrayLike = Union[np.ndarray, "TorchTensor"]


def _is_torch(x: Any) -> bool:
    return (torch is not None) and isinstance(x, torch.Tensor)


def _to_numpy(x: ArrayLike) -> np.ndarray:
    if _is_torch(x):
        x = x.detach().cpu().numpy()
    return np.asarray(x)


# ----------------------------
# Public helpers
# ----------------------------
def match_centers(A: ArrayLike, B: ArrayLike) -> Tuple[float, Tuple[int, ...]]:
    """
    Match rows of A to rows of B over all permutations.

    Returns
    -------
    (max_error, perm)
      max_error: largest absolute coordinate difference of the best matching
      perm     : tuple p such that A[i] is matched to B[p[i]]

    Notes
    -----
    O(k!) brute force; tests keep k small.
    """
    A_np = _to_numpy(A).astype(np.float64)
    B_np = _to_numpy(B).astype(np.float64)
    if A_np.shape != B_np.shape:
        raise ValueError(f"Shape mismatch: A {A_np.shape} vs B {B_np.shape}")
    k = A_np.shape[0]

    best_err = np.inf
    best_perm: Tuple[int, ...] = tuple(range(k))
    for perm in itertools.permutations(range(k)):
        err = float(np.max(np.abs(A_np - B_np[list(perm)]))) if k else 0.0
        if err < best_err:
            best_err = err
            best_perm = perm
    return best_err, best_perm


def labels_equal_up_to_perm(y1: ArrayLike, y2: ArrayLike) -> bool:
    """True if y1 and y2 induce the same partition of the samples."""
    a = _to_numpy(y1).reshape(-1)
    b = _to_numpy(y2).reshape(-1)
    if a.shape != b.shape:
        return False
    forward: Dict[int, int] = {}
    backward: Dict[int, int] = {}
    for u, v in zip(a.tolist(), b.tolist()):
        if forward.setdefault(u, v) != v or backward.setdefault(v, u) != u:
            return False
    return True


@contextmanager
def time_block(label: str, meta: Dict[str, Any] | None = None):
    """
    Context manager to time a block and print a single-line summary.

    Example
    -------
    >>> with time_block("fit", {"n": 400, "K": 4}):
    ...     model.fit(X)

    Output
    ------
    [timing] fit {"n":400,"K":4} 0.123s
    """
    t0 = time.perf_counter()
    try:
        yield
    finally:
        dt = time.perf_counter() - t0
        print_timing(label, dt, **(meta or {}))


def print_timing(label: str, seconds: float, **meta: Any) -> None:
    """
    Print timing in a compact, machine-readable single line.

    Example:
    [timing] fit {"n":400,"K":4} 0.123s
    """
    meta_str = ""
    if meta:
        try:
            meta_str = " " + json.dumps(meta, separators=(",", ":"))
        except (TypeError, ValueError):
            meta_str = " " + repr(meta)
    print(f"[timing] {label}{meta_str} {seconds:.3f}s")
