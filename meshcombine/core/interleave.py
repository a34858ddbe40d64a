"""Conversion between separate per-channel index arrays and one interleaved array."""

from __future__ import annotations

from typing import Sequence

import chex
import jax.numpy as jnp
import numpy as np

from .._constants import INDEX_DTYPE
from ..exceptions import LengthMismatchError

_INDEX_MAX = int(np.iinfo(np.uint32).max)


def as_index_array(values, name: str = "index array") -> chex.Array:
    """Convert ``values`` to a one-dimensional ``uint32`` JAX array.

    Raises:
        ValueError: If ``values`` is not one-dimensional, holds non-integer (including
            boolean) values, or has entries outside the uint32 range.
    """
    host = np.asarray(values)
    if host.ndim != 1:
        raise ValueError(f"{name} must be one-dimensional, got shape {host.shape}.")
    if host.size == 0:
        return jnp.zeros((0,), dtype=INDEX_DTYPE)
    if not np.issubdtype(host.dtype, np.integer):
        raise ValueError(f"{name} must hold integers, got dtype {host.dtype}.")
    if np.issubdtype(host.dtype, np.signedinteger) and int(host.min()) < 0:
        raise ValueError(f"{name} must not contain negative indices.")
    if int(host.max()) > _INDEX_MAX:
        raise ValueError(f"{name} contains indices beyond the uint32 range.")
    return jnp.asarray(host.astype(np.uint32))


def check_index_lengths(index_arrays: Sequence) -> int:
    """Return the common length of ``index_arrays`` or raise LengthMismatchError."""
    if len(index_arrays) == 0:
        return 0
    expected = len(index_arrays[0])
    for position, array in enumerate(index_arrays[1:], start=1):
        if len(array) != expected:
            raise LengthMismatchError(
                f"index array {position} has length {len(array)}, "
                f"expected {expected} (length of index array 0)."
            )
    return expected


def interleave_index_arrays(index_arrays: Sequence) -> chex.Array:
    """
    Interleave N index arrays of length L into one array of length L*N.

    Group ``i`` of the result holds ``(index_arrays[0][i], ..., index_arrays[N-1][i])``.

    Args:
        index_arrays: Sequence of index arrays (lists, NumPy or JAX arrays).

    Returns:
        A ``uint32`` JAX array of shape ``(L*N,)``.

    Raises:
        LengthMismatchError: If any array's length differs from the first one's.
    """
    if len(index_arrays) == 0:
        return jnp.zeros((0,), dtype=INDEX_DTYPE)
    columns = [
        as_index_array(array, name=f"index array {position}")
        for position, array in enumerate(index_arrays)
    ]
    check_index_lengths(columns)
    return jnp.stack(columns, axis=1).reshape(-1)


def deinterleave_index_array(interleaved, stride: int) -> list[chex.Array]:
    """Split an interleaved array with the given stride back into ``stride`` columns."""
    stride = check_stride(stride)
    interleaved = as_index_array(interleaved, name="interleaved array")
    if stride == 0:
        return []
    check_divisible(interleaved.shape[0], stride)
    rows = interleaved.reshape(-1, stride)
    return [rows[:, column] for column in range(stride)]


def check_stride(stride) -> int:
    if isinstance(stride, bool) or not isinstance(stride, (int, np.integer)):
        raise ValueError(f"stride must be an integer, got {type(stride).__name__}.")
    stride = int(stride)
    if stride < 0:
        raise ValueError(f"stride must be non-negative, got {stride}.")
    return stride


def check_divisible(size: int, stride: int) -> None:
    if size % stride != 0:
        raise ValueError(
            f"interleaved array length {size} is not a multiple of stride {stride}."
        )
