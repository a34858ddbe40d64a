"""Gathering attribute arrays through the reduced index tuples."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import chex
import jax
import jax.numpy as jnp
import numpy as np

from ..exceptions import IndexOutOfRangeError
from .interleave import as_index_array, check_divisible, check_stride


def _is_array(value: Any) -> bool:
    return hasattr(value, "shape") and hasattr(value, "dtype")


def _is_element_sequence(value: Any) -> bool:
    # Namedtuples are pytrees of per-vertex fields, not sequences of elements.
    if isinstance(value, tuple) and hasattr(value, "_fields"):
        return False
    return isinstance(value, Sequence)


def attribute_length(attributes: Any) -> int:
    """Number of elements addressable in ``attributes`` along its leading axis."""
    if _is_array(attributes):
        if len(attributes.shape) == 0:
            raise ValueError("attribute arrays must be at least rank-1.")
        return int(attributes.shape[0])
    if _is_element_sequence(attributes):
        return len(attributes)

    leaves = jax.tree_util.tree_leaves(attributes)
    if not leaves:
        raise ValueError(f"cannot index attributes of type {type(attributes).__name__}.")
    lengths = set()
    for leaf in leaves:
        if not _is_array(leaf) or len(leaf.shape) == 0:
            raise ValueError("every attribute leaf must be an array of rank >= 1.")
        lengths.add(int(leaf.shape[0]))
    if len(lengths) != 1:
        raise ValueError(
            f"attribute leaves disagree on their leading dimension: {sorted(lengths)}."
        )
    return lengths.pop()


def gather_attributes(attributes: Any, selection: np.ndarray) -> Any:
    """Return ``attributes[selection]`` for arrays, sequences and pytrees of arrays."""
    if isinstance(attributes, np.ndarray):
        return np.take(attributes, selection, axis=0)
    if _is_array(attributes):
        return jnp.take(attributes, jnp.asarray(selection), axis=0)
    if _is_element_sequence(attributes):
        gathered = [attributes[i] for i in selection.tolist()]
        return tuple(gathered) if isinstance(attributes, tuple) else gathered

    device_selection = jnp.asarray(selection)
    return jax.tree_util.tree_map(
        lambda leaf: jnp.take(leaf, device_selection, axis=0), attributes
    )


def rewrite_attribute_array(
    stride: int,
    offset: int,
    reduced_interleaved: chex.Array,
    attributes: Any,
) -> Any:
    """
    Build the reduced attribute array for one channel.

    Element ``u`` of the result is ``attributes[reduced_interleaved[u * stride + offset]]``.
    The input is never modified; the result is a fresh array of the same kind.

    Args:
        stride: Number of channels interleaved in ``reduced_interleaved``.
        offset: Position of this channel inside each tuple, ``0 <= offset < stride``.
        reduced_interleaved: Reduced interleaved array returned by
            :func:`combine_interleaved_index_arrays`.
        attributes: NumPy/JAX array, Python list/tuple, or pytree of arrays.

    Raises:
        IndexOutOfRangeError: If a referenced index is not smaller than the
            attribute array's length.
    """
    selection = reduced_column(stride, offset, reduced_interleaved)
    length = attribute_length(attributes)
    if selection.size and int(selection.max()) >= length:
        raise IndexOutOfRangeError(
            f"channel at offset {offset} references index {int(selection.max())} "
            f"but its attribute array has only {length} elements."
        )
    return gather_attributes(attributes, selection)


def reduced_column(stride: int, offset: int, reduced_interleaved: chex.Array) -> np.ndarray:
    """Host copy of one channel's indices taken from a reduced interleaved array."""
    stride = check_stride(stride)
    if stride == 0 or not 0 <= offset < stride:
        raise ValueError(f"offset must be in [0, {stride}), got {offset}.")
    reduced = np.asarray(as_index_array(reduced_interleaved, name="reduced interleaved array"))
    check_divisible(reduced.shape[0], stride)
    return reduced.reshape(-1, stride)[:, offset].astype(np.int64)
