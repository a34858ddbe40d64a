"""Deduplication of interleaved index tuples into first-occurrence order.

Every vertex slot of an interleaved index array carries one tuple of ``stride``
indices. Distinct tuples receive dense canonical ids in the order in which a
left-to-right scan over the slots would first meet them. Instead of a
sequential hash-map scan the ids are derived from a stable lexicographic sort:

1. Stable-sort slot positions by tuple content. Stability keeps every run of
   equal tuples in ascending slot order, so the head of a run is the tuple's
   first occurrence.
2. Scatter the run-head flags back to slot order. The running count of heads
   at a first occurrence is its canonical id, and every other slot inherits the
   id of its run head.
3. The positions of the heads in ascending slot order list one representative
   slot per canonical id.
"""

from __future__ import annotations

from functools import partial
from typing import Optional

import chex
import jax
import jax.numpy as jnp
from absl import logging
from jax import lax

from .. import _constants
from .._constants import DEDUPE_MODES, INDEX_DTYPE, SORT_STABLE
from .hashing import row_signature
from .interleave import as_index_array, check_divisible, check_stride


def _stable_sort_perm(perm_in: chex.Array, key_1d: chex.Array) -> chex.Array:
    order = jnp.argsort(key_1d[perm_in], stable=SORT_STABLE)
    return perm_in[order]


def _lexsort_perm(columns: list[chex.Array], length: int) -> chex.Array:
    # Least significant column first so the first column becomes most significant.
    perm = jnp.arange(length, dtype=jnp.int32)
    for column in reversed(columns):
        perm = _stable_sort_perm(perm, column)
    return perm


def _run_heads(columns: list[chex.Array], perm: chex.Array) -> chex.Array:
    """Flag sorted positions whose row differs from the previous sorted row."""
    changed = jnp.zeros((perm.shape[0] - 1,), dtype=jnp.bool_)
    for column in columns:
        sorted_column = column[perm]
        changed = jnp.logical_or(changed, sorted_column[1:] != sorted_column[:-1])
    return jnp.concatenate([jnp.ones((1,), dtype=jnp.bool_), changed])


def bucket_length(length: int) -> int:
    """Padded slot count: the next power of two, at least ``MIN_BUCKET_SLOTS``."""
    bucket = 1 << max(length - 1, 0).bit_length()
    return max(bucket, _constants.MIN_BUCKET_SLOTS)


@partial(jax.jit, static_argnames=("use_signature",))
def _first_occurrence_kernel(keys: chex.Array, num_valid: chex.Array, use_signature: bool):
    """Canonical ids for the first ``num_valid`` rows of ``keys`` (shape ``(P, N)``).

    Rows from ``num_valid`` on are padding. A leading padding flag column keeps
    them out of every real group, and since they sit after all real rows they
    never shift a real row's id.

    Returns:
        combined: ``(P,)`` canonical id per row; only the first ``num_valid`` are meaningful.
        representatives: ``(P,)`` row of the first occurrence of each id in id
            order, padded with ``P`` past the unique count.
        unique_count: number of distinct real rows.
        collided: whether a signature collision forced the full-row sort.
    """
    length, width = keys.shape
    positions = jnp.arange(length, dtype=jnp.int32)
    valid = positions < num_valid
    padding_flag = jnp.logical_not(valid).astype(jnp.uint32)
    columns = [padding_flag] + [keys[:, i] for i in range(width)]

    if use_signature:
        signature = [padding_flag] + row_signature(keys)
        signature_perm = _lexsort_perm(signature, length)
        signature_heads = _run_heads(signature, signature_perm)
        row_heads = _run_heads(columns, signature_perm)
        # Equal rows hash equally, so a row change inside a signature run can only
        # come from two distinct rows sharing a signature.
        collided = jnp.any(jnp.logical_and(row_heads, jnp.logical_not(signature_heads)))
        perm = lax.cond(
            collided,
            lambda: _lexsort_perm(columns, length),
            lambda: signature_perm,
        )
    else:
        perm = _lexsort_perm(columns, length)
        collided = jnp.array(False)

    heads = _run_heads(columns, perm)

    first_mask = jnp.zeros((length,), dtype=jnp.bool_).at[perm].set(heads)
    first_ids = jnp.cumsum(first_mask, dtype=jnp.int32) - 1

    head_positions = lax.cummax(jnp.where(heads, positions, 0))
    canonical_sorted = first_ids[perm[head_positions]]
    combined = jnp.zeros((length,), dtype=INDEX_DTYPE).at[perm].set(
        canonical_sorted.astype(INDEX_DTYPE)
    )

    real_first = jnp.logical_and(first_mask, valid)
    unique_count = jnp.sum(real_first, dtype=jnp.int32)
    representatives = jnp.nonzero(real_first, size=length, fill_value=length)[0]
    return combined, representatives, unique_count, collided


def _resolve_mode(dedupe_mode: Optional[str]) -> str:
    mode = _constants.DEDUPE_MODE if dedupe_mode is None else dedupe_mode.strip().lower()
    if mode not in DEDUPE_MODES:
        raise ValueError(f"dedupe_mode must be one of {DEDUPE_MODES}, got {dedupe_mode!r}.")
    return mode


def combine_interleaved_index_arrays(
    interleaved,
    stride: int,
    dedupe_mode: Optional[str] = None,
) -> tuple[chex.Array, chex.Array]:
    """
    Combine an interleaved index array into one shared index array.

    ``interleaved`` holds ``L`` consecutive groups of ``stride`` indices, one
    group per vertex slot. Distinct groups get dense ids ordered by first
    appearance.

    Example (positions and normals interleaved, stride 2)::

        combine_interleaved_index_arrays([0, 1, 2, 3, 5, 4, 0, 1, 0, 4, 1, 6, 3, 1, 2, 3, 2, 1], 2)
        # combined:            [0, 1, 2, 0, 3, 4, 5, 1, 6]
        # reduced interleaved: [0, 1, 2, 3, 5, 4, 0, 4, 1, 6, 3, 1, 2, 1]

    Args:
        interleaved: Flat index array of length ``L * stride``.
        stride: Number of channels per group. A stride of zero yields empty outputs.
        dedupe_mode: ``"safe"`` or ``"exact"``; defaults to ``MESHCOMBINE_DEDUPE_MODE``.

    Returns:
        Tuple ``(combined_indices, reduced_interleaved)`` of ``uint32`` arrays with
        shapes ``(L,)`` and ``(U * stride,)``.
    """
    stride = check_stride(stride)
    mode = _resolve_mode(dedupe_mode)
    interleaved = as_index_array(interleaved, name="interleaved array")
    empty = jnp.zeros((0,), dtype=INDEX_DTYPE)
    if stride == 0:
        return empty, empty
    check_divisible(interleaved.shape[0], stride)

    length = interleaved.shape[0] // stride
    if length == 0:
        return empty, empty

    keys = interleaved.reshape(length, stride)
    use_signature = mode == "safe" and stride >= _constants.SIGNATURE_MIN_STRIDE
    padded_length = bucket_length(length)
    padded_keys = jnp.zeros((padded_length, stride), dtype=INDEX_DTYPE).at[:length].set(keys)
    combined, representatives, unique_count, collided = _first_occurrence_kernel(
        padded_keys, jnp.int32(length), use_signature=use_signature
    )
    combined = combined[:length]
    unique_count = int(unique_count)
    if bool(collided):
        logging.info(
            "Row signature collision among %d tuples of stride %d; used full-row sort.",
            length,
            stride,
        )
    logging.debug(
        "Combined %d tuples of stride %d into %d unique tuples.", length, stride, unique_count
    )

    reduced = keys[representatives[:unique_count]].reshape(-1)
    return combined, reduced
