"""Combining separately indexed arrays into a single-index representation."""

from __future__ import annotations

from collections.abc import MutableSequence
from typing import Any, Optional, Sequence

import chex
import jax.numpy as jnp
import numpy as np

from ._constants import INDEX_DTYPE
from .channel import as_channel
from .core.dedupe import combine_interleaved_index_arrays
from .core.interleave import deinterleave_index_array, interleave_index_arrays


def combine_index_arrays(
    index_arrays: Sequence[MutableSequence], dedupe_mode: Optional[str] = None
) -> chex.Array:
    """
    Combine index arrays and reduce each of them to its unique combinations.

    Given position and normal indices::

        positions = [0, 2, 5, 0, 0, 1, 3, 2, 2]
        normals   = [1, 3, 4, 1, 4, 6, 1, 3, 1]

    the returned combined index array is ``[0, 1, 2, 0, 3, 4, 5, 1, 6]`` and the
    inputs are rewritten in place to ``[0, 2, 5, 0, 1, 3, 2]`` and
    ``[1, 3, 4, 4, 6, 1, 1]``. These act as translation tables for building new
    attribute arrays indexed by the combined array; see
    :func:`combine_indexed_arrays` to have that done as well.

    Args:
        index_arrays: Python lists, each replaced in place by its reduced form.
            The same list may be passed more than once.
        dedupe_mode: Optional override of ``MESHCOMBINE_DEDUPE_MODE``.

    Returns:
        The combined ``uint32`` index array, one entry per original slot.

    Raises:
        TypeError: If an index array cannot be replaced in place.
        LengthMismatchError: If the index arrays differ in length.
    """
    for position, array in enumerate(index_arrays):
        if not isinstance(array, MutableSequence):
            raise TypeError(
                f"index array {position} of type {type(array).__name__} cannot be "
                "replaced in place; pass a list or use combine_interleaved_index_arrays."
            )
    if len(index_arrays) == 0:
        return jnp.zeros((0,), dtype=INDEX_DTYPE)

    stride = len(index_arrays)
    interleaved = interleave_index_arrays(index_arrays)
    combined, reduced = combine_interleaved_index_arrays(
        interleaved, stride, dedupe_mode=dedupe_mode
    )

    columns = [np.asarray(column).tolist() for column in deinterleave_index_array(reduced, stride)]
    for array, column in zip(index_arrays, columns):
        array[:] = column
    return combined


def combine_indexed_arrays(channels: Sequence[Any], dedupe_mode: Optional[str] = None) -> chex.Array:
    """
    Combine indexed attribute arrays so a single index array addresses all of them.

    Every channel is an :class:`IndexedChannel` or an ``(indices, attributes)``
    pair with list attributes. Channels may share one index array. All
    attribute arrays are reordered and reduced to the unique index combinations;
    nothing is replaced unless every channel could be rewritten.

    Example::

        indices = combine_indexed_arrays([
            IndexedChannel(vertex_indices, positions),
            IndexedChannel(normal_texture_indices, normals),
            IndexedChannel(normal_texture_indices, texture_coordinates),
        ])

    Returns:
        The combined ``uint32`` index array valid for every rewritten channel.

    Raises:
        TypeError: If a channel cannot be updated in place.
        LengthMismatchError: If the channels' index arrays differ in length.
        IndexOutOfRangeError: If an index addresses past its attribute array.
    """
    wrapped = [as_channel(channel) for channel in channels]
    if not wrapped:
        return jnp.zeros((0,), dtype=INDEX_DTYPE)

    stride = len(wrapped)
    interleaved = interleave_index_arrays([channel.indices for channel in wrapped])
    combined, reduced = combine_interleaved_index_arrays(
        interleaved, stride, dedupe_mode=dedupe_mode
    )

    rewritten = [channel.rewrite(reduced, stride, offset) for offset, channel in enumerate(wrapped)]
    for channel, attributes in zip(wrapped, rewritten):
        channel.commit(attributes)
    return combined
