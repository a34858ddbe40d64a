"""Attribute channels driven by one shared combine call."""

from __future__ import annotations

import dataclasses
from collections.abc import MutableSequence
from typing import Any

import chex

from .core.rewrite import rewrite_attribute_array


@dataclasses.dataclass(eq=False)
class IndexedChannel:
    """
    One attribute stream together with the index array addressing it.

    Several channels may hold the very same ``indices`` object, e.g. normals and
    texture coordinates sharing one index buffer. Combining replaces
    ``attributes`` with its reduced form; ``indices`` is only read.

    Attributes:
        indices: Index array for this channel, one entry per vertex slot.
        attributes: Attribute values addressed by ``indices``.
    """

    indices: Any
    attributes: Any

    def rewrite(self, reduced_interleaved: chex.Array, stride: int, offset: int) -> Any:
        """Return the reduced attribute array without touching this channel."""
        return rewrite_attribute_array(stride, offset, reduced_interleaved, self.attributes)

    def commit(self, attributes: Any) -> None:
        self.attributes = attributes


class _SequenceChannel(IndexedChannel):
    """Channel over a caller-owned mutable sequence, updated by slice assignment."""

    def commit(self, attributes: Any) -> None:
        self.attributes[:] = attributes


def as_channel(channel: Any) -> IndexedChannel:
    """Wrap an ``(indices, attributes)`` pair; IndexedChannel instances pass through."""
    if isinstance(channel, IndexedChannel):
        return channel
    try:
        indices, attributes = channel
    except (TypeError, ValueError) as exc:
        raise TypeError(
            "channels must be IndexedChannel instances or (indices, attributes) pairs."
        ) from exc
    if not isinstance(attributes, MutableSequence):
        raise TypeError(
            f"attributes of type {type(attributes).__name__} cannot be replaced in place; "
            "pass a list or wrap the pair in IndexedChannel."
        )
    return _SequenceChannel(indices, attributes)
