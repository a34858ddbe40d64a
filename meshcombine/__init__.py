from ._constants import DEDUPE_MODE, INDEX_DTYPE, MIN_BUCKET_SLOTS, SIGNATURE_MIN_STRIDE
from .channel import IndexedChannel
from .combine import combine_index_arrays, combine_indexed_arrays
from .core import (
    combine_interleaved_index_arrays,
    deinterleave_index_array,
    interleave_index_arrays,
    rewrite_attribute_array,
)
from .exceptions import IndexOutOfRangeError, LengthMismatchError

__all__ = [
    # combine.py
    "combine_index_arrays",
    "combine_indexed_arrays",
    # channel.py
    "IndexedChannel",
    # core
    "combine_interleaved_index_arrays",
    "interleave_index_arrays",
    "deinterleave_index_array",
    "rewrite_attribute_array",
    # exceptions.py
    "LengthMismatchError",
    "IndexOutOfRangeError",
    # _constants.py
    "INDEX_DTYPE",
    "DEDUPE_MODE",
    "SIGNATURE_MIN_STRIDE",
    "MIN_BUCKET_SLOTS",
]
