from .dedupe import combine_interleaved_index_arrays
from .interleave import deinterleave_index_array, interleave_index_arrays
from .rewrite import rewrite_attribute_array

__all__ = [
    "combine_interleaved_index_arrays",
    "deinterleave_index_array",
    "interleave_index_arrays",
    "rewrite_attribute_array",
]
