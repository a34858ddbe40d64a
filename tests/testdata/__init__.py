"""Shared test-only meshes and a reference implementation.

The reference combine is a plain sequential dictionary scan, so every test can
compare the JIT kernel against the behaviour it is required to reproduce.
"""

from .meshes import (
    NORMAL_ATTRIBUTES,
    NORMAL_INDICES,
    POSITION_ATTRIBUTES,
    POSITION_INDICES,
    SCENARIO_COMBINED,
    SCENARIO_INTERLEAVED,
    SCENARIO_REDUCED_INTERLEAVED,
    SCENARIO_REDUCED_NORMALS,
    SCENARIO_REDUCED_POSITIONS,
    VertexAttributes,
    random_index_arrays,
)
from .reference import reference_combine
