import dataclasses

import jax
import numpy as np

# Triangle mesh with 6 positions (a-f) and 7 normals (A-G), indexed separately.
POSITION_ATTRIBUTES = ["a", "b", "c", "d", "e", "f"]
NORMAL_ATTRIBUTES = ["A", "B", "C", "D", "E", "F", "G"]

POSITION_INDICES = [0, 2, 5, 0, 0, 1, 3, 2, 2]
NORMAL_INDICES = [1, 3, 4, 1, 4, 6, 1, 3, 1]

SCENARIO_INTERLEAVED = [0, 1, 2, 3, 5, 4, 0, 1, 0, 4, 1, 6, 3, 1, 2, 3, 2, 1]
SCENARIO_COMBINED = [0, 1, 2, 0, 3, 4, 5, 1, 6]
SCENARIO_REDUCED_POSITIONS = [0, 2, 5, 0, 1, 3, 2]
SCENARIO_REDUCED_NORMALS = [1, 3, 4, 4, 6, 1, 1]
SCENARIO_REDUCED_INTERLEAVED = [0, 1, 2, 3, 5, 4, 0, 4, 1, 6, 3, 1, 2, 1]


@dataclasses.dataclass
class VertexAttributes:
    """Per-vertex fields registered as a JAX pytree."""

    position: np.ndarray
    weight: np.ndarray


jax.tree_util.register_pytree_node(
    VertexAttributes,
    lambda v: ((v.position, v.weight), None),
    lambda _, children: VertexAttributes(*children),
)


def random_index_arrays(seed: int, length: int, ranges):
    """One random index array per entry of ``ranges`` (its exclusive upper bound)."""
    rng = np.random.default_rng(seed)
    return [rng.integers(0, high, size=length).tolist() for high in ranges]
