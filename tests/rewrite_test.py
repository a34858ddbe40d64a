from collections import namedtuple

import jax.numpy as jnp
import numpy as np
import pytest

from meshcombine import IndexOutOfRangeError, rewrite_attribute_array
from tests.testdata import (
    NORMAL_ATTRIBUTES,
    POSITION_ATTRIBUTES,
    SCENARIO_REDUCED_INTERLEAVED,
    VertexAttributes,
)


def test_rewrite_list_per_offset():
    positions = rewrite_attribute_array(2, 0, SCENARIO_REDUCED_INTERLEAVED, POSITION_ATTRIBUTES)
    normals = rewrite_attribute_array(2, 1, SCENARIO_REDUCED_INTERLEAVED, NORMAL_ATTRIBUTES)
    assert positions == ["a", "c", "f", "a", "b", "d", "c"]
    assert normals == ["B", "D", "E", "E", "G", "B", "B"]


def test_rewrite_does_not_touch_input():
    attributes = list(POSITION_ATTRIBUTES)
    rewrite_attribute_array(2, 0, SCENARIO_REDUCED_INTERLEAVED, attributes)
    assert attributes == POSITION_ATTRIBUTES


def test_rewrite_tuple_stays_tuple():
    out = rewrite_attribute_array(1, 0, [2, 0], ("x", "y", "z"))
    assert out == ("z", "x")


def test_rewrite_numpy_rows():
    positions = np.arange(18, dtype=np.float32).reshape(6, 3)
    out = rewrite_attribute_array(2, 0, SCENARIO_REDUCED_INTERLEAVED, positions)
    assert isinstance(out, np.ndarray)
    assert out.shape == (7, 3)
    np.testing.assert_array_equal(out, positions[[0, 2, 5, 0, 1, 3, 2]])


def test_rewrite_jax_array():
    normals = jnp.arange(7, dtype=jnp.float32) * 10
    out = rewrite_attribute_array(2, 1, SCENARIO_REDUCED_INTERLEAVED, normals)
    assert jnp.array_equal(out, jnp.array([10, 30, 40, 40, 60, 10, 10], dtype=jnp.float32))


def test_rewrite_pytree_of_arrays():
    attributes = VertexAttributes(
        position=np.arange(12, dtype=np.float32).reshape(6, 2),
        weight=np.linspace(0.0, 1.0, 6, dtype=np.float32),
    )
    out = rewrite_attribute_array(2, 0, SCENARIO_REDUCED_INTERLEAVED, attributes)
    assert isinstance(out, VertexAttributes)
    selection = [0, 2, 5, 0, 1, 3, 2]
    np.testing.assert_array_equal(np.asarray(out.position), attributes.position[selection])
    np.testing.assert_array_equal(np.asarray(out.weight), attributes.weight[selection])


SkinAttributes = namedtuple("SkinAttributes", ["position", "weight"])


def test_rewrite_namedtuple_is_gathered_per_field():
    attributes = SkinAttributes(position=np.arange(6.0), weight=np.arange(6.0) * 2)
    out = rewrite_attribute_array(1, 0, [4, 0], attributes)
    assert isinstance(out, SkinAttributes)
    np.testing.assert_array_equal(np.asarray(out.position), [4.0, 0.0])
    np.testing.assert_array_equal(np.asarray(out.weight), [8.0, 0.0])


def test_rewrite_namedtuple_bounds_use_leading_dimension():
    attributes = SkinAttributes(position=np.arange(3.0), weight=np.arange(3.0))
    with pytest.raises(IndexOutOfRangeError, match="only 3 elements"):
        rewrite_attribute_array(1, 0, [3], attributes)


def test_rewrite_pytree_leaves_must_agree():
    attributes = VertexAttributes(position=np.zeros((6, 2)), weight=np.zeros((5,)))
    with pytest.raises(ValueError, match="leading dimension"):
        rewrite_attribute_array(2, 0, SCENARIO_REDUCED_INTERLEAVED, attributes)


def test_rewrite_empty_reduced_array():
    assert rewrite_attribute_array(2, 1, [], NORMAL_ATTRIBUTES) == []


def test_rewrite_out_of_range():
    with pytest.raises(IndexOutOfRangeError, match="references index 5"):
        rewrite_attribute_array(2, 0, SCENARIO_REDUCED_INTERLEAVED, ["a", "b", "c"])


def test_rewrite_out_of_range_is_an_index_error():
    with pytest.raises(IndexError):
        rewrite_attribute_array(1, 0, [3], np.zeros((3,)))


@pytest.mark.parametrize("offset", [-1, 2])
def test_rewrite_rejects_bad_offset(offset):
    with pytest.raises(ValueError, match="offset"):
        rewrite_attribute_array(2, offset, SCENARIO_REDUCED_INTERLEAVED, NORMAL_ATTRIBUTES)


def test_rewrite_rejects_scalar_attributes():
    with pytest.raises(ValueError, match="rank-1"):
        rewrite_attribute_array(1, 0, [0], np.float32(1.0))
