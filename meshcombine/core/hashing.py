"""Fixed-width row signatures for wide index tuples."""

from __future__ import annotations

import chex
import jax.numpy as jnp
from jax import lax

SIGNATURE_LANES = 4

_LANE_PRIMES = (0x9E3779B1, 0x85EBCA6B, 0xC2B2AE35, 0x278DDE6E)


def _avalanche(h: chex.Array) -> chex.Array:
    """xxHash32 finalizer."""
    h = h ^ (h >> 15)
    h = h * jnp.uint32(0x85EBCA77)
    h = h ^ (h >> 13)
    h = h * jnp.uint32(0xC2B2AE3D)
    h = h ^ (h >> 16)
    return h


def row_signature(keys: chex.Array) -> list[chex.Array]:
    """Hash (L, N) uint32 rows into four uint32 lanes (a 128-bit signature).

    Two lanes are multiply-add chains and two are xor-multiply chains, each with
    its own odd multiplier, so rows that collide on one lane rarely collide on
    all four. Equal rows always produce equal signatures; the converse must be
    checked by the caller.
    """
    keys = jnp.asarray(keys, dtype=jnp.uint32)
    _, width = keys.shape

    c1, c2, c3, c4 = (jnp.uint32(p) for p in _LANE_PRIMES)
    first = keys[:, 0]
    carry = (first, first, first ^ c3, first ^ c4)

    def _step(i, carry):
        h1, h2, h3, h4 = carry
        col = lax.dynamic_index_in_dim(keys, i, axis=1, keepdims=False)
        h1 = h1 * c1 + col
        h2 = h2 * c2 + col
        h3 = jnp.bitwise_xor(h3, col) * c3
        h4 = jnp.bitwise_xor(h4, col) * c4
        return h1, h2, h3, h4

    lanes = lax.fori_loop(1, width, _step, carry)
    return [_avalanche(h) for h in lanes]
