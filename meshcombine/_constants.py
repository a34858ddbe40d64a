"""Shared constants and environment-driven configuration."""

from __future__ import annotations

import os

import jax.numpy as jnp

INDEX_DTYPE = jnp.uint32
SORT_STABLE = True  # Stable sorting keeps first occurrences at the head of each run


def _parse_int_env(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None:
        return default
    value = value.strip().lower()
    if value in {"", "none", "auto"}:
        return default
    try:
        parsed = int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer.") from exc
    if parsed <= 0:
        raise ValueError(f"{name} must be positive.")
    return parsed


# Dedupe mode semantics:
# - "safe" (default): exact sort for narrow tuples, 128-bit signature sort for wide
#   tuples with collision detection and fallback to the full-row sort.
# - "exact": always sort by every column.
DEDUPE_MODES = ("safe", "exact")

_DEDUPE_MODE = os.environ.get("MESHCOMBINE_DEDUPE_MODE", "safe").strip().lower()
if _DEDUPE_MODE not in DEDUPE_MODES:
    raise ValueError("Invalid MESHCOMBINE_DEDUPE_MODE. Expected one of: safe, exact.")

DEDUPE_MODE = _DEDUPE_MODE

# Below this stride sorting by the raw columns is no more expensive than sorting
# by the four signature lanes.
SIGNATURE_MIN_STRIDE = _parse_int_env("MESHCOMBINE_SIGNATURE_MIN_STRIDE", 5)

# Slot counts are padded to a power of two no smaller than this, so meshes of
# similar size share one compiled kernel.
MIN_BUCKET_SLOTS = _parse_int_env("MESHCOMBINE_MIN_BUCKET_SLOTS", 64)
