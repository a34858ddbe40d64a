import argparse
import json
import os
from typing import Any, Dict, List, Optional

import jax

from meshcombine import combine_interleaved_index_arrays, interleave_index_arrays
from meshcombine_benchmarks.common import (
    jax_timer,
    print_results_table,
    python_timer,
    random_mesh_indices,
    throughput_stats,
    validate_results_schema,
)

# Index ranges of a typical OBJ-style mesh: positions, normals, texture coordinates.
DEFAULT_RANGES = [4096, 1024, 2048]


def python_combine(index_arrays: List[List[int]]):
    """Sequential dictionary scan over zipped index tuples."""
    ids: Dict[tuple, int] = {}
    combined = []
    for item in zip(*index_arrays):
        combined.append(ids.setdefault(item, len(ids)))
    return combined, list(ids)


def run_benchmarks(
    trials: int = 10,
    slot_counts: Optional[List[int]] = None,
    ranges: Optional[List[int]] = None,
    dedupe_mode: Optional[str] = None,
):
    """Runs the combine benchmarks and saves the results."""
    slot_counts = slot_counts or [2**12, 2**14, 2**16]
    ranges = ranges or DEFAULT_RANGES
    stride = len(ranges)

    results: Dict[str, Any] = {
        "slot_counts": slot_counts,
        "ranges": ranges,
        "meshcombine": {},
        "python": {},
    }

    print("Running combine benchmarks...")
    print(f"JAX backend: {jax.default_backend()}")
    for num_slots in slot_counts:
        print(f"  Slots: {num_slots}")
        index_arrays = random_mesh_indices(num_slots, num_slots, ranges)
        interleaved = interleave_index_arrays(index_arrays)

        durations = jax_timer(
            lambda: combine_interleaved_index_arrays(interleaved, stride, dedupe_mode=dedupe_mode),
            trials=trials,
        )
        results["meshcombine"].setdefault("combine_slots_per_sec", []).append(
            throughput_stats(num_slots, durations)
        )

        python_durations = python_timer(lambda: python_combine(index_arrays), trials=trials)
        results["python"].setdefault("combine_slots_per_sec", []).append(
            throughput_stats(num_slots, python_durations)
        )

    validate_results_schema(results)
    output_dir = "meshcombine_benchmarks/results"
    os.makedirs(output_dir, exist_ok=True)
    output_path = os.path.join(output_dir, "combine_results.json")
    with open(output_path, "w") as f:
        json.dump(results, f, indent=4)

    print(f"Combine benchmark results saved to {output_path}")
    print_results_table(results, "Index Combine Performance Results")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Index combine benchmarks")
    parser.add_argument("--trials", type=int, default=10)
    parser.add_argument(
        "--slot-counts",
        type=str,
        default="",
        help="Comma-separated vertex slot counts (e.g. 4096,16384,65536)",
    )
    parser.add_argument(
        "--ranges",
        type=str,
        default="",
        help="Comma-separated index range per channel (e.g. 4096,1024,2048)",
    )
    parser.add_argument("--dedupe-mode", choices=["safe", "exact"], default=None)
    args = parser.parse_args()

    def _parse_list(raw: str) -> Optional[List[int]]:
        if not raw:
            return None
        return [int(x.strip()) for x in raw.split(",") if x.strip()]

    run_benchmarks(
        trials=args.trials,
        slot_counts=_parse_list(args.slot_counts),
        ranges=_parse_list(args.ranges),
        dedupe_mode=args.dedupe_mode,
    )
