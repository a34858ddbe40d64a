import time
from typing import Any, Callable, Dict, List, Tuple

import jax
import numpy as np
from rich.console import Console
from rich.table import Table


def human_format(num, pos=None):
    num = float("{:.3g}".format(num))
    magnitude = 0
    while abs(num) >= 1000:
        magnitude += 1
        num /= 1000.0
    return "{}{}".format(
        "{:f}".format(num).rstrip("0").rstrip("."), ["", "K", "M", "B", "T"][magnitude]
    )


def random_mesh_indices(seed: int, num_slots: int, ranges: List[int]) -> List[List[int]]:
    """Random per-channel index arrays; ``ranges`` bounds each channel's index values."""
    rng = np.random.default_rng(seed)
    return [rng.integers(0, high, size=num_slots).tolist() for high in ranges]


def validate_results_schema(results: Dict[str, Any]) -> None:
    """
    Validates that the results dictionary has consistent shapes and symmetric ops.

    Requirements:
      - keys: slot_counts, meshcombine, python
      - operations present under meshcombine and python are identical
      - for every operation, list lengths equal len(slot_counts)
      - entries are dicts with {median, iqr}
    Raises AssertionError on violation.
    """
    assert isinstance(results, dict), "results must be a dict"
    assert isinstance(results.get("slot_counts"), list), "results must contain a list 'slot_counts'"
    slot_counts = results["slot_counts"]
    for impl in ("meshcombine", "python"):
        assert isinstance(results.get(impl), dict), f"results must contain dict '{impl}'"

    ops = set(results["meshcombine"].keys())
    assert ops == set(
        results["python"].keys()
    ), f"operation keys mismatch between meshcombine and python: {ops}"

    for op in ops:
        for impl in ("meshcombine", "python"):
            entries = results[impl][op]
            assert len(entries) == len(
                slot_counts
            ), f"{impl}['{op}'] length {len(entries)} != len(slot_counts) {len(slot_counts)}"
            for e in entries:
                assert (
                    isinstance(e, dict) and "median" in e and "iqr" in e
                ), "each entry must be a dict with 'median' and 'iqr'"


def _summarize(times: List[float]) -> Tuple[float, float]:
    times = np.array(times)
    median_time = np.median(times)
    q75, q25 = np.percentile(times, [75, 25])
    return float(median_time), float(q75 - q25)


def jax_timer(func: Callable[[], Any], trials: int = 10) -> Tuple[float, float]:
    """
    Times a function returning JAX arrays, waiting for device work to finish.
    The first call is a warm-up so compilation is excluded.

    Returns:
        Tuple of (median_time, iqr_time) in seconds.
    """
    jax.block_until_ready(func())

    times = []
    for _ in range(trials):
        start_time = time.perf_counter()
        jax.block_until_ready(func())
        times.append(time.perf_counter() - start_time)
    return _summarize(times)


def python_timer(func: Callable[[], Any], trials: int = 10) -> Tuple[float, float]:
    """Times a plain Python function over multiple trials."""
    times = []
    for _ in range(trials):
        start_time = time.perf_counter()
        func()
        times.append(time.perf_counter() - start_time)
    return _summarize(times)


def throughput_stats(num_slots: int, timing: Tuple[float, float]) -> Dict[str, float]:
    """Converts (median, iqr) seconds into slots per second."""
    median_time, iqr_time = timing
    median = num_slots / median_time if median_time > 0 else float("inf")
    spread = median * iqr_time / median_time if median_time > 0 else 0.0
    return {"median": median, "iqr": spread}


def print_results_table(results: Dict[str, Any], title: str):
    """
    Displays benchmark results in a formatted table using the rich library.
    """
    console = Console()
    table = Table(title=title, show_header=True, header_style="bold magenta")

    table.add_column("Slots", justify="right", style="cyan")
    table.add_column("Operation", style="green")
    table.add_column("Implementation", style="yellow")
    table.add_column("Slots/Sec (Median)", justify="right", style="bold blue")
    table.add_column("IQR", justify="right", style="dim blue")

    slot_counts = results.get("slot_counts", [])
    operations = list(results.get("meshcombine", {}).keys())

    for i, size in enumerate(slot_counts):
        for op in operations:
            op_name = op.replace("_slots_per_sec", "")
            for impl in ("meshcombine", "python"):
                data = results[impl][op][i]
                table.add_row(
                    f"{size:,}" if impl == "meshcombine" else "",
                    op_name,
                    impl,
                    human_format(data["median"]),
                    f"±{human_format(data['iqr'])}",
                )
        if i < len(slot_counts) - 1:
            table.add_row("", "", "", "", "", end_section=True)

    console.print(table)
