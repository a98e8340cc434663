from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np

from planit.logger_manager import log_debug
from planit.models import Bound, Bounds, ProductAttributes, ProductBasics, Stats

LOW_PCT = 5
HIGH_PCT = 95

# Used when a metric has no observed values at all.
_FALLBACK_BOUNDS: Dict[str, Bound] = {
    "sugar": Bound(min=0, max=10),
    "satfat": Bound(min=0, max=5),
    "additives": Bound(min=0, max=5),
    "price": Bound(min=1, max=3),
}

DEFAULT_STATS = Stats(bounds=Bounds(**_FALLBACK_BOUNDS))


def percentile(sorted_values: Sequence[float], p: float) -> float:
    """
    Linear interpolation between the two nearest ranks, index = p/100 * (n-1).
    Expects ascending input. Returns NaN for an empty sequence.
    """
    if not len(sorted_values):
        return float("nan")
    idx = (p / 100) * (len(sorted_values) - 1)
    lo, hi = int(np.floor(idx)), int(np.ceil(idx))
    if lo == hi:
        return float(sorted_values[lo])
    w = idx - lo
    return float(sorted_values[lo] * (1 - w) + sorted_values[hi] * w)


def _to_nums(xs: Iterable[Optional[float]]) -> np.ndarray:
    arr = np.array([x for x in xs if x is not None], dtype="float64")
    return np.sort(arr[np.isfinite(arr)])


def _bound(values: np.ndarray, metric: str) -> Bound:
    if not values.size:
        lo, hi = _FALLBACK_BOUNDS[metric].min, _FALLBACK_BOUNDS[metric].max
    else:
        lo, hi = percentile(values, LOW_PCT), percentile(values, HIGH_PCT)
    # avoid zero-width ranges
    if hi <= lo:
        hi = lo + 1
    return Bound(min=lo, max=hi)


def compute_dataset_stats(
    attributes: List[ProductAttributes],
    basics: List[ProductBasics],
) -> Stats:
    """
    Compute P5..P95 bounds per metric from the dataset. Metrics with no
    observed values fall back to fixed defaults.
    """
    columns = {
        "sugar": _to_nums(a.sugar_g_per_100ml for a in attributes),
        "satfat": _to_nums(a.sat_fat_g_per_100ml for a in attributes),
        "additives": _to_nums(a.additives_count for a in attributes),
        "price": _to_nums(b.unit_price_gbp_per_litre for b in basics),
    }
    bounds = Bounds(**{k: _bound(v, k) for k, v in columns.items()})

    log_debug(
        "dataset stats: "
        + ", ".join(
            f"{k}={getattr(bounds, k).min:g}..{getattr(bounds, k).max:g} (n={v.size})"
            for k, v in columns.items()
        )
    )
    return Stats(bounds=bounds)
