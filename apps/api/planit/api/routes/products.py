from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from planit.config import get_config
from planit.dataset import Dataset, DatasetError, load_dataset
from planit.logger_manager import log_error
from planit.models import Config, ScoredProduct
from planit.scoring import score_catalog, score_product
from planit.settings import DATA_DIR
from planit.stats import compute_dataset_stats

router = APIRouter(prefix="/products", tags=["products"])


class SortKey(str, Enum):
    planit_score = "planit_score"
    health_score = "health_score"
    sustainability_score = "sustainability_score"
    price_score = "price_score"
    unit_price_gbp_per_litre = "unit_price_gbp_per_litre"


class Direction(str, Enum):
    asc = "asc"
    desc = "desc"


def get_dataset() -> Dataset:
    try:
        return load_dataset(DATA_DIR)
    except DatasetError as e:
        log_error(f"dataset unavailable: {e}")
        raise HTTPException(status_code=503, detail=str(e))


def _row(r: ScoredProduct) -> Dict[str, Any]:
    out = r.basics.model_dump()
    s = r.scores
    out.update(
        planit_score=s.planit_score,
        health_score=s.health_score,
        sustainability_score=s.sustainability_score,
        price_score=s.price_score,
    )
    return out


def _matches(row: Dict[str, Any], term: str) -> bool:
    hay = f"{row['brand']} {row['product_name']} {row['retailer']}".lower()
    return term in hay


def _sorted(rows: List[Dict[str, Any]], key: SortKey, direction: Direction) -> List[Dict[str, Any]]:
    # name tie-break first, then the stable sort on the key
    rows = sorted(rows, key=lambda r: f"{r['brand']} {r['product_name']}".lower(),
                  reverse=direction is Direction.desc)
    return sorted(rows, key=lambda r: r.get(key.value) or 0, reverse=direction is Direction.desc)


@router.get("")
def list_products(
    q: str = "",
    sort: SortKey = SortKey.planit_score,
    direction: Optional[Direction] = Query(None),
    ds: Dataset = Depends(get_dataset),
    cfg: Config = Depends(get_config),
):
    if direction is None:
        # cheapest first for price
        direction = Direction.asc if sort is SortKey.unit_price_gbp_per_litre else Direction.desc

    scored = score_catalog(ds.basics, ds.attributes.values(), cfg)
    rows = [_row(r) for r in scored]

    term = q.strip().lower()
    if term:
        rows = [r for r in rows if _matches(r, term)]
    return _sorted(rows, sort, direction)


@router.get("/{product_id}")
def get_product(
    product_id: str,
    ds: Dataset = Depends(get_dataset),
    cfg: Config = Depends(get_config),
):
    basics = ds.get(product_id)
    if basics is None:
        raise HTTPException(status_code=404, detail="not_found")
    attrs = ds.attributes.get(product_id)
    if attrs is None:
        raise HTTPException(status_code=404, detail="attributes_not_found")

    stats = compute_dataset_stats(list(ds.attributes.values()), ds.basics)
    scores = score_product(basics, attrs, cfg, stats)
    return {**basics.model_dump(), **attrs.model_dump(mode="json"), **scores.model_dump(mode="json")}
