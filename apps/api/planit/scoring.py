from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from planit.classify import certification_points, origin_value, packaging_score
from planit.logger_manager import log_warning
from planit.models import (
    Bound,
    Config,
    ProductAttributes,
    ProductBasics,
    QualityFlag,
    ScoredProduct,
    Scores,
    Stats,
)
from planit.normalize import normalize_lower_better, round_half_away
from planit.stats import DEFAULT_STATS, compute_dataset_stats


def _resolve(value: Optional[float], bound: Bound) -> Tuple[float, bool]:
    # missing nutrition -> midpoint of the bound
    if value is None:
        return bound.midpoint, True
    return value, False


def score_product(
    basics: ProductBasics,
    attrs: ProductAttributes,
    cfg: Config,
    stats: Optional[Stats] = None,
) -> Scores:
    """
    Score a single product. With `stats`, dataset-aware bounds are used;
    otherwise the fixed fallback bounds apply.
    """
    b = (stats or DEFAULT_STATS).bounds
    w = cfg.weights

    sugar, sugar_missing = _resolve(attrs.sugar_g_per_100ml, b.sugar)
    satfat, satfat_missing = _resolve(attrs.sat_fat_g_per_100ml, b.satfat)
    add, add_missing = _resolve(attrs.additives_count, b.additives)
    flag = QualityFlag.imputed if (sugar_missing or satfat_missing or add_missing) else QualityFlag.ok

    health_sugar = normalize_lower_better(sugar, b.sugar.min, b.sugar.max)
    health_sat = normalize_lower_better(satfat, b.satfat.min, b.satfat.max)
    health_add = normalize_lower_better(add, b.additives.min, b.additives.max)
    health = (
        w.health.sugar * health_sugar
        + w.health.sat_fat * health_sat
        + w.health.additives * health_add
    )

    packaging = packaging_score(attrs, cfg)
    origin = origin_value(attrs.country_of_origin, cfg)
    certs = certification_points(attrs.certifications)
    sustainability = (
        w.sustainability.packaging * packaging
        + w.sustainability.origin * origin
        + w.sustainability.certs * certs
    )

    # price (lower is better)
    price = normalize_lower_better(basics.unit_price_gbp_per_litre, b.price.min, b.price.max)

    planit = (
        w.overall.sustainability * sustainability
        + w.overall.health * health
        + w.overall.price * price
    )

    return Scores(
        health_score=round_half_away(health),
        sustainability_score=round_half_away(sustainability),
        price_score=round_half_away(price),
        planit_score=round_half_away(planit),
        breakdown={
            "sugar": round_half_away(health_sugar),
            "sat_fat": round_half_away(health_sat),
            "additives": round_half_away(health_add),
            "packaging": packaging,
            "origin": origin,
            "certs": certs,
            "price_norm": round_half_away(price),
        },
        quality_flag=flag,
    )


def score_product_with_stats(
    basics: ProductBasics,
    attrs: ProductAttributes,
    cfg: Config,
    all_basics: List[ProductBasics],
    all_attrs: List[ProductAttributes],
) -> Scores:
    """Score with dataset-aware stats computed on the fly."""
    stats = compute_dataset_stats(all_attrs, all_basics)
    return score_product(basics, attrs, cfg, stats)


def _name_key(basics: ProductBasics) -> str:
    return f"{basics.brand} {basics.product_name}".lower()


def score_catalog(
    basics: Iterable[ProductBasics],
    attrs: Iterable[ProductAttributes],
    cfg: Config,
    stats: Optional[Stats] = None,
) -> List[ScoredProduct]:
    """
    Score every product that has an attribute record against one shared
    stats snapshot, best planit_score first.
    """
    basics = list(basics)
    by_id: Dict[str, ProductAttributes] = {a.product_id: a for a in attrs}
    if stats is None:
        stats = compute_dataset_stats(list(by_id.values()), basics)

    out: List[ScoredProduct] = []
    for b in basics:
        a = by_id.get(b.product_id)
        if a is None:
            log_warning(f"no attributes for product {b.product_id}; skipped")
            continue
        out.append(ScoredProduct(basics=b, attributes=a, scores=score_product(b, a, cfg, stats)))

    out.sort(key=lambda r: (-r.scores.planit_score, _name_key(r.basics)))
    return out
