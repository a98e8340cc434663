from __future__ import annotations

import math
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Recyclability(str, Enum):
    widely_recycled = "widely_recycled"
    check_local = "check_local"
    not_recycled = "not_recycled"


class OriginTier(str, Enum):
    same_country = "same_country"
    neighboring_country = "neighboring_country"
    intra_europe = "intra_europe"
    intercontinental = "intercontinental"


class QualityFlag(str, Enum):
    ok = "ok"
    imputed = "imputed"
    # reserved for partially-available attribute records; never produced
    partial = "partial"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


def _blank_to_none(v: Any) -> Any:
    if isinstance(v, str) and not v.strip():
        return None
    return v


def _finite_or_none(v: Any) -> Any:
    # blank, NaN and +-inf all count as missing
    v = _blank_to_none(v)
    if isinstance(v, (str, int, float)) and not isinstance(v, bool):
        try:
            if not math.isfinite(float(v)):
                return None
        except OverflowError:
            return None
        except ValueError:
            return v
    return v


# ---------- Records ----------

class ProductBasics(_Frozen):
    product_id: str
    retailer: str = ""
    brand: str = ""
    product_name: str = ""
    size_ml: Optional[float] = None
    unit_price_gbp_per_litre: float = Field(..., gt=0, allow_inf_nan=False)

    # carried from the catalog CSV, not scored
    price_gbp: Optional[float] = None
    url: str = ""
    barcode: str = ""
    last_seen_at_utc: str = ""

    @field_validator("size_ml", "price_gbp", mode="before")
    @classmethod
    def _optional_number(cls, v: Any) -> Any:
        return _finite_or_none(v)


class ProductAttributes(_Frozen):
    product_id: str
    sugar_g_per_100ml: Optional[float] = None
    sat_fat_g_per_100ml: Optional[float] = None
    additives_count: Optional[float] = None
    packaging_materials: str = ""  # e.g. "tetra-pack,plastic-cap"
    recyclability: Optional[Recyclability] = None
    certifications: str = ""  # e.g. "organic;soil-association"
    country_of_origin: str = ""  # "UK", "SE", ...

    off_code: str = ""
    ingredients_short: str = ""
    notes: str = ""
    source_links: str = ""

    @field_validator("sugar_g_per_100ml", "sat_fat_g_per_100ml", "additives_count", mode="before")
    @classmethod
    def _optional_number(cls, v: Any) -> Any:
        return _finite_or_none(v)

    @field_validator("recyclability", mode="before")
    @classmethod
    def _recyclability(cls, v: Any) -> Any:
        if v is None or isinstance(v, Recyclability):
            return v
        s = str(v).strip().lower()
        try:
            return Recyclability(s)
        except ValueError:
            return None

    @field_validator("packaging_materials", "certifications", "country_of_origin", mode="before")
    @classmethod
    def _text(cls, v: Any) -> Any:
        return "" if v is None else v


# ---------- Bounds / Stats ----------

class Bound(_Frozen):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    min: float
    max: float

    @property
    def midpoint(self) -> float:
        return (self.min + self.max) / 2


class Bounds(_Frozen):
    sugar: Bound
    satfat: Bound
    additives: Bound
    price: Bound


class Stats(_Frozen):
    bounds: Bounds


# ---------- Config ----------

class OverallWeights(_Frozen):
    sustainability: float
    health: float
    price: float


class HealthWeights(_Frozen):
    sugar: float
    sat_fat: float
    additives: float


class SustainabilityWeights(_Frozen):
    packaging: float
    origin: float
    certs: float


class Weights(_Frozen):
    overall: OverallWeights
    health: HealthWeights
    sustainability: SustainabilityWeights


class OriginScale(_Frozen):
    same_country: float
    neighboring_country: float
    intra_europe: float
    intercontinental: float

    def value(self, tier: OriginTier) -> float:
        return getattr(self, tier.value)


class Config(_Frozen):
    version: Optional[str] = None
    weights: Weights
    packaging_base: Dict[str, float]
    recyclability_bonus: Dict[Recyclability, float]
    origin_scale: OriginScale

    @field_validator("packaging_base")
    @classmethod
    def _needs_other(cls, v: Dict[str, float]) -> Dict[str, float]:
        table = {str(k).strip().lower(): float(p) for k, p in v.items()}
        if "other" not in table:
            raise ValueError("packaging_base must define an 'other' entry")
        return table

    @field_validator("recyclability_bonus")
    @classmethod
    def _all_categories(cls, v: Dict[Recyclability, float]) -> Dict[Recyclability, float]:
        missing = [r.value for r in Recyclability if r not in v]
        if missing:
            raise ValueError(f"recyclability_bonus missing: {', '.join(missing)}")
        return v


# ---------- Output ----------

class Scores(_Frozen):
    health_score: int
    sustainability_score: int
    price_score: int
    planit_score: int
    breakdown: Dict[str, Union[int, float]]
    quality_flag: QualityFlag


class ScoredProduct(_Frozen):
    basics: ProductBasics
    attributes: ProductAttributes
    scores: Scores
