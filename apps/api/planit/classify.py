from __future__ import annotations

from typing import Optional

from planit.models import Config, OriginTier, ProductAttributes, Recyclability
from planit.normalize import clamp

OTHER = "other"

# (substring, canonical category), checked in order
_MATERIAL_ALIASES = (
    ("tetra", "tetra-pack"),
    ("hdpe", "hdpe"),
    ("glass", "glass"),
    ("pet", "pet"),
)

_CERT_POINTS = {
    "organic": 10,
    "soil-association": 10,
    "bcorp": 5,
    "carbon-neutral": 5,
}
CERT_CAP = 20

_SAME_COUNTRY = {"UK"}
_NEIGHBORING = {"IE", "GB-IE"}

# EU member states plus Norway and Switzerland
_EUROPE = {
    "AT", "BE", "BG", "HR", "CY", "CZ", "DK", "EE", "FI", "FR",
    "DE", "GR", "HU", "IE", "IT", "LV", "LT", "LU", "MT", "NL",
    "PL", "PT", "RO", "SK", "SI", "ES", "SE", "NO", "CH",
}


def primary_material(s: Optional[str]) -> str:
    first = (s or "").split(",")[0].strip().lower()
    if not first:
        return OTHER
    for needle, canon in _MATERIAL_ALIASES:
        if needle in first:
            return canon
    return first


def packaging_base(material: str, cfg: Config) -> float:
    table = cfg.packaging_base
    return table.get(material, table[OTHER])


def recyclability_bonus(value: Optional[Recyclability], cfg: Config) -> float:
    if value is None:
        return 0.0
    return cfg.recyclability_bonus.get(value, 0.0)


def packaging_score(attrs: ProductAttributes, cfg: Config) -> float:
    base = packaging_base(primary_material(attrs.packaging_materials), cfg)
    bonus = recyclability_bonus(attrs.recyclability, cfg)
    return clamp(base + bonus, 0, 100)


def certification_points(s: Optional[str]) -> float:
    tokens = {t.strip().lower() for t in (s or "").split(";")}
    tokens.discard("")
    points = sum(_CERT_POINTS.get(t, 0) for t in tokens)
    return clamp(points, 0, CERT_CAP)


def origin_tier(code: Optional[str]) -> OriginTier:
    c = (code or "").strip().upper()
    if c in _SAME_COUNTRY:
        return OriginTier.same_country
    if c in _NEIGHBORING:
        return OriginTier.neighboring_country
    if c in _EUROPE:
        return OriginTier.intra_europe
    return OriginTier.intercontinental


def origin_value(code: Optional[str], cfg: Config) -> float:
    return cfg.origin_scale.value(origin_tier(code))
