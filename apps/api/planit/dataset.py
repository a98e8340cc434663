from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import pandas as pd

from planit.logger_manager import log_info, log_warning
from planit.models import ProductAttributes, ProductBasics

PRODUCTS_CSV = "products.csv"
ATTRIBUTES_CSV = "attributes.csv"

PRODUCT_COLUMNS = [
    "product_id", "retailer", "brand", "product_name", "size_ml", "price_gbp",
    "unit_price_gbp_per_litre", "url", "barcode", "last_seen_at_utc",
]

ATTRIBUTE_COLUMNS = [
    "product_id", "off_code", "ingredients_short", "sugar_g_per_100ml",
    "sat_fat_g_per_100ml", "additives_count", "packaging_materials", "recyclability",
    "certifications", "country_of_origin", "notes", "source_links",
]

_PRODUCT_NUMERIC = ("size_ml", "price_gbp", "unit_price_gbp_per_litre")
_ATTRIBUTE_NUMERIC = ("sugar_g_per_100ml", "sat_fat_g_per_100ml", "additives_count")

PathLike = Union[str, Path]


class DatasetError(RuntimeError):
    pass


@dataclass(frozen=True)
class Dataset:
    basics: List[ProductBasics]
    attributes: Dict[str, ProductAttributes] = field(default_factory=dict)

    def get(self, product_id: str) -> Optional[ProductBasics]:
        for b in self.basics:
            if b.product_id == product_id:
                return b
        return None


def must_exist(p: Path):
    if not p.exists():
        raise DatasetError(f"Missing file: {p}")


def read_header(p: Path) -> List[str]:
    must_exist(p)
    with p.open("r", encoding="utf-8-sig") as f:
        first = f.readline().strip()
    return [c.strip() for c in first.split(",")] if first else []


def validate_headers(data_dir: PathLike) -> List[str]:
    """Return a list of problems; empty when both CSV headers match exactly."""
    d = Path(data_dir)
    problems: List[str] = []
    for name, expected in ((PRODUCTS_CSV, PRODUCT_COLUMNS), (ATTRIBUTES_CSV, ATTRIBUTE_COLUMNS)):
        got = read_header(d / name)
        if got != expected:
            problems.append(f"{name}: expected {','.join(expected)} got {','.join(got)}")
    return problems


def to_float(x: Any) -> Optional[float]:
    s = str(x if x is not None else "").strip()
    if s == "":
        return None
    try:
        v = float(s)
    except (ValueError, OverflowError):
        return None
    return v if math.isfinite(v) else None


def _read_rows(p: Path, numeric: Sequence[str]) -> List[Dict[str, Any]]:
    must_exist(p)
    try:
        df = pd.read_csv(p, dtype=str, keep_default_na=False, encoding="utf-8-sig")
    except pd.errors.EmptyDataError as e:
        raise DatasetError(f"{p.name}: empty file") from e
    df.columns = [c.strip() for c in df.columns]
    if "product_id" not in df.columns:
        raise DatasetError(f"{p.name}: missing product_id column")

    rows: List[Dict[str, Any]] = []
    for r in df.to_dict(orient="records"):
        row = {k: (v.strip() if isinstance(v, str) else v) for k, v in r.items()}
        if not row.get("product_id"):
            continue
        for col in numeric:
            if col in row:
                row[col] = to_float(row[col])
        rows.append(row)
    return rows


def read_product_rows(path: PathLike) -> List[Dict[str, Any]]:
    return _read_rows(Path(path), _PRODUCT_NUMERIC)


def read_attribute_rows(path: PathLike) -> Dict[str, Dict[str, Any]]:
    out: Dict[str, Dict[str, Any]] = {}
    for row in _read_rows(Path(path), _ATTRIBUTE_NUMERIC):
        out.setdefault(row["product_id"], row)
    return out


def load_products(path: PathLike) -> List[ProductBasics]:
    out: List[ProductBasics] = []
    for row in _read_rows(Path(path), _PRODUCT_NUMERIC):
        price = row.get("unit_price_gbp_per_litre")
        if price is None or price <= 0:
            log_warning(f"product {row['product_id']}: no usable unit price; skipped")
            continue
        out.append(ProductBasics.model_validate(row))
    return out


def load_attributes(path: PathLike) -> Dict[str, ProductAttributes]:
    out: Dict[str, ProductAttributes] = {}
    for row in _read_rows(Path(path), _ATTRIBUTE_NUMERIC):
        pid = row["product_id"]
        if pid in out:
            log_warning(f"duplicate attributes for product {pid}; keeping the first")
            continue
        out[pid] = ProductAttributes.model_validate(row)
    return out


def load_dataset(data_dir: PathLike) -> Dataset:
    d = Path(data_dir)
    basics = load_products(d / PRODUCTS_CSV)
    attributes = load_attributes(d / ATTRIBUTES_CSV)
    log_info(f"loaded {len(basics)} products, {len(attributes)} attribute rows from {d}")
    return Dataset(basics=basics, attributes=attributes)


def _cell(v: Any) -> Any:
    if v is None:
        return ""
    if hasattr(v, "value"):  # enums
        return v.value
    if isinstance(v, float) and v.is_integer():
        return int(v)
    return v


def write_attributes(path: PathLike, rows: Sequence[Dict[str, Any]]):
    """Write attribute rows back in the canonical column order."""
    records = [{c: _cell(r.get(c)) for c in ATTRIBUTE_COLUMNS} for r in rows]
    df = pd.DataFrame(records, columns=ATTRIBUTE_COLUMNS)
    df.to_csv(path, index=False, encoding="utf-8")
