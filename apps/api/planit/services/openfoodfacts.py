from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from planit.logger_manager import log_info, log_warning
from planit.settings import OFF_BASE_URL, OFF_TIMEOUT, OFF_USER_AGENT

# Pull only what enrichment needs
OFF_FIELDS = ",".join([
    "code",
    "ingredients_text",
    "ingredients_text_en",
    "nutriments",
    "additives_n",
    "packaging",
    "labels",
    "countries_tags",
])


def _client() -> httpx.Client:
    return httpx.Client(
        base_url=OFF_BASE_URL,
        timeout=OFF_TIMEOUT,
        headers={"User-Agent": OFF_USER_AGENT},
    )


def fetch_off_product(barcode: str, client: Optional[httpx.Client] = None) -> Optional[Dict[str, Any]]:
    """
    Return the OFF `product` object for a barcode, or None when the barcode
    is blank or OFF does not know it. Other HTTP errors raise.
    """
    barcode = (barcode or "").strip()
    if not barcode:
        return None

    own = client is None
    c = client or _client()
    try:
        r = c.get(f"/api/v2/product/{barcode}.json", params={"fields": OFF_FIELDS})
    finally:
        if own:
            c.close()

    if r.status_code == 404:
        return None
    r.raise_for_status()
    return (r.json() or {}).get("product") or None


def _blank(x: Any) -> bool:
    return x is None or x == ""


def _coalesce(x: Any, fallback: Any) -> Any:
    return fallback if _blank(x) else x


def _country(off: Dict[str, Any]) -> str:
    tags = off.get("countries_tags") or []
    if not tags:
        return ""
    # "en:united-kingdom" style tags keep only the last segment
    return str(tags[0]).split(":")[-1].upper()


def product_url(code: str) -> str:
    return f"{OFF_BASE_URL}/product/{code}"


def enrich_attributes(row: Dict[str, Any], off: Dict[str, Any]) -> Dict[str, Any]:
    """Fill blank attribute fields from an OFF product. Existing values win."""
    out = dict(row)
    nutriments = off.get("nutriments") or {}

    out["off_code"] = _coalesce(out.get("off_code"), off.get("code") or "")
    out["ingredients_short"] = _coalesce(
        out.get("ingredients_short"),
        off.get("ingredients_text") or off.get("ingredients_text_en") or "",
    )
    out["sugar_g_per_100ml"] = _coalesce(out.get("sugar_g_per_100ml"), nutriments.get("sugars_100g"))
    out["sat_fat_g_per_100ml"] = _coalesce(out.get("sat_fat_g_per_100ml"), nutriments.get("saturated-fat_100g"))
    out["additives_count"] = _coalesce(out.get("additives_count"), off.get("additives_n"))

    packaging = "tetra-pack" if "tetra" in (off.get("packaging") or "").lower() else ""
    out["packaging_materials"] = _coalesce(out.get("packaging_materials"), packaging)
    out["recyclability"] = _coalesce(out.get("recyclability"), "check_local")
    certs = "organic" if "organic" in (off.get("labels") or "").lower() else ""
    out["certifications"] = _coalesce(out.get("certifications"), certs)
    out["country_of_origin"] = _coalesce(out.get("country_of_origin"), _country(off))

    if off.get("code"):
        links = [s for s in str(out.get("source_links") or "").split(";") if s]
        src = product_url(str(off["code"]))
        if src not in links:
            links.append(src)
        out["source_links"] = ";".join(links)
    return out


def empty_attributes(product_id: str) -> Dict[str, Any]:
    return {
        "product_id": product_id, "off_code": "", "ingredients_short": "",
        "sugar_g_per_100ml": None, "sat_fat_g_per_100ml": None, "additives_count": None,
        "packaging_materials": "", "recyclability": "", "certifications": "",
        "country_of_origin": "", "notes": "", "source_links": "",
    }


def enrich_catalog(
    products: List[Dict[str, Any]],
    attributes: Dict[str, Dict[str, Any]],
    client: Optional[httpx.Client] = None,
) -> List[Dict[str, Any]]:
    """
    Enrich attribute rows for every product with a barcode. Products missing
    an attribute row get a blank one. Failed lookups are logged and skipped.
    """
    own = client is None
    c = client or _client()
    merged: Dict[str, Dict[str, Any]] = dict(attributes)
    enriched = 0
    try:
        for p in products:
            pid = p["product_id"]
            row = merged.get(pid) or empty_attributes(pid)
            try:
                off = fetch_off_product(str(p.get("barcode") or ""), client=c)
            except httpx.HTTPError as e:
                log_warning(f"OFF lookup failed for {pid}: {e}")
                off = None
            if off:
                row = enrich_attributes(row, off)
                enriched += 1
            merged[pid] = row
    finally:
        if own:
            c.close()

    log_info(f"enriched {enriched} of {len(products)} products from OpenFoodFacts")
    return list(merged.values())
