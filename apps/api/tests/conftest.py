from pathlib import Path

import pytest

from planit.models import Config, ProductAttributes, ProductBasics

PRODUCTS_HEADER = (
    "product_id,retailer,brand,product_name,size_ml,price_gbp,"
    "unit_price_gbp_per_litre,url,barcode,last_seen_at_utc"
)
ATTRIBUTES_HEADER = (
    "product_id,off_code,ingredients_short,sugar_g_per_100ml,sat_fat_g_per_100ml,"
    "additives_count,packaging_materials,recyclability,certifications,"
    "country_of_origin,notes,source_links"
)


def make_basics(product_id="p1", price=2.0, brand="Brand", name="Oat Drink", retailer="Tesco"):
    return ProductBasics(
        product_id=product_id,
        retailer=retailer,
        brand=brand,
        product_name=name,
        size_ml=1000,
        unit_price_gbp_per_litre=price,
    )


def make_attrs(
    product_id="p1",
    sugar=2.0,
    sat_fat=0.5,
    additives=1.0,
    packaging="tetra-pack",
    recyclability="widely_recycled",
    certifications="organic",
    country="UK",
):
    return ProductAttributes(
        product_id=product_id,
        sugar_g_per_100ml=sugar,
        sat_fat_g_per_100ml=sat_fat,
        additives_count=additives,
        packaging_materials=packaging,
        recyclability=recyclability,
        certifications=certifications,
        country_of_origin=country,
    )


CONFIG_DOC = {
    "version": "test",
    "weights": {
        "overall": {"sustainability": 0.34, "health": 0.33, "price": 0.33},
        "health": {"sugar": 0.4, "sat_fat": 0.4, "additives": 0.2},
        "sustainability": {"packaging": 0.5, "origin": 0.3, "certs": 0.2},
    },
    "packaging_base": {"glass": 60, "tetra-pack": 50, "hdpe": 45, "pet": 40, "other": 30},
    "recyclability_bonus": {"widely_recycled": 20, "check_local": 10, "not_recycled": 0},
    "origin_scale": {
        "same_country": 100,
        "neighboring_country": 80,
        "intra_europe": 60,
        "intercontinental": 30,
    },
}


@pytest.fixture
def cfg() -> Config:
    return Config.model_validate(CONFIG_DOC)


def write_csv(path: Path, header: str, lines):
    path.write_text("\n".join([header, *lines]) + "\n", encoding="utf-8")


@pytest.fixture
def data_dir(tmp_path) -> Path:
    write_csv(tmp_path / "products.csv", PRODUCTS_HEADER, [
        "a,Tesco,Oatly,Barista,1000,2.20,2.20,,111,",
        "b,Asda,Alpro,No Sugars,1000,1.50,1.50,,222,",
        "c,Waitrose,Rude Health,Organic Oat,1000,2.80,2.80,,333,",
        "d,Ocado,Mighty,Original,1000,1.80,1.80,,444,",
    ])
    write_csv(tmp_path / "attributes.csv", ATTRIBUTES_HEADER, [
        'a,111,,3.4,0.3,3,"tetra-pack,plastic-cap",widely_recycled,,SE,,',
        "b,222,,0,0.1,2,tetra-pack,widely_recycled,,BE,,",
        "c,333,,4.5,0.1,0,glass,check_local,organic;soil-association,UK,,",
    ])
    return tmp_path
