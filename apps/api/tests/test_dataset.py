import pytest

from conftest import ATTRIBUTES_HEADER, PRODUCTS_HEADER, write_csv
from planit.dataset import (
    ATTRIBUTE_COLUMNS,
    DatasetError,
    load_attributes,
    load_dataset,
    load_products,
    read_attribute_rows,
    validate_headers,
    write_attributes,
)
from planit.models import Recyclability


def test_load_dataset(data_dir):
    ds = load_dataset(data_dir)

    assert [b.product_id for b in ds.basics] == ["a", "b", "c", "d"]
    assert set(ds.attributes) == {"a", "b", "c"}
    assert ds.get("b").unit_price_gbp_per_litre == 1.5
    assert ds.get("zzz") is None

    a = ds.attributes["a"]
    assert a.sugar_g_per_100ml == 3.4
    assert a.packaging_materials == "tetra-pack,plastic-cap"
    assert a.recyclability is Recyclability.widely_recycled
    assert a.certifications == ""


def test_blank_numbers_become_none(tmp_path):
    write_csv(tmp_path / "attributes.csv", ATTRIBUTES_HEADER, [
        "x,,,,0.2,n/a,glass,,organic,FR,,",
    ])
    attrs = load_attributes(tmp_path / "attributes.csv")
    x = attrs["x"]
    assert x.sugar_g_per_100ml is None
    assert x.sat_fat_g_per_100ml == 0.2
    assert x.additives_count is None
    assert x.recyclability is None


def test_duplicate_attribute_rows_keep_first(tmp_path):
    write_csv(tmp_path / "attributes.csv", ATTRIBUTES_HEADER, [
        "x,,,1,,,glass,,,FR,,",
        "x,,,9,,,pet,,,US,,",
    ])
    assert load_attributes(tmp_path / "attributes.csv")["x"].sugar_g_per_100ml == 1
    assert read_attribute_rows(tmp_path / "attributes.csv")["x"]["country_of_origin"] == "FR"


def test_products_without_price_are_skipped(tmp_path):
    write_csv(tmp_path / "products.csv", PRODUCTS_HEADER, [
        "a,Tesco,Oatly,Barista,1000,2.2,2.2,,,",
        "b,Tesco,Oatly,Mystery,1000,,,,,",
        "c,Tesco,Oatly,Free,1000,0,0,,,",
    ])
    assert [b.product_id for b in load_products(tmp_path / "products.csv")] == ["a"]


def test_missing_file_raises(tmp_path):
    with pytest.raises(DatasetError):
        load_dataset(tmp_path)


def test_validate_headers(data_dir):
    assert validate_headers(data_dir) == []

    write_csv(data_dir / "products.csv", "product_id,brand,price", ["a,b,1"])
    problems = validate_headers(data_dir)
    assert len(problems) == 1
    assert problems[0].startswith("products.csv")


def test_write_attributes_round_trips_columns(tmp_path):
    out = tmp_path / "attributes.csv"
    write_attributes(out, [{
        "product_id": "x",
        "sugar_g_per_100ml": 4.0,
        "sat_fat_g_per_100ml": 0.25,
        "additives_count": None,
        "recyclability": Recyclability.check_local,
        "country_of_origin": "SE",
    }])

    header, line = out.read_text(encoding="utf-8").splitlines()
    assert header.split(",") == ATTRIBUTE_COLUMNS
    row = read_attribute_rows(out)["x"]
    assert row["sugar_g_per_100ml"] == 4.0
    assert row["additives_count"] is None
    assert row["recyclability"] == "check_local"
    assert row["packaging_materials"] == ""


def test_non_finite_cells_count_as_missing(tmp_path):
    write_csv(tmp_path / "products.csv", PRODUCTS_HEADER, [
        "a,Tesco,Oatly,Barista,1000,2.2,2.2,,,",
        "b,Tesco,Oatly,Broken,inf,inf,inf,,,",
    ])
    write_csv(tmp_path / "attributes.csv", ATTRIBUTES_HEADER, [
        "a,,,inf,-Infinity,nan,glass,,,FR,,",
    ])
    ds = load_dataset(tmp_path)
    assert [b.product_id for b in ds.basics] == ["a"]
    a = ds.attributes["a"]
    assert (a.sugar_g_per_100ml, a.sat_fat_g_per_100ml, a.additives_count) == (None, None, None)
