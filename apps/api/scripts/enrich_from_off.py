from planit.dataset import (
    ATTRIBUTES_CSV,
    PRODUCTS_CSV,
    must_exist,
    read_attribute_rows,
    read_product_rows,
    write_attributes,
)
from planit.services.openfoodfacts import enrich_catalog
from planit.settings import DATA_DIR

PRODUCTS = DATA_DIR / PRODUCTS_CSV
ATTRIBUTES = DATA_DIR / ATTRIBUTES_CSV


def main():
    must_exist(PRODUCTS)

    products = read_product_rows(PRODUCTS)
    attributes = read_attribute_rows(ATTRIBUTES) if ATTRIBUTES.exists() else {}

    rows = enrich_catalog(products, attributes)
    write_attributes(ATTRIBUTES, rows)

    print("Updated", ATTRIBUTES)


if __name__ == "__main__":
    main()
