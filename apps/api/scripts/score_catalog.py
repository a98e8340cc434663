from planit.config import get_config
from planit.dataset import load_dataset
from planit.scoring import score_catalog
from planit.settings import DATA_DIR


def main():
    ds = load_dataset(DATA_DIR)
    rows = score_catalog(ds.basics, ds.attributes.values(), get_config())

    print(f"{'planit':>6} {'health':>6} {'sust':>6} {'price':>6}  {'flag':<8} product")
    for r in rows:
        s = r.scores
        name = f"{r.basics.brand} {r.basics.product_name} ({r.basics.retailer})"
        print(
            f"{s.planit_score:>6} {s.health_score:>6} {s.sustainability_score:>6} "
            f"{s.price_score:>6}  {s.quality_flag.value:<8} {name}"
        )


if __name__ == "__main__":
    main()
