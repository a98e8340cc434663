from planit.dataset import DatasetError, validate_headers
from planit.settings import DATA_DIR


def main():
    try:
        problems = validate_headers(DATA_DIR)
    except DatasetError as e:
        raise SystemExit(str(e))

    if problems:
        for p in problems:
            print("header mismatch:", p)
        raise SystemExit(1)

    print("CSV headers OK")


if __name__ == "__main__":
    main()
