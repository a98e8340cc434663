import os
from pathlib import Path

API_DIR = Path(__file__).resolve().parents[1]  # .../apps/api

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "default_config.json"
CONFIG_PATH = Path(os.getenv("PLANIT_CONFIG_PATH", "") or DEFAULT_CONFIG_PATH)

DATA_DIR = Path(os.getenv("PLANIT_DATA_DIR", "") or API_DIR / "data")

OFF_BASE_URL = os.getenv("OFF_BASE_URL", "https://world.openfoodfacts.org").rstrip("/")
OFF_USER_AGENT = os.getenv("OFF_USER_AGENT", "PlanIt-Green/0.1")
OFF_TIMEOUT = float(os.getenv("OFF_TIMEOUT", 15))
