from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

from planit.logger_manager import log_info
from planit.models import Config
from planit.settings import CONFIG_PATH


def load_config(path: Optional[Union[str, Path]] = None) -> Config:
    """Read a scoring config document. Raises pydantic.ValidationError if malformed."""
    p = Path(path) if path else CONFIG_PATH
    with p.open("r", encoding="utf-8") as f:
        raw = json.load(f)
    cfg = Config.model_validate(raw)
    log_info(f"loaded scoring config {cfg.version or '(unversioned)'} from {p}")
    return cfg


@lru_cache(maxsize=1)
def get_config() -> Config:
    return load_config()
