import json

import pytest
from pydantic import ValidationError

from conftest import CONFIG_DOC
from planit.config import load_config
from planit.models import Config, OriginTier, Recyclability
from planit.settings import DEFAULT_CONFIG_PATH


def test_bundled_config_loads():
    cfg = load_config(DEFAULT_CONFIG_PATH)
    assert "other" in cfg.packaging_base
    assert set(cfg.recyclability_bonus) == set(Recyclability)
    assert cfg.origin_scale.value(OriginTier.same_country) == 100


def test_load_config_from_file(tmp_path):
    p = tmp_path / "cfg.json"
    p.write_text(json.dumps(CONFIG_DOC), encoding="utf-8")
    assert load_config(p).version == "test"


def test_packaging_table_requires_other():
    doc = dict(CONFIG_DOC, packaging_base={"glass": 60})
    with pytest.raises(ValidationError):
        Config.model_validate(doc)


def test_packaging_keys_are_lowercased():
    doc = dict(CONFIG_DOC, packaging_base={"Glass": 60, "OTHER": 10})
    assert Config.model_validate(doc).packaging_base == {"glass": 60, "other": 10}


def test_recyclability_table_needs_all_three_categories():
    doc = dict(CONFIG_DOC, recyclability_bonus={"widely_recycled": 20, "check_local": 10})
    with pytest.raises(ValidationError):
        Config.model_validate(doc)


def test_recyclability_table_rejects_unknown_category():
    bonus = dict(CONFIG_DOC["recyclability_bonus"], compostable=5)
    with pytest.raises(ValidationError):
        Config.model_validate(dict(CONFIG_DOC, recyclability_bonus=bonus))


def test_config_is_read_only():
    cfg = Config.model_validate(CONFIG_DOC)
    with pytest.raises(ValidationError):
        cfg.version = "changed"
