import json
from dataclasses import replace
from pathlib import Path

import pytest

from classpresso import ConsolidationConfig, load_config, validate_config
from classpresso.config import DEFAULT_EXCLUDE


def _messages(config):
    return [issue.message for issue in validate_config(config)]


def test_defaults():
    cfg = ConsolidationConfig()
    assert cfg.build_dir == ".next"
    assert cfg.min_occurrences >= 1
    assert cfg.min_classes >= 1
    assert cfg.hash_prefix == "cp-"
    assert 3 <= cfg.hash_length <= 32
    assert "js-" in cfg.exclude.prefixes
    assert "data-" in cfg.exclude.prefixes
    assert "-handler" in cfg.exclude.suffixes
    assert "-trigger" in cfg.exclude.suffixes
    assert cfg.exclude.patterns
    assert cfg.manifest is True
    assert cfg.ssr is False
    assert _messages(cfg) == []


def test_validation_messages():
    cfg = ConsolidationConfig()
    assert "minOccurrences must be at least 1" in _messages(replace(cfg, min_occurrences=0))
    assert "minClasses must be at least 1" in _messages(replace(cfg, min_classes=0))
    assert "hashLength must be at least 3" in _messages(replace(cfg, hash_length=2))
    assert "hashLength must be at most 32" in _messages(replace(cfg, hash_length=33))
    assert "hashPrefix must not be empty" in _messages(replace(cfg, hash_prefix=""))
    assert "minBytesSaved must not be negative" in _messages(replace(cfg, min_bytes_saved=-1))
    assert len(_messages(replace(cfg, min_occurrences=0, min_classes=0, hash_length=1, hash_prefix=""))) == 4


def test_valid_edge_values():
    cfg = ConsolidationConfig()
    assert _messages(replace(cfg, hash_length=3)) == []
    assert _messages(replace(cfg, hash_length=32)) == []
    assert _messages(replace(cfg, min_occurrences=5, min_classes=3, hash_length=8, hash_prefix="custom-")) == []


def test_from_mapping_accepts_camel_case():
    cfg = ConsolidationConfig.from_mapping(
        {
            "minOccurrences": 3,
            "hashPrefix": "x-",
            "ssr": True,
            "skipPatternsWithExcludedClasses": True,
            "exclude": {"prefixes": ["js-"], "patterns": ["^qa-"]},
        }
    )
    assert cfg.min_occurrences == 3
    assert cfg.hash_prefix == "x-"
    assert cfg.ssr is True
    assert cfg.skip_patterns_with_excluded_classes is True
    assert cfg.exclude.prefixes == ("js-",)
    assert cfg.exclude.patterns[0].search("qa-button")
    assert cfg.min_classes == 2


def test_from_mapping_rejects_unknown_keys():
    with pytest.raises(ValueError, match="Unknown configuration option"):
        ConsolidationConfig.from_mapping({"minOccurences": 3})
    with pytest.raises(ValueError, match="Unknown exclude option"):
        ConsolidationConfig.from_mapping({"exclude": {"prefix": ["js-"]}})


def test_load_config(tmp_path: Path):
    missing = load_config(tmp_path / "absent.json")
    assert missing == ConsolidationConfig()
    assert missing.exclude is DEFAULT_EXCLUDE

    path = tmp_path / "classpresso.config.json"
    path.write_text(json.dumps({"min_bytes_saved": 50, "forceAll": True}), encoding="utf-8")
    cfg = load_config(path)
    assert cfg.min_bytes_saved == 50
    assert cfg.force_all is True


def test_load_config_rejects_non_object(tmp_path: Path):
    path = tmp_path / "bad.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)
