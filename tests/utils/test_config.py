import json

import pytest

from genomecmp.errors import ConfigError
from genomecmp.utils.config import (
    ComparisonConfig,
    EditDistanceConfig,
    KmerConfig,
    StructuralVariantOptions,
    SyntenyOptions,
    load_config,
)


def test_defaults():
    config = ComparisonConfig()
    assert config.kmers.k_values == (3, 5, 7, 11)
    assert config.edit_distance.max_exact_length == 10000
    assert config.edit_distance.max_operations_length == 5000
    assert config.synteny == SyntenyOptions(min_score=0.2, max_step_a=2, max_step_b=3, min_block_matches=2)
    assert config.structural_variants.min_gap_bp == 500
    assert config.cache.max_entries == 1000


def test_from_dict_overrides_sections():
    config = ComparisonConfig.from_dict(
        {"kmers": {"k_values": [4, 8]}, "structural_variants": {"min_confidence": 0.5}}
    )
    assert config.kmers.k_values == (4, 8)
    assert config.structural_variants.min_confidence == 0.5
    assert config.edit_distance == EditDistanceConfig()


def test_from_dict_accepts_none():
    assert ComparisonConfig.from_dict(None) == ComparisonConfig()


def test_as_dict_round_trips():
    config = ComparisonConfig.from_dict({"cache": {"max_entries": 7}})
    assert ComparisonConfig.from_dict(config.as_dict()) == config


@pytest.mark.parametrize(
    "data",
    [
        {"unknown": {}},
        {"kmers": {"bogus": 1}},
        {"kmers": "not a mapping"},
    ],
)
def test_rejects_malformed_sections(data):
    with pytest.raises(ConfigError):
        ComparisonConfig.from_dict(data)


@pytest.mark.parametrize(
    "factory",
    [
        lambda: KmerConfig(k_values=()),
        lambda: KmerConfig(num_hashes=0),
        lambda: EditDistanceConfig(window_size=0),
        lambda: SyntenyOptions(min_score=1.5),
        lambda: StructuralVariantOptions(min_confidence=-0.1),
    ],
)
def test_invalid_values_raise_config_error(factory):
    with pytest.raises(ValueError):
        factory()


def test_load_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"synteny": {"max_step_b": 5}}))
    assert load_config(path).synteny.max_step_b == 5


def test_load_yaml(tmp_path):
    pytest.importorskip("yaml")
    path = tmp_path / "config.yaml"
    path.write_text("edit_distance:\n  window_size: 250\n  use_accelerator: false\n")
    config = load_config(path)
    assert config.edit_distance.window_size == 250
    assert config.edit_distance.use_accelerator is False


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")
