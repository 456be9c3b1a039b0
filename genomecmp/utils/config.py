"""Configuration utilities."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

try:
    import yaml
except ImportError:  # pragma: no cover - optional dependency
    yaml = None

from genomecmp.errors import ConfigError


def _require(condition: bool, msg: str) -> None:
    if not condition:
        raise ConfigError(msg)


@dataclass(frozen=True, slots=True)
class KmerConfig:
    k_values: tuple[int, ...] = (3, 5, 7, 11)
    minhash_k: int = 16
    num_hashes: int = 128
    canonical: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "k_values", tuple(int(k) for k in self.k_values))
        _require(bool(self.k_values), "k_values must not be empty")
        _require(self.minhash_k >= 1, f"minhash_k must be >= 1, got {self.minhash_k}")
        _require(self.num_hashes >= 1, f"num_hashes must be >= 1, got {self.num_hashes}")


@dataclass(frozen=True, slots=True)
class EditDistanceConfig:
    """Thresholds for the exact and windowed edit-distance paths.

    Attributes
    ----------
    max_exact_length : int
        Longest operand handled by the exact two-row DP.
    max_operations_length : int
        Longest operand handled by the full-matrix traceback.
    window_size : int
        Width of each window in the approximate path.
    num_windows : int
        Upper bound on the number of windows sampled.
    sample_size, num_samples : int
        Window width and count for ``quick_similarity_estimate``.
    use_accelerator : bool
        Allow the optional native backend for exact distances.
    """

    max_exact_length: int = 10000
    max_operations_length: int = 5000
    window_size: int = 1000
    num_windows: int = 20
    sample_size: int = 1000
    num_samples: int = 10
    use_accelerator: bool = True

    def __post_init__(self) -> None:
        _require(self.max_exact_length >= 0, "max_exact_length must be >= 0")
        _require(self.max_operations_length >= 0, "max_operations_length must be >= 0")
        _require(self.window_size >= 1, f"window_size must be >= 1, got {self.window_size}")
        _require(self.num_windows >= 1, f"num_windows must be >= 1, got {self.num_windows}")
        _require(self.sample_size >= 1, "sample_size must be >= 1")
        _require(self.num_samples >= 1, "num_samples must be >= 1")


@dataclass(frozen=True, slots=True)
class SyntenyOptions:
    """Greedy chaining parameters used to build synteny blocks."""

    min_score: float = 0.2
    max_step_a: int = 2
    max_step_b: int = 3
    min_block_matches: int = 2

    def __post_init__(self) -> None:
        _require(0.0 <= self.min_score <= 1.0, f"min_score must be in [0, 1], got {self.min_score}")
        _require(self.max_step_a >= 1, "max_step_a must be >= 1")
        _require(self.max_step_b >= 1, "max_step_b must be >= 1")
        _require(self.min_block_matches >= 1, "min_block_matches must be >= 1")


@dataclass(frozen=True, slots=True)
class StructuralVariantOptions:
    min_gap_bp: int = 500  # smaller gaps are annotation jitter
    min_confidence: float = 0.15
    translocation_distance: int = 2000
    inversion_min_flip: int = 3

    def __post_init__(self) -> None:
        _require(self.min_gap_bp >= 0, "min_gap_bp must be >= 0")
        _require(
            0.0 <= self.min_confidence <= 1.0,
            f"min_confidence must be in [0, 1], got {self.min_confidence}",
        )
        _require(self.translocation_distance >= 0, "translocation_distance must be >= 0")
        _require(self.inversion_min_flip >= 0, "inversion_min_flip must be >= 0")


@dataclass(frozen=True, slots=True)
class CacheConfig:
    max_entries: int = 1000
    max_bytes: int = 64 * 1024 * 1024

    def __post_init__(self) -> None:
        _require(self.max_entries >= 1, f"max_entries must be >= 1, got {self.max_entries}")
        _require(self.max_bytes >= 1, f"max_bytes must be >= 1, got {self.max_bytes}")


@dataclass(frozen=True, slots=True)
class ComparisonConfig:
    kmers: KmerConfig = field(default_factory=KmerConfig)
    edit_distance: EditDistanceConfig = field(default_factory=EditDistanceConfig)
    synteny: SyntenyOptions = field(default_factory=SyntenyOptions)
    structural_variants: StructuralVariantOptions = field(default_factory=StructuralVariantOptions)
    cache: CacheConfig = field(default_factory=CacheConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> ComparisonConfig:
        data = dict(data or {})
        sections = {f.name: f for f in fields(cls)}
        unknown = set(data) - set(sections)
        if unknown:
            msg = f"Unknown config sections: {sorted(unknown)}"
            raise ConfigError(msg)
        kwargs: dict[str, Any] = {}
        for name, section in data.items():
            section_cls = _SECTION_TYPES[name]
            kwargs[name] = _build_section(section_cls, name, section or {})
        return cls(**kwargs)

    def as_dict(self) -> dict[str, dict[str, Any]]:
        return {
            section.name: {
                f.name: getattr(getattr(self, section.name), f.name)
                for f in fields(getattr(self, section.name))
            }
            for section in fields(self)
        }


_SECTION_TYPES: dict[str, type] = {
    "kmers": KmerConfig,
    "edit_distance": EditDistanceConfig,
    "synteny": SyntenyOptions,
    "structural_variants": StructuralVariantOptions,
    "cache": CacheConfig,
}


def _build_section(section_cls: type, name: str, values: Mapping[str, Any]) -> Any:
    if not isinstance(values, Mapping):
        msg = f"Config section '{name}' must be a mapping"
        raise ConfigError(msg)
    allowed = {f.name for f in fields(section_cls)}
    unknown = set(values) - allowed
    if unknown:
        msg = f"Unknown keys in '{name}': {sorted(unknown)}"
        raise ConfigError(msg)
    return section_cls(**values)


def load_config(path: str | Path) -> ComparisonConfig:
    """Read a YAML or JSON file into a :class:`ComparisonConfig`."""
    target = Path(path)
    if not target.exists():
        raise FileNotFoundError(f"Config file not found: {target}")
    if target.suffix.lower() == ".json":
        return ComparisonConfig.from_dict(json.loads(target.read_text()))
    if yaml is None:
        raise RuntimeError("pyyaml is required for YAML configs. Install with `pip install pyyaml`. ")
    return ComparisonConfig.from_dict(yaml.safe_load(target.read_text()))
