"""Configuration system for TickDetect.

Hierarchical YAML configuration with deep-merge support:
  base.yaml → scenario override → sweep overrides

All parameters are fixed prior beliefs (lab observations of warm- and
cold-history ticks), not estimates. Every one of them can be overridden.

Design decisions:
  - Warm and cold groups keep separate parameter blocks; the two abundance
    models are never unified.
  - Detection offsets (185, 210) are tuning constants chosen to put mean
    detection probability near 0.30 under the default movement means.
  - Validation runs before any random draw.
"""

from __future__ import annotations

import dataclasses
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np
import yaml


# ═══════════════════════════════════════════════════════════════════════
# CONFIGURATION DATACLASSES
# ═══════════════════════════════════════════════════════════════════════

@dataclass
class SimulationSection:
    """Replicate count, day window and seed."""
    n_replicates: int = 100
    day_min: float = 0.0         # elapsed days, uniform lower bound
    day_max: float = 35.0        # elapsed days, uniform upper bound
    seed: Optional[int] = None   # None = fresh OS entropy (not reproducible)


@dataclass
class MovementSection:
    """Distance moved (m) as a function of elapsed day.

    Warm: distance = intercept + slope × day, both drawn per replicate.
    Cold: distance ~ Normal(cold_mean, cold_sd), no day dependence.
    """
    warm_intercept_mean: float = 150.0
    warm_intercept_sd: float = 40.0
    warm_slope_mean: float = -3.0   # m/day
    warm_slope_sd: float = 0.4
    cold_mean: float = 100.0
    cold_sd: float = 40.0


@dataclass
class DetectionSection:
    """Saturating distance → probability transform: d / (offset + d)."""
    warm_offset: float = 185.0
    cold_offset: float = 210.0


@dataclass
class AbundanceSection:
    """Live-tick decay models.

    Warm (linear): start ~ Poisson(warm_start_lambda) once per run,
        slope ~ Normal(warm_slope_mean, warm_slope_sd) per replicate.
    Cold (logistic): asymptote, inflection day and rate drawn per
        replicate; Normal(0, cold_noise_sd) observation noise.
    """
    warm_start_lambda: float = 100.0
    warm_slope_mean: float = -2.6    # ticks/day
    warm_slope_sd: float = 0.3
    cold_asymptote_mean: float = 95.0
    cold_asymptote_sd: float = 4.0
    cold_inflection_mean: float = 24.0   # day
    cold_inflection_sd: float = 1.0
    cold_rate_mean: float = -4.0         # negative = declining curve
    cold_rate_sd: float = 0.3
    cold_noise_sd: float = 5.0


@dataclass
class SimulationConfig:
    """Complete simulation configuration.

    Load from YAML via `load_config()`. Sections map 1:1 to YAML top-level keys.
    """
    simulation: SimulationSection = field(default_factory=SimulationSection)
    movement: MovementSection = field(default_factory=MovementSection)
    detection: DetectionSection = field(default_factory=DetectionSection)
    abundance: AbundanceSection = field(default_factory=AbundanceSection)


# ═══════════════════════════════════════════════════════════════════════
# YAML LOADING & MERGING
# ═══════════════════════════════════════════════════════════════════════

def deep_merge(base: Dict, override: Dict) -> Dict:
    """Recursively merge override into base. Modifies base in place.

    - Dict values are merged recursively
    - Non-dict values are replaced
    - Keys in override but not base are added

    Args:
        base: Base dictionary (modified in place).
        override: Override dictionary.

    Returns:
        The merged base dictionary.
    """
    for key, value in override.items():
        if (
            key in base
            and isinstance(base[key], dict)
            and isinstance(value, dict)
        ):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base


_SECTION_MAP = {
    'simulation': SimulationSection,
    'movement': MovementSection,
    'detection': DetectionSection,
    'abundance': AbundanceSection,
}


def _dict_to_section(section_cls, data: Dict) -> Any:
    """Convert a dict to a dataclass, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(section_cls)}
    filtered = {k: v for k, v in data.items() if k in valid_fields}
    return section_cls(**filtered)


def _yaml_to_config(data: Dict) -> SimulationConfig:
    """Convert a merged YAML dict to a SimulationConfig."""
    sections = {}
    for key, cls in _SECTION_MAP.items():
        if key in data and isinstance(data[key], dict):
            sections[key] = _dict_to_section(cls, data[key])
        else:
            sections[key] = cls()
    return SimulationConfig(**sections)


def config_to_dict(config: SimulationConfig) -> Dict[str, Dict[str, Any]]:
    """Plain nested dict of a config (YAML-dumpable)."""
    return dataclasses.asdict(config)


def apply_overrides(config: SimulationConfig,
                    overrides: Dict) -> SimulationConfig:
    """Return a new validated config with overrides deep-merged in."""
    data = config_to_dict(config)
    deep_merge(data, overrides)
    merged = _yaml_to_config(data)
    validate_config(merged)
    return merged


# ═══════════════════════════════════════════════════════════════════════
# VALIDATION
# ═══════════════════════════════════════════════════════════════════════

def _require_finite(section: str, obj, names) -> None:
    """Raise ValueError if any named field is NaN or infinite."""
    for name in names:
        value = getattr(obj, name)
        if not np.isfinite(value):
            raise ValueError(f"{section}.{name} must be finite, got {value}")


def validate_config(config: SimulationConfig) -> None:
    """Validate configuration constraints. Raises ValueError on failure.

    Checks:
      - Replicate count is a positive integer
      - Every numeric parameter is finite
      - Day window is non-negative and ordered
      - Detection offsets are positive
      - Standard deviations and Poisson rate are non-negative
      - Cold logistic rate is not fixed at exactly zero
    Warns (UserWarning) when a valid setting reverses a mortality trend.
    """
    sim = config.simulation
    if (isinstance(sim.n_replicates, bool)
            or not isinstance(sim.n_replicates, (int, np.integer))):
        raise ValueError(
            f"simulation.n_replicates must be an integer, "
            f"got {sim.n_replicates!r}"
        )
    if sim.n_replicates <= 0:
        raise ValueError(
            f"simulation.n_replicates must be > 0, got {sim.n_replicates}"
        )
    _require_finite('simulation', sim, ('day_min', 'day_max'))
    if sim.day_min < 0:
        raise ValueError(
            f"simulation.day_min must be >= 0, got {sim.day_min}"
        )
    if sim.day_min > sim.day_max:
        raise ValueError(
            f"simulation.day_min ({sim.day_min}) must be <= "
            f"day_max ({sim.day_max})"
        )
    if sim.seed is not None and sim.seed < 0:
        raise ValueError("simulation.seed must be non-negative")

    det = config.detection
    _require_finite('detection', det, ('warm_offset', 'cold_offset'))
    for name in ('warm_offset', 'cold_offset'):
        value = getattr(det, name)
        if value <= 0:
            raise ValueError(
                f"detection.{name} must be > 0, got {value}"
            )

    mov = config.movement
    _require_finite('movement', mov,
                    [f.name for f in dataclasses.fields(mov)])
    for name in ('warm_intercept_sd', 'warm_slope_sd', 'cold_sd'):
        value = getattr(mov, name)
        if value < 0:
            raise ValueError(f"movement.{name} must be >= 0, got {value}")

    ab = config.abundance
    _require_finite('abundance', ab,
                    [f.name for f in dataclasses.fields(ab)])
    if ab.warm_start_lambda < 0:
        raise ValueError(
            f"abundance.warm_start_lambda must be >= 0, "
            f"got {ab.warm_start_lambda}"
        )
    for name in ('warm_slope_sd', 'cold_asymptote_sd', 'cold_inflection_sd',
                 'cold_rate_sd', 'cold_noise_sd'):
        value = getattr(ab, name)
        if value < 0:
            raise ValueError(f"abundance.{name} must be >= 0, got {value}")
    # c = 0 divides by zero at the inflection day
    if ab.cold_rate_mean == 0 and ab.cold_rate_sd == 0:
        raise ValueError(
            "abundance.cold_rate_mean and cold_rate_sd cannot both be 0"
        )

    if ab.warm_slope_mean > 0:
        warnings.warn(
            f"abundance.warm_slope_mean ({ab.warm_slope_mean}) is positive; "
            f"warm abundance will grow with elapsed day.",
            UserWarning,
            stacklevel=2,
        )
    if ab.cold_rate_mean >= 0:
        warnings.warn(
            f"abundance.cold_rate_mean ({ab.cold_rate_mean}) is >= 0; "
            f"cold logistic curve will not decline with elapsed day.",
            UserWarning,
            stacklevel=2,
        )


def load_config(
    base_path: Union[str, Path],
    scenario_path: Optional[Union[str, Path]] = None,
    sweep_overrides: Optional[Dict] = None,
) -> SimulationConfig:
    """Load and merge hierarchical YAML configuration.

    Merge order: base → scenario → sweep overrides.
    Each layer overrides only the fields it specifies.

    Args:
        base_path: Path to base configuration YAML.
        scenario_path: Optional scenario override YAML.
        sweep_overrides: Optional dict of parameter overrides.

    Returns:
        Validated SimulationConfig.

    Raises:
        FileNotFoundError: If base_path doesn't exist.
        ValueError: If validation fails.
    """
    base_path = Path(base_path)
    if not base_path.exists():
        raise FileNotFoundError(f"Config file not found: {base_path}")

    with open(base_path) as f:
        config_dict = yaml.safe_load(f) or {}

    if scenario_path is not None:
        scenario_path = Path(scenario_path)
        if scenario_path.exists():
            with open(scenario_path) as f:
                scenario = yaml.safe_load(f) or {}
            deep_merge(config_dict, scenario)

    if sweep_overrides is not None:
        deep_merge(config_dict, sweep_overrides)

    config = _yaml_to_config(config_dict)
    validate_config(config)
    return config


def default_config() -> SimulationConfig:
    """Return a SimulationConfig with all default values."""
    config = SimulationConfig()
    validate_config(config)
    return config
