"""Configuration management for compaction planning.

Resolution order for a planning run: explicit overrides (CLI flags) >
``[compaction]`` table of the TOML config file > field defaults.
"""

from __future__ import annotations

import logging
import os
import warnings
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from compactline._error_messages import negative_budget_error, unknown_config_keys_error

logger = logging.getLogger(__name__)

try:
    import tomllib
except ModuleNotFoundError:  # Python < 3.11
    import tomli as tomllib

CONFIG_PATH = Path(
    os.getenv("COMPACTLINE_CONFIG", str(Path.home() / ".config" / "compactline" / "config.toml"))
).expanduser()

DEFAULT_STRATEGY = "log_file_size"


class ConfigError(ValueError):
    """Raised when a compaction config is invalid."""


@dataclass(frozen=True)
class CompactionConfig:
    """Resource knobs for one planning run.

    Attributes:
        compaction_strategy: Registered strategy name (aliases are normalized)
        target_io_per_compaction_mb: I/O budget per plan; None means unbounded
        target_partitions_per_day_based_compaction: Day window size; None means unbounded
        log_file_size_threshold_mb: Minimum total log size for log-size-based selection
    """

    compaction_strategy: str = DEFAULT_STRATEGY
    target_io_per_compaction_mb: int | None = None
    target_partitions_per_day_based_compaction: int | None = None
    log_file_size_threshold_mb: float = 0.0

    def __post_init__(self) -> None:
        from compactline.strategies.registry import canonical_strategy_name

        try:
            canonical = canonical_strategy_name(self.compaction_strategy)
        except KeyError as exc:
            raise ConfigError(exc.args[0]) from exc
        object.__setattr__(self, "compaction_strategy", canonical)

        for name in ("target_io_per_compaction_mb", "target_partitions_per_day_based_compaction"):
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{name} must be an integer or None, got {value!r}")
            if value < 0:
                raise ConfigError(negative_budget_error(name, value))

        threshold = self.log_file_size_threshold_mb
        if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
            raise ConfigError(f"log_file_size_threshold_mb must be a number, got {threshold!r}")
        if threshold < 0:
            raise ConfigError(negative_budget_error("log_file_size_threshold_mb", threshold))

    def with_overrides(self, **changes: Any) -> CompactionConfig:
        """Return a validated copy with the non-None ``changes`` applied."""
        applied = {key: value for key, value in changes.items() if value is not None}
        if not applied:
            return self
        return replace(self, **applied)


def _read_config_file(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except Exception as exc:
        warnings.warn(f"Failed to parse compactline config at {path}: {exc}", stacklevel=2)
        return {}


def load_config(path: str | Path | None = None) -> dict:
    """Return parsed config content from ``path`` (default: CONFIG_PATH)."""
    return _read_config_file(Path(path).expanduser() if path is not None else CONFIG_PATH)


def load_compaction_config(path: str | Path | None = None, **overrides: Any) -> CompactionConfig:
    """Build a CompactionConfig from the ``[compaction]`` table plus overrides.

    Raises:
        ConfigError: If the table has unknown keys or any value is invalid
    """
    section = load_config(path).get("compaction", {})
    if not isinstance(section, dict):
        raise ConfigError("[compaction] must be a TOML table")

    known = [f.name for f in fields(CompactionConfig)]
    unknown = [key for key in section if key not in known]
    if unknown:
        raise ConfigError(unknown_config_keys_error(unknown, known))

    values = dict(section)
    values.update({key: value for key, value in overrides.items() if value is not None})
    config = CompactionConfig(**values)
    logger.debug(f"Loaded compaction config: {config}")
    return config


__all__ = [
    "CONFIG_PATH",
    "DEFAULT_STRATEGY",
    "CompactionConfig",
    "ConfigError",
    "load_compaction_config",
    "load_config",
]
