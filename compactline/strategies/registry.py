"""Global registry of compaction strategies.

- Built-in strategies register on module import
- Runtime dispatch via get_strategy() by canonical name or class-name alias
- resolve_strategy() picks the strategy a CompactionConfig selects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from compactline._error_messages import strategy_not_found_error
from compactline.strategies.base import CompactionStrategy
from compactline.strategies.bounded_io import BoundedIOCompactionStrategy
from compactline.strategies.day_based import DayBasedCompactionStrategy
from compactline.strategies.log_file_size import LogFileSizeBasedCompactionStrategy
from compactline.strategies.partition_aware import (
    BoundedPartitionAwareCompactionStrategy,
    UnBoundedPartitionAwareCompactionStrategy,
)
from compactline.strategies.unbounded import UnBoundedCompactionStrategy

if TYPE_CHECKING:
    from compactline.config import CompactionConfig

# Global registry: canonical name -> strategy
_STRATEGY_REGISTRY: dict[str, CompactionStrategy] = {}

# Lower-cased alias -> canonical name
_ALIASES: dict[str, str] = {}


def register_strategy(strategy: CompactionStrategy, *aliases: str) -> None:
    """Register a compaction strategy under its name, its class name and ``aliases``.

    Raises:
        TypeError: If ``strategy`` does not implement CompactionStrategy
        ValueError: If the name is already taken by a different strategy type
    """
    if not isinstance(strategy, CompactionStrategy):
        raise TypeError(f"{type(strategy).__name__} does not implement CompactionStrategy")

    existing = _STRATEGY_REGISTRY.get(strategy.name)
    if existing is not None and not isinstance(strategy, type(existing)):
        raise ValueError(
            f"Compaction strategy name conflict: '{strategy.name}' already registered "
            f"by {type(existing).__name__}"
        )
    _STRATEGY_REGISTRY[strategy.name] = strategy
    for alias in (strategy.name, type(strategy).__name__, *aliases):
        _ALIASES[alias.lower()] = strategy.name


def canonical_strategy_name(name: str) -> str:
    """Map a strategy name or alias to its canonical registry name.

    Raises:
        KeyError: If nothing is registered under ``name``
    """
    canonical = _ALIASES.get(str(name).strip().lower())
    if canonical is None:
        raise KeyError(strategy_not_found_error(str(name), list_strategies()))
    return canonical


def get_strategy(name: str) -> CompactionStrategy:
    """Lookup a compaction strategy by name or alias.

    Raises:
        KeyError: If the strategy is not found
    """
    return _STRATEGY_REGISTRY[canonical_strategy_name(name)]


def resolve_strategy(config: CompactionConfig) -> CompactionStrategy:
    return get_strategy(config.compaction_strategy)


def list_strategies() -> list[str]:
    """List all registered strategy names, sorted."""
    return sorted(_STRATEGY_REGISTRY.keys())


register_strategy(UnBoundedCompactionStrategy())
register_strategy(BoundedIOCompactionStrategy())
register_strategy(LogFileSizeBasedCompactionStrategy(), "log_file_size_based")
register_strategy(DayBasedCompactionStrategy())
register_strategy(BoundedPartitionAwareCompactionStrategy())
register_strategy(UnBoundedPartitionAwareCompactionStrategy())
