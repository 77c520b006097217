"""Compaction planning for merge-on-read table storage."""

from __future__ import annotations

from compactline.config import CompactionConfig, ConfigError, load_compaction_config
from compactline.metrics import Metric, capture_metrics
from compactline.models import BaseFile, CompactionOperation, CompactionPlan, LogFile
from compactline.partitions import PartitionDateError, date_at_offset_from_today
from compactline.planner import PlanningError, generate_plan
from compactline.strategies import CompactionStrategy, get_strategy, list_strategies

__all__ = [
    "BaseFile",
    "CompactionConfig",
    "CompactionOperation",
    "CompactionPlan",
    "CompactionStrategy",
    "ConfigError",
    "LogFile",
    "Metric",
    "PartitionDateError",
    "PlanningError",
    "capture_metrics",
    "date_at_offset_from_today",
    "generate_plan",
    "get_strategy",
    "list_strategies",
    "load_compaction_config",
]
