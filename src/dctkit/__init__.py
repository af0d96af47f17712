"""dctkit public API."""

from .config_schema import PlannerConfig, parse_planner_config, planner_config_to_dict
from .configs import load_planner_config, load_yaml, save_yaml
from .core import (
    BaseInplaceTransform,
    BaseLappedTransform,
    BaseTransform,
    TransformKind,
    iter_plan_graph,
)
from .errors import ConfigurationError, ContractViolation, DctError, RegistryError
from .logging_utils import JsonlLogger, log_plan_jsonl
from .planner import Planner

__all__ = [
    "Planner",
    "PlannerConfig",
    "TransformKind",
    "BaseTransform",
    "BaseInplaceTransform",
    "BaseLappedTransform",
    "iter_plan_graph",
    "DctError",
    "ConfigurationError",
    "ContractViolation",
    "RegistryError",
    "parse_planner_config",
    "planner_config_to_dict",
    "load_planner_config",
    "load_yaml",
    "save_yaml",
    "JsonlLogger",
    "log_plan_jsonl",
]
