"""Registry module."""

from .registry import (
    MODE_STRATEGIES,
    StrategyHandle,
    StrategyKind,
    input_placeholder,
    parse_mode,
    resolve_strategy,
    role_instruction,
)

__all__ = [
    "MODE_STRATEGIES",
    "StrategyHandle",
    "StrategyKind",
    "input_placeholder",
    "parse_mode",
    "resolve_strategy",
    "role_instruction",
]
