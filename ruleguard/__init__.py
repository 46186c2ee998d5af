"""Validate records against declarative, action-scoped rule tables.

Rules are written as ``name:param1,param2`` invocations joined with ``|``.
Validators pick the rule table for an action, bind ``unique`` rules to the
record being updated and hand the result to a pluggable evaluation engine.
"""

__version__ = "0.1.0"

from ruleguard.options import Action
from ruleguard.messages import MessageBag
from ruleguard.errors import ValidationFailed
from ruleguard.result import EvaluationResult
from ruleguard.rules import resolve_rules
from ruleguard.engine import (
    EvaluationEngine,
    RuleEngine,
    UnknownRuleError,
    ValidationRule,
)
from ruleguard.hooks import ValidationHooks
from ruleguard.validator import AbstractValidator, Validator

__all__ = [
    "Action",
    "MessageBag",
    "ValidationFailed",
    "EvaluationResult",
    "resolve_rules",
    "EvaluationEngine",
    "RuleEngine",
    "UnknownRuleError",
    "ValidationRule",
    "ValidationHooks",
    "AbstractValidator",
    "Validator",
]
