"""Result types for validation operations."""

import typing as _t

from . import messages as _messages


class EvaluationResult(_t.NamedTuple):
    """Result of evaluating a record against resolved rules.

    Attributes:
        passed: True if every rule passed
        errors: Messages for the rules that failed, empty if passed
    """

    passed: bool
    errors: _messages.MessageBag
