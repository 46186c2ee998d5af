"""Validation hooks and callbacks for extensibility."""

import logging
import typing

from . import record as _record
from . import result as _result

logger = logging.getLogger(__name__)

ResultCallback = typing.Callable[[_result.EvaluationResult], None]


class ValidationHooks:
    """Hooks for validation events.

    All callbacks are optional. A failing callback is logged and never
    interrupts validation.

    Attributes:
        before_validate: Called before evaluation, receives the record
        after_validate: Called after evaluation, receives the result
        on_success: Called only if the record passed, receives the result
        on_error: Called only if the record failed, receives the result
    """

    def __init__(
        self,
        *,
        before_validate: typing.Callable[[_record.Record], None] | None = None,
        after_validate: ResultCallback | None = None,
        on_success: ResultCallback | None = None,
        on_error: ResultCallback | None = None,
    ) -> None:
        self.before_validate = before_validate
        self.after_validate = after_validate
        self.on_success = on_success
        self.on_error = on_error

    def _call(self, name: str, callback: typing.Callable | None, arg: typing.Any) -> None:
        if callback is None:
            return
        try:
            callback(arg)
        except Exception:
            logger.warning("Validation hook %s failed", name, exc_info=True)

    def call_before_validate(self, record: _record.Record) -> None:
        """Call before_validate hook if set.

        Args:
            record: The record about to be validated
        """
        self._call("before_validate", self.before_validate, record)

    def call_after_validate(self, result: _result.EvaluationResult) -> None:
        """Call after_validate, then on_success or on_error.

        Args:
            result: The evaluation result
        """
        self._call("after_validate", self.after_validate, result)
        if result.passed:
            self._call("on_success", self.on_success, result)
        else:
            self._call("on_error", self.on_error, result)
