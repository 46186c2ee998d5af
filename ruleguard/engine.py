"""Evaluation engines that check records against resolved rules.

Validators delegate the actual checking to an engine. Any object with an
``evaluate`` method matching EvaluationEngine can be used; RuleEngine is a
registry-backed implementation whose rule semantics are supplied by the
caller.
"""

import logging
import typing

from . import messages as _messages
from . import record as _record
from . import result as _result
from . import rules as _rules

logger = logging.getLogger(__name__)

RuleCheck = typing.Callable[
    [str, typing.Any, list[str], dict[str, typing.Any]], bool
]


@typing.runtime_checkable
class EvaluationEngine(typing.Protocol):
    """Checks a record against rules and reports the outcome."""

    def evaluate(
        self,
        record: _record.Record,
        rules: _record.RuleTable,
        messages: _record.Messages,
        attributes: _record.Attributes,
    ) -> _result.EvaluationResult: ...


class UnknownRuleError(KeyError):
    """Raised when a rule name has no registered check."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"No validation rule registered for {name!r}")


class ValidationRule:
    """A named check that rule invocations refer to.

    Attributes:
        name: Rule name used in invocation strings (matched case-insensitively)
        check: Function(field, value, params, record) -> bool (True if valid)
        message: Default error message, may use :attribute, :value and :params
    """

    def __init__(self, name: str, check: RuleCheck, message: str) -> None:
        self.name = name
        self.check = check
        self.message = message

    def validate(
        self,
        field: str,
        value: typing.Any,
        params: list[str],
        record: dict[str, typing.Any],
        message: str | None = None,
    ) -> tuple[bool, str]:
        """Validate a value.

        Args:
            field: Name of the field under validation
            value: Value of the field under validation
            params: Parameters from the invocation string
            record: The whole record, for rules that compare fields
            message: Message to report instead of the default one

        Returns:
            Tuple of (is_valid, error_message)
        """
        message = self.message if message is None else message
        try:
            is_valid = bool(self.check(field, value, params, record))
            return (is_valid, "" if is_valid else message)
        except Exception as e:
            logger.debug("Rule %r raised on %r", self.name, value, exc_info=True)
            return (False, f"{message}: {str(e)}")


def _as_dict(record: _record.Record) -> dict[str, typing.Any]:
    if isinstance(record, dict):
        return record
    if isinstance(record, typing.Mapping):
        return dict(record)
    if hasattr(record, "model_dump"):
        return record.model_dump()
    return record.__dict__


def _display_name(field: str, attributes: _record.Attributes) -> str:
    return attributes.get(field, field.replace("_", " "))


def format_message(
    template: str,
    field: str,
    value: typing.Any,
    params: list[str],
    attributes: _record.Attributes,
) -> str:
    """Fill the placeholders of a message template.

    Args:
        template: Message text with optional :attribute, :value, :params
        field: Field name
        value: Value of the field
        params: Parameters from the invocation string
        attributes: Custom display names for fields

    Returns:
        The formatted message
    """
    return (
        template.replace(":attribute", _display_name(field, attributes))
        .replace(":value", "" if value is None else str(value))
        .replace(":params", _rules.FIELD_DELIMITER.join(params))
    )


class RuleEngine:
    """Evaluates records against rules registered by name."""

    def __init__(self, rules: typing.Iterable[ValidationRule] | None = None) -> None:
        """Initialize RuleEngine.

        Args:
            rules: ValidationRule instances to register
        """
        self.rules: dict[str, ValidationRule] = {}
        for rule in rules or ():
            self.register(rule)

    def register(self, rule: ValidationRule) -> "RuleEngine":
        """Register a rule, replacing any rule with the same name."""
        self.rules[rule.name.lower()] = rule
        return self

    def rule(
        self, name: str, message: str
    ) -> typing.Callable[[RuleCheck], RuleCheck]:
        """Decorator registering a check function under a rule name.

        Args:
            name: Rule name
            message: Default error message

        Returns:
            Decorator that registers and returns the function unchanged
        """

        def decorator(check: RuleCheck) -> RuleCheck:
            self.register(ValidationRule(name, check, message))
            return check

        return decorator

    def has_rule(self, name: str) -> bool:
        return name.lower() in self.rules

    def get_rule(self, name: str) -> ValidationRule:
        try:
            return self.rules[name.lower()]
        except KeyError:
            raise UnknownRuleError(name) from None

    def _message_for(
        self, field: str, rule: ValidationRule, messages: _record.Messages
    ) -> str:
        name = rule.name.lower()
        if f"{field}.{name}" in messages:
            return messages[f"{field}.{name}"]
        if name in messages:
            return messages[name]
        return rule.message

    def evaluate(
        self,
        record: _record.Record,
        rules: _record.RuleTable,
        messages: _record.Messages,
        attributes: _record.Attributes,
    ) -> _result.EvaluationResult:
        """Evaluate a record against a rule table.

        Args:
            record: Dictionary or Pydantic model to validate
            rules: Rule table, resolved or not
            messages: Custom messages keyed by "field.rule" or "rule"
            attributes: Custom display names for fields

        Returns:
            EvaluationResult with a message for every failed invocation

        Raises:
            UnknownRuleError: If an invocation names an unregistered rule
        """
        record_dict = _as_dict(record)
        errors = _messages.MessageBag()

        for field, spec in rules.items():
            value = record_dict.get(field)
            for invocation in _rules.split_rules(spec):
                # Rule objects may be placed in a table directly
                if isinstance(invocation, ValidationRule):
                    rule, params = invocation, []
                else:
                    name, raw_params = _rules.parse_rule(invocation)
                    if not name:
                        continue
                    rule = self.get_rule(name)
                    params = _rules.parse_params(raw_params)

                template = self._message_for(field, rule, messages)
                is_valid, message = rule.validate(
                    field, value, params, record_dict, template
                )
                if not is_valid:
                    errors.add(
                        field,
                        format_message(message, field, value, params, attributes),
                    )

        return _result.EvaluationResult(errors.is_empty(), errors)
