"""Validators holding the data, rules and messages for one subject.

A validator is configured fluently and then checked::

    validator = UserValidator().set_identifier(7).with_data(payload)
    if not validator.passes(Action.UPDATE):
        print(validator.errors())

Rules may be a flat table, or a table keyed by action whose nested tables
are picked by ``passes(action)``. A flat table applies to every action.
"""

import abc
import copy
import logging
import typing
from enum import Enum

from . import engine as _engine
from . import errors as _errors
from . import hooks as _hooks
from . import messages as _messages
from . import record as _record
from . import rules as _rules

logger = logging.getLogger(__name__)

ActionKey = str | Enum | None


class AbstractValidator(abc.ABC):
    """Shared state and operations of every validator.

    Subclasses implement passes(). They may declare default ``rules``,
    ``messages`` and ``attributes`` as class attributes.
    """

    rules: typing.ClassVar[_record.RuleTable | _record.ActionRuleTable] = {}
    messages: typing.ClassVar[_record.Messages] = {}
    attributes: typing.ClassVar[_record.Attributes] = {}

    def __init__(
        self,
        *,
        data: _record.Record | None = None,
        rules: _record.RuleTable | _record.ActionRuleTable | None = None,
        messages: _record.Messages | None = None,
        attributes: _record.Attributes | None = None,
        identifier: typing.Any = None,
    ) -> None:
        """Initialize the validator state.

        Args:
            data: Record to validate
            rules: Rule table, flat or keyed by action (class default if None)
            messages: Custom messages (class default if None)
            attributes: Custom field display names (class default if None)
            identifier: Identifier of the record being validated
        """
        self._identifier = identifier
        self._data: _record.Record = {} if data is None else data
        self._rules = copy.deepcopy(type(self).rules) if rules is None else rules
        self._messages = dict(type(self).messages) if messages is None else messages
        self._attributes = (
            dict(type(self).attributes) if attributes is None else attributes
        )
        self._errors = _messages.MessageBag()

    def set_identifier(self, identifier: typing.Any) -> "AbstractValidator":
        """Set the identifier of the record being validated.

        ``unique`` rules exclude this record. None means a new record.
        """
        self._identifier = identifier
        return self

    def get_identifier(self) -> typing.Any:
        return self._identifier

    def with_data(self, data: _record.Record) -> "AbstractValidator":
        """Set the record to validate."""
        self._data = data
        return self

    def get_data(self) -> _record.Record:
        return self._data

    def set_rules(
        self, rules: _record.RuleTable | _record.ActionRuleTable
    ) -> "AbstractValidator":
        self._rules = rules
        return self

    def set_messages(self, messages: _record.Messages) -> "AbstractValidator":
        self._messages = messages
        return self

    def get_messages(self) -> _record.Messages:
        return self._messages

    def set_attributes(self, attributes: _record.Attributes) -> "AbstractValidator":
        self._attributes = attributes
        return self

    def get_attributes(self) -> _record.Attributes:
        return self._attributes

    def get_rules(
        self, action: ActionKey = None
    ) -> _record.RuleTable | _record.ResolvedRuleTable:
        """Return the rules for an action, resolved for the current record.

        Args:
            action: Action token. If the stored rules have a nested table
                under this key, that table is used; otherwise the stored
                rules are used as they are.

        Returns:
            Rule table with ``unique`` rules bound to the identifier
        """
        rules = self._rules
        key = action.value if isinstance(action, Enum) else action
        if key is not None and isinstance(rules.get(key), typing.Mapping):
            rules = rules[key]

        return _rules.resolve_rules(rules, self._identifier)

    @abc.abstractmethod
    def passes(self, action: ActionKey = None) -> bool:
        """Check the data against the rules for an action.

        Implementations store the resulting MessageBag so errors() and
        errors_bag() can return it.

        Args:
            action: Action token selecting the rule table

        Returns:
            True if the data passed
        """

    def passes_or_fail(self, action: ActionKey = None) -> bool:
        """Check the data, raising if it fails.

        Args:
            action: Action token selecting the rule table

        Returns:
            True if the data passed

        Raises:
            ValidationFailed: If the data failed, carrying errors_bag()
        """
        if not self.passes(action):
            raise _errors.ValidationFailed(self.errors_bag())

        return True

    def errors(self) -> list[str]:
        """Return the messages from the last check as a flat list."""
        return self.errors_bag().all()

    def errors_bag(self) -> _messages.MessageBag:
        """Return the messages from the last check keyed by field."""
        return self._errors


class Validator(AbstractValidator):
    """Validator that delegates checking to an evaluation engine.

    Subclass it per validation subject and declare the rules::

        class UserValidator(Validator):
            rules = {
                "create": {"email": "required|unique:users"},
                "update": {"email": "unique:users"},
            }
    """

    def __init__(
        self,
        engine: _engine.EvaluationEngine | None = None,
        *,
        hooks: _hooks.ValidationHooks | None = None,
        **state: typing.Any,
    ) -> None:
        """Initialize Validator.

        Args:
            engine: Engine that evaluates records (a new RuleEngine if None)
            hooks: Optional callbacks around each check
            **state: Initial state, see AbstractValidator
        """
        super().__init__(**state)
        self.engine = _engine.RuleEngine() if engine is None else engine
        self.hooks = hooks

    def passes(self, action: ActionKey = None) -> bool:
        rules = self.get_rules(action)

        if self.hooks is not None:
            self.hooks.call_before_validate(self._data)

        result = self.engine.evaluate(
            self._data, rules, self._messages, self._attributes
        )
        self._errors = result.errors
        logger.debug(
            "%s %s for action %r (%d errors)",
            type(self).__name__,
            "passed" if result.passed else "failed",
            action,
            result.errors.count(),
        )

        if self.hooks is not None:
            self.hooks.call_after_validate(result)

        return result.passed
