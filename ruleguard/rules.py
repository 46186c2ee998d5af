"""Rule table parsing and record-aware resolution.

Rule invocations are written as ``name`` or ``name:param1,param2``, and
several invocations for one field are joined with ``|``::

    {"email": "required|unique:users,email_address"}

When a record identifier is known (an update of an existing record),
``unique`` invocations are rewritten so the uniqueness check ignores that
record::

    >>> resolve_rules({"email": "required|unique:users,email_address"}, 7)
    {'email': ['required', 'unique:users,email_address,7']}
"""

import logging
import typing

from . import record as _record

logger = logging.getLogger(__name__)

RULE_DELIMITER = "|"
PARAM_DELIMITER = ":"
FIELD_DELIMITER = ","
UNIQUE_RULE = "unique"


def split_rules(spec: _record.RuleSpec) -> list[typing.Any]:
    """Expand a field's rule spec into a list of invocations.

    Args:
        spec: A ``|`` delimited string or a sequence of invocations

    Returns:
        New list of invocations in their original order
    """
    if isinstance(spec, str):
        return spec.split(RULE_DELIMITER)
    return list(spec)


def parse_rule(rule: str) -> tuple[str, str | None]:
    """Split an invocation into its name and raw parameter string.

    Args:
        rule: Invocation string such as ``"unique:users,email"``

    Returns:
        Tuple of (name, params). params is None when the invocation has
        no ``:`` at all, and ``""`` when it ends with one.
    """
    name, sep, params = rule.partition(PARAM_DELIMITER)
    if not sep:
        return name, None
    return name, params


def parse_params(params: str | None) -> list[str]:
    """Split a raw parameter string into trimmed parameters.

    Args:
        params: Raw parameter string, or None when absent

    Returns:
        List of parameters; empty when params is None
    """
    if params is None:
        return []
    return [p.strip() for p in params.split(FIELD_DELIMITER)]


def is_unique_rule(name: str) -> bool:
    return name.lower() == UNIQUE_RULE


def resolve_unique(
    name: str, params: str | None, field: str, record_id: typing.Any
) -> str:
    """Rewrite a ``unique`` invocation to exclude the given record.

    The rewritten parameters are ``[target, column, record_id, ...]``:

    - no parameter string (``unique``): the column is the field itself and
      there is no target, giving ``unique:field,id``
    - empty parameter string (``unique:``): the empty target is kept,
      giving ``unique:,field,id``
    - one parameter (``unique:users``): the column defaults to the field
    - two or more: the third parameter is always replaced by record_id

    Args:
        name: Rule name as written (case is preserved)
        params: Raw parameter string, or None when absent
        field: Name of the field the rule belongs to
        record_id: Identifier of the record being validated

    Returns:
        Rewritten invocation string
    """
    p = parse_params(params)

    if not p:
        p = [field]
    elif len(p) < 2:
        p.append(field)

    if len(p) < 3:
        p.append(str(record_id))
    else:
        p[2] = str(record_id)

    return f"{name}{PARAM_DELIMITER}{FIELD_DELIMITER.join(p)}"


def resolve_field_rules(
    field: str, spec: _record.RuleSpec, record_id: typing.Any
) -> list[typing.Any]:
    """Resolve the rules of a single field.

    Args:
        field: Field name
        spec: The field's rule spec
        record_id: Identifier of the record being validated

    Returns:
        New list of invocations with ``unique`` rules rewritten
    """
    resolved: list[typing.Any] = []
    for rule in split_rules(spec):
        if not isinstance(rule, str):
            resolved.append(rule)
            continue
        name, params = parse_rule(rule)
        if is_unique_rule(name):
            rule = resolve_unique(name, params, field, record_id)
        resolved.append(rule)
    return resolved


def resolve_rules(
    rules: _record.RuleTable, record_id: typing.Any = None
) -> _record.RuleTable | _record.ResolvedRuleTable:
    """Bind a rule table to the record being validated.

    Args:
        rules: Mapping of field name to rule spec
        record_id: Identifier of the record being validated, None when the
            record is new

    Returns:
        The given table itself when record_id is None. Otherwise a new dict
        with every field's rules expanded to a list and every ``unique``
        invocation rewritten by resolve_unique. Treat the result as
        read-only either way.
    """
    if record_id is None:
        return rules

    logger.debug("Resolving %d rule fields for record %r", len(rules), record_id)
    return {
        field: resolve_field_rules(field, spec, record_id)
        for field, spec in rules.items()
    }
