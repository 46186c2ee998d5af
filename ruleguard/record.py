"""Type aliases for validation inputs."""

import typing

import pydantic


Record = dict | pydantic.BaseModel
"""Type alias for a record that can be validated.

A Record can be either a dictionary or a Pydantic BaseModel instance.
"""

RuleSpec = str | typing.Sequence[typing.Any]
"""Rules for one field.

Either a single ``|`` delimited string such as ``"required|unique:users"``
or a sequence of invocation strings.
"""

RuleTable = typing.Mapping[str, RuleSpec]
"""Mapping of field name to its rules."""

ActionRuleTable = typing.Mapping[str, RuleTable]
"""Mapping of action token to a RuleTable."""

ResolvedRuleTable = dict[str, list[typing.Any]]
"""RuleTable with every field's rules expanded to a list."""

Messages = typing.Mapping[str, str]
Attributes = typing.Mapping[str, str]
