"""Shared pytest fixtures for ruleguard tests."""

import typing

import pytest

from ruleguard.engine import RuleEngine
from ruleguard.validator import Validator


USERS = {
    "users": [
        {"id": 1, "email": "alice@example.com", "login": "alice"},
        {"id": 2, "email": "bob@example.com", "login": "bob"},
    ]
}


def _unique(field: str, value: typing.Any, params: list[str], record: dict) -> bool:
    table = params[0]
    column = params[1] if len(params) > 1 else field
    ignore_id = params[2] if len(params) > 2 else None
    return not any(
        row.get(column) == value and str(row["id"]) != ignore_id
        for row in USERS.get(table, [])
    )


@pytest.fixture
def engine() -> RuleEngine:
    """Fixture providing an engine with a few rules registered."""
    engine = RuleEngine()

    @engine.rule("required", "The :attribute field is required.")
    def required(field, value, params, record):
        return value not in (None, "")

    @engine.rule("email", "The :attribute must be a valid email address.")
    def email(field, value, params, record):
        return value is None or "@" in str(value)

    @engine.rule("max", "The :attribute may not be greater than :params characters.")
    def max_length(field, value, params, record):
        return value is None or len(str(value)) <= int(params[0])

    engine.rule("unique", "The :attribute has already been taken.")(_unique)
    return engine


class UserValidator(Validator):
    """Validator for user records with create and update rules."""

    rules = {
        "create": {
            "email": "required|email|unique:users",
            "login": ["required", "max:8"],
        },
        "update": {
            "email": "email|unique:users",
            "login": "max:8",
        },
    }


@pytest.fixture
def user_validator(engine: RuleEngine) -> UserValidator:
    """Fixture providing a UserValidator bound to the test engine."""
    return UserValidator(engine)
