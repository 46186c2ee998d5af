"""Tests for ruleguard.rules module."""

import copy

import pytest

from ruleguard.rules import (
    parse_params,
    parse_rule,
    resolve_rules,
    resolve_unique,
    split_rules,
)


def test_split_rules_string():
    """Test a delimited string is split in order."""
    assert split_rules("required|email|max:255") == ["required", "email", "max:255"]


def test_split_rules_sequence_is_copied():
    """Test a sequence is returned as a new list."""
    spec = ("required", "email")
    result = split_rules(spec)

    assert result == ["required", "email"]
    assert isinstance(result, list)


def test_parse_rule_without_params():
    """Test a rule with no ':' has params None."""
    assert parse_rule("unique") == ("unique", None)


def test_parse_rule_with_empty_params():
    """Test a trailing ':' gives an empty params string."""
    assert parse_rule("unique:") == ("unique", "")


def test_parse_rule_splits_once():
    """Test only the first ':' separates name and params."""
    assert parse_rule("regex:^a:b$") == ("regex", "^a:b$")


def test_parse_params_trims_whitespace():
    """Test parameters are trimmed."""
    assert parse_params(" users , email ") == ["users", "email"]
    assert parse_params(None) == []
    assert parse_params("") == [""]


def test_resolve_without_identifier_is_identity():
    """Test the table itself is returned when no identifier is set."""
    rules = {"email": "required|unique:users", "name": ["required"]}

    assert resolve_rules(rules) is rules
    assert resolve_rules(rules, None) is rules
    assert rules == {"email": "required|unique:users", "name": ["required"]}


def test_resolve_empty_table():
    """Test an empty table resolves to an empty table."""
    assert resolve_rules({}, 1) == {}


def test_resolve_unique_without_params():
    """Test bare 'unique' targets the field and the identifier."""
    assert resolve_rules({"email": "unique"}, 5) == {"email": ["unique:email,5"]}


def test_resolve_unique_with_empty_params():
    """Test 'unique:' keeps the empty leading parameter."""
    assert resolve_rules({"email": "unique:"}, 5) == {"email": ["unique:,email,5"]}


def test_resolve_unique_with_target_only():
    """Test the column defaults to the field name."""
    assert resolve_rules({"email": "unique:users"}, 3) == {
        "email": ["unique:users,email,3"]
    }


def test_resolve_unique_with_column():
    """Test an explicit column is kept."""
    rules = {"email": "required|unique:users,email_address"}

    assert resolve_rules(rules, 7) == {
        "email": ["required", "unique:users,email_address,7"]
    }


def test_resolve_unique_overwrites_stale_identifier():
    """Test the identifier always replaces a third parameter."""
    assert resolve_rules({"email": "unique:users,custom,stale"}, 42) == {
        "email": ["unique:users,custom,42"]
    }


def test_resolve_unique_keeps_extra_params():
    """Test parameters after the identifier are kept."""
    assert resolve_rules({"email": "unique:users,email,1,deleted_at,NULL"}, 9) == {
        "email": ["unique:users,email,9,deleted_at,NULL"]
    }


def test_resolve_unique_is_case_insensitive():
    """Test the rule name matches in any case and keeps its spelling."""
    assert resolve_rules({"email": ["UNIQUE:users"]}, 1) == {
        "email": ["UNIQUE:users,email,1"]
    }


def test_resolve_unique_trims_params():
    """Test parameters are trimmed when rewritten."""
    assert resolve_rules({"email": "unique: users , mail "}, 1) == {
        "email": ["unique:users,mail,1"]
    }


@pytest.mark.parametrize("record_id", [0, ""])
def test_resolve_falsy_identifier_is_present(record_id):
    """Test falsy identifiers other than None still rewrite."""
    assert resolve_rules({"email": "unique"}, record_id) == {
        "email": [f"unique:email,{record_id}"]
    }


def test_resolve_without_unique_keeps_text():
    """Test rules with no unique invocation only change shape."""
    rules = {"name": "required|max:255", "age": ["integer", "min:18"]}
    resolved = resolve_rules(rules, 1)

    assert resolved == {"name": ["required", "max:255"], "age": ["integer", "min:18"]}
    assert resolve_rules(resolved, 1) == resolved


def test_resolve_preserves_order():
    """Test field order and rule order survive resolution."""
    rules = {
        "zeta": "b|unique|a",
        "alpha": ["unique:t", "c"],
        "mid": "d",
    }
    resolved = resolve_rules(rules, 2)

    assert list(resolved) == ["zeta", "alpha", "mid"]
    assert resolved["zeta"] == ["b", "unique:zeta,2", "a"]
    assert resolved["alpha"] == ["unique:t,alpha,2", "c"]


def test_resolve_does_not_mutate_input():
    """Test the input table is left untouched."""
    rules = {"email": ["required", "unique:users"], "login": "unique"}
    original = copy.deepcopy(rules)
    resolve_rules(rules, 1)

    assert rules == original


def test_resolve_passes_through_non_string_rules():
    """Test rule objects inside a list are kept as they are."""
    marker = object()
    assert resolve_rules({"email": [marker, "unique"]}, 1) == {
        "email": [marker, "unique:email,1"]
    }


def test_resolve_unique_directly():
    """Test resolve_unique for each parameter count."""
    assert resolve_unique("unique", None, "email", 1) == "unique:email,1"
    assert resolve_unique("unique", "users", "email", 1) == "unique:users,email,1"
    assert resolve_unique("unique", "users,mail", "email", 1) == "unique:users,mail,1"
    assert (
        resolve_unique("unique", "users,mail,old", "email", 1)
        == "unique:users,mail,1"
    )
