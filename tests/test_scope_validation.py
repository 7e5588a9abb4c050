import itertools

import pytest

from typescope import (
    InvalidScopeArgumentError,
    MalformedScopeError,
    ScopeError,
    UnknownScopeError,
    validate_scopes,
)
from typescope.models import iter_leaves
from tests.conftest import TREE

E2E_INPUT = [
    "user:read",
    "domain:test:read",
    "domain:*",
    "domain:prod:read",
    "admin:*",
]


def test_simple_scopes():
    assert validate_scopes(TREE, ["user:read", "user:write"]) == ["user:read", "user:write"]


def test_wildcard_tree_keys():
    scopes = validate_scopes(TREE, ["domain:test:read", "domain:prod:read"])
    assert scopes == ["domain:test:read", "domain:prod:read"]


def test_trailing_wildcard_accepted():
    assert validate_scopes(TREE, ["domain:test:*"]) == ["domain:test:*"]


def test_end_to_end_collapse():
    assert validate_scopes(TREE, E2E_INPUT) == ["admin:*", "domain:*", "user:read"]


def test_tuple_input_accepted():
    assert validate_scopes(TREE, ("user:read",)) == ["user:read"]


@pytest.mark.parametrize("order", list(itertools.permutations(["domain:*", "domain:prod:read", "domain:x:*"])))
def test_wildcard_subsumes_regardless_of_order(order):
    assert validate_scopes(TREE, list(order)) == ["domain:*"]


@pytest.mark.parametrize("order", list(itertools.permutations(["admin:x", "admin:*", "user:read"])))
def test_equal_length_wildcard_subsumes_regardless_of_order(order):
    assert validate_scopes(TREE, list(order)) == ["admin:*", "user:read"]


def test_duplicate_wildcard_collapsed():
    assert validate_scopes(TREE, ["user:*", "user:*"]) == ["user:*"]


def test_full_wildcard_collapses_everything():
    assert validate_scopes(TREE, ["user:read", "*", "domain:prod:read"]) == ["*"]


def test_admin_wildcard_leaf_accepts_any_value():
    assert validate_scopes(TREE, ["admin:billing"]) == ["admin:billing"]


def test_collapsing_is_idempotent():
    samples = [
        E2E_INPUT,
        ["user:read", "user:write", "user:delete"],
        ["user:*", "user:read", "admin:ops", "domain:a:read", "domain:a:*"],
        ["*"],
        [],
    ]
    for sample in samples:
        once = validate_scopes(TREE, sample)
        assert validate_scopes(TREE, once) == once


def test_every_declared_leaf_is_valid():
    for path, _ in iter_leaves(TREE.individual_scopes):
        scope = ":".join("value" if part == "*" else part for part in path)
        assert validate_scopes(TREE, [scope]) == [scope]


def test_unknown_fragment_named():
    with pytest.raises(UnknownScopeError) as exc:
        validate_scopes(TREE, ["invalid:scope"])
    assert str(exc.value) == "Scope invalid:scope is not valid because the scope fragment invalid does not exist."
    assert exc.value.scope == "invalid:scope"
    assert exc.value.fragment == "invalid"


def test_unknown_nested_fragment_named():
    with pytest.raises(UnknownScopeError) as exc:
        validate_scopes(TREE, ["user:read", "domain:prod:execute"])
    assert exc.value.fragment == "execute"


def test_scope_past_leaf_is_malformed():
    with pytest.raises(MalformedScopeError) as exc:
        validate_scopes(TREE, ["user:read:extra"])
    assert exc.value.scope == "user:read:extra"


def test_scope_ending_on_branch_is_malformed():
    with pytest.raises(MalformedScopeError):
        validate_scopes(TREE, ["user"])


@pytest.mark.parametrize("scope", ["", "user:", ":read", "user:re ad"])
def test_grammar_violations_are_malformed(scope):
    with pytest.raises(MalformedScopeError):
        validate_scopes(TREE, [scope])


def test_one_bad_scope_fails_whole_batch():
    with pytest.raises(ScopeError):
        validate_scopes(TREE, ["user:read", "nope"])


def test_invalid_input_types():
    with pytest.raises(InvalidScopeArgumentError, match="scopes must be a list$"):
        validate_scopes(TREE, "not-a-list")
    with pytest.raises(InvalidScopeArgumentError, match="scopes must be a list of strings"):
        validate_scopes(TREE, [123])
    with pytest.raises(TypeError):
        validate_scopes(TREE, None)
