import pytest

from typescope import InvalidScopeArgumentError, UnknownScopeError, build_scope_catalogue, get_scope_descriptions
from typescope.models import ScopeTree
from typescope.utils.scope_descriptions import render_description
from tests.conftest import TREE


def test_simple_description():
    assert get_scope_descriptions(TREE, "user:read", "ALL") == ["Read user data"]


def test_wildcard_key_substitution():
    assert get_scope_descriptions(TREE, "domain:test:read", "ALL") == ["Read access to test"]


def test_all_scopes_message_is_bare_string():
    assert get_scope_descriptions(TREE, "*", "ALL") == "Full access to everything"


def test_requested_wildcard_fans_out():
    assert get_scope_descriptions(TREE, "domain:*", "ALL") == [
        "Read access to ALL",
        "Write access to ALL",
    ]
    assert get_scope_descriptions(TREE, "user:*", "every user") == [
        "Read user data",
        "Write user data",
        "Delete user data",
    ]


def test_requested_wildcard_under_resolved_key():
    assert get_scope_descriptions(TREE, "domain:prod:*", "ALL") == [
        "Read access to prod",
        "Write access to prod",
    ]


def test_wildcard_leaf():
    assert get_scope_descriptions(TREE, "admin:billing", "ALL") == ["Full admin access to billing"]
    assert get_scope_descriptions(TREE, "admin:*", "ALL") == ["Full admin access to ALL"]


def test_non_wildcard_branch_keys_add_no_resolve():
    tree = ScopeTree(
        individual_scopes={
            "org": {
                "*": {
                    "billing": {"view": "View billing of $1 ($2)"},
                    "*": {"view": "View $2 of $1"},
                },
            },
        },
        all_scopes_message="all",
    )
    assert get_scope_descriptions(tree, "org:acme:*", "ANY") == [
        "View billing of acme (ANY)",
        "View ANY of acme",
    ]
    assert get_scope_descriptions(tree, "org:acme:reports:view", "ANY") == ["View reports of acme"]


def test_scope_ending_on_branch_has_no_descriptions():
    assert get_scope_descriptions(TREE, "user", "ALL") == []


def test_unknown_fragment():
    with pytest.raises(UnknownScopeError) as exc:
        get_scope_descriptions(TREE, "invalid:scope", "all")
    assert str(exc.value) == "Scope invalid:scope is not valid because the scope fragment invalid does not exist."


def test_invalid_input_type():
    with pytest.raises(InvalidScopeArgumentError, match="scope must be a string"):
        get_scope_descriptions(TREE, 123, "all")


def test_render_description_leaves_unknown_placeholders():
    assert render_description("$1 and $3", ["a"]) == "a and $3"
    assert render_description("no resolves $1", []) == "no resolves $1"
    assert render_description("$1$2", ["x", "y"]) == "xy"


def test_catalogue():
    catalogue = build_scope_catalogue(TREE, "ALL")
    assert catalogue == {
        "*": "Full access to everything",
        "user:*": "Read user data; Write user data; Delete user data",
        "user:read": "Read user data",
        "user:write": "Write user data",
        "user:delete": "Delete user data",
        "domain:*": "Read access to ALL; Write access to ALL",
        "domain:*:read": "Read access to ALL",
        "domain:*:write": "Write access to ALL",
        "admin:*": "Full admin access to ALL",
    }
    assert list(catalogue)[:2] == ["*", "user:*"]
