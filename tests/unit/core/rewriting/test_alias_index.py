from __future__ import annotations

"""
Unit tests for local alias discovery.
"""

import pytest

from repath.core.rewriting.alias_index import (
    build_alias_index,
    find_anchor_alias,
    strip_declaration_expr,
)
from repath.domain.path_models import LogicalPath, ReferenceGrammar

SOURCE = (
    'local RS = game:GetService("ReplicatedStorage")\n'
    "local Shared = RS.Shared\n"
    "local Util: any = Shared.Util -- helpers\n"
    "local Count = 5\n"
    'local Net = game:GetService("ReplicatedStorage")["Net Lib"];\n'
    "local Missing = Unknown.Child\n"
)


def test_build_alias_index_discovery_order():
    index = build_alias_index(SOURCE)

    assert list(index) == ["RS", "Shared", "Util", "Net"]
    assert index["RS"] == LogicalPath("ReplicatedStorage")
    assert index["Shared"] == LogicalPath("ReplicatedStorage", ("Shared",))
    assert index["Util"] == LogicalPath("ReplicatedStorage", ("Shared", "Util"))
    assert index["Net"] == LogicalPath("ReplicatedStorage", ("Net Lib",))


def test_alias_index_is_read_only():
    index = build_alias_index(SOURCE)
    with pytest.raises(TypeError):
        index["X"] = LogicalPath("X")


def test_alias_index_ignores_non_declarations():
    text = (
        'if local_value == game:GetService("A") then end\n'
        'local x == game:GetService("A")\n'
        "local function f() end\n"
        'print(game:GetService("A"))\n'
    )
    assert dict(build_alias_index(text)) == {}


def test_later_declaration_rebinds_alias():
    text = 'local S = game:GetService("A")\nlocal S = game:GetService("B")\n'
    assert build_alias_index(text)["S"] == LogicalPath("B")


def test_alias_with_custom_grammar():
    grammar = ReferenceGrammar(root="root", accessor="Anchor", alias_keyword="let")
    text = 'let Svc = root:Anchor("Svc")\nlet Lib = Svc.Lib\nlocal Other = root:Anchor("X")\n'

    index = build_alias_index(text, grammar)

    assert dict(index) == {
        "Svc": LogicalPath("Svc"),
        "Lib": LogicalPath("Svc", ("Lib",)),
    }


def test_strip_declaration_expr():
    assert strip_declaration_expr('game:GetService("A") -- note') == 'game:GetService("A")'
    assert strip_declaration_expr('game:GetService("A--B");') == 'game:GetService("A--B")'
    assert strip_declaration_expr("X.Y ; ") == "X.Y"


def test_comment_marker_inside_string_is_kept():
    index = build_alias_index('local A = game:GetService("A--B") -- c\n')
    assert index["A"] == LogicalPath("A--B")


def test_find_anchor_alias_first_exact_binding():
    text = (
        'local Shared = game:GetService("ReplicatedStorage").Shared\n'
        'local RS = game:GetService("ReplicatedStorage")\n'
        'local RS2 = game:GetService("ReplicatedStorage")\n'
    )
    index = build_alias_index(text)

    assert find_anchor_alias(index, "ReplicatedStorage") == "RS"
    assert find_anchor_alias(index, "ServerScriptService") is None
