from __future__ import annotations

"""
Unit tests for the primary reference rewriter.

Verifies:
1. Alias reuse when the service does not change.
2. Switching to another alias, or inlining, when the service changes.
3. Fully-qualified references.
4. Whole-reference matching and idempotence.
5. Guard statuses (anchor-only, malformed, no match).
"""

from repath.core.rewriting.reference_rewriter import choose_new_form, coerce_path, rewrite_references
from repath.domain.path_models import LogicalPath, ReferenceGrammar, RewriteStatus

SSS_HEADER = 'local SSS = game:GetService("ServerScriptService")\n'

OLD = LogicalPath("ServerScriptService", ("OldModule",))
NEW_SAME_SERVICE = LogicalPath("ServerScriptService", ("Folder", "NewModule"))
NEW_OTHER_SERVICE = LogicalPath("ReplicatedStorage", ("NewModule",))
UTIL = LogicalPath("ServerScriptService", ("Util",))
NESTED_TARGET = LogicalPath("ServerScriptService", ("Util", "Core"))


def test_same_service_keeps_alias():
    text = SSS_HEADER + "local M = require(SSS.OldModule)\n"

    outcome = rewrite_references(text, OLD, NEW_SAME_SERVICE)

    assert outcome.status is RewriteStatus.APPLIED
    assert outcome.text == SSS_HEADER + "local M = require(SSS.Folder.NewModule)\n"
    assert outcome.replacements == (("SSS.OldModule", "SSS.Folder.NewModule"),)


def test_service_change_without_alias_inlines_full_path():
    text = SSS_HEADER + "local M = require(SSS.OldModule)\n"

    outcome = rewrite_references(text, OLD, NEW_OTHER_SERVICE)

    assert outcome.text == (
        SSS_HEADER + 'local M = require(game:GetService("ReplicatedStorage").NewModule)\n'
    )


def test_service_change_uses_existing_alias_of_new_service():
    text = (
        SSS_HEADER
        + 'local RS = game:GetService("ReplicatedStorage")\n'
        + "local M = require(SSS.OldModule)\n"
    )

    outcome = rewrite_references(text, OLD, NEW_OTHER_SERVICE)

    assert outcome.text.endswith("local M = require(RS.NewModule)\n")
    assert 'local SSS = game:GetService("ServerScriptService")' in outcome.text


def test_fully_qualified_reference_without_alias():
    text = 'local M = require(game:GetService("ServerScriptService").OldModule)\n'

    outcome = rewrite_references(text, OLD, NEW_SAME_SERVICE)

    assert outcome.text == 'local M = require(game:GetService("ServerScriptService").Folder.NewModule)\n'


def test_both_spellings_are_rewritten_in_one_call():
    text = (
        SSS_HEADER
        + "local A = require(SSS.OldModule)\n"
        + 'local B = require(game:GetService("ServerScriptService").OldModule)\n'
    )

    outcome = rewrite_references(text, OLD, NEW_SAME_SERVICE)

    assert "SSS.OldModule" not in outcome.text
    assert '").OldModule' not in outcome.text
    assert outcome.text.count("SSS.Folder.NewModule") == 2
    assert len(outcome.replacements) == 2


def test_all_occurrences_and_descendants_are_rewritten():
    text = SSS_HEADER + "local A = require(SSS.OldModule)\nlocal B = require(SSS.OldModule.Child)\n"

    outcome = rewrite_references(text, OLD, NEW_SAME_SERVICE)

    assert "require(SSS.Folder.NewModule)" in outcome.text
    assert "require(SSS.Folder.NewModule.Child)" in outcome.text


def test_longer_names_are_not_partial_matches():
    text = SSS_HEADER + "local A = require(SSS.OldModuleTwo)\nlocal B = require(SSS.OldModule)\n"

    outcome = rewrite_references(text, OLD, NEW_SAME_SERVICE)

    assert "require(SSS.OldModuleTwo)" in outcome.text
    assert "require(SSS.Folder.NewModule)" in outcome.text


def test_rewrite_is_idempotent():
    text = SSS_HEADER + "local M = require(SSS.OldModule)\n"

    first = rewrite_references(text, OLD, NEW_SAME_SERVICE)
    second = rewrite_references(first.text, OLD, NEW_SAME_SERVICE)

    assert second.status is RewriteStatus.NO_MATCH
    assert second.text == first.text


def test_rewrite_into_own_subfolder_is_idempotent():
    text = SSS_HEADER + "local M = require(SSS.Util)\n"

    first = rewrite_references(text, UTIL, NESTED_TARGET)
    second = rewrite_references(first.text, UTIL, NESTED_TARGET)

    assert first.text == SSS_HEADER + "local M = require(SSS.Util.Core)\n"
    assert second.status is RewriteStatus.NO_MATCH
    assert second.text == first.text


def test_fully_qualified_rewrite_into_own_subfolder_is_idempotent():
    text = 'local M = require(game:GetService("ServerScriptService").Util)\n'

    first = rewrite_references(text, UTIL, NESTED_TARGET)
    second = rewrite_references(first.text, UTIL, NESTED_TARGET)

    assert first.text == 'local M = require(game:GetService("ServerScriptService").Util.Core)\n'
    assert second.text == first.text


def test_no_reference_leaves_text_untouched():
    text = SSS_HEADER + "print('hello')\n"

    outcome = rewrite_references(text, OLD, NEW_SAME_SERVICE)

    assert outcome.status is RewriteStatus.NO_MATCH
    assert outcome.text == text


def test_bare_service_move_is_refused():
    text = SSS_HEADER + "local M = require(SSS.OldModule)\n"

    outcome = rewrite_references(text, LogicalPath("ServerScriptService"), NEW_OTHER_SERVICE)

    assert outcome.status is RewriteStatus.ANCHOR_ONLY
    assert outcome.text == text


def test_malformed_paths_are_reported():
    text = SSS_HEADER + "local M = require(SSS.OldModule)\n"

    outcome = rewrite_references(text, "SSS.OldModule", NEW_SAME_SERVICE)

    assert outcome.status is RewriteStatus.MALFORMED
    assert outcome.text == text


def test_string_paths_are_accepted():
    text = SSS_HEADER + "local M = require(SSS.OldModule)\n"

    outcome = rewrite_references(
        text,
        'game:GetService("ServerScriptService").OldModule',
        'game:GetService("ServerScriptService").Other',
    )

    assert outcome.text.endswith("require(SSS.Other)\n")


def test_bracketed_segments_in_new_path():
    text = "local M = require(game:GetService(\"ServerScriptService\").OldModule)\n"
    new = LogicalPath("ReplicatedStorage", ("My Folder", "Util"))

    outcome = rewrite_references(text, OLD, new)

    assert outcome.text == 'local M = require(game:GetService("ReplicatedStorage")["My Folder"].Util)\n'


def test_custom_grammar():
    grammar = ReferenceGrammar(root="root", accessor="Anchor")
    text = 'local Svc = root:Anchor("Svc")\nlocal A = require(Svc.A)\nlocal B = require(root:Anchor("Other").B)\n'

    first = rewrite_references(text, LogicalPath("Svc", ("A",)), LogicalPath("Svc", ("Lib", "A")), grammar)
    second = rewrite_references(first.text, LogicalPath("Other", ("B",)), LogicalPath("Svc", ("B",)), grammar)

    assert "require(Svc.Lib.A)" in second.text
    assert "require(Svc.B)" in second.text
    assert 'root:Anchor("Other")' not in second.text


def test_choose_new_form():
    new = LogicalPath("ReplicatedStorage", ("X",))

    assert choose_new_form(new, "RS", "RS") == "RS.X"
    assert choose_new_form(new, "SSS", "RS") == "RS.X"
    assert choose_new_form(new, "SSS", None) == 'game:GetService("ReplicatedStorage").X'
    assert choose_new_form(new, None, None) == 'game:GetService("ReplicatedStorage").X'


def test_coerce_path():
    path = LogicalPath("A", ("B",))

    assert coerce_path(path) is path
    assert coerce_path('game:GetService("A").B') == path
    assert coerce_path("A.B") is None
    assert coerce_path(42) is None
