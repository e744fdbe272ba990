from __future__ import annotations

"""
Unit tests for whole-reference literal matching.
"""

import pytest

from repath.core.rewriting.occurrences import contains_reference, replace_reference


@pytest.mark.parametrize("text, expected", [
    ("require(SSS.Old)", True),
    ("require(SSS.Old.Child)", True),
    ('require(SSS.Old["x"])', True),
    ("require(SSS.OldTwo)", False),
    ("require(Other.SSS.Old)", False),
    ("require(MySSS.Old)", False),
])
def test_contains_reference(text, expected):
    assert contains_reference(text, "SSS.Old") is expected


def test_contains_reference_empty_literal():
    assert contains_reference("anything", "") is False


def test_replace_reference_counts():
    text = "a(SSS.Old) b(SSS.Old.X) c(SSS.OldX)"

    new_text, count = replace_reference(text, "SSS.Old", "SSS.New")

    assert count == 2
    assert new_text == "a(SSS.New) b(SSS.New.X) c(SSS.OldX)"


def test_replacement_is_literal():
    new_text, count = replace_reference("x(A.B)", "A.B", r"A.\1\g<0>")
    assert count == 1
    assert new_text == r"x(A.\1\g<0>)"


@pytest.mark.parametrize("text, expected", [
    ("require(SSS.Util.Core)", False),
    ("require(SSS.Util)", True),
    ("require(SSS.Util.CoreTwo)", True),
    ("require(SSS.Util.Other)", True),
])
def test_contains_reference_skips_text_already_rewritten(text, expected):
    assert contains_reference(text, "SSS.Util", "SSS.Util.Core") is expected


def test_replace_reference_leaves_rewritten_occurrences():
    text = "a(SSS.Util) b(SSS.Util.Core) c(SSS.Util.Core.X)"

    new_text, count = replace_reference(text, "SSS.Util", "SSS.Util.Core")

    assert count == 1
    assert new_text == "a(SSS.Util.Core) b(SSS.Util.Core) c(SSS.Util.Core.X)"
