"""Slug Derivation — tests for name -> slug.

Tests cover:
    - lower-casing and separator collapsing
    - accent folding
    - names with no usable characters derive an empty slug
    - long names truncated at a word boundary
"""

import re

from catalog_api.core.slugs import MAX_SLUG_LENGTH, SLUG_PATTERN, derive_slug


def test_simple_name():
    assert derive_slug("Widget") == "widget"


def test_separators_collapse_and_trim():
    assert derive_slug("  Super -- Widget!! 3000 ") == "super-widget-3000"


def test_accents_are_folded():
    assert derive_slug("Café Crème") == "cafe-creme"


def test_symbol_only_name_derives_empty_slug():
    assert derive_slug("!!! ???") == ""
    assert derive_slug("日本") == ""


def test_same_name_same_slug():
    assert derive_slug("Blue Shirt") == derive_slug("blue   shirt")


def test_long_name_truncated_at_word_boundary():
    name = " ".join(["word"] * 60)
    slug = derive_slug(name)
    assert len(slug) <= MAX_SLUG_LENGTH
    assert not slug.endswith("-")
    assert slug.split("-") == ["word"] * len(slug.split("-"))


def test_derived_slugs_are_valid():
    for name in ("Widget", "Café Crème", "A b c 1 2 3", "x" * 300):
        assert re.fullmatch(SLUG_PATTERN, derive_slug(name))
