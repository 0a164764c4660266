"""Tests for name slugs."""

from __future__ import annotations

from rapport.slug import name_to_slug


def test_simple_name():
    assert name_to_slug("Alex Chen") == "alex-chen"


def test_accents_are_folded():
    assert name_to_slug("María García") == "maria-garcia"


def test_punctuation_collapses():
    assert name_to_slug("O'Brien") == "o-brien"
    assert name_to_slug("  Jean--Luc   Picard! ") == "jean-luc-picard"


def test_nothing_usable():
    assert name_to_slug("!!!") == ""
