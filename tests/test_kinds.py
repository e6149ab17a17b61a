"""
tests.test_kinds
Unit tests covering value kinds, document tags, and path helpers.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


import pytest

from preoccupied.pydantic.fingerprint import (
    DocumentType, InvalidDocument, Kind, append_to_path, lookup,
    normalize_name)


@pytest.mark.parametrize(
    "name, expected, note",
    [
        ("Foo Bar", "foobar", "spaces"),
        ("foo_bar", "foobar", "underscores"),
        ("foo-bar", "foobar", "hyphens"),
        ("FOO_bar-Baz qux", "foobarbazqux", "mixed separators"),
        ("", "", "empty"),
    ],
)
def test_normalize_name(name, expected, note):
    """
    Normalization lower-cases and strips separators.
    """

    assert normalize_name(name) == expected, note


def test_normalize_name_idempotent():
    """
    Normalizing an already normalized name changes nothing.
    """

    once = normalize_name("Some_Field-Name")
    assert normalize_name(once) == once


@pytest.mark.parametrize(
    "path, name, expected, note",
    [
        ("", "Foo", "foo", "no leading separator"),
        ("foo", "Bar_Baz", "foo.barbaz", "joined with separator"),
        ("foo.", "bar", "foo.bar", "no doubled separator"),
        ("foo", "", "foo.", "empty segment"),
        ("foo.", "", "foo.", "empty segment after separator"),
    ],
)
def test_append_to_path(path, name, expected, note):
    """
    Paths are dotted joins of normalized names.
    """

    assert append_to_path(path, name) == expected, note


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, DocumentType.NULL),
        (True, DocumentType.TRUE),
        (False, DocumentType.FALSE),
        (0, DocumentType.NUMBER),
        (1.5, DocumentType.NUMBER),
        ("", DocumentType.STRING),
        ({}, DocumentType.JSON),
        ([], DocumentType.JSON),
    ],
)
def test_type_of(value, expected):
    """
    Parsed JSON values are tagged by their runtime type.
    """

    from preoccupied.pydantic.fingerprint.kinds import type_of
    assert type_of(value) is expected


def test_type_of_rejects_non_json():
    """
    Values no JSON parser would produce are malformed.
    """

    from preoccupied.pydantic.fingerprint.kinds import type_of
    with pytest.raises(InvalidDocument):
        type_of(object())


def test_boolean_accepts_both_literals():
    """
    A boolean kind is satisfied by either JSON literal.
    """

    assert Kind.BOOLEAN.accepts(DocumentType.TRUE)
    assert Kind.BOOLEAN.accepts(DocumentType.FALSE)
    assert not Kind.BOOLEAN.accepts(DocumentType.NUMBER)
    assert not Kind.BOOLEAN.accepts(None)


def test_kinds_collide_only_with_themselves():
    """
    Distinct kinds never accept the same document type.
    """

    for kind in Kind:
        for other in Kind:
            assert kind.collides(other) == (kind is other)


def test_lookup_nested():
    """
    Lookup walks nested objects, comparing normalized keys.
    """

    document = {
        "Foo_Bar": {"inner-value": 1, "flag": False},
        "items": [1, 2, 3],
        "empty": None,
    }

    assert lookup(document, "foobar") is DocumentType.JSON
    assert lookup(document, "foobar.innervalue") is DocumentType.NUMBER
    assert lookup(document, "foobar.flag") is DocumentType.FALSE
    assert lookup(document, "items") is DocumentType.JSON
    assert lookup(document, "empty") is DocumentType.NULL


def test_lookup_missing():
    """
    Absent paths, and paths running through non-objects, find nothing.
    """

    document = {"foo": "x", "items": [{"a": 1}]}

    assert lookup(document, "bar") is None
    assert lookup(document, "foo.bar") is None
    assert lookup(document, "items.a") is None


# The end.
