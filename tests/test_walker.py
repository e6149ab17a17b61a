"""
tests.test_walker
Unit tests for deriving dotted paths and kinds from pydantic models.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


import queue
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from ipaddress import IPv4Address
from pathlib import Path
from typing import Any, Callable, Dict, List, Literal, Optional, Set, Tuple, Union
from uuid import UUID

import pytest
from pydantic import AnyUrl, BaseModel, ConfigDict, Field, PrivateAttr
from typing_extensions import NotRequired, TypedDict

from preoccupied.pydantic.fingerprint import (
    Ignore, Kind, NotARecord, UnsupportedType, bind_document, build_paths)


class Node(BaseModel):
    """
    Self-referencing model, which can't be flattened into paths.
    """

    value: int
    child: Optional["Node"] = None


def test_primitive_kinds():
    """
    Strings, numbers of every flavour, and booleans map to their kinds.
    """

    class Everything(BaseModel):
        text: str
        blob: bytes
        count: int
        ratio: float
        money: Decimal
        flag: bool

    assert build_paths(Everything) == {
        "text": Kind.STRING,
        "blob": Kind.STRING,
        "count": Kind.NUMBER,
        "ratio": Kind.NUMBER,
        "money": Kind.NUMBER,
        "flag": Kind.BOOLEAN,
    }


def test_nested_models_are_expanded():
    """
    Nested models contribute their own fields beneath the parent path.
    """

    class Point(BaseModel):
        x: float
        y: float

    class Marker(BaseModel):
        Label_Text: str
        where: Point
        maybe: Optional[Point] = None

    assert build_paths(Marker) == {
        "labeltext": Kind.STRING,
        "where.x": Kind.NUMBER,
        "where.y": Kind.NUMBER,
        "maybe.x": Kind.NUMBER,
        "maybe.y": Kind.NUMBER,
    }


@pytest.mark.parametrize(
    "annotation, note",
    [
        (List[int], "typing list"),
        (list[str], "builtin list"),
        (Tuple[int, str], "tuple"),
        (Set[str], "set"),
        (Dict[str, int], "typing dict"),
        (dict, "bare dict"),
        (Optional[List[int]], "optional list"),
    ],
)
def test_collections_stop_descent(annotation, note):
    """
    Collections are recorded as structured values regardless of content.
    """

    class Holder(BaseModel):
        stuff: annotation

    assert build_paths(Holder) == {"stuff": Kind.STRUCTURED}, note


def test_collection_of_models_not_expanded():
    """
    A list of models stops at the list, the element model is not walked.
    """

    class Point(BaseModel):
        x: float

    class Line(BaseModel):
        points: List[Point]
        lookup: Dict[str, Point]

    assert build_paths(Line) == {
        "points": Kind.STRUCTURED,
        "lookup": Kind.STRUCTURED,
    }


def test_string_serialized_types():
    """
    Types which pydantic carries as JSON strings are string kinds.
    """

    class Stamped(BaseModel):
        at: datetime
        day: date
        ident: UUID
        where: Path
        host: IPv4Address
        home: AnyUrl

    assert build_paths(Stamped) == {
        "at": Kind.STRING,
        "day": Kind.STRING,
        "ident": Kind.STRING,
        "where": Kind.STRING,
        "host": Kind.STRING,
        "home": Kind.STRING,
    }


def test_dataclass_and_typeddict_are_expanded():
    """
    Dataclasses and TypedDicts are walked just like nested models.
    """

    @dataclass
    class Point:
        x: float
        y: float

    class Size(TypedDict):
        Width: int
        height: NotRequired[int]

    class Placed(BaseModel):
        where: Point
        size: Optional[Size] = None

    assert build_paths(Placed) == {
        "where.x": Kind.NUMBER,
        "where.y": Kind.NUMBER,
        "size.width": Kind.NUMBER,
        "size.height": Kind.NUMBER,
    }


def test_bind_document():
    """
    Document keys are renamed to the declared field names, at every level of
    nesting, while unknown keys and collections pass through untouched.
    """

    @dataclass
    class Point:
        X_Pos: float

    class Marker(BaseModel):
        Label: str = Field(alias="Label-Text")
        Where: Point
        Tags: List[Dict[str, int]]

    document = {
        "labeltext": "here",
        "WHERE": {"x_pos": 1.0, "other": 2},
        "tags": [{"Some_Key": 1}],
        "unknown": True,
    }

    assert bind_document(Marker, document) == {
        "Label-Text": "here",
        "Where": {"X_Pos": 1.0, "other": 2},
        "Tags": [{"Some_Key": 1}],
        "unknown": True,
    }


def test_ignored_fields_are_skipped():
    """
    Fields declared with Ignore are neither recorded nor descended into.
    """

    class Inner(BaseModel):
        secret: str

    class Outer(BaseModel):
        name: str
        hidden: Optional[Inner] = Ignore()
        note: str = Ignore(default="")

    assert build_paths(Outer) == {"name": Kind.STRING}


def test_private_attributes_are_skipped():
    """
    Private attributes aren't fields at all, even if their type is unsupported.
    """

    class WithPrivate(BaseModel):
        foo: str
        _handler: Optional[Callable[[], bool]] = PrivateAttr(default=None)

    assert build_paths(WithPrivate) == {"foo": Kind.STRING}


def test_aliases_name_the_path():
    """
    A field's alias is the name documents will carry, so it names the path.
    """

    class Aliased(BaseModel):
        label: str = Field(alias="Label-Text")
        other: int = Field(validation_alias="Other Value")

    assert build_paths(Aliased) == {
        "labeltext": Kind.STRING,
        "othervalue": Kind.NUMBER,
    }


def test_sibling_collision_last_write_wins():
    """
    Siblings normalizing to the same segment silently collide.
    """

    class Colliding(BaseModel):
        foo_bar: str
        FooBar: int

    assert build_paths(Colliding) == {"foobar": Kind.NUMBER}


def test_literal_enum_and_union_kinds():
    """
    Literals, enums, and unions are accepted when they agree on one kind.
    """

    class Color(str, Enum):
        RED = "red"
        BLUE = "blue"

    class Level(Enum):
        LOW = 1
        HIGH = 2

    class Assorted(BaseModel):
        color: Color
        level: Level
        mode: Literal["fast", "slow"]
        toggle: Literal[True]
        amount: Union[int, float]
        maybe_amount: Optional[Union[int, float]] = None

    assert build_paths(Assorted) == {
        "color": Kind.STRING,
        "level": Kind.NUMBER,
        "mode": Kind.STRING,
        "toggle": Kind.BOOLEAN,
        "amount": Kind.NUMBER,
        "maybeamount": Kind.NUMBER,
    }


def test_paths_are_fresh():
    """
    Each call produces a new mapping.
    """

    class Simple(BaseModel):
        foo: str

    first = build_paths(Simple)
    first["bar"] = Kind.NUMBER
    assert build_paths(Simple) == {"foo": Kind.STRING}


@pytest.mark.parametrize(
    "value, note",
    [
        (dict, "builtin class"),
        ({"foo": "bar"}, "instance of a mapping"),
        ("Foo", "a string"),
    ],
)
def test_not_a_record(value, note):
    """
    Only pydantic model classes can be walked.
    """

    with pytest.raises(NotARecord):
        build_paths(value)


def test_not_a_record_instance():
    """
    A model instance is not a model class.
    """

    class Simple(BaseModel):
        foo: str

    with pytest.raises(NotARecord):
        build_paths(Simple(foo="x"))


def test_function_field_unsupported():
    """
    A callable field has no JSON kind.
    """

    class WithFunction(BaseModel):
        foo: str
        handler: Callable[[], bool]

    with pytest.raises(UnsupportedType) as error:
        build_paths(WithFunction)

    assert error.value.path == "handler"
    assert error.value.owner is WithFunction
    assert "unsupported type" in str(error.value)


def test_channel_field_unsupported():
    """
    A queue, the nearest thing to a channel, has no JSON kind.
    """

    class WithQueue(BaseModel):
        model_config = ConfigDict(arbitrary_types_allowed=True)

        foo: str
        inbox: queue.Queue

    with pytest.raises(UnsupportedType) as error:
        build_paths(WithQueue)

    assert error.value.path == "inbox"


@pytest.mark.parametrize(
    "annotation, note",
    [
        (Any, "placeholder any"),
        (Union[int, str], "union of differing kinds"),
        (Literal[1, "one"], "literal of differing kinds"),
    ],
)
def test_unsupported_annotations(annotation, note):
    """
    Annotations without a single JSON kind are refused.
    """

    class Holder(BaseModel):
        value: annotation

    with pytest.raises(UnsupportedType):
        build_paths(Holder)


def test_unsupported_nested_field_names_path():
    """
    The error for a nested unsupported field names its full path.
    """

    class Inner(BaseModel):
        callback: Callable[[int], int]

    class Outer(BaseModel):
        Inner_Part: Inner

    with pytest.raises(UnsupportedType) as error:
        build_paths(Outer)

    assert error.value.path == "innerpart.callback"


def test_recursive_model_unsupported():
    """
    A model reaching itself can't be flattened.
    """

    with pytest.raises(UnsupportedType):
        build_paths(Node)


# The end.
