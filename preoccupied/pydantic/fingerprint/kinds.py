# This library is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This library is distributed in the hope that it will be useful, but
# WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this library; if not, see <http://www.gnu.org/licenses/>.

"""
preoccupied.pydantic.fingerprint.kinds

Value kinds for declared fields, type tags for parsed JSON values, and the
dotted path helpers shared by the walker and the resolver.

A declared field has a :class:`Kind`. A value found in a parsed document has
a :class:`DocumentType`. A kind accepts one or more document types; booleans
are the odd one out, since JSON spells them as two separate literals.

Example:

```python
assert Kind.BOOLEAN.accepts(DocumentType.TRUE)
assert Kind.BOOLEAN.accepts(DocumentType.FALSE)

assert append_to_path("", "Foo Bar") == "foobar"
assert append_to_path("foobar", "Some_Field") == "foobar.somefield"

assert lookup({"Foo_Bar": {"x": 1}}, "foobar.x") is DocumentType.NUMBER
```

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


from enum import Enum
from typing import Any, FrozenSet, Mapping, Optional

from .errors import InvalidDocument


__all__ = (
    "DocumentType",
    "Kind",
    "append_to_path",
    "lookup",
    "normalize_name",
    "type_of",
)


PATH_SEPARATOR = "."

_CUTSET = str.maketrans("", "", " _-")


class DocumentType(Enum):
    """
    Runtime tag of a single value in a parsed JSON document.
    """

    NULL = "null"
    FALSE = "false"
    NUMBER = "number"
    STRING = "string"
    TRUE = "true"
    JSON = "json"


class Kind(Enum):
    """
    Coarse classification of a declared field, by the JSON values it may hold.
    """

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    STRUCTURED = "structured"


    @property
    def accepted(self) -> FrozenSet[DocumentType]:
        return _ACCEPTED[self]


    def accepts(self, tag: Optional[DocumentType]) -> bool:
        """
        True if a document value tagged `tag` satisfies this kind.
        """

        return tag in _ACCEPTED[self]


    def collides(self, other: "Kind") -> bool:
        """
        True if some document value would satisfy both kinds.
        """

        return not _ACCEPTED[self].isdisjoint(_ACCEPTED[other])


_ACCEPTED = {
    Kind.STRING: frozenset((DocumentType.STRING,)),
    Kind.NUMBER: frozenset((DocumentType.NUMBER,)),
    Kind.BOOLEAN: frozenset((DocumentType.TRUE, DocumentType.FALSE)),
    Kind.STRUCTURED: frozenset((DocumentType.JSON, DocumentType.NULL)),
}


def type_of(value: Any) -> DocumentType:
    """
    Tag a value produced by a JSON parser.
    """

    # bool before numbers, it's an int subclass
    if value is None:
        return DocumentType.NULL
    elif value is True:
        return DocumentType.TRUE
    elif value is False:
        return DocumentType.FALSE
    elif isinstance(value, str):
        return DocumentType.STRING
    elif isinstance(value, (int, float)):
        return DocumentType.NUMBER
    elif isinstance(value, (Mapping, list, tuple)):
        return DocumentType.JSON
    else:
        raise InvalidDocument(f"Not a JSON value: {value!r}")


def normalize_name(name: str) -> str:
    """
    Lower-case the name and strip spaces, underscores, and hyphens, so that
    ``Foo Bar``, ``foo_bar``, and ``foo-bar`` all become ``foobar``.
    """

    return name.lower().translate(_CUTSET)


def append_to_path(path: str, name: str) -> str:
    """
    Append the normalized `name` to a dotted `path`.
    """

    name = normalize_name(name)
    if not path or path.endswith(PATH_SEPARATOR):
        return path + name
    return f"{path}{PATH_SEPARATOR}{name}"


def lookup(document: Mapping[str, Any], path: str) -> Optional[DocumentType]:
    """
    Find the value at the dotted `path` in a parsed document and return its
    tag. Each segment is compared against the normalized keys of the
    current object. Returns None if the path is absent, or if it runs through
    something other than an object.
    """

    current: Any = document
    for segment in path.split(PATH_SEPARATOR):
        if not isinstance(current, Mapping):
            return None

        for key, value in current.items():
            if isinstance(key, str) and normalize_name(key) == segment:
                current = value
                break
        else:
            return None

    return type_of(current)


# The end.
