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
preoccupied.pydantic.fingerprint.walker

Shape walker, enumerating every leaf field reachable from a pydantic model
along with the kind of JSON value it holds.

Example:

```python
class Point(BaseModel):
    x: float
    y: float

class Marker(BaseModel):
    Label_Text: str
    visible: bool
    where: Point
    tags: list[str]

assert build_paths(Marker) == {
    "labeltext": Kind.STRING,
    "visible": Kind.BOOLEAN,
    "where.x": Kind.NUMBER,
    "where.y": Kind.NUMBER,
    "tags": Kind.STRUCTURED,
}
```

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""



import collections.abc
import dataclasses
import types
from decimal import Decimal
from enum import Enum
from typing import (Annotated, Any, Dict, List, Literal, Mapping, Optional,
                    Tuple, Type, Union, get_args, get_origin, get_type_hints)

from pydantic import BaseModel, PydanticUserError, TypeAdapter
from pydantic.fields import FieldInfo
from typing_extensions import NotRequired, Required, TypeAlias, is_typeddict

from .errors import NotARecord, UnsupportedType
from .kinds import Kind, append_to_path, normalize_name
from .markers import is_ignored


__all__ = (
    "PathMap",
    "bind_document",
    "build_paths",
    "field_name",
    "is_nested_record",
    "is_record",
    "record_fields",
)


PathMap: TypeAlias = Dict[str, Kind]


_STRING_TYPES = (str, bytes, bytearray)
_NUMBER_TYPES = (int, float, Decimal)
_COLLECTION_TYPES = (
    list, tuple, set, frozenset, dict,
    collections.abc.Collection,
)

_SCHEMA_KINDS = {
    "string": Kind.STRING,
    "integer": Kind.NUMBER,
    "number": Kind.NUMBER,
    "boolean": Kind.BOOLEAN,
    "array": Kind.STRUCTURED,
    "object": Kind.STRUCTURED,
}


def is_record(model: Any) -> bool:
    """
    True if `model` is a pydantic model class.
    """

    return isinstance(model, type) and issubclass(model, BaseModel)


def is_nested_record(annotation: Any) -> bool:
    """
    True if `annotation` is a class that pydantic validates from a JSON
    object field by field: a model, a dataclass, or a TypedDict.
    """

    return isinstance(annotation, type) and (
        issubclass(annotation, BaseModel)
        or dataclasses.is_dataclass(annotation)
        or is_typeddict(annotation))


def record_fields(record: type) -> Dict[str, FieldInfo]:
    """
    The declared fields of a model, dataclass, or TypedDict, by attribute
    name.
    """

    if is_record(record):
        return record.model_fields

    found = getattr(record, "__pydantic_fields__", None)
    if found is not None:
        # pydantic dataclasses have already done the work
        return found

    hints = get_type_hints(record, include_extras=True)
    if is_typeddict(record):
        names = list(hints)
    else:
        names = [field.name for field in dataclasses.fields(record)]

    return {name: FieldInfo.from_annotation(_strip_qualifiers(hints[name]))
            for name in names}


def _strip_qualifiers(hint: Any) -> Any:
    # TypedDict keys may be wrapped in Required or NotRequired
    while get_origin(hint) in (Required, NotRequired):
        hint = get_args(hint)[0]
    return hint


def field_name(name: str, field_info: FieldInfo) -> str:
    """
    The name a field is given in JSON documents, before normalization.
    """

    if isinstance(field_info.validation_alias, str):
        return field_info.validation_alias
    if isinstance(field_info.alias, str):
        return field_info.alias
    return name


def build_paths(model: Type[BaseModel]) -> PathMap:
    """
    Produce a fresh mapping of normalized dotted path to :class:`Kind` for
    every leaf field of `model`.

    Nested models, dataclasses, and TypedDicts are expanded beneath their
    field's path. Collections stop the descent and are recorded as
    :attr:`Kind.STRUCTURED`, since the shape of their content can't be known
    without values. Fields declared with :func:`~.markers.Ignore` are skipped
    along with everything beneath them.

    :raises NotARecord: if `model` isn't a pydantic model class
    :raises UnsupportedType: if any reachable field has no JSON value kind
    """

    if not is_record(model):
        raise NotARecord(f"Candidate is not a pydantic model: {model!r}")

    paths: PathMap = {}
    _walk_model(paths, "", model, (), model)
    return paths


def _walk_model(
        paths: PathMap,
        curr: str,
        record: type,
        seen: Tuple[type, ...],
        owner: Type[BaseModel]) -> None:

    if record in seen:
        raise UnsupportedType(record, curr, owner)
    seen = seen + (record,)

    for name, field_info in record_fields(record).items():
        if is_ignored(field_info):
            continue

        path = append_to_path(curr, field_name(name, field_info))
        _walk_field(paths, path, field_info.annotation, seen, owner)


def _walk_field(
        paths: PathMap,
        curr: str,
        annotation: Any,
        seen: Tuple[type, ...],
        owner: Type[BaseModel]) -> None:

    annotation = _unwrap(annotation)

    if is_nested_record(annotation):
        _walk_model(paths, curr, annotation, seen, owner)
    else:
        # sibling fields normalizing to the same path overwrite each other
        paths[curr] = _leaf_kind(annotation, curr, owner)


def _unwrap(annotation: Any) -> Any:
    """
    Strip Annotated metadata and Optional wrappers, leaving the single type
    that decides the field's kind.
    """

    while True:
        origin = get_origin(annotation)

        if origin is Annotated:
            annotation = get_args(annotation)[0]

        elif _is_union(origin):
            args = _members(annotation)
            if len(args) != 1:
                return annotation
            annotation = args[0]

        else:
            return annotation


def _is_union(origin: Any) -> bool:
    return origin is Union or origin is types.UnionType


def _members(annotation: Any) -> List[Any]:
    return [arg for arg in get_args(annotation) if arg is not type(None)]


def _leaf_kind(annotation: Any, curr: str, owner: Type[BaseModel]) -> Kind:
    origin = get_origin(annotation)

    if _is_union(origin):
        # only acceptable if every member agrees on a single kind
        kinds = {_leaf_kind(_unwrap(arg), curr, owner)
                 for arg in _members(annotation)}
        if len(kinds) != 1:
            raise UnsupportedType(annotation, curr, owner)
        return kinds.pop()

    if origin is Literal:
        return _literal_kind(annotation, curr, owner)

    if origin is not None:
        # parametrized generics, eg. list[int] or Mapping[str, Any]
        if isinstance(origin, type) and issubclass(origin, _COLLECTION_TYPES) \
           and not issubclass(origin, _STRING_TYPES):
            return Kind.STRUCTURED
        return _schema_kind(annotation, curr, owner)

    if not isinstance(annotation, type):
        # Any, TypeVars, forward references, and friends
        raise UnsupportedType(annotation, curr, owner)

    if is_nested_record(annotation):
        # only reachable from inside a union
        raise UnsupportedType(annotation, curr, owner)

    if issubclass(annotation, Enum):
        return _enum_kind(annotation, curr, owner)

    if issubclass(annotation, bool):
        return Kind.BOOLEAN
    if issubclass(annotation, _STRING_TYPES):
        return Kind.STRING
    if issubclass(annotation, _NUMBER_TYPES):
        return Kind.NUMBER
    if issubclass(annotation, _COLLECTION_TYPES):
        return Kind.STRUCTURED

    return _schema_kind(annotation, curr, owner)


def _schema_kind(annotation: Any, curr: str, owner: Type[BaseModel]) -> Kind:
    """
    Ask pydantic how it would spell a value of `annotation` in JSON. This
    covers datetimes, UUIDs, paths, URLs, and the like, which all travel as
    strings.
    """

    try:
        schema = TypeAdapter(annotation).json_schema()
    except PydanticUserError as err:
        # no schema at all (arbitrary types), or none expressible as JSON
        # (callables)
        raise UnsupportedType(annotation, curr, owner) from err

    json_type = schema.get("type")
    if not isinstance(json_type, str) or json_type not in _SCHEMA_KINDS:
        raise UnsupportedType(annotation, curr, owner)
    return _SCHEMA_KINDS[json_type]


def _value_kind(value: Any) -> Optional[Kind]:
    if isinstance(value, bool):
        return Kind.BOOLEAN
    if isinstance(value, str):
        return Kind.STRING
    if isinstance(value, (int, float)):
        return Kind.NUMBER
    return None


def _literal_kind(annotation: Any, curr: str, owner: Type[BaseModel]) -> Kind:
    kinds = {_value_kind(value) for value in get_args(annotation)}
    if len(kinds) != 1 or None in kinds:
        raise UnsupportedType(annotation, curr, owner)
    return kinds.pop()


def _enum_kind(annotation: Type[Enum], curr: str, owner: Type[BaseModel]) -> Kind:
    kinds = {_value_kind(member.value) for member in annotation}
    if len(kinds) != 1 or None in kinds:
        raise UnsupportedType(annotation, curr, owner)
    return kinds.pop()


def bind_document(record: type, document: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Copy a parsed document, renaming each key that normalizes to one of
    `record`'s fields to the exact name pydantic validates that field by.
    Nested records are bound the same way. Collections are copied as-is.

    Keys are matched exactly as :func:`~.kinds.lookup` matches them, so a
    document that resolved to `record` can then be validated as it. Where
    several keys normalize to the same field the first one wins, and the
    rest are dropped.
    """

    targets: Dict[str, Tuple[str, Any]] = {}
    for name, field_info in record_fields(record).items():
        alias = field_info.validation_alias
        if alias is not None and not isinstance(alias, str):
            # AliasPath and AliasChoices already say where to look
            continue

        target = field_name(name, field_info)
        # last declaration wins, as it does for paths
        annotation = _unwrap(field_info.annotation)
        targets[normalize_name(target)] = (target, annotation)

    bound: Dict[str, Any] = {}

    for key, value in document.items():
        found = targets.get(normalize_name(key)) if isinstance(key, str) else None
        if found is None:
            bound[key] = value
            continue

        target, annotation = found
        if target in bound:
            continue

        if is_nested_record(annotation) and isinstance(value, Mapping):
            value = bind_document(annotation, value)
        bound[target] = value

    return bound


# The end.
