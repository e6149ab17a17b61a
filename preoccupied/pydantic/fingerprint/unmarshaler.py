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
preoccupied.pydantic.fingerprint.unmarshaler

Decode JSON documents into whichever registered model their shape belongs
to, without needing a discriminator field.

Example:

```python
class Foo(BaseModel):
    foo: str
    shared: int

class Bar(BaseModel):
    bar: str
    shared: int

unmarshaler = Unmarshaler(Candidate(Foo), Candidate(Bar))

decoded = unmarshaler.decode(b'{"foo": "x", "shared": 1}')
assert isinstance(decoded.value, Foo)

decoded = unmarshaler.decode(b'{"bar": "y", "shared": 2}')
assert isinstance(decoded.value, Bar)
```

The fingerprint of a model is the set of its leaf paths and kinds which no
other candidate declares. A document resolves to the first candidate (in
registration order) with at least one fingerprint entry present in the
document with a matching kind. Keys are matched case-insensitively,
ignoring spaces, underscores, and hyphens. The document is then rebound to
the model's field names and validated strictly as that model.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple, Type, Union

from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError, from_json, to_json

from .errors import (
    DecodeFailed, InvalidDocument, MalformedInput, NoMatch, ResolutionFailed)
from .fingerprints import build_fingerprints
from .kinds import Kind
from .parameters import Environment, Parameter
from .resolver import CandidateShape, FingerprintResolver, freeze
from .walker import bind_document, build_paths


__all__ = (
    "Decoded",
    "Unmarshaler",
)


RawInput = Union[bytes, bytearray, str]


@dataclass(frozen=True)
class Decoded:
    """
    A decoded document and the candidate it resolved to.
    """

    candidate: CandidateShape
    value: BaseModel


    @property
    def model(self) -> Type[BaseModel]:
        return self.candidate.model


class Unmarshaler:
    """
    Fingerprint-based decoder over a fixed set of candidate models.

    All path and fingerprint computation happens here in the constructor, and
    any failure aborts construction. Afterwards nothing is modified, so a
    single unmarshaler may serve many threads at once.

    :raises InvalidConfiguration: if the parameters are unusable
    :raises NotARecord: if a candidate isn't a pydantic model
    :raises UnsupportedType: if a candidate has a field with no JSON kind
    """

    def __init__(self, *params: Parameter) -> None:
        env = Environment.build(params)
        self.environment = env

        env.trace("building paths for %d candidates", len(env.candidates))

        paths_by_model: Dict[Type[BaseModel], Dict[str, Kind]] = {}
        for spec in env.candidates:
            paths = build_paths(spec.model)
            paths_by_model[spec.model] = paths

            env.trace("built %d paths for %s:", len(paths), spec.model.__name__)
            for path, kind in paths.items():
                env.trace("  %s -> %s", path, kind.value)

        env.trace("finding paths to use as fingerprints")
        fingerprints = build_fingerprints(paths_by_model)

        candidates = []
        for model, paths in paths_by_model.items():
            found = fingerprints[model]
            candidates.append(CandidateShape(
                model=model,
                paths=freeze(paths),
                fingerprint=freeze(found)))

            env.trace("%s:", model.__name__)
            for path, kind in found.items():
                env.trace("  %s -> %s", path, kind.value)
            if not found:
                env.trace("  (empty, %s can never be resolved)", model.__name__)

        self.resolver = FingerprintResolver(candidates)


    @property
    def candidates(self) -> Tuple[CandidateShape, ...]:
        return self.resolver.candidates


    @property
    def fingerprints(self) -> Dict[Type[BaseModel], Mapping[str, Kind]]:
        """
        Each candidate model mapped to its fingerprint, in registration order.
        """

        return {c.model: c.fingerprint for c in self.resolver.candidates}


    def candidate_for(self, model: Type[BaseModel]) -> Optional[CandidateShape]:
        for candidate in self.resolver.candidates:
            if candidate.model is model:
                return candidate
        return None


    def resolve(self, document: Mapping[str, Any]) -> Optional[CandidateShape]:
        """
        Return the candidate a parsed document resolves to, or None.

        :raises InvalidDocument: if the document root is not an object
        """

        return self.resolver.resolve(document)


    def _resolve_or_fail(self, document: Mapping[str, Any]) -> CandidateShape:
        try:
            candidate = self.resolver.resolve(document)
        except InvalidDocument as err:
            # the root was already checked, so this came from deeper in
            raise ResolutionFailed(f"resolve: {err}") from err

        if candidate is None:
            raise NoMatch("No candidate fingerprint matches the document.")
        return candidate


    def decode(self, raw: RawInput) -> Decoded:
        """
        Parse `raw` JSON, resolve it to a candidate, and strictly validate it
        as that candidate's model.

        :raises MalformedInput: if `raw` isn't JSON, or its root isn't an object
        :raises NoMatch: if no candidate fingerprint is satisfied
        :raises ResolutionFailed: if resolution faulted
        :raises DecodeFailed: if validation as the resolved model failed
        """

        try:
            document = from_json(raw)
        except ValueError as err:
            raise MalformedInput(f"invalid json: {err}") from err

        if not isinstance(document, Mapping):
            raise MalformedInput("invalid json: not an object")

        candidate = self._resolve_or_fail(document)

        # keys were matched loosely during resolution, so rename them to
        # what the model expects before validating
        bound = to_json(bind_document(candidate.model, document))

        try:
            value = candidate.model.model_validate_json(bound, strict=True)
        except ValidationError as err:
            raise DecodeFailed(
                f"unmarshal as {candidate.name}: {err}", candidate) from err

        return Decoded(candidate=candidate, value=value)


    def decode_python(self, obj: Mapping[str, Any]) -> Decoded:
        """
        As :meth:`decode`, for a document that has already been parsed.
        """

        if not isinstance(obj, Mapping):
            raise MalformedInput(
                f"Document root must be an object, not {type(obj).__name__}."
            )

        # strict validation is only lenient about nested objects for JSON
        # input, so round-trip through it
        try:
            raw = to_json(obj)
        except PydanticSerializationError as err:
            raise MalformedInput(f"invalid json: {err}") from err

        return self.decode(raw)


# The end.
