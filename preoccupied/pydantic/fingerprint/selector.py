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
preoccupied.pydantic.fingerprint.selector

A façade model which dispatches validation to whichever of its subclasses
the payload's shape belongs to. No discriminator field is required.

Example:

```python
class Event(FingerprintSelector):
    at: float

class Login(Event):
    user: str

class Logout(Event):
    session: str

event = Event.model_validate({"at": 1.0, "user": "obriencj"})
assert isinstance(event, Login)

event = Event.model_validate_json('{"at": 2.0, "session": "abc"}')
assert isinstance(event, Logout)
```

Fields declared on the façade are inherited by every subclass, and so never
take part in any fingerprint. Set ``__fingerprint_abstract__ = True`` in the
body of an intermediate subclass to keep it out of the candidates.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


from typing import Any, Mapping, Optional, Tuple, Type

from pydantic import BaseModel
from pydantic_core import from_json, to_json

from .errors import InvalidConfiguration, MalformedInput, NoMatch
from .parameters import Candidate
from .unmarshaler import Unmarshaler
from .walker import bind_document


__all__ = (
    "FingerprintSelector",
)


class FingerprintSelector(BaseModel):
    """
    Base for façade models. A direct subclass is a façade, and all of its
    subclasses are registered as its candidates.
    """

    __fingerprint_root__ = None


    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)

        root = cls.__fingerprint_root__
        if root is None:
            # a new façade
            cls.__fingerprint_root__ = cls
            cls.__fingerprint_models__ = []
            cls.__fingerprint_unmarshaler__ = None

        elif not cls.__dict__.get("__fingerprint_abstract__", False):
            root.__fingerprint_models__.append(cls)
            root.__fingerprint_unmarshaler__ = None


    @classmethod
    def fingerprint_candidates(cls) -> Tuple[Type[BaseModel], ...]:
        """
        The concrete subclasses registered beneath this class's façade.
        """

        root = cls.__fingerprint_root__
        if root is None:
            return ()
        return tuple(root.__fingerprint_models__)


    @classmethod
    def fingerprint_unmarshaler(cls) -> Unmarshaler:
        """
        The unmarshaler for this class's façade, rebuilt after any new
        subclass has been registered.

        :raises InvalidConfiguration: if called on FingerprintSelector itself
        """

        root = cls.__fingerprint_root__
        if root is None:
            raise InvalidConfiguration(
                f"{cls.__name__} is not a fingerprint façade, subclass it first."
            )

        found: Optional[Unmarshaler] = root.__fingerprint_unmarshaler__
        if found is None:
            params = [Candidate(model) for model in root.__fingerprint_models__]
            found = Unmarshaler(*params)
            root.__fingerprint_unmarshaler__ = found
        return found


    @classmethod
    def _is_facade(cls) -> bool:
        return cls.__fingerprint_root__ is cls


    @classmethod
    def fingerprint_resolve(cls, document: Mapping[str, Any]) -> Type[BaseModel]:
        """
        Find the registered subclass a parsed document resolves to.

        :raises InvalidDocument: if the document root is not an object
        :raises NoMatch: if no subclass fingerprint is satisfied
        """

        candidate = cls.fingerprint_unmarshaler().resolve(document)
        if candidate is None:
            raise NoMatch(
                f"No fingerprint match on {cls.__fingerprint_root__.__name__}."
            )
        return candidate.model


    @classmethod
    def model_validate(cls, obj: Any, **kwargs: Any) -> BaseModel:
        if cls._is_facade():
            if isinstance(obj, BaseModel):
                obj = obj.model_dump(by_alias=True)
            subclass = cls.fingerprint_resolve(obj)
            bound = bind_document(subclass, obj)
            return subclass.model_validate(bound, **kwargs)

        return super().model_validate(obj, **kwargs)


    @classmethod
    def model_validate_json(cls, json_data: Any, **kwargs: Any) -> BaseModel:
        if cls._is_facade():
            try:
                document = from_json(json_data)
            except ValueError as err:
                raise MalformedInput(f"invalid json: {err}") from err
            subclass = cls.fingerprint_resolve(document)
            bound = to_json(bind_document(subclass, document))
            return subclass.model_validate_json(bound, **kwargs)

        return super().model_validate_json(json_data, **kwargs)


# The end.
