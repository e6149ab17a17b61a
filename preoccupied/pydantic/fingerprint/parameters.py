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
preoccupied.pydantic.fingerprint.parameters

Configuration parameters accepted by :class:`~.unmarshaler.Unmarshaler`.

Use the :func:`Candidate` factory to register a model to disambiguate, and
:func:`EnableDebug` to trace path building and fingerprint results through
the standard logging module.

Example:

```python
unmarshaler = Unmarshaler(
    Candidate(Login),
    Candidate(Logout),
    EnableDebug(),
)
```

:func:`SelectOn` and :func:`Default` are accepted and validated, but have no
effect on resolution yet.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, FrozenSet, Iterable, Optional, Tuple, Type, Union

from pydantic import BaseModel
from typing_extensions import TypeAlias

from .errors import InvalidConfiguration


__all__ = (
    "Candidate",
    "CandidateSpec",
    "Default",
    "EnableDebug",
    "Environment",
    "FallbackSpec",
    "Parameter",
    "SelectOn",
    "SelectorSpec",
    "Setting",
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CandidateSpec:
    """
    A model to be considered when resolving documents.
    """

    model: Type[BaseModel]


@dataclass(frozen=True)
class SelectorSpec:
    """
    Reserved. Prefer `then` when `field` equals `equal`.
    """

    field: str
    equal: Any
    then: Type[BaseModel]


@dataclass(frozen=True)
class FallbackSpec:
    """
    Reserved. Model to use for documents matching no candidate.
    """

    model: Type[BaseModel]


class Setting(Enum):
    """
    Boolean switches for the unmarshaler.
    """

    VERBOSE = "verbose"


Parameter: TypeAlias = Union[CandidateSpec, SelectorSpec, FallbackSpec, Setting]


def Candidate(model: Type[BaseModel]) -> CandidateSpec:  # noqa: N802
    """
    Register `model` as a candidate shape.
    """

    return CandidateSpec(model=model)


def SelectOn(  # noqa: N802
        field: str,
        equal: Any,
        then: Type[BaseModel]) -> SelectorSpec:
    """
    Declare a value-based selection. Accepted but not yet consulted.
    """

    return SelectorSpec(field=field, equal=equal, then=then)


def Default(model: Type[BaseModel]) -> FallbackSpec:  # noqa: N802
    """
    Declare a fallback model. Accepted but not yet consulted.
    """

    return FallbackSpec(model=model)


def EnableDebug() -> Setting:  # noqa: N802
    """
    Trace path building and fingerprint results at INFO level.
    """

    return Setting.VERBOSE


@dataclass(frozen=True)
class Environment:
    """
    The validated result of a parameter list.
    """

    candidates: Tuple[CandidateSpec, ...]
    selectors: Tuple[SelectorSpec, ...] = ()
    fallback: Optional[FallbackSpec] = None
    settings: FrozenSet[Setting] = field(default_factory=frozenset)


    @classmethod
    def build(cls, params: Iterable[Parameter]) -> "Environment":
        """
        Sort parameters by variant.

        :raises InvalidConfiguration: on an unrecognized parameter, more than
          one fallback, a model registered twice, or no candidates at all
        """

        candidates = []
        selectors = []
        fallback = None
        settings = set()

        for param in params:
            if isinstance(param, CandidateSpec):
                if any(c.model is param.model for c in candidates):
                    raise InvalidConfiguration(
                        f"Candidate {param.model!r} registered more than once."
                    )
                candidates.append(param)

            elif isinstance(param, SelectorSpec):
                selectors.append(param)

            elif isinstance(param, FallbackSpec):
                if fallback is not None:
                    raise InvalidConfiguration(
                        "Only one Default may be given at a time."
                    )
                fallback = param

            elif isinstance(param, Setting):
                settings.add(param)

            else:
                raise InvalidConfiguration(f"Invalid parameter: {param!r}")

        if not candidates:
            raise InvalidConfiguration("At least one Candidate must be given.")

        return cls(
            candidates=tuple(candidates),
            selectors=tuple(selectors),
            fallback=fallback,
            settings=frozenset(settings))


    @property
    def verbose(self) -> bool:
        return Setting.VERBOSE in self.settings


    def trace(self, msg: str, *args: Any) -> None:
        """
        Log a diagnostic message, only when verbose.
        """

        if self.verbose:
            logger.info(msg, *args)


# The end.
